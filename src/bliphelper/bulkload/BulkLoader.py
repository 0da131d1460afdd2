from typing import Optional

from bliphelper.blip.BlipRequest import BlipRequest
from bliphelper.blip.BlipResponse import BlipResponse
from bliphelper.bulkload.BulkLoadRequest import BulkLoadRequest
from bliphelper.bulkload.BulkLoadTrigger import BulkLoadTrigger
from bliphelper.bulkload.CompressedPayload import compress_file
from bliphelper.bulkload.S3Uploader import S3Uploader
from bliphelper.bulkload.UploadAuthorizer import UploadAuthorizer
from bliphelper.bulkload.validation import validate_notifications
from bliphelper.defaultlogging import setup_logging

log = setup_logging()


class BulkLoader:
    """
    Runs a bulk load: compress, authorize, upload and trigger.

    The steps run in sequence and the first step that fails ends the run, its
    response is returned as is. Nothing is retried and an object that was
    uploaded before the trigger failed stays in the bucket.
    """

    def __init__(self, request: BlipRequest, uploader: Optional[S3Uploader] = None) -> None:
        self.authorizer = UploadAuthorizer(request)
        self.trigger = BulkLoadTrigger(request)
        self.uploader = uploader if uploader is not None else S3Uploader()

    def load(self, bulk_request: BulkLoadRequest) -> BlipResponse:
        log.info(f"Starting bulk load of {bulk_request.file_path} for brand {bulk_request.brand_key}")

        # Fail before the upload when the trigger is bound to reject the notifications
        error = validate_notifications(bulk_request.success_email,
                                       bulk_request.fail_email,
                                       bulk_request.success_callback,
                                       bulk_request.fail_callback)
        if error is not None:
            log.error(f"Bulk load rejected - {error}")
            return BlipResponse.local_error(error)

        try:
            payload = compress_file(bulk_request.file_path)
        except OSError as e:
            log.error(f"Unable to read {bulk_request.file_path}: {e}")
            return BlipResponse.local_error(f"Unable to read {bulk_request.file_path}: {e}")

        authorization = self.authorizer.authorize(bulk_request.brand_key, payload.md5)
        if isinstance(authorization, BlipResponse):
            return authorization

        s3_path = self.uploader.upload(authorization, payload)
        if isinstance(s3_path, BlipResponse):
            return s3_path

        return self.trigger.trigger(bulk_request.brand_key,
                                    bulk_request.source,
                                    s3_path,
                                    implicit_delete=bulk_request.implicit_delete,
                                    expected_record_count=bulk_request.expected_record_count,
                                    success_email=bulk_request.success_email,
                                    fail_email=bulk_request.fail_email,
                                    success_callback=bulk_request.success_callback,
                                    fail_callback=bulk_request.fail_callback)
