from typing import Optional
from urllib.parse import quote, urlencode

from bliphelper.blip.BlipRequest import BlipRequest, Command
from bliphelper.blip.BlipResponse import BlipResponse
from bliphelper.bulkload.validation import validate_notifications
from bliphelper.defaultlogging import setup_logging

log = setup_logging()


class BulkLoadTrigger:
    """Asks BLIP to ingest a file that was uploaded to S3."""

    def __init__(self, request: BlipRequest) -> None:
        self.request = request

    def trigger(self,
                brand_key: str,
                source: str,
                s3_path: str,
                implicit_delete: bool = False,
                expected_record_count: int = 0,
                success_email: Optional[str] = None,
                fail_email: Optional[str] = None,
                success_callback: Optional[str] = None,
                fail_callback: Optional[str] = None) -> BlipResponse:
        """
        Validate the notification parameters and trigger the bulk load.

        Invalid notification parameters return a local error response without
        contacting BLIP, otherwise the response of BLIP is returned unchanged.
        """
        error = validate_notifications(success_email, fail_email, success_callback, fail_callback)
        if error is not None:
            log.error(f"Cannot trigger bulk load - {error}")
            return BlipResponse.local_error(error)

        params: dict[str, str] = {
            "s3Path": s3_path,
            "source": source,
            "implicitDelete": str(implicit_delete).lower(),
            "expectedRecordCount": str(expected_record_count),
        }
        optional_params = {"successEmail": success_email,
                           "failEmail": fail_email,
                           "successCallback": success_callback,
                           "failCallback": fail_callback}
        params.update({name: value for name, value in optional_params.items() if value})

        path = f"/brand/{quote(brand_key, safe='')}/bulkLoad?{urlencode(params)}"

        log.info(f"Triggering bulk load of {s3_path} for brand {brand_key}")
        response = self.request.execute(Command.GET, path)
        if not response.is_success:
            log.error(f"Failed to trigger bulk load. Status code: {response.status_code}, Response: {response.body}")
        else:
            log.info(f"Bulk load triggered. Status code: {response.status_code}")

        return response
