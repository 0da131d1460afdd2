import logging
from typing import Optional, Union

import requests

from bliphelper.blip.BlipError import BlipTransportError
from bliphelper.blip.BlipResponse import BlipResponse
from bliphelper.bulkload.CompressedPayload import CompressedPayload
from bliphelper.bulkload.UploadAuthorization import REQUIRED_FIELDS, UploadAuthorization

log = logging.getLogger()


class S3Uploader:
    """
    Posts a compressed bulk file to S3 using a pre-signed POST authorization.

    The multipart form always ends with the file part. S3 only evaluates the
    form fields that precede the file, anything after it is ignored or rejected.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 300) -> None:
        self.session = session
        self.timeout = timeout  # seconds

    @staticmethod
    def form_fields(authorization: UploadAuthorization, payload: CompressedPayload) -> list[tuple[str, str]]:
        """ Ordered text fields of the multipart form, the file part is appended after these """
        fields = [(name, authorization.fields[name]) for name in REQUIRED_FIELDS]
        fields += [(name, value) for name, value in authorization.fields.items() if name not in REQUIRED_FIELDS]
        fields.append(("content-type", payload.mime_type))
        return fields

    def build_request(self, authorization: UploadAuthorization, payload: CompressedPayload) -> requests.PreparedRequest:
        # requests encodes the data fields first, in order, followed by the files
        request = requests.Request("POST",
                                   authorization.url,
                                   data=self.form_fields(authorization, payload),
                                   files=[("file", (payload.source.name + ".gz", payload.content, "application/gzip"))])
        return request.prepare()

    def _send(self, prepared: requests.PreparedRequest) -> requests.Response:
        if self.session is not None:
            return self.session.send(prepared, timeout=self.timeout)

        with requests.Session() as session:
            return session.send(prepared, timeout=self.timeout)

    def upload(self, authorization: UploadAuthorization, payload: CompressedPayload) -> Union[str, BlipResponse]:
        """
        Upload the payload once, without retries.

        Returns the s3://bucket/key location on a 204 response, any other
        response is returned as a BlipResponse containing the provider's body.
        """
        prepared = self.build_request(authorization, payload)
        log.info(f"Uploading {payload.size} bytes to {authorization.url}")

        try:
            response = self._send(prepared)
        except requests.RequestException as e:
            log.error(f"Failed to upload {payload.source}: {e}")
            raise BlipTransportError("POST", authorization.url, e) from e

        if response.status_code != 204:
            log.error(f"Upload failed. Status code: {response.status_code}, Response: {response.text}")
            return BlipResponse(response.status_code, response.text)

        log.info(f"Done uploading {payload.source} to {authorization.object_location}")
        return authorization.object_location
