import logging
from typing import Union
from urllib.parse import quote, urlencode

from bliphelper.blip.BlipRequest import BlipRequest, Command
from bliphelper.blip.BlipResponse import BlipResponse
from bliphelper.bulkload.UploadAuthorization import UploadAuthorization

log = logging.getLogger()


class UploadAuthorizer:
    """Requests permission from BLIP to upload a file with a given checksum."""

    def __init__(self, request: BlipRequest) -> None:
        self.request = request

    def authorize(self, brand_key: str, file_md5: str) -> Union[UploadAuthorization, BlipResponse]:
        """
        Returns the UploadAuthorization on a 200 response, any other response is
        returned unchanged. A 200 response with a body that can not be parsed
        raises an UploadAuthorizationError.
        """
        query = urlencode({"fileMD5": file_md5})
        path = f"/brand/{quote(brand_key, safe='')}/authorizeUpload?{query}"

        log.info(f"Requesting upload authorization for brand {brand_key}")
        response = self.request.execute(Command.GET, path)
        if response.status_code != 200:
            log.error(f"Upload authorization refused. Status code: {response.status_code}, Response: {response.body}")
            return response

        authorization = UploadAuthorization.from_json(response.body)
        log.info(f"Upload authorized to bucket {authorization.s3_bucket}")
        return authorization
