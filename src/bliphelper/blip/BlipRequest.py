import logging
from enum import Enum
from typing import Optional, Union

import requests

from .BlipConfig import BlipConfig
from .BlipError import BlipTransportError
from .BlipResponse import BlipResponse

log = logging.getLogger()


class Command(Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


class BlipRequest:
    """An HTTP request to the BLIP API, credentials are attached as basic authentication."""

    def __init__(self, config: BlipConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session  # None sends every request without keeping a connection pool

    def execute(self, command: Command, path: str, content: Optional[Union[str, bytes]] = None) -> BlipResponse:
        """
        Execute the command against the configured endpoint.

        Any status code the server answers with is returned as a BlipResponse,
        only failures to complete the request raise a BlipTransportError.
        """
        url = f"{self.config.endpoint}{path}"
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        data = content.encode("utf-8") if isinstance(content, str) else content

        sender = self.session if self.session is not None else requests

        log.debug(f"{command.value} {url}")
        try:
            response = sender.request(command.value,
                                      url,
                                      data=data,
                                      headers=headers,
                                      auth=(self.config.api_key, self.config.secret_key),
                                      timeout=self.config.timeout)
        except requests.RequestException as e:
            log.error(f"{command.value} {url} failed: {e}")
            raise BlipTransportError(command.value, url, e) from e

        return BlipResponse(response.status_code, response.text)
