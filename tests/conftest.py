from typing import Optional, Union

import pytest

from bliphelper.blip.BlipRequest import Command
from bliphelper.blip.BlipResponse import BlipResponse


class RecordingRequest:
    """Stands in for BlipRequest, answers with queued responses and records every call."""

    def __init__(self, *responses: BlipResponse) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[Command, str, Optional[Union[str, bytes]]]] = []

    def execute(self, command: Command, path: str, content: Optional[Union[str, bytes]] = None) -> BlipResponse:
        self.calls.append((command, path, content))
        if not self.responses:
            raise AssertionError(f"Unexpected request {command.value} {path}")
        return self.responses.pop(0)

    @property
    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]


@pytest.fixture
def recording_request() -> type[RecordingRequest]:
    """ The RecordingRequest class, instantiate it with the responses the test needs """
    return RecordingRequest


@pytest.fixture
def authorization_body() -> str:
    return ('{"s3Bucket": "blip-uploads", "data": {'
            '"acl": "private", "bucket": "blip-uploads", "key": "brand/acme/upload.csv.gz", '
            '"content-md5": "aGVsbG8=", "policy": "cG9saWN5", "signature": "c2lnbmF0dXJl", '
            '"AWSAccessKeyId": "AKIAEXAMPLE"}}')
