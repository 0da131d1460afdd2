from typing import Optional


class BlipError(Exception):
    """Base class for errors raised by the BLIP client."""


class BlipTransportError(BlipError):
    """The HTTP request could not be completed (connection refused, timeout, broken stream)."""

    def __init__(self, method: str, url: str, cause: Optional[BaseException] = None) -> None:
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause}")


class UploadAuthorizationError(BlipError):
    """The upload authorization returned by BLIP could not be parsed."""

    def __init__(self, message: str, body: str) -> None:
        self.body = body
        super().__init__(message)


class ChecksumUnavailableError(BlipError):
    """The interpreter does not provide an MD5 implementation, e.g. on a FIPS restricted build."""
