from dataclasses import dataclass

# Status used for failures detected on the client before any request is sent,
# a remote server can never answer with it.
LOCAL_ERROR_STATUS: int = -1


@dataclass(frozen=True)
class BlipResponse:
    """Status code and body text returned by a single BLIP API call."""
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    @classmethod
    def local_error(cls, message: str) -> "BlipResponse":
        return cls(LOCAL_ERROR_STATUS, message)
