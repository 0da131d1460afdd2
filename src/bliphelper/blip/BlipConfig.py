import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

DEFAULT_ENDPOINT: str = "https://blip.dev.balihoo-cloud.com"


@dataclass(frozen=True)
class BlipConfig:
    """Credentials and endpoint used for every request against the BLIP API."""
    api_key: str
    secret_key: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 60.0  # seconds, per request

    def __post_init__(self) -> None:
        if not self.api_key or not self.secret_key:
            raise ValueError("Both api_key and secret_key are required")
        # Paths are appended to the endpoint as is
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))

    def __repr__(self) -> str:
        return f"BlipConfig(api_key={self.api_key!r}, endpoint={self.endpoint!r}, timeout={self.timeout})"

    @classmethod
    def from_environment(cls) -> "BlipConfig":
        """ Read BLIP_API_KEY, BLIP_SECRET_KEY and optionally BLIP_ENDPOINT """
        return cls(api_key=os.getenv("BLIP_API_KEY", ""),
                   secret_key=os.getenv("BLIP_SECRET_KEY", ""),
                   endpoint=os.getenv("BLIP_ENDPOINT", DEFAULT_ENDPOINT))

    @classmethod
    def from_secret_directory(cls, secrets_path: Union[str, Path]) -> "BlipConfig":
        """
        Read the configuration from a mounted secret volume, one file per key.

        The files api_key and secret_key are required, endpoint is optional.
        """
        secrets_path = Path(secrets_path)

        def read_secret(key: str) -> str:
            secret_file = secrets_path / key
            if not secret_file.exists():
                raise FileNotFoundError(f"Secret key '{key}' not found in {secrets_path}")
            return secret_file.read_text().strip()

        endpoint_file = secrets_path / "endpoint"
        endpoint = endpoint_file.read_text().strip() if endpoint_file.exists() else DEFAULT_ENDPOINT

        return cls(api_key=read_secret("api_key"),
                   secret_key=read_secret("secret_key"),
                   endpoint=endpoint)
