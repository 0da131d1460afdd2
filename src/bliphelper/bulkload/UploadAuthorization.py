import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from bliphelper.blip.BlipError import UploadAuthorizationError

S3_ENDPOINT: str = "https://s3.amazonaws.com"

# Form fields every pre-signed POST carries, in the order they are posted
REQUIRED_FIELDS: tuple[str, ...] = ("acl", "bucket", "key", "content-md5", "policy", "signature", "AWSAccessKeyId")


@dataclass(frozen=True)
class UploadAuthorization:
    """Short lived pre-signed POST descriptor that allows a single upload to the object store."""
    s3_bucket: str
    url: str  # Where the multipart form is posted to
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def key(self) -> str:
        return self.fields["key"]

    @property
    def object_location(self) -> str:
        return f"s3://{self.s3_bucket}/{self.key}"

    @classmethod
    def from_json(cls, body: str) -> "UploadAuthorization":
        """
        Parse the body of a successful authorizeUpload call.

        The body looks like {"s3Bucket": "...", "data": {"acl": ..., "key": ..., ...}},
        newer platform versions send "url" next to or instead of "s3Bucket".
        """
        try:
            document: Any = json.loads(body)
        except ValueError as e:
            raise UploadAuthorizationError(f"Upload authorization is not valid JSON: {e}", body) from e

        if not isinstance(document, dict):
            raise UploadAuthorizationError("Upload authorization is not a JSON object", body)

        data = document.get("data")
        if not isinstance(data, dict):
            raise UploadAuthorizationError("Upload authorization has no 'data' object", body)

        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise UploadAuthorizationError(f"Upload authorization is missing the fields {', '.join(missing)}", body)

        if not all(isinstance(value, str) for value in data.values()):
            raise UploadAuthorizationError("Upload authorization contains non string form fields", body)

        empty = [name for name in REQUIRED_FIELDS if not data[name].strip()]
        if empty:
            raise UploadAuthorizationError(f"Upload authorization has empty fields {', '.join(empty)}", body)

        s3_bucket = document.get("s3Bucket") or data["bucket"]
        url = document.get("url") or f"{S3_ENDPOINT}/{s3_bucket}"
        if not isinstance(s3_bucket, str) or not isinstance(url, str) or not s3_bucket.strip():
            raise UploadAuthorizationError("Upload authorization has an invalid bucket or url", body)

        return cls(s3_bucket=s3_bucket, url=url, fields=data)
