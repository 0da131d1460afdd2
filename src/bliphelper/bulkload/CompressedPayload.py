import gzip
import hashlib
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from bliphelper.blip.BlipError import ChecksumUnavailableError

log = logging.getLogger()

DEFAULT_MIME_TYPE: str = "application/octet-stream"


@dataclass(frozen=True)
class CompressedPayload:
    """Gzipped contents of a bulk file together with the checksum BLIP authorizes the upload for."""
    content: bytes  # gzip stream
    md5: str  # lowercase hex md5 of content, not of the original file
    mime_type: str  # mime type of the original, uncompressed file
    source: Path

    @property
    def size(self) -> int:
        return len(self.content)


def md5_hex(content: bytes) -> str:
    try:
        digest = hashlib.md5(content, usedforsecurity=False)
    except ValueError as e:
        raise ChecksumUnavailableError(f"MD5 is not available on this interpreter: {e}") from e
    return digest.hexdigest()


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or DEFAULT_MIME_TYPE


def compress_file(path: Union[str, Path]) -> CompressedPayload:
    """
    Read a file into memory, gzip it and checksum the compressed bytes.

    The gzip header timestamp is fixed so the same input always produces the
    same bytes and therefore the same checksum.

    Raises:
        OSError: the file cannot be opened or read
        ChecksumUnavailableError: no md5 implementation is available
    """
    path = Path(path)
    raw = path.read_bytes()
    content = gzip.compress(raw, mtime=0)
    payload = CompressedPayload(content=content,
                                md5=md5_hex(content),
                                mime_type=guess_mime_type(path),
                                source=path)

    log.info(f"Compressed {path} from {len(raw)} to {payload.size} bytes, md5 {payload.md5}")
    return payload
