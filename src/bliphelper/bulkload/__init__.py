"""Bulk load of location files through a pre-signed S3 upload."""

from .BulkLoadRequest import BulkLoadRequest
from .CompressedPayload import CompressedPayload, compress_file
from .UploadAuthorization import UploadAuthorization
from .UploadAuthorizer import UploadAuthorizer
from .S3Uploader import S3Uploader
from .BulkLoadTrigger import BulkLoadTrigger
from .BulkLoader import BulkLoader

__all__ = [
    'BulkLoadRequest',
    'BulkLoadTrigger',
    'BulkLoader',
    'CompressedPayload',
    'S3Uploader',
    'UploadAuthorization',
    'UploadAuthorizer',
    'compress_file'
]
