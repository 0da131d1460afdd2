"""BLIP API client and HTTP transport."""

from .BlipConfig import BlipConfig
from .BlipError import BlipError, BlipTransportError, ChecksumUnavailableError, UploadAuthorizationError
from .BlipResponse import BlipResponse, LOCAL_ERROR_STATUS
from .BlipRequest import BlipRequest, Command
from .Blip import Blip, LocationOptions

__all__ = [
    'Blip',
    'BlipConfig',
    'BlipError',
    'BlipRequest',
    'BlipResponse',
    'BlipTransportError',
    'ChecksumUnavailableError',
    'Command',
    'LocationOptions',
    'LOCAL_ERROR_STATUS',
    'UploadAuthorizationError'
]
