"""Upload errors and exceptions."""
from .upload_errors import (
    UploadError,
    InitiationError,
    TransferError,
    OffsetParseError,
    RetryExhaustedError,
    InvalidStateError,
    SourceReadError
)

__all__ = [
    'UploadError',
    'InitiationError',
    'TransferError',
    'OffsetParseError',
    'RetryExhaustedError',
    'InvalidStateError',
    'SourceReadError',
]
