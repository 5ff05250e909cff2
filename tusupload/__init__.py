"""
tusupload - Async resumable chunked uploads for large files.

Usage:
    >>> from tusupload import TusClient
    >>>
    >>> async with TusClient("http://localhost:8082/upload") as client:
    ...     result = await client.upload("video.mp4")
    ...     print(result.resource_id, result.state)
"""
import logging
from .client import TusClient

# Configuration
from .core.api import (
    ClientConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    ChunkingConfig,
    RetryPolicy,
    UploadError,
    InitiationError,
    TransferError,
    OffsetParseError,
    RetryExhaustedError,
    InvalidStateError,
    SourceReadError
)

# Upload engine
from .core.upload import (
    UploadSession,
    UploadFacade,
    UploadState,
    UploadTarget,
    UploadMetadata,
    UploadProgress,
    UploadResult,
    ChunkResult,
    ChunkTransferClient,
    SessionInitiator,
    AdaptiveChunkSizer,
    FixedChunkSizer
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for tusupload modules.

    Ensures that all tusupload loggers show messages at the given level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'tusupload',
        'tusupload.client',
        'tusupload.upload',
        'tusupload.upload.session',
        'tusupload.upload.create',
        'tusupload.upload.chunk',
        'tusupload.upload.retry',
        'tusupload.upload.file',
        'tusupload.upload.events',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'TusClient',
    'UploadSession',
    'UploadFacade',
    'UploadState',
    'UploadTarget',
    'UploadMetadata',
    'UploadProgress',
    'UploadResult',
    'ChunkResult',
    'ChunkTransferClient',
    'SessionInitiator',
    'AdaptiveChunkSizer',
    'FixedChunkSizer',
    'RetryPolicy',
    'ClientConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'ChunkingConfig',
    'UploadError',
    'InitiationError',
    'TransferError',
    'OffsetParseError',
    'RetryExhaustedError',
    'InvalidStateError',
    'SourceReadError',
    'setup_logging',
]
