"""Transport-facing building blocks: configuration, errors, retry and events."""
from .errors import (
    UploadError,
    InitiationError,
    TransferError,
    OffsetParseError,
    RetryExhaustedError,
    InvalidStateError,
    SourceReadError
)
from .events import EventEmitter
from .config import ClientConfig, SSLConfig, TimeoutConfig, RetryConfig, ChunkingConfig
from .retry import (
    RetryPolicy,
    RetryStrategy,
    NoDelayStrategy,
    ExponentialBackoffStrategy,
    strategy_from_config
)

__all__ = [
    # Configuration
    'ClientConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'ChunkingConfig',

    # Retry
    'RetryPolicy',
    'RetryStrategy',
    'NoDelayStrategy',
    'ExponentialBackoffStrategy',
    'strategy_from_config',

    # Errors
    'UploadError',
    'InitiationError',
    'TransferError',
    'OffsetParseError',
    'RetryExhaustedError',
    'InvalidStateError',
    'SourceReadError',

    # Events
    'EventEmitter',
]
