"""
Upload module for resumable chunked uploads.

This module provides the upload session state machine and the services it
drives. Sizing and retry delays are pluggable strategies.
"""
from .facade import UploadFacade
from .session import UploadSession
from .control import PauseToken
from .models import (
    UploadState,
    UploadMetadata,
    UploadTarget,
    ChunkResult,
    SessionRecord,
    UploadProgress,
    UploadResult
)
from .protocols import (
    ChunkSizer,
    ChunkSourceProtocol,
    ChunkTransferProtocol,
    SessionInitiatorProtocol
)
from .services import ChunkTransferClient, SessionInitiator
from .strategies import AdaptiveChunkSizer, FixedChunkSizer

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadSession',
    'PauseToken',

    # Services
    'ChunkTransferClient',
    'SessionInitiator',

    # Strategies
    'AdaptiveChunkSizer',
    'FixedChunkSizer',

    # Models
    'UploadState',
    'UploadMetadata',
    'UploadTarget',
    'ChunkResult',
    'SessionRecord',
    'UploadProgress',
    'UploadResult',

    # Protocols
    'ChunkSizer',
    'ChunkSourceProtocol',
    'ChunkTransferProtocol',
    'SessionInitiatorProtocol',
]
