"""Upload services module."""
from .file_service import resolve_target, ChunkSource
from .http_service import BaseHttpService
from .chunk_service import ChunkTransferClient
from .creation_service import SessionInitiator

__all__ = [
    'resolve_target',
    'ChunkSource',
    'BaseHttpService',
    'ChunkTransferClient',
    'SessionInitiator',
]
