"""Upload models."""
from .upload_models import (
    UploadState,
    UploadMetadata,
    UploadTarget,
    ChunkResult,
    SessionRecord,
    UploadProgress,
    UploadResult
)

__all__ = [
    'UploadState',
    'UploadMetadata',
    'UploadTarget',
    'ChunkResult',
    'SessionRecord',
    'UploadProgress',
    'UploadResult',
]
