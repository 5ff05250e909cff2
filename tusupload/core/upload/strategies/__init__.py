"""Upload strategies module."""
from .chunking import BaseChunkSizer, AdaptiveChunkSizer, FixedChunkSizer

__all__ = [
    'BaseChunkSizer',
    'AdaptiveChunkSizer',
    'FixedChunkSizer',
]
