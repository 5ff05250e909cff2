"""
Chunk sizing strategies for resumable uploads.

Implements Strategy Pattern for different sizing algorithms.
Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod

from ...constants import (
    MIN_CHUNK,
    MAX_CHUNK,
    INITIAL_CHUNK,
    FAST_THRESHOLD,
    SLOW_THRESHOLD
)


class BaseChunkSizer(ABC):
    """Abstract base class for chunk sizing strategies."""

    min_size: int = MIN_CHUNK
    max_size: int = MAX_CHUNK

    @property
    @abstractmethod
    def initial_size(self) -> int:
        """Size of the first chunk."""
        pass

    @abstractmethod
    def next_size(self, current_size: int, elapsed: float) -> int:
        """Size of the next chunk given the last one's duration."""
        pass


class AdaptiveChunkSizer(BaseChunkSizer):
    """
    Latency-driven chunk sizing.

    Doubles the chunk after a fast transfer and halves it after a slow one,
    always within [min_size, max_size]. Durations between the two
    thresholds leave the size unchanged, so borderline latencies do not
    make the size oscillate.

    Example:
        >>> sizer = AdaptiveChunkSizer()
        >>> sizer.next_size(262144, 0.25)
        524288
        >>> sizer.next_size(262144, 0.9)
        131072
    """

    def __init__(
        self,
        initial_size: int = INITIAL_CHUNK,
        min_size: int = MIN_CHUNK,
        max_size: int = MAX_CHUNK,
        fast_threshold: float = FAST_THRESHOLD,
        slow_threshold: float = SLOW_THRESHOLD
    ):
        """
        Initialize with bounds and latency band.

        Args:
            initial_size: First chunk size in bytes
            min_size: Smallest chunk in bytes
            max_size: Largest chunk in bytes
            fast_threshold: Seconds under which a chunk counts as fast
            slow_threshold: Seconds over which a chunk counts as slow
        """
        if min_size <= 0 or min_size > max_size:
            raise ValueError(f"Invalid chunk bounds [{min_size}, {max_size}]")
        if not min_size <= initial_size <= max_size:
            raise ValueError(f"Initial size {initial_size} outside [{min_size}, {max_size}]")
        if fast_threshold > slow_threshold:
            raise ValueError("fast_threshold cannot exceed slow_threshold")
        self._initial_size = initial_size
        self.min_size = min_size
        self.max_size = max_size
        self.fast_threshold = fast_threshold
        self.slow_threshold = slow_threshold

    @property
    def initial_size(self) -> int:
        return self._initial_size

    def next_size(self, current_size: int, elapsed: float) -> int:
        """
        Compute the next chunk size.

        Args:
            current_size: Size of the chunk just sent
            elapsed: Seconds the transfer took

        Returns:
            New chunk size in bytes
        """
        if elapsed < self.fast_threshold and current_size < self.max_size:
            return min(current_size * 2, self.max_size)
        if elapsed > self.slow_threshold and current_size > self.min_size:
            return max(current_size // 2, self.min_size)
        return current_size


class FixedChunkSizer(BaseChunkSizer):
    """
    Constant chunk size, ignoring latency.

    Useful for testing or for servers that expect fixed-size chunks.
    """

    def __init__(self, chunk_size: int = INITIAL_CHUNK):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size
        self.min_size = chunk_size
        self.max_size = chunk_size

    @property
    def initial_size(self) -> int:
        return self.chunk_size

    def next_size(self, current_size: int, elapsed: float) -> int:
        return self.chunk_size
