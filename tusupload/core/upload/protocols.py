"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Optional
from pathlib import Path

from .models import ChunkResult, UploadMetadata, UploadTarget


class ChunkSizer(Protocol):
    """
    Protocol for chunk sizing strategies.

    Allows different sizing algorithms to be plugged in.
    """

    @property
    def initial_size(self) -> int:
        """Size of the first chunk in bytes."""
        ...

    def next_size(self, current_size: int, elapsed: float) -> int:
        """
        Compute the next chunk size.

        Args:
            current_size: Size of the chunk just confirmed
            elapsed: Seconds the transfer took

        Returns:
            Next chunk size in bytes
        """
        ...


class ChunkSourceProtocol(Protocol):
    """Protocol for reading exact byte ranges of the upload source."""

    async def open(self, path: Path) -> None:
        """Prepare the source for reads."""
        ...

    async def close(self) -> None:
        """Release the source."""
        ...

    async def read(self, start: int, end: int) -> bytes:
        """
        Read bytes [start, end).

        Raises:
            SourceReadError: If the full range cannot be read
        """
        ...


class ChunkTransferProtocol(Protocol):
    """Protocol for single-attempt chunk transfers."""

    async def transfer(
        self,
        resource_id: str,
        offset: int,
        data: bytes
    ) -> ChunkResult:
        """
        Send one chunk at an offset.

        Args:
            resource_id: Remote upload resource
            offset: Offset of the first byte in data
            data: Chunk body

        Returns:
            Parsed transfer result

        Raises:
            TransferError: If the attempt failed
        """
        ...

    async def query_offset(self, resource_id: str) -> int:
        """Ask the server how many bytes it holds for a resource."""
        ...


class SessionInitiatorProtocol(Protocol):
    """Protocol for upload resource creation."""

    async def initiate(
        self,
        target: UploadTarget,
        metadata: Optional[UploadMetadata] = None
    ) -> str:
        """
        Create the remote upload resource.

        Args:
            target: What is being uploaded
            metadata: Creation body fields

        Returns:
            Resource id

        Raises:
            InitiationError: If creation failed
        """
        ...
