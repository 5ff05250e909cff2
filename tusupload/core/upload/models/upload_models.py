"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, Union


class UploadState(str, Enum):
    """Lifecycle states of an upload session."""
    IDLE = 'idle'
    INITIATING = 'initiating'
    TRANSFERRING = 'transferring'
    PAUSED = 'paused'
    COMPLETED = 'completed'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        """True once no further forward progress is possible."""
        return self in (UploadState.COMPLETED, UploadState.FAILED)


@dataclass
class UploadMetadata:
    """
    Descriptive fields sent in the creation request body.

    Example:
        >>> meta = UploadMetadata(name="clip.mp4", timeline="2024-01-01T00:00:00+00:00")
        >>> meta.to_dict()['name']
        'clip.mp4'
    """
    name: str
    description: str = 'My video upload'
    distributor: str = 'tusupload'
    timeline: Optional[Union[str, datetime]] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.timeline is None:
            self.timeline = datetime.now(timezone.utc)
        if isinstance(self.timeline, datetime):
            self.timeline = self.timeline.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Creation body; protocol fields win over extra keys."""
        result: Dict[str, Any] = dict(self.extra)
        result.update({
            'name': self.name,
            'description': self.description,
            'distributor': self.distributor,
            'timeline': self.timeline,
        })
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UploadMetadata':
        """Create from dictionary; unknown keys land in extra."""
        known = {'name', 'description', 'distributor', 'timeline'}
        kwargs = {k: data[k] for k in known if k in data}
        kwargs.setdefault('name', '')
        return cls(
            extra={k: str(v) for k, v in data.items() if k not in known},
            **kwargs
        )


@dataclass(frozen=True)
class UploadTarget:
    """
    Source data for an upload.

    Attributes:
        path: File to read chunks from
        file_size: Total size in bytes, fixed for the session
        name: Display name
        metadata: Caller-supplied descriptive key/values
    """
    path: Path
    file_size: int
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None
    ) -> 'UploadTarget':
        """Build a target from a file on disk."""
        path = Path(path)
        return cls(
            path=path,
            file_size=path.stat().st_size,
            name=name or path.name,
            metadata=dict(metadata or {})
        )


@dataclass(frozen=True)
class ChunkResult:
    """
    Outcome of one chunk transfer attempt.

    Attributes:
        bytes_sent: Size of the chunk body
        confirmed_offset: Offset reported by the server (or the fallback)
        elapsed: Wall-clock duration of the attempt in seconds
        succeeded: Whether the server accepted the chunk
        offset_reported: False when Upload-Offset was missing or unparsable
    """
    bytes_sent: int
    confirmed_offset: int
    elapsed: float
    succeeded: bool = True
    offset_reported: bool = True


@dataclass(frozen=True)
class SessionRecord:
    """
    Owned state of one upload session.

    Only the orchestrator produces new records; each step returns a
    modified copy via evolve().
    """
    file_size: int
    chunk_size: int
    resource_id: Optional[str] = None
    offset: int = 0
    state: UploadState = UploadState.IDLE
    retry_count: int = 0
    chunks_sent: int = 0
    total_retries: int = 0

    def evolve(self, **changes) -> 'SessionRecord':
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @property
    def remaining(self) -> int:
        return self.file_size - self.offset

    def next_chunk_end(self) -> int:
        """Exclusive end of the next chunk."""
        return min(self.offset + self.chunk_size, self.file_size)


@dataclass(frozen=True)
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        offset: Bytes confirmed by the server
        file_size: Total file size
        chunk_size: Current transfer unit
        state: Current session state
    """
    offset: int
    file_size: int
    chunk_size: int
    state: UploadState

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.file_size == 0:
            return 0.0
        return (self.offset / self.file_size) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if every byte is confirmed."""
        return self.file_size > 0 and self.offset >= self.file_size

    @classmethod
    def from_record(cls, record: SessionRecord) -> 'UploadProgress':
        return cls(
            offset=record.offset,
            file_size=record.file_size,
            chunk_size=record.chunk_size,
            state=record.state
        )


@dataclass(frozen=True)
class UploadResult:
    """
    Where a run of the transfer loop stopped.

    Attributes:
        resource_id: Remote upload resource
        file_size: Size of the uploaded file
        offset: Last confirmed offset
        state: COMPLETED or PAUSED
        chunks_sent: Chunks confirmed so far
        retries: Failed attempts that were retried
        elapsed: Seconds spent in this run of the loop
    """
    resource_id: str
    file_size: int
    offset: int
    state: UploadState
    chunks_sent: int = 0
    retries: int = 0
    elapsed: float = 0.0

    @property
    def is_complete(self) -> bool:
        return self.state == UploadState.COMPLETED
