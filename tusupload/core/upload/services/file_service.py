"""
Upload source access.

Turns a path into an UploadTarget and serves exact byte ranges of it to
the session. A range that cannot be read in full is an error, never a
partial chunk.
"""
from pathlib import Path
from typing import Dict, Optional, Union

import aiofiles

from ...logging import get_logger
from ...api.errors import SourceReadError
from ..models import UploadTarget


def resolve_target(
    file_path: Union[str, Path],
    name: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None
) -> UploadTarget:
    """
    Describe a local file as an upload target.

    The size is captured once here; the session relies on it for the
    creation request and for every chunk boundary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the path is not a regular file or the file is empty
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")

    file_size = path.stat().st_size
    if file_size == 0:
        raise ValueError(f"Cannot upload empty file: {path}")

    return UploadTarget(
        path=path,
        file_size=file_size,
        name=name or path.name,
        metadata=dict(metadata or {})
    )


class ChunkSource:
    """
    Offset-addressed reader over the file being uploaded.

    The session opens it once per run of its transfer loop and closes it
    when the loop stops, so a paused upload holds no file handle.

    Example:
        >>> source = ChunkSource()
        >>> await source.open(target.path)
        >>> data = await source.read(0, 262144)
        >>> await source.close()
    """

    def __init__(self):
        self._logger = get_logger('tusupload.upload.file')
        self._handle = None
        self._path: Optional[Path] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    async def open(self, path: Path) -> None:
        """
        Open the source for reading.

        Raises:
            SourceReadError: If the file cannot be opened
        """
        if self._handle is not None:
            if self._path == path:
                return
            await self.close()
        try:
            self._handle = await aiofiles.open(path, 'rb')
        except OSError as e:
            raise SourceReadError(f"Cannot open {path}: {e}", path=str(path)) from e
        self._path = path

    async def close(self) -> None:
        if self._handle is not None:
            await self._handle.close()
            self._handle = None
            self._path = None

    async def read(self, start: int, end: int) -> bytes:
        """
        Read exactly the bytes [start, end).

        Raises:
            SourceReadError: If the source is not open, the read fails, or
                the file holds fewer bytes than requested
        """
        if self._handle is None:
            raise SourceReadError("Source is not open", offset=start)

        expected = end - start
        try:
            await self._handle.seek(start)
            data = await self._handle.read(expected)
        except OSError as e:
            raise SourceReadError(
                f"Cannot read bytes {start}-{end} of {self._path}: {e}",
                offset=start,
                path=str(self._path)
            ) from e

        if len(data) != expected:
            raise SourceReadError(
                f"Short read at offset {start} of {self._path}: "
                f"expected {expected} bytes, got {len(data)}",
                offset=start,
                path=str(self._path)
            )
        self._logger.debug(f"Read {start}-{end} ({expected} bytes)")
        return data
