"""
Chunk transfer service.

Sends individual chunks to the upload resource. One call is one attempt:
retry and sizing decisions belong to the session.
"""
from typing import Optional, Tuple
import asyncio
import time

import aiohttp

from ...logging import get_logger
from ...api.config import TimeoutConfig
from ...api.errors import TransferError, OffsetParseError
from ...constants import HEADER_UPLOAD_OFFSET, CONTENT_TYPE_OFFSET_STREAM
from ..models import ChunkResult
from .http_service import BaseHttpService


class ChunkTransferClient(BaseHttpService):
    """
    Sends chunks to a resumable upload resource.

    Responsibilities:
    - PATCH a byte range at a given offset
    - Time the request
    - Parse the confirmed offset from the response

    Example:
        >>> client = ChunkTransferClient("https://example.com/upload", session=session)
        >>> result = await client.transfer("abc123", 0, data)
        >>> result.confirmed_offset
        262144
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[TimeoutConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(endpoint, timeout=timeout, session=session)
        self._logger = get_logger('tusupload.upload.chunk')

    async def transfer(
        self,
        resource_id: str,
        offset: int,
        data: bytes
    ) -> ChunkResult:
        """
        Send a single chunk.

        Args:
            resource_id: Remote upload resource
            offset: Offset of the first byte of data
            data: Chunk body

        Returns:
            ChunkResult with the confirmed offset and elapsed seconds

        Raises:
            ValueError: If data is empty
            TransferError: If the server rejects the chunk, the connection
                fails, or the attempt times out
        """
        if not data:
            raise ValueError(f"Cannot transfer empty chunk at offset {offset}")

        length = len(data)
        headers = {
            **self.protocol_headers(),
            'Content-Type': CONTENT_TYPE_OFFSET_STREAM,
            HEADER_UPLOAD_OFFSET: str(offset),
            'Content-Length': str(length),
        }
        session = await self._get_session()

        self._logger.debug(f"Sending chunk at offset {offset} ({length / 1024:.1f} KB)")
        start = time.monotonic()
        try:
            async with session.patch(
                self.resource_url(resource_id),
                data=data,
                headers=headers,
                timeout=self._timeout
            ) as response:
                status = response.status
                reported = response.headers.get(HEADER_UPLOAD_OFFSET)
        except asyncio.TimeoutError as e:
            elapsed = time.monotonic() - start
            self._logger.error(f"Chunk at offset {offset} timed out after {elapsed:.2f}s")
            raise TransferError(
                f"Timed out after {elapsed:.2f}s",
                offset=offset,
                resource_id=resource_id
            ) from e
        except aiohttp.ClientError as e:
            elapsed = time.monotonic() - start
            self._logger.error(f"Chunk at offset {offset} failed after {elapsed:.2f}s: {e}")
            raise TransferError(
                f"Connection error: {e}",
                offset=offset,
                resource_id=resource_id
            ) from e
        elapsed = time.monotonic() - start

        if not 200 <= status < 300:
            self._logger.error(f"Server returned HTTP {status} for chunk at offset {offset}")
            raise TransferError(
                f"Upload failed at offset {offset}: HTTP {status}",
                status=status,
                offset=offset,
                resource_id=resource_id
            )

        confirmed, reported_ok = self._parse_offset(reported, offset + length)
        speed_kbps = (length / 1024 / elapsed) if elapsed > 0 else 0
        self._logger.debug(
            f"Chunk at offset {offset} confirmed in {elapsed:.2f}s ({speed_kbps:.1f} KB/s), "
            f"server offset {confirmed}"
        )
        return ChunkResult(
            bytes_sent=length,
            confirmed_offset=confirmed,
            elapsed=elapsed,
            succeeded=True,
            offset_reported=reported_ok
        )

    def _parse_offset(self, reported: Optional[str], fallback: int) -> Tuple[int, bool]:
        """
        Parse Upload-Offset, falling back to the end of the chunk.

        Returns:
            (offset, whether the server's value was used)
        """
        try:
            return self.parse_offset_header(reported), True
        except OffsetParseError as e:
            self._logger.warning(f"{e.message}; assuming offset {fallback}")
            return fallback, False

    @staticmethod
    def parse_offset_header(value: Optional[str]) -> int:
        """
        Parse an Upload-Offset header value.

        Raises:
            OffsetParseError: If the value is missing, not an integer, or negative
        """
        if value is None:
            raise OffsetParseError("Response has no Upload-Offset header")
        try:
            parsed = int(value.strip())
        except (TypeError, ValueError):
            raise OffsetParseError(f"Unparsable Upload-Offset {value!r}", reported=value)
        if parsed < 0:
            raise OffsetParseError(f"Negative Upload-Offset {value!r}", reported=value)
        return parsed

    async def query_offset(self, resource_id: str) -> int:
        """
        Ask the server for the confirmed offset of a resource.

        Args:
            resource_id: Remote upload resource

        Returns:
            Bytes the server holds

        Raises:
            TransferError: If the request fails or the offset is unusable
        """
        session = await self._get_session()
        try:
            async with session.head(
                self.resource_url(resource_id),
                headers=self.protocol_headers(),
                timeout=self._timeout
            ) as response:
                status = response.status
                reported = response.headers.get(HEADER_UPLOAD_OFFSET)
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise TransferError(f"Offset query failed: {e}", resource_id=resource_id) from e

        if not 200 <= status < 300:
            raise TransferError(
                f"Offset query for {resource_id} returned HTTP {status}",
                status=status,
                resource_id=resource_id
            )
        try:
            offset = self.parse_offset_header(reported)
        except OffsetParseError as e:
            raise TransferError(e.message, status=status, resource_id=resource_id) from e
        self._logger.info(f"Server holds {offset} bytes for {resource_id}")
        return offset
