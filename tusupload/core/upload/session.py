"""
Upload session.

Orchestrates one resumable upload using injected dependencies: creates
the remote resource, then sends chunks sequentially through the retry
policy, resizing them after every confirmed chunk.
"""
import asyncio
import time
from typing import Callable, Optional

from ..logging import get_logger
from ..api.errors import (
    UploadError,
    InitiationError,
    TransferError,
    OffsetParseError,
    RetryExhaustedError,
    InvalidStateError
)
from ..api.events import EventEmitter
from ..api.retry import RetryPolicy
from .control import PauseToken
from .models import (
    UploadState,
    UploadTarget,
    UploadMetadata,
    ChunkResult,
    SessionRecord,
    UploadProgress,
    UploadResult
)
from .protocols import (
    ChunkSizer,
    ChunkTransferProtocol,
    ChunkSourceProtocol,
    SessionInitiatorProtocol
)
from .services import ChunkSource
from .strategies import AdaptiveChunkSizer

logger = get_logger('tusupload.upload.session')


class UploadSession:
    """
    State machine for one resumable upload.

    States: IDLE -> INITIATING -> TRANSFERRING <-> PAUSED -> COMPLETED,
    with FAILED reachable from INITIATING and TRANSFERRING.
    Cancelling the task that runs the transfer loop leaves the session
    PAUSED at the last confirmed offset.

    Events (see on()):
        state: (old_state, new_state)
        chunk: (ChunkResult)
        progress: (UploadProgress)
        retry: (attempt, TransferError)

    Example:
        >>> session = UploadSession(initiator, transfer_client)
        >>> result = await session.start(UploadTarget.from_path("video.mp4"))
        >>> result.state
        <UploadState.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        initiator: SessionInitiatorProtocol,
        transfer_client: ChunkTransferProtocol,
        retry_policy: Optional[RetryPolicy] = None,
        sizer: Optional[ChunkSizer] = None,
        source: Optional[ChunkSourceProtocol] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload session.

        Args:
            initiator: Creates the remote resource
            transfer_client: Sends one chunk per call
            retry_policy: Bounded re-attempt of a chunk
            sizer: Chunk sizing strategy
            source: Reads chunk bytes from the target file
            progress_callback: Called after every confirmed chunk
        """
        self._initiator = initiator
        self._transfer = transfer_client
        self._retry = retry_policy or RetryPolicy()
        self._sizer = sizer or AdaptiveChunkSizer()
        self._source = source or ChunkSource()
        self._progress_callback = progress_callback

        self._pause = PauseToken()
        self._events = EventEmitter('tusupload.upload.events')
        self._target: Optional[UploadTarget] = None
        self._record: Optional[SessionRecord] = None

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def record(self) -> Optional[SessionRecord]:
        """Current session record (None before start)."""
        return self._record

    @property
    def state(self) -> UploadState:
        if self._record is None:
            return UploadState.IDLE
        return self._record.state

    @property
    def resource_id(self) -> Optional[str]:
        return self._record.resource_id if self._record else None

    @property
    def offset(self) -> int:
        return self._record.offset if self._record else 0

    @property
    def chunk_size(self) -> int:
        return self._record.chunk_size if self._record else self._sizer.initial_size

    @property
    def progress(self) -> Optional[UploadProgress]:
        if self._record is None:
            return None
        return UploadProgress.from_record(self._record)

    @property
    def pause_requested(self) -> bool:
        return self._pause.is_requested

    def on(self, event: str, callback: Callable) -> 'UploadSession':
        """Register an event handler."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadSession':
        """Remove an event handler."""
        self._events.off(event, callback)
        return self

    # =========================================================================
    # Controls
    # =========================================================================

    async def start(
        self,
        target: UploadTarget,
        metadata: Optional[UploadMetadata] = None
    ) -> UploadResult:
        """
        Create the remote resource and upload until done or paused.

        Args:
            target: File to upload
            metadata: Creation body fields

        Returns:
            UploadResult in state COMPLETED or PAUSED

        Raises:
            InvalidStateError: If the session was already started
            ValueError: If the target is empty
            InitiationError: If the resource could not be created
            RetryExhaustedError: If a chunk failed on every attempt
        """
        self._begin(target, 'start')

        try:
            resource_id = await self._initiator.initiate(target, metadata)
        except InitiationError as e:
            logger.error(f"Could not create upload for {target.name}: {e}")
            self._transition(UploadState.FAILED)
            raise

        self._record = self._record.evolve(resource_id=resource_id)
        self._transition(UploadState.TRANSFERRING)
        return await self._run()

    async def attach(self, target: UploadTarget, resource_id: str) -> UploadResult:
        """
        Continue an upload created by an earlier session.

        Asks the server for its confirmed offset, then uploads the rest.

        Raises:
            InvalidStateError: If the session was already started
            InitiationError: If the resource cannot be queried or is inconsistent
            RetryExhaustedError: If a chunk failed on every attempt
        """
        self._begin(target, 'attach')
        self._record = self._record.evolve(resource_id=resource_id)

        try:
            offset = await self._transfer.query_offset(resource_id)
        except TransferError as e:
            self._transition(UploadState.FAILED)
            raise InitiationError(
                f"Cannot attach to {resource_id}: {e}",
                status=e.status,
                resource_id=resource_id,
                offset=None
            ) from e

        if offset > target.file_size:
            self._transition(UploadState.FAILED)
            raise InitiationError(
                f"Server holds {offset} bytes for {resource_id}, file has {target.file_size}",
                resource_id=resource_id,
                offset=None
            )

        logger.info(f"Attached to {resource_id} at offset {offset}/{target.file_size}")
        self._record = self._record.evolve(offset=offset)
        self._transition(UploadState.TRANSFERRING)
        return await self._run()

    def pause(self) -> None:
        """
        Request a pause.

        Takes effect at the next chunk boundary; a chunk in flight finishes first.

        Raises:
            InvalidStateError: If the session already completed or failed
        """
        if self.state.is_terminal:
            raise InvalidStateError('pause', self.state.value)
        logger.info(f"Pause requested at offset {self.offset}")
        self._pause.request()

    async def resume(self) -> UploadResult:
        """
        Continue a paused upload from the last confirmed offset.

        Reuses the existing resource; no new creation request is made.

        Raises:
            InvalidStateError: If the session is not paused
            RetryExhaustedError: If a chunk failed on every attempt
        """
        if self.state != UploadState.PAUSED:
            raise InvalidStateError('resume', self.state.value)
        self._pause.clear()
        logger.info(f"Resuming {self.resource_id} at offset {self.offset}")
        self._transition(UploadState.TRANSFERRING)
        return await self._run()

    # =========================================================================
    # Transfer loop
    # =========================================================================

    def _begin(self, target: UploadTarget, operation: str) -> None:
        if self.state != UploadState.IDLE:
            raise InvalidStateError(operation, self.state.value)
        if target.file_size <= 0:
            raise ValueError("Cannot upload empty file")

        self._target = target
        self._record = SessionRecord(
            file_size=target.file_size,
            chunk_size=self._sizer.initial_size
        )
        size_mb = target.file_size / (1024 * 1024)
        logger.info(f"Starting upload: {target.name} ({size_mb:.2f} MB)")
        self._transition(UploadState.INITIATING)

    async def _run(self) -> UploadResult:
        """Send chunks until complete, paused, or failed."""
        started = time.monotonic()
        try:
            await self._source.open(self._target.path)

            while True:
                record = self._record
                if record.offset >= record.file_size:
                    self._transition(UploadState.COMPLETED)
                    break
                if self._pause.is_requested:
                    self._transition(UploadState.PAUSED)
                    break
                self._record = await self._send_next_chunk(record)
        except asyncio.CancelledError:
            # Chunk in flight is unconfirmed; the record still holds the last
            # confirmed offset, so the session can be resumed from it.
            logger.warning(f"Upload of {self._target.name} cancelled at offset {self.offset}")
            self._pause.clear()
            self._transition(UploadState.PAUSED)
            raise
        except UploadError as e:
            if e.resource_id is None:
                e.resource_id = self.resource_id
            if not self.state.is_terminal:
                logger.error(f"Upload of {self._target.name} failed at offset {self.offset}: {e}")
                self._transition(UploadState.FAILED)
            raise
        except Exception as e:
            logger.error(f"Upload of {self._target.name} aborted at offset {self.offset}: {e}")
            self._transition(UploadState.FAILED)
            raise
        finally:
            await self._source.close()

        record = self._record
        elapsed = time.monotonic() - started
        if record.state == UploadState.COMPLETED:
            logger.info(
                f"Upload complete: {record.resource_id} ({record.file_size} bytes, "
                f"{record.chunks_sent} chunks, {elapsed:.2f}s)"
            )
        return UploadResult(
            resource_id=record.resource_id,
            file_size=record.file_size,
            offset=record.offset,
            state=record.state,
            chunks_sent=record.chunks_sent,
            retries=record.total_retries,
            elapsed=elapsed
        )

    async def _send_next_chunk(self, record: SessionRecord) -> SessionRecord:
        """Read, send and confirm the chunk starting at record.offset."""
        start = record.offset
        end = record.next_chunk_end()
        data = await self._source.read(start, end)

        retries = 0

        def on_retry(attempt: int, error: TransferError) -> None:
            nonlocal retries
            if attempt <= self._retry.max_retries:
                retries = attempt
                self._record = self._record.evolve(
                    retry_count=max(self._record.retry_count, attempt)
                )
            self._events.emit('retry', attempt, error)

        try:
            result = await self._retry.attempt(
                lambda: self._transfer.transfer(record.resource_id, start, data),
                on_retry=on_retry
            )
        except RetryExhaustedError as e:
            e.offset = start
            e.resource_id = record.resource_id
            logger.error(f"Upload failed at offset {start} after {e.attempts} attempts")
            self._transition(UploadState.FAILED)
            raise

        updated = self._apply_result(self._record, result, end)
        updated = updated.evolve(total_retries=record.total_retries + retries)

        if updated.retry_count > self._retry.max_retries:
            attempts = updated.retry_count
            self._record = updated.evolve(retry_count=self._retry.max_retries)
            self._transition(UploadState.FAILED)
            raise RetryExhaustedError(
                offset=updated.offset,
                attempts=attempts,
                resource_id=updated.resource_id
            )

        self._events.emit('chunk', result)
        self._report_progress(updated)
        return updated

    def _apply_result(self, record: SessionRecord, result: ChunkResult, end: int) -> SessionRecord:
        """
        Fold a confirmed chunk into the record.

        The offset never regresses and never passes the file size. A chunk
        that leaves the offset where it was counts against retry_count
        instead of resetting it.
        """
        confirmed = result.confirmed_offset
        if confirmed < record.offset:
            error = OffsetParseError(
                f"Server offset {confirmed} is behind confirmed offset {record.offset}",
                reported=str(confirmed),
                offset=record.offset
            )
            logger.warning(f"{error.message}; keeping {record.offset}")
            new_offset = record.offset
        elif confirmed > record.file_size:
            logger.warning(
                f"Server offset {confirmed} exceeds file size {record.file_size}; using {end}"
            )
            new_offset = end
        else:
            new_offset = confirmed

        if new_offset > record.offset:
            retry_count = 0
        else:
            retry_count = record.retry_count + 1
            logger.warning(f"No progress at offset {record.offset} ({retry_count} stalled chunks)")

        new_size = self._sizer.next_size(record.chunk_size, result.elapsed)
        if new_size != record.chunk_size:
            logger.debug(f"Chunk size {record.chunk_size} -> {new_size} ({result.elapsed:.3f}s)")

        return record.evolve(
            offset=new_offset,
            chunk_size=new_size,
            retry_count=retry_count,
            chunks_sent=record.chunks_sent + 1
        )

    def _report_progress(self, record: SessionRecord) -> None:
        progress = UploadProgress.from_record(record)
        logger.debug(f"Progress: {progress.percentage:.1f}% ({record.offset}/{record.file_size})")
        self._events.emit('progress', progress)
        if self._progress_callback:
            self._progress_callback(progress)

    def _transition(self, new_state: UploadState) -> None:
        old_state = self._record.state
        if old_state == new_state:
            return
        self._record = self._record.evolve(state=new_state)
        logger.debug(f"Session state {old_state.value} -> {new_state.value}")
        self._events.emit('state', old_state, new_state)
