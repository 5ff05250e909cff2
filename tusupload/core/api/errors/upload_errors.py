"""Resumable upload errors and exceptions."""
from typing import Optional


class UploadError(Exception):
    """
    Base exception for upload failures.

    Carries enough context to decide whether a fresh session can resume
    against the same remote resource.

    Attributes:
        offset: Last offset confirmed by the server when the error occurred
        resource_id: Remote upload resource, if one was created
        attempts: Number of attempts made for the failing operation
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        resource_id: Optional[str] = None,
        attempts: int = 0
    ):
        self.message = message
        self.offset = offset
        self.resource_id = resource_id
        self.attempts = attempts
        super().__init__(message)


class InitiationError(UploadError):
    """
    Creation request failed, returned no resource reference, or an existing
    resource could not be attached to.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        resource_id: Optional[str] = None,
        offset: Optional[int] = 0
    ):
        self.status = status
        super().__init__(message, offset=offset, resource_id=resource_id)


class TransferError(UploadError):
    """A single chunk attempt failed (bad status, network error or timeout)."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        offset: Optional[int] = None,
        resource_id: Optional[str] = None
    ):
        self.status = status
        super().__init__(message, offset=offset, resource_id=resource_id, attempts=1)


class OffsetParseError(UploadError):
    """
    Server reported an unusable offset on an otherwise successful transfer.

    Soft error: the session recovers by keeping or computing the offset
    itself, so this is logged and never propagated to callers.
    """

    def __init__(self, message: str, reported: Optional[str] = None, offset: Optional[int] = None):
        self.reported = reported
        super().__init__(message, offset=offset)


class RetryExhaustedError(UploadError):
    """Every attempt for a chunk failed at the same offset."""

    def __init__(
        self,
        offset: Optional[int],
        attempts: int,
        resource_id: Optional[str] = None,
        last_error: Optional[Exception] = None
    ):
        self.last_error = last_error
        message = f"Chunk at offset {offset} failed after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message, offset=offset, resource_id=resource_id, attempts=attempts)


class InvalidStateError(UploadError):
    """Operation is not allowed in the session's current state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")


class SourceReadError(UploadError):
    """The file being uploaded could not be read at the requested range."""

    def __init__(self, message: str, offset: Optional[int] = None, path: Optional[str] = None):
        self.path = path
        super().__init__(message, offset=offset)
