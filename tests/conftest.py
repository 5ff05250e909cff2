"""Pytest fixtures for tusupload tests."""
import os
import tempfile
from pathlib import Path
from typing import List, Optional
from unittest.mock import MagicMock, Mock

import pytest

from tusupload.core.api.errors import TransferError, InitiationError
from tusupload.core.upload.models import ChunkResult, UploadTarget


def make_http_session(status: int = 200, headers: Optional[dict] = None):
    """
    Build a mock aiohttp session whose post/patch/head share one response.

    Returns:
        (session mock, response mock)
    """
    response = Mock()
    response.status = status
    response.headers = headers if headers is not None else {}

    session = MagicMock()
    for method in ('post', 'patch', 'head'):
        getattr(session, method).return_value.__aenter__.return_value = response
    return session, response


class FakeTransfer:
    """
    In-memory chunk transfer client.

    Records every call and the bytes of every accepted chunk.
    """

    def __init__(
        self,
        elapsed: Optional[List[float]] = None,
        default_elapsed: float = 0.5,
        failures: int = 0,
        confirmed: Optional[List[Optional[int]]] = None,
        server_offset: int = 0,
        on_call=None
    ):
        self.elapsed = list(elapsed or [])
        self.default_elapsed = default_elapsed
        self.failures = failures
        self.confirmed = list(confirmed or [])
        self.server_offset = server_offset
        self.on_call = on_call
        self.calls = []
        self.received = {}

    async def transfer(self, resource_id, offset, data):
        self.calls.append((resource_id, offset, len(data)))
        if self.on_call:
            self.on_call(len(self.calls))
        if self.failures:
            self.failures -= 1
            raise TransferError("HTTP 500", status=500, offset=offset, resource_id=resource_id)

        elapsed = self.elapsed.pop(0) if self.elapsed else self.default_elapsed
        confirmed = self.confirmed.pop(0) if self.confirmed else None
        if confirmed is None:
            confirmed = offset + len(data)
        if confirmed == offset + len(data):
            self.received[offset] = data
        return ChunkResult(
            bytes_sent=len(data),
            confirmed_offset=confirmed,
            elapsed=elapsed
        )

    async def query_offset(self, resource_id):
        return self.server_offset

    @property
    def offsets(self):
        return [offset for _, offset, _ in self.calls]

    def assembled(self) -> bytes:
        return b''.join(self.received[k] for k in sorted(self.received))


class FakeInitiator:
    """Initiator returning a fixed resource id or failing."""

    def __init__(self, resource_id: str = "abc123", fail: bool = False):
        self.resource_id = resource_id
        self.fail = fail
        self.calls = 0

    async def initiate(self, target, metadata=None):
        self.calls += 1
        if self.fail:
            raise InitiationError("No upload URL received")
        return self.resource_id


@pytest.fixture
def temp_file_factory():
    """Create temporary files with deterministic content."""
    paths = []

    def _create(size: int) -> Path:
        fd, path = tempfile.mkstemp()
        pattern = bytes(range(256))
        content = (pattern * (size // 256 + 1))[:size]
        os.write(fd, content)
        os.close(fd)
        paths.append(path)
        return Path(path)

    yield _create

    for path in paths:
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def million_byte_target(temp_file_factory):
    """1,000,000-byte upload target."""
    path = temp_file_factory(1_000_000)
    return UploadTarget.from_path(path, name="video.mp4")


@pytest.fixture
def fake_initiator():
    return FakeInitiator()


@pytest.fixture
def make_transfer():
    """Factory for FakeTransfer instances."""
    return FakeTransfer


@pytest.fixture
def http_session_factory():
    """Factory for mock aiohttp sessions."""
    return make_http_session
