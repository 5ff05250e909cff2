"""Cooperative pause control for upload sessions."""
import asyncio


class PauseToken:
    """
    Pause request shared between a caller and a running session.

    The session polls it only between chunks, so a chunk already in flight
    always finishes (or exhausts its retries) before the pause applies.
    """

    def __init__(self):
        self._event = asyncio.Event()

    def request(self) -> None:
        """Ask the session to pause at the next chunk boundary."""
        self._event.set()

    def clear(self) -> None:
        """Withdraw a pause request."""
        self._event.clear()

    @property
    def is_requested(self) -> bool:
        return self._event.is_set()
