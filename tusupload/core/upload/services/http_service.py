"""
Shared HTTP session handling for upload services.
"""
from typing import Optional

import aiohttp

from ...api.config import TimeoutConfig
from ...constants import HEADER_TUS_RESUMABLE, TUS_VERSION


class BaseHttpService:
    """
    Holds the aiohttp session used by an upload service.

    Reuses a shared session when one is given (RECOMMENDED, keeps the
    connection alive between chunks); otherwise creates and owns one.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[TimeoutConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize service.

        Args:
            endpoint: Upload endpoint URL
            timeout: Per-request timeout configuration
            session: Optional shared session
        """
        self._endpoint = endpoint.rstrip('/')
        self._timeout = (timeout or TimeoutConfig()).to_aiohttp_timeout()
        self._session = session
        self._owns_session = False

    @property
    def endpoint(self) -> str:
        """Returns the upload endpoint."""
        return self._endpoint

    def resource_url(self, resource_id: str) -> str:
        """URL addressing an upload resource."""
        return f"{self._endpoint}/{resource_id}"

    @staticmethod
    def protocol_headers() -> dict:
        return {HEADER_TUS_RESUMABLE: TUS_VERSION}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=4, keepalive_timeout=30)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False
