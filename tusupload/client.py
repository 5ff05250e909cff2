"""
TusClient - High-level async client for resumable uploads.

Example:
    >>> async with TusClient("https://media.example.com/upload") as client:
    ...     result = await client.upload("video.mp4")
    ...     print(result.resource_id)
"""
from dataclasses import replace
from pathlib import Path
from typing import Optional, Dict, Union, Callable

import aiohttp

from .core.logging import get_logger
from .core.api import (
    ClientConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    ChunkingConfig
)
from .core.upload import (
    UploadFacade,
    UploadSession,
    UploadTarget,
    UploadResult,
    UploadProgress,
    ChunkTransferClient
)


class TusClient:
    """
    High-level async client owning the HTTP connection pool.

    Two ways to upload:

    1. Fire and forget:
        >>> async with TusClient(endpoint) as client:
        ...     await client.upload("video.mp4")

    2. With pause/resume control:
        >>> async with TusClient(endpoint) as client:
        ...     session, target = client.create_session("video.mp4")
        ...     task = asyncio.create_task(session.start(target))
        ...     session.pause()
        ...     await task                 # returns once paused
        ...     await session.resume()     # continues at the same offset

    With custom configuration:
        >>> config = TusClient.create_config(endpoint, max_retries=5, timeout=30)
        >>> client = TusClient(config=config)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None
    ):
        """
        Initialize client.

        Args:
            endpoint: Upload endpoint (overrides config.endpoint)
            config: Optional client configuration
        """
        config = config or ClientConfig.default()
        if endpoint:
            config = replace(config, endpoint=endpoint)
        self._config = config
        self._logger = get_logger('tusupload.client')

        self._http: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._facade: Optional[UploadFacade] = None

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        endpoint: str,
        timeout: float = 60,
        max_retries: int = 3,
        backoff: bool = False,
        verify_ssl: bool = True,
        adaptive: bool = True,
        chunk_size: Optional[int] = None,
        user_agent: Optional[str] = None
    ) -> ClientConfig:
        """
        Create client configuration with common options.

        Args:
            endpoint: Upload endpoint URL
            timeout: Per-request timeout in seconds
            max_retries: Re-attempts per chunk
            backoff: Wait exponentially longer between re-attempts
            verify_ssl: Whether to verify SSL certificates
            adaptive: Resize chunks from observed latency
            chunk_size: Initial (or fixed, if not adaptive) chunk size
            user_agent: Custom user agent string

        Returns:
            ClientConfig instance
        """
        chunking = ChunkingConfig(adaptive=adaptive)
        if chunk_size is not None:
            if adaptive:
                chunking = ChunkingConfig(initial_size=chunk_size)
            else:
                chunking = ChunkingConfig(
                    initial_size=chunk_size,
                    min_size=chunk_size,
                    max_size=chunk_size,
                    adaptive=False
                )

        return ClientConfig(
            endpoint=endpoint,
            timeout=TimeoutConfig(total=timeout),
            retry=RetryConfig(max_retries=max_retries, backoff=backoff),
            ssl=SSLConfig(verify=verify_ssl),
            chunking=chunking,
            user_agent=user_agent or 'tusupload/1.0.0'
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'TusClient':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> 'TusClient':
        """Open the HTTP connection pool."""
        if self._http is None or self._http.closed:
            self._connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._http = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
            self._facade = UploadFacade(self._config, self._http)
            self._logger.debug(f"Connected to {self._config.endpoint}")
        return self

    async def close(self):
        """Close the client and release resources."""
        if self._http and not self._http.closed:
            await self._http.close()
        self._http = None
        self._connector = None
        self._facade = None

    def _require_facade(self) -> UploadFacade:
        if self._facade is None:
            raise RuntimeError("Client is not connected; use 'async with' or connect()")
        return self._facade

    # =========================================================================
    # Uploads
    # =========================================================================

    def create_session(
        self,
        file_path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> tuple[UploadSession, UploadTarget]:
        """
        Prepare a session and target without starting the upload.

        Returns:
            (idle UploadSession, validated UploadTarget)
        """
        facade = self._require_facade()
        target = facade.build_target(file_path, name=name, metadata=metadata)
        return facade.create_session(progress_callback=progress_callback), target

    async def upload(
        self,
        file_path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        resource_id: Optional[str] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadResult:
        """
        Upload a file.

        Args:
            file_path: File to upload
            name: Display name sent in the creation body
            metadata: Extra creation body fields
            resource_id: Continue an existing upload resource
            progress_callback: Called after every confirmed chunk

        Returns:
            UploadResult of the completed upload
        """
        return await self._require_facade().upload(
            file_path,
            name=name,
            metadata=metadata,
            resource_id=resource_id,
            progress_callback=progress_callback
        )

    async def get_offset(self, resource_id: str) -> int:
        """Bytes the server holds for an upload resource."""
        self._require_facade()
        transfer = ChunkTransferClient(
            self._config.endpoint,
            timeout=self._config.timeout,
            session=self._http
        )
        return await transfer.query_offset(resource_id)
