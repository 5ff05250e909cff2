"""
Upload facade.

Provides a simplified interface for resumable uploads.
Follows Facade Pattern - hides how sessions are wired together.
"""
from pathlib import Path
from typing import Optional, Union, Dict, Callable

import aiohttp

from ..logging import get_logger
from ..api.config import ClientConfig
from ..api.retry import RetryPolicy, strategy_from_config
from .models import UploadTarget, UploadResult, UploadProgress
from .protocols import ChunkSizer
from .services import resolve_target, ChunkTransferClient, SessionInitiator
from .session import UploadSession
from .strategies import AdaptiveChunkSizer, FixedChunkSizer


class UploadFacade:
    """
    Simplified interface for resumable uploads.

    Builds fully wired UploadSession objects from a ClientConfig and a
    shared aiohttp session.

    Example:
        >>> facade = UploadFacade(config, http_session)
        >>> result = await facade.upload("video.mp4")
        >>> print(result.resource_id)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
        sizer: Optional[ChunkSizer] = None
    ):
        """
        Initialize upload facade.

        Args:
            config: Client configuration
            http_session: Shared HTTP session for all requests
            sizer: Optional custom sizing strategy (overrides config.chunking)
        """
        self._config = config or ClientConfig.default()
        self._http = http_session
        self._sizer = sizer
        self._logger = get_logger('tusupload.upload')

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_sizer(self) -> ChunkSizer:
        """Sizing strategy described by the config."""
        if self._sizer is not None:
            return self._sizer
        chunking = self._config.chunking
        if not chunking.adaptive:
            return FixedChunkSizer(chunking.initial_size)
        return AdaptiveChunkSizer(
            initial_size=chunking.initial_size,
            min_size=chunking.min_size,
            max_size=chunking.max_size,
            fast_threshold=chunking.fast_threshold,
            slow_threshold=chunking.slow_threshold
        )

    def build_target(
        self,
        file_path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None
    ) -> UploadTarget:
        """
        Validate a file and describe it as an upload target.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a file or is empty
        """
        return resolve_target(file_path, name=name, metadata=metadata)

    def create_session(
        self,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadSession:
        """Create a new, idle upload session."""
        config = self._config
        initiator = SessionInitiator(
            config.endpoint,
            timeout=config.timeout,
            session=self._http,
            description=config.description,
            distributor=config.distributor
        )
        transfer = ChunkTransferClient(
            config.endpoint,
            timeout=config.timeout,
            session=self._http
        )
        retry = RetryPolicy(
            max_retries=config.retry.max_retries,
            strategy=strategy_from_config(config.retry)
        )
        return UploadSession(
            initiator=initiator,
            transfer_client=transfer,
            retry_policy=retry,
            sizer=self.build_sizer(),
            progress_callback=progress_callback
        )

    async def upload(
        self,
        file_path: Union[str, Path],
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        resource_id: Optional[str] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadResult:
        """
        Upload a file from start to finish.

        Args:
            file_path: Path to file to upload
            name: Optional display name (defaults to file name)
            metadata: Extra creation body fields
            resource_id: Continue this existing resource instead of creating one
            progress_callback: Called after every confirmed chunk

        Returns:
            UploadResult of the finished upload
        """
        target = self.build_target(file_path, name=name, metadata=metadata)
        session = self.create_session(progress_callback=progress_callback)
        if resource_id:
            self._logger.info(f"Continuing {target.name} on resource {resource_id}")
            return await session.attach(target, resource_id)
        return await session.start(target)
