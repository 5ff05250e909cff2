"""
Upload resource creation service.

Handles the creation request that opens a resumable upload.
"""
from typing import Optional
from urllib.parse import urlparse
import asyncio

import aiohttp

from ...logging import get_logger
from ...api.config import TimeoutConfig
from ...api.errors import InitiationError
from ...constants import HEADER_UPLOAD_LENGTH, HEADER_LOCATION
from ..models import UploadTarget, UploadMetadata
from .http_service import BaseHttpService


class SessionInitiator(BaseHttpService):
    """
    Creates upload resources.

    Sends the total length and descriptive metadata, and extracts the
    resource id from the Location header. Never retries: a failed creation
    is fatal for the session.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[TimeoutConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        description: str = 'My video upload',
        distributor: str = 'tusupload'
    ):
        """
        Initialize initiator.

        Args:
            endpoint: Creation URL
            timeout: Request timeout configuration
            session: Optional shared session
            description: Default description for the creation body
            distributor: Default distributor for the creation body
        """
        super().__init__(endpoint, timeout=timeout, session=session)
        self._description = description
        self._distributor = distributor
        self._logger = get_logger('tusupload.upload.create')

    def build_metadata(self, target: UploadTarget) -> UploadMetadata:
        """Creation body for a target, using the configured defaults."""
        extra = dict(target.metadata)
        return UploadMetadata(
            name=target.name,
            description=extra.pop('description', self._description),
            distributor=extra.pop('distributor', self._distributor),
            timeline=extra.pop('timeline', None),
            extra=extra
        )

    async def initiate(
        self,
        target: UploadTarget,
        metadata: Optional[UploadMetadata] = None
    ) -> str:
        """
        Create the remote upload resource.

        Args:
            target: File being uploaded
            metadata: Creation body; built from the target when omitted

        Returns:
            Resource id

        Raises:
            ValueError: If the target is empty
            InitiationError: If the request fails or Location is missing
        """
        if target.file_size <= 0:
            raise ValueError("Cannot upload empty file")

        body = (metadata or self.build_metadata(target)).to_dict()
        headers = {
            **self.protocol_headers(),
            HEADER_UPLOAD_LENGTH: str(target.file_size),
            'Content-Type': 'application/json',
        }
        session = await self._get_session()

        self._logger.info(f"Creating upload for {target.name} ({target.file_size} bytes)")
        try:
            async with session.post(
                self._endpoint,
                json=body,
                headers=headers,
                timeout=self._timeout
            ) as response:
                status = response.status
                location = response.headers.get(HEADER_LOCATION)
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise InitiationError(f"Creation request failed: {e}") from e

        if not 200 <= status < 300:
            raise InitiationError(f"Creation request returned HTTP {status}", status=status)
        if not location:
            raise InitiationError("No upload URL received", status=status)

        resource_id = self.resource_id_from_location(location)
        if not resource_id:
            raise InitiationError(f"Unusable Location header {location!r}", status=status)

        self._logger.info(f"Upload resource created: {resource_id}")
        return resource_id

    @staticmethod
    def resource_id_from_location(location: str) -> str:
        """
        Extract the resource id from a Location value.

        Accepts a bare id, a path or an absolute URL; the id is the last
        non-empty path segment.
        """
        path = urlparse(location.strip()).path
        segments = [part for part in path.split('/') if part]
        return segments[-1] if segments else ''
