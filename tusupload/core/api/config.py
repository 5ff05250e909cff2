"""
Client configuration module.

Provides configuration for the resumable upload client.
Open for extension through custom configurations.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union
import ssl

from ..constants import (
    MIN_CHUNK,
    MAX_CHUNK,
    INITIAL_CHUNK,
    FAST_THRESHOLD,
    SLOW_THRESHOLD,
    MAX_RETRIES
)


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration."""
        if not self.verify:
            return False  # Disable SSL verification

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Applied to every single request, so a hung chunk attempt surfaces as a
    transfer failure instead of blocking the session.
    """
    total: float = 60.0  # Total per-attempt timeout
    connect: float = 10.0
    sock_read: float = 30.0
    sock_connect: float = 10.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Controls how often a failed chunk is re-sent at the same offset.
    Backoff is off by default: failed chunks are re-sent immediately.
    """
    max_retries: int = MAX_RETRIES
    backoff: bool = False
    base_delay: float = 0.25
    max_delay: float = 16.0
    exponential_base: float = 2.0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class ChunkingConfig:
    """
    Chunk sizing configuration.

    Attributes:
        initial_size: First chunk size in bytes
        min_size: Lower bound for adaptive sizing
        max_size: Upper bound for adaptive sizing
        fast_threshold: Chunks faster than this (seconds) grow
        slow_threshold: Chunks slower than this (seconds) shrink
        adaptive: Use latency-driven sizing; fixed size otherwise
    """
    initial_size: int = INITIAL_CHUNK
    min_size: int = MIN_CHUNK
    max_size: int = MAX_CHUNK
    fast_threshold: float = FAST_THRESHOLD
    slow_threshold: float = SLOW_THRESHOLD
    adaptive: bool = True

    def __post_init__(self):
        if self.min_size <= 0:
            raise ValueError("min_size must be positive")
        if self.min_size > self.max_size:
            raise ValueError("min_size cannot exceed max_size")
        if not self.min_size <= self.initial_size <= self.max_size:
            raise ValueError(
                f"initial_size {self.initial_size} outside [{self.min_size}, {self.max_size}]"
            )
        if self.fast_threshold > self.slow_threshold:
            raise ValueError("fast_threshold cannot exceed slow_threshold")


@dataclass
class ClientConfig:
    """
    Complete client configuration.

    Centralizes all configuration options for the upload client.
    """
    # Upload endpoint (creation URL; chunks go to <endpoint>/<resource_id>)
    endpoint: str = 'http://localhost:8082/upload'

    # User agent
    user_agent: str = 'tusupload/1.0.0'

    # Creation request defaults
    description: str = 'My video upload'
    distributor: str = 'tusupload'

    # Sub-configurations
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 4
    limit: int = 10

    def __post_init__(self):
        self.endpoint = self.endpoint.rstrip('/')

    @classmethod
    def default(cls) -> 'ClientConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def insecure(cls, **kwargs) -> 'ClientConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
