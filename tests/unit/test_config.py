"""Tests for client configuration."""
import ssl

import aiohttp
import pytest

from tusupload.core.api.config import (
    ClientConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    ChunkingConfig
)
from tusupload.core.constants import INITIAL_CHUNK, MAX_RETRIES


class TestSSLConfig:
    """Test suite for SSLConfig."""

    def test_verify_disabled(self):
        assert SSLConfig(verify=False).create_ssl_context() is False

    def test_default_context(self):
        context = SSLConfig().create_ssl_context()

        assert isinstance(context, ssl.SSLContext)
        assert context.check_hostname is True


class TestTimeoutConfig:
    """Test suite for TimeoutConfig."""

    def test_to_aiohttp_timeout(self):
        timeout = TimeoutConfig(total=5.0).to_aiohttp_timeout()

        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total == 5.0
        assert timeout.connect == 10.0


class TestRetryConfig:
    """Test suite for RetryConfig."""

    def test_defaults(self):
        config = RetryConfig()

        assert config.max_retries == MAX_RETRIES == 3
        assert config.backoff is False

    def test_calculate_delay_capped(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0)

        assert config.calculate_delay(0) == 1.0
        assert config.calculate_delay(2) == 4.0
        assert config.calculate_delay(10) == 5.0

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryConfig(max_retries=-1)


class TestChunkingConfig:
    """Test suite for ChunkingConfig."""

    def test_defaults(self):
        config = ChunkingConfig()

        assert config.initial_size == INITIAL_CHUNK
        assert config.adaptive is True

    @pytest.mark.parametrize("kwargs", [
        {'min_size': 0},
        {'min_size': 2048, 'max_size': 1024, 'initial_size': 1024},
        {'initial_size': 10},
        {'fast_threshold': 1.0, 'slow_threshold': 0.5},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ChunkingConfig(**kwargs)


class TestClientConfig:
    """Test suite for ClientConfig."""

    def test_default_endpoint(self):
        assert ClientConfig.default().endpoint == 'http://localhost:8082/upload'

    def test_trailing_slash_stripped(self):
        """Test resource URLs do not get a double slash."""
        config = ClientConfig(endpoint='https://example.com/files/')

        assert config.endpoint == 'https://example.com/files'

    def test_insecure(self):
        config = ClientConfig.insecure(endpoint='https://example.com/files')

        assert config.ssl.verify is False
        assert config.get_connector_kwargs()['ssl'] is False

    def test_connector_kwargs(self):
        kwargs = ClientConfig(limit=3, limit_per_host=2).get_connector_kwargs()

        assert kwargs['limit'] == 3
        assert kwargs['limit_per_host'] == 2

    def test_session_kwargs(self):
        config = ClientConfig(extra_headers={'X-Trace': "1"})

        kwargs = config.get_session_kwargs()

        assert kwargs['headers']['User-Agent'] == 'tusupload/1.0.0'
        assert kwargs['headers']['X-Trace'] == "1"
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
