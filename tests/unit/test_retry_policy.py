"""Tests for retry policy and strategies."""
import pytest
from unittest.mock import AsyncMock, Mock

from tusupload.core.api.config import RetryConfig
from tusupload.core.api.errors import TransferError, RetryExhaustedError
from tusupload.core.api.retry import (
    RetryPolicy,
    NoDelayStrategy,
    ExponentialBackoffStrategy,
    strategy_from_config
)


def failing(times: int, result="ok"):
    """Action that fails `times` times, then returns result."""
    errors = [TransferError("HTTP 503", status=503, offset=4096, resource_id="abc123")] * times
    return AsyncMock(side_effect=errors + [result])


class TestRetryPolicy:
    """Test suite for RetryPolicy."""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        """Test action called once when it succeeds."""
        action = failing(0)
        policy = RetryPolicy(max_retries=3)

        assert await policy.attempt(action) == "ok"
        assert action.call_count == 1

    @pytest.mark.asyncio
    async def test_fail_twice_then_succeed(self):
        """Test success on the third attempt does not raise."""
        action = failing(2)
        policy = RetryPolicy(max_retries=3)

        assert await policy.attempt(action) == "ok"
        assert action.call_count == 3

    @pytest.mark.asyncio
    async def test_always_failing_is_bounded(self):
        """Test exactly max_retries + 1 attempts before giving up."""
        action = AsyncMock(side_effect=TransferError("HTTP 500", status=500, offset=4096, resource_id="abc123"))
        policy = RetryPolicy(max_retries=3)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await policy.attempt(action)

        assert action.call_count == 4
        error = exc_info.value
        assert error.attempts == 4
        assert error.offset == 4096
        assert error.resource_id == "abc123"
        assert isinstance(error.last_error, TransferError)

    @pytest.mark.asyncio
    async def test_per_call_override(self):
        """Test max_retries override for a single call."""
        action = AsyncMock(side_effect=TransferError("HTTP 500"))
        policy = RetryPolicy(max_retries=3)

        with pytest.raises(RetryExhaustedError):
            await policy.attempt(action, max_retries=0)
        assert action.call_count == 1

    @pytest.mark.asyncio
    async def test_on_retry_hook(self):
        """Test hook sees every failed attempt."""
        action = failing(2)
        hook = Mock()
        policy = RetryPolicy(max_retries=3)

        await policy.attempt(action, on_retry=hook)

        assert [c.args[0] for c in hook.call_args_list] == [1, 2]
        assert all(isinstance(c.args[1], TransferError) for c in hook.call_args_list)

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        """Test non-transfer errors are not retried."""
        action = AsyncMock(side_effect=ValueError("bad chunk"))
        policy = RetryPolicy(max_retries=3)

        with pytest.raises(ValueError):
            await policy.attempt(action)
        assert action.call_count == 1

    @pytest.mark.asyncio
    async def test_strategy_delay_used(self):
        """Test strategy is consulted between attempts."""
        strategy = NoDelayStrategy()
        strategy.wait_async = AsyncMock()
        policy = RetryPolicy(max_retries=3, strategy=strategy)

        await policy.attempt(failing(2))

        assert [c.args[0] for c in strategy.wait_async.call_args_list] == [0, 1]

    def test_negative_bound_rejected(self):
        """Test negative max_retries is rejected."""
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=-1)


class TestRetryStrategies:
    """Test suite for retry delay strategies."""

    def test_no_delay(self):
        """Test immediate re-send."""
        strategy = NoDelayStrategy()

        assert strategy.delay(0) == 0.0
        assert strategy.should_retry(2, 3) is True
        assert strategy.should_retry(3, 3) is False

    def test_exponential_backoff(self):
        """Test delays grow and cap."""
        strategy = ExponentialBackoffStrategy(RetryConfig(base_delay=0.5, max_delay=3.0))

        assert strategy.delay(0) == 0.5
        assert strategy.delay(1) == 1.0
        assert strategy.delay(2) == 2.0
        assert strategy.delay(3) == 3.0

    def test_strategy_from_config(self):
        """Test config selects the strategy."""
        assert isinstance(strategy_from_config(RetryConfig()), NoDelayStrategy)
        assert isinstance(strategy_from_config(RetryConfig(backoff=True)), ExponentialBackoffStrategy)
