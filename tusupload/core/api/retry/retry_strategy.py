"""Retry delay strategies using Strategy Pattern."""
import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from ..config import RetryConfig


class RetryStrategy(ABC):
    """Abstract retry strategy."""

    @abstractmethod
    def should_retry(self, retry_count: int, max_retries: int) -> bool:
        """Determines if a failed attempt should be retried."""
        pass

    @abstractmethod
    def delay(self, retry_count: int) -> float:
        """Seconds to wait before the given retry."""
        pass

    async def wait_async(self, retry_count: int):
        """Waits before retry (async)."""
        seconds = self.delay(retry_count)
        if seconds > 0:
            await asyncio.sleep(seconds)


class NoDelayStrategy(RetryStrategy):
    """Re-sends immediately, up to the retry bound."""

    def should_retry(self, retry_count: int, max_retries: int) -> bool:
        return retry_count < max_retries

    def delay(self, retry_count: int) -> float:
        return 0.0


class ExponentialBackoffStrategy(RetryStrategy):
    """Exponential backoff retry strategy."""

    def __init__(self, config: Optional[RetryConfig] = None):
        self._config = config or RetryConfig(backoff=True)

    def should_retry(self, retry_count: int, max_retries: int) -> bool:
        return retry_count < max_retries

    def delay(self, retry_count: int) -> float:
        """Waits with exponential backoff, capped at max_delay."""
        return self._config.calculate_delay(retry_count)


def strategy_from_config(config: RetryConfig) -> RetryStrategy:
    """Pick the delay strategy a retry config asks for."""
    if config.backoff:
        return ExponentialBackoffStrategy(config)
    return NoDelayStrategy()
