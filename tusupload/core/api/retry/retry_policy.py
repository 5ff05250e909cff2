"""
Bounded retry of a single chunk attempt.

The action is re-invoked with the same offset and chunk boundaries; the
chunk size is never renegotiated mid-retry.
"""
from typing import Awaitable, Callable, Optional

from ...logging import get_logger
from ...constants import MAX_RETRIES
from ..errors import TransferError, RetryExhaustedError
from .retry_strategy import RetryStrategy, NoDelayStrategy

logger = get_logger('tusupload.upload.retry')

RetryHook = Callable[[int, TransferError], None]


class RetryPolicy:
    """
    Wraps one chunk transfer with bounded re-attempts.

    Example:
        >>> policy = RetryPolicy(max_retries=3)
        >>> result = await policy.attempt(
        ...     lambda: client.transfer(resource_id, offset, data)
        ... )
    """

    def __init__(
        self,
        max_retries: int = MAX_RETRIES,
        strategy: Optional[RetryStrategy] = None
    ):
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        self._max_retries = max_retries
        self._strategy = strategy or NoDelayStrategy()

    @property
    def max_retries(self) -> int:
        return self._max_retries

    async def attempt(
        self,
        action: Callable[[], Awaitable],
        max_retries: Optional[int] = None,
        on_retry: Optional[RetryHook] = None
    ):
        """
        Run action until it succeeds or the retry bound is hit.

        Args:
            action: Zero-argument coroutine function performing one attempt
            max_retries: Override for this call (attempts = max_retries + 1)
            on_retry: Called with (attempt number, error) after each failure

        Returns:
            Whatever the first successful attempt returned

        Raises:
            RetryExhaustedError: If every attempt raised TransferError
        """
        bound = self._max_retries if max_retries is None else max_retries
        retry_count = 0

        while True:
            try:
                return await action()
            except TransferError as e:
                attempt = retry_count + 1
                if on_retry is not None:
                    on_retry(attempt, e)
                if not self._strategy.should_retry(retry_count, bound):
                    logger.error(f"Giving up after {attempt} attempts: {e}")
                    raise RetryExhaustedError(
                        offset=e.offset,
                        attempts=attempt,
                        resource_id=e.resource_id,
                        last_error=e
                    ) from e
                logger.warning(f"Attempt {attempt} failed at offset {e.offset}, retrying: {e}")
                await self._strategy.wait_async(retry_count)
                retry_count += 1
