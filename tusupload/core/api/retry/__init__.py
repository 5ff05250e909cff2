"""Retry policy and strategies using Strategy Pattern."""
from .retry_strategy import (
    RetryStrategy,
    NoDelayStrategy,
    ExponentialBackoffStrategy,
    strategy_from_config
)
from .retry_policy import RetryPolicy

__all__ = [
    'RetryStrategy',
    'NoDelayStrategy',
    'ExponentialBackoffStrategy',
    'strategy_from_config',
    'RetryPolicy',
]
