"""Resilience patterns."""

from indexfeed.core.patterns.retry import FixedDelayRetry, RetryConfig, RetryState

__all__ = ["FixedDelayRetry", "RetryConfig", "RetryState"]
