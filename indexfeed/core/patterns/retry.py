"""重试机制实现：固定间隔重试."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from loguru import logger

from indexfeed.core.exceptions import DataValidationError, ProviderError, RetryExhaustedError

T = TypeVar("T")


class RetryState(Enum):
    """重试状态."""

    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class RetryConfig:
    """重试配置."""

    max_retries: int = 10  # 首次尝试之后的最大重试次数
    delay: float = 2.0  # 每次重试前的固定等待时间(秒)
    retry_on_exceptions: list[type] = field(default_factory=lambda: [ProviderError, DataValidationError])

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.delay < 0:
            raise ValueError("delay must be non-negative")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


class FixedDelayRetry:
    """固定间隔重试实现.

    Attempts run strictly one after another on the calling thread; the delay
    before every attempt after the first blocks through ``sleep``.
    """

    def __init__(self, config: RetryConfig | None = None, sleep: Callable[[float], None] = time.sleep) -> None:
        self.config = config or RetryConfig()
        self._sleep = sleep
        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception: Exception | None = None

    def execute(self, func: Callable[..., T], *args: Any, description: str = "operation", **kwargs: Any) -> T:
        """执行函数，应用重试逻辑.

        Args:
            func: 要执行的函数
            *args: 函数参数
            description: 日志中使用的操作描述
            **kwargs: 函数关键字参数

        Returns:
            函数返回结果

        Raises:
            RetryExhaustedError: 所有尝试均失败
            Exception: 不可重试的异常原样抛出
        """
        self.reset()
        self.state = RetryState.RUNNING

        for attempt in range(self.config.max_attempts):
            if attempt > 0:
                self._sleep(self.config.delay)
                self.total_delay += self.config.delay
                logger.info(f"Retry attempt {attempt}/{self.config.max_retries} for {description}.")

            self.attempt_count = attempt + 1
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not any(isinstance(e, exc_type) for exc_type in self.config.retry_on_exceptions):
                    self.state = RetryState.FAILED
                    raise
                self.last_exception = e
                continue

            self.state = RetryState.COMPLETED
            return result

        self.state = RetryState.FAILED
        raise RetryExhaustedError(
            f"{description} failed after {self.attempt_count} attempts",
            attempts=self.attempt_count,
            last_exception=self.last_exception,
        ) from self.last_exception

    def get_stats(self) -> dict[str, Any]:
        """获取重试统计信息."""
        return {
            "attempts": self.attempt_count,
            "max_attempts": self.config.max_attempts,
            "total_delay": self.total_delay,
            "state": self.state.value,
            "last_exception": str(self.last_exception) if self.last_exception else None,
        }

    def reset(self) -> None:
        """重置重试状态."""
        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception = None
