"""indexfeed核心异常类."""

from typing import Any

from indexfeed.core.exceptions.codes import ErrorCode


class IndexFeedError(Exception):
    """indexfeed基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }


class ConfigurationError(IndexFeedError):
    """配置异常."""

    def __init__(self, message: str, field_name: str | None = None, details: dict[str, Any] | None = None):
        super_details = details or {}
        if field_name:
            super_details["field"] = field_name
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, super_details)


class IneligibleRequestError(IndexFeedError):
    """请求不满足历史数据提供条件."""

    def __init__(self, message: str, reason: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["reason"] = reason
        super().__init__(message, ErrorCode.INELIGIBLE_REQUEST.value, super_details)
        self.reason = reason


class ProviderError(IndexFeedError):
    """数据提供商相关异常."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = ErrorCode.PROVIDER_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class NetworkError(ProviderError):
    """网络异常."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, provider_name, ErrorCode.NETWORK_ERROR.value, super_details)
        self.status_code = status_code


class RetryExhaustedError(IndexFeedError):
    """所有重试均失败."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_exception: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["attempts"] = attempts
        if last_exception is not None:
            super_details["last_error"] = str(last_exception)
        super().__init__(message, ErrorCode.RETRY_EXHAUSTED.value, super_details)
        self.attempts = attempts
        self.last_exception = last_exception


class DataValidationError(IndexFeedError):
    """数据验证异常."""

    def __init__(
        self,
        message: str,
        validation_errors: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if validation_errors:
            super_details["validation_errors"] = validation_errors
        super().__init__(message, ErrorCode.VALIDATION_ERROR.value, super_details)
        self.validation_errors = validation_errors or {}


class DataIntegrityError(IndexFeedError):
    """Raised when a fetched bar carries a zero price.

    Bars are produced lazily, so this surfaces while the consumer iterates,
    never while the history request is being set up.
    """

    def __init__(self, message: str, symbol: str, time: Any, values: dict[str, float] | None = None):
        details: dict[str, Any] = {"symbol": symbol, "time": str(time)}
        if values:
            details.update(values)
        super().__init__(message, ErrorCode.DATA_INTEGRITY_ERROR.value, details)
        self.symbol = symbol
        self.time = time


class NoDataError(IndexFeedError):
    """没有任何请求产生数据."""

    def __init__(self, message: str, symbols: list[str] | None = None):
        details: dict[str, Any] = {}
        if symbols:
            details["symbols"] = symbols
        super().__init__(message, ErrorCode.NO_DATA.value, details)
