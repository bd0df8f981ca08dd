"""Standardized error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # 请求相关错误
    INELIGIBLE_REQUEST = "INELIGIBLE_REQUEST"

    # 提供商相关错误
    PROVIDER_ERROR = "PROVIDER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"

    # 数据相关错误
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATA_INTEGRITY_ERROR = "DATA_INTEGRITY_ERROR"
    NO_DATA = "NO_DATA"


__all__ = ["ErrorCode"]
