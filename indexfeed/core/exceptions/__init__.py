"""Exception handling module."""

from indexfeed.core.exceptions.base import (
    ConfigurationError,
    DataIntegrityError,
    DataValidationError,
    IndexFeedError,
    IneligibleRequestError,
    NetworkError,
    NoDataError,
    ProviderError,
    RetryExhaustedError,
)
from indexfeed.core.exceptions.codes import ErrorCode

__all__ = [
    "IndexFeedError",
    "ConfigurationError",
    "IneligibleRequestError",
    "ProviderError",
    "NetworkError",
    "RetryExhaustedError",
    "DataValidationError",
    "DataIntegrityError",
    "NoDataError",
    "ErrorCode",
]
