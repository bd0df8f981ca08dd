"""Market-related enums and types."""

from enum import Enum


class SecurityType(str, Enum):
    """证券类型枚举."""

    EQUITY = "equity"
    INDEX = "index"
    OPTION = "option"
    INDEX_OPTION = "index_option"
    FUTURE = "future"
    FOREX = "forex"
    CRYPTO = "crypto"
    CFD = "cfd"


class Resolution(str, Enum):
    """数据分辨率枚举."""

    TICK = "tick"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAILY = "daily"


class TickType(str, Enum):
    """数据类型枚举."""

    TRADE = "trade"
    QUOTE = "quote"
    OPEN_INTEREST = "open_interest"
