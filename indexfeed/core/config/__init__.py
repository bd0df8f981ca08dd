"""Configuration management module."""

from indexfeed.core.config.settings import (
    YAHOO_FINANCE_API_URL,
    ConfigManager,
    HistoryConfig,
    IndexFeedConfig,
    LoggingConfig,
    ProviderConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "YAHOO_FINANCE_API_URL",
    "ConfigManager",
    "IndexFeedConfig",
    "HistoryConfig",
    "LoggingConfig",
    "ProviderConfig",
    "get_default_config",
    "load_config_from_env",
]
