"""配置管理模块 - 处理indexfeed的配置"""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from indexfeed.core.exceptions import ConfigurationError

YAHOO_FINANCE_API_URL = "https://query1.finance.yahoo.com/v8/finance"


@dataclass
class ProviderConfig:
    """提供商配置"""

    base_url: str = YAHOO_FINANCE_API_URL
    timeout: float = 30.0
    max_retries: int = 10
    retry_delay: float = 2.0
    user_agent: str = "indexfeed/0.1.0"

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty", "base_url")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive", "timeout")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must be non-negative", "max_retries")
        if self.retry_delay < 0:
            raise ConfigurationError("retry_delay must be non-negative", "retry_delay")


@dataclass
class HistoryConfig:
    """历史数据配置"""

    daily_precise_end_time: bool = False


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class IndexFeedConfig:
    """indexfeed主配置"""

    providers: ProviderConfig = field(default_factory=ProviderConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "IndexFeedConfig":
        """从字典创建配置"""
        try:
            provider_config = ProviderConfig(**config_dict.get("providers", {}))
            history_config = HistoryConfig(**config_dict.get("history", {}))
            logging_config = LoggingConfig(**config_dict.get("logging", {}))
        except TypeError as exc:
            raise ConfigurationError(f"Unknown configuration key: {exc}") from exc

        return cls(providers=provider_config, history=history_config, logging=logging_config)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "providers": asdict(self.providers),
            "history": asdict(self.history),
            "logging": {key: value for key, value in asdict(self.logging).items() if value is not None},
        }


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Path | None = None):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用默认路径
        """
        self.config_path = config_path or Path.home() / ".indexfeed" / "config.toml"
        self.config = self._load_config()

    def _load_config(self) -> IndexFeedConfig:
        """加载配置"""
        if not self.config_path.exists():
            return IndexFeedConfig()

        try:
            with open(self.config_path, "rb") as f:
                config_dict = tomllib.load(f)
            return IndexFeedConfig.from_dict(config_dict)
        except (OSError, tomllib.TOMLDecodeError, ConfigurationError) as e:
            # 如果配置文件有问题，使用默认配置
            logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return IndexFeedConfig()

    def get_config(self) -> IndexFeedConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = self.config.to_dict()

        def deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
            """深度更新字典"""
            for k, v in u.items():
                if isinstance(v, dict):
                    d[k] = deep_update(d.get(k, {}), v)
                else:
                    d[k] = v
            return d

        deep_update(config_dict, updates)
        self.config = IndexFeedConfig.from_dict(config_dict)

    def save_config(self) -> None:
        """保存配置到文件"""
        import tomli_w

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "wb") as f:
            tomli_w.dump(self.config.to_dict(), f)


def get_default_config() -> IndexFeedConfig:
    """获取默认配置"""
    return IndexFeedConfig()


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_config_from_env() -> dict[str, Any]:
    """从环境变量加载配置"""
    config: dict[str, Any] = {}

    # 提供商配置
    provider_config: dict[str, Any] = {}
    base_url = os.getenv("INDEXFEED_PROVIDER_BASE_URL")
    if base_url is not None:
        provider_config["base_url"] = base_url
    timeout = os.getenv("INDEXFEED_PROVIDER_TIMEOUT")
    if timeout is not None:
        provider_config["timeout"] = float(timeout)
    max_retries = os.getenv("INDEXFEED_PROVIDER_MAX_RETRIES")
    if max_retries is not None:
        provider_config["max_retries"] = int(max_retries)
    retry_delay = os.getenv("INDEXFEED_PROVIDER_RETRY_DELAY")
    if retry_delay is not None:
        provider_config["retry_delay"] = float(retry_delay)

    if provider_config:
        config["providers"] = provider_config

    precise = os.getenv("INDEXFEED_DAILY_PRECISE_END_TIME")
    if precise is not None:
        config["history"] = {"daily_precise_end_time": _env_flag(precise)}

    # 日志配置
    logging_config: dict[str, Any] = {}
    logging_level = os.getenv("INDEXFEED_LOGGING_LEVEL")
    if logging_level is not None:
        logging_config["level"] = logging_level
    logging_file = os.getenv("INDEXFEED_LOGGING_FILE")
    if logging_file is not None:
        logging_config["file"] = logging_file

    if logging_config:
        config["logging"] = logging_config

    return config
