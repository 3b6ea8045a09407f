import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from symbol_cli.shared.network import RetryConfig, TimeoutConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def resolve_storage_dir(storage_dir: str | Path | None = None) -> Path:
    if storage_dir:
        return Path(storage_dir).expanduser()

    env_dir = os.getenv("SYMBOL_CLI_HOME")
    if env_dir:
        return Path(env_dir).expanduser()

    return Path.home() / ".config" / "symbol-cli"


@dataclass
class CliConfig:
    timeout_config: TimeoutConfig | None = None
    retry_config: RetryConfig | None = None
    hash_lock_timeout_seconds: int = 120
    hash_lock_poll_interval_seconds: int = 5

    def __post_init__(self):
        if self.timeout_config is None:
            self.timeout_config = TimeoutConfig()
        if self.retry_config is None:
            self.retry_config = RetryConfig()

    @classmethod
    def load(cls, storage_dir: str | Path | None = None) -> "CliConfig":
        config_file = resolve_storage_dir(storage_dir) / CONFIG_FILENAME
        if not config_file.exists():
            return cls()

        try:
            with open(config_file, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
            return cls()

        config = cls()
        timeout_cfg = data.get("timeout", {})
        if timeout_cfg:
            config.timeout_config = TimeoutConfig(
                connect_timeout=timeout_cfg.get("connect_timeout", 5.0),
                read_timeout=timeout_cfg.get("read_timeout", 15.0),
                operation_timeout=timeout_cfg.get("operation_timeout", 30.0),
            )
        retry_cfg = data.get("retry", {})
        if retry_cfg:
            config.retry_config = RetryConfig(
                max_retries=retry_cfg.get("max_retries", 3),
                base_delay=retry_cfg.get("base_delay", 1.0),
                max_delay=retry_cfg.get("max_delay", 30.0),
            )
        hash_lock_cfg = data.get("hash_lock", {})
        if hash_lock_cfg:
            config.hash_lock_timeout_seconds = hash_lock_cfg.get(
                "timeout_seconds", config.hash_lock_timeout_seconds
            )
            config.hash_lock_poll_interval_seconds = hash_lock_cfg.get(
                "poll_interval_seconds", config.hash_lock_poll_interval_seconds
            )
        return config

    def save(self, storage_dir: str | Path | None = None) -> Path:
        directory = resolve_storage_dir(storage_dir)
        directory.mkdir(parents=True, exist_ok=True)
        timeout_cfg = self.timeout_config or TimeoutConfig()
        retry_cfg = self.retry_config or RetryConfig()
        data = {
            "timeout": {
                "connect_timeout": timeout_cfg.connect_timeout,
                "read_timeout": timeout_cfg.read_timeout,
                "operation_timeout": timeout_cfg.operation_timeout,
            },
            "retry": {
                "max_retries": retry_cfg.max_retries,
                "base_delay": retry_cfg.base_delay,
                "max_delay": retry_cfg.max_delay,
            },
            "hash_lock": {
                "timeout_seconds": self.hash_lock_timeout_seconds,
                "poll_interval_seconds": self.hash_lock_poll_interval_seconds,
            },
        }
        config_file = directory / CONFIG_FILENAME
        with open(config_file, "w") as f:
            json.dump(data, f, indent=2)
        return config_file
