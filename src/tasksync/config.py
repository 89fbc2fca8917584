"""Configuration management for tasksync."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TASKSYNC_HOME = Path(os.environ.get("TASKSYNC_HOME", Path.home() / ".tasksync"))
CONFIG_FILE = TASKSYNC_HOME / "config" / "tasksync.conf"
DATA_DIR = TASKSYNC_HOME / "data"


@dataclass
class Config:
    """tasksync configuration."""

    remote_url: str = ""
    remote_token: str = ""
    remote_timeout: float = 10.0
    database_path: Path = field(default_factory=lambda: DATA_DIR / "tasks.sqlite3")
    # Simulated backend, used when remote_url is empty
    fake_remote_latency: float = 0.0

    @property
    def uses_fake_remote(self) -> bool:
        return not self.remote_url


def _parse_float(key: str, value: str, default: float) -> float:
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"Invalid number for {key.upper()}: {value!r}, using {default}")
        return default
    if parsed < 0:
        logger.warning(f"Negative value for {key.upper()}: {value!r}, using {default}")
        return default
    return parsed


def _strip_value(value: str) -> str:
    # Quoted values may carry an inline comment after the closing quote
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from tasksync.conf."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _strip_value(value.strip())

        match key:
            case "remote_url":
                config.remote_url = value.rstrip("/")
            case "remote_token":
                config.remote_token = value
            case "remote_timeout":
                config.remote_timeout = _parse_float(key, value, config.remote_timeout)
            case "database_path":
                config.database_path = Path(value).expanduser()
            case "fake_remote_latency":
                config.fake_remote_latency = _parse_float(key, value, config.fake_remote_latency)
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
