"""Configuration loading for the dashboard.

Settings come from ``.scylla/config.yaml`` (or ``$SCYLLA_CONFIG``, or an
explicit path). Every key is optional:

    database:
      path: c2.db
    dashboard:
      tick_ms: 200
      margin: 1
    logging:
      file: .scylla/logs/dashboard.log
      level: WARNING
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigError

CONFIG_ENV_VAR = "SCYLLA_CONFIG"

DEFAULT_TICK_MS = 200
DEFAULT_MARGIN = 1
DEFAULT_LOG_LEVEL = "WARNING"


def get_config_dir() -> Path:
    """Get the .scylla directory in the working directory."""
    return Path.cwd() / ".scylla"


def get_default_config_path() -> Path:
    """Get the config file path, honouring $SCYLLA_CONFIG."""
    env_override = os.environ.get(CONFIG_ENV_VAR)
    if env_override:
        return Path(env_override)
    return get_config_dir() / "config.yaml"


@dataclass
class DashboardConfig:
    db_path: Path = field(default_factory=lambda: Path("c2.db"))
    tick_ms: int = DEFAULT_TICK_MS
    margin: int = DEFAULT_MARGIN
    log_file: Path = field(default_factory=lambda: get_config_dir() / "logs" / "dashboard.log")
    log_level: str = DEFAULT_LOG_LEVEL
    demo_mode: bool = False

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_ms / 1000.0

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def _int_setting(section: dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def parse_config(data: Optional[dict[str, Any]]) -> DashboardConfig:
    """Build a DashboardConfig from parsed YAML. Unknown keys are ignored."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")

    database = _section(data, "database")
    dashboard = _section(data, "dashboard")
    log_section = _section(data, "logging")

    config = DashboardConfig()
    if "path" in database:
        config.db_path = Path(str(database["path"]))
    config.tick_ms = _int_setting(dashboard, "tick_ms", DEFAULT_TICK_MS, 1)
    config.margin = _int_setting(dashboard, "margin", DEFAULT_MARGIN, 0)
    if "file" in log_section:
        config.log_file = Path(str(log_section["file"]))
    if "level" in log_section:
        config.log_level = str(log_section["level"]).upper()
        if not isinstance(config.log_level_value, int):
            raise ConfigError(f"Unknown log level: {log_section['level']!r}")
    return config


def load_config(config_path: Optional[Path] = None) -> DashboardConfig:
    """Load the dashboard config. A missing file means defaults.

    Raises:
        ConfigError: If the file can't be parsed or holds invalid values.
    """
    if config_path is None:
        config_path = get_default_config_path()
    config_path = Path(config_path)
    if not config_path.exists():
        return DashboardConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_path}: {e}") from e
    return parse_config(data)
