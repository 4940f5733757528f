"""
Configuration Manager for the daily tracker.

Central place for runtime constants. Every value can be overridden from
config/runtime.yaml.

Usage:
    from tracker.config_manager import config
    filename = config.TASKS_FILENAME
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from tracker.exceptions import ConfigError
from tracker.paths import CONFIG_DIR

RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"


@dataclass
class SystemConfig:
    """
    Runtime constants.
    """

    # === Storage ===

    # Task list file inside the data dir
    TASKS_FILENAME: str = "tasks.json"

    # Daily metric entries file, keyed by ISO date
    ENTRIES_FILENAME: str = "entries.json"

    # === Logging ===

    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3

    # === Web service ===

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8010

    # === Rule authoring ===

    # Refuse to persist rules that fail validation.
    # Set to false to only log the validation errors.
    REJECT_INVALID_RULES: bool = True


def load_runtime_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load runtime overrides.

    A missing or unreadable file yields no overrides. A file that parses
    but is not a mapping is a ConfigError.
    """
    path = path or RUNTIME_CONFIG_PATH
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError):
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("runtime config must be a mapping of constant names", str(path))
    return data


def get_config(path: Optional[Path] = None) -> SystemConfig:
    """
    Build the config instance.

    Priority: runtime.yaml > defaults
    """
    base = SystemConfig()
    overrides = load_runtime_config(path)

    for key, value in overrides.items():
        if hasattr(base, key):
            setattr(base, key, value)

    return base


config = get_config()
