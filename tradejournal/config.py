"""Configuration for the trading journal.

Settings live in ``~/.config/tradejournal/config.toml``. Every key is
optional; missing values fall back to ``DEFAULTS``.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
CONFIG_PATH = CONFIG_DIR / "config.toml"
SESSION_PATH = CONFIG_DIR / "session.json"
DEFAULT_DB_PATH = CONFIG_DIR / "trades.db"

DB_PATH_ENV = "TRADEJOURNAL_DB"

DEFAULTS: dict[str, Any] = {
    "database": {
        "path": str(DEFAULT_DB_PATH),
    },
    "analytics": {
        "risk_free_rate": 0.0,
        "mistake_trend_days": 30,
        "recent_trades_limit": 50,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: Path to the TOML file. Uses the default location if
            not provided.

    Returns:
        Configuration dictionary.
    """
    path = config_path or CONFIG_PATH
    config = copy.deepcopy(DEFAULTS)

    if path.exists():
        try:
            config = _merge(config, toml.load(path))
        except toml.TomlDecodeError as e:
            logger.warning("Ignoring invalid config file %s: %s", path, e)

    env_db = os.environ.get(DB_PATH_ENV)
    if env_db:
        config["database"]["path"] = env_db

    return config


def get_db_path(config: dict) -> Path:
    """Database path from config, with ``~`` expanded."""
    return Path(config["database"]["path"]).expanduser()


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    path = config_path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        toml.dump(DEFAULTS, f)

    return path
