"""
Configuration management for sclipt.

Uses XDG base directories:
- Config: ~/.config/sclipt/config.toml
- Data: ~/.sclipt/ (snippets.json lives here)
"""

from pathlib import Path
from typing import Any
import os

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / ".sclipt"

SNIPPET_FILE = "snippets.json"
DEFAULT_SENTINEL = "END"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/sclipt)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "sclipt"


def get_sclipt_home() -> Path:
    """Get the sclipt data directory (~/.sclipt or SCLIPT_HOME)."""
    if env_home := os.environ.get("SCLIPT_HOME"):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "storage": {
            "path": str(get_sclipt_home() / SNIPPET_FILE),
        },
        "input": {
            "sentinel": DEFAULT_SENTINEL,
        },
        "display": {
            "color": True,
        },
        "logging": {
            "level": "WARNING",
        },
    }


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    Returns default config if file doesn't exist. Values from the file
    override the defaults key by key within each section.
    """
    config = get_default_config()
    config_path = get_config_path()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        user_config = tomli.load(f)

    for section, values in user_config.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    validate_config(config)
    return config


# Expected type of every known key, by section
CONFIG_TYPES: dict[str, dict[str, type]] = {
    "storage": {"path": str},
    "input": {"sentinel": str},
    "display": {"color": bool},
    "logging": {"level": str},
}


def validate_config(config: dict[str, Any]) -> None:
    """Raise ValueError if a known section or key has the wrong type."""
    for section, keys in CONFIG_TYPES.items():
        values = config.get(section)
        if not isinstance(values, dict):
            raise ValueError(f"[{section}] must be a table")
        for key, expected in keys.items():
            value = values.get(key)
            if not isinstance(value, expected):
                raise ValueError(
                    f"{section}.{key} must be a {expected.__name__}, got {value!r}"
                )

    if not config["input"]["sentinel"].strip():
        raise ValueError("input.sentinel must not be empty")


def get_storage_path(config: dict[str, Any], override: str | None = None) -> Path:
    """
    Resolve where snippets are stored.

    Precedence: explicit override, SCLIPT_FILE, [storage] path, SCLIPT_HOME.
    """
    if override:
        return Path(override).expanduser()
    if env_file := os.environ.get("SCLIPT_FILE"):
        return Path(env_file).expanduser()
    if configured := config.get("storage", {}).get("path"):
        return Path(configured).expanduser()
    return get_sclipt_home() / SNIPPET_FILE
