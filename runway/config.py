"""Configuration file management for runway."""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {
        "host": "127.0.0.1",
        "port": 3001,
        "initial_income": 5000.0,
        "log_level": "INFO",
    },
    "client": {
        "api_url": "http://localhost:3001",
    },
    "chart": {
        "window": 12,
        "padding": 6,
    },
}


def get_config_path() -> Path:
    """Get the config file path under $XDG_CONFIG_HOME, falling back to ~/.config."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / "runway" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Write DEFAULT_CONFIG to the config file."""
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the config file as written, without defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty when the file doesn't exist.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return {}
    return tomllib.loads(path.read_text())


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write configuration as TOML, readable only by the owner.

    Missing parent directories are created.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(config))
    path.chmod(0o600)


def merge_config(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file yields the defaults. The RUNWAY_API_URL environment
    variable overrides client.api_url.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Complete configuration dictionary.
    """
    settings = merge_config(DEFAULT_CONFIG, load_config(config_path))

    api_url = os.environ.get("RUNWAY_API_URL")
    if api_url:
        settings["client"]["api_url"] = api_url

    return settings
