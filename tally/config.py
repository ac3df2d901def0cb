"""Configuration file management for tally."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from tally.store.schema import get_db_path

DEFAULT_CONFIG: dict[str, Any] = {
    "currency_symbol": "$",
    "log_level": "WARNING",
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "tally" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    A missing config file is not an error; the defaults are returned.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = dict(DEFAULT_CONFIG)
    if config_path.exists():
        with open(config_path, "rb") as f:
            config.update(tomllib.load(f))
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def resolve_db_path(config: dict[str, Any]) -> Path:
    """Pick the database path: TALLY_DB, then the config's db_path, then the XDG default."""
    if not os.environ.get("TALLY_DB") and config.get("db_path"):
        return Path(config["db_path"]).expanduser()
    return get_db_path()
