"""Configuration loading and validation."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional, Union

import tomlkit
from pydantic import ValidationError

from flint.config.schema import FlintSection, ProjectConfig

DEFAULT_CONFIG_PATH = Path("flint.toml")


class ConfigError(Exception):
    """Configuration loading or validation error."""


def load_config(path: Optional[Path] = None) -> ProjectConfig:
    """Load and validate a project's flint.toml.

    Args:
        path: Path to config file. If None, uses ./flint.toml.

    Returns:
        Validated configuration object

    Raises:
        ConfigError: If the file is missing or invalid
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    if not path.exists():
        raise ConfigError(f"No config found at {path}. Run 'flint init' first.")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)

        return ProjectConfig.from_document(data)

    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def save_config(config: ProjectConfig, path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save
        path: Destination path (string or Path object). If None, uses ./flint.toml.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    elif isinstance(path, str):
        path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomlkit.dumps(config.to_document()))


def create_default(path: Optional[Union[str, Path]] = None) -> ProjectConfig:
    """Write a fresh config with only the ``[flint]`` and ``[common]`` tables."""
    config = ProjectConfig(flint=FlintSection(version=1, plugins_branch="main"))
    save_config(config, path)
    return config
