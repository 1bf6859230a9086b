"""Resolution of the installed plugins directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import typer

logger = logging.getLogger(__name__)

APP_NAME = "flint"
PLUGINS_DIR_ENV = "FLINT_PLUGINS_DIR"
PLUGIN_CATEGORIES = ("lint", "test")


class PluginsDirError(Exception):
    """The plugins directory could not be located or created."""


def plugins_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """Return the plugins root, creating it and its category folders.

    Resolution order: explicit ``override``, the ``FLINT_PLUGINS_DIR``
    environment variable (development checkouts), then the per-user
    application data directory.

    Raises:
        PluginsDirError: If the directory cannot be created
    """
    if override is None:
        override = os.environ.get(PLUGINS_DIR_ENV) or None

    if override is not None:
        root = Path(override).expanduser()
    else:
        root = Path(typer.get_app_dir(APP_NAME)) / "plugins"

    try:
        for category in PLUGIN_CATEGORIES:
            (root / category).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PluginsDirError(f"Failed to create plugins directory {root}: {e}") from e

    logger.debug("Using plugins directory %s", root)
    return root


def lint_plugins_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """Return the ``lint`` subtree consulted by generation."""
    return plugins_dir(override) / "lint"
