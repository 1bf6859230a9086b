"""Plugin system for Flint.

Plugins are directories of Python scripts under the ``lint`` plugins folder.
They are discovered by :class:`PluginRegistry` and executed one sandbox per
run by :func:`run_plugin`.
"""

from flint.plugins.convert import ConversionError
from flint.plugins.errors import (
    GenerationFailedError,
    MissingPluginConfigError,
    PluginError,
    UnreadablePluginError,
    ValidationFailedError,
    WriteFailedError,
)
from flint.plugins.manifest import Plugin, PluginDescriptor
from flint.plugins.projector import project_config
from flint.plugins.registry import DiscoveryError, PluginRegistry
from flint.plugins.sandbox import BundleLayout, Sandbox, resolve_layout, run_plugin

__all__ = [
    "BundleLayout",
    "ConversionError",
    "DiscoveryError",
    "GenerationFailedError",
    "MissingPluginConfigError",
    "Plugin",
    "PluginDescriptor",
    "PluginError",
    "PluginRegistry",
    "Sandbox",
    "UnreadablePluginError",
    "ValidationFailedError",
    "WriteFailedError",
    "project_config",
    "resolve_layout",
    "run_plugin",
]
