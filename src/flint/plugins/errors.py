"""Per-plugin failure types.

Every error raised while running one plugin derives from :class:`PluginError`
so the engine can catch it at the task boundary and report it without
affecting sibling plugins.
"""

from __future__ import annotations


class PluginError(Exception):
    """Base class for failures attributable to a single plugin."""

    def __init__(self, plugin_id: str, message: str) -> None:
        super().__init__(message)
        self.plugin_id = plugin_id
        self.message = message

    def __str__(self) -> str:
        return f"{self.plugin_id}: {self.message}"


class MissingPluginConfigError(PluginError):
    """The project config has no section for an activated plugin."""

    def __init__(self, plugin_id: str) -> None:
        super().__init__(plugin_id, f"missing plugin configuration for '{plugin_id}'")


class UnreadablePluginError(PluginError):
    """A plugin's script files are missing, unreadable or fail to compile."""

    def __init__(self, plugin_id: str, detail: str = "") -> None:
        message = "Error reading plugin code"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(plugin_id, message)


class ValidationFailedError(PluginError):
    """``Validate`` rejected the config, raised, or returned a non-boolean."""

    def __init__(self, plugin_id: str, detail: str = "") -> None:
        message = "Plugin config validation failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(plugin_id, message)


class GenerationFailedError(PluginError):
    """``Generate`` raised or returned something other than ``{path: contents}``."""

    def __init__(self, plugin_id: str, detail: str = "") -> None:
        message = "Plugin generation failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(plugin_id, message)


class WriteFailedError(PluginError):
    """A generated file could not be written."""

    def __init__(self, plugin_id: str, path: str, detail: str) -> None:
        super().__init__(plugin_id, f"Failed to write {path}: {detail}")
        self.path = path
