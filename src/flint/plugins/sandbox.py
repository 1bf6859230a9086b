"""Isolated execution of plugin scripts.

Each :class:`Sandbox` loads a plugin's scripts as fresh module objects that
are never registered in ``sys.modules``, so nothing a plugin defines is
visible to another plugin or to a later run. Before a script's code runs its
module is seeded with a fixed helper surface:

- ``log.info/warn/error/success(message)`` and ``log.debug(value)``
- ``to_json(value)`` and ``to_toml(value)``

Scripts calling ``sys.exit()`` are treated like scripts raising any other
error.
"""

from __future__ import annotations

import importlib.util
import json
import logging
from enum import Enum
from pathlib import Path
from types import CodeType, ModuleType, SimpleNamespace
from typing import TYPE_CHECKING, Any, Callable

import tomlkit

from flint.plugins.convert import ConversionError, to_bool, to_file_map
from flint.plugins.errors import (
    GenerationFailedError,
    UnreadablePluginError,
    ValidationFailedError,
)
from flint.plugins.projector import project_config

if TYPE_CHECKING:
    from flint.config.schema import ProjectConfig
    from flint.logs import LogStore
    from flint.plugins.manifest import Plugin

logger = logging.getLogger(__name__)

DETAILS_SCRIPT = "details.py"
COMBINED_SCRIPT = "plugin.py"
VALIDATE_SCRIPT = "validate.py"
GENERATE_SCRIPT = "generate.py"

DETAILS_FN = "Details"
VALIDATE_FN = "Validate"
GENERATE_FN = "Generate"

# Failures a plugin script may raise at a call boundary
SCRIPT_ERRORS = (Exception, SystemExit)


class BundleLayout(Enum):
    """Physical layout of a plugin's validate/generate code."""

    COMBINED = "combined"  # plugin.py defines Validate and Generate
    SPLIT = "split"  # validate.py and generate.py define one each

    @property
    def scripts(self) -> tuple[str, ...]:
        if self is BundleLayout.COMBINED:
            return (COMBINED_SCRIPT,)
        return (VALIDATE_SCRIPT, GENERATE_SCRIPT)


def resolve_layout(location: Path) -> BundleLayout | None:
    """Detect the layout of the bundle at ``location``.

    Returns None when neither layout is complete.
    """
    if (location / COMBINED_SCRIPT).is_file():
        return BundleLayout.COMBINED
    if (location / VALIDATE_SCRIPT).is_file() and (location / GENERATE_SCRIPT).is_file():
        return BundleLayout.SPLIT
    return None


def compile_script(path: Path) -> CodeType:
    """Read and compile a script without running it.

    Raises:
        OSError: If the file cannot be read
        SyntaxError: If the file is not valid Python
    """
    source = path.read_text(encoding="utf-8")
    return compile(source, str(path), "exec")


def to_json(value: Any) -> str:
    """Pretty JSON rendering exposed to scripts."""
    return json.dumps(value, indent=2)


def to_toml(value: Any) -> str:
    """TOML rendering exposed to scripts. ``value`` must be a mapping."""
    return tomlkit.dumps(value)


class Sandbox:
    """The set of script modules loaded for one plugin run."""

    def __init__(self, log: LogStore, name: str = "flint_plugin") -> None:
        self.log = log
        self.name = name
        self.modules: list[ModuleType] = []

    def helpers(self) -> dict[str, Any]:
        """Globals injected into every script module."""
        return {
            "log": SimpleNamespace(
                info=self.log.info,
                warn=self.log.warn,
                error=self.log.error,
                success=self.log.success,
                debug=self.log.debug,
            ),
            "to_json": to_json,
            "to_toml": to_toml,
        }

    def load(self, path: Path) -> ModuleType:
        """Execute the script at ``path`` as a new module.

        Raises:
            ImportError: If no module spec can be built for ``path``
            Exception: Whatever the script raises while running
        """
        spec = importlib.util.spec_from_file_location(f"{self.name}_{path.stem}", path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot create module spec for {path}")

        module = importlib.util.module_from_spec(spec)
        for key, value in self.helpers().items():
            setattr(module, key, value)
        spec.loader.exec_module(module)

        self.modules.append(module)
        return module

    def function(self, name: str) -> Callable[..., Any]:
        """Look up a callable defined by any loaded script.

        Raises:
            LookupError: If ``name`` is missing or not callable
        """
        for module in reversed(self.modules):
            fn = getattr(module, name, None)
            if callable(fn):
                return fn
        raise LookupError(f"script does not define a {name}() function")


def load_bundle(plugin: Plugin, sandbox: Sandbox) -> BundleLayout:
    """Load a plugin's validate/generate code into ``sandbox``.

    Every script of the layout is read and compiled before any of it runs.

    Raises:
        UnreadablePluginError: If the bundle cannot be read, compiled or
            executed, or does not define both entry points
    """
    layout = resolve_layout(plugin.location)
    if layout is None:
        raise UnreadablePluginError(
            plugin.id,
            f"no {COMBINED_SCRIPT} or {VALIDATE_SCRIPT}/{GENERATE_SCRIPT} in {plugin.location}",
        )

    paths = [plugin.location / script for script in layout.scripts]
    try:
        for path in paths:
            compile_script(path)
    except (OSError, SyntaxError, ValueError) as e:
        raise UnreadablePluginError(plugin.id, str(e)) from e

    try:
        for path in paths:
            sandbox.load(path)
        sandbox.function(VALIDATE_FN)
        sandbox.function(GENERATE_FN)
    except SCRIPT_ERRORS as e:
        raise UnreadablePluginError(plugin.id, _describe(e)) from e

    logger.debug("Loaded plugin '%s' (%s layout)", plugin.id, layout.value)
    return layout


def _describe(error: BaseException) -> str:
    if isinstance(error, SystemExit):
        return f"script exited with status {error.code}"
    return str(error)


def run_plugin(plugin: Plugin, config: ProjectConfig, log: LogStore) -> dict[str, str]:
    """Run a plugin's validate/generate contract against ``config``.

    Returns:
        Mapping of relative file path to file contents

    Raises:
        MissingPluginConfigError: If ``config`` has no section for the plugin
        UnreadablePluginError: If the bundle cannot be loaded
        ValidationFailedError: If ``Validate`` fails or returns False
        GenerationFailedError: If ``Generate`` fails or returns a bad shape
    """
    view = project_config(config, plugin.id)

    sandbox = Sandbox(log, name=f"flint_plugin_{plugin.id}")
    load_bundle(plugin, sandbox)

    try:
        valid = to_bool(sandbox.function(VALIDATE_FN)(view))
    except ConversionError as e:
        raise ValidationFailedError(plugin.id, str(e)) from e
    except SCRIPT_ERRORS as e:
        raise ValidationFailedError(plugin.id, f"{type(e).__name__}: {_describe(e)}") from e

    if not valid:
        raise ValidationFailedError(plugin.id)

    try:
        return to_file_map(sandbox.function(GENERATE_FN)(view))
    except ConversionError as e:
        raise GenerationFailedError(plugin.id, str(e)) from e
    except SCRIPT_ERRORS as e:
        raise GenerationFailedError(plugin.id, f"{type(e).__name__}: {_describe(e)}") from e
