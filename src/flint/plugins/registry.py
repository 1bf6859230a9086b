"""Plugin discovery and the extension index.

Discovers plugin bundles from the ``lint`` plugins directory. Each immediate
subdirectory is a candidate; its ``details.py`` is executed in a throwaway
sandbox and must define ``Details()`` returning the plugin's descriptor.

Broken candidates are reported to the shared log and skipped. The plugin set
and the extension index are each built once per registry and are read-only
afterwards, so any number of threads may query them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Union

from flint.logs import LogStore
from flint.plugins.convert import ConversionError, to_descriptor
from flint.plugins.manifest import Plugin, PluginDescriptor
from flint.plugins.sandbox import DETAILS_FN, DETAILS_SCRIPT, Sandbox, compile_script

logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """A plugin candidate could not be turned into a :class:`Plugin`."""


def read_descriptor(location: Path, log: LogStore) -> PluginDescriptor:
    """Execute ``details.py`` at ``location`` and convert its ``Details()`` result.

    Raises:
        DiscoveryError: With a user-facing message describing the failure
    """
    script = location / DETAILS_SCRIPT
    try:
        compile_script(script)
    except OSError as e:
        raise DiscoveryError(f"Error reading file {script}: {e}") from e
    except (SyntaxError, ValueError) as e:
        raise DiscoveryError(f"Error loading plugin script {script}: {e}") from e

    sandbox = Sandbox(log, name=f"flint_details_{location.name}")
    try:
        sandbox.load(script)
        value = sandbox.function(DETAILS_FN)()
    except SystemExit as e:
        raise DiscoveryError(
            f"Error loading plugin script {script}: script exited with status {e.code}"
        ) from e
    except Exception as e:
        raise DiscoveryError(f"Error loading plugin script {script}: {e}") from e

    try:
        return to_descriptor(value)
    except ConversionError as e:
        raise DiscoveryError(f"Invalid plugin details in {script}: {e}") from e


class PluginRegistry:
    """Memoized set of installed plugins, indexed by file extension."""

    def __init__(self, plugin_dir: Union[str, Path], log: LogStore) -> None:
        self.plugin_dir = Path(plugin_dir).expanduser()
        self.log = log
        self._lock = threading.Lock()
        self._plugins: tuple[Plugin, ...] | None = None
        self._index: Mapping[str, tuple[Plugin, ...]] | None = None

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        """All valid plugins, in descriptor order. Discovered on first access."""
        if self._plugins is None:
            with self._lock:
                if self._plugins is None:
                    self._plugins = self._discover()
        return self._plugins

    @property
    def index(self) -> Mapping[str, tuple[Plugin, ...]]:
        """Read-only mapping of extension to the plugins claiming it."""
        if self._index is None:
            plugins = self.plugins
            with self._lock:
                if self._index is None:
                    self._index = MappingProxyType(_build_index(plugins))
        return self._index

    def _discover(self) -> tuple[Plugin, ...]:
        try:
            entries = sorted(self.plugin_dir.iterdir())
        except OSError as e:
            self.log.error(f"Failed to read plugins directory {self.plugin_dir}: {e}")
            return ()

        found: dict[str, Plugin] = {}
        for entry in entries:
            if entry.name.startswith(("_", ".")) or not entry.is_dir():
                continue

            try:
                descriptor = read_descriptor(entry, self.log)
            except DiscoveryError as e:
                self.log.error(str(e))
                continue

            existing = found.get(descriptor.id)
            if existing is not None:
                self.log.error(
                    f"Duplicate plugin id '{descriptor.id}' in {entry}, "
                    f"already provided by {existing.location}"
                )
                continue

            found[descriptor.id] = Plugin(descriptor=descriptor, location=entry)
            logger.info(
                "Discovered plugin '%s' v%s for %s",
                descriptor.id,
                descriptor.version,
                ", ".join(descriptor.extensions) or "no extensions",
            )

        return tuple(sorted(found.values()))

    def get(self, plugin_id: str) -> Plugin | None:
        """Get a plugin by id."""
        for plugin in self.plugins:
            if plugin.id == plugin_id:
                return plugin
        return None

    def for_extension(self, extension: str) -> tuple[Plugin, ...]:
        """Plugins claiming ``extension``, in descriptor order."""
        return self.index.get(extension, ())

    def extensions(self) -> list[str]:
        """Every indexed extension, sorted."""
        return sorted(self.index)

    def indexed(self) -> tuple[Plugin, ...]:
        """Deduplicated union of every index bucket, in descriptor order."""
        return tuple(sorted({plugin for bucket in self.index.values() for plugin in bucket}))

    def select(self, plugin_ids: Iterable[str]) -> list[Plugin]:
        """Indexed plugins whose id is in ``plugin_ids``."""
        wanted = set(plugin_ids)
        return [plugin for plugin in self.indexed() if plugin.id in wanted]

    def unknown_ids(self, plugin_ids: Iterable[str]) -> list[str]:
        """Ids from ``plugin_ids`` that :meth:`select` would not match."""
        known = {plugin.id for plugin in self.indexed()}
        return [plugin_id for plugin_id in plugin_ids if plugin_id not in known]


def _build_index(plugins: Iterable[Plugin]) -> dict[str, tuple[Plugin, ...]]:
    buckets: dict[str, set[Plugin]] = {}
    for plugin in plugins:
        for extension in plugin.extensions:
            buckets.setdefault(extension, set()).add(plugin)
    return {extension: tuple(sorted(bucket)) for extension, bucket in buckets.items()}
