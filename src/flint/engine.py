"""Concurrent generation across every active plugin.

One task per selected plugin is submitted to a fixed-size thread pool. A task
runs the plugin's validate/generate contract, writes the returned files and
reports exactly one terminal log entry. Failures stay inside their task.

There is no cancellation: once submitted, a task runs until its script
returns. Plugins writing the same path race and the last write wins.
Generated paths must stay inside the output directory; absolute paths and
``..`` escapes fail the task before any of its files are written.
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from flint.config.schema import ProjectConfig
from flint.logs import LogStore
from flint.plugins.errors import PluginError, WriteFailedError
from flint.plugins.manifest import Plugin
from flint.plugins.registry import PluginRegistry
from flint.plugins.sandbox import run_plugin

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 16


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one plugin's task."""

    plugin_id: str
    files: dict[str, str] = field(default_factory=dict)
    error: Optional[PluginError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class GenerationTask:
    """One plugin run against the shared, read-only project config."""

    plugin: Plugin
    config: ProjectConfig
    output_dir: Path

    def execute(self, log: LogStore) -> GenerationOutcome:
        """Run the plugin and apply its files. Never raises :class:`PluginError`."""
        plugin_id = self.plugin.id
        try:
            files = run_plugin(self.plugin, self.config, log)
            self._write(files)
        except PluginError as e:
            log.error(str(e))
            return GenerationOutcome(plugin_id=plugin_id, error=e)

        log.success(f"Generated {plugin_id} config successfully")
        return GenerationOutcome(plugin_id=plugin_id, files=files)

    def _write(self, files: dict[str, str]) -> None:
        # Check and encode everything first so a bad entry writes nothing
        root = self.output_dir.resolve()
        pending: list[tuple[str, Path, bytes]] = []
        for relative, contents in files.items():
            target = self.output_dir / relative
            try:
                inside = target.resolve().is_relative_to(root)
                data = contents.encode("utf-8")
            except (OSError, ValueError) as e:
                raise WriteFailedError(self.plugin.id, relative, str(e)) from e
            if Path(relative).is_absolute() or not inside:
                raise WriteFailedError(
                    self.plugin.id, relative, "path is outside the output directory"
                )
            pending.append((relative, target, data))

        for relative, target, data in pending:
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(data)
            except (OSError, ValueError) as e:
                raise WriteFailedError(self.plugin.id, relative, str(e)) from e
            logger.debug("Plugin '%s' wrote %s", self.plugin.id, target)


@dataclass
class GenerationRun:
    """Handle on a submitted run.

    Submission does not block; callers may wait on the run, consume outcomes
    as they complete, or just poll the shared log.
    """

    plugins: list[Plugin]
    unknown_ids: list[str]
    futures: list[concurrent.futures.Future[GenerationOutcome]]

    def done(self) -> bool:
        return all(future.done() for future in self.futures)

    def wait(self, timeout: Optional[float] = None) -> list[GenerationOutcome]:
        """Block until every task finishes and return outcomes in plugin order.

        Raises:
            TimeoutError: If ``timeout`` elapses first
        """
        _, pending = concurrent.futures.wait(self.futures, timeout=timeout)
        if pending:
            raise TimeoutError(f"{len(pending)} plugin task(s) still running")
        return [future.result() for future in self.futures]

    def as_completed(self, timeout: Optional[float] = None) -> Iterator[GenerationOutcome]:
        """Yield outcomes in completion order."""
        for future in concurrent.futures.as_completed(self.futures, timeout=timeout):
            yield future.result()


class GenerationEngine:
    """Fans plugin tasks out over a bounded worker pool."""

    def __init__(
        self,
        registry: PluginRegistry,
        log: LogStore,
        max_workers: int = DEFAULT_MAX_WORKERS,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.log = log
        self.max_workers = max_workers
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self._pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="flint-plugin",
        )

    def select(self, config: ProjectConfig) -> list[Plugin]:
        """Plugins activated by a section in ``config``."""
        return self.registry.select(config.plugin_ids)

    def generate(self, config: ProjectConfig) -> GenerationRun:
        """Submit one task per active plugin and return immediately."""
        plugins = self.select(config)
        unknown = self.registry.unknown_ids(config.plugin_ids)
        if unknown:
            logger.debug("No installed plugin for config sections: %s", ", ".join(unknown))

        futures = []
        for plugin in plugins:
            task = GenerationTask(plugin=plugin, config=config, output_dir=self.output_dir)
            futures.append(self._pool.submit(task.execute, self.log))

        logger.info("Submitted %d plugin task(s)", len(futures))
        return GenerationRun(plugins=plugins, unknown_ids=unknown, futures=futures)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> GenerationEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)
