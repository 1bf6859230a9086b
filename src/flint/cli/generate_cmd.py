"""Generate command - run every active plugin and stream the log."""

from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console

from flint.cli.logs_view import print_entries
from flint.config.loader import ConfigError, load_config
from flint.config.paths import PluginsDirError, lint_plugins_dir
from flint.engine import GenerationEngine
from flint.logs import LogStore
from flint.plugins.registry import PluginRegistry

console = Console()

POLL_INTERVAL = 0.1


def generate_command(
    config_path: str | None = None,
    plugins_dir: str | None = None,
    workers: int = 16,
    output_dir: str | None = None,
) -> None:
    """Generate tool config files from flint.toml.

    Args:
        config_path: Path to flint.toml (default: ./flint.toml)
        plugins_dir: Plugins root override
        workers: Size of the plugin worker pool
        output_dir: Directory generated paths are relative to (default: cwd)
    """
    try:
        config = load_config(Path(config_path) if config_path else None)
        lint_dir = lint_plugins_dir(plugins_dir)
    except (ConfigError, PluginsDirError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    log = LogStore()
    registry = PluginRegistry(plugin_dir=lint_dir, log=log)

    with GenerationEngine(registry, log, max_workers=workers, output_dir=output_dir) as engine:
        run = engine.generate(config)

        if not run.plugins:
            print_entries(console, log.snapshot())
            console.print("[dim]No installed plugins are configured in flint.toml.[/dim]")
            return

        for plugin_id in run.unknown_ids:
            console.print(f"[dim]No installed plugin named '{plugin_id}', skipping.[/dim]")

        rendered = 0
        with console.status(f"Running {len(run.plugins)} plugin(s)..."):
            while not run.done():
                new = log.since(rendered)
                print_entries(console, new)
                rendered += len(new)
                time.sleep(POLL_INTERVAL)
        print_entries(console, log.since(rendered))

        outcomes = run.wait()

    failed = [outcome for outcome in outcomes if not outcome.ok]
    written = sum(len(outcome.files) for outcome in outcomes)
    console.print(
        f"\n[bold]{len(outcomes) - len(failed)}[/bold] plugin(s) succeeded, "
        f"[bold]{len(failed)}[/bold] failed, {written} file(s) written."
    )
    if failed:
        raise typer.Exit(1)
