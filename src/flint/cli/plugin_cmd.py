"""CLI commands for plugin inspection."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from flint.cli.logs_view import print_entries
from flint.config.paths import PluginsDirError, lint_plugins_dir
from flint.logs import LogKind, LogStore
from flint.plugins.sandbox import resolve_layout

console = Console()


def _load_registry(plugins_dir: str | None):
    from flint.plugins.registry import PluginRegistry

    try:
        lint_dir = lint_plugins_dir(plugins_dir)
    except PluginsDirError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    log = LogStore()
    return PluginRegistry(plugin_dir=lint_dir, log=log), log


def list_plugins(plugins_dir: str | None = None) -> None:
    """List all discovered lint plugins."""
    registry, log = _load_registry(plugins_dir)
    plugins = registry.plugins

    print_entries(console, [e for e in log.snapshot() if e.kind == LogKind.ERROR])

    if not plugins:
        console.print("[dim]No plugins found.[/dim]")
        console.print(f"Add plugin directories to {registry.plugin_dir}.")
        return

    table = Table(title="Installed Plugins")
    table.add_column("Id", style="cyan")
    table.add_column("Version")
    table.add_column("Author")
    table.add_column("Extensions", style="green")
    table.add_column("Layout")

    for plugin in plugins:
        layout = resolve_layout(plugin.location)
        table.add_row(
            plugin.id,
            plugin.descriptor.version,
            plugin.descriptor.author or "-",
            ", ".join(plugin.extensions) if plugin.extensions else "-",
            layout.value if layout else "[red]incomplete[/red]",
        )

    console.print(table)


def info_plugin(plugin_id: str, plugins_dir: str | None = None) -> None:
    """Show detailed info about a plugin."""
    registry, _ = _load_registry(plugins_dir)

    plugin = registry.get(plugin_id)
    if not plugin:
        console.print(f"[red]Plugin '{plugin_id}' not found.[/red]")
        raise typer.Exit(1)

    d = plugin.descriptor
    layout = resolve_layout(plugin.location)
    console.print(f"\n[bold cyan]{d.id}[/bold cyan] v{d.version}")
    if d.author:
        console.print(f"  Author: {d.author}")
    if d.category:
        console.print(f"  Category: {d.category}")
    console.print(f"  Extensions: {', '.join(d.extensions) or 'none'}")
    console.print(f"  Location: {plugin.location}")
    console.print(f"  Layout: {layout.value if layout else 'incomplete'}")
