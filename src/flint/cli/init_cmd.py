"""Initialize command - write a starter flint.toml."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from flint.config.loader import DEFAULT_CONFIG_PATH, create_default

console = Console()


def init_command(config_path: str | None = None, force: bool = False) -> None:
    """Create flint.toml in the current directory.

    Args:
        config_path: Where to write the config (default: ./flint.toml)
        force: Overwrite existing config if present
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        console.print("Use [bold]--force[/bold] to overwrite.")
        raise typer.Exit(0)

    create_default(path)

    console.print(
        Panel.fit(
            f"[bold green]Created {path}[/bold green]\n"
            "Add a [bold]\\[common][/bold] table for shared settings and one table per plugin id.",
            border_style="green",
        )
    )
    console.print("\nNext steps:")
    console.print("  1. List installed plugins: [bold]flint plugins list[/bold]")
    console.print("  2. Add a section for each plugin you want to enable")
    console.print("  3. Generate configs: [bold]flint generate[/bold]")
