"""Main CLI application using Typer."""

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler

from flint import __version__

app = typer.Typer(
    name="flint",
    help="Flint - generate tooling config files from flint.toml using plugins",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def version():
    """Show flint version."""
    console.print(f"flint version {__version__}")


@app.command()
def init(
    config_path: str = typer.Option(
        None, "--config", "-c", help="Path to config file (default: ./flint.toml)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
):
    """Create a starter flint.toml."""
    from flint.cli.init_cmd import init_command

    init_command(config_path=config_path, force=force)


@app.command()
def generate(
    config_path: str = typer.Option(
        None, "--config", "-c", help="Path to config file (default: ./flint.toml)"
    ),
    plugins_dir: str = typer.Option(
        None, "--plugins-dir", help="Plugins root (default: $FLINT_PLUGINS_DIR or app data dir)"
    ),
    workers: int = typer.Option(16, "--workers", "-w", min=1, help="Plugin worker pool size"),
    output_dir: str = typer.Option(
        None, "--output", "-o", help="Directory generated files are written to (default: cwd)"
    ),
):
    """Run every configured plugin and write the files they generate."""
    from flint.cli.generate_cmd import generate_command

    generate_command(
        config_path=config_path,
        plugins_dir=plugins_dir,
        workers=workers,
        output_dir=output_dir,
    )


# Plugin commands
plugins_app = typer.Typer(help="Inspect installed plugins")
app.add_typer(plugins_app, name="plugins")


@plugins_app.command("list")
def plugins_list(
    plugins_dir: str = typer.Option(None, "--plugins-dir", help="Plugins root"),
):
    """List all installed lint plugins."""
    from flint.cli.plugin_cmd import list_plugins

    list_plugins(plugins_dir=plugins_dir)


@plugins_app.command("info")
def plugins_info(
    plugin_id: str = typer.Argument(..., help="Plugin id"),
    plugins_dir: str = typer.Option(None, "--plugins-dir", help="Plugins root"),
):
    """Show detailed information about a plugin."""
    from flint.cli.plugin_cmd import info_plugin

    info_plugin(plugin_id, plugins_dir=plugins_dir)


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
