"""Rich rendering of the shared log."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from flint.logs import LogEntry, LogKind

STYLES = {
    LogKind.INFO: "blue",
    LogKind.SUCCESS: "green",
    LogKind.ERROR: "red",
    LogKind.WARN: "yellow",
    LogKind.DEBUG: "white",
}


def render_entry(entry: LogEntry) -> Text:
    """Format an entry as ``[kind]: message`` in its kind's colour."""
    text = Text(f"[{entry.kind.value}]: ", style=STYLES[entry.kind])
    if entry.kind == LogKind.DEBUG:
        # Multi-line JSON starts on its own line
        text.append("\n")
    text.append(entry.message, style=STYLES[entry.kind])
    return text


def print_entries(console: Console, entries: list[LogEntry]) -> None:
    for entry in entries:
        console.print(render_entry(entry))
