"""CLI commands for inspecting serialized plugin records."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pluginfo.config.loader import ConfigError, load_config
from pluginfo.errors import IncompleteRecordError, MalformedInputError
from pluginfo.model.record import PluginRecord
from pluginfo.model.traversal import walk_pending_updates

console = Console()


def _load(record_file: str, config_path: str | None) -> PluginRecord | None:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return None

    path = Path(record_file)
    if not path.exists():
        console.print(f"[red]Record file not found: {path}[/red]")
        return None

    try:
        return PluginRecord.parse(path.read_text(encoding="utf-8"), config)
    except IncompleteRecordError as e:
        console.print(f"[red]Incomplete record: {escape(str(e))}[/red]")
    except MalformedInputError as e:
        console.print(f"[red]Malformed record: {escape(str(e))}[/red]")
    return None


def _record_table(record: PluginRecord, title: str) -> Table:
    kind = record.kind
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Name", escape(record.name) or "-")
    table.add_row("Package", escape(record.package_name) or "-")
    table.add_row("Alias", escape(record.alias) or "-")
    table.add_row("Version", str(record.version))
    table.add_row("Version value", str(record.version_value))
    table.add_row("Protocol range", f"{record.low}..{record.high}")
    table.add_row("Type", kind.name if kind else f"unknown ({record.type})")
    table.add_row("Path", escape(record.path) or "-")
    table.add_row("Used", "[green]yes[/green]" if record.is_used else "no")
    table.add_row("Framework version", str(record.framework_version))
    if record.model_extra:
        table.add_row("Other keys", escape(", ".join(sorted(record.model_extra))))
    return table


def show_record(record_file: str, config_path: str | None = None) -> bool:
    """Print a record, each pending update below it and any pending delete."""
    record = _load(record_file, config_path)
    if record is None:
        return False

    for tracked in walk_pending_updates(record):
        title = "Pending update" if tracked.is_pending_update else "Plugin record"
        console.print(_record_table(tracked.record, title))

    pending_delete = record.pending_delete()
    if pending_delete is not None:
        console.print(_record_table(pending_delete, "Pending delete"))
    return True


def validate_record(record_file: str, config_path: str | None = None) -> bool:
    """Report whether a record file loads; returns False if it does not."""
    record = _load(record_file, config_path)
    if record is None:
        return False

    if not record.name:
        console.print("[yellow]Record loads but has no name; lookups will miss it.[/yellow]")
        return False

    console.print(f"[green]OK[/green] {escape(str(record))}")
    return True
