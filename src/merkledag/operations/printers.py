"""
Human-readable output formatting.

Centralizes all CLI output formatting so commands stay thin.
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .facade import AddResult, ShowResult

_console = Console(soft_wrap=True)
_err_console = Console(stderr=True, soft_wrap=True)


def print_add_summary(result: AddResult, verbose: bool = False) -> None:
    """
    Print the outcome of an add.

    Shows the root digest and, in verbose mode, the build statistics.
    """
    stats = result.stats
    _console.print(f"Added {result.source}", highlight=False, markup=False)
    _console.print(f"Root: {result.root.hex()}", highlight=False, markup=False)
    _console.print(
        f"Objects: {stats.objects_written} new, {stats.objects_deduplicated} deduplicated",
        highlight=False,
        markup=False,
    )

    if verbose:
        table = Table(title="Build statistics")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="yellow", justify="right")
        table.add_row("Files", str(stats.files))
        table.add_row("Directories", str(stats.directories))
        table.add_row("Chunks", str(stats.chunks))
        table.add_row("Bytes written", _format_bytes(stats.bytes_written))
        table.add_row("Dedup ratio", f"{stats.dedup_ratio:.1%}")
        _console.print(table)


def print_object(result: ShowResult) -> None:
    """Print one decoded object: its kind, data and links."""
    obj = result.obj
    _console.print(f"Object: {result.digest.hex()}", highlight=False, markup=False)
    _console.print(f"Encoded size: {_format_bytes(result.encoded_size)}", highlight=False, markup=False)

    if obj.is_blob:
        _console.print(f"Kind: blob ({_format_bytes(len(obj.data))} of data)", highlight=False, markup=False)
        return

    _console.print(f"Kind: composite ({len(obj.links)} links)", highlight=False, markup=False)
    table = Table(title="Links")
    table.add_column("Tag", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Hash", style="dim")
    table.add_column("Size", justify="right")
    for tag, link in zip(result.tags, obj.links):
        table.add_row(tag.value.decode("ascii"), escape(link.name) or "-", link.hash.hex(), str(link.size))
    _console.print(table)


def print_error(exc: BaseException) -> None:
    """Report an exception on stderr."""
    _err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False)


def _format_bytes(size: int) -> str:
    """Format byte count in human-readable units."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{size} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
