"""Output formatting utilities for the CLI.

The status line is the only thing written to stdout, since the monitoring
scheduler parses it. Everything else is diagnostic and goes to stderr through
a Rich console, gated by the verbosity level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from hbasecheck.core.results import Bucket, TableDetail

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME, stderr=True)


@dataclass
class Out:
    """Diagnostic output on stderr plus the final status line on stdout."""

    verbosity: int = 0

    def enabled(self, level: int) -> bool:
        """Return True if messages at this verbosity level are shown."""
        return self.verbosity >= level

    def vlog(self, level: int, msg: str) -> None:
        """Print a diagnostic message if verbosity is at least `level`."""
        if self.enabled(level):
            console.print(escape(msg))

    def header(self, level: int, title: str) -> None:
        """Print a section header."""
        if self.enabled(level):
            console.print(f"[title]{escape(title)}[/]")

    def kv(self, level: int, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        if not self.enabled(level):
            return
        for k, v in items.items():
            console.print(f"[meta]{escape(k)}[/]: {escape(str(v))}")

    def names(self, level: int, names: Iterable[str]) -> None:
        """Print one name per line."""
        if not self.enabled(level):
            return
        for name in names:
            console.print(f"  {escape(name)}")

    def table_details(
        self, level: int, details: Iterable[TableDetail], title: str = "Tables"
    ) -> None:
        """Render a per-table summary of what was checked."""
        if not self.enabled(level):
            return
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok", no_wrap=True)
        t.add_column("Enabled")
        t.add_column("Columns", style="meta")
        t.add_column("Regions", justify="right")
        t.add_column("Regionservers", style="meta")
        t.add_column("Result")

        for d in details:
            enabled = "" if d.enabled is None else ("yes" if d.enabled else "no")
            regions = "" if d.region_count is None else str(d.region_count)
            if d.unassigned_regions:
                regions += f" [warn]({len(d.unassigned_regions)} unassigned)[/warn]"
            outcome = d.outcome.value if d.outcome else ""
            style = "ok" if d.outcome is Bucket.OK else "err"
            t.add_row(
                escape(d.table),
                enabled,
                escape(",".join(d.column_families)),
                regions,
                escape(",".join(d.regionservers)),
                f"[{style}]{escape(outcome)}[/{style}]",
            )

        console.print(t)

    def status_line(self, line: str) -> None:
        """Write the final status line to stdout, unstyled."""
        typer.echo(line)


out = Out()
