"""Terminal rendering of a language report."""

import logging
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from gh_langs.domain.repository import Report

logger = logging.getLogger(__name__)


def format_bytes(value: int) -> str:
    """Format a byte count with thousands separators, e.g. 1234567 -> "1,234,567"."""
    return f"{value:,}"


def build_table(report: Report) -> Table:
    """Build the language table, including the trailing total row."""
    table = Table(box=box.ASCII, show_footer=True)
    table.add_column("Language", footer="Total")
    table.add_column("Bytes", justify="right", footer=format_bytes(report.total))

    for row in report.rows:
        table.add_row(row.language, format_bytes(row.bytes))
    return table


def summary_lines(report: Report) -> List[str]:
    """Lines printed after the table."""
    lines = [f"https://github.com/{report.account} has {report.repository_count} repositories"]
    if report.cutoff is not None:
        lines.append(f"Repositories updated since {report.cutoff.date().isoformat()}")
    return lines


def render_report(report: Report, console: Optional[Console] = None, error_console: Optional[Console] = None):
    """
    Print a report to the terminal.

    Args:
        report: Report to print
        console: Console for the table and summary. Defaults to stdout.
        error_console: Console for failure warnings. Defaults to stderr.
    """
    console = console or Console()
    error_console = error_console or Console(stderr=True)

    console.print(build_table(report))
    for line in summary_lines(report):
        console.print(line, highlight=False, soft_wrap=True)

    if report.failures:
        error_console.print(
            f"Warning: {len(report.failures)} repositories were skipped:",
            style="yellow",
            highlight=False,
        )
        for failure in report.failures:
            error_console.print(f"  {failure.full_name}: {failure.message}", style="yellow", highlight=False, markup=False, soft_wrap=True)
