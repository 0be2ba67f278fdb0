"""Ordering of aggregated language totals for presentation."""

from datetime import datetime
from typing import Iterable, List, Optional

from gh_langs.domain.repository import LanguageAggregate, Report, RepositoryFailure, ReportRow


def sorted_rows(aggregate: LanguageAggregate) -> List[ReportRow]:
    """Rows by byte count descending, equal counts by language name ascending."""
    items = sorted(aggregate.items(), key=lambda kv: (-kv[1], kv[0]))
    return [ReportRow(language=language, bytes=size) for language, size in items]


def build_report(
    account: str,
    aggregate: LanguageAggregate,
    repository_count: int,
    cutoff: Optional[datetime] = None,
    failures: Iterable[RepositoryFailure] = (),
) -> Report:
    """
    Assemble the report handed to the renderer.

    Args:
        account: Account login the report is about
        aggregate: Total byte count per language
        repository_count: Number of repositories that were aggregated
        cutoff: Recency cutoff, or None when every repository was counted
        failures: Repositories excluded because their languages could not be fetched

    Returns:
        Report with rows sorted by byte count and the grand total
    """
    rows = sorted_rows(aggregate)
    return Report(
        account=account,
        rows=tuple(rows),
        total=sum(row.bytes for row in rows),
        repository_count=repository_count,
        cutoff=cutoff,
        failures=tuple(failures),
    )
