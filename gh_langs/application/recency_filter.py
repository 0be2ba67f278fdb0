"""Restriction of a repository set to recently updated repositories."""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple

from gh_langs.domain.repository import Repository

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


def cutoff_offset(years: float) -> Tuple[int, int, int]:
    """
    Split a fractional number of years into whole (years, months, days).

    The duration is first rounded to whole days using 365-day years, then
    decomposed with 365-day years and 30-day months, e.g. 0.5 -> 182 days
    -> (0, 6, 2).
    """
    total_days = round(years * DAYS_PER_YEAR)
    whole_years, remainder = divmod(total_days, DAYS_PER_YEAR)
    months, days = divmod(remainder, DAYS_PER_MONTH)
    return whole_years, months, days


def subtract_calendar(moment: datetime, years: int, months: int, days: int) -> datetime:
    """
    Move a datetime back by calendar years, months and days.

    Overflowing days roll into the next month (31 March minus one month is
    3 March in a non-leap year) and the time of day is kept.
    """
    month_index = moment.year * 12 + (moment.month - 1) - years * 12 - months
    year, month = divmod(month_index, 12)
    day_offset = moment.day - days - 1
    shifted = date(year, month + 1, 1) + timedelta(days=day_offset)
    return moment.replace(year=shifted.year, month=shifted.month, day=shifted.day)


def compute_cutoff(years: float, now: Optional[datetime] = None) -> datetime:
    """
    Return the instant `years` before `now` (defaults to the current UTC time).

    Windows reaching past the first representable date are clamped to
    `datetime.min` in the timezone of `now`, so every repository is kept.

    Raises:
        ValueError: If `years` is NaN or infinite
    """
    if not math.isfinite(years):
        raise ValueError(f"years must be finite, got {years!r}")
    if now is None:
        now = datetime.now(timezone.utc)
    try:
        return subtract_calendar(now, *cutoff_offset(years))
    except (ValueError, OverflowError):
        logger.info(f"Window of {years} years reaches past {date.min.isoformat()}, keeping every repository")
        return datetime.min.replace(tzinfo=now.tzinfo)


def filter_recent(
    repositories: List[Repository],
    years: float,
    now: Optional[datetime] = None,
) -> Tuple[List[Repository], Optional[datetime]]:
    """
    Keep repositories updated strictly after the cutoff.

    Args:
        repositories: Repositories to filter
        years: Window length in fractional years; 0 disables filtering
        now: Reference instant, defaults to the current UTC time

    Returns:
        Tuple of (kept repositories in input order, cutoff or None when disabled)
    """
    if years == 0:
        return list(repositories), None

    cutoff = compute_cutoff(years, now)
    kept = [repo for repo in repositories if repo.updated_at > cutoff]
    logger.info(f"Kept {len(kept)}/{len(repositories)} repositories updated since {cutoff.isoformat()}")
    return kept, cutoff
