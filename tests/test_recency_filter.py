from __future__ import annotations

import datetime as dt

import pytest

from gh_langs.application.recency_filter import compute_cutoff, cutoff_offset, filter_recent, subtract_calendar
from gh_langs.domain.repository import Repository

NOW = dt.datetime(2026, 10, 17, 9, 30, tzinfo=dt.timezone.utc)


def _repo(name: str, updated_at: dt.datetime) -> Repository:
    return Repository(name=name, owner="acme", full_name=f"acme/{name}", updated_at=updated_at)


@pytest.mark.parametrize(
    "years, expected",
    [
        (1, (1, 0, 0)),
        (0.5, (0, 6, 2)),
        (2.25, (2, 3, 1)),
        (0.25, (0, 3, 1)),
    ],
)
def test_cutoff_offset(years: float, expected: tuple[int, int, int]) -> None:
    assert cutoff_offset(years) == expected


def test_compute_cutoff_half_year() -> None:
    assert compute_cutoff(0.5, NOW) == dt.datetime(2026, 4, 15, 9, 30, tzinfo=dt.timezone.utc)


def test_compute_cutoff_one_year() -> None:
    assert compute_cutoff(1, NOW) == dt.datetime(2025, 10, 17, 9, 30, tzinfo=dt.timezone.utc)


def test_subtract_calendar_rolls_day_overflow_forward() -> None:
    moment = dt.datetime(2023, 3, 31, tzinfo=dt.timezone.utc)
    assert subtract_calendar(moment, 0, 1, 0) == dt.datetime(2023, 3, 3, tzinfo=dt.timezone.utc)


def test_subtract_calendar_crosses_year_boundary() -> None:
    moment = dt.datetime(2026, 1, 5, 8, 0, tzinfo=dt.timezone.utc)
    assert subtract_calendar(moment, 0, 2, 10) == dt.datetime(2025, 10, 26, 8, 0, tzinfo=dt.timezone.utc)


def test_zero_years_disables_filtering() -> None:
    repos = [_repo("old", dt.datetime(2001, 1, 1, tzinfo=dt.timezone.utc)), _repo("new", NOW)]
    kept, cutoff = filter_recent(repos, 0, NOW)
    assert kept == repos
    assert cutoff is None


def test_filter_is_strictly_after_cutoff() -> None:
    cutoff = compute_cutoff(1, NOW)
    repos = [
        _repo("recent", NOW - dt.timedelta(days=10)),
        _repo("at-cutoff", cutoff),
        _repo("just-after", cutoff + dt.timedelta(seconds=1)),
        _repo("stale", NOW - dt.timedelta(days=800)),
    ]

    kept, returned_cutoff = filter_recent(repos, 1, NOW)

    assert returned_cutoff == cutoff
    assert [r.name for r in kept] == ["recent", "just-after"]


def test_cutoff_before_first_representable_date_is_clamped() -> None:
    cutoff = compute_cutoff(3000, NOW)
    assert cutoff == dt.datetime.min.replace(tzinfo=dt.timezone.utc)

    repos = [_repo("ancient", dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc))]
    kept, _ = filter_recent(repos, 1e300, NOW)
    assert kept == repos


@pytest.mark.parametrize("years", [float("nan"), float("inf")])
def test_non_finite_years_rejected(years: float) -> None:
    with pytest.raises(ValueError, match="finite"):
        compute_cutoff(years, NOW)
