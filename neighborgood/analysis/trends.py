"""
NeighborGood - Trend Calculations

Year-keyed calculations behind the crime statistics:
- Typed-year view of the raw per-year histogram
- Average incidents per year, excluding the partial year
- Short-window trend classification over the most recent years
- Fixed-window endpoint comparison (six-year and three-year indicators)

All windows are derived from a reference year held by TrendPolicy, so the
results stay correct as the calendar advances.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from neighborgood.records.models import Year, YearRange
from neighborgood.shared.config import Settings

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_DESCRIPTION = "Insufficient data to determine trend"
STABLE_DESCRIPTION = "Crime incidents have remained relatively stable over the last {years} years"
INCREASE_DESCRIPTION = (
    "Crime incidents have increased by approximately {percent}% from {first} to {last}"
)
DECREASE_DESCRIPTION = (
    "Crime incidents have decreased by approximately {percent}% from {first} to {last}"
)


def current_year() -> int:
    """Current calendar year (UTC)."""
    return datetime.now(UTC).year


@dataclass(frozen=True)
class TrendPolicy:
    """
    Window and threshold settings for one analysis run.

    With a reference year R:
        partial year        = R        (excluded from the per-year average)
        six-year window     = [R-6, R-1]
        three-year window   = [R-3, R-1]
    """

    reference_year: Year
    short_window_years: int = 5
    stable_threshold_percent: float = 5.0
    six_year_span: int = 6
    three_year_span: int = 3

    @classmethod
    def from_config(cls, config: Settings, reference_year: int | None = None) -> TrendPolicy:
        """
        Build a policy from settings.

        The reference year is taken from the argument, then from
        ``config.statistics.reference_year``, then from the calendar.
        """
        stats = config.statistics
        if reference_year is None:
            reference_year = stats.reference_year
        if reference_year is None:
            reference_year = current_year()

        return cls(
            reference_year=Year(reference_year),
            short_window_years=stats.short_window_years,
            stable_threshold_percent=stats.stable_threshold_percent,
            six_year_span=stats.six_year_span,
            three_year_span=stats.three_year_span,
        )

    @property
    def partial_year(self) -> Year:
        return self.reference_year

    @property
    def six_year_window(self) -> YearRange:
        return YearRange.ending_before(self.reference_year, self.six_year_span)

    @property
    def three_year_window(self) -> YearRange:
        return YearRange.ending_before(self.reference_year, self.three_year_span)


@dataclass(frozen=True)
class TrendSummary:
    """Human-readable trend plus its direction flag."""

    description: str
    is_increasing: bool


def typed_year_counts(incidents_per_year: Mapping[str, int]) -> dict[Year, int]:
    """
    Re-key a raw histogram by parsed Year.

    Keys that don't parse are dropped; keys that parse to the same year
    (e.g. "2024" and "+2024") are summed.
    """
    counts: dict[Year, int] = {}
    for key, count in incidents_per_year.items():
        year = Year.parse(key)
        if year is None:
            continue
        counts[year] = counts.get(year, 0) + count
    return counts


def average_per_year(incidents_per_year: Mapping[str, int], excluded_year: Year) -> float:
    """
    Average incidents per year, leaving out the partial year.

    Every other histogram bucket with at least one record counts as a year,
    including non-numeric ones. Returns 0.0 when no such bucket exists.
    """
    counts = [
        count
        for key, count in incidents_per_year.items()
        if count > 0 and Year.parse(key) != excluded_year
    ]
    if not counts:
        return 0.0
    return sum(counts) / len(counts)


def percent_change(start: int, end: int) -> float:
    """Percent change from start to end; a zero start counts as +100%."""
    if start == 0:
        return 100.0
    return (end - start) / start * 100.0


def describe_recent_trend(
    year_counts: Mapping[Year, int],
    window_size: int = 5,
    stable_threshold_percent: float = 5.0,
) -> TrendSummary:
    """
    Classify the trend between the first and last of the most recent years.

    Args:
        year_counts: Incident counts keyed by Year
        window_size: How many of the latest distinct years to consider
        stable_threshold_percent: Absolute change below which the trend is "stable"

    Returns:
        TrendSummary; only an increase beyond the threshold sets is_increasing
    """
    recent = sorted(year_counts)[-window_size:]
    if len(recent) < 2:
        return TrendSummary(INSUFFICIENT_DATA_DESCRIPTION, False)

    first, last = recent[0], recent[-1]
    first_count, last_count = year_counts[first], year_counts[last]
    change = percent_change(first_count, last_count)

    logger.debug(
        f"Recent trend {first}-{last}: {first_count} -> {last_count} ({change:.1f}%)",
        extra={"first_year": first.value, "last_year": last.value, "percent_change": change},
    )

    if abs(change) < stable_threshold_percent:
        return TrendSummary(STABLE_DESCRIPTION.format(years=len(recent)), False)

    if last_count > first_count:
        return TrendSummary(
            INCREASE_DESCRIPTION.format(percent=int(change), first=first, last=last), True
        )

    return TrendSummary(
        DECREASE_DESCRIPTION.format(percent=int(abs(change)), first=first, last=last), False
    )


def is_window_increasing(year_counts: Mapping[Year, int], window: YearRange) -> bool:
    """
    Compare the earliest and latest years with data inside ``window``.

    Interior years are ignored. Fewer than two qualifying years gives False.
    """
    in_window = sorted(year for year in year_counts if year in window)
    if len(in_window) < 2:
        return False
    return year_counts[in_window[-1]] > year_counts[in_window[0]]
