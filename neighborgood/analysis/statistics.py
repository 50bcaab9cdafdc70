"""
NeighborGood - Crime Statistics Analyzer

Aggregates the incident records found for one address into CrimeStatistics:
    - Total incidents and the per-year histogram
    - Average incidents per year (partial year excluded)
    - Short-window trend description and direction
    - Six-year and three-year endpoint trend indicators
    - Most common offense types with their share of all incidents

Usage:
    from neighborgood.analysis.statistics import CrimeStatisticsAnalyzer

    analyzer = CrimeStatisticsAnalyzer(reference_year=2025)
    stats = analyzer.analyze(records)
    print(stats.trend_description)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from neighborgood.analysis.trends import (
    TrendPolicy,
    average_per_year,
    describe_recent_trend,
    is_window_increasing,
    typed_year_counts,
)
from neighborgood.records.models import IncidentRecord
from neighborgood.shared.config import Settings, get_config

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["year", "highest_nibrs_description"]


@dataclass(frozen=True)
class OffenseShare:
    """One offense type and its share of the analyzed incidents."""

    description: str
    count: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class CrimeStatistics:
    """Aggregated statistics for one set of incident records."""

    total_incidents: int
    incidents_per_year: dict[str, int]
    average_incidents_per_year: float
    trend_description: str
    is_trend_increasing: bool
    is_six_year_trend_increasing: bool
    is_three_year_trend_increasing: bool
    top_offenses: tuple[OffenseShare, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert statistics to dictionary for logging/serialization."""
        return {
            "total_incidents": self.total_incidents,
            "incidents_per_year": dict(self.incidents_per_year),
            "average_incidents_per_year": self.average_incidents_per_year,
            "trend_description": self.trend_description,
            "is_trend_increasing": self.is_trend_increasing,
            "is_six_year_trend_increasing": self.is_six_year_trend_increasing,
            "is_three_year_trend_increasing": self.is_three_year_trend_increasing,
            "top_offenses": [offense.to_dict() for offense in self.top_offenses],
        }


def records_to_frame(records: Sequence[IncidentRecord]) -> pd.DataFrame:
    """Tabulate the fields the analyzer groups on."""
    return pd.DataFrame(
        [(r.year, r.highest_nibrs_description) for r in records],
        columns=FRAME_COLUMNS,
    )


def count_by(df: pd.DataFrame, column: str) -> pd.Series:
    """Count rows per value of ``column``, in order of first appearance."""
    return df.groupby(column, sort=False).size()


class CrimeStatisticsAnalyzer:
    """
    Stateless analyzer for incident records.

    The policy (reference year, window sizes, thresholds) is fixed at
    construction; ``analyze`` holds no state between calls and is safe to use
    from several threads at once.
    """

    def __init__(
        self,
        config: Settings | None = None,
        reference_year: int | None = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Configuration object (uses default if not provided)
            reference_year: Year treated as the current, partial year.
                Defaults to ``config.statistics.reference_year``, then the calendar.
        """
        self.config = config or get_config()
        self.policy = TrendPolicy.from_config(self.config, reference_year)
        self.top_offense_count = self.config.statistics.top_offense_count

    def analyze(self, records: Sequence[IncidentRecord]) -> CrimeStatistics:
        """
        Aggregate incident records.

        Never raises for degenerate input: an empty sequence, unparsable years
        or a single year of data produce the documented neutral values.

        Args:
            records: Incident records for one address

        Returns:
            CrimeStatistics for the records
        """
        df = records_to_frame(records)

        incidents_per_year = {str(k): int(v) for k, v in count_by(df, "year").items()}
        total_incidents = len(df)

        year_counts = typed_year_counts(incidents_per_year)
        trend = describe_recent_trend(
            year_counts,
            window_size=self.policy.short_window_years,
            stable_threshold_percent=self.policy.stable_threshold_percent,
        )

        stats = CrimeStatistics(
            total_incidents=total_incidents,
            incidents_per_year=incidents_per_year,
            average_incidents_per_year=average_per_year(
                incidents_per_year, self.policy.partial_year
            ),
            trend_description=trend.description,
            is_trend_increasing=trend.is_increasing,
            is_six_year_trend_increasing=is_window_increasing(
                year_counts, self.policy.six_year_window
            ),
            is_three_year_trend_increasing=is_window_increasing(
                year_counts, self.policy.three_year_window
            ),
            top_offenses=self.summarize_offenses(df),
        )

        logger.debug(
            f"Analyzed {total_incidents} incidents across {len(incidents_per_year)} year buckets",
            extra={
                "reference_year": self.policy.reference_year.value,
                "total_incidents": total_incidents,
                "year_buckets": len(incidents_per_year),
            },
        )

        return stats

    def summarize_offenses(self, df: pd.DataFrame) -> tuple[OffenseShare, ...]:
        """
        Most frequent offense descriptions with their percentage of all rows.

        Ties keep first-appearance order.
        """
        total = len(df)
        if total == 0 or self.top_offense_count == 0:
            return ()

        counts = count_by(df, "highest_nibrs_description").sort_values(
            ascending=False, kind="stable"
        )

        return tuple(
            OffenseShare(
                description=str(description),
                count=int(count),
                percentage=float(count) / total * 100.0,
            )
            for description, count in counts.head(self.top_offense_count).items()
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def analyze(
    records: Sequence[IncidentRecord],
    config: Settings | None = None,
    reference_year: int | None = None,
) -> CrimeStatistics:
    """Convenience function for a one-off analysis."""
    return CrimeStatisticsAnalyzer(config, reference_year).analyze(records)
