"""
NeighborGood - Crime Statistics Engine

Components:
    - CrimeStatisticsAnalyzer: aggregates incident records into CrimeStatistics
    - TrendPolicy: reference year, trend windows and thresholds

Usage:
    from neighborgood.analysis import CrimeStatisticsAnalyzer

    stats = CrimeStatisticsAnalyzer(reference_year=2025).analyze(records)
"""

from neighborgood.analysis.statistics import (
    CrimeStatistics,
    CrimeStatisticsAnalyzer,
    OffenseShare,
    analyze,
)
from neighborgood.analysis.trends import TrendPolicy, TrendSummary

__all__ = [
    "CrimeStatistics",
    "CrimeStatisticsAnalyzer",
    "OffenseShare",
    "TrendPolicy",
    "TrendSummary",
    "analyze",
]
