"""
NeighborGood - Address Report

Puts the pieces together for one searched address: pre-filters the decoded
records, runs the statistics analyzer, and lists the incidents with display
dates. Optionally attaches autocomplete suggestions from a LocationIndex.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from neighborgood.analysis.statistics import CrimeStatisticsAnalyzer
from neighborgood.formatting.dates import format_date
from neighborgood.locations.index import LocationIndex
from neighborgood.locations.models import extract_street_name
from neighborgood.records.models import IncidentRecord
from neighborgood.records.source import filter_by_address

logger = logging.getLogger(__name__)


def build_address_report(
    records: Sequence[IncidentRecord],
    address: str,
    analyzer: CrimeStatisticsAnalyzer,
    index: LocationIndex | None = None,
) -> dict[str, Any]:
    """
    Build a serializable report for ``address``.

    Args:
        records: Decoded records, not yet filtered by address
        address: Searched address text
        analyzer: Analyzer carrying the configured trend policy
        index: Location index for suggestions (skipped if not provided)

    Returns:
        Dictionary with the address, suggestions, statistics and incidents
    """
    relevant = filter_by_address(records, address)
    stats = analyzer.analyze(relevant)
    display_format = analyzer.config.dates.display_format

    report: dict[str, Any] = {
        "address": address,
        "statistics": stats.to_dict(),
        "incidents": [
            {
                "offense": record.highest_nibrs_description,
                "location_type": record.location_type_description,
                "location": record.location,
                "date": format_date(record.date_reported, display_format),
            }
            for record in relevant
        ],
    }

    if index is not None:
        report["suggestions"] = [
            {
                "street_name": index.street_name_for_display(location),
                "formatted_address": location.formatted_address,
            }
            for location in index.search(extract_street_name(address) or address)
        ]

    logger.info(
        f"Built report for {address}: {stats.total_incidents} incidents",
        extra={"address": address, "total_incidents": stats.total_incidents},
    )
    return report
