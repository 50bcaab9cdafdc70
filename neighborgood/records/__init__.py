"""
NeighborGood - Incident Records

Components:
    - IncidentRecord: decoded crime incident
    - Year / YearRange: typed calendar years for aggregation
    - decode_records / filter_by_address: payload decoding and address pre-filter

Usage:
    from neighborgood.records import decode_records, filter_by_address

    records = filter_by_address(decode_records(payload), "100 MAIN ST")
"""

from neighborgood.records.models import IncidentRecord, Year, YearRange
from neighborgood.records.source import RecordDecodeError, decode_records, filter_by_address

__all__ = [
    "IncidentRecord",
    "Year",
    "YearRange",
    "RecordDecodeError",
    "decode_records",
    "filter_by_address",
]
