"""
Address Analysis Script
Prints crime statistics for one address from a saved record payload

Usage:
    python scripts/analyze_address.py --records data/raw/records.json --address "100 MAIN ST"
    python scripts/analyze_address.py --records data/raw/records.json --address "100 MAIN ST" \
        --locations data/cmpd_crime_data.geojson --reference-year 2025
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from neighborgood.analysis import CrimeStatisticsAnalyzer
from neighborgood.locations import LocationIndex
from neighborgood.records import RecordDecodeError, decode_records
from neighborgood.report import build_address_report
from neighborgood.shared import configure_logging, get_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Crime statistics for one address")
    parser.add_argument("--records", required=True, help="JSON file with the record payload")
    parser.add_argument("--address", required=True, help="Address to search for")
    parser.add_argument("--locations", help="GeoJSON reference dataset for suggestions")
    parser.add_argument("--reference-year", type=int, help="Year treated as the partial year")
    parser.add_argument("--env", choices=["dev", "prod"], help="Configuration environment")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = get_config(args.env)
    configure_logging(config)

    index = LocationIndex.from_geojson(args.locations, config) if args.locations else None
    analyzer = CrimeStatisticsAnalyzer(config, reference_year=args.reference_year)

    try:
        records = decode_records(Path(args.records).read_bytes())
    except (OSError, RecordDecodeError) as e:
        logger.error(f"Could not read records from {args.records}: {e}")
        return 1

    report = build_address_report(records, args.address, analyzer, index)
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
