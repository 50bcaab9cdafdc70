"""
NeighborGood - Location Index

Street-name index over the reference location dataset, used for address
autocomplete before any records are fetched.

The index is built once by the composition root and passed to whoever needs
it; it is read-only afterwards, so concurrent searches need no locking.

Usage:
    from neighborgood.locations.index import LocationIndex

    index = LocationIndex.from_geojson("data/cmpd_crime_data.geojson")
    for location in index.search("main st"):
        print(index.street_name_for_display(location))
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from neighborgood.locations.models import CrimeLocation, extract_street_name
from neighborgood.shared.config import LocationsConfig, Settings, get_config

logger = logging.getLogger(__name__)


def _location_from_feature(feature: Any, fields: LocationsConfig) -> CrimeLocation | None:
    """Build a CrimeLocation from one GeoJSON feature, or None if it's malformed."""
    if not isinstance(feature, dict):
        return None
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        return None

    location = properties.get(fields.location_field)
    city = properties.get(fields.city_field)
    state = properties.get(fields.state_field)
    if not all(isinstance(value, str) for value in (location, city, state)):
        return None

    return CrimeLocation(location=location, city=city, state=state)


class LocationIndex:
    """
    De-duplicated, street-name-indexed set of known locations.

    Locations are unique by their full ``location`` string (first occurrence
    wins) and kept in load order. Street-name lookup is first-wins as well, so a
    street name always resolves to the location that was kept for it first,
    rather than to whichever duplicate street came last.
    """

    def __init__(self, locations: Iterable[CrimeLocation] = ()):
        self._locations: list[CrimeLocation] = []
        self._street_names: list[str | None] = []
        self._by_street_name: dict[str, CrimeLocation] = {}

        seen: set[str] = set()
        for location in locations:
            if location.location in seen:
                continue
            seen.add(location.location)

            street_name = extract_street_name(location.location)
            self._locations.append(location)
            self._street_names.append(street_name)
            if street_name is not None:
                self._by_street_name.setdefault(street_name, location)

    @classmethod
    def load(
        cls,
        features: Iterable[Any],
        config: Settings | None = None,
    ) -> LocationIndex:
        """
        Build an index from GeoJSON features.

        Features without string location/city/state properties are skipped.

        Args:
            features: Feature objects, each with a ``properties`` mapping
            config: Configuration object (uses default if not provided)
        """
        fields = (config or get_config()).locations

        locations: list[CrimeLocation] = []
        skipped = 0
        for feature in features:
            location = _location_from_feature(feature, fields)
            if location is None:
                skipped += 1
                continue
            locations.append(location)

        index = cls(locations)
        logger.info(
            f"Loaded {len(index)} unique crime locations",
            extra={"features_skipped": skipped, "unique_locations": len(index)},
        )
        return index

    @classmethod
    def from_geojson(
        cls,
        path: str | Path | None = None,
        config: Settings | None = None,
    ) -> LocationIndex:
        """
        Build an index from a GeoJSON FeatureCollection file.

        A missing or unreadable file gives an empty index; the error is logged.

        Args:
            path: File to read (defaults to ``config.locations.dataset_path``)
            config: Configuration object (uses default if not provided)
        """
        config = config or get_config()
        path = Path(path or config.locations.dataset_path)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error(f"Location dataset not found: {path}", extra={"path": str(path)})
            return cls()
        except (OSError, ValueError) as e:
            logger.error(
                f"Error loading or parsing location dataset {path}: {e}",
                extra={"path": str(path)},
            )
            return cls()

        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            logger.error(
                f"Location dataset {path} has no feature list", extra={"path": str(path)}
            )
            return cls()

        return cls.load(features, config)

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[CrimeLocation]:
        return iter(self._locations)

    def search(self, query: str) -> list[CrimeLocation]:
        """
        Find locations whose street name contains ``query``, ignoring case.

        Returns at most one location per street name (the first in load
        order). Locations without a street name never match. An empty query
        returns no results.
        """
        if not query:
            return []

        needle = query.lower()
        matched_streets: set[str] = set()
        results: list[CrimeLocation] = []

        for location, street_name in zip(self._locations, self._street_names):
            if street_name is None or street_name in matched_streets:
                continue
            if needle in street_name.lower():
                matched_streets.add(street_name)
                results.append(location)

        return results

    def lookup(self, street_name: str) -> CrimeLocation | None:
        """First indexed location on exactly this street name."""
        return self._by_street_name.get(street_name)

    @staticmethod
    def street_name_for_display(location: CrimeLocation) -> str:
        """The street name, or the full location when none can be derived."""
        return location.street_name or location.location
