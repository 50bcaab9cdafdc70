"""
NeighborGood - Reference Locations

Components:
    - CrimeLocation: a known address from the reference dataset
    - LocationIndex: street-name index with substring search

Usage:
    from neighborgood.locations import LocationIndex

    index = LocationIndex.from_geojson()
    suggestions = index.search("tryon")
"""

from neighborgood.locations.index import LocationIndex
from neighborgood.locations.models import CrimeLocation, extract_street_name

__all__ = ["CrimeLocation", "LocationIndex", "extract_street_name"]
