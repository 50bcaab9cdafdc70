"""
NeighborGood - Crime Location Model
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# House number: a leading run of digits followed by whitespace
_HOUSE_NUMBER = re.compile(r"^\d+\s+")


def extract_street_name(address: str) -> str | None:
    """
    Strip the leading house number from an address.

    Returns None when nothing is left (e.g. an empty address).
    """
    street_name = _HOUSE_NUMBER.sub("", address, count=1)
    return street_name or None


@dataclass(frozen=True)
class CrimeLocation:
    """A known address from the reference location dataset."""

    location: str
    city: str
    state: str

    @property
    def formatted_address(self) -> str:
        return f"{self.location}, {self.city}, {self.state}"

    @property
    def street_name(self) -> str | None:
        return extract_street_name(self.location)
