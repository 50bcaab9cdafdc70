"""
NeighborGood - Incident Record Model

Data contracts for crime incident records:
- Year: validated, ordered calendar year
- YearRange: closed range of years used for trend windows
- IncidentRecord: one decoded incident as delivered by the record source

Usage:
    from neighborgood.records.models import IncidentRecord, Year

    record = IncidentRecord.model_validate({"YEAR": "2024", "LOCATION": "100 MAIN ST", ...})
    year = Year.parse(record.year)  # None when the token isn't an integer
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

_YEAR_TOKEN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, order=True)
class Year:
    """A calendar year parsed from a raw record token."""

    value: int

    @classmethod
    def parse(cls, token: str | None) -> Year | None:
        """
        Parse a raw year token.

        Accepts an optional sign followed by ASCII digits, with no surrounding
        whitespace. Returns None for anything else, including digit strings
        too long to convert.
        """
        if not isinstance(token, str) or not _YEAR_TOKEN.fullmatch(token):
            return None
        try:
            return cls(int(token))
        except ValueError:
            return None

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class YearRange:
    """Closed (inclusive) range of years."""

    first: Year
    last: Year

    @classmethod
    def ending_before(cls, reference: Year, span: int) -> YearRange:
        """The ``span`` complete years immediately preceding ``reference``."""
        return cls(Year(reference.value - span), Year(reference.value - 1))

    def __contains__(self, year: object) -> bool:
        return isinstance(year, Year) and self.first <= year <= self.last

    def __str__(self) -> str:
        return f"{self.first}-{self.last}"


class IncidentRecord(BaseModel):
    """
    One reported crime incident.

    Field aliases match the upper-case keys of the source feed, so records
    decode straight from the JSON payload; field names work as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    year: str = Field(alias="YEAR")
    location: str = Field(alias="LOCATION")
    date_reported: str = Field(alias="DATE_REPORTED")
    location_type_description: str = Field(alias="LOCATION_TYPE_DESCRIPTION")
    highest_nibrs_description: str = Field(alias="HIGHEST_NIBRS_DESCRIPTION")
    state: str | None = Field(default=None, alias="STATE")
    zip: str | None = Field(default=None, alias="ZIP")

    @property
    def parsed_year(self) -> Year | None:
        """The record's year as a Year, or None if it isn't numeric."""
        return Year.parse(self.year)
