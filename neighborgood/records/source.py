"""
NeighborGood - Record Source Helpers

Turns a raw record payload into IncidentRecord instances and narrows the
result to one searched address. Transport (fetching the payload) belongs to
the caller; these helpers start from the response body.

Usage:
    from neighborgood.records.source import decode_records, filter_by_address

    records = decode_records(response_text)
    relevant = filter_by_address(records, "100 MAIN ST")
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from neighborgood.records.models import IncidentRecord

logger = logging.getLogger(__name__)

# How much of a rejected payload to echo into the logs
PREVIEW_LENGTH = 200


class RecordDecodeError(ValueError):
    """The payload as a whole could not be read as a list of records."""


def _preview(text: str) -> str:
    return text[:PREVIEW_LENGTH]


def _load_payload(payload: str | bytes | list[Any]) -> list[Any]:
    if isinstance(payload, list):
        return payload

    text = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload

    # Servers answer errors with HTML pages, which would otherwise surface
    # as an opaque JSON error
    if text.lstrip().startswith("<"):
        raise RecordDecodeError(f"Received HTML instead of JSON data: {_preview(text)!r}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordDecodeError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise RecordDecodeError(f"Expected a JSON array of records, got {type(data).__name__}")

    return data


def decode_records(payload: str | bytes | list[Any]) -> list[IncidentRecord]:
    """
    Decode a record payload.

    Args:
        payload: JSON text/bytes, or an already-parsed list of record dicts

    Returns:
        Valid records in payload order. Entries that fail validation are
        skipped and logged.

    Raises:
        RecordDecodeError: If the payload isn't a JSON array
    """
    raw_records = _load_payload(payload)

    records: list[IncidentRecord] = []
    skipped = 0
    for position, raw in enumerate(raw_records):
        try:
            records.append(IncidentRecord.model_validate(raw))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                f"Skipping malformed record at position {position}: {e.error_count()} error(s)",
                extra={"position": position, "errors": e.errors(include_url=False)},
            )

    logger.info(
        f"Decoded {len(records)} crime records",
        extra={"records_decoded": len(records), "records_skipped": skipped},
    )
    return records


def filter_by_address(records: Iterable[IncidentRecord], address: str) -> list[IncidentRecord]:
    """
    Keep records whose location contains the searched address.

    Matching is a case-insensitive substring test on the upper-cased values.
    A blank address matches nothing.
    """
    search_term = address.upper()
    if not search_term.strip():
        return []

    relevant = [record for record in records if search_term in record.location.upper()]

    logger.info(
        f"Found {len(relevant)} matching records for address: {address}",
        extra={"address": address, "matches": len(relevant)},
    )
    return relevant
