"""
Travel log import and export.

The interchange format is a JSON array of entry objects with camelCase
keys, as written by the export:

    [
      {
        "id": "1718000000000",
        "departureCountry": "US",
        "arrivalCountry": "AU",
        "departureDate": "2024-01-01",
        "arrivalDate": "2024-01-10"
      }
    ]

Any other top-level shape is rejected.
"""

import json
import logging
import uuid
from collections.abc import Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from staylimit.models.failure import EntryImportError
from staylimit.models.travel import TravelEntry

logger = logging.getLogger(__name__)


class EntryRecord(BaseModel):
    """One entry as it appears in the interchange format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    departure_country: str = Field(..., min_length=1, max_length=8)
    arrival_country: str = Field(..., min_length=1, max_length=8)
    departure_date: date
    arrival_date: date

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # Older exports used numeric timestamps as ids
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("departure_country", "arrival_country")
    @classmethod
    def normalize_country(cls, v: str) -> str:
        return v.strip().upper()

    def to_entry(self) -> TravelEntry:
        return TravelEntry(
            id=self.id,
            departure_country=self.departure_country,
            arrival_country=self.arrival_country,
            departure_date=self.departure_date,
            arrival_date=self.arrival_date,
        )

    @classmethod
    def from_entry(cls, entry: TravelEntry) -> "EntryRecord":
        return cls(
            id=entry.id,
            departure_country=entry.departure_country,
            arrival_country=entry.arrival_country,
            departure_date=entry.departure_date,
            arrival_date=entry.arrival_date,
        )


def parse_entries(data: Any) -> list[TravelEntry]:
    """
    Validate already-decoded interchange data.

    Raises:
        EntryImportError: If data is not a list, or any element is not a valid entry
    """
    if not isinstance(data, list):
        logger.warning("Rejected entry import with %s root", type(data).__name__)
        raise EntryImportError(
            "Invalid file format",
            detail=f"Expected a JSON array, got {type(data).__name__}",
        )

    entries: list[TravelEntry] = []
    for index, item in enumerate(data):
        try:
            record = EntryRecord.model_validate(item)
        except ValidationError as e:
            logger.warning("Rejected entry import: element %d is invalid", index)
            raise EntryImportError(
                "Failed to import data. Please check the file format.",
                detail=f"Entry {index}: {e.error_count()} validation error(s)",
            ) from e
        entries.append(record.to_entry())

    logger.info("Parsed %d travel entries", len(entries))
    return entries


def parse_entries_json(text: str) -> list[TravelEntry]:
    """
    Parse exported JSON text into travel entries.

    Raises:
        EntryImportError: If the text is not JSON or not a valid entry array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EntryImportError(
            "Failed to import data. Please check the file format.",
            detail=f"Invalid JSON at line {e.lineno}, column {e.colno}",
        ) from e

    return parse_entries(data)


def entries_to_records(entries: Iterable[TravelEntry]) -> list[dict[str, Any]]:
    """Serialize entries to JSON-ready dicts with camelCase keys."""
    return [
        EntryRecord.from_entry(entry).model_dump(mode="json", by_alias=True)
        for entry in entries
    ]


def entries_to_json(entries: Iterable[TravelEntry]) -> str:
    """Serialize entries to the interchange format."""
    return json.dumps(entries_to_records(entries), indent=2)


def export_filename(today: date) -> str:
    return f"travel-data-{today.isoformat()}.json"
