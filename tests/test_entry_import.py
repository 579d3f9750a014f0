import json
from datetime import date

import pytest

from staylimit.models.failure import EntryImportError, FailureKind
from staylimit.models.travel import TravelEntry
from staylimit.parsers.entry_import import (
    entries_to_json,
    export_filename,
    parse_entries,
    parse_entries_json,
)

SAMPLE_EXPORT = """[
  {
    "id": "1718000000000",
    "departureCountry": "US",
    "arrivalCountry": "AU",
    "departureDate": "2024-01-01",
    "arrivalDate": "2024-01-10"
  },
  {
    "id": "1718000000001",
    "departureCountry": "AU",
    "arrivalCountry": "NZ",
    "departureDate": "2024-03-01",
    "arrivalDate": "2024-03-01"
  }
]"""


class TestParseEntriesJson:
    def test_parses_exported_array(self) -> None:
        entries = parse_entries_json(SAMPLE_EXPORT)

        assert entries == [
            TravelEntry("1718000000000", "US", "AU", date(2024, 1, 1), date(2024, 1, 10)),
            TravelEntry("1718000000001", "AU", "NZ", date(2024, 3, 1), date(2024, 3, 1)),
        ]

    def test_empty_array(self) -> None:
        assert parse_entries_json("[]") == []

    def test_numeric_id_becomes_string(self) -> None:
        text = json.dumps(
            [
                {
                    "id": 42,
                    "departureCountry": "US",
                    "arrivalCountry": "AU",
                    "departureDate": "2024-01-01",
                    "arrivalDate": "2024-01-02",
                }
            ]
        )

        [entry] = parse_entries_json(text)

        assert entry.id == "42"

    def test_missing_id_is_generated(self) -> None:
        [entry] = parse_entries(
            [
                {
                    "departureCountry": "US",
                    "arrivalCountry": "AU",
                    "departureDate": "2024-01-01",
                    "arrivalDate": "2024-01-02",
                }
            ]
        )

        assert entry.id

    def test_snake_case_keys_accepted(self) -> None:
        [entry] = parse_entries(
            [
                {
                    "id": "a",
                    "departure_country": "US",
                    "arrival_country": "AU",
                    "departure_date": "2024-01-01",
                    "arrival_date": "2024-01-02",
                }
            ]
        )

        assert entry.arrival_country == "AU"

    def test_country_codes_normalized(self) -> None:
        [entry] = parse_entries(
            [
                {
                    "id": "a",
                    "departureCountry": " us",
                    "arrivalCountry": "au ",
                    "departureDate": "2024-01-01",
                    "arrivalDate": "2024-01-02",
                }
            ]
        )

        assert entry.departure_country == "US"
        assert entry.arrival_country == "AU"

    def test_object_root_rejected(self) -> None:
        """Only a JSON array is accepted."""
        with pytest.raises(EntryImportError) as exc_info:
            parse_entries_json('{"entries": []}')

        assert exc_info.value.message == "Invalid file format"
        assert exc_info.value.kind == FailureKind.INVALID_IMPORT

    def test_scalar_root_rejected(self) -> None:
        with pytest.raises(EntryImportError):
            parse_entries_json("42")

    def test_invalid_json_rejected(self) -> None:
        with pytest.raises(EntryImportError) as exc_info:
            parse_entries_json("[{not json")

        assert "line 1" in (exc_info.value.detail or "")

    def test_invalid_element_rejected(self) -> None:
        text = json.dumps([{"id": "a", "departureCountry": "US", "arrivalCountry": "AU"}])

        with pytest.raises(EntryImportError) as exc_info:
            parse_entries_json(text)

        assert "Entry 0" in (exc_info.value.detail or "")

    def test_non_object_element_rejected(self) -> None:
        with pytest.raises(EntryImportError):
            parse_entries(["not an entry"])

    def test_bad_date_rejected(self) -> None:
        text = json.dumps(
            [
                {
                    "id": "a",
                    "departureCountry": "US",
                    "arrivalCountry": "AU",
                    "departureDate": "yesterday",
                    "arrivalDate": "2024-01-02",
                }
            ]
        )

        with pytest.raises(EntryImportError):
            parse_entries_json(text)

    def test_overlong_country_rejected(self) -> None:
        """Country codes longer than the stored column are an import error."""
        text = json.dumps(
            [
                {
                    "id": "a",
                    "departureCountry": "UNITED STATES",
                    "arrivalCountry": "AU",
                    "departureDate": "2024-01-01",
                    "arrivalDate": "2024-01-02",
                }
            ]
        )

        with pytest.raises(EntryImportError) as exc_info:
            parse_entries_json(text)

        assert exc_info.value.status_code == 400
        assert "Entry 0" in (exc_info.value.detail or "")


class TestExport:
    def test_export_uses_interchange_keys(self) -> None:
        entries = parse_entries_json(SAMPLE_EXPORT)

        data = json.loads(entries_to_json(entries))

        assert data[0] == {
            "id": "1718000000000",
            "departureCountry": "US",
            "arrivalCountry": "AU",
            "departureDate": "2024-01-01",
            "arrivalDate": "2024-01-10",
        }

    def test_export_can_be_imported(self) -> None:
        entries = parse_entries_json(SAMPLE_EXPORT)

        assert parse_entries_json(entries_to_json(entries)) == entries

    def test_export_empty_log(self) -> None:
        assert json.loads(entries_to_json([])) == []

    def test_export_filename(self) -> None:
        assert export_filename(date(2024, 6, 30)) == "travel-data-2024-06-30.json"
