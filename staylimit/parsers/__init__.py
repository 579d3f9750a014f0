from staylimit.parsers.entry_import import (
    EntryRecord,
    entries_to_json,
    entries_to_records,
    export_filename,
    parse_entries,
    parse_entries_json,
)

__all__ = [
    "EntryRecord",
    "entries_to_json",
    "entries_to_records",
    "export_filename",
    "parse_entries",
    "parse_entries_json",
]
