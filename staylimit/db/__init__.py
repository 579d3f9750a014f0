from staylimit.db.database import get_session, init_db
from staylimit.db.operations import (
    delete_entries,
    entry_to_model,
    get_entries,
    get_rules,
    get_stored_rules,
    replace_entries,
    rule_to_model,
    save_rules,
)

__all__ = [
    "delete_entries",
    "entry_to_model",
    "get_entries",
    "get_rules",
    "get_session",
    "get_stored_rules",
    "init_db",
    "replace_entries",
    "rule_to_model",
    "save_rules",
]
