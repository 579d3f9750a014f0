from staylimit.services.tax_rules import (
    BUILTIN_RULES,
    add_rule,
    delete_rule,
    seed_rules,
    update_rule,
)

__all__ = [
    "BUILTIN_RULES",
    "add_rule",
    "delete_rule",
    "seed_rules",
    "update_rule",
]
