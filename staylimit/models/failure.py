"""
Known failure types for the collaborator layer.

The day-counting core never raises for data conditions. Everything that
edits rules or imports entries raises a KnownError subclass instead, so
the API can turn it into a response the user can act on.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_IMPORT = "invalid_import"

    # Resource failures
    NOT_FOUND = "not_found"

    # Constraint violations
    DUPLICATE_RULE = "duplicate_rule"
    BUILTIN_RULE = "builtin_rule"


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)


class DuplicateRuleError(KnownError):
    """Raised when adding a rule whose code is already in the mapping."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            kind=FailureKind.DUPLICATE_RULE,
            message=f"Country '{code}' already exists",
            suggestion="Edit the existing rule instead of adding a new one.",
            status_code=409,
        )


class RuleNotFoundError(KnownError):
    """Raised when a rule code is not in the mapping."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Country '{code}' not found",
            status_code=404,
        )


class BuiltinRuleError(KnownError):
    """Raised when deleting a built-in rule."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            kind=FailureKind.BUILTIN_RULE,
            message=f"Cannot delete built-in country '{code}'",
            suggestion="Only custom countries can be deleted.",
            status_code=403,
        )


class InvalidRuleError(KnownError):
    """Raised when a rule's fields fail validation."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=400,
        )


class EntryImportError(KnownError):
    """Raised when an entry import is not a well-formed JSON array of entries."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_IMPORT,
            message=message,
            detail=detail,
            suggestion="Import a file previously exported from this app.",
            status_code=400,
        )
