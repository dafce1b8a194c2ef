"""Validation result variants.

A validation produces exactly one of Valid, Invalid or Warning.
Callers branch on the variant with ``match``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Valid:
    """The path is a usable editor executable."""


@dataclass(frozen=True, slots=True)
class Invalid:
    """The path cannot be used.

    Attributes:
        reason: What is wrong with the path.
        suggestion: How to fix it, if there is anything to suggest.
    """

    reason: str
    suggestion: str | None = field(default=None)


@dataclass(frozen=True, slots=True)
class Warning:  # noqa: A001
    """The path will probably work but something looks off.

    Attributes:
        message: Description of the concern.
    """

    message: str


ValidationResult = Valid | Invalid | Warning


def is_valid(result: ValidationResult) -> bool:
    """Check whether a result is the Valid variant."""
    return isinstance(result, Valid)


def status_message(result: ValidationResult) -> str:
    """Return the human-readable status of a result."""
    match result:
        case Valid():
            return "Valid path"
        case Invalid(reason=reason):
            return reason
        case Warning(message=message):
            return message


def suggestion_text(result: ValidationResult) -> str | None:
    """Return the fix suggestion of an Invalid result, else None."""
    match result:
        case Invalid(suggestion=suggestion):
            return suggestion
        case Valid() | Warning():
            return None
