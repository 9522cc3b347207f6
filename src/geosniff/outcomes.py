# topmark:header:start
#
#   project      : GeoSniff
#   file         : outcomes.py
#   file_relpath : src/geosniff/outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detection outcomes.

A detection call always yields exactly one `DetectionOutcome`: either a
success carrying the resolved [`geosniff.formats.base.FormatKey`][], or a
failure carrying a `FailureKind`. In both cases ``reason`` holds a
human-readable justification whose wording is stable enough to assert on.

Design goals:
- Expected failures are values, never exceptions.
- Presentation-free: no ANSI, no console logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from geosniff.formats.base import FormatKey


class FailureKind(Enum):
    """Why a detection did not resolve a format."""

    INPUT_INVALID = "input_invalid"
    ARCHIVE_LISTING_FAILED = "archive_listing_failed"
    CONTENT_UNDETERMINED = "content_undetermined"
    AMBIGUOUS_VOTE = "ambiguous_vote"
    UNMAPPED_FORMAT = "unmapped_format"
    FORMAT_UNRECOGNIZED = "format_unrecognized"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class DetectionOutcome:
    """Result of a single detection.

    Attributes:
        success (bool): Whether a format was resolved.
        format_key (FormatKey | None): The resolved key; set iff ``success``.
        reason (str): Justification; never empty.
        failure (FailureKind | None): Failure classification; set iff not ``success``.
    """

    success: bool
    format_key: FormatKey | None
    reason: str
    failure: FailureKind | None = None

    def __post_init__(self) -> None:
        if not self.reason:
            raise ValueError("DetectionOutcome.reason must not be empty")
        if self.success and (self.format_key is None or self.failure is not None):
            raise ValueError("A successful outcome needs a format key and no failure kind")
        if not self.success and (self.format_key is not None or self.failure is None):
            raise ValueError("A failed outcome needs a failure kind and no format key")

    @classmethod
    def ok(cls, key: FormatKey, reason: str) -> DetectionOutcome:
        """Build a successful outcome."""
        return cls(success=True, format_key=key, reason=reason)

    @classmethod
    def fail(cls, kind: FailureKind, reason: str) -> DetectionOutcome:
        """Build a failed outcome."""
        return cls(success=False, format_key=None, reason=reason, failure=kind)

    @property
    def format_name(self) -> str | None:
        """The resolved key as its public string, or None."""
        return None if self.format_key is None else self.format_key.value

    def as_tuple(self) -> tuple[bool, str | None, str]:
        """Return the ``(success, format_key, reason)`` triple."""
        return (self.success, self.format_name, self.reason)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this outcome."""
        return {
            "success": self.success,
            "format": self.format_name,
            "reason": self.reason,
            "failure": None if self.failure is None else self.failure.value,
        }
