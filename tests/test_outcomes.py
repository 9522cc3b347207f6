# topmark:header:start
#
#   project      : GeoSniff
#   file         : test_outcomes.py
#   file_relpath : tests/test_outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `DetectionOutcome` invariants and serialization."""

from __future__ import annotations

import pytest

from geosniff.formats.base import FormatKey
from geosniff.outcomes import DetectionOutcome, FailureKind


def test_ok_outcome() -> None:
    """A success carries a key and no failure kind."""
    o: DetectionOutcome = DetectionOutcome.ok(FormatKey.GPX, "Mapped extension.")
    assert o.success
    assert o.format_name == "Gpx"
    assert o.failure is None
    assert o.as_tuple() == (True, "Gpx", "Mapped extension.")


def test_fail_outcome() -> None:
    """A failure carries a kind and no key."""
    o: DetectionOutcome = DetectionOutcome.fail(FailureKind.INPUT_INVALID, "Input path is required.")
    assert not o.success
    assert o.format_key is None
    assert o.format_name is None
    assert o.as_tuple() == (False, None, "Input path is required.")


def test_to_dict() -> None:
    """The mapping uses public string values."""
    assert DetectionOutcome.fail(FailureKind.AMBIGUOUS_VOTE, "tie").to_dict() == {
        "success": False,
        "format": None,
        "reason": "tie",
        "failure": "ambiguous_vote",
    }
    assert DetectionOutcome.ok(FormatKey.GEOJSON_SEQ, "ok").to_dict()["format"] == "GeoJsonSeq"


def test_reason_is_mandatory() -> None:
    """There is no outcome without an explanation."""
    with pytest.raises(ValueError, match="reason"):
        DetectionOutcome.ok(FormatKey.KML, "")


def test_inconsistent_outcomes_are_rejected() -> None:
    """Success and failure fields cannot be mixed."""
    with pytest.raises(ValueError):
        DetectionOutcome(success=True, format_key=None, reason="x")
    with pytest.raises(ValueError):
        DetectionOutcome(
            success=False, format_key=FormatKey.KML, reason="x", failure=FailureKind.INPUT_INVALID
        )
    with pytest.raises(ValueError):
        DetectionOutcome(success=False, format_key=None, reason="x")


def test_outcomes_are_immutable() -> None:
    """Outcomes are frozen values."""
    o: DetectionOutcome = DetectionOutcome.ok(FormatKey.KML, "x")
    with pytest.raises(AttributeError):
        o.reason = "y"  # type: ignore[misc]
