# topmark:header:start
#
#   project      : GeoSniff
#   file         : test_voting.py
#   file_relpath : tests/archives/test_voting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for majority voting over archive JSON entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geosniff.archives.voting import TIEBREAK_PRIORITY, VoteTally, VotingResolver, break_tie
from geosniff.config.model import TiePolicy
from geosniff.detector import Detector
from geosniff.formats.base import FormatKey
from geosniff.outcomes import DetectionOutcome, FailureKind
from tests.conftest import (
    esrijson_text,
    geojson_text,
    make_settings,
    make_tar,
    make_zip,
    parametrize,
    patch_zip_entry,
    topojson_text,
    write_file,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_tally_breakdown_orders_by_count_then_key() -> None:
    """The breakdown lists every key, largest count first."""
    tally = VoteTally(
        [FormatKey.GEOJSON, FormatKey.ESRIJSON, FormatKey.GEOJSON, FormatKey.TOPOJSON]
    )
    assert len(tally) == 4
    assert tally.breakdown() == "GeoJson=2, EsriJson=1, TopoJson=1"
    assert tally.leaders() == [FormatKey.GEOJSON]


def test_empty_tally() -> None:
    """No votes, no leaders."""
    tally = VoteTally()
    assert not tally
    assert tally.leaders() == []
    assert tally.breakdown() == ""


def test_leaders_are_lexicographic() -> None:
    """Tied leaders are reported in key order."""
    tally = VoteTally([FormatKey.TOPOJSON, FormatKey.ESRIJSON])
    assert tally.leaders() == [FormatKey.ESRIJSON, FormatKey.TOPOJSON]


@parametrize(
    "tied, winner",
    [
        ([FormatKey.GEOJSON, FormatKey.ESRIJSON], FormatKey.ESRIJSON),
        ([FormatKey.GEOJSON, FormatKey.TOPOJSON], FormatKey.TOPOJSON),
        ([FormatKey.GEOJSON_SEQ, FormatKey.GEOJSON], FormatKey.GEOJSON),
        ([FormatKey.KML, FormatKey.GML], FormatKey.GML),
    ],
)
def test_break_tie_follows_specificity(tied: list[FormatKey], winner: FormatKey) -> None:
    """Priority order first, then lexicographic key order."""
    assert break_tie(tied) is winner


def test_priority_is_most_specific_first() -> None:
    """EsriJSON is the most specific JSON flavor."""
    assert TIEBREAK_PRIORITY[0] is FormatKey.ESRIJSON
    assert TIEBREAK_PRIORITY[-1] is FormatKey.GEOJSON_SEQ


def _mixed_zip(tmp_path: Path, geo: int, esri: int, topo: int = 0) -> tuple[Path, list[str]]:
    entries: dict[str, str] = {}
    for i in range(geo):
        entries[f"g{i}.json"] = geojson_text()
    for i in range(esri):
        entries[f"e{i}.json"] = esrijson_text()
    for i in range(topo):
        entries[f"t{i}.json"] = topojson_text()
    return make_zip(tmp_path / "mixed.zip", entries), list(entries)


def test_majority_wins(tmp_path: Path) -> None:
    """The class with the most entries wins outright."""
    archive, names = _mixed_zip(tmp_path, geo=3, esri=2)
    outcome: DetectionOutcome = VotingResolver().resolve(archive, names)
    assert outcome.success
    assert outcome.format_key is FormatKey.GEOJSON
    assert "GeoJson=3" in outcome.reason
    assert "EsriJson=2" in outcome.reason
    assert "no tiebreak needed" in outcome.reason


def test_tie_is_broken_by_priority(tmp_path: Path) -> None:
    """Under the tiebreak policy, EsriJSON beats GeoJSON on a 1-1 tie."""
    archive, names = _mixed_zip(tmp_path, geo=1, esri=1)
    outcome: DetectionOutcome = VotingResolver().resolve(archive, names)
    assert outcome.format_key is FormatKey.ESRIJSON
    assert "tiebreak by specificity priority selected EsriJson" in outcome.reason


def test_tie_fails_under_fail_policy(tmp_path: Path) -> None:
    """Under the fail policy a tie is an ambiguous vote."""
    archive, names = _mixed_zip(tmp_path, geo=2, esri=2, topo=1)
    resolver = VotingResolver(make_settings(tie_policy=TiePolicy.FAIL))
    outcome: DetectionOutcome = resolver.resolve(archive, names)
    assert not outcome.success
    assert outcome.failure is FailureKind.AMBIGUOUS_VOTE
    assert "tie between EsriJson, GeoJson" in outcome.reason
    assert "TopoJson=1" in outcome.reason


def test_no_classifiable_entries(tmp_path: Path) -> None:
    """Entries without a recognizable class cast no vote."""
    archive: Path = make_zip(tmp_path / "a.zip", {"a.json": "{}", "b.json": '{"name": 1}'})
    outcome: DetectionOutcome = VotingResolver().resolve(archive, ["a.json", "b.json"])
    assert outcome.failure is FailureKind.CONTENT_UNDETERMINED
    assert "among 2 .json entries" in outcome.reason


def test_unreadable_entries_are_skipped(tmp_path: Path) -> None:
    """A missing entry does not abort the vote."""
    archive: Path = make_zip(tmp_path / "a.zip", {"a.json": topojson_text()})
    outcome: DetectionOutcome = VotingResolver().resolve(archive, ["ghost.json", "a.json"])
    assert outcome.format_key is FormatKey.TOPOJSON


@parametrize(
    "flag_bits, compress_type",
    [(0x1, None), (0, 99)],
    ids=["encrypted", "unsupported-method"],
)
def test_unopenable_entry_does_not_cancel_other_votes(
    tmp_path: Path, flag_bits: int, compress_type: int | None
) -> None:
    """An encrypted or unsupported entry is skipped; the readable one still wins."""
    archive: Path = make_zip(
        tmp_path / "a.zip", {"a.json": geojson_text(), "b.json": geojson_text()}
    )
    patch_zip_entry(archive, "b.json", flag_bits=flag_bits, compress_type=compress_type)

    outcome: DetectionOutcome = VotingResolver().resolve(archive, ["a.json", "b.json"])
    assert outcome.format_key is FormatKey.GEOJSON
    assert "(GeoJson=1)" in outcome.reason

    detected: DetectionOutcome = Detector().detect(archive)
    assert detected.format_key is FormatKey.GEOJSON
    assert detected.failure is None


def test_unopenable_archive_yields_no_votes(tmp_path: Path) -> None:
    """A corrupt container is reported as undetermined, not raised."""
    archive: Path = write_file(tmp_path / "a.zip", b"garbage")
    outcome: DetectionOutcome = VotingResolver().resolve(archive, ["a.json"])
    assert outcome.failure is FailureKind.CONTENT_UNDETERMINED


def test_voting_inside_tarball(tmp_path: Path) -> None:
    """Tar members are streamed and classified like zip members."""
    archive: Path = make_tar(
        tmp_path / "a.tar.gz", {"x/a.json": esrijson_text(), "x/b.json": esrijson_text()}
    )
    outcome: DetectionOutcome = VotingResolver().resolve(archive, ["x/a.json", "x/b.json"])
    assert outcome.format_key is FormatKey.ESRIJSON
    assert "EsriJson=2" in outcome.reason
