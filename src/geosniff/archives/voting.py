# topmark:header:start
#
#   project      : GeoSniff
#   file         : voting.py
#   file_relpath : src/geosniff/archives/voting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Majority voting over the generic ``.json`` entries of an archive.

Each candidate entry is streamed (bounded read), classified by the two-stage
JSON classifier, and counted when the class is known. Entries that cannot be
opened or read contribute no vote.

Resolution:
    * no votes: ``CONTENT_UNDETERMINED``;
    * a single leader wins outright;
    * a tie is settled by `TiePolicy`: ``TIEBREAK`` picks the first tied key
      in `TIEBREAK_PRIORITY` (then lexicographic key order), ``FAIL``
      reports ``AMBIGUOUS_VOTE``.

The reason text always carries the full vote breakdown.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Final

from geosniff.archives.access import STREAM_ERRORS, ArchiveError, ArchiveReader
from geosniff.config.logging import get_logger
from geosniff.config.model import DetectionSettings, TiePolicy
from geosniff.formats.base import FormatKey
from geosniff.outcomes import DetectionOutcome, FailureKind
from geosniff.sniffing.classifier import JsonClassifier
from geosniff.sniffing.types import JsonContentClass

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from geosniff.config.logging import GeosniffLogger

logger: GeosniffLogger = get_logger(__name__)

#: Most constrained JSON format first.
TIEBREAK_PRIORITY: Final[tuple[FormatKey, ...]] = (
    FormatKey.ESRIJSON,
    FormatKey.TOPOJSON,
    FormatKey.GEOJSON,
    FormatKey.GEOJSON_SEQ,
)

# An entry that cannot be opened or fails partway through casts no vote.
_ENTRY_ERRORS: Final[tuple[type[Exception], ...]] = (ArchiveError, *STREAM_ERRORS)


class VoteTally:
    """Per-archive count of classified entries."""

    def __init__(self, votes: Iterable[FormatKey] = ()) -> None:
        self._counts: Counter[FormatKey] = Counter(votes)

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __len__(self) -> int:
        return sum(self._counts.values())

    def cast(self, key: FormatKey) -> None:
        """Add one vote for ``key``."""
        self._counts[key] += 1

    def count(self, key: FormatKey) -> int:
        """Return the votes cast for ``key``."""
        return self._counts[key]

    def leaders(self) -> list[FormatKey]:
        """Return the keys holding the maximum count, in lexicographic order."""
        if not self._counts:
            return []
        top: int = max(self._counts.values())
        return sorted((k for k, n in self._counts.items() if n == top), key=lambda k: k.value)

    def breakdown(self) -> str:
        """Return ``"GeoJson=3, EsriJson=2"``: by count descending, then key."""
        ordered: list[tuple[FormatKey, int]] = sorted(
            self._counts.items(), key=lambda kv: (-kv[1], kv[0].value)
        )
        return ", ".join(f"{k.value}={n}" for k, n in ordered)


def break_tie(tied: Sequence[FormatKey]) -> FormatKey:
    """Pick the winner among tied keys.

    Args:
        tied (Sequence[FormatKey]): At least one tied key.

    Returns:
        FormatKey: The first of ``tied`` in `TIEBREAK_PRIORITY`, else the
            lexicographically smallest key.
    """
    for key in TIEBREAK_PRIORITY:
        if key in tied:
            return key
    return min(tied, key=lambda k: k.value)


class VotingResolver:
    """Resolve an archive's JSON format from a vote over its entries.

    Args:
        settings (DetectionSettings | None): Read ceiling, thresholds and tie policy.
    """

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings: DetectionSettings = settings or DetectionSettings()
        self.classifier = JsonClassifier(self.settings)

    def tally(self, archive_path: Path, entry_names: Iterable[str]) -> VoteTally:
        """Classify each entry and count the known classes.

        Raises:
            ArchiveError: If the archive itself cannot be opened.
        """
        tally = VoteTally()
        with ArchiveReader(archive_path) as reader:
            for name in entry_names:
                try:
                    with reader.open(name) as stream:
                        content, reason = self.classifier.classify_stream(stream)
                except _ENTRY_ERRORS as e:
                    logger.debug("JSON entry sniffing failed for %r: %s", name, e)
                    continue
                key: FormatKey | None = content.format_key
                logger.trace("Entry %r: %s (%s)", name, content.value, reason)
                if content is not JsonContentClass.UNKNOWN and key is not None:
                    tally.cast(key)
        return tally

    def resolve(self, archive_path: str | Path, json_entry_names: Iterable[str]) -> DetectionOutcome:
        """Vote over ``json_entry_names`` of ``archive_path``.

        Args:
            archive_path (str | Path): The archive.
            json_entry_names (Iterable[str]): Candidate entries (generic ``.json``).

        Returns:
            DetectionOutcome: The winner, or ``CONTENT_UNDETERMINED`` /
                ``AMBIGUOUS_VOTE``.
        """
        names: list[str] = list(json_entry_names)
        try:
            tally: VoteTally = self.tally(Path(archive_path), names)
        except ArchiveError as e:
            logger.debug("Failed to perform JSON-entry voting for %s: %s", archive_path, e)
            tally = VoteTally()

        if not tally:
            return DetectionOutcome.fail(
                FailureKind.CONTENT_UNDETERMINED,
                f"JSON voting found no entries classifiable among {len(names)} .json entries.",
            )

        breakdown: str = tally.breakdown()
        logger.debug("JSON votes: %s", breakdown)
        leaders: list[FormatKey] = tally.leaders()
        top: int = tally.count(leaders[0])

        if len(leaders) == 1:
            return DetectionOutcome.ok(
                leaders[0],
                f"JSON voting majority ({leaders[0].value}={top}) over entries: {breakdown}; "
                "no tiebreak needed.",
            )

        tied: str = ", ".join(k.value for k in leaders)
        if self.settings.tie_policy is TiePolicy.FAIL:
            logger.warning("Ambiguous JSON types inside archive (tie in votes): %s", breakdown)
            return DetectionOutcome.fail(
                FailureKind.AMBIGUOUS_VOTE,
                f"Ambiguous JSON in archive (tie between {tied}) over entries: {breakdown}; "
                "please specify the format.",
            )

        winner: FormatKey = break_tie(leaders)
        logger.debug("Tie between %s broken in favor of %s", tied, winner.value)
        return DetectionOutcome.ok(
            winner,
            f"JSON voting tie ({tied} at {top}) over entries: {breakdown}; "
            f"tiebreak by specificity priority selected {winner.value}.",
        )
