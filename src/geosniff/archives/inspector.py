# topmark:header:start
#
#   project      : GeoSniff
#   file         : inspector.py
#   file_relpath : src/geosniff/archives/inspector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Archive inspection.

Resolves the format of an archive from its entry names, opening entries only
for JSON voting. Steps, first decisive one wins:

1. List entries (no extraction).
2. Collect the extension of every path segment (so ``data.gdb/a.gdbtable``
   contributes ``.gdb``) and note a top-level ``doc.kml``.
3. Fast path on JSON-family entry suffixes.
4. KMZ guard: outer ``.kmz`` suffix or a top-level ``doc.kml``.
5. Majority vote over generic ``.json`` entries.
6. Strict requirement matching in registry priority order.
7. Failure listing the discovered extensions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from geosniff.archives.access import list_archive_entries
from geosniff.archives.voting import VotingResolver
from geosniff.config.logging import get_logger
from geosniff.config.model import DetectionSettings
from geosniff.constants import KMZ_DOC_ENTRY
from geosniff.formats.base import FormatKey
from geosniff.formats.registry import get_format_registry
from geosniff.outcomes import DetectionOutcome, FailureKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from geosniff.config.logging import GeosniffLogger
    from geosniff.formats.base import FormatDescriptor
    from geosniff.formats.registry import FormatRegistry

logger: GeosniffLogger = get_logger(__name__)

#: Entry suffixes that decide the archive format without opening any entry.
FAST_PATH: Final[tuple[tuple[str, FormatKey], ...]] = (
    (".geojson", FormatKey.GEOJSON),
    (".esrijson", FormatKey.ESRIJSON),
    (".topojson", FormatKey.TOPOJSON),
    (".jsonl", FormatKey.GEOJSON_SEQ),
    (".ndjson", FormatKey.GEOJSON_SEQ),
    (".geojsonl", FormatKey.GEOJSON_SEQ),
    (".geojsons", FormatKey.GEOJSON_SEQ),
)

JSON_SUFFIX: Final[str] = ".json"


def segment_extension(segment: str) -> str | None:
    """Return the lower-case extension of one path segment, or None.

    A leading dot (hidden names) and a trailing dot do not count.
    """
    idx: int = segment.rfind(".")
    if 0 < idx < len(segment) - 1:
        return segment[idx:].lower()
    return None


@dataclass(frozen=True)
class EntrySummary:
    """What the entry names of an archive reveal.

    Attributes:
        extensions (frozenset[str]): Extensions of every path segment of every entry.
        has_top_level_doc_kml (bool): Whether ``doc.kml`` sits at the archive root.
        json_entries (tuple[str, ...]): Entries whose file name ends with ``.json``.
    """

    extensions: frozenset[str]
    has_top_level_doc_kml: bool
    json_entries: tuple[str, ...]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> EntrySummary:
        """Summarize a listing of entry names."""
        exts: set[str] = set()
        doc_kml = False
        json_entries: list[str] = []
        for name in names:
            if not name.strip():
                continue
            normalized: str = name.replace("\\", "/").strip("/")
            if normalized.lower() == KMZ_DOC_ENTRY:
                doc_kml = True
            for seg in normalized.split("/"):
                ext: str | None = segment_extension(seg) if seg else None
                if ext is not None:
                    exts.add(ext)
            if normalized.lower().endswith(JSON_SUFFIX):
                json_entries.append(name)
        return cls(
            extensions=frozenset(exts),
            has_top_level_doc_kml=doc_kml,
            json_entries=tuple(json_entries),
        )

    def describe(self) -> str:
        """Return the discovered extensions as a sorted, comma-separated list."""
        return ", ".join(sorted(self.extensions)) or "(none)"


class ArchiveInspector:
    """Resolve the format of an archive from its entries.

    Args:
        settings (DetectionSettings | None): Read ceiling, thresholds, tie policy.
        registry (FormatRegistry | None): Format table; the built-in registry when None.
        lister (Callable[[Path], list[str] | None]): Entry listing collaborator.
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        *,
        registry: FormatRegistry | None = None,
        lister: Callable[[Path], list[str] | None] = list_archive_entries,
    ) -> None:
        self.settings: DetectionSettings = settings or DetectionSettings()
        self.registry: FormatRegistry = registry or get_format_registry()
        self.lister: Callable[[Path], list[str] | None] = lister
        self.voting = VotingResolver(self.settings)

    def inspect(self, archive_path: str | Path) -> DetectionOutcome:
        """Inspect ``archive_path`` and resolve its format.

        Args:
            archive_path (str | Path): The archive file.

        Returns:
            DetectionOutcome: The resolved format or the reason it was not resolved.
        """
        path = Path(archive_path)
        names: list[str] | None = self.lister(path)
        if names is None:
            logger.debug("Failed to list archive entries of %s", path)
            return DetectionOutcome.fail(
                FailureKind.ARCHIVE_LISTING_FAILED, "Failed to list archive entries."
            )
        if not names:
            return DetectionOutcome.fail(
                FailureKind.ARCHIVE_LISTING_FAILED, "Archive contains no entries."
            )

        summary: EntrySummary = EntrySummary.from_names(names)
        logger.debug("Archive %s: extensions %s", path.name, summary.describe())

        for suffix, key in FAST_PATH:
            if suffix in summary.extensions:
                return DetectionOutcome.ok(
                    key, f"Archive contains '{suffix}' entries (entry name fast path)."
                )

        if path.name.lower().endswith(".kmz"):
            return DetectionOutcome.ok(
                FormatKey.KMZ, "KMZ guard detected (outer .kmz extension)."
            )
        if summary.has_top_level_doc_kml:
            return DetectionOutcome.ok(FormatKey.KMZ, "KMZ guard detected (top-level doc.kml).")

        vote: DetectionOutcome | None = None
        if JSON_SUFFIX in summary.extensions and summary.json_entries:
            vote = self.voting.resolve(path, summary.json_entries)
            if vote.success or vote.failure is FailureKind.AMBIGUOUS_VOTE:
                return vote
            logger.debug("%s Falling back to requirement matching.", vote.reason)

        matched: FormatDescriptor | None = self.match_requirements(summary.extensions)
        if matched is not None:
            required: str = ", ".join(sorted(matched.archive_required))
            return DetectionOutcome.ok(
                matched.key, f"Requirement match: {matched.name} (requires {required})."
            )

        if vote is not None and vote.failure is not None:
            return DetectionOutcome.fail(
                vote.failure,
                f"{vote.reason.rstrip('.')}; discovered extensions: {summary.describe()}.",
            )
        return DetectionOutcome.fail(
            FailureKind.FORMAT_UNRECOGNIZED,
            "No archive-based format match found (based on entry names); "
            f"discovered extensions: {summary.describe()}.",
        )

    def match_requirements(self, discovered: frozenset[str]) -> FormatDescriptor | None:
        """Return the first descriptor whose requirement set is fully present."""
        for desc in self.registry.descriptors_with_archive_requirements():
            if desc.matches_archive(discovered):
                return desc
        return None
