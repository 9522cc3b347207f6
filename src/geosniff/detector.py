# topmark:header:start
#
#   project      : GeoSniff
#   file         : detector.py
#   file_relpath : src/geosniff/detector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detection entry point.

`Detector.detect` validates the input path, routes archives to the
[`geosniff.archives.inspector.ArchiveInspector`][] and resolves single files
by extension, using the two-stage JSON classifier for generic ``*json``
suffixes.

Every call returns exactly one [`geosniff.outcomes.DetectionOutcome`][];
unexpected exceptions are logged and surfaced as ``UNEXPECTED_ERROR``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from geosniff.archives.access import is_archive_file
from geosniff.archives.inspector import ArchiveInspector
from geosniff.config.logging import get_logger
from geosniff.config.model import DetectionSettings
from geosniff.formats.base import FormatKey
from geosniff.formats.registry import get_format_registry
from geosniff.outcomes import DetectionOutcome, FailureKind
from geosniff.sniffing.classifier import JsonClassifier

if TYPE_CHECKING:
    from os import stat_result

    from geosniff.config.logging import GeosniffLogger
    from geosniff.formats.base import FormatDescriptor
    from geosniff.formats.registry import FormatRegistry

logger: GeosniffLogger = get_logger(__name__)

#: JSON-family formats whose own suffix is decisive for a single file.
EXPLICIT_JSON_FORMATS: Final[frozenset[FormatKey]] = frozenset(
    {
        FormatKey.GEOJSON,
        FormatKey.ESRIJSON,
        FormatKey.TOPOJSON,
        FormatKey.GEOJSON_SEQ,
    }
)


class Detector:
    """Resolve the geospatial format of a file or archive.

    A detector holds no per-call state and may be shared between threads.

    Args:
        settings (DetectionSettings | None): Detection settings; defaults when None.
        registry (FormatRegistry | None): Format table; the built-in registry when None.
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        *,
        registry: FormatRegistry | None = None,
    ) -> None:
        self.settings: DetectionSettings = settings or DetectionSettings()
        self.registry: FormatRegistry = registry or get_format_registry()
        self.classifier = JsonClassifier(self.settings)
        self.inspector = ArchiveInspector(self.settings, registry=self.registry)

    def detect(self, path: str | Path | None) -> DetectionOutcome:
        """Detect the format of ``path``.

        Args:
            path (str | Path | None): The input file or archive.

        Returns:
            DetectionOutcome: Exactly one success or failure, with a reason.
        """
        try:
            invalid: DetectionOutcome | None = self._validate(path)
            if invalid is not None:
                logger.debug("Rejected input %r: %s", path, invalid.reason)
                return invalid
            target = Path(str(path))
            if is_archive_file(target):
                logger.debug("Inspecting archive %s", target)
                return self.inspector.inspect(target)
            return self._detect_single_file(target)
        except Exception as e:
            logger.exception("Unexpected error while detecting %s", path)
            return DetectionOutcome.fail(
                FailureKind.UNEXPECTED_ERROR,
                f"Unexpected error during detection: {type(e).__name__}: {e}",
            )

    def _validate(self, path: str | Path | None) -> DetectionOutcome | None:
        """Return a failure for an unusable input path, or None when it is usable."""
        if path is None or not str(path).strip():
            return DetectionOutcome.fail(FailureKind.INPUT_INVALID, "Input path is required.")
        target = Path(str(path))
        if not target.exists():
            return DetectionOutcome.fail(
                FailureKind.INPUT_INVALID, f"Input file not found: '{target}'."
            )
        if not target.is_file():
            return DetectionOutcome.fail(
                FailureKind.INPUT_INVALID, f"Input path is not a regular file: '{target}'."
            )
        st: stat_result = target.stat()
        if st.st_size == 0:
            return DetectionOutcome.fail(
                FailureKind.INPUT_INVALID, f"Input file is empty (0 bytes): '{target}'."
            )
        return None

    def _detect_single_file(self, path: Path) -> DetectionOutcome:
        ext: str = path.suffix.lower()
        desc: FormatDescriptor | None = self.registry.lookup(ext) if ext else None

        if desc is not None and desc.key in EXPLICIT_JSON_FORMATS:
            return DetectionOutcome.ok(
                desc.key, f"Mapped extension '{ext}' to format '{desc.name}' (explicit mapping)."
            )

        if desc is None and ext.endswith("json"):
            return self._detect_json(path)

        if desc is None:
            reason: str = (
                f"Unknown input file extension '{ext}'." if ext else "Input file has no extension."
            )
            logger.warning("%s (%s)", reason, path)
            return DetectionOutcome.fail(FailureKind.FORMAT_UNRECOGNIZED, reason)

        return DetectionOutcome.ok(
            desc.key, f"Mapped extension '{ext}' to format '{desc.name}' (extension mapping)."
        )

    def _detect_json(self, path: Path) -> DetectionOutcome:
        content, stage = self.classifier.classify_file(path)
        key: FormatKey | None = content.format_key
        if key is None:
            reason = "Unable to determine JSON format (GeoJson / EsriJson / GeoJsonSeq / TopoJson)."
            logger.error("%s (%s)", reason, path)
            return DetectionOutcome.fail(FailureKind.CONTENT_UNDETERMINED, reason)
        return DetectionOutcome.ok(key, f"Detected JSON format '{key.value}' (reason: {stage}).")


def detect(path: str | Path | None, settings: DetectionSettings | None = None) -> DetectionOutcome:
    """Detect the format of ``path`` with a fresh `Detector`.

    Args:
        path (str | Path | None): The input file or archive.
        settings (DetectionSettings | None): Detection settings; defaults when None.

    Returns:
        DetectionOutcome: The detection result.
    """
    return Detector(settings).detect(path)
