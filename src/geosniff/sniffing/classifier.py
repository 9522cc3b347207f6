# topmark:header:start
#
#   project      : GeoSniff
#   file         : classifier.py
#   file_relpath : src/geosniff/sniffing/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Two-stage JSON classifier.

Stage 1 decodes the payload when it fit entirely within the read ceiling
([`geosniff.sniffing.structure.probe_structure`][]). Stage 2 runs the
heuristic [`geosniff.sniffing.content.ContentSniffer`][] over the prefix.
Each stage reports "undecided" as ``JsonContentClass.UNKNOWN``; the second
stage only runs when the first one is undecided.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

from geosniff.config.logging import get_logger
from geosniff.config.model import DetectionSettings
from geosniff.sniffing.content import ContentSniffer
from geosniff.sniffing.reader import read_file_head, read_head
from geosniff.sniffing.structure import probe_structure
from geosniff.sniffing.types import JsonContentClass

if TYPE_CHECKING:
    from pathlib import Path

    from geosniff.config.logging import GeosniffLogger
    from geosniff.sniffing.content import SniffRule
    from geosniff.sniffing.reader import HeadRead

logger: GeosniffLogger = get_logger(__name__)

Classification = tuple[JsonContentClass, str]


class JsonClassifier:
    """Structure probe followed by the content sniffer.

    Args:
        settings (DetectionSettings | None): Thresholds and read ceiling.
    """

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings: DetectionSettings = settings or DetectionSettings()
        self.sniffer = ContentSniffer(self.settings)

    def classify_head(self, head: HeadRead) -> Classification:
        """Classify an already-read prefix.

        Args:
            head (HeadRead): The bounded read.

        Returns:
            Classification: ``(content_class, stage_reason)``. The reason names the
                deciding stage, or reads ``"header sniff: unknown"``.
        """
        if head.complete:
            content, reason = probe_structure(
                head.text, ndjson_threshold=self.settings.ndjson_threshold
            )
            if content is not JsonContentClass.UNKNOWN:
                return content, reason

        rule: SniffRule | None = self.sniffer.match(head.text)
        if rule is None:
            return JsonContentClass.UNKNOWN, "header sniff: unknown"
        if rule.result is JsonContentClass.GEOJSON_SEQ:
            return rule.result, (
                f"header sniff: {rule.name} (>= {self.settings.ndjson_threshold} JSON lines)"
            )
        return rule.result, f"header sniff: {rule.name}"

    def classify_stream(self, stream: IO[bytes]) -> Classification:
        """Read a bounded prefix of ``stream`` and classify it."""
        return self.classify_head(read_head(stream, self.settings.header_read_limit))

    def classify_file(self, path: Path) -> Classification:
        """Read a bounded prefix of the file at ``path`` and classify it.

        Raises:
            OSError: If the file cannot be read.
        """
        head: HeadRead = read_file_head(path, self.settings.header_read_limit)
        logger.trace("Read %d bytes of %s (complete=%s)", head.size, path, head.complete)
        return self.classify_head(head)
