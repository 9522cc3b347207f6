# topmark:header:start
#
#   project      : GeoSniff
#   file         : content.py
#   file_relpath : src/geosniff/sniffing/content.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Heuristic content sniffer for JSON-family prefixes.

The sniffer inspects a bounded, possibly truncated text prefix and applies an
ordered chain of rules; the first rule whose predicate matches decides the
class. Rules are plain data in `SNIFF_RULES` so their order is reviewable in
one place:

1. TopoJSON: a ``"type"`` key (any case) whose value is exactly ``"Topology"``.
2. EsriJSON: a ``"spatialReference"`` or ``"geometryType"`` property.
3. GeoJsonSeq: at least ``ndjson_threshold`` JSON-like lines before more than
   ``ndjson_max_non_json_lines`` other lines.
4. GeoJSON: ``"FeatureCollection"``, ``"Feature"`` or ``"coordinates"``.

Prefixes shorter than ``min_json_parse_bytes`` (UTF-8) are never classified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from geosniff.config.logging import get_logger
from geosniff.config.model import DetectionSettings
from geosniff.sniffing.types import JsonContentClass

if TYPE_CHECKING:
    from collections.abc import Callable

    from geosniff.config.logging import GeosniffLogger

logger: GeosniffLogger = get_logger(__name__)

_TOPOLOGY_RE: Final[re.Pattern[str]] = re.compile(r'"(?i:type)"\s*:\s*"Topology"')
_ESRI_RE: Final[re.Pattern[str]] = re.compile(r'"(?:spatialReference|geometryType)"', re.IGNORECASE)
_GEOJSON_RE: Final[re.Pattern[str]] = re.compile(
    r'"(?:FeatureCollection|Feature|coordinates)"', re.IGNORECASE
)

# A lone opening bracket is the first line of a pretty-printed document.
_BARE_OPENERS: Final[frozenset[str]] = frozenset({"{", "["})


def is_json_like_line(line: str) -> bool:
    """Return True if a trimmed line looks like a self-contained JSON value."""
    line = line.strip()
    return line[:1] in _BARE_OPENERS and line not in _BARE_OPENERS


def looks_like_ndjson(text: str, threshold: int, max_non_json_lines: int) -> bool:
    """Scan lines for a newline-delimited JSON layout.

    Blank lines are skipped. The scan accepts once ``threshold`` JSON-like lines
    were seen and rejects once more than ``max_non_json_lines`` other lines were
    seen, whichever comes first.

    Args:
        text (str): The prefix to scan.
        threshold (int): JSON-like lines needed to accept.
        max_non_json_lines (int): Other lines tolerated.

    Returns:
        bool: Whether the prefix looks like NDJSON.
    """
    json_lines = 0
    other_lines = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        if is_json_like_line(line):
            json_lines += 1
            if json_lines >= threshold:
                return True
        else:
            other_lines += 1
            if other_lines > max_non_json_lines:
                return False
    return False


@dataclass(frozen=True)
class SniffRule:
    """One step of the sniffing chain.

    Attributes:
        name (str): Short description used in detection reasons.
        predicate (Callable[[str, DetectionSettings], bool]): Match test on the prefix.
        result (JsonContentClass): Class returned when the predicate matches.
    """

    name: str
    predicate: Callable[[str, DetectionSettings], bool]
    result: JsonContentClass


SNIFF_RULES: Final[tuple[SniffRule, ...]] = (
    SniffRule(
        name="TopoJSON fingerprint",
        predicate=lambda text, _s: _TOPOLOGY_RE.search(text) is not None,
        result=JsonContentClass.TOPOJSON,
    ),
    SniffRule(
        name="EsriJSON fingerprint",
        predicate=lambda text, _s: _ESRI_RE.search(text) is not None,
        result=JsonContentClass.ESRIJSON,
    ),
    SniffRule(
        name="NDJSON heuristic",
        predicate=lambda text, s: looks_like_ndjson(
            text, s.ndjson_threshold, s.ndjson_max_non_json_lines
        ),
        result=JsonContentClass.GEOJSON_SEQ,
    ),
    SniffRule(
        name="GeoJSON fingerprint (Feature/coordinates/FeatureCollection)",
        predicate=lambda text, _s: _GEOJSON_RE.search(text) is not None,
        result=JsonContentClass.GEOJSON,
    ),
)


class ContentSniffer:
    """Ordered rule chain over a bounded text prefix.

    Args:
        settings (DetectionSettings | None): Thresholds; defaults when None.
        rules (tuple[SniffRule, ...]): The chain, evaluated top to bottom.
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        rules: tuple[SniffRule, ...] = SNIFF_RULES,
    ) -> None:
        self.settings: DetectionSettings = settings or DetectionSettings()
        self.rules: tuple[SniffRule, ...] = rules

    def match(self, text: str) -> SniffRule | None:
        """Return the first rule matching ``text``, or None."""
        if not text.strip():
            return None
        size: int = len(text.encode("utf-8"))
        if size < self.settings.min_json_parse_bytes:
            logger.trace(
                "Prefix of %d bytes is below the %d-byte sniffing minimum",
                size,
                self.settings.min_json_parse_bytes,
            )
            return None
        for rule in self.rules:
            if rule.predicate(text, self.settings):
                logger.trace("Sniff rule matched: %s", rule.name)
                return rule
        return None

    def classify(self, text: str) -> JsonContentClass:
        """Classify a text prefix; ``UNKNOWN`` when no rule matches."""
        rule: SniffRule | None = self.match(text)
        return JsonContentClass.UNKNOWN if rule is None else rule.result
