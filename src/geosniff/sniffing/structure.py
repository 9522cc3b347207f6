# topmark:header:start
#
#   project      : GeoSniff
#   file         : structure.py
#   file_relpath : src/geosniff/sniffing/structure.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Structure probe for complete JSON payloads.

The probe decodes a payload that fit entirely within the read ceiling and
classifies its top-level structure. It never raises on malformed input: a
document that does not decode is retried as newline-delimited JSON, and
anything still undecided yields ``JsonContentClass.UNKNOWN``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from geosniff.config.logging import get_logger
from geosniff.constants import NDJSON_THRESHOLD
from geosniff.sniffing.types import JsonContentClass

if TYPE_CHECKING:
    from geosniff.config.logging import GeosniffLogger

logger: GeosniffLogger = get_logger(__name__)

#: GeoJSON ``type`` values (RFC 7946), case-folded.
GEOJSON_TYPES: Final[frozenset[str]] = frozenset(
    t.casefold()
    for t in (
        "FeatureCollection",
        "Feature",
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    )
)

ESRI_KEYS: Final[frozenset[str]] = frozenset({"spatialreference", "geometrytype"})

Probe = tuple[JsonContentClass, str]

UNDECIDED: Final[Probe] = (JsonContentClass.UNKNOWN, "")


def _keys(obj: dict[str, Any]) -> dict[str, Any]:
    """Return ``obj`` with case-folded keys (first occurrence wins)."""
    folded: dict[str, Any] = {}
    for key, value in obj.items():
        folded.setdefault(key.casefold(), value)
    return folded


def classify_object(obj: dict[str, Any]) -> Probe:
    """Classify a decoded top-level JSON object.

    Args:
        obj (dict[str, Any]): The decoded object.

    Returns:
        Probe: The content class and a short justification.
    """
    members: dict[str, Any] = _keys(obj)
    type_value: Any = members.get("type")
    type_name: str = type_value.casefold() if isinstance(type_value, str) else ""

    if type_name == "topology":
        return JsonContentClass.TOPOJSON, "structure probe: 'type' is 'Topology'"
    if ESRI_KEYS & members.keys():
        return JsonContentClass.ESRIJSON, "structure probe: spatialReference/geometryType member"
    if type_name in GEOJSON_TYPES:
        return JsonContentClass.GEOJSON, f"structure probe: GeoJSON 'type' is '{type_value}'"
    if "features" in members:
        return JsonContentClass.ESRIJSON, "structure probe: 'features' without a GeoJSON 'type'"
    return UNDECIDED


def probe_ndjson(text: str, threshold: int = NDJSON_THRESHOLD) -> Probe:
    """Accept ``text`` as NDJSON when every non-blank line decodes on its own.

    At least ``threshold`` lines are required and each must decode to an
    object or an array.
    """
    count = 0
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            item: Any = json.loads(line)
        except (ValueError, RecursionError):
            return UNDECIDED
        if not isinstance(item, (dict, list)):
            return UNDECIDED
        count += 1
    if count >= threshold:
        return JsonContentClass.GEOJSON_SEQ, f"structure probe: NDJSON ({count} JSON lines)"
    return UNDECIDED


def probe_structure(text: str, *, ndjson_threshold: int = NDJSON_THRESHOLD) -> Probe:
    """Classify a complete JSON payload by decoding it.

    Args:
        text (str): The whole payload.
        ndjson_threshold (int): Lines needed when falling back to NDJSON.

    Returns:
        Probe: ``(content_class, reason)``; ``UNDECIDED`` when the structure is
            not recognized.
    """
    if not text.strip():
        return UNDECIDED
    try:
        doc: Any = json.loads(text)
    except (ValueError, RecursionError) as e:
        # Not a single document; maybe one document per line
        logger.trace("Full decode failed (%s); probing for NDJSON", e)
        return probe_ndjson(text, ndjson_threshold)

    if isinstance(doc, list):
        if doc and isinstance(doc[0], dict):
            return JsonContentClass.GEOJSON_SEQ, "structure probe: top-level array of objects"
        return UNDECIDED
    if isinstance(doc, dict):
        return classify_object(doc)
    return UNDECIDED
