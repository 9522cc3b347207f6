# topmark:header:start
#
#   project      : GeoSniff
#   file         : types.py
#   file_relpath : src/geosniff/sniffing/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON content classes produced by the sniffers."""

from __future__ import annotations

from enum import Enum

from geosniff.formats.base import FormatKey


class JsonContentClass(Enum):
    """Classification of a JSON-family payload.

    ``UNKNOWN`` is the normal "undecided" result of every stage.
    """

    UNKNOWN = "unknown"
    GEOJSON = "geojson"
    ESRIJSON = "esrijson"
    GEOJSON_SEQ = "geojson_seq"
    TOPOJSON = "topojson"

    @property
    def format_key(self) -> FormatKey | None:
        """The format this class resolves to; None for ``UNKNOWN``."""
        return _FORMAT_KEYS.get(self)


_FORMAT_KEYS: dict[JsonContentClass, FormatKey] = {
    JsonContentClass.GEOJSON: FormatKey.GEOJSON,
    JsonContentClass.ESRIJSON: FormatKey.ESRIJSON,
    JsonContentClass.GEOJSON_SEQ: FormatKey.GEOJSON_SEQ,
    JsonContentClass.TOPOJSON: FormatKey.TOPOJSON,
}
