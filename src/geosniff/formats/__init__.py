# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/formats/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of the geospatial formats GeoSniff can resolve.

Re-exports the format keys, descriptors and the cached registry accessor.
"""

from __future__ import annotations

from geosniff.formats.base import FormatDescriptor, FormatKey, normalize_extension
from geosniff.formats.registry import ARCHIVE_MATCH_ORDER, FormatRegistry, get_format_registry

__all__ = [
    "ARCHIVE_MATCH_ORDER",
    "FormatDescriptor",
    "FormatKey",
    "FormatRegistry",
    "get_format_registry",
    "normalize_extension",
]
