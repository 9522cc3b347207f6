# topmark:header:start
#
#   project      : GeoSniff
#   file         : __init__.py
#   file_relpath : src/geosniff/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff package.

GeoSniff identifies which geospatial interchange format a file or archive
holds (GeoJSON, EsriJSON, TopoJSON, KML/KMZ, Shapefile, GeoPackage, ...)
without fully parsing or extracting it, and explains its decision.

Examples:
    ```python
    from geosniff import detect

    outcome = detect("parks.geojson")
    if outcome.success:
        print(outcome.format_key, outcome.reason)
    ```
"""

from __future__ import annotations

from geosniff.config.model import DetectionSettings, TiePolicy
from geosniff.converters.factory import (
    ConverterFactory,
    SimpleConverterFactory,
    create_converter_for_input,
)
from geosniff.detector import Detector, detect
from geosniff.formats.base import FormatKey
from geosniff.outcomes import DetectionOutcome, FailureKind

__all__ = [
    "ConverterFactory",
    "DetectionOutcome",
    "DetectionSettings",
    "Detector",
    "FailureKind",
    "FormatKey",
    "SimpleConverterFactory",
    "TiePolicy",
    "create_converter_for_input",
    "detect",
]
