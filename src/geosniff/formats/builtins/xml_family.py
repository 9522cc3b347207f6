# topmark:header:start
#
#   project      : GeoSniff
#   file         : xml_family.py
#   file_relpath : src/geosniff/formats/builtins/xml_family.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""XML-based vector formats (KML, GML, GPX, OSM XML)."""

from __future__ import annotations

from geosniff.formats.base import FormatDescriptor, FormatKey

FORMATS: list[FormatDescriptor] = [
    FormatDescriptor(
        key=FormatKey.KML,
        extensions=frozenset({".kml"}),
        archive_required=frozenset({".kml"}),
        description="Keyhole Markup Language (*.kml)",
    ),
    FormatDescriptor(
        key=FormatKey.GML,
        extensions=frozenset({".gml"}),
        archive_required=frozenset({".gml"}),
        description="Geography Markup Language (*.gml)",
    ),
    FormatDescriptor(
        key=FormatKey.GPX,
        extensions=frozenset({".gpx"}),
        archive_required=frozenset({".gpx"}),
        description="GPS Exchange Format (*.gpx)",
    ),
    FormatDescriptor(
        key=FormatKey.OSM,
        extensions=frozenset({".osm"}),
        archive_required=frozenset({".osm"}),
        description="OpenStreetMap XML (*.osm)",
    ),
]
