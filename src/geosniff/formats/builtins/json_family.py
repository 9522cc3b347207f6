# topmark:header:start
#
#   project      : GeoSniff
#   file         : json_family.py
#   file_relpath : src/geosniff/formats/builtins/json_family.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON-based vector formats.

Exports:
    FORMATS: GeoJSON, EsriJSON, TopoJSON and GeoJSON text sequences.

Notes:
    - The generic ``.json`` suffix is deliberately absent: a ``.json`` file is
      resolved by content sniffing, not by name.
    - Each flavor requires only its own dedicated suffix inside an archive.
      Sequences have no requirement set; their suffixes are handled by the
      archive fast path.
"""

from __future__ import annotations

from geosniff.formats.base import FormatDescriptor, FormatKey

FORMATS: list[FormatDescriptor] = [
    FormatDescriptor(
        key=FormatKey.GEOJSON,
        extensions=frozenset({".geojson"}),
        archive_required=frozenset({".geojson"}),
        description="GeoJSON (FeatureCollection / Feature / geometry objects)",
    ),
    FormatDescriptor(
        key=FormatKey.ESRIJSON,
        extensions=frozenset({".esrijson"}),
        archive_required=frozenset({".esrijson"}),
        description="Esri JSON feature set (spatialReference / geometryType)",
    ),
    FormatDescriptor(
        key=FormatKey.TOPOJSON,
        extensions=frozenset({".topojson"}),
        archive_required=frozenset({".topojson"}),
        description='TopoJSON ("type": "Topology")',
    ),
    FormatDescriptor(
        key=FormatKey.GEOJSON_SEQ,
        extensions=frozenset({".jsonl", ".ndjson", ".geojsonl", ".geojsons"}),
        description="Newline-delimited GeoJSON (NDJSON / GeoJSON text sequence)",
    ),
]
