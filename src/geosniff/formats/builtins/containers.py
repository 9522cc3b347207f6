# topmark:header:start
#
#   project      : GeoSniff
#   file         : containers.py
#   file_relpath : src/geosniff/formats/builtins/containers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Multi-file, database and tabular formats.

Exports:
    FORMATS: KMZ, Shapefile, File Geodatabase, MapInfo (MIF and TAB),
        GeoPackage and CSV.

Notes:
    - Shapefile and MapInfo TAB are sidecar families: an archive only counts
      as one of them when every mandatory member suffix is present.
    - ``.gdb`` is a *directory* suffix. Archive inspection collects extensions
      from every path segment so ``data.gdb/a00000001.gdbtable`` yields ``.gdb``.
    - KMZ carries no requirement set; archives are routed to it by the KMZ
      guard (outer ``.kmz`` or a top-level ``doc.kml``).
"""

from __future__ import annotations

from geosniff.formats.base import FormatDescriptor, FormatKey

FORMATS: list[FormatDescriptor] = [
    FormatDescriptor(
        key=FormatKey.KMZ,
        extensions=frozenset({".kmz"}),
        description="Zipped KML (*.kmz, conventionally holding doc.kml)",
    ),
    FormatDescriptor(
        key=FormatKey.SHAPEFILE,
        extensions=frozenset({".shp"}),
        archive_required=frozenset({".shp", ".shx", ".dbf"}),
        description="ESRI Shapefile (*.shp with .shx and .dbf sidecars)",
    ),
    FormatDescriptor(
        key=FormatKey.GDB,
        extensions=frozenset({".gdb"}),
        archive_required=frozenset({".gdb"}),
        description="Esri File Geodatabase (*.gdb folder)",
    ),
    FormatDescriptor(
        key=FormatKey.MAPINFO_INTERCHANGE,
        extensions=frozenset({".mif"}),
        archive_required=frozenset({".mif"}),
        description="MapInfo Interchange Format (*.mif/*.mid)",
    ),
    FormatDescriptor(
        key=FormatKey.MAPINFO_TAB,
        extensions=frozenset({".tab", ".map", ".dat", ".id"}),
        archive_required=frozenset({".tab", ".dat", ".map", ".id"}),
        description="MapInfo TAB (*.tab with .dat, .map and .id members)",
    ),
    FormatDescriptor(
        key=FormatKey.GEOPACKAGE,
        extensions=frozenset({".gpkg"}),
        archive_required=frozenset({".gpkg"}),
        description="OGC GeoPackage (*.gpkg)",
    ),
    FormatDescriptor(
        key=FormatKey.CSV,
        extensions=frozenset({".csv"}),
        archive_required=frozenset({".csv"}),
        description="Delimited text with coordinate columns (*.csv)",
    ),
]
