# topmark:header:start
#
#   project      : GeoSniff
#   file         : base.py
#   file_relpath : src/geosniff/formats/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format keys and descriptors.

Defines the closed set of geospatial formats GeoSniff can resolve
(`FormatKey`) and the immutable `FormatDescriptor` that the registry stores
for each of them.

A descriptor carries two kinds of name rules:

* ``extensions``: suffixes that identify a *single file* of this format.
* ``archive_required``: suffixes that must **all** be present among the
  entries of an archive for the archive to be recognized as this format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class FormatKey(str, Enum):
    """Stable keys of the supported formats.

    The value is the public string key handed to converter factories.
    """

    GEOJSON = "GeoJson"
    ESRIJSON = "EsriJson"
    GEOJSON_SEQ = "GeoJsonSeq"
    TOPOJSON = "TopoJson"
    KML = "Kml"
    KMZ = "Kmz"
    SHAPEFILE = "Shapefile"
    OSM = "Osm"
    GPX = "Gpx"
    GML = "Gml"
    GDB = "Gdb"
    MAPINFO_INTERCHANGE = "MapInfoInterchange"
    MAPINFO_TAB = "MapInfoTab"
    CSV = "Csv"
    GEOPACKAGE = "GeoPackage"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, key: str | None) -> FormatKey | None:
        """Look up a key by value or member name, ignoring case.

        Args:
            key (str | None): Candidate key such as ``"geojson"`` or ``"GEOJSON_SEQ"``.

        Returns:
            FormatKey | None: The matching member, or None.
        """
        if not key:
            return None
        wanted: str = key.strip().casefold()
        for member in cls:
            if member.value.casefold() == wanted or member.name.casefold() == wanted:
                return member
        return None


def normalize_extension(ext: str) -> str:
    """Return ``ext`` lower-cased with exactly one leading dot (``"SHP"`` -> ``".shp"``)."""
    ext = ext.strip().lower()
    if not ext:
        return ""
    return ext if ext.startswith(".") else "." + ext


def _ext_set(values: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_extension(v) for v in values if v.strip())


@dataclass(frozen=True)
class FormatDescriptor:
    """Immutable description of one supported format.

    Attributes:
        key (FormatKey): Unique format key.
        extensions (frozenset[str]): Single-file suffixes (lower-case, leading dot).
        archive_required (frozenset[str]): Suffixes that must all be present in an
            archive for requirement matching. Empty when the format is recognized
            in archives by other means (fast path, KMZ guard, JSON voting).
        description (str): Human-readable description.
    """

    key: FormatKey
    extensions: frozenset[str] = field(default_factory=frozenset)
    archive_required: frozenset[str] = field(default_factory=frozenset)
    description: str = ""

    def __post_init__(self) -> None:
        # Normalize whatever iterable the builtins passed in
        object.__setattr__(self, "extensions", _ext_set(self.extensions))
        object.__setattr__(self, "archive_required", _ext_set(self.archive_required))

    @property
    def name(self) -> str:
        """The public key string of this format."""
        return self.key.value

    def matches_archive(self, discovered: frozenset[str] | set[str]) -> bool:
        """Return True when every required extension is among ``discovered``.

        Formats without requirements never match.

        Args:
            discovered (frozenset[str] | set[str]): Lower-case extensions found in the
                archive listing.

        Returns:
            bool: Whether the requirement set is fully satisfied.
        """
        if not self.archive_required:
            return False
        return self.archive_required <= discovered
