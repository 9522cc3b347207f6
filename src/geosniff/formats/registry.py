# topmark:header:start
#
#   project      : GeoSniff
#   file         : registry.py
#   file_relpath : src/geosniff/formats/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format registry for GeoSniff.

Builds the process-wide table of [`geosniff.formats.base.FormatDescriptor`][]
objects from the built-in topical modules. The registry is constructed lazily
on first access, cached, and never mutated afterwards: lookups return shared
immutable descriptors and the internal maps are read-only proxies, so
concurrent detections need no locking.

Notes:
    * Extension lookups are case-insensitive.
    * An extension may belong to one format only; duplicates are a
      construction error.
    * Archive requirement matching walks `ARCHIVE_MATCH_ORDER`, which lists
      the most specific requirement sets first so that a superset format wins
      over any format whose requirements it also satisfies.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import import_module
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, cast

from geosniff.config.logging import GeosniffLogger, get_logger
from geosniff.formats.base import FormatDescriptor, FormatKey, normalize_extension

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence
    from types import ModuleType

logger: GeosniffLogger = get_logger(__name__)

_BUILTIN_MODULES: Final[tuple[str, ...]] = (
    "geosniff.formats.builtins.json_family",
    "geosniff.formats.builtins.xml_family",
    "geosniff.formats.builtins.containers",
)

#: Priority for strict archive requirement matching (most specific first).
ARCHIVE_MATCH_ORDER: Final[tuple[FormatKey, ...]] = (
    FormatKey.MAPINFO_TAB,
    FormatKey.SHAPEFILE,
    FormatKey.GEOJSON,
    FormatKey.ESRIJSON,
    FormatKey.TOPOJSON,
    FormatKey.GDB,
    FormatKey.GEOPACKAGE,
    FormatKey.MAPINFO_INTERCHANGE,
    FormatKey.KML,
    FormatKey.GML,
    FormatKey.GPX,
    FormatKey.OSM,
    FormatKey.CSV,
)


def _iter_builtin_formats() -> Iterator[FormatDescriptor]:
    """Yield built-in descriptors from the topical modules."""
    for modname in _BUILTIN_MODULES:
        mod: ModuleType = import_module(modname)
        formats: Any = getattr(mod, "FORMATS", None)
        if not isinstance(formats, list):
            raise TypeError(f"Module {modname} has no FORMATS list")
        for obj in cast("Sequence[object]", formats):
            if not isinstance(obj, FormatDescriptor):
                raise TypeError(f"Non-FormatDescriptor entry in {modname}.FORMATS: {obj!r}")
            yield obj


class FormatRegistry:
    """Read-only table of format descriptors.

    Args:
        descriptors (Iterable[FormatDescriptor]): The descriptors to register.
        archive_order (Sequence[FormatKey]): Priority used by
            `descriptors_with_archive_requirements`. Descriptors with
            requirements that are missing from this sequence are appended in key
            order.

    Raises:
        ValueError: If a key or a single-file extension is registered twice.
    """

    def __init__(
        self,
        descriptors: Iterable[FormatDescriptor],
        *,
        archive_order: Sequence[FormatKey] = ARCHIVE_MATCH_ORDER,
    ) -> None:
        by_key: dict[FormatKey, FormatDescriptor] = {}
        by_ext: dict[str, FormatDescriptor] = {}
        for desc in descriptors:
            if desc.key in by_key:
                raise ValueError(f"Duplicate format key: {desc.key.value}")
            by_key[desc.key] = desc
            for ext in sorted(desc.extensions):
                owner: FormatDescriptor | None = by_ext.get(ext)
                if owner is not None:
                    raise ValueError(
                        f"Extension {ext} claimed by both {owner.name} and {desc.name}"
                    )
                by_ext[ext] = desc

        self._by_key: Mapping[FormatKey, FormatDescriptor] = MappingProxyType(by_key)
        self._by_ext: Mapping[str, FormatDescriptor] = MappingProxyType(by_ext)

        ordered: list[FormatDescriptor] = [
            by_key[k] for k in archive_order if k in by_key and by_key[k].archive_required
        ]
        leftovers: list[FormatDescriptor] = sorted(
            (d for d in by_key.values() if d.archive_required and d not in ordered),
            key=lambda d: d.name,
        )
        self._archive_ordered: tuple[FormatDescriptor, ...] = tuple(ordered + leftovers)

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[FormatDescriptor]:
        return iter(self._by_key.values())

    def get(self, key: FormatKey) -> FormatDescriptor:
        """Return the descriptor registered for ``key``.

        Raises:
            KeyError: If the key is not registered.
        """
        return self._by_key[key]

    def lookup(self, extension: str) -> FormatDescriptor | None:
        """Return the descriptor owning a single-file extension.

        Args:
            extension (str): Extension with or without the leading dot; any case.

        Returns:
            FormatDescriptor | None: The owning descriptor, or None when the
                extension is not registered (e.g. the generic ``.json``).
        """
        return self._by_ext.get(normalize_extension(extension))

    def descriptors_with_archive_requirements(self) -> tuple[FormatDescriptor, ...]:
        """Return requirement-bearing descriptors in matching priority order."""
        return self._archive_ordered

    def extensions(self) -> Mapping[str, FormatDescriptor]:
        """Return the read-only extension map."""
        return self._by_ext


@lru_cache(maxsize=1)
def get_format_registry() -> FormatRegistry:
    """Return (and cache) the built-in format registry."""
    registry = FormatRegistry(_iter_builtin_formats())
    logger.debug("Loaded %d formats", len(registry))
    return registry
