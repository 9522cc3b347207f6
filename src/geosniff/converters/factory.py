# topmark:header:start
#
#   project      : GeoSniff
#   file         : factory.py
#   file_relpath : src/geosniff/converters/factory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Converter factory seam.

Converters themselves live outside GeoSniff. This module defines the minimal
protocols a converter and its factory must satisfy, a name-only
`SimpleConverterFactory` covering every format key, and
`create_converter_for_input`, which runs detection and asks a factory for
the matching converter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from geosniff.config.logging import get_logger
from geosniff.detector import Detector
from geosniff.formats.base import FormatKey
from geosniff.outcomes import DetectionOutcome, FailureKind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from geosniff.config.logging import GeosniffLogger
    from geosniff.config.model import DetectionSettings

logger: GeosniffLogger = get_logger(__name__)


@runtime_checkable
class Converter(Protocol):
    """A converter for one input format."""

    @property
    def name(self) -> str:
        """Name of the converter (e.g. ``"GeoJson"``)."""
        ...


@runtime_checkable
class ConverterFactory(Protocol):
    """Creates converters from format keys."""

    def try_create(self, key: str) -> Converter | None:
        """Return a converter for ``key``, or None when none is registered."""
        ...


@dataclass(frozen=True)
class SimpleConverter:
    """Name-only converter."""

    name: str

    def __str__(self) -> str:
        return f"Converter: {self.name}"


# File geodatabases are handled by the "FileGdb" converter.
_CONVERTER_NAMES: dict[FormatKey, str] = {key: key.value for key in FormatKey}
_CONVERTER_NAMES[FormatKey.GDB] = "FileGdb"


class SimpleConverterFactory:
    """Factory returning a `SimpleConverter` for every known format key.

    Keys are matched case-insensitively.

    Args:
        constructors (Mapping[str, Callable[[], Converter]] | None): Custom key to
            constructor table; one `SimpleConverter` per `FormatKey` when None.
    """

    def __init__(self, constructors: Mapping[str, Callable[[], Converter]] | None = None) -> None:
        if constructors is None:
            constructors = {
                key.value: (lambda name=name: SimpleConverter(name))
                for key, name in _CONVERTER_NAMES.items()
            }
        self._constructors: dict[str, Callable[[], Converter]] = {
            k.casefold(): v for k, v in constructors.items()
        }

    def keys(self) -> list[str]:
        """Return the registered keys (case-folded), sorted."""
        return sorted(self._constructors)

    def try_create(self, key: str) -> Converter | None:
        """Return a new converter for ``key``, or None for blank or unknown keys."""
        if not key or not key.strip():
            return None
        ctor: Callable[[], Converter] | None = self._constructors.get(key.strip().casefold())
        return None if ctor is None else ctor()


def create_converter_for_input(
    factory: ConverterFactory,
    path: str | Path,
    *,
    settings: DetectionSettings | None = None,
    detector: Detector | None = None,
) -> tuple[Converter | None, DetectionOutcome]:
    """Detect the format of ``path`` and create the matching converter.

    Args:
        factory (ConverterFactory): Converter source.
        path (str | Path): The input file or archive.
        settings (DetectionSettings | None): Detection settings for a new detector.
        detector (Detector | None): Detector to reuse; takes precedence over ``settings``.

    Returns:
        tuple[Converter | None, DetectionOutcome]: The converter (None on failure)
            and the outcome. A detected format without a converter yields an
            ``UNMAPPED_FORMAT`` failure.
    """
    outcome: DetectionOutcome = (detector or Detector(settings)).detect(path)
    if not outcome.success or outcome.format_key is None:
        return None, outcome

    converter: Converter | None = factory.try_create(outcome.format_key.value)
    if converter is None:
        reason: str = (
            f"{outcome.reason} No converter registered for format '{outcome.format_key.value}'."
        )
        logger.warning("%s", reason)
        return None, DetectionOutcome.fail(FailureKind.UNMAPPED_FORMAT, reason)
    logger.debug("Created converter %s for %s", converter.name, path)
    return converter, outcome
