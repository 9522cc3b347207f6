# topmark:header:start
#
#   project      : GeoSniff
#   file         : test_factory.py
#   file_relpath : tests/converters/test_factory.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the converter factory seam."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geosniff.converters.factory import (
    Converter,
    ConverterFactory,
    SimpleConverter,
    SimpleConverterFactory,
    create_converter_for_input,
)
from geosniff.formats.base import FormatKey
from geosniff.outcomes import FailureKind
from tests.conftest import make_zip, parametrize, write_file

if TYPE_CHECKING:
    from pathlib import Path


def test_simple_factory_covers_every_key() -> None:
    """Every format key yields a converter."""
    factory = SimpleConverterFactory()
    assert isinstance(factory, ConverterFactory)
    for key in FormatKey:
        conv: Converter | None = factory.try_create(key.value)
        assert conv is not None
        assert isinstance(conv, Converter)


@parametrize(
    "key, name",
    [
        ("GeoJson", "GeoJson"),
        ("geojson", "GeoJson"),
        (" Kmz ", "Kmz"),
        ("Gdb", "FileGdb"),
    ],
)
def test_try_create_is_case_insensitive(key: str, name: str) -> None:
    """Keys match regardless of case and surrounding blanks."""
    conv: Converter | None = SimpleConverterFactory().try_create(key)
    assert conv is not None
    assert conv.name == name
    assert str(conv) == f"Converter: {name}"


@parametrize("key", ["", "   ", "Parquet"])
def test_try_create_unknown(key: str) -> None:
    """Blank and unknown keys yield no converter."""
    assert SimpleConverterFactory().try_create(key) is None


def test_custom_constructors() -> None:
    """A factory can be limited to a subset of keys."""
    factory = SimpleConverterFactory({"Kml": lambda: SimpleConverter("Kml")})
    assert factory.keys() == ["kml"]
    assert factory.try_create("GeoJson") is None


def test_create_converter_for_input(tmp_path: Path) -> None:
    """Detection and creation chain through on success."""
    archive: Path = make_zip(tmp_path / "b.zip", {"doc.kml": "<kml/>"})
    conv, outcome = create_converter_for_input(SimpleConverterFactory(), archive)
    assert outcome.success
    assert conv is not None
    assert conv.name == "Kmz"


def test_detection_failure_is_passed_through(tmp_path: Path) -> None:
    """A failed detection yields no converter and the original outcome."""
    p: Path = write_file(tmp_path / "a.xyz", "x")
    conv, outcome = create_converter_for_input(SimpleConverterFactory(), p)
    assert conv is None
    assert outcome.failure is FailureKind.FORMAT_UNRECOGNIZED


def test_unmapped_format(tmp_path: Path) -> None:
    """A detected format without a converter becomes UNMAPPED_FORMAT."""
    p: Path = write_file(tmp_path / "a.gpx", "<gpx/>")
    factory = SimpleConverterFactory({"Kml": lambda: SimpleConverter("Kml")})
    conv, outcome = create_converter_for_input(factory, p)
    assert conv is None
    assert outcome.failure is FailureKind.UNMAPPED_FORMAT
    assert outcome.reason.startswith("Mapped extension '.gpx'")
    assert outcome.reason.endswith("No converter registered for format 'Gpx'.")
