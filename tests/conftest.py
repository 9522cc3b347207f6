# topmark:header:start
#
#   project      : GeoSniff
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the GeoSniff test suite.

This file sets up global fixtures, typed wrappers around pytest decorators,
and small builders for the files and archives the detection tests inspect.

Notes:
    Tests should respect the immutable/mutable settings split:

    - Build settings using `geosniff.config.MutableDetectionSettings`, then
      `freeze()` into a `geosniff.config.DetectionSettings` for detector calls.
    - Do **not** mutate a frozen `DetectionSettings`. Use `thaw()`, edit,
      then `freeze()` again (see `make_settings`).
"""

from __future__ import annotations

import io
import json
import tarfile
import zipfile
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import py7zr
import pytest

from geosniff.config import DetectionSettings, MutableDetectionSettings
from geosniff.config import logging as gs_logging

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.slow)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_geosniff_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure GeoSniff's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop ``GEOSNIFF_LOG_LEVEL``.
    """
    monkeypatch.delenv(gs_logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    gs_logging.setup_logging(level=gs_logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test from an empty project directory.

    A ``pyproject.toml`` with ``root = true`` stops config discovery, so
    files above ``tmp_path`` never leak into the resolved settings.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "pyproject.toml").write_text("[tool.geosniff]\nroot = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


# --- Payload builders ---------------------------------------------------------


def geojson_text(*, features: int = 1, pad_to: int = 0) -> str:
    """Return a GeoJSON FeatureCollection, optionally padded to ``pad_to`` bytes."""
    doc: dict[str, Any] = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [float(i), 0.5]},
                "properties": {"id": i},
            }
            for i in range(features)
        ],
    }
    return _pad(doc, pad_to)


def esrijson_text(*, features: int = 1, pad_to: int = 0) -> str:
    """Return an EsriJSON feature set, optionally padded to ``pad_to`` bytes."""
    doc: dict[str, Any] = {
        "geometryType": "esriGeometryPoint",
        "spatialReference": {"wkid": 4326},
        "features": [
            {"geometry": {"x": float(i), "y": 0.5}, "attributes": {"id": i}}
            for i in range(features)
        ],
    }
    return _pad(doc, pad_to)


def topojson_text(*, pad_to: int = 0) -> str:
    """Return a minimal TopoJSON topology, optionally padded to ``pad_to`` bytes."""
    doc: dict[str, Any] = {
        "type": "Topology",
        "objects": {"example": {"type": "GeometryCollection", "geometries": []}},
        "arcs": [],
    }
    return _pad(doc, pad_to)


def ndjson_text(lines: int = 3) -> str:
    """Return ``lines`` GeoJSON features, one per line."""
    return "".join(
        json.dumps(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [float(i), 1.0]},
                "properties": {},
            }
        )
        + "\n"
        for i in range(lines)
    )


def _pad(doc: dict[str, Any], pad_to: int) -> str:
    text: str = json.dumps(doc)
    if len(text) < pad_to:
        doc["note"] = "x" * (pad_to - len(text))
        text = json.dumps(doc)
    return text


# --- File and archive builders ------------------------------------------------


def write_file(path: Path, content: str | bytes) -> Path:
    """Write ``content`` to ``path`` (creating parents) and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def make_zip(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    """Create a ZIP archive at ``path`` holding ``entries`` (name to content)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


def make_tar(path: Path, entries: Mapping[str, str | bytes], *, mode: str = "w:gz") -> Path:
    """Create a tarball at ``path`` holding ``entries``; gzip-compressed by default."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, mode) as tf:  # type: ignore[call-overload]
        for name, content in entries.items():
            data: bytes = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return path


def make_7z(path: Path, entries: Mapping[str, str | bytes]) -> Path:
    """Create a 7z archive at ``path`` holding ``entries`` (name to content)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with py7zr.SevenZipFile(path, mode="w") as archive:
        for name, content in entries.items():
            archive.writestr(content, name)
    return path


def patch_zip_entry(
    path: Path, name: str, *, flag_bits: int = 0, compress_type: int | None = None
) -> Path:
    """Rewrite the central-directory record of one zip entry in place.

    ``flag_bits`` are OR-ed into the general purpose flags (``0x1`` marks the
    entry encrypted); ``compress_type`` replaces the compression method.
    Local headers and data are left untouched.
    """
    data = bytearray(path.read_bytes())
    encoded: bytes = name.encode("utf-8")
    pos: int = data.find(b"PK\x01\x02")
    while pos != -1:
        name_len: int = int.from_bytes(data[pos + 28 : pos + 30], "little")
        if bytes(data[pos + 46 : pos + 46 + name_len]) == encoded:
            flags: int = int.from_bytes(data[pos + 8 : pos + 10], "little") | flag_bits
            data[pos + 8 : pos + 10] = flags.to_bytes(2, "little")
            if compress_type is not None:
                data[pos + 10 : pos + 12] = compress_type.to_bytes(2, "little")
            path.write_bytes(bytes(data))
            return path
        pos = data.find(b"PK\x01\x02", pos + 4)
    raise AssertionError(f"no central directory record for {name!r}")


def make_settings(**overrides: Any) -> DetectionSettings:
    """Return frozen `DetectionSettings` built from defaults and overrides.

    Args:
        **overrides (Any): Attribute overrides applied to the mutable builder.

    Returns:
        DetectionSettings: A validated, immutable snapshot.
    """
    m = MutableDetectionSettings()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
