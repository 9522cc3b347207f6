# topmark:header:start
#
#   project      : GeoSniff
#   file         : access.py
#   file_relpath : src/geosniff/archives/access.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Archive access without extraction.

Containers are recognized by suffix. Zip and tar archives are read with the
standard library; ``.7z`` archives with `py7zr` and ``.rar`` archives with
`rarfile`. Member data is streamed in memory and never written to storage.

Every error a container library raises for damaged, encrypted or unsupported
data surfaces as `ArchiveError` when opening an archive or an entry. Errors
raised later, while a member stream is being read, belong to
`STREAM_ERRORS`.
"""

from __future__ import annotations

import io
import lzma
import struct
import tarfile
import zipfile
import zlib
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Final

import py7zr
import rarfile
from py7zr.exceptions import (
    Bad7zFile,
    CrcError,
    DecompressionError,
    PasswordRequired,
    UnsupportedCompressionMethodError,
)

from geosniff.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from geosniff.config.logging import GeosniffLogger

logger: GeosniffLogger = get_logger(__name__)

_Handle = zipfile.ZipFile | tarfile.TarFile | py7zr.SevenZipFile | rarfile.RarFile


class ArchiveKind(Enum):
    """Archive containers known by suffix."""

    ZIP = "zip"
    TAR = "tar"
    TAR_GZ = "tar.gz"
    GZIP = "gz"
    SEVEN_Z = "7z"
    RAR = "rar"


# Longest suffixes first so ".tar.gz" wins over ".gz".
_SUFFIX_MAP: Final[tuple[tuple[str, ArchiveKind], ...]] = (
    (".tar.gz", ArchiveKind.TAR_GZ),
    (".tgz", ArchiveKind.TAR_GZ),
    (".tar", ArchiveKind.TAR),
    (".gz", ArchiveKind.GZIP),
    (".zip", ArchiveKind.ZIP),
    (".kmz", ArchiveKind.ZIP),
    (".7z", ArchiveKind.SEVEN_Z),
    (".rar", ArchiveKind.RAR),
)

#: Errors raised while reading an already opened member stream.
STREAM_ERRORS: Final[tuple[type[Exception], ...]] = (
    OSError,
    EOFError,
    zlib.error,
    lzma.LZMAError,
    zipfile.BadZipFile,
    tarfile.TarError,
    rarfile.Error,
)

# Opening an archive or a member additionally reports encryption
# (RuntimeError from zipfile), unknown compression methods
# (NotImplementedError) and truncated 7z headers (struct.error).
_OPEN_ERRORS: Final[tuple[type[Exception], ...]] = (
    *STREAM_ERRORS,
    RuntimeError,
    NotImplementedError,
    struct.error,
    Bad7zFile,
    CrcError,
    DecompressionError,
    PasswordRequired,
    UnsupportedCompressionMethodError,
)


class ArchiveError(Exception):
    """Raised when an archive or one of its entries cannot be read."""


def archive_kind(path: str | Path) -> ArchiveKind | None:
    """Return the container kind implied by the suffix of ``path``, or None."""
    name: str = Path(path).name.lower()
    for suffix, kind in _SUFFIX_MAP:
        if name.endswith(suffix):
            return kind
    return None


def is_archive_file(path: str | Path) -> bool:
    """Return True if ``path`` has an archive suffix (case-insensitive)."""
    return archive_kind(path) is not None


def _open_handle(path: Path, kind: ArchiveKind) -> _Handle:
    if kind is ArchiveKind.ZIP:
        return zipfile.ZipFile(path)
    if kind is ArchiveKind.SEVEN_Z:
        return py7zr.SevenZipFile(path, mode="r")
    if kind is ArchiveKind.RAR:
        return rarfile.RarFile(str(path))
    # "r:*" handles plain and gzip-compressed tarballs
    return tarfile.open(path, mode="r:*")


class ArchiveReader:
    """Open archive handle serving entry names and entry streams.

    Use as a context manager; the underlying handle is closed on exit.

    Args:
        path (Path): The archive file.

    Raises:
        ArchiveError: If the suffix is not an archive suffix or the container
            cannot be opened.
    """

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        kind: ArchiveKind | None = archive_kind(path)
        if kind is None:
            raise ArchiveError(f"No reader for archive type of {path.name}")
        self.kind: ArchiveKind = kind
        self._handle: _Handle | None = None
        try:
            self._handle = _open_handle(path, kind)
        except _OPEN_ERRORS as e:
            raise ArchiveError(f"Cannot open archive {path}: {e}") from e

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying archive handle."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _require_handle(self) -> _Handle:
        if self._handle is None:
            raise ArchiveError(f"Archive {self.path} is closed")
        return self._handle

    def names(self) -> list[str]:
        """Return the names of all non-directory entries, in archive order."""
        handle: _Handle = self._require_handle()
        try:
            if isinstance(handle, zipfile.ZipFile):
                return [info.filename for info in handle.infolist() if not info.is_dir()]
            if isinstance(handle, tarfile.TarFile):
                return [m.name for m in handle.getmembers() if not m.isdir()]
            if isinstance(handle, py7zr.SevenZipFile):
                return [info.filename for info in handle.list() if not info.is_directory]
            return [info.filename for info in handle.infolist() if not info.is_dir()]
        except _OPEN_ERRORS as e:
            raise ArchiveError(f"Cannot list entries of {self.path}: {e}") from e

    def _open_member(self, handle: _Handle, name: str) -> IO[bytes] | None:
        if isinstance(handle, zipfile.ZipFile):
            return handle.open(name)
        if isinstance(handle, tarfile.TarFile):
            return handle.extractfile(name)
        if isinstance(handle, py7zr.SevenZipFile):
            # 7z members are decoded whole; the archive is rewound for the next read
            handle.reset()
            found: dict[str, IO[bytes]] | None = handle.read(targets=[name])
            handle.reset()
            member: IO[bytes] | None = (found or {}).get(name)
            return None if member is None else io.BytesIO(member.read())
        return handle.open(name)

    @contextmanager
    def open(self, name: str) -> Iterator[IO[bytes]]:
        """Yield a readable binary stream for entry ``name``.

        Raises:
            ArchiveError: If the entry is missing, encrypted, compressed with
                an unsupported method, or otherwise cannot be opened.
        """
        handle: _Handle = self._require_handle()
        try:
            stream: IO[bytes] | None = self._open_member(handle, name)
        except (KeyError, *_OPEN_ERRORS) as e:
            raise ArchiveError(f"Cannot open entry {name!r} of {self.path}: {e}") from e
        if stream is None:
            raise ArchiveError(f"Entry {name!r} of {self.path} is missing or not a regular file")
        with stream:
            yield stream


def list_archive_entries(path: str | Path) -> list[str] | None:
    """List the non-directory entries of an archive without extracting it.

    Args:
        path (str | Path): The archive file.

    Returns:
        list[str] | None: Entry names, or None when the archive cannot be listed
            (missing, unreadable, corrupt, or encrypted headers).
    """
    archive_path = Path(path)
    if not archive_path.is_file():
        return None
    try:
        with ArchiveReader(archive_path) as reader:
            return reader.names()
    except ArchiveError as e:
        logger.debug("%s", e)
        return None


@contextmanager
def open_entry_stream(archive_path: str | Path, entry_name: str) -> Iterator[IO[bytes]]:
    """Yield a binary stream for one archive entry.

    Both the archive handle and the entry stream are released on exit.

    Raises:
        ArchiveError: If the archive or the entry cannot be opened.
    """
    with ArchiveReader(Path(archive_path)) as reader, reader.open(entry_name) as stream:
        yield stream
