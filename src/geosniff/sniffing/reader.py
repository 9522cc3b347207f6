# topmark:header:start
#
#   project      : GeoSniff
#   file         : reader.py
#   file_relpath : src/geosniff/sniffing/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bounded reads for content sniffing.

Every read pulls at most ``limit`` bytes from its source. One extra byte is
requested so the caller can tell whether the source fit entirely within the
ceiling (``HeadRead.complete``), which gates the full-structure probe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

from geosniff.constants import HEADER_READ_LIMIT, READ_CHUNK_SIZE

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class HeadRead:
    """A decoded prefix of a file or archive entry.

    Attributes:
        text (str): The prefix decoded as UTF-8 (BOM dropped, invalid bytes replaced).
        complete (bool): True when the whole source fits within the read ceiling.
        size (int): Number of bytes kept (at most the ceiling).
    """

    text: str
    complete: bool
    size: int


def read_head_bytes(stream: IO[bytes], limit: int = HEADER_READ_LIMIT) -> tuple[bytes, bool]:
    """Read at most ``limit`` bytes from a binary stream.

    Args:
        stream (IO[bytes]): An open binary stream.
        limit (int): Read ceiling in bytes.

    Returns:
        tuple[bytes, bool]: The bytes read and whether the stream was exhausted
            within the ceiling.
    """
    wanted: int = limit + 1
    chunks: list[bytes] = []
    got = 0
    while got < wanted:
        chunk: bytes = stream.read(min(READ_CHUNK_SIZE, wanted - got))
        if not chunk:
            break
        chunks.append(chunk)
        got += len(chunk)
    data: bytes = b"".join(chunks)
    if len(data) > limit:
        return data[:limit], False
    return data, True


def read_head(stream: IO[bytes], limit: int = HEADER_READ_LIMIT) -> HeadRead:
    """Read and decode a bounded prefix of ``stream``."""
    data, complete = read_head_bytes(stream, limit)
    return HeadRead(
        text=data.decode("utf-8-sig", errors="replace"),
        complete=complete,
        size=len(data),
    )


def read_file_head(path: Path, limit: int = HEADER_READ_LIMIT) -> HeadRead:
    """Read and decode a bounded prefix of the file at ``path``.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with path.open("rb") as fh:
        return read_head(fh, limit)
