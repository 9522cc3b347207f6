# topmark:header:start
#
#   project      : GeoSniff
#   file         : constants.py
#   file_relpath : src/geosniff/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    GEOSNIFF_VERSION: str = get_version("geosniff")
except PackageNotFoundError:  # running from a source checkout
    GEOSNIFF_VERSION = "0.0.0+unknown"

# Bounded reads: maximum bytes pulled from a file or archive entry.
HEADER_READ_LIMIT: Final[int] = 64 * 1024

# Heuristic sniffing is skipped for payloads smaller than this (in UTF-8 bytes).
MIN_JSON_PARSE_BYTES: Final[int] = 512

# NDJSON: JSON-like lines needed to accept, non-JSON-like lines tolerated.
NDJSON_THRESHOLD: Final[int] = 2
NDJSON_MAX_NON_JSON_LINES: Final[int] = 2

# Chunk size used when streaming bounded reads.
READ_CHUNK_SIZE: Final[int] = 8192

# Configuration sources
GEOSNIFF_TOML_NAME: Final[str] = "geosniff.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"

# Top-level entry that marks a zip as KMZ.
KMZ_DOC_ENTRY: Final[str] = "doc.kml"
