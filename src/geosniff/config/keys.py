# topmark:header:start
#
#   project      : GeoSniff
#   file         : keys.py
#   file_relpath : src/geosniff/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for GeoSniff configuration.

This module defines the string constants used when reading and validating
GeoSniff configuration from ``geosniff.toml`` and from
``[tool.geosniff]`` in ``pyproject.toml``.

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by GeoSniff configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - In ``pyproject.toml`` every section lives under ``[tool.geosniff]``.
    """

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_GEOSNIFF: Final[str] = "geosniff"

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [detection]
    SECTION_DETECTION: Final[str] = "detection"

    KEY_HEADER_READ_LIMIT: Final[str] = "header_read_limit"
    KEY_MIN_JSON_PARSE_BYTES: Final[str] = "min_json_parse_bytes"
    KEY_NDJSON_THRESHOLD: Final[str] = "ndjson_threshold"
    KEY_NDJSON_MAX_NON_JSON_LINES: Final[str] = "ndjson_max_non_json_lines"
    KEY_TIE_POLICY: Final[str] = "tie_policy"

    #: Integer keys of the [detection] table, in documentation order.
    DETECTION_INT_KEYS: Final[tuple[str, ...]] = (
        KEY_HEADER_READ_LIMIT,
        KEY_MIN_JSON_PARSE_BYTES,
        KEY_NDJSON_THRESHOLD,
        KEY_NDJSON_MAX_NON_JSON_LINES,
    )
