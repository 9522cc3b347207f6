# topmark:header:start
#
#   project      : GeoSniff
#   file         : model.py
#   file_relpath : src/geosniff/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detection settings model.

This module defines:
    - `DetectionSettings`: an immutable snapshot consumed by the detector,
      the sniffers and the archive voting.
    - `MutableDetectionSettings`: a mutable builder used while merging TOML
      sources and CLI overrides; it can be frozen into `DetectionSettings`
      and thawed back for edits.

Scope:
    - *In scope*: data shapes, defaults, validation and freeze/thaw mechanics.
    - *Out of scope*: filesystem discovery and TOML I/O, which live in
      `geosniff.config.loaders`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from geosniff.config.keys import Toml
from geosniff.config.logging import get_logger
from geosniff.constants import (
    HEADER_READ_LIMIT,
    MIN_JSON_PARSE_BYTES,
    NDJSON_MAX_NON_JSON_LINES,
    NDJSON_THRESHOLD,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from geosniff.config.logging import GeosniffLogger

logger: GeosniffLogger = get_logger(__name__)


class SettingsError(ValueError):
    """Raised when a configuration source holds an invalid value."""


class TiePolicy(str, Enum):
    """How archive voting resolves a tie between the leading formats.

    Attributes:
        TIEBREAK: Pick the first tied format in specificity priority order.
        FAIL: Report the tie as an ambiguous vote.
    """

    TIEBREAK = "tiebreak"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> TiePolicy | None:
        """Return the policy named ``value`` (case-insensitive), or None."""
        if value is None:
            return None
        wanted: str = value.strip().lower()
        for member in cls:
            if member.value == wanted:
                return member
        return None


# ------------------ Immutable runtime settings ------------------


@dataclass(frozen=True, slots=True)
class DetectionSettings:
    """Immutable detection settings.

    Attributes:
        header_read_limit (int): Maximum bytes read from a file or archive entry.
        min_json_parse_bytes (int): Heuristic sniffing is skipped below this size
            (UTF-8 bytes).
        ndjson_threshold (int): JSON-like lines needed to accept NDJSON.
        ndjson_max_non_json_lines (int): Non-JSON-like lines tolerated before the
            NDJSON scan gives up.
        tie_policy (TiePolicy): Archive voting tie resolution.
        config_files (tuple[Path, ...]): Sources merged into this snapshot.
    """

    header_read_limit: int = HEADER_READ_LIMIT
    min_json_parse_bytes: int = MIN_JSON_PARSE_BYTES
    ndjson_threshold: int = NDJSON_THRESHOLD
    ndjson_max_non_json_lines: int = NDJSON_MAX_NON_JSON_LINES
    tie_policy: TiePolicy = TiePolicy.TIEBREAK
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableDetectionSettings:
        """Return a mutable copy of these settings.

        Mirrors `MutableDetectionSettings.freeze`. Prefer thaw, edit, freeze
        over rebuilding snapshots by hand.
        """
        return MutableDetectionSettings(
            header_read_limit=self.header_read_limit,
            min_json_parse_bytes=self.min_json_parse_bytes,
            ndjson_threshold=self.ndjson_threshold,
            ndjson_max_non_json_lines=self.ndjson_max_non_json_lines,
            tie_policy=self.tie_policy,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> dict[str, Any]:
        """Return these settings as a ``[detection]`` TOML table."""
        return {
            Toml.SECTION_DETECTION: {
                Toml.KEY_HEADER_READ_LIMIT: self.header_read_limit,
                Toml.KEY_MIN_JSON_PARSE_BYTES: self.min_json_parse_bytes,
                Toml.KEY_NDJSON_THRESHOLD: self.ndjson_threshold,
                Toml.KEY_NDJSON_MAX_NON_JSON_LINES: self.ndjson_max_non_json_lines,
                Toml.KEY_TIE_POLICY: self.tie_policy.value,
            }
        }


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableDetectionSettings:
    """Mutable settings builder used while merging configuration sources."""

    header_read_limit: int = HEADER_READ_LIMIT
    min_json_parse_bytes: int = MIN_JSON_PARSE_BYTES
    ndjson_threshold: int = NDJSON_THRESHOLD
    ndjson_max_non_json_lines: int = NDJSON_MAX_NON_JSON_LINES
    tie_policy: TiePolicy = TiePolicy.TIEBREAK
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> DetectionSettings:
        """Validate and freeze this builder into `DetectionSettings`.

        Raises:
            SettingsError: If a value is out of range.
        """
        if self.header_read_limit < 1:
            raise SettingsError(
                f"{Toml.KEY_HEADER_READ_LIMIT} must be positive, got {self.header_read_limit}"
            )
        if self.min_json_parse_bytes < 0:
            raise SettingsError(
                f"{Toml.KEY_MIN_JSON_PARSE_BYTES} must not be negative, "
                f"got {self.min_json_parse_bytes}"
            )
        if self.ndjson_threshold < 2:
            raise SettingsError(
                f"{Toml.KEY_NDJSON_THRESHOLD} must be at least 2, got {self.ndjson_threshold}"
            )
        if self.ndjson_max_non_json_lines < 0:
            raise SettingsError(
                f"{Toml.KEY_NDJSON_MAX_NON_JSON_LINES} must not be negative, "
                f"got {self.ndjson_max_non_json_lines}"
            )
        return DetectionSettings(
            header_read_limit=self.header_read_limit,
            min_json_parse_bytes=self.min_json_parse_bytes,
            ndjson_threshold=self.ndjson_threshold,
            ndjson_max_non_json_lines=self.ndjson_max_non_json_lines,
            tie_policy=self.tie_policy,
            config_files=tuple(self.config_files),
        )

    def apply_table(self, table: Mapping[str, Any], *, source: Path | None = None) -> None:
        """Overlay the values of a ``[detection]`` table onto this builder.

        Unknown keys are logged and ignored.

        Args:
            table (Mapping[str, Any]): The parsed ``[detection]`` table.
            source (Path | None): File the table came from, for messages.

        Raises:
            SettingsError: If a known key holds a value of the wrong type.
        """
        where: str = f" in {source}" if source is not None else ""
        for key, value in table.items():
            if key in Toml.DETECTION_INT_KEYS:
                # bool is an int subclass; reject it explicitly
                if isinstance(value, bool) or not isinstance(value, int):
                    raise SettingsError(f"{key}{where} must be an integer, got {value!r}")
                setattr(self, key, value)
            elif key == Toml.KEY_TIE_POLICY:
                policy: TiePolicy | None = (
                    TiePolicy.parse(value) if isinstance(value, str) else None
                )
                if policy is None:
                    allowed: str = ", ".join(p.value for p in TiePolicy)
                    raise SettingsError(f"{key}{where} must be one of {allowed}, got {value!r}")
                self.tie_policy = policy
            else:
                logger.warning("Ignoring unknown detection setting %r%s", key, where)
