# topmark:header:start
#
#   project      : GeoSniff
#   file         : loaders.py
#   file_relpath : src/geosniff/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load detection settings from TOML sources.

Sources are ``geosniff.toml`` (table ``[detection]``) and ``pyproject.toml``
(table ``[tool.geosniff.detection]``). Parsing is done with `tomlkit` and
returned as plain `dict` structures.

Discovery walks upward from a start directory and merges the files it finds
root-most first, nearest last, so the closest file wins. Within a directory
``geosniff.toml`` overrides ``pyproject.toml``. A source that sets
``root = true`` stops the walk.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from geosniff.config.keys import Toml
from geosniff.config.logging import get_logger
from geosniff.config.model import MutableDetectionSettings, SettingsError
from geosniff.constants import GEOSNIFF_TOML_NAME, PYPROJECT_TOML_NAME

if TYPE_CHECKING:
    from geosniff.config.logging import GeosniffLogger
    from geosniff.config.model import DetectionSettings

logger: GeosniffLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        SettingsError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise SettingsError(f"Cannot read config file {path}: {e}") from e
    except TomlkitParseError as e:
        raise SettingsError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def _geosniff_table(path: Path, data: TomlTable) -> TomlTable:
    """Return the GeoSniff part of a parsed source (``[tool.geosniff]`` for pyproject)."""
    if path.name == PYPROJECT_TOML_NAME:
        tool: Any = data.get(Toml.SECTION_TOOL, {})
        section: Any = tool.get(Toml.SECTION_GEOSNIFF, {}) if isinstance(tool, dict) else {}
        return cast("TomlTable", section) if isinstance(section, dict) else {}
    return data


def _detection_table(path: Path, data: TomlTable) -> TomlTable:
    table: Any = _geosniff_table(path, data).get(Toml.SECTION_DETECTION, {})
    if not isinstance(table, dict):
        raise SettingsError(f"[{Toml.SECTION_DETECTION}] in {path} must be a table")
    return cast("TomlTable", table)


def discover_config_files(start: Path) -> list[Path]:
    """Return config files found by walking upward from ``start``.

    ``pyproject.toml`` files without a ``[tool.geosniff]`` table are skipped.

    Args:
        start (Path): File or directory where discovery starts.

    Returns:
        list[Path]: Discovered files, root-most first and nearest last; within a
            directory ``pyproject.toml`` precedes ``geosniff.toml``.
    """
    per_dir: list[list[Path]] = []
    cur: Path = start.resolve()
    if cur.is_file():
        cur = cur.parent

    while True:
        root_stop_here = False
        dir_entries: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, GEOSNIFF_TOML_NAME):
            p: Path = cur / name
            if not p.is_file():
                continue
            try:
                section: TomlTable = _geosniff_table(p, load_toml_dict(p))
            except SettingsError as e:
                # Best-effort discovery; explicit loading reports the error
                logger.debug("Ignoring unreadable config candidate %s: %s", p, e)
                continue
            if name == PYPROJECT_TOML_NAME and not section:
                continue
            dir_entries.append(p)
            logger.debug("Discovered config file: %s", p)
            if bool(section.get(Toml.KEY_ROOT, False)):
                root_stop_here = True

        if dir_entries:
            per_dir.append(dir_entries)

        parent: Path = cur.parent
        if parent == cur:
            break
        if root_stop_here:
            logger.debug("Stopping upward config discovery at %s due to root=true", cur)
            break
        cur = parent

    ordered: list[Path] = []
    for dir_list in reversed(per_dir):
        ordered.extend(dir_list)
    return ordered


def apply_config_file(draft: MutableDetectionSettings, path: Path) -> MutableDetectionSettings:
    """Overlay the ``[detection]`` table of ``path`` onto ``draft``.

    Args:
        draft (MutableDetectionSettings): The builder to update in place.
        path (Path): A ``geosniff.toml`` or ``pyproject.toml`` file.

    Returns:
        MutableDetectionSettings: ``draft``, for chaining.

    Raises:
        SettingsError: If the file is unreadable or holds invalid values.
    """
    data: TomlTable = load_toml_dict(path)
    draft.apply_table(_detection_table(path, data), source=path)
    draft.config_files.append(path)
    return draft


def load_settings(
    *,
    start: Path | None = None,
    config_file: Path | None = None,
    discover: bool = True,
    overrides: dict[str, Any] | None = None,
) -> DetectionSettings:
    """Build detection settings from defaults, discovered files, and overrides.

    Precedence, lowest to highest: built-in defaults, discovered files,
    ``config_file``, ``overrides``.

    Args:
        start (Path | None): Discovery anchor; defaults to the current directory.
        config_file (Path | None): Explicit config file merged after discovery.
        discover (bool): Whether to walk upward from ``start``.
        overrides (dict[str, Any] | None): ``[detection]``-shaped values, e.g. from
            CLI options.

    Returns:
        DetectionSettings: The frozen settings.

    Raises:
        SettingsError: If any source holds an invalid value.
    """
    draft = MutableDetectionSettings()
    if discover:
        for path in discover_config_files(start or Path.cwd()):
            apply_config_file(draft, path)
    if config_file is not None:
        apply_config_file(draft, config_file)
    if overrides:
        draft.apply_table(overrides)
    settings: DetectionSettings = draft.freeze()
    logger.debug("Resolved detection settings: %s", settings)
    return settings
