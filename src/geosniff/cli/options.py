# topmark:header:start
#
#   project      : GeoSniff
#   file         : options.py
#   file_relpath : src/geosniff/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options and parameter types.

Centralizes reusable options (verbosity, color, output format) and their
resolution logic so commands and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, ParamSpec, TypeVar

import click

from geosniff.cli.errors import GeosniffUsageError

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")
E = TypeVar("E", bound=Enum)


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON array of per-item objects.
      NDJSON: One JSON object per line.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Click parameter type accepting an Enum member by value, case-insensitively.

    Args:
        enum_cls (type[E]): Enum whose string values are the accepted choices.
    """

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls: type[E] = enum_cls
        self.name: str = enum_cls.__name__.lower()
        self.by_value: dict[str, E] = {str(m.value).lower(): m for m in enum_cls}

    def get_metavar(self, param: click.Parameter, *args: Any, **kwargs: Any) -> str:
        return "[" + "|".join(self.by_value) + "]"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E:
        if isinstance(value, self.enum_cls):
            return value
        member: E | None = self.by_value.get(str(value).strip().lower())
        if member is None:
            self.fail(
                f"Invalid value '{value}'. Must be one of: {', '.join(self.by_value)}",
                param,
                ctx,
            )
        return member


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Args:
        verbose_count (int): Number of ``-v`` flags.
        quiet_count (int): Number of ``-q`` flags.

    Returns:
        int: ``verbose_count`` when positive, ``-quiet_count`` otherwise (0 = normal).

    Raises:
        GeosniffUsageError: If both ``-v`` and ``-q`` were given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise GeosniffUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count if verbose_count > 0 else -quiet_count


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Decide whether program output is styled.

    An explicit ``--color always|never`` wins; otherwise ``FORCE_COLOR`` (any
    value but ``0``) enables and ``NO_COLOR`` disables styling, and a TTY on
    stdout decides the rest. Machine formats never style their payloads.

    Args:
        cli_mode (ColorMode | None): Explicit mode from ``--color``/``--no-color``.
        stdout_isatty (bool | None): TTY state of stdout; probed when None.

    Returns:
        bool: True if ANSI styling should be emitted.
    """
    if cli_mode is ColorMode.ALWAYS:
        return True
    if cli_mode is ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR"):
        return False
    return sys.stdout.isatty() if stdout_isatty is None else stdout_isatty


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase program-output verbosity.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress program output (failures are still reported).",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--format`` option."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
