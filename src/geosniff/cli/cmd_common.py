# topmark:header:start
#
#   project      : GeoSniff
#   file         : cmd_common.py
#   file_relpath : src/geosniff/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import click

from geosniff.cli.console import ClickConsole

if TYPE_CHECKING:
    from geosniff.cli.console import ConsoleLike


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the context, creating a plain one if missing."""
    ctx.ensure_object(dict)
    console: object | None = ctx.obj.get("console")
    if console is None:
        console = ClickConsole(enable_color=False)
        ctx.obj["console"] = console
    return cast("ConsoleLike", console)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 when unset)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))
