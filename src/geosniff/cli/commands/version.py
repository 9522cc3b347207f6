# topmark:header:start
#
#   project      : GeoSniff
#   file         : version.py
#   file_relpath : src/geosniff/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff `version` command.

Prints the GeoSniff version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from geosniff.cli.cmd_common import get_console, get_effective_verbosity
from geosniff.cli.options import OutputFormat, output_format_option
from geosniff.constants import GEOSNIFF_VERSION

if TYPE_CHECKING:
    from geosniff.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of GeoSniff.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of GeoSniff.

    Args:
        output_format (OutputFormat | None): Output format; plain text when None.
    """
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        console.print(json.dumps({"version": GEOSNIFF_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("GeoSniff version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(GEOSNIFF_VERSION, bold=True)}")
    else:
        console.print(console.styled(GEOSNIFF_VERSION, bold=True))
