# topmark:header:start
#
#   project      : GeoSniff
#   file         : formats.py
#   file_relpath : src/geosniff/cli/commands/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff `formats` command.

Lists the formats GeoSniff can resolve, with their single-file extensions
and archive requirements.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from geosniff.cli.cmd_common import get_console, get_effective_verbosity
from geosniff.cli.options import OutputFormat, output_format_option
from geosniff.formats.registry import get_format_registry

if TYPE_CHECKING:
    from geosniff.cli.console import ConsoleLike
    from geosniff.formats.base import FormatDescriptor


def _serialize(desc: FormatDescriptor, *, details: bool) -> dict[str, Any]:
    data: dict[str, Any] = {"name": desc.name, "description": desc.description}
    if details:
        data["extensions"] = sorted(desc.extensions)
        data["archive_required"] = sorted(desc.archive_required)
    return data


@click.command(
    name="formats",
    help="List all supported formats.",
)
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Show extensions and archive requirements.",
)
@output_format_option
def formats_command(
    *,
    show_details: bool = False,
    output_format: OutputFormat | None = None,
) -> None:
    """List supported formats.

    Args:
        show_details (bool): If True, shows extensions and archive requirements.
        output_format (OutputFormat | None): Output format; human-readable when None.
    """
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)
    descriptors: list[FormatDescriptor] = sorted(get_format_registry(), key=lambda d: d.name)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt is OutputFormat.JSON:
        payload = [_serialize(d, details=show_details) for d in descriptors]
        console.print(json.dumps(payload, indent=2))
        return
    if fmt is OutputFormat.NDJSON:
        for d in descriptors:
            console.print(json.dumps(_serialize(d, details=show_details)))
        return

    if vlevel > 0:
        console.print(console.styled("Supported formats:\n", bold=True, underline=True))

    num_width: int = len(str(len(descriptors)))
    k_len: int = max(len(d.name) for d in descriptors)
    for idx, d in enumerate(descriptors, start=1):
        descr: str = console.styled(d.description, dim=True)
        console.print(f"{idx:>{num_width}}. {d.name:<{k_len}} {descr}")
        if show_details:
            exts: str = ", ".join(sorted(d.extensions)) or "-"
            required: str = ", ".join(sorted(d.archive_required)) or "-"
            console.print(f"      extensions      : {exts}")
            console.print(f"      archive requires: {required}")
