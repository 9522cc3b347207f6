# topmark:header:start
#
#   project      : GeoSniff
#   file         : detect.py
#   file_relpath : src/geosniff/cli/commands/detect.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff `detect` command.

Detects the format of each PATH and prints one result per path. The exit
code is 0 when every path resolved and 1 otherwise; invalid options or
configuration exit with 2.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from geosniff.cli.cmd_common import get_console, get_effective_verbosity
from geosniff.cli.errors import GeosniffConfigError
from geosniff.cli.exit_codes import ExitCode
from geosniff.cli.options import EnumChoiceParam, OutputFormat, output_format_option
from geosniff.config.loaders import load_settings
from geosniff.config.logging import get_logger
from geosniff.config.model import SettingsError, TiePolicy
from geosniff.detector import Detector

if TYPE_CHECKING:
    from geosniff.cli.console import ConsoleLike
    from geosniff.config.logging import GeosniffLogger
    from geosniff.config.model import DetectionSettings
    from geosniff.outcomes import DetectionOutcome

logger: GeosniffLogger = get_logger(__name__)


def _render_default(
    console: ConsoleLike, path: str, outcome: DetectionOutcome, *, vlevel: int
) -> None:
    if outcome.success:
        if vlevel < 0:
            return
        label: str = console.verdict(True, outcome.format_name or "")
        console.print(f"{path}: {label}")
        console.print(console.styled(f"    {outcome.reason}", dim=True))
        return
    kind: str = outcome.failure.value if outcome.failure is not None else "failed"
    console.print(f"{path}: {console.verdict(False, 'FAILED')} ({kind})")
    console.print(f"    {outcome.reason}")


@click.command(
    name="detect",
    help="Detect the geospatial format of files and archives.",
    epilog="""
Each PATH is resolved independently. The exit status is 0 when every PATH
resolved to a format and 1 otherwise.
""",
)
@click.argument("paths", nargs=-1, required=True, metavar="PATH...")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read detection settings from this TOML file (after discovered files).",
)
@click.option(
    "--no-config",
    "no_config",
    is_flag=True,
    help="Skip discovery of geosniff.toml / pyproject.toml.",
)
@click.option(
    "--tie-policy",
    "tie_policy",
    type=EnumChoiceParam(TiePolicy),
    default=None,
    help=f"Archive vote tie resolution ({', '.join(p.value for p in TiePolicy)}).",
)
@output_format_option
def detect_command(
    *,
    paths: tuple[str, ...],
    config_file: Path | None = None,
    no_config: bool = False,
    tie_policy: TiePolicy | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Detect the format of each path.

    Args:
        paths (tuple[str, ...]): Files or archives to inspect.
        config_file (Path | None): Explicit settings file.
        no_config (bool): Whether to skip config discovery.
        tie_policy (TiePolicy | None): Override of the configured tie policy.
        output_format (OutputFormat | None): Output format; human-readable when None.
    """
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    overrides: dict[str, Any] = {}
    if tie_policy is not None:
        overrides["tie_policy"] = tie_policy.value
    try:
        settings: DetectionSettings = load_settings(
            start=Path.cwd(),
            config_file=config_file,
            discover=not no_config,
            overrides=overrides,
        )
    except SettingsError as e:
        raise GeosniffConfigError(str(e)) from e

    detector = Detector(settings)
    results: list[tuple[str, DetectionOutcome]] = [(p, detector.detect(p)) for p in paths]
    failed: int = sum(1 for _p, o in results if not o.success)

    if fmt is OutputFormat.JSON:
        payload: list[dict[str, Any]] = [{"path": p, **o.to_dict()} for p, o in results]
        console.print(json.dumps(payload, indent=2))
    elif fmt is OutputFormat.NDJSON:
        for p, o in results:
            console.print(json.dumps({"path": p, **o.to_dict()}))
    else:
        for p, o in results:
            _render_default(console, p, o, vlevel=vlevel)
        if vlevel > 0:
            console.print()
            console.print(f"{len(results) - failed} resolved, {failed} failed")

    ctx.exit(ExitCode.FAILURE if failed else ExitCode.SUCCESS)
