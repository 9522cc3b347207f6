# topmark:header:start
#
#   project      : GeoSniff
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `version` command, help and group defaults."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from geosniff.constants import GEOSNIFF_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli

if TYPE_CHECKING:
    from click.testing import Result


def test_version_outputs_version() -> None:
    """The default output is the bare version string."""
    result: Result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == GEOSNIFF_VERSION


def test_version_json() -> None:
    """Machine output wraps the version in an object."""
    result: Result = run_cli(["version", "--format", "json"])
    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": GEOSNIFF_VERSION}


def test_version_verbose_has_banner() -> None:
    """``-v`` adds a heading."""
    result: Result = run_cli(["--no-color", "-v", "version"])
    assert_SUCCESS(result)
    assert "GeoSniff version:" in result.output


def test_no_subcommand_prints_hint_and_help() -> None:
    """Running the bare group prints a hint and the help text."""
    result: Result = run_cli(["--no-color"])
    assert_SUCCESS(result)
    assert "Hint: use 'geosniff detect PATH...'" in result.output
    assert "detect" in result.output
    assert "formats" in result.output


def test_help_alias() -> None:
    """``-h`` is accepted as a help flag."""
    result: Result = run_cli(["-h"])
    assert_SUCCESS(result)
    assert "GeoSniff: detect geospatial file formats." in result.output
