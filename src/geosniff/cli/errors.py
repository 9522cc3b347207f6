# topmark:header:start
#
#   project      : GeoSniff
#   file         : errors.py
#   file_relpath : src/geosniff/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the GeoSniff CLI.

Exceptions prefer the project console if available (see `show()`); if no
console is present in the Click context, they fall back to Click's default
styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from geosniff.cli.exit_codes import ExitCode


class GeosniffError(click.ClickException):
    """Base class for all GeoSniff CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class GeosniffUsageError(GeosniffError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class GeosniffConfigError(GeosniffError):
    """Error for configuration errors (unreadable or invalid config)."""

    exit_code = ExitCode.USAGE_ERROR
