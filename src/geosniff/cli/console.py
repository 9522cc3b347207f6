# topmark:header:start
#
#   project      : GeoSniff
#   file         : console.py
#   file_relpath : src/geosniff/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for user-facing program output.

Detection results and listings go through the console; diagnostics go
through `logging` and are governed by ``GEOSNIFF_LOG_LEVEL`` instead of
``-v``/``-q``.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """What CLI commands need from a console."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a line of program output."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message."""
        ...

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled, or unchanged when styling is off."""
        ...

    def verdict(self, resolved: bool, text: str) -> str:
        """Return a detection label colored by outcome."""
        ...


class ClickConsole:
    """Console writing through `click.echo`.

    Args:
        enable_color (bool): Whether ANSI styling is emitted.
        out (TextIO | None): Result stream; `sys.stdout` when None.
        err (TextIO | None): Error stream; `sys.stderr` when None.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        self.out: TextIO | None = out
        self.err: TextIO | None = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.err or sys.stderr, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)

    def verdict(self, resolved: bool, text: str) -> str:
        """Green bold for a resolved format, red bold for a failure."""
        return self.styled(text, fg="green" if resolved else "red", bold=True)
