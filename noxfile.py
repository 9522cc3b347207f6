# topmark:header:start
#
#   project      : GeoSniff
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff project automation via Nox (using uv-backed virtualenvs).

Sessions:
  - `lint` / `format_check` / `format`: Ruff.
  - `qa`: pytest (fast tests) and pyright, once per supported Python.
  - `slow`: threaded and otherwise slow detector tests.
  - `property_test`: on-disk archive property tests (opt-in).

The interpreter matrix follows the ``Programming Language :: Python :: X.Y``
classifiers in `pyproject.toml`; `nox -s lint` and `nox -s format_check`
run by default.
"""

from __future__ import annotations

import pathlib
import re
import sys
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

if sys.version_info >= (3, 11):
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _toml_loads = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

PYPROJECT: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"
_CLASSIFIER_RE: re.Pattern[str] = re.compile(r"^Programming Language :: Python :: (\d+)\.(\d+)$")


def supported_pythons(pyproject: pathlib.Path = PYPROJECT) -> list[str]:
    """Return the ``X.Y`` versions named in the project classifiers.

    Falls back to the running interpreter when the file or the classifiers
    are missing, so `nox -l` still works in a partial checkout.
    """
    try:
        doc: dict[str, Any] = _toml_loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return [CURRENT_PYTHON_VERSION]

    classifiers: Any = doc.get("project", {}).get("classifiers", [])
    found: set[tuple[int, int]] = set()
    for classifier in classifiers if isinstance(classifiers, list) else []:
        m: re.Match[str] | None = _CLASSIFIER_RE.match(str(classifier))
        if m:
            found.add((int(m.group(1)), int(m.group(2))))
    return [f"{major}.{minor}" for major, minor in sorted(found)] or [CURRENT_PYTHON_VERSION]


PYTHONS: list[str] = supported_pythons()

nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv"

DEV_INSTALL: tuple[str, ...] = ("-e", ".[dev]")
FAST_MARKERS: str = "not slow and not hypothesis_slow"


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the fast test suite and pyright."""
    session.install(*DEV_INSTALL)
    session.run("pytest", "-q", "-m", FAST_MARKERS, *session.posargs)
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint checks."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting without changing files."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "format", ".")


@nox.session(python=CURRENT_PYTHON_VERSION)
def slow(session: nox.Session) -> None:
    """Run the tests marked ``slow`` (concurrent detection)."""
    session.install(*DEV_INSTALL)
    session.run("pytest", "-q", "-m", "slow", *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def property_test(session: nox.Session) -> None:
    """Run the long-running archive property tests."""
    session.install(*DEV_INSTALL)
    session.run("pytest", "-vv", "-m", "hypothesis_slow", "tests/property")
