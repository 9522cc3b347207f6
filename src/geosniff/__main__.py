# topmark:header:start
#
#   project      : GeoSniff
#   file         : __main__.py
#   file_relpath : src/geosniff/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running GeoSniff via ``python -m geosniff``.

Delegates to `geosniff.cli.main.cli`, the same entry point as the
``geosniff`` console script.
"""

from __future__ import annotations

from geosniff.cli.main import cli

if __name__ == "__main__":
    cli()
