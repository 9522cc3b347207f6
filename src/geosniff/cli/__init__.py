# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/cli/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click front end for GeoSniff.

The command group lives in `geosniff.cli.main`; subcommands live in
`geosniff.cli.commands`.
"""
