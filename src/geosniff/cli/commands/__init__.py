# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/cli/commands/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GeoSniff CLI subcommands."""
