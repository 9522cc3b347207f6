# topmark:header:start
#
#   project      : GeoSniff
#   file         : __init__.py
#   file_relpath : src/geosniff/formats/builtins/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in format groups for GeoSniff.

Each submodule exports a ``FORMATS`` list of
[`geosniff.formats.base.FormatDescriptor`][] instances. The registry in
``geosniff.formats.registry`` concatenates these lists once per process.
"""

from __future__ import annotations
