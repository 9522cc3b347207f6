# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/converters/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Converter factory protocols and detection glue."""

from __future__ import annotations

from geosniff.converters.factory import (
    Converter,
    ConverterFactory,
    SimpleConverter,
    SimpleConverterFactory,
    create_converter_for_input,
)

__all__ = [
    "Converter",
    "ConverterFactory",
    "SimpleConverter",
    "SimpleConverterFactory",
    "create_converter_for_input",
]
