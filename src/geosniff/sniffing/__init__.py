# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/sniffing/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON-family content sniffing.

Bounded reads, the structure probe, the heuristic rule chain, and the
two-stage classifier that combines them.
"""

from __future__ import annotations

from geosniff.sniffing.classifier import JsonClassifier
from geosniff.sniffing.content import SNIFF_RULES, ContentSniffer, SniffRule
from geosniff.sniffing.reader import HeadRead, read_file_head, read_head
from geosniff.sniffing.structure import probe_structure
from geosniff.sniffing.types import JsonContentClass

__all__ = [
    "SNIFF_RULES",
    "ContentSniffer",
    "HeadRead",
    "JsonClassifier",
    "JsonContentClass",
    "SniffRule",
    "probe_structure",
    "read_file_head",
    "read_head",
]
