# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/archives/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Archive inspection without extraction.

Entry listing and streaming, the archive inspector, and JSON-entry voting.
"""

from __future__ import annotations

from geosniff.archives.access import (
    ArchiveError,
    ArchiveKind,
    ArchiveReader,
    archive_kind,
    is_archive_file,
    list_archive_entries,
    open_entry_stream,
)
from geosniff.archives.inspector import ArchiveInspector, EntrySummary
from geosniff.archives.voting import TIEBREAK_PRIORITY, VoteTally, VotingResolver

__all__ = [
    "TIEBREAK_PRIORITY",
    "ArchiveError",
    "ArchiveInspector",
    "ArchiveKind",
    "ArchiveReader",
    "EntrySummary",
    "VoteTally",
    "VotingResolver",
    "archive_kind",
    "is_archive_file",
    "list_archive_entries",
    "open_entry_stream",
]
