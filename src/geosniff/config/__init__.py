# topmark:header:start
#
#   file         : __init__.py
#   file_relpath : src/geosniff/config/__init__.py
#   project      : GeoSniff
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for GeoSniff.

Re-exports the settings model and the TOML loaders.
"""

from __future__ import annotations

from geosniff.config.loaders import discover_config_files, load_settings
from geosniff.config.model import (
    DetectionSettings,
    MutableDetectionSettings,
    SettingsError,
    TiePolicy,
)

__all__ = [
    "DetectionSettings",
    "MutableDetectionSettings",
    "SettingsError",
    "TiePolicy",
    "discover_config_files",
    "load_settings",
]
