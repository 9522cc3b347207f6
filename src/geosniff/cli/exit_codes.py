# topmark:header:start
#
#   project      : GeoSniff
#   file         : exit_codes.py
#   file_relpath : src/geosniff/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the GeoSniff CLI.

``USAGE_ERROR`` shares Click's own usage-error code (2) so that invalid flags
and invalid configuration are reported the same way.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the GeoSniff CLI.

    Attributes:
        SUCCESS: Every input resolved to a format.
        FAILURE: At least one input did not resolve.
        USAGE_ERROR: Invalid command line or configuration.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2
