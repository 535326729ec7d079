# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout qwatch.

Each exception carries an associated exit code used by qwatch commands
to report failures consistently.
"""

from qwatch_lib.core.config import CFG


class QWError(Exception):
    """Common exception type for all recoverable qwatch errors."""

    exit_code = CFG.exit_codes.default


class QWQueueNotFoundError(QWError):
    """Raised when a queue with the requested name does not exist."""

    pass
