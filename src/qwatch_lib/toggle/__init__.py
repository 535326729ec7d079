# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Pausing and resuming of queues.

The `toggle` command performs the single action available for a queue:
it pauses an active queue and resumes a paused one.
"""

from .cli import toggle

__all__ = [
    "toggle",
]
