# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the qwatch command-line tool.

This package provides a live view of work queues: their job counts, their
age shown relative to a shared ticking clock, and whether they are active
or paused, together with the pause/resume action available for each queue.
"""

from .qwatch import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "queues",
    "toggle",
]
