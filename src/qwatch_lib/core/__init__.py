# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for qwatch.

This module collects the foundational pieces used across the qwatch codebase:
configuration, error handling, structured logging, the shared clock and
relative time formatting.
"""
