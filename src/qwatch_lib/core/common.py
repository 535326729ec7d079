# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the qwatch library.

This module provides helpers for YAML I/O, user prompts, conversion between
timestamps and clock ticks, and sizing of rich panels.
"""

from datetime import datetime, timezone
from functools import lru_cache

import readchar
import yaml
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .error import QWError
from .logger import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


@lru_cache(maxsize=1)
def load_yaml_loader() -> type[yaml.SafeLoader]:
    """Return the fastest available safe YAML loader (CSafeLoader if possible)."""
    try:
        from yaml import (
            CSafeLoader as SafeLoader,  # ty: ignore[possibly-missing-import]
        )

        logger.debug("Loaded YAML CLoader.")
    except ImportError:
        from yaml import SafeLoader

        logger.debug("Loaded default YAML loader.")

    return SafeLoader


def yes_or_no_prompt(prompt: str) -> bool:
    """
    Display an interactive yes/no prompt and return the selection.

    The pressed key is highlighted ('y' in green, 'N' in red).
    Any key other than 'y' means 'No'.

    Args:
        prompt (str): The question to display.

    Returns:
        bool: True if the user pressed 'y', False otherwise.
    """
    prompt = f"   {prompt} "
    question = Text("PROMPT", style="magenta") + Text(prompt, style="default")

    with Live(
        question + Text("[y/N]", style="bold default"), refresh_per_second=1
    ) as live:
        key = readchar.readkey().lower()

        if key == "y":
            choice = (
                Text("[", style="bold default")
                + Text("y", style="bold green")
                + Text("/N]", style="bold default")
            )
        else:
            choice = (
                Text("[y/", style="bold default")
                + Text("N", style="bold red")
                + Text("]", style="bold default")
            )

        live.update(question + choice)

    return key == "y"


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Convert a timestamp read from a queue file into an aware UTC datetime.

    Naive timestamps are interpreted as UTC.

    Args:
        value (str | datetime | None): ISO-8601 string, datetime or None.

    Returns:
        datetime | None: The parsed timestamp or None if `value` is None.

    Raises:
        QWError: If the value cannot be interpreted as a timestamp.
    """
    if value is None:
        return None

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise QWError(f"Invalid timestamp '{value}'.") from e

    if not isinstance(value, datetime):
        raise QWError(f"Invalid timestamp '{value}'.")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def tick_to_datetime(tick: int) -> datetime:
    """
    Convert a clock tick (Unix time in whole seconds) to an aware UTC datetime.
    """
    return datetime.fromtimestamp(tick, tz=timezone.utc)


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
):
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """

    term_width = console.size.width
    panel_width = term_width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
