# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Formatting of timestamps relative to the current time.

`format_relative` is a pure function of the target time, the current time and
the formatting options: it never reads the wall clock. `RelativeTimeLabel`
memoizes the formatted value and recomputes it only when the current time,
the target, or the options change, so a label driven by the shared clock is
recomputed at most once per tick.
"""

import math
from dataclasses import dataclass
from datetime import datetime

MINUTES_IN_HOUR = 60
MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400
MINUTES_IN_YEAR = 525600


@dataclass(frozen=True)
class RelativeTimeOptions:
    """Options controlling the output of `format_relative`."""

    # Add 'ago' to past and 'in' to future times.
    add_suffix: bool = False
    # Render sub-minute differences with second granularity.
    include_seconds: bool = False
    # Use approximate, friendly phrasing instead of exact rounded counts.
    humanize: bool = False


def format_relative(
    target: datetime, now: datetime, options: RelativeTimeOptions | None = None
) -> str:
    """
    Describe the distance between `target` and `now` in words.

    Examples (with `add_suffix`):
        target 65 seconds before now -> "1 minute ago"
        target 3 minutes after now   -> "in 3 minutes"
        target 2 hours before now, humanized -> "about 2 hours ago"

    Args:
        target (datetime): The described point in time.
        now (datetime): The reference point in time.
        options (RelativeTimeOptions | None): Formatting options.

    Returns:
        str: Human-readable distance, never empty.
    """
    options = options or RelativeTimeOptions()

    future = target > now
    earlier, later = (now, target) if future else (target, now)
    seconds = (later - earlier).total_seconds()

    if options.humanize:
        distance = _format_humanized(
            seconds, _months_between(earlier, later), options.include_seconds
        )
    else:
        distance = _format_strict(seconds, options.include_seconds)

    if not options.add_suffix:
        return distance
    return f"in {distance}" if future else f"{distance} ago"


class RelativeTimeLabel:
    """
    Live label showing a fixed timestamp relative to the current time.

    Attributes:
        recomputations (int): Number of times the text has been recomputed.
    """

    def __init__(self, target: datetime, options: RelativeTimeOptions | None = None):
        self._target = target
        self._options = options or RelativeTimeOptions()

        self._key: tuple[datetime, datetime, RelativeTimeOptions] | None = None
        self._text = ""
        self.recomputations = 0

    def getTarget(self) -> datetime:
        return self._target

    def getOptions(self) -> RelativeTimeOptions:
        return self._options

    def setTarget(self, target: datetime) -> None:
        self._target = target

    def setOptions(self, options: RelativeTimeOptions) -> None:
        self._options = options

    def render(self, now: datetime) -> str:
        """
        Return the label text for the given current time.

        The text is recomputed only if `now`, the target, or the options
        differ from the previous call.
        """
        key = (self._target, now, self._options)
        if key != self._key:
            self._text = format_relative(self._target, now, self._options)
            self._key = key
            self.recomputations += 1

        return self._text


def _format_strict(seconds: float, include_seconds: bool) -> str:
    """Format a distance using the largest fitting unit and a rounded count."""
    minutes = seconds / 60

    if minutes < 1:
        if not include_seconds:
            return "less than a minute"
        return _count(_round(seconds), "second")

    if minutes < MINUTES_IN_HOUR:
        return _count(_round(minutes), "minute")

    if minutes < MINUTES_IN_DAY:
        return _count(_round(minutes / MINUTES_IN_HOUR), "hour")

    if minutes < MINUTES_IN_MONTH:
        return _count(_round(minutes / MINUTES_IN_DAY), "day")

    if minutes < MINUTES_IN_YEAR:
        months = _round(minutes / MINUTES_IN_MONTH)
        # 11.5+ months round up to a full year
        if months == 12:
            return _count(1, "year")
        return _count(months, "month")

    return _count(_round(minutes / MINUTES_IN_YEAR), "year")


def _format_humanized(seconds: float, months: int, include_seconds: bool) -> str:
    """Format a distance using approximate, friendly phrases."""
    seconds = int(seconds)
    minutes = _round(seconds / 60)

    if minutes < 2:
        if include_seconds:
            if seconds < 5:
                return _less_than(5, "second")
            if seconds < 10:
                return _less_than(10, "second")
            if seconds < 20:
                return _less_than(20, "second")
            if seconds < 40:
                return "half a minute"
            if seconds < 60:
                return _less_than(1, "minute")
            return _count(1, "minute")

        if minutes == 0:
            return _less_than(1, "minute")
        return _count(minutes, "minute")

    if minutes < 45:
        return _count(minutes, "minute")

    if minutes < 90:
        return f"about {_count(1, 'hour')}"

    if minutes < MINUTES_IN_DAY:
        return f"about {_count(_round(minutes / MINUTES_IN_HOUR), 'hour')}"

    # up to 1.75 days
    if minutes < 2520:
        return _count(1, "day")

    if minutes < MINUTES_IN_MONTH:
        return _count(_round(minutes / MINUTES_IN_DAY), "day")

    if minutes < MINUTES_IN_TWO_MONTHS:
        return f"about {_count(_round(minutes / MINUTES_IN_MONTH), 'month')}"

    if months < 12:
        return _count(max(_round(minutes / MINUTES_IN_MONTH), 1), "month")

    years, months_since_start_of_year = divmod(months, 12)
    if months_since_start_of_year < 3:
        return f"about {_count(years, 'year')}"
    if months_since_start_of_year < 9:
        return f"over {_count(years, 'year')}"
    return f"almost {_count(years + 1, 'year')}"


def _months_between(earlier: datetime, later: datetime) -> int:
    """Return the number of full calendar months between two datetimes."""
    months = (later.year - earlier.year) * 12 + later.month - earlier.month

    # the last month is not complete yet
    if months > 0 and (later.day, later.time()) < (earlier.day, earlier.time()):
        months -= 1

    return months


def _round(value: float) -> int:
    """Round half away from zero (for non-negative values)."""
    return math.floor(value + 0.5)


def _count(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _less_than(count: int, unit: str) -> str:
    if count == 1:
        return f"less than a {unit}"
    return f"less than {_count(count, unit)}"
