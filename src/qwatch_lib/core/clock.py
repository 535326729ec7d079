# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Shared clock emitting the current wall-clock second.

All live labels of qwatch read the current time from a single `TickSource`
instead of running their own timers. Within one tick, every subscriber
observes the same value. The underlying timer only runs while at least
one subscriber is registered.
"""

import threading
import time
from collections.abc import Callable
from functools import lru_cache
from typing import Self

from .config import CFG
from .logger import get_logger

logger = get_logger(__name__)

TickCallback = Callable[[int], None]


class Subscription:
    """
    Handle returned by `TickSource.subscribe`.

    Can be used as a context manager which unsubscribes on exit.
    """

    def __init__(self, source: "TickSource", subscription_id: int):
        self._source = source
        self._id = subscription_id
        self._active = True

    def isActive(self) -> bool:
        """Return True if the subscription still receives ticks."""
        return self._active

    def unsubscribe(self) -> None:
        """
        Stop receiving ticks. Calling this repeatedly has no further effect.

        Takes effect immediately, also for a tick that is being delivered.
        """
        if not self._active:
            return

        self._active = False
        self._source._unsubscribe(self._id)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self.unsubscribe()


class TickSource:
    """
    Process-wide ticking clock.

    Emits the current Unix time in whole seconds every `interval` seconds
    to all subscribers. The emitted value never decreases.

    Attributes:
        interval (float): Time (in seconds) between two successive ticks.
    """

    def __init__(
        self,
        interval: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the tick source. The timer is not started until the first subscription.

        Args:
            interval (float | None): Time between ticks in seconds.
                Defaults to `CFG.clock.tick_interval`.
            clock (Callable[[], float]): Function returning the current wall-clock time.
        """
        self.interval = interval if interval is not None else CFG.clock.tick_interval
        self._clock = clock
        self._tick = int(self._clock())

        self._lock = threading.Lock()
        self._subscribers: dict[int, TickCallback] = {}
        self._next_id = 0

        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

    def now(self) -> int:
        """
        Return the current tick value.

        While the timer is stopped, the value is brought up to date with
        the wall clock on every call.
        """
        with self._lock:
            if self._thread is None:
                self._advance()
            return self._tick

    def isRunning(self) -> bool:
        """Return True if the underlying timer is running."""
        return self._thread is not None

    def subscriberCount(self) -> int:
        """Return the number of registered subscribers."""
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, callback: TickCallback) -> Subscription:
        """
        Register a callback called with the tick value on every tick.

        The first subscription starts the underlying timer.

        Args:
            callback (TickCallback): Function accepting the tick value.

        Returns:
            Subscription: Handle used to stop receiving ticks.
        """
        with self._lock:
            subscription_id = self._next_id
            self._next_id += 1
            self._subscribers[subscription_id] = callback

            if self._thread is None:
                self._start()

        logger.debug(f"Registered tick subscriber {subscription_id}.")
        return Subscription(self, subscription_id)

    def tick(self) -> int:
        """
        Advance the clock to the current wall-clock second and notify all subscribers.

        Subscribers registered when the tick starts all receive the same value,
        unless they are unsubscribed before their callback is reached.
        An exception raised by a subscriber is logged and does not prevent
        delivery to the other subscribers.

        Returns:
            int: The new tick value.
        """
        with self._lock:
            value = self._advance()
            callbacks = list(self._subscribers.items())

        for subscription_id, callback in callbacks:
            # skip subscribers removed by an earlier callback of this tick
            with self._lock:
                if subscription_id not in self._subscribers:
                    continue

            try:
                callback(value)
            except Exception as e:
                logger.error(f"Tick subscriber failed: {e}", exc_info=True)

        return value

    def _unsubscribe(self, subscription_id: int) -> None:
        """Remove a subscriber and stop the timer if no subscriber remains."""
        with self._lock:
            self._subscribers.pop(subscription_id, None)
            if not self._subscribers:
                self._stop()

        logger.debug(f"Removed tick subscriber {subscription_id}.")

    def _start(self) -> None:
        """Start the timer thread. Must be called with the lock held."""
        self._advance()
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), daemon=True
        )
        self._thread.start()
        logger.debug("Started the clock.")

    def _advance(self) -> int:
        """
        Move the tick to the current wall-clock second, never backwards.
        Must be called with the lock held.
        """
        self._tick = max(self._tick, int(self._clock()))
        return self._tick

    def _stop(self) -> None:
        """Signal the timer thread to finish. Must be called with the lock held."""
        if self._stop_event is not None:
            self._stop_event.set()

        self._thread = None
        self._stop_event = None
        logger.debug("Stopped the clock.")

    def _run(self, stop_event: threading.Event) -> None:
        """Body of the timer thread."""
        while not stop_event.wait(self.interval):
            self.tick()


@lru_cache(maxsize=1)
def get_tick_source() -> TickSource:
    """Return the process-wide tick source, creating it on first use."""
    return TickSource()
