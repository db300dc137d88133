"""Named stopwatch timers reporting elapsed milliseconds."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "TimeTaken"


class MeasureTimer:
    """Runs any number of timers at once, each under its own category."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._started: dict[str, float] = {}

    def tick(self, category: str = DEFAULT_CATEGORY) -> None:
        """Start (or restart) the timer for ``category``."""
        self._started[category] = self._clock()

    def tock(self, category: str = DEFAULT_CATEGORY, log_result: bool = True) -> float:
        """Stop the timer for ``category`` and return the elapsed milliseconds.

        Returns 0.0 and logs a warning if the category was never started.
        """
        now = self._clock()
        started = self._started.pop(category, None)
        if started is None:
            logger.warning("MeasureTimer.tock error: <%s> no such category ticked.", category)
            return 0.0
        elapsed = (now - started) * 1000.0
        if log_result:
            logger.info("%s %1.3f ms", category, elapsed)
        return elapsed


_default_timer = MeasureTimer()


def tick(category: str = DEFAULT_CATEGORY) -> None:
    """Start a timer for ``category`` on the shared timer."""
    _default_timer.tick(category)


def tock(category: str = DEFAULT_CATEGORY, log_result: bool = True) -> float:
    """Stop the shared timer for ``category`` and return elapsed milliseconds."""
    return _default_timer.tock(category, log_result)


class ScopeTimer:
    """Context manager that times its block and logs the duration on exit."""

    def __init__(self, category: str = DEFAULT_CATEGORY, timer: Optional[MeasureTimer] = None) -> None:
        self.category = category
        self.elapsed: Optional[float] = None
        self._timer = timer if timer is not None else _default_timer

    def __enter__(self) -> ScopeTimer:
        self._timer.tick(self.category)
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed = self._timer.tock(self.category)