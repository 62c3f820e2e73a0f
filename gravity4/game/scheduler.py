"""
scheduler.py - Virtual-clock queue for deferred settle continuations

The game session never sleeps. After committing a move or a gravity flip it
schedules a continuation a fixed delay ahead and returns. Whoever drives the
game (tests, the CLI, the Gymnasium env) advances the clock, which runs the
continuations that fell due in deadline order, FIFO for equal deadlines.
"""

import heapq
import itertools
from typing import Any, Callable, List, Optional, Tuple

from gravity4.debug import debug


class SettleHandle:
    """A scheduled callback that can be cancelled before it runs."""

    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.when = when
        self._callback = callback
        self._args = args
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)

    def _run(self) -> None:
        self.done = True
        self._callback(*self._args)

    def __repr__(self) -> str:
        name = getattr(self._callback, "__name__", repr(self._callback))
        state = "cancelled" if self.cancelled else "done" if self.done else "pending"
        return f"<SettleHandle {name} at {self.when:.3f} {state}>"


class SettleScheduler:
    """
    Deterministic deferred-task queue with a virtual clock.

    Callbacks may schedule further callbacks; those run in the same advance
    if they fall due before the target time.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, SettleHandle]] = []
        self._counter = itertools.count()

    def time(self) -> float:
        """Return the current virtual time in seconds."""
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> SettleHandle:
        """Schedule ``callback(*args)`` to run ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        handle = SettleHandle(self._now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        debug.trace(f"Scheduled {handle!r}", "scheduler")
        return handle

    def pending(self) -> int:
        """Number of scheduled callbacks that have not run or been cancelled."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def next_deadline(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def _drop_cancelled(self) -> None:
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)

    def _run_next(self) -> None:
        when, _, handle = heapq.heappop(self._queue)
        self._now = max(self._now, when)
        debug.trace(f"Running {handle!r}", "scheduler")
        handle._run()

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run everything due by the new time.

        Returns:
            Number of callbacks run
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards by {seconds}")

        target = self._now + seconds
        ran = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            self._run_next()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, sleep: Optional[Callable[[float], Any]] = None,
                       max_steps: int = 10000) -> int:
        """
        Run callbacks in order until nothing is pending.

        Args:
            sleep: Optional callable given the wait before each callback,
                e.g. time.sleep for a real-time driver
            max_steps: Safety bound on the number of callbacks run

        Returns:
            Number of callbacks run
        """
        ran = 0
        while ran < max_steps:
            self._drop_cancelled()
            if not self._queue:
                break
            wait = self._queue[0][0] - self._now
            if sleep is not None and wait > 0:
                sleep(wait)
            self._run_next()
            ran += 1
        if self.pending():
            debug.warning(f"Stopped after {max_steps} callbacks with work still pending", "scheduler")
        return ran

    def cancel_all(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue = []
