from __future__ import annotations
import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

TimerCallback = Callable[[float], None]


class TimerHandle:
    """Cancellation token for a repeating timer."""

    def __init__(self, name: str, interval: float, deadline: float, callback: TimerCallback, seq: int):
        self.name = name
        self.interval = interval
        self.deadline = deadline
        self.callback = callback
        self.seq = seq
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"due@{self.deadline:.3f}"
        return f"<TimerHandle {self.name} every {self.interval}s {state}>"


class Scheduler:
    """
    Repeating timers advanced by the host loop.

    Nothing runs on its own: the owner calls run_due(now) once per frame and
    due callbacks execute inline, on the caller's thread, ordered by deadline.
    A timer cancelled mid-pass (even by another callback in the same pass)
    does not fire.
    """

    def __init__(self):
        self._timers: List[TimerHandle] = []
        self._seq = itertools.count()

    def call_every(self, interval: float, callback: TimerCallback, now: float, name: str = "timer") -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"Timer interval must be > 0, got {interval}")
        handle = TimerHandle(name, interval, now + interval,
                             callback, next(self._seq))
        self._timers.append(handle)
        logger.debug("scheduled %r", handle)
        return handle

    def run_due(self, now: float) -> int:
        """Fire every timer whose deadline is <= now. Returns the fire count."""
        self._timers = [t for t in self._timers if not t.cancelled]
        due = sorted((t for t in self._timers if t.deadline <= now),
                     key=lambda t: (t.deadline, t.seq))
        fired = 0
        for t in due:
            if t.cancelled:
                continue
            # fire once per pass; a badly late timer restarts from now
            t.deadline += t.interval
            if t.deadline <= now:
                t.deadline = now + t.interval
            t.callback(now)
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for t in self._timers:
            t.cancel()
        self._timers = []

    def next_deadline(self) -> Optional[float]:
        live = [t.deadline for t in self._timers if not t.cancelled]
        return min(live) if live else None

    @property
    def active_count(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)
