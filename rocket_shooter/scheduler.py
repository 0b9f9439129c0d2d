"""
Periodic task scheduler driven by an external clock.

Every timer the game needs (simulation tick, spawners, difficulty ramp)
is a PeriodicTask keyed by purpose. The owner feeds elapsed time through
advance(); due tasks fire in chronological order, ties broken by
registration order, and each callback runs to completion before the next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

# tolerance for float clocks built from repeated 1/60 steps
EPSILON = 1e-9


@dataclass
class PeriodicTask:
    name: str
    interval: float
    callback: Callable[[], None]
    start: float
    order: int
    fired: int = 0
    active: bool = True

    @property
    def next_due(self) -> float:
        # multiply rather than accumulate so long runs do not drift
        return self.start + (self.fired + 1) * self.interval


class Scheduler:
    """Owns a set of cancellable periodic tasks and the clock that drives them"""

    def __init__(self, now: float = 0.0):
        self.now = now
        self._tasks: Dict[str, PeriodicTask] = {}
        self._order = 0

    def every(self, name: str, interval: float, callback: Callable[[], None]) -> PeriodicTask:
        """Register a task firing every `interval` seconds, first after one interval.

        Registering under an existing name replaces (and cancels) the old task.
        """
        if interval <= 0:
            raise ValueError(f"Interval for {name!r} must be positive, got {interval}")
        self.cancel(name)
        task = PeriodicTask(name, interval, callback, start=self.now, order=self._order)
        self._order += 1
        self._tasks[name] = task
        return task

    def cancel(self, name: str):
        task = self._tasks.pop(name, None)
        if task is not None:
            task.active = False

    def cancel_all(self):
        for task in self._tasks.values():
            task.active = False
        if self._tasks:
            logger.debug("Cancelled timers: %s", ", ".join(self._tasks))
        self._tasks.clear()

    def get(self, name: str) -> Optional[PeriodicTask]:
        return self._tasks.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def advance(self, dt: float) -> int:
        """Move the clock forward by dt, firing every task that falls due.

        Returns the number of callbacks fired.
        """
        if dt < 0:
            raise ValueError(f"Cannot advance by negative time {dt}")
        target = self.now + dt
        fired = 0
        while True:
            due = [t for t in self._tasks.values() if t.next_due <= target + EPSILON]
            if not due:
                break
            task = min(due, key=lambda t: (t.next_due, t.order))
            self.now = task.next_due
            task.fired += 1
            task.callback()
            fired += 1
        self.now = max(self.now, target)
        return fired
