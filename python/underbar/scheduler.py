"""Timer schedulers used by ``delay`` and ``throttle``.

Times are in milliseconds. Everything here is single-threaded: callbacks
run one at a time on whichever thread drives the scheduler.
"""

from __future__ import annotations

import abc
import heapq
import itertools
import time
from typing import Any, Callable, Optional, Protocol

from .config import load_config
from .errors import SchedulerError, require_callable
from .logger import get_logger

__all__ = [
    "Scheduler",
    "TimerQueue",
    "ManualScheduler",
    "RealTimeScheduler",
    "AsyncioScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
]

log = get_logger(__name__)


class Scheduler(Protocol):
    def now(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> Any: ...


class TimerQueue(abc.ABC):
    """Heap of pending timers ordered by due time, then scheduling order."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Callable[[], Any]]] = []
        self._counter = itertools.count()

    @abc.abstractmethod
    def now(self) -> float:
        ...

    @property
    def pending(self) -> int:
        return len(self._heap)

    def next_due(self) -> Optional[float]:
        return self._heap[0][0] if self._heap else None

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> float:
        require_callable(callback, "callback")
        due = self.now() + max(delay_ms, 0)
        heapq.heappush(self._heap, (due, next(self._counter), callback))
        log.debug("scheduled %r at t=%s", callback, due)
        return due

    def _fire_next(self) -> None:
        due, _, callback = heapq.heappop(self._heap)
        log.debug("firing %r due at t=%s", callback, due)
        callback()

    def run_due(self) -> int:
        """Fire every timer due at the current time; return how many ran."""
        fired = 0
        while self._heap and self._heap[0][0] <= self.now():
            self._fire_next()
            fired += 1
        return fired


class ManualScheduler(TimerQueue):
    """Virtual clock that only moves when told to; for deterministic tests."""

    def __init__(self, start: float = 0.0) -> None:
        super().__init__()
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> int:
        """Move the clock forward ``ms``, firing each timer at its due time."""
        target = self._now + max(ms, 0)
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            self._now = max(self._now, self._heap[0][0])
            self._fire_next()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        fired = 0
        while self._heap:
            fired += self.advance(self._heap[0][0] - self._now)
        return fired


class RealTimeScheduler(TimerQueue):
    """Cooperative scheduler on the monotonic clock.

    Timers only fire while :meth:`run` or :meth:`run_due` is being called.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sleep=time.sleep) -> None:
        super().__init__()
        self._clock = clock
        self._sleep = sleep

    def now(self) -> float:
        return self._clock() * 1000.0

    def run(self) -> int:
        """Sleep until each timer is due and fire it; return when idle."""
        fired = 0
        while self._heap:
            remaining = self._heap[0][0] - self.now()
            if remaining > 0:
                self._sleep(remaining / 1000.0)
            fired += self.run_due()
        return fired


class AsyncioScheduler:
    """Adapter that schedules timers on an asyncio event loop.

    Without an explicit ``loop`` every call uses the loop running at that
    moment, so one instance keeps working across successive
    ``asyncio.run`` calls.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop=None) -> None:
        self._loop = loop

    @property
    def loop(self):
        if self._loop is not None:
            return self._loop
        import asyncio

        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SchedulerError(
                "AsyncioScheduler needs a running event loop or an explicit loop"
            ) from exc

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], Any]):
        require_callable(callback, "callback")
        loop = self.loop
        log.debug("scheduled %r in %sms on %r", callback, delay_ms, loop)
        return loop.call_later(max(delay_ms, 0) / 1000.0, callback)


_DEFAULT_SCHEDULER: Optional[Scheduler] = None

_SCHEDULER_FACTORIES: dict[str, Callable[[], Scheduler]] = {
    "realtime": RealTimeScheduler,
    "asyncio": AsyncioScheduler,
}


def get_default_scheduler() -> Scheduler:
    global _DEFAULT_SCHEDULER
    if _DEFAULT_SCHEDULER is None:
        name = load_config().scheduler
        _DEFAULT_SCHEDULER = _SCHEDULER_FACTORIES[name]()
        log.debug("created default %s scheduler", name)
    return _DEFAULT_SCHEDULER


def set_default_scheduler(scheduler: Optional[Scheduler]) -> None:
    """Replace the process-wide scheduler; ``None`` resets to configuration."""
    global _DEFAULT_SCHEDULER
    _DEFAULT_SCHEDULER = scheduler
