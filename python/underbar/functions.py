"""Function decorators with per-instance memory or timing.

Every wrapper owns its state; two wrappers around the same function share
nothing. Wrappers stored on a class bind like methods, so the receiver is
passed through to the wrapped function as its first argument.
"""

from __future__ import annotations

import functools
import types
from types import MappingProxyType
from typing import Any, Callable, Optional

from .core import _PRIMITIVES
from .errors import require_callable
from .logger import get_logger
from .scheduler import Scheduler, get_default_scheduler

__all__ = [
    "Once",
    "Memoized",
    "Throttled",
    "once",
    "memoize",
    "delay",
    "throttle",
    "bind",
]

log = get_logger(__name__)


class _Wrapper:
    def __init__(self, func: Callable[..., Any]) -> None:
        require_callable(func, "func")
        functools.update_wrapper(self, func)
        self._func = func

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._func!r}>"


class Once(_Wrapper):
    """Runs the wrapped function on the first call only.

    Later calls return the first result whatever their arguments. A first
    call that raises leaves the wrapper unused, so the next call tries again.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__(func)
        self._invoked = False
        self._result: Any = None

    @property
    def invoked(self) -> bool:
        return self._invoked

    def __call__(self, *args, **kwargs):
        if not self._invoked:
            self._result = self._func(*args, **kwargs)
            self._invoked = True
        return self._result


def _argument_key(value):
    # Primitives compare by type and value, so 1, 1.0 and True stay apart.
    if isinstance(value, _PRIMITIVES):
        return (type(value), value)
    if type(value) is tuple:
        return (tuple, tuple(_argument_key(item) for item in value))
    return value


class Memoized(_Wrapper):
    """Caches results keyed by the call's single argument.

    Primitive arguments match by type and value, so ``1``, ``1.0`` and
    ``True`` each get their own entry. Other hashable arguments follow
    their own ``__eq__``/``__hash__``. Unhashable arguments are not cached:
    the wrapped function runs on every such call. Calls with more or fewer
    than one argument are keyed on the whole argument tuple, separately
    from a single tuple argument. The cache is never evicted.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__(func)
        self._cache: dict[Any, Any] = {}

    @property
    def cache(self):
        """Read-only view of the cache, keyed by tagged argument keys."""
        return MappingProxyType(self._cache)

    def __call__(self, *args):
        if len(args) == 1:
            key = ("arg", _argument_key(args[0]))
        else:
            key = ("args", _argument_key(args))
        try:
            hash(key)
        except TypeError:
            log.debug("unhashable argument to %r, bypassing cache", self._func)
            return self._func(*args)
        if key not in self._cache:
            self._cache[key] = self._func(*args)
        return self._cache[key]


class Throttled(_Wrapper):
    """Runs the wrapped function at most once per ``wait`` milliseconds.

    A call inside the window schedules one trailing run at the window's end
    using the latest arguments; further calls in the same window fold into
    it. The window restarts whenever the function actually runs. Calls that
    do not run return the most recent result.
    """

    def __init__(
        self, func: Callable[..., Any], wait: float, scheduler: Scheduler
    ) -> None:
        super().__init__(func)
        self._wait = wait
        self._scheduler = scheduler
        self._last_run: Optional[float] = None
        self._last_result: Any = None
        self._pending: Optional[object] = None
        self._pending_call: Optional[tuple[tuple, dict]] = None

    @property
    def last_run(self) -> Optional[float]:
        return self._last_run

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _run(self, args: tuple, kwargs: dict, now: float) -> Any:
        self._last_run = now
        self._last_result = self._func(*args, **kwargs)
        return self._last_result

    def _fire(self, token: object) -> None:
        # A run that happened in the meantime superseded this timer.
        if self._pending is not token:
            return
        args, kwargs = self._pending_call
        self._pending = None
        self._pending_call = None
        self._run(args, kwargs, self._scheduler.now())

    def __call__(self, *args, **kwargs):
        now = self._scheduler.now()
        if self._last_run is None or now - self._last_run >= self._wait:
            self._pending = None
            self._pending_call = None
            return self._run(args, kwargs, now)

        self._pending_call = (args, kwargs)
        if self._pending is None:
            token = self._pending = object()
            self._scheduler.call_later(
                self._last_run + self._wait - now, lambda: self._fire(token)
            )
        else:
            log.debug("coalesced call into pending run of %r", self._func)
        return self._last_result


def once(func: Callable[..., Any]) -> Once:
    return Once(func)


def memoize(func: Callable[..., Any]) -> Memoized:
    return Memoized(func)


def throttle(
    func: Callable[..., Any], wait: float, *, scheduler: Optional[Scheduler] = None
) -> Throttled:
    if scheduler is None:
        scheduler = get_default_scheduler()
    return Throttled(func, wait, scheduler)


def delay(
    func: Callable[..., Any],
    wait: float,
    *args,
    scheduler: Optional[Scheduler] = None,
    **kwargs,
) -> None:
    """Run ``func(*args, **kwargs)`` once, ``wait`` milliseconds from now.

    Negative waits run on the scheduler's next pass. There is no handle to
    cancel the call.
    """
    require_callable(func, "func")
    if scheduler is None:
        scheduler = get_default_scheduler()
    scheduler.call_later(max(wait, 0), functools.partial(func, *args, **kwargs))


def bind(func: Callable[..., Any], context: Any):
    """Bind ``func`` so that ``context`` is always its first argument."""
    require_callable(func, "func")
    return types.MethodType(func, context)
