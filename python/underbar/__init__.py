from __future__ import annotations

import importlib
from typing import Any

from .core import (
    Collection,
    MappingCollection,
    SequenceCollection,
    as_collection,
    each,
    for_each,
    reduce,
    strict_equals,
)
from .derived import (
    contains,
    difference,
    every,
    filter,
    first,
    flatten,
    index_of,
    intersection,
    invoke,
    last,
    map,
    pluck,
    reject,
    select,
    shuffle,
    some,
    sort_by,
    uniq,
    zip,
)
from .errors import (
    ConfigurationError,
    InvalidArgumentError,
    SchedulerError,
    UnderbarError,
)
from .objects import defaults, extend

# Decorators and schedulers load on first use; the collection API does not
# need them. Maps name -> (module, attribute).
_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "once": (".functions", "once"),
    "memoize": (".functions", "memoize"),
    "delay": (".functions", "delay"),
    "throttle": (".functions", "throttle"),
    "bind": (".functions", "bind"),
    "Once": (".functions", "Once"),
    "Memoized": (".functions", "Memoized"),
    "Throttled": (".functions", "Throttled"),
    "Scheduler": (".scheduler", "Scheduler"),
    "ManualScheduler": (".scheduler", "ManualScheduler"),
    "RealTimeScheduler": (".scheduler", "RealTimeScheduler"),
    "AsyncioScheduler": (".scheduler", "AsyncioScheduler"),
    "get_default_scheduler": (".scheduler", "get_default_scheduler"),
    "set_default_scheduler": (".scheduler", "set_default_scheduler"),
}


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("underbar")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def _load_export(name: str) -> Any:
    module_name, attr_name = _LAZY_EXPORTS[name]
    module = importlib.import_module(module_name, package=__name__)
    return getattr(module, attr_name)


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
    elif name in _LAZY_EXPORTS:
        value = _load_export(name)
    else:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_EXPORTS) | {"__version__"})


__all__ = [
    "Collection",
    "SequenceCollection",
    "MappingCollection",
    "as_collection",
    "each",
    "for_each",
    "reduce",
    "strict_equals",
    "index_of",
    "map",
    "filter",
    "select",
    "reject",
    "every",
    "some",
    "contains",
    "first",
    "last",
    "uniq",
    "pluck",
    "invoke",
    "shuffle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
    "extend",
    "defaults",
    "UnderbarError",
    "InvalidArgumentError",
    "ConfigurationError",
    "SchedulerError",
    *_LAZY_EXPORTS,
    "__version__",
]
