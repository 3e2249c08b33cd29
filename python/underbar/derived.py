"""Collection operations derived from ``each`` and ``reduce``."""

from __future__ import annotations

import random
from typing import Any, Callable, Optional

from .core import each, reduce, strict_equals
from .errors import InvalidArgumentError, require_callable

__all__ = [
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
]


def _identity(value):
    return value


def _truthy(value) -> bool:
    return bool(value)


def index_of(array, target) -> Any:
    """Position of the first element strictly equal to ``target``, else -1."""
    match: Any = -1
    found = False

    def latch(value, index, _collection):
        nonlocal match, found
        if not found and strict_equals(value, target):
            match = index
            found = True

    each(array, latch)
    return match


def map(collection, iterator: Callable[[Any], Any]) -> list:
    require_callable(iterator, "iterator")
    result: list = []
    each(collection, lambda value, _key, _collection: result.append(iterator(value)))
    return result


def filter(collection, iterator: Callable[[Any], Any]) -> list:
    require_callable(iterator, "iterator")
    result: list = []

    def keep(value, _key, _collection):
        if iterator(value):
            result.append(value)

    each(collection, keep)
    return result


select = filter


def reject(collection, iterator: Callable[[Any], Any]) -> list:
    require_callable(iterator, "iterator")
    return filter(collection, lambda value: not iterator(value))


def every(collection, iterator: Optional[Callable[[Any], Any]] = None) -> bool:
    """True when every element passes ``iterator`` (or is truthy).

    The whole collection is traversed, but the predicate stops being called
    once the result is known to be false.
    """
    test = _truthy if iterator is None else iterator
    require_callable(test, "iterator")
    result = reduce(collection, lambda passed, value: passed and test(value), True)
    return bool(result)


def some(collection, iterator: Optional[Callable[[Any], Any]] = None) -> bool:
    test = _truthy if iterator is None else iterator
    require_callable(test, "iterator")
    return not every(collection, lambda value: not test(value))


def contains(collection, target) -> bool:
    return reduce(
        collection,
        lambda was_found, value: was_found or strict_equals(value, target),
        False,
    )


def first(array, n: Optional[int] = None):
    items = map(array, _identity)
    if n is None:
        return items[0] if items else None
    return items[: max(n, 0)]


def last(array, n: Optional[int] = None):
    items = map(array, _identity)
    if n is None:
        return items[-1] if items else None
    if n <= 0:
        return []
    return items[-n:]


def uniq(array) -> list:
    result: list = []

    def add(value, _index, _collection):
        if index_of(result, value) == -1:
            result.append(value)

    each(array, add)
    return result


def _is_path(name) -> bool:
    return isinstance(name, str) and ("." in name or "[" in name)


def _property_getter(property_name) -> Callable[[Any], Any]:
    if _is_path(property_name):
        import jmespath as _jmespath  # type: ignore[import-untyped]

        expression = _jmespath.compile(property_name)
        return expression.search

    def get(item):
        if hasattr(item, "keys"):
            return item[property_name]
        return getattr(item, property_name)

    return get


def pluck(collection, property_name) -> list:
    """Fetch one property from each element.

    Mapping elements are indexed by key, other objects by attribute. Names
    containing ``.`` or ``[`` are JMESPath expressions, e.g.
    ``pluck(people, "address.city")``.
    """
    return map(collection, _property_getter(property_name))


def invoke(collection, method, args=()) -> list:
    """Call ``method`` on every element and collect the results.

    ``method`` is either a method name or a callable that receives the
    element as its first argument.
    """
    if isinstance(method, str):
        return map(collection, lambda item: getattr(item, method)(*args))
    if not callable(method):
        raise InvalidArgumentError(
            f"method must be a name or callable, got {type(method).__name__}"
        )
    return map(collection, lambda item: method(item, *args))


def shuffle(array, rng: Optional[random.Random] = None) -> list:
    """Return a shuffled copy of ``array`` (Fisher-Yates)."""
    rng = rng or random.Random()
    result = map(array, _identity)

    def swap(i, _position, _collection):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]

    each(range(len(result) - 1, 0, -1), swap)
    return result


def sort_by(collection, iterator) -> list:
    """Stable sort by a key callable or a property name; returns a new list."""
    key = iterator if callable(iterator) else _property_getter(iterator)
    return sorted(map(collection, _identity), key=key)


def zip(*arrays) -> list:
    """Group elements by index, padding shorter inputs with ``None``."""
    length = reduce(arrays, lambda longest, array: max(longest, len(array)), 0)

    def column(i):
        return tuple(map(arrays, lambda array: array[i] if i < len(array) else None))

    return map(range(length), column)


def flatten(nested) -> list:
    result: list = []

    def visit(value, _index, _collection):
        if isinstance(value, (list, tuple)):
            each(value, visit)
        else:
            result.append(value)

    each(nested, visit)
    return result


def intersection(array, *others) -> list:
    return filter(
        array,
        lambda value: every(others, lambda other: index_of(other, value) != -1),
    )


def difference(array, *others) -> list:
    return filter(
        array,
        lambda value: every(others, lambda other: index_of(other, value) == -1),
    )
