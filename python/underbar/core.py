"""Iteration core: the two traversal primitives everything else builds on.

``each`` owns traversal order and ``reduce`` folds over it. Collection
operations elsewhere in the package go through these two functions instead
of looping over their inputs directly.
"""

from __future__ import annotations

import functools
import math
import types
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Iterator, Optional, Union

from .errors import InvalidArgumentError, require_callable

__all__ = [
    "SequenceCollection",
    "MappingCollection",
    "Collection",
    "as_collection",
    "each",
    "for_each",
    "reduce",
    "strict_equals",
]

_PRIMITIVES = (type(None), bool, int, float, complex, str, bytes)


class SequenceCollection:
    """Ordered values addressed by 0-based index."""

    __slots__ = ("source",)

    def __init__(self, source: Iterable[Any]) -> None:
        self.source = source

    def entries(self) -> Iterator[tuple[Any, int]]:
        for index, value in enumerate(self.source):
            yield value, index

    def __repr__(self) -> str:
        return f"SequenceCollection({self.source!r})"


class MappingCollection:
    """Values addressed by key, enumerated in the mapping's own order."""

    __slots__ = ("source",)

    def __init__(self, source: Mapping[Any, Any]) -> None:
        self.source = source

    def entries(self) -> Iterator[tuple[Any, Any]]:
        # Snapshot keys so one traversal sees a stable order.
        for key in list(self.source):
            yield self.source[key], key

    def __repr__(self) -> str:
        return f"MappingCollection({self.source!r})"


Collection = Union[SequenceCollection, MappingCollection]


def as_collection(value: Any) -> Optional[Collection]:
    """Classify a raw value as one of the collection variants.

    ``None`` stays ``None`` (traversing it is a no-op). Mappings become
    :class:`MappingCollection`; any other iterable becomes
    :class:`SequenceCollection`.
    """
    if value is None or isinstance(value, (SequenceCollection, MappingCollection)):
        return value
    if isinstance(value, Mapping):
        return MappingCollection(value)
    if isinstance(value, Iterable):
        return SequenceCollection(value)
    raise InvalidArgumentError(
        f"expected a sequence, mapping or None, got {type(value).__name__}"
    )


@functools.singledispatch
def _traverse(collection, iterator: Callable[..., Any]) -> None:
    raise InvalidArgumentError(f"cannot traverse {type(collection).__name__}")


@_traverse.register(type(None))
def _(collection, iterator: Callable[..., Any]) -> None:
    return None


@_traverse.register(SequenceCollection)
def _(collection: SequenceCollection, iterator: Callable[..., Any]) -> None:
    for value, index in collection.entries():
        iterator(value, index, collection.source)


@_traverse.register(MappingCollection)
def _(collection: MappingCollection, iterator: Callable[..., Any]) -> None:
    for value, key in collection.entries():
        iterator(value, key, collection.source)


def each(collection, iterator: Callable[..., Any], context: Any = None) -> None:
    """Call ``iterator(value, key_or_index, collection)`` for every element.

    Sequences are visited in ascending index order, mappings in their own
    iteration order. A ``None`` collection performs no calls. When
    ``context`` is given the iterator is bound to it, so it receives
    ``context`` as its first (``self``) argument.
    """
    require_callable(iterator, "iterator")
    if context is not None:
        iterator = types.MethodType(iterator, context)
    _traverse(as_collection(collection), iterator)


for_each = each


def reduce(collection, iterator: Callable[[Any, Any], Any], initial_value: Any = 0) -> Any:
    """Left fold over ``collection`` in ``each`` order.

    The seed defaults to ``0`` rather than to the first element; callers
    folding strings, lists or dicts must pass an explicit seed.
    """
    require_callable(iterator, "iterator")
    accumulator = initial_value

    def step(value, _key, _collection):
        nonlocal accumulator
        accumulator = iterator(accumulator, value)

    each(collection, step)
    return accumulator


def strict_equals(left: Any, right: Any) -> bool:
    """Identity for objects, same-type value equality for primitives."""
    if left is right:
        return not (isinstance(left, float) and math.isnan(left))
    if type(left) is not type(right) or not isinstance(left, _PRIMITIVES):
        return False
    return left == right
