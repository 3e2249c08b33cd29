from __future__ import annotations

from collections.abc import MutableMapping

from .core import each
from .errors import InvalidArgumentError


def _require_mutable_mapping(target) -> None:
    if not isinstance(target, MutableMapping):
        raise InvalidArgumentError(
            f"target must be a mutable mapping, got {type(target).__name__}"
        )


def extend(target, *sources):
    """Copy every key of each source into ``target``; later sources win."""
    _require_mutable_mapping(target)

    def assign(value, key, _source):
        target[key] = value

    each(sources, lambda source, _index, _sources: each(source, assign))
    return target


def defaults(target, *sources):
    """Fill in keys missing from ``target``; existing keys are never overwritten."""
    _require_mutable_mapping(target)

    def assign_missing(value, key, _source):
        if key not in target:
            target[key] = value

    each(sources, lambda source, _index, _sources: each(source, assign_missing))
    return target
