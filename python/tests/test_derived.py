from __future__ import annotations

import random
from types import SimpleNamespace

import pytest

import underbar as _


def is_even(value) -> bool:
    return value % 2 == 0


def test_index_of_finds_first_match() -> None:
    assert _.index_of([1, 2, 3, 2], 2) == 1


def test_index_of_reports_absence() -> None:
    assert _.index_of([1, 2, 3], 9) == -1
    assert _.index_of(None, 9) == -1


def test_index_of_uses_strict_equality() -> None:
    item = [1]
    assert _.index_of([[1], item], item) == 1
    assert _.index_of([1.0, True, 1], 1) == 2


def test_index_of_returns_key_for_mappings() -> None:
    assert _.index_of({"a": 1, "b": 2}, 2) == "b"


def test_map_applies_iterator_in_order() -> None:
    values = [3, 1, 2]
    result = _.map(values, lambda value: value * 10)
    assert result == [30, 10, 20]
    assert len(result) == len(values)


def test_map_over_mapping_values() -> None:
    assert _.map({"a": 1, "b": 2}, lambda value: value + 1) == [2, 3]


def test_filter_preserves_order() -> None:
    assert _.filter([1, 2, 3, 4, 5, 6], is_even) == [2, 4, 6]
    assert _.select is _.filter


@pytest.mark.parametrize(
    "collection",
    [
        pytest.param([1, 2, 3, 4, 5], id="list"),
        pytest.param([], id="empty"),
        pytest.param({"a": 1, "b": 2, "c": 3}, id="mapping"),
    ],
)
def test_reject_is_filter_with_negated_predicate(collection) -> None:
    assert _.reject(collection, is_even) == _.filter(collection, lambda v: not is_even(v))


@pytest.mark.parametrize(
    ("collection", "iterator", "expected"),
    [
        pytest.param([], None, True, id="empty"),
        pytest.param([True, 1, "x"], None, True, id="all-truthy"),
        pytest.param([True, 0, "x"], None, False, id="one-falsy"),
        pytest.param([2, 4, 6], is_even, True, id="predicate-pass"),
        pytest.param([2, 5, 6], is_even, False, id="predicate-fail"),
        pytest.param({"a": 2, "b": 4}, is_even, True, id="mapping"),
    ],
)
def test_every(collection, iterator, expected) -> None:
    assert _.every(collection, iterator) is expected


def test_every_returns_exact_bool() -> None:
    assert _.every([1, "a"], lambda value: value) is True
    assert _.every([1, 0], lambda value: value) is False


def test_every_stops_calling_predicate_after_failure() -> None:
    calls = []

    def check(value):
        calls.append(value)
        return value < 2

    assert _.every([1, 2, 3, 4], check) is False
    assert calls == [1, 2]


@pytest.mark.parametrize(
    ("collection", "iterator", "expected"),
    [
        pytest.param([], None, False, id="empty"),
        pytest.param([0, None, ""], None, False, id="all-falsy"),
        pytest.param([0, 3], None, True, id="one-truthy"),
        pytest.param([1, 3, 4], is_even, True, id="predicate-pass"),
        pytest.param([1, 3, 5], is_even, False, id="predicate-fail"),
    ],
)
def test_some(collection, iterator, expected) -> None:
    assert _.some(collection, iterator) is expected


def test_some_is_negated_every_of_negated_predicate() -> None:
    for values in ([1, 2], [1, 3], [], [2]):
        assert _.some(values, is_even) == (not _.every(values, lambda v: not is_even(v)))


def test_contains() -> None:
    marker = object()
    assert _.contains([1, 2, 3], 3) is True
    assert _.contains([1, 2, 3], 9) is False
    assert _.contains({"a": marker}, marker) is True
    assert _.contains([1.0], 1) is False
    assert _.contains(None, 1) is False


def test_predicates_must_be_callable() -> None:
    with pytest.raises(_.InvalidArgumentError):
        _.map([1], "upper")
    with pytest.raises(_.InvalidArgumentError):
        _.filter([1], None)
    with pytest.raises(_.InvalidArgumentError):
        _.every([1], 3)


def test_first_and_last() -> None:
    assert _.first([1, 2, 3]) == 1
    assert _.first([1, 2, 3], 2) == [1, 2]
    assert _.first([1, 2, 3], 0) == []
    assert _.first([]) is None
    assert _.last([1, 2, 3]) == 3
    assert _.last([1, 2, 3], 2) == [2, 3]
    assert _.last([1, 2, 3], 0) == []
    assert _.last([1, 2, 3], 5) == [1, 2, 3]


def test_uniq_keeps_first_occurrence() -> None:
    assert _.uniq([1, 2, 1, 3, 2, 1]) == [1, 2, 3]
    assert _.uniq([1, 1.0, True]) == [1, 1.0, True]


def test_pluck_by_key_and_attribute() -> None:
    people = [{"name": "moe", "age": 30}, {"name": "curly", "age": 50}]
    assert _.pluck(people, "name") == ["moe", "curly"]
    objects = [SimpleNamespace(age=1), SimpleNamespace(age=2)]
    assert _.pluck(objects, "age") == [1, 2]


def test_pluck_nested_path() -> None:
    people = [
        {"name": "moe", "address": {"city": "Springfield"}, "tags": ["a", "b"]},
        {"name": "larry", "address": {}, "tags": ["c"]},
    ]
    assert _.pluck(people, "address.city") == ["Springfield", None]
    assert _.pluck(people, "tags[0]") == ["a", "c"]


def test_invoke_by_name_and_callable() -> None:
    assert _.invoke(["a", "b"], "upper") == ["A", "B"]
    assert _.invoke(["a,b", "c"], "split", [","]) == [["a", "b"], ["c"]]
    assert _.invoke([[3, 1], [2]], lambda item, extra: sorted(item) + [extra], [0]) == [
        [1, 3, 0],
        [2, 0],
    ]
    with pytest.raises(_.InvalidArgumentError):
        _.invoke([1], 5)


def test_shuffle_returns_permutation_without_mutating() -> None:
    values = list(range(20))
    result = _.shuffle(values, random.Random(7))
    assert values == list(range(20))
    assert sorted(result) == values
    assert result == _.shuffle(values, random.Random(7))


def test_sort_by_callable_and_property() -> None:
    people = [{"name": "b", "age": 3}, {"name": "a", "age": 1}, {"name": "c", "age": 1}]
    assert _.pluck(_.sort_by(people, "age"), "name") == ["a", "c", "b"]
    assert _.sort_by([3, -4, 1], abs) == [1, 3, -4]


def test_zip_pads_shorter_arrays() -> None:
    assert _.zip(["a", "b", "c", "d"], [1, 2, 3]) == [
        ("a", 1),
        ("b", 2),
        ("c", 3),
        ("d", None),
    ]
    assert _.zip() == []


def test_flatten_nested_lists() -> None:
    assert _.flatten([1, [2], [3, [[[4]]]], (5, "ab")]) == [1, 2, 3, 4, 5, "ab"]


def test_intersection_and_difference() -> None:
    assert _.intersection(["moe", "curly", "larry"], ["moe", "groucho"]) == ["moe"]
    assert _.intersection([1, 2, 3], [2, 3, 4], [3, 2]) == [2, 3]
    assert _.difference([1, 2, 3, 4], [2, 30, 40], [4]) == [1, 3]
