import math

import pytest

from tour_solver.permutation import count_orderings, heap_permute, iter_permutations


@pytest.mark.parametrize("k", range(0, 7))
def test_visits_every_ordering_exactly_once(k):
    items = [f"L{i}" for i in range(k)]
    seen = list(iter_permutations(items))

    assert len(seen) == math.factorial(k)
    assert len(set(seen)) == len(seen)
    assert all(sorted(ordering) == sorted(items) for ordering in seen)


def test_empty_buffer_visits_once():
    visits = []
    heap_permute([], 0, lambda b: visits.append(list(b)))
    assert visits == [[]]


def test_first_visit_is_initial_arrangement():
    visits = []
    heap_permute(["a", "b", "c", "d"], 4, lambda b: visits.append(tuple(b)))
    assert visits[0] == ("a", "b", "c", "d")


def test_buffer_keeps_its_items():
    buffer = ["a", "b", "c", "d", "e"]
    heap_permute(buffer, len(buffer), lambda b: None)
    assert sorted(buffer) == ["a", "b", "c", "d", "e"]


def test_repeated_items_are_permuted_by_position():
    seen = list(iter_permutations(["x", "x", "y"]))
    assert len(seen) == 6
    assert set(seen) == {("x", "x", "y"), ("x", "y", "x"), ("y", "x", "x")}


def test_iter_permutations_leaves_input_alone():
    items = ["a", "b", "c"]
    list(iter_permutations(items))
    assert items == ["a", "b", "c"]


@pytest.mark.parametrize("n, expected", [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 6), (8, 720)])
def test_count_orderings(n, expected):
    assert count_orderings(n) == expected
