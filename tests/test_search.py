import pytest

from algorithms.array_utils import generate_random_array
from algorithms.binary_search import binary_search
from algorithms.linear_search import linear_search

from helpers import assert_well_formed, collect


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
def test_linear_search_finds_target():
    steps = collect(linear_search([5, 3, 8, 1], 8))
    assert_well_formed(steps)
    final = steps[-1]
    assert final.target_found_at_index == 2
    assert final.highlights[2].color == "accent"
    assert final.highlights[2].label == "Found!"


def test_linear_search_reports_first_match():
    final = collect(linear_search([4, 2, 7, 2], 2))[-1]
    assert final.target_found_at_index == 1


def test_linear_search_not_found():
    steps = collect(linear_search([5, 3, 8, 1], 42))
    assert_well_formed(steps)
    final = steps[-1]
    assert final.target_found_at_index is None
    assert "not found" in final.message
    assert all(h.color == "muted" for h in final.highlights.values())
    # start + one check per element + final
    assert len(steps) == 6


def test_linear_search_empty_array():
    steps = collect(linear_search([], 3))
    assert len(steps) == 1
    assert steps[0].is_final_step
    assert steps[0].target_found_at_index is None
    assert "empty" in steps[0].message


def test_linear_search_snapshots_do_not_change():
    steps = collect(linear_search([5, 3, 8, 1], 8))
    first_check = steps[1]
    assert first_check.current_index == 0
    assert first_check.highlights[0].color == "primary"
    # later steps mute index 0, the earlier snapshot must keep its colour
    assert steps[2].highlights[0].color == "muted"
    assert first_check.highlights[0].color == "primary"


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
def test_binary_search_finds_target():
    steps = collect(binary_search([1, 3, 5, 8], 8))
    assert_well_formed(steps)
    assert steps[-1].target_found_at_index == 3


def test_binary_search_not_found():
    steps = collect(binary_search([1, 3, 5, 8], 4))
    assert_well_formed(steps)
    assert steps[-1].target_found_at_index is None
    assert "not found" in steps[-1].message


def test_binary_search_empty_array():
    steps = collect(binary_search([], 1))
    assert len(steps) == 1 and steps[0].is_final_step


def test_binary_search_bounds_narrow():
    steps = collect(binary_search(list(range(0, 64, 2)), 46))
    widths = [s.high - s.low for s in steps if s.low is not None and s.high is not None]
    assert widths == sorted(widths, reverse=True)


@pytest.mark.parametrize("seed", range(10))
def test_binary_search_agrees_with_membership(seed):
    array  = sorted(generate_random_array(15, max_value=20, seed=seed))
    target = seed * 3 % 25
    final  = collect(binary_search(array, target))[-1]
    if target in array:
        assert array[final.target_found_at_index] == target
    else:
        assert final.target_found_at_index is None


@pytest.mark.parametrize("seed", range(10))
def test_linear_search_agrees_with_index(seed):
    array  = generate_random_array(12, max_value=15, seed=seed)
    target = seed
    final  = collect(linear_search(array, target))[-1]
    expected = array.index(target) if target in array else None
    assert final.target_found_at_index == expected


def test_search_is_deterministic():
    a = [(s.message, s.highlights) for s in linear_search([3, 1, 2], 2)]
    b = [(s.message, s.highlights) for s in linear_search([3, 1, 2], 2)]
    assert a == b
