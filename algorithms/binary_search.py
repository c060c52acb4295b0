"""
binary_search.py — Binary Search
=================================
Bisects a SORTED sequence.  Sorting is the caller's job; the API
layer sorts the input before starting a run.

Every step shows the tri-partition of the array:
    below low  → MUTED
    [low, high] → INFO (low / high ends SECONDARY)
    above high → MUTED
with mid in PRIMARY while it is being compared.
"""

from typing import Dict, Generator, Optional, Sequence

from algorithms.step import ArrayStepBuilder, Highlight, SearchStep, uniform


def _highlights(
    n: int,
    low: int,
    high: int,
    mid: Optional[int] = None,
    found: bool = False,
) -> Dict[int, Highlight]:
    result = {}
    for i in range(n):
        if found and i == mid:
            result[i] = Highlight("accent", "Found!")
        elif i == mid:
            result[i] = Highlight("primary", "Mid")
        elif i == low:
            result[i] = Highlight("secondary", "Low")
        elif i == high:
            result[i] = Highlight("secondary", "High")
        elif low <= i <= high:
            result[i] = Highlight("info")
        else:
            result[i] = Highlight("muted")
    return result


def binary_search(
    array: Sequence[float],
    target: float,
) -> Generator[SearchStep, None, None]:

    sb   = ArrayStepBuilder(array)
    n    = len(sb)
    low  = 0
    high = n - 1

    if n == 0:
        yield sb.search(f"Array is empty. Element {target} not found.", {}, target, is_final=True)
        return

    yield sb.search(
        f"Starting Binary Search for {target}. Array must be sorted.",
        _highlights(n, low, high), target, low=low, high=high,
    )

    while low <= high:
        mid   = (low + high) // 2
        guess = sb.array[mid]

        yield sb.search(
            f"Checking middle element at index {mid} (value: {guess}). Low: {low}, High: {high}.",
            _highlights(n, low, high, mid), target, low=low, high=high, mid=mid,
        )

        if guess == target:
            yield sb.search(
                f"Element {target} found at index {mid}.",
                _highlights(n, low, high, mid, found=True), target, is_final=True,
                low=low, high=high, mid=mid, target_found_at_index=mid,
            )
            return

        if guess < target:
            low = mid + 1
            message = f"Target {target} > {guess}. New Low: {low}."
        else:
            high = mid - 1
            message = f"Target {target} < {guess}. New High: {high}."

        yield sb.search(
            message, _highlights(n, low, high, mid), target, low=low, high=high, mid=mid,
        )

    yield sb.search(
        f"Element {target} not found. Search range exhausted.",
        uniform(n, "muted"), target, is_final=True, low=low, high=high,
    )
