"""
bubble_sort.py — Bubble Sort
=============================
Adjacent-pair passes; the largest unsorted element bubbles to the end
of each pass.

Yields a Step for:
  1. Start, and the start of every pass
  2. Each comparison (j, j+1)
  3. Each swap, twice: about-to-swap (DESTRUCTIVE) and swapped
  4. End of every pass (one more trailing element confirmed sorted)
  5. Final: sorted

Stops after the first pass that performs no swaps.
"""

from typing import Dict, Generator, Optional, Sequence, Tuple

from algorithms.array_utils import swap
from algorithms.step import ArrayStepBuilder, Highlight, SortStep, uniform


def _highlights(
    n: int,
    sorted_count: int,
    pair: Optional[Tuple[int, int]] = None,
    swapping: bool = False,
) -> Dict[int, Highlight]:
    result = {}
    for i in range(n):
        if sorted_count and i >= n - sorted_count:
            result[i] = Highlight("accent", "Sorted")
        elif pair and i in pair:
            result[i] = Highlight("destructive" if swapping else "primary")
        else:
            result[i] = Highlight("neutral")
    return result


def bubble_sort(array: Sequence[float]) -> Generator[SortStep, None, None]:

    sb  = ArrayStepBuilder(array)
    arr = sb.array
    n   = len(arr)

    if n <= 1:
        yield sb.sort(
            "Array has at most one element. Already sorted.",
            uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=range(n),
        )
        return

    yield sb.sort("Starting Bubble Sort. Pass 1.", _highlights(n, 0))

    sorted_count = 0
    for i in range(n - 1):
        swapped = False
        trailing = range(n - sorted_count, n)

        yield sb.sort(
            f"Pass {i + 1}. Comparing elements. Largest will bubble to the end.",
            _highlights(n, sorted_count), sorted_indices=trailing,
        )

        for j in range(n - 1 - i):
            pair = (j, j + 1)
            yield sb.sort(
                f"Comparing {arr[j]} and {arr[j + 1]}.",
                _highlights(n, sorted_count, pair), sorted_indices=trailing, comparing=pair,
            )

            if arr[j] > arr[j + 1]:
                yield sb.sort(
                    f"Swapping {arr[j]} and {arr[j + 1]}.",
                    _highlights(n, sorted_count, pair, swapping=True),
                    sorted_indices=trailing, comparing=pair, swapping=pair,
                )
                swap(arr, j, j + 1)
                swapped = True
                yield sb.sort(
                    f"Swapped: {arr[j]} now precedes {arr[j + 1]}.",
                    _highlights(n, sorted_count, pair), sorted_indices=trailing, comparing=pair,
                )

        sorted_count += 1
        yield sb.sort(
            f"Pass {i + 1} complete. Element {arr[n - 1 - i]} is sorted.",
            _highlights(n, sorted_count), sorted_indices=range(n - sorted_count, n),
        )

        if not swapped:
            break

    yield sb.sort(
        "Bubble Sort complete. Array is sorted.",
        uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=range(n),
    )
