"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Last element of each range is the pivot.

The recursion is flattened into an explicit stack of pending
(low, high) ranges.  After a partition places its pivot at p, the
ranges (p+1, high) and (low, p-1) are pushed in that order so the left
partition is sorted first.

`done` is the running set of indices confirmed sorted (placed pivots
and single-element ranges); it is carried in every step so the
cumulative progress stays visible across partitions.

Yields a Step for:
  1. Start
  2. Each range start
  3. Partition start (pivot DESTRUCTIVE)
  4. Each comparison against the pivot
  5. Each swap that grows the "< pivot" region: before and after
  6. Pivot placement: before and after, then "pivot sorted"
  7. Each single-element base case
  8. Final: sorted
"""

from typing import Dict, Generator, List, Optional, Sequence, Set, Tuple

from algorithms.array_utils import swap
from algorithms.step import ArrayStepBuilder, Highlight, SortStep, uniform

PIVOT = Highlight("destructive", "Pivot")


def _highlights(
    n: int,
    done: Set[int],
    bounds: Optional[Tuple[int, int]] = None,
    less: Optional[Tuple[int, int]] = None,
    marks: Optional[Dict[int, Highlight]] = None,
) -> Dict[int, Highlight]:
    marks = marks or {}
    result = {}
    for k in range(n):
        if k in marks:
            result[k] = marks[k]
        elif less and less[0] <= k <= less[1]:
            result[k] = Highlight("info")
        elif bounds and bounds[0] <= k <= bounds[1]:
            result[k] = Highlight("primary")
        elif k in done:
            result[k] = Highlight("accent", "Sorted")
        else:
            result[k] = Highlight("neutral")
    return result


def quick_sort(array: Sequence[float]) -> Generator[SortStep, None, None]:

    sb   = ArrayStepBuilder(array)
    arr  = sb.array
    n    = len(arr)
    done: Set[int] = set()

    if n <= 1:
        yield sb.sort(
            "Array has at most one element. Already sorted.",
            uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=range(n),
        )
        return

    yield sb.sort("Starting Quick Sort.", uniform(n, "neutral"))

    stack: List[Tuple[int, int]] = [(0, n - 1)]

    while stack:
        low, high = stack.pop()

        if low > high:
            continue

        if low == high:
            done.add(low)
            yield sb.sort(
                f"Base case: Element at index {low} is sorted.",
                _highlights(n, done), sorted_indices=done,
            )
            continue

        bounds = (low, high)
        yield sb.sort(
            f"Recursively sorting subarray from index {low} to {high}.",
            _highlights(n, done, bounds), sorted_indices=done, sub_array_bounds=bounds,
        )

        # ----------------------------------------------------------
        # partition
        # ----------------------------------------------------------
        pivot = arr[high]
        i = low - 1

        yield sb.sort(
            f"Partitioning from index {low} to {high}. Pivot is {pivot} (at index {high}).",
            _highlights(n, done, bounds, marks={high: PIVOT}),
            sorted_indices=done, pivot_index=high, sub_array_bounds=bounds,
        )

        for j in range(low, high):
            yield sb.sort(
                f"Comparing element at index {j} ({arr[j]}) with pivot {pivot}.",
                _highlights(n, done, bounds, less=(low, i), marks={high: PIVOT, j: Highlight("secondary")}),
                sorted_indices=done, pivot_index=high, comparing=(j, high), sub_array_bounds=bounds,
            )

            if arr[j] < pivot:
                i += 1
                yield sb.sort(
                    f"Element {arr[j]} < pivot. Swapping {arr[i]} (at index {i}) and {arr[j]} (at index {j}).",
                    _highlights(
                        n, done, bounds, less=(low, i - 1),
                        marks={high: PIVOT, i: Highlight("accent"), j: Highlight("accent")},
                    ),
                    sorted_indices=done, pivot_index=high, swapping=(i, j), sub_array_bounds=bounds,
                )
                swap(arr, i, j)
                yield sb.sort(
                    f"Swap complete. Smaller elements partition boundary is now at index {i}.",
                    _highlights(n, done, bounds, less=(low, i), marks={high: PIVOT}),
                    sorted_indices=done, pivot_index=high, sub_array_bounds=bounds,
                )

        yield sb.sort(
            f"Placing pivot {pivot} in its sorted position. Swapping {arr[i + 1]} (at index {i + 1}) "
            f"and {arr[high]} (pivot at index {high}).",
            _highlights(
                n, done, bounds, less=(low, i),
                marks={high: Highlight("accent"), i + 1: Highlight("accent")},
            ),
            sorted_indices=done, pivot_index=high, swapping=(i + 1, high), sub_array_bounds=bounds,
        )
        swap(arr, i + 1, high)
        p = i + 1

        yield sb.sort(
            f"Pivot {arr[p]} is now at its sorted position: index {p}.",
            _highlights(n, done, bounds, less=(low, p - 1), marks={p: Highlight("accent", "Sorted Pivot")}),
            sorted_indices=done, pivot_index=p, sub_array_bounds=bounds,
        )

        done.add(p)
        yield sb.sort(
            f"Pivot at index {p} is sorted. Recursively sorting left and right partitions.",
            _highlights(n, done, bounds, less=(low, p - 1), marks={p: Highlight("accent", "Sorted")}),
            sorted_indices=done, pivot_index=p,
        )

        stack.append((p + 1, high))
        stack.append((low, p - 1))

    yield sb.sort(
        "Quick Sort complete. Array is sorted.",
        uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=done,
    )
