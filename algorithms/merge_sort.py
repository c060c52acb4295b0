"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort over ONE owned buffer.

The recursion is flattened into an explicit work stack of pending
operations:

    ("sort",  left, right)        split the range, or report a base case
    ("merge", left, mid, right)   merge two sorted halves

Pushing a "sort" range pushes, in order, its merge and then its right
and left halves, so the left half is always processed first, exactly
like the recursive version.  Every range is an absolute index range of
the shared buffer, so highlights always address the full array.

Yields a Step for:
  1. Start
  2. Each split (sub-range bounds)
  3. Each single-element base case
  4. Each merge: start, every comparison, every placement, every
     leftover copy, completion
  5. Final: sorted
"""

from typing import Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.step import ArrayStepBuilder, Highlight, SortStep, uniform

SORT  = "sort"
MERGE = "merge"


def _highlights(
    n: int,
    bounds: Tuple[int, int],
    in_range: str = "primary",
    marks: Optional[Dict[int, str]] = None,
) -> Dict[int, Highlight]:
    start, end = bounds
    marks = marks or {}
    result = {}
    for i in range(n):
        if i in marks:
            result[i] = Highlight(marks[i])
        elif start <= i <= end:
            result[i] = Highlight(in_range)
        else:
            result[i] = Highlight("neutral")
    return result


def merge_sort(array: Sequence[float]) -> Generator[SortStep, None, None]:

    sb  = ArrayStepBuilder(array)
    arr = sb.array
    n   = len(arr)

    if n <= 1:
        yield sb.sort(
            "Array has at most one element. Already sorted.",
            uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=range(n),
        )
        return

    yield sb.sort("Starting Merge Sort.", uniform(n, "neutral"))

    stack: List[Tuple] = [(SORT, 0, n - 1)]

    while stack:
        op = stack.pop()

        # ----------------------------------------------------------
        # split / base case
        # ----------------------------------------------------------
        if op[0] == SORT:
            _, left, right = op
            bounds = (left, right)

            if left == right:
                yield sb.sort(
                    f"Base case: element at index {left} is a subarray of size 1.",
                    _highlights(n, bounds, in_range="info"), sub_array_bounds=bounds,
                )
                continue

            mid = (left + right) // 2
            yield sb.sort(
                f"Splitting array. Left part: indices {left} to {mid}. "
                f"Right part: indices {mid + 1} to {right}.",
                _highlights(n, bounds), sub_array_bounds=bounds,
            )
            stack.append((MERGE, left, mid, right))
            stack.append((SORT, mid + 1, right))
            stack.append((SORT, left, mid))
            continue

        # ----------------------------------------------------------
        # merge
        # ----------------------------------------------------------
        _, left, mid, right = op
        bounds = (left, right)
        lhs = arr[left:mid + 1]
        rhs = arr[mid + 1:right + 1]

        yield sb.sort(
            f"Merging subarrays: Left from index {left} to {mid}, Right from {mid + 1} to {right}. "
            f"Left values: {lhs}, Right values: {rhs}",
            _highlights(n, bounds), sub_array_bounds=bounds,
        )

        i = j = 0
        k = left
        while i < len(lhs) and j < len(rhs):
            pair = (left + i, mid + 1 + j)
            yield sb.sort(
                f"Comparing L[{i}] ({lhs[i]}) and R[{j}] ({rhs[j]}). Placing element into index {k}.",
                _highlights(n, bounds, marks={pair[0]: "secondary", pair[1]: "secondary"}),
                comparing=pair, sub_array_bounds=bounds,
            )
            if lhs[i] <= rhs[j]:
                arr[k] = lhs[i]
                i += 1
            else:
                arr[k] = rhs[j]
                j += 1
            k += 1
            yield sb.sort(
                f"Element placed. Array segment being merged: {arr[left:k]}",
                _highlights(n, bounds, marks={k - 1: "accent"}), sub_array_bounds=bounds,
            )

        while i < len(lhs):
            arr[k] = lhs[i]
            yield sb.sort(
                f"Copying remaining L[{i}] ({lhs[i]}) to index {k}.",
                _highlights(n, bounds, marks={k: "accent"}), sub_array_bounds=bounds,
            )
            i += 1
            k += 1

        while j < len(rhs):
            arr[k] = rhs[j]
            yield sb.sort(
                f"Copying remaining R[{j}] ({rhs[j]}) to index {k}.",
                _highlights(n, bounds, marks={k: "accent"}), sub_array_bounds=bounds,
            )
            j += 1
            k += 1

        yield sb.sort(
            f"Subarray from index {left} to {right} merged.",
            _highlights(n, bounds, in_range="accent"), sub_array_bounds=bounds,
        )

    yield sb.sort(
        "Merge Sort complete. Array is sorted.",
        uniform(n, "accent", "Sorted"), is_final=True, sorted_indices=range(n),
    )
