"""
linear_search.py — Linear Search
=================================
Scans index 0 … n-1 in order.

Yields a Step at:
  1. Start of the scan
  2. Each index, before its value is checked  →  PRIMARY
  3. First match  →  final, ACCENT "Found!"
  4. Scan exhausted  →  final, not found

Already-checked indices stay MUTED so the scan's progress is visible.
"""

from typing import Generator, Sequence

from algorithms.step import ArrayStepBuilder, Highlight, SearchStep, uniform


def linear_search(
    array: Sequence[float],
    target: float,
) -> Generator[SearchStep, None, None]:

    sb = ArrayStepBuilder(array)
    n  = len(sb)

    if n == 0:
        yield sb.search(f"Array is empty. Element {target} not found.", {}, target, is_final=True)
        return

    highlights = uniform(n, "neutral")
    yield sb.search(f"Starting Linear Search for {target}.", highlights, target)

    for i in range(n):
        highlights[i] = Highlight("primary")
        yield sb.search(
            f"Checking element at index {i} (value: {sb.array[i]})...",
            highlights, target, current_index=i,
        )

        if sb.array[i] == target:
            highlights[i] = Highlight("accent", "Found!")
            yield sb.search(
                f"Element {target} found at index {i}.",
                highlights, target, is_final=True,
                current_index=i, target_found_at_index=i,
            )
            return

        highlights[i] = Highlight("muted")

    yield sb.search(
        f"Element {target} not found in the array.",
        uniform(n, "muted"), target, is_final=True,
    )
