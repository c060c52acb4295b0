"""
array_utils.py — Array inputs for the search / sort algorithms
===============================================================
Seedable so a run can be reproduced step for step.
"""

import random
from typing import List, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


def generate_random_array(size: int, max_value: int = 100, seed: Optional[int] = None) -> List[int]:
    """`size` integers drawn uniformly from [0, max_value]."""
    if size < 0:
        raise ValueError("size must be non-negative")
    if max_value < 0:
        raise ValueError("max_value must be non-negative")
    rng = random.Random(seed)
    return [rng.randint(0, max_value) for _ in range(size)]


def shuffle_array(values: Sequence[T], seed: Optional[int] = None) -> List[T]:
    """Fisher-Yates shuffle into a new list; `values` is left untouched."""
    rng = random.Random(seed)
    result = list(values)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def swap(values: MutableSequence[T], i: int, j: int) -> None:
    values[i], values[j] = values[j], values[i]
