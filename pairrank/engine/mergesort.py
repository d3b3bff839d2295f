"""Stable top-down merge sort with an injected comparator."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def merge_sort(seq: Sequence[T], compare: Callable[[T, T], float]) -> list[T]:
    """Sort ``seq`` with ``compare`` returning negative, zero or positive.

    Equal elements keep their relative order. Returns a new list.
    """
    if len(seq) <= 1:
        return list(seq)

    middle = len(seq) // 2
    left = merge_sort(seq[:middle], compare)
    right = merge_sort(seq[middle:], compare)
    return _merge(left, right, compare)


def _merge(left: list[T], right: list[T], compare: Callable[[T, T], float]) -> list[T]:
    result: list[T] = []
    i = j = 0

    while i < len(left) and j < len(right):
        # Ties take the left element first
        if compare(left[i], right[j]) <= 0:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1

    result.extend(left[i:])
    result.extend(right[j:])
    return result
