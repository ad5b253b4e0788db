"""
quick.py — Quick Sort
======================
Recursive quick sort over a Lomuto partition.  The pivot is always the
last element of the range and stays tagged PIVOT while the range is
scanned.

``partition`` is itself a generator; its return value (the pivot's
final index) comes back through ``yield from``.
"""

from typing import Iterator, List, Generator

from sortviz.algorithms.step import Step, Highlight, Clear, Swap
from sortviz.bars.state import BarState


def quick_sort(seq: List[int]) -> Iterator[Step]:
    yield from _quick_sort(seq, 0, len(seq) - 1)


def _quick_sort(seq: List[int], low: int, high: int) -> Iterator[Step]:
    if low < high:
        pivot_index = yield from partition(seq, low, high)
        yield from _quick_sort(seq, low, pivot_index - 1)
        yield from _quick_sort(seq, pivot_index + 1, high)


def partition(seq: List[int], low: int, high: int) -> Generator[Step, None, int]:
    """
    Lomuto partition of seq[low..high] around seq[high].

    On return every value left of the returned index is < pivot and
    every value at or right of it is >= pivot.
    """
    pivot = seq[high]
    i = low - 1

    yield Highlight((high,), BarState.PIVOT)

    for j in range(low, high):
        yield Highlight((j,), BarState.COMPARING)

        if seq[j] < pivot:
            i += 1
            if i != j:
                yield Swap(i, j)

        yield Clear((j,))

    if i + 1 != high:
        yield Swap(i + 1, high)

    yield Clear((i + 1, high))
    return i + 1
