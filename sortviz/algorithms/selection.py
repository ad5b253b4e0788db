"""
selection.py — Selection Sort
==============================
Scans the unsorted suffix for its minimum while keeping the running
minimum highlighted, then swaps it to the front of the suffix.

Every inner comparison carries an extra half-unit pause on top of the
highlight wait, so one inner iteration costs 1.5 d (2.5 d when the
minimum moves).
"""

from typing import Iterator, List

from sortviz.algorithms.step import Step, Highlight, Clear, Swap, MarkSorted, Pause
from sortviz.bars.state import BarState


def selection_sort(seq: List[int]) -> Iterator[Step]:
    n = len(seq)

    for i in range(n - 1):
        min_index = i
        yield Highlight((min_index,), BarState.COMPARING)

        for j in range(i + 1, n):
            yield Highlight((j,), BarState.COMPARING)

            if seq[j] < seq[min_index]:
                # the old minimum loses its highlight, the new one keeps it
                yield Clear((min_index,))
                min_index = j
                yield Highlight((min_index,), BarState.COMPARING)
            else:
                yield Clear((j,))

            yield Pause(0.5)

        if min_index != i:
            yield Swap(i, min_index)

        yield Clear((i, min_index))
        yield MarkSorted(i)

    if n:
        yield MarkSorted(n - 1)
