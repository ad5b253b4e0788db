"""
insertion.py — Insertion Sort
==============================
Grows a sorted prefix one element at a time.  The key is lifted out,
larger prefix values are shifted right one slot per step (each shift is
shown as a SWAPPING pair followed by a full pause), and the key is
dropped into the gap.
"""

from typing import Iterator, List

from sortviz.algorithms.step import Step, Highlight, Clear, Overwrite, MarkSorted, Pause
from sortviz.bars.state import BarState


def insertion_sort(seq: List[int]) -> Iterator[Step]:
    n = len(seq)
    if not n:
        return

    # a one-element prefix is trivially sorted
    yield MarkSorted(0)

    for i in range(1, n):
        key = seq[i]
        j = i - 1
        yield Highlight((i,), BarState.COMPARING)

        while j >= 0 and seq[j] > key:
            yield Highlight((j, j + 1), BarState.SWAPPING)
            yield Overwrite(j + 1, seq[j])
            j -= 1
            yield Pause(1.0)

        yield Overwrite(j + 1, key)
        yield Clear((i, j + 1))
        yield MarkSorted(i)
