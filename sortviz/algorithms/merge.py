"""
merge.py — Merge Sort
======================
Top-down recursive merge sort.  Recursion is plain generator
delegation (``yield from``), so the runner can suspend at any depth.

Merging copies both runs out first and writes back through a cursor k:
  1. Both runs non-empty  →  highlight k COMPARING, write the smaller
     value (left wins ties, which keeps the sort stable)
  2. Leftovers of either run  →  highlight k SWAPPING, write it
"""

from typing import Iterator, List

from sortviz.algorithms.step import Step, Highlight, Clear, Overwrite
from sortviz.bars.state import BarState


def merge_sort(seq: List[int]) -> Iterator[Step]:
    yield from _merge_sort(seq, 0, len(seq) - 1)


def _merge_sort(seq: List[int], left: int, right: int) -> Iterator[Step]:
    if left < right:
        mid = (left + right) // 2
        yield from _merge_sort(seq, left, mid)
        yield from _merge_sort(seq, mid + 1, right)
        yield from _merge(seq, left, mid, right)


def _merge(seq: List[int], left: int, mid: int, right: int) -> Iterator[Step]:
    left_run  = seq[left:mid + 1]
    right_run = seq[mid + 1:right + 1]

    i = j = 0
    k = left

    while i < len(left_run) and j < len(right_run):
        yield Highlight((k,), BarState.COMPARING)
        if left_run[i] <= right_run[j]:
            yield Overwrite(k, left_run[i])
            i += 1
        else:
            yield Overwrite(k, right_run[j])
            j += 1
        yield Clear((k,))
        k += 1

    for value in left_run[i:] + right_run[j:]:
        yield Highlight((k,), BarState.SWAPPING)
        yield Overwrite(k, value)
        yield Clear((k,))
        k += 1
