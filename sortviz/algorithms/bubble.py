"""
bubble.py — Bubble Sort
========================
Generator-based bubble sort.  Yields a Step at every meaningful event:
  1. Compare adjacent pair (j, j+1)
  2. Swap them when out of order
  3. After each pass, the largest remaining value has bubbled to the
     back  →  MarkSorted(n-1-i)
  4. Finally position 0  →  MarkSorted(0)

Settles from the back.
"""

from typing import Iterator, List

from sortviz.algorithms.step import Step, Compare, Swap, MarkSorted


def bubble_sort(seq: List[int]) -> Iterator[Step]:
    n = len(seq)

    for i in range(n - 1):
        for j in range(n - i - 1):
            yield Compare((j, j + 1))
            if seq[j] > seq[j + 1]:
                yield Swap(j, j + 1)

        yield MarkSorted(n - 1 - i)

    if n:
        yield MarkSorted(0)
