"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sort the visualizer knows about.

    from sortviz.algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, complexity_time, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it,
so adding a sort is: write the step generator, add one entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from sortviz.algorithms.step import Step
from sortviz.algorithms.bubble    import bubble_sort
from sortviz.algorithms.selection import selection_sort
from sortviz.algorithms.insertion import insertion_sort
from sortviz.algorithms.merge     import merge_sort
from sortviz.algorithms.quick     import quick_sort


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                                  # registry key, e.g. "bubble"
    label:            str                                  # human label, e.g. "Bubble Sort"
    fn:               Callable[[List[int]], Iterator[Step]]  # the step generator
    complexity_time:  str = ""                             # e.g. "O(n²)"
    complexity_space: str = ""                             # e.g. "O(1)"
    description:      str = ""                             # one-liner for the info card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=bubble_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Bubble Sort repeatedly steps through the list, compares adjacent "
                    "elements and swaps them if they are in the wrong order.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=selection_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Selection Sort divides the list into sorted and unsorted regions, "
                    "repeatedly selecting the smallest element from the unsorted region.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=insertion_sort,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Insertion Sort builds the final sorted array one item at a time, "
                    "inserting each element into its correct position.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=merge_sort,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Merge Sort divides the array into halves, sorts them separately, "
                    "and then merges the sorted halves back together.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=quick_sort,
        complexity_time="O(n log n)", complexity_space="O(log n)",
        description="Quick Sort picks a pivot element and partitions the array around it, "
                    "then recursively sorts the sub-arrays.",
    ),
}

DEFAULT_ALGORITHM = "bubble"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "get_algorithm",
    "list_algorithms",
]
