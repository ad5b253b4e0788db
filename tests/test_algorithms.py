import functools
import random

import pytest

from sortviz.algorithms import REGISTRY, get_algorithm, list_algorithms
from sortviz.algorithms.quick import partition
from sortviz.algorithms.step import (
    Compare, Swap, Overwrite, MarkSorted, Highlight, Clear, Pause, STEP_KINDS,
)
from sortviz.bars.state import BarState
from sortviz.engine.runner import apply_mutation, collect_steps
from sortviz.errors import InvalidConfiguration

ALGORITHMS = list(REGISTRY)


@functools.total_ordering
class Keyed:
    """Compares by value only, so equal values stay distinguishable by tag."""

    def __init__(self, value, tag):
        self.value = value
        self.tag = tag

    def __eq__(self, other):
        return self.value == other.value

    def __lt__(self, other):
        return self.value < other.value

    def __repr__(self):
        return f"Keyed({self.value}, {self.tag})"


def kinds(steps, kind):
    return [s for s in steps if s.kind == kind]


def drive(gen, seq):
    """Exhaust a step generator, applying mutations, and return its value."""
    steps = []
    try:
        while True:
            step = next(gen)
            apply_mutation(step, seq)
            steps.append(step)
    except StopIteration as stop:
        return stop.value, steps


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_has_the_five_sorts_in_order():
    assert [a.key for a in list_algorithms()] == ["bubble", "selection", "insertion", "merge", "quick"]
    assert get_algorithm("merge").complexity_space == "O(n)"
    assert get_algorithm("heap") is None


def test_collect_steps_rejects_unknown_algorithm():
    with pytest.raises(InvalidConfiguration):
        collect_steps("bogo", [3, 1, 2])


# ---------------------------------------------------------------------------
# Sorting correctness
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("algorithm", ALGORITHMS)
@pytest.mark.parametrize("values", [
    [],
    [7],
    [2, 1],
    [1, 2],
    [5, 5, 5, 5],
    [9, 8, 7, 6, 5, 4, 3, 2, 1],
    [3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5],
])
def test_result_is_sorted_permutation(algorithm, values):
    seq = list(values)
    collect_steps(algorithm, seq)
    assert seq == sorted(values)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_random_inputs_sort(algorithm):
    rng = random.Random(algorithm)
    for _ in range(25):
        values = [rng.randint(0, 20) for _ in range(rng.randint(0, 30))]
        seq = list(values)
        collect_steps(algorithm, seq)
        assert seq == sorted(values)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_sweep_marks_every_position_at_the_end(algorithm):
    steps = collect_steps(algorithm, [4, 2, 3, 1])
    assert steps[-4:] == [MarkSorted(0), MarkSorted(1), MarkSorted(2), MarkSorted(3)]


def test_steps_are_a_closed_set():
    assert set(STEP_KINDS) == {
        "compare", "swap", "overwrite", "mark_sorted", "highlight", "clear", "pause",
    }
    for algorithm in ALGORITHMS:
        for step in collect_steps(algorithm, [6, 1, 5, 2, 4, 3]):
            assert step.kind in STEP_KINDS


# ---------------------------------------------------------------------------
# Bubble
# ---------------------------------------------------------------------------
def test_bubble_trace_for_5_3_8_1():
    seq = [5, 3, 8, 1]
    steps = collect_steps("bubble", seq, sweep=False)

    assert steps == [
        Compare((0, 1)), Swap(0, 1),
        Compare((1, 2)),
        Compare((2, 3)), Swap(2, 3),
        MarkSorted(3),
        Compare((0, 1)),
        Compare((1, 2)), Swap(1, 2),
        MarkSorted(2),
        Compare((0, 1)), Swap(0, 1),
        MarkSorted(1),
        MarkSorted(0),
    ]
    assert seq == [1, 3, 5, 8]


def test_bubble_descending_compares_and_swaps_every_pair():
    n = 8
    steps = collect_steps("bubble", list(range(n, 0, -1)), sweep=False)
    assert len(kinds(steps, "compare")) == n * (n - 1) // 2
    assert len(kinds(steps, "swap")) == n * (n - 1) // 2


def test_bubble_sorted_input_never_swaps():
    steps = collect_steps("bubble", [1, 2, 3, 4, 5], sweep=False)
    assert len(kinds(steps, "compare")) == 10
    assert kinds(steps, "swap") == []


def test_bubble_settles_from_the_back():
    steps = collect_steps("bubble", [3, 2, 1, 0], sweep=False)
    assert [s.index for s in kinds(steps, "mark_sorted")] == [3, 2, 1, 0]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
def test_selection_pauses_once_per_inner_comparison():
    n = 7
    steps = collect_steps("selection", [4, 6, 1, 7, 3, 2, 5], sweep=False)
    pauses = kinds(steps, "pause")
    assert len(pauses) == n * (n - 1) // 2
    assert all(p.factor == 0.5 for p in pauses)


def test_selection_trace_for_two_elements():
    steps = collect_steps("selection", [2, 1], sweep=False)
    assert steps == [
        Highlight((0,), BarState.COMPARING),
        Highlight((1,), BarState.COMPARING),
        Clear((0,)),
        Highlight((1,), BarState.COMPARING),
        Pause(0.5),
        Swap(0, 1),
        Clear((0, 1)),
        MarkSorted(0),
        MarkSorted(1),
    ]


def test_selection_settles_front_to_back():
    n = 9
    steps = collect_steps("selection", list(range(n, 0, -1)), sweep=False)
    assert len(kinds(steps, "swap")) <= n - 1
    assert [s.index for s in kinds(steps, "mark_sorted")] == list(range(n))


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------
def test_insertion_trace_for_two_elements():
    steps = collect_steps("insertion", [2, 1], sweep=False)
    assert steps == [
        MarkSorted(0),
        Highlight((1,), BarState.COMPARING),
        Highlight((0, 1), BarState.SWAPPING),
        Overwrite(1, 2),
        Pause(1.0),
        Overwrite(0, 1),
        Clear((1, 0)),
        MarkSorted(1),
    ]


def test_insertion_shifts_once_per_inversion():
    values = [4, 3, 2, 1]
    steps = collect_steps("insertion", list(values), sweep=False)
    inversions = 6
    assert len(kinds(steps, "pause")) == inversions
    # every shift plus one key placement per outer iteration
    assert len(kinds(steps, "overwrite")) == inversions + len(values) - 1


def test_insertion_sorted_input_never_shifts():
    steps = collect_steps("insertion", [1, 2, 3, 4], sweep=False)
    assert kinds(steps, "pause") == []
    assert [s.index for s in kinds(steps, "mark_sorted")] == [0, 1, 2, 3]


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def test_merge_2_2_1_keeps_equal_values_in_input_order():
    a, b, c = Keyed(2, "a"), Keyed(2, "b"), Keyed(1, "c")
    seq = [a, b, c]
    collect_steps("merge", seq)
    assert [k.tag for k in seq] == ["c", "a", "b"]


def test_merge_is_stable_on_random_input():
    rng = random.Random(7)
    seq = [Keyed(rng.randint(0, 4), i) for i in range(60)]
    collect_steps("merge", seq)
    for left, right in zip(seq, seq[1:]):
        assert left.value <= right.value
        if left.value == right.value:
            assert left.tag < right.tag


def test_merge_writes_every_position_once_per_level():
    steps = collect_steps("merge", [4, 3, 2, 1], sweep=False)
    # two merges of 2 plus one merge of 4
    assert len(kinds(steps, "overwrite")) == 8
    assert kinds(steps, "swap") == []


def test_merge_leftovers_are_tagged_swapping():
    steps = collect_steps("merge", [1, 2], sweep=False)
    assert steps == [
        Highlight((0,), BarState.COMPARING),
        Overwrite(0, 1),
        Clear((0,)),
        Highlight((1,), BarState.SWAPPING),
        Overwrite(1, 2),
        Clear((1,)),
    ]


# ---------------------------------------------------------------------------
# Quick
# ---------------------------------------------------------------------------
def test_partition_splits_around_last_element():
    seq = [3, 7, 1, 5, 4, 9, 2, 5]
    pivot = seq[-1]
    index, steps = drive(partition(seq, 0, len(seq) - 1), seq)

    assert index == 4
    assert seq[index] == pivot
    assert all(v < pivot for v in seq[:index])
    assert all(v >= pivot for v in seq[index:])
    assert steps[0] == Highlight((7,), BarState.PIVOT)


def test_partition_on_random_ranges():
    rng = random.Random(11)
    for _ in range(50):
        seq = [rng.randint(0, 9) for _ in range(rng.randint(2, 20))]
        low = rng.randint(0, len(seq) - 2)
        high = rng.randint(low + 1, len(seq) - 1)
        outside = seq[:low] + seq[high + 1:]
        pivot = seq[high]

        index, _ = drive(partition(seq, low, high), seq)

        assert low <= index <= high
        assert all(v < pivot for v in seq[low:index])
        assert all(v >= pivot for v in seq[index:high + 1])
        assert seq[:low] + seq[high + 1:] == outside


def test_quick_trace_for_3_1_2():
    steps = collect_steps("quick", [3, 1, 2], sweep=False)
    assert steps == [
        Highlight((2,), BarState.PIVOT),
        Highlight((0,), BarState.COMPARING),
        Clear((0,)),
        Highlight((1,), BarState.COMPARING),
        Swap(0, 1),
        Clear((1,)),
        Swap(1, 2),
        Clear((1, 2)),
    ]


def test_quick_skips_self_swaps():
    steps = collect_steps("quick", [1, 2, 3, 4], sweep=False)
    assert kinds(steps, "swap") == []


# ---------------------------------------------------------------------------
# Step serialisation
# ---------------------------------------------------------------------------
def test_step_to_dict():
    assert Highlight((1, 2), BarState.PIVOT).to_dict() == {
        "kind": "highlight", "positions": [1, 2], "state": "pivot",
    }
    assert Swap(0, 3).to_dict() == {"kind": "swap", "i": 0, "j": 3}
