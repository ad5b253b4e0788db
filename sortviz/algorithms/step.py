"""
step.py — Visualization Step Model
===================================
Every algorithm is a generator that yields Step objects.
A Step is one atomic, awaited unit of algorithm progress: the runner
applies it (tag bars, wait, mutate the sequence) and only then resumes
the generator, so the algorithm always reads the post-step sequence.

The set of variants is closed:

    Compare(positions)          tag COMPARING, wait d, clear
    Swap(i, j)                  tag SWAPPING, wait d, exchange, push values, clear
    Overwrite(index, value)     seq[index] = value, push value (no tag, no wait)
    MarkSorted(index)           tag SORTED, wait d/2
    Highlight(positions, state) tag state, wait d, tag is left in place
    Clear(positions)            tag NONE, no wait
    Pause(factor)               wait factor * d

Design decisions:
  - Steps are frozen dataclasses.  They DESCRIBE work; they never touch
    the sequence or the sink themselves.  The runner is the only writer.
  - `positions` is a tuple (not a set) so traces are deterministic and
    serialise in emission order.
  - `kind` is a class-level string so traces, metrics and the browser
    can switch on it without isinstance chains.
"""

from dataclasses import dataclass, asdict
from typing import ClassVar, Tuple, Dict, Any

from sortviz.bars.state import BarState


@dataclass(frozen=True)
class Step:
    kind: ClassVar[str] = "step"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, BarState):
                data[key] = value.value
            elif isinstance(value, tuple):
                data[key] = list(value)
        data["kind"] = self.kind
        return data


@dataclass(frozen=True)
class Compare(Step):
    kind: ClassVar[str] = "compare"
    positions: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Swap(Step):
    kind: ClassVar[str] = "swap"
    i: int = 0
    j: int = 0


@dataclass(frozen=True)
class Overwrite(Step):
    kind: ClassVar[str] = "overwrite"
    index: int = 0
    value: int = 0


@dataclass(frozen=True)
class MarkSorted(Step):
    kind: ClassVar[str] = "mark_sorted"
    index: int = 0


@dataclass(frozen=True)
class Highlight(Step):
    kind: ClassVar[str] = "highlight"
    positions: Tuple[int, ...] = ()
    state: BarState = BarState.COMPARING


@dataclass(frozen=True)
class Clear(Step):
    kind: ClassVar[str] = "clear"
    positions: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Pause(Step):
    kind: ClassVar[str] = "pause"
    factor: float = 1.0


STEP_KINDS: Tuple[str, ...] = tuple(
    cls.kind for cls in (Compare, Swap, Overwrite, MarkSorted, Highlight, Clear, Pause)
)
