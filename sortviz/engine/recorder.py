"""
recorder.py — Run Recorder & Analytics
========================================
Tallies a run as the runner applies it, then produces the metrics card
the UI shows under the bars.

Usage (the runner does this for you):
    rec = RunRecorder(info, size=len(seq))
    rec.start()
    rec.record(step, waited_ms)      # once per applied step
    metrics = rec.finish()
"""

import time
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any

from sortviz.algorithms import AlgoInfo
from sortviz.algorithms.step import Step, Swap, Overwrite


# ---------------------------------------------------------------------------
# Metrics dataclass: what the metrics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    size:         int   = 0
    total_steps:  int   = 0
    swaps:        int   = 0          # Swap steps applied
    writes:       int   = 0          # Overwrite steps applied
    step_counts:  Dict[str, int] = field(default_factory=dict)   # {step.kind: count}
    animation_ms: float = 0.0        # sum of every requested wait
    wall_time_ms: float = 0.0        # wall-clock time of the run
    completed:    bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# RunRecorder
# ---------------------------------------------------------------------------
class RunRecorder:
    """
    Attributes:
        steps   : Every Step applied so far, in order.
        metrics : Computed RunMetrics (available after finish()).
    """

    def __init__(self, info: AlgoInfo, size: int):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None

        self._info:         AlgoInfo = info
        self._size:         int      = size
        self._counts:       Counter  = Counter()
        self._animation_ms: float    = 0.0
        self._start_time:   float    = 0.0

    def start(self) -> None:
        self.steps = []
        self.metrics = None
        self._counts.clear()
        self._animation_ms = 0.0
        self._start_time = time.monotonic()

    def record(self, step: Step, waited_ms: float = 0.0) -> None:
        self.steps.append(step)
        self._counts[step.kind] += 1
        self._animation_ms += waited_ms

    def finish(self, completed: bool = True) -> RunMetrics:
        wall_ms = (time.monotonic() - self._start_time) * 1000
        self.metrics = RunMetrics(
            algo_key=self._info.key,
            algo_label=self._info.label,
            size=self._size,
            total_steps=len(self.steps),
            swaps=self._counts[Swap.kind],
            writes=self._counts[Overwrite.kind],
            step_counts=dict(self._counts),
            animation_ms=round(self._animation_ms, 2),
            wall_time_ms=round(wall_ms, 2),
            completed=completed,
        )
        return self.metrics

    @property
    def steps_applied(self) -> int:
        return len(self.steps)

    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._info.key,
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }
