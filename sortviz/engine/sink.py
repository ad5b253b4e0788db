"""
sink.py — Visualization Sink
=============================
The only boundary the engine depends on.  A sink is told which positions
carry which BarState, which position now holds which value, and is
asked to suspend the caller for the pacing delay.

    tag(positions, state)      fire-and-forget
    set_value(index, value)    fire-and-forget
    await sleep(duration_ms)   the only thing the engine waits on

RecordingSink is the in-memory implementation: it keeps a mirror of the
bars and an ordered trace of every call.  The web UI ships that trace to
the browser for playback; the tests read it directly.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Any

from sortviz.bars.state import BarState


class VisualizationSink:
    """Interface.  Subclasses implement all three methods."""

    def tag(self, positions: Iterable[int], state: BarState) -> None:
        raise NotImplementedError

    def set_value(self, index: int, value: int) -> None:
        raise NotImplementedError

    async def sleep(self, duration_ms: float) -> None:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Trace events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraceEvent:
    """
    Attributes:
        kind        : "tag" | "value" | "sleep"
        positions   : tag events, the positions re-tagged
        state       : tag events, the new BarState
        index       : value events, the position written
        value       : value events, the new magnitude
        duration_ms : sleep events, requested delay
    """

    kind:        str
    positions:   Tuple[int, ...]     = ()
    state:       Optional[BarState]  = None
    index:       int                 = -1
    value:       int                 = 0
    duration_ms: float               = 0.0

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == "tag":
            return {"kind": "tag", "positions": list(self.positions), "state": self.state.value}
        if self.kind == "value":
            return {"kind": "value", "index": self.index, "value": self.value}
        return {"kind": "sleep", "duration_ms": self.duration_ms}


# ---------------------------------------------------------------------------
# RecordingSink
# ---------------------------------------------------------------------------
class RecordingSink(VisualizationSink):
    """
    Attributes:
        events   : Every call in order, as TraceEvents.
        values   : {index: value} mirror of what a screen would show.
        tags     : {index: BarState} mirror of the current tags.
        realtime : If True, sleep() really waits; otherwise it only
                   yields to the event loop and records the duration.
    """

    def __init__(self, values: Optional[Iterable[int]] = None, realtime: bool = False):
        self.events:   List[TraceEvent]     = []
        self.values:   Dict[int, int]       = dict(enumerate(values or []))
        self.tags:     Dict[int, BarState]  = {i: BarState.NONE for i in self.values}
        self.realtime: bool                 = realtime

    def tag(self, positions: Iterable[int], state: BarState) -> None:
        positions = tuple(positions)
        for index in positions:
            self.tags[index] = state
        self.events.append(TraceEvent("tag", positions=positions, state=state))

    def set_value(self, index: int, value: int) -> None:
        self.values[index] = value
        self.events.append(TraceEvent("value", index=index, value=value))

    async def sleep(self, duration_ms: float) -> None:
        self.events.append(TraceEvent("sleep", duration_ms=duration_ms))
        await asyncio.sleep(duration_ms / 1000 if self.realtime else 0)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def total_sleep_ms(self) -> float:
        return sum(e.duration_ms for e in self.events if e.kind == "sleep")

    def tagged(self, state: BarState) -> List[int]:
        """Positions in the order they received ``state`` (repeats kept)."""
        order: List[int] = []
        for e in self.events:
            if e.kind == "tag" and e.state is state:
                order.extend(e.positions)
        return order

    def export(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.events]
