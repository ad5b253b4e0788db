"""
engine/
-------
Pacing, sinks, the instrumented runner and the session controller.

    from sortviz.engine import run_sort, RecordingSink, PacingClock, SortSession
"""

from sortviz.engine.pacing   import PacingClock, SPEED_PRESETS, SPEED_LABELS, DEFAULT_SPEED, validate_delay
from sortviz.engine.sink     import VisualizationSink, RecordingSink, TraceEvent
from sortviz.engine.recorder import RunRecorder, RunMetrics
from sortviz.engine.runner   import run_sort, apply_step, apply_mutation, collect_steps
from sortviz.engine.session  import SortSession, SessionStatus, BusyGuard

__all__ = [
    "PacingClock",
    "SPEED_PRESETS",
    "SPEED_LABELS",
    "DEFAULT_SPEED",
    "validate_delay",
    "VisualizationSink",
    "RecordingSink",
    "TraceEvent",
    "RunRecorder",
    "RunMetrics",
    "run_sort",
    "apply_step",
    "apply_mutation",
    "collect_steps",
    "SortSession",
    "SessionStatus",
    "BusyGuard",
]
