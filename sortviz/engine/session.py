"""
session.py — Sort Session (controller state)
=============================================
A SortSession owns everything one user's visualizer needs between
requests: the sequence, the selected algorithm, the pacing clock, the
busy guard and the status line.

State machine:
    READY  →  run()  →  SORTING  →  COMPLETED
                                 →  INTERRUPTED
    any idle state  →  regenerate()  →  READY

While SORTING the guard refuses a second run, a regeneration and an
algorithm change (SessionBusy).  Speed changes are always allowed; the
runner picks them up at the next wait.
"""

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Dict, Any

from sortviz.algorithms import DEFAULT_ALGORITHM
from sortviz.bars.sequence import generate, validate_size, DEFAULT_SIZE, MAX_SIZE
from sortviz.engine.pacing import PacingClock
from sortviz.engine.recorder import RunMetrics
from sortviz.engine.runner import run_sort, resolve_algorithm
from sortviz.engine.sink import VisualizationSink
from sortviz.errors import InvalidConfiguration, SessionBusy, SortInterrupted

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Status line
# ---------------------------------------------------------------------------
class SessionStatus(Enum):
    READY       = "Ready to sort"
    SORTING     = "Sorting..."
    COMPLETED   = "Sorting completed!"
    INTERRUPTED = "Sorting interrupted"


# ---------------------------------------------------------------------------
# Busy guard
# ---------------------------------------------------------------------------
class BusyGuard:
    """
    Non-blocking lock: a second claimant is refused, never queued.

    Backed by a threading.Lock, so two request threads can never both
    claim an idle session.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def ensure_idle(self, action: str) -> None:
        if self.busy:
            raise SessionBusy(f"Cannot {action} while a sort is running")

    @contextmanager
    def claim(self, action: str = "start a sort") -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise SessionBusy(f"Cannot {action} while a sort is running")
        try:
            yield
        finally:
            self._lock.release()


# ---------------------------------------------------------------------------
# SortSession
# ---------------------------------------------------------------------------
class SortSession:
    """
    Attributes:
        sequence     : Current list of magnitudes (mutated by run()).
        algorithm    : Selected registry key.
        clock        : PacingClock read by every wait.
        guard        : BusyGuard for this session.
        status       : SessionStatus for the status line.
        last_metrics : RunMetrics of the last completed run, or None.
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Optional[PacingClock] = None,
        seed: Optional[int] = None,
    ):
        self.guard:        BusyGuard            = BusyGuard()
        self.clock:        PacingClock          = clock or PacingClock()
        self.algorithm:    str                  = resolve_algorithm(algorithm).key
        self.size:         int                  = self._validate_size(size)
        self.sequence:     List[int]            = generate(self.size, seed=seed)
        self.status:       SessionStatus        = SessionStatus.READY
        self.last_metrics: Optional[RunMetrics] = None

    # ------------------------------------------------------------------
    # Configuration (refused while busy, except speed)
    # ------------------------------------------------------------------
    def regenerate(self, size: Optional[int] = None, seed: Optional[int] = None) -> List[int]:
        self.guard.ensure_idle("regenerate the sequence")
        size = self.size if size is None else self._validate_size(size)
        self.sequence = generate(size, seed=seed)
        self.size = size
        self.status = SessionStatus.READY
        self.last_metrics = None
        logger.debug(f"Regenerated sequence of {size} values")
        return self.sequence

    def select_algorithm(self, key: str) -> None:
        self.guard.ensure_idle("change the algorithm")
        self.algorithm = resolve_algorithm(key).key

    def set_speed(self, preset: str) -> None:
        self.clock.set_speed(preset)

    def set_delay(self, delay_ms: float) -> None:
        self.clock.set_delay(delay_ms)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    async def run(self, sink: VisualizationSink, clock: Optional[PacingClock] = None) -> SessionStatus:
        """
        Sort the session's sequence through ``sink``.

        ``clock`` overrides the session clock for this run only.

        Returns the terminal status (COMPLETED or INTERRUPTED).  Raises
        SessionBusy if a sort is already in flight.  Any other error still
        leaves a terminal status and no metrics behind.
        """
        with self.guard.claim("start a second sort"):
            self.status = SessionStatus.SORTING
            self.last_metrics = None
            try:
                self.last_metrics = await run_sort(
                    self.algorithm, self.sequence, sink, clock or self.clock,
                )
            except SortInterrupted:
                self.status = SessionStatus.INTERRUPTED
                logger.info(f"Session status: {self.status.value}")
                return self.status
            except InvalidConfiguration:
                self.status = SessionStatus.READY
                raise
            except Exception:
                self.status = SessionStatus.INTERRUPTED
                logger.error(f"Sort aborted by an engine error; status: {self.status.value}")
                raise
            self.status = SessionStatus.COMPLETED
        return self.status

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def busy(self) -> bool:
        return self.guard.busy

    def snapshot(self) -> Dict[str, Any]:
        return {
            "size":      self.size,
            "max_size":  MAX_SIZE,
            "algorithm": self.algorithm,
            "speed":     self.clock.preset,
            "delay_ms":  self.clock.delay_ms,
            "status":    self.status.value,
            "busy":      self.busy,
            "values":    list(self.sequence),
            "metrics":   self.last_metrics.to_dict() if self.last_metrics else None,
        }

    @staticmethod
    def _validate_size(size: int) -> int:
        validate_size(size)
        if size > MAX_SIZE:
            raise InvalidConfiguration(f"Sequence size must be at most {MAX_SIZE}, got {size}")
        return size
