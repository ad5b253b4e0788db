"""
runner.py — Instrumented Sort Runner
=====================================
Drives one algorithm generator to completion against a sink.

For every Step the generator yields, the runner
  1. tags bars through the sink,
  2. awaits the pacing delay through the sink,
  3. performs the step's mutation on the sequence and pushes new values,
and only then resumes the generator.  Steps are strictly sequential;
the run is a single coroutine that suspends at each wait, including
deep inside merge / quick recursion (generator delegation keeps the
recursion inside the generator, not on the runner's stack).

When the algorithm is exhausted every position is swept left-to-right
with MarkSorted, so the run always ends with every bar SORTED.

Failures:
  - bad algorithm key / delay before the first step  →  InvalidConfiguration
  - the sink or the pacing source fails mid-run       →  SortInterrupted
  - a step addresses a position outside the sequence  →  IndexError (a bug)
"""

import logging
from typing import Callable, Iterable, List

from sortviz.algorithms import get_algorithm, AlgoInfo
from sortviz.algorithms.step import (
    Step, Compare, Swap, Overwrite, MarkSorted, Highlight, Clear, Pause,
)
from sortviz.bars.state import BarState
from sortviz.engine.pacing import validate_delay
from sortviz.engine.recorder import RunRecorder, RunMetrics
from sortviz.engine.sink import VisualizationSink
from sortviz.errors import InvalidConfiguration, SortInterrupted

logger = logging.getLogger(__name__)

Pacing = Callable[[], float]


def resolve_algorithm(key: str) -> AlgoInfo:
    info = get_algorithm(key)
    if info is None:
        raise InvalidConfiguration(f"Unknown algorithm: {key!r}")
    return info


# ---------------------------------------------------------------------------
# Pure mutation (no sink, no waiting)
# ---------------------------------------------------------------------------
def _check_index(seq: List[int], index: int) -> None:
    if not 0 <= index < len(seq):
        raise IndexError(f"Position {index} outside sequence of length {len(seq)}")


def _step_positions(step: Step) -> Iterable[int]:
    if isinstance(step, (Compare, Highlight, Clear)):
        return step.positions
    if isinstance(step, Swap):
        return (step.i, step.j)
    if isinstance(step, (Overwrite, MarkSorted)):
        return (step.index,)
    return ()


def apply_mutation(step: Step, seq: List[int]) -> None:
    """Apply only the sequence change a step describes (Swap / Overwrite)."""
    for index in _step_positions(step):
        _check_index(seq, index)
    if isinstance(step, Swap):
        seq[step.i], seq[step.j] = seq[step.j], seq[step.i]
    elif isinstance(step, Overwrite):
        seq[step.index] = step.value


def collect_steps(algorithm: str, seq: List[int], sweep: bool = True) -> List[Step]:
    """
    Run an algorithm synchronously, applying mutations only.

    Deterministic replay for tests and analysis: no sink, no clock.
    ``seq`` is sorted in place exactly as run_sort would sort it.
    """
    info = resolve_algorithm(algorithm)
    steps: List[Step] = []
    for step in info.fn(seq):
        apply_mutation(step, seq)
        steps.append(step)
    if sweep:
        steps.extend(MarkSorted(i) for i in range(len(seq)))
    return steps


# ---------------------------------------------------------------------------
# Sink plumbing: every dependency failure becomes SortInterrupted
# ---------------------------------------------------------------------------
def _tag(sink: VisualizationSink, positions: Iterable[int], state: BarState) -> None:
    try:
        sink.tag(positions, state)
    except Exception as exc:
        raise SortInterrupted(f"Sink failed to tag {tuple(positions)} as {state.value}: {exc}") from exc


def _push(sink: VisualizationSink, index: int, value: int) -> None:
    try:
        sink.set_value(index, value)
    except Exception as exc:
        raise SortInterrupted(f"Sink failed to set position {index} to {value}: {exc}") from exc


def _current_delay(pacing: Pacing) -> float:
    try:
        return validate_delay(pacing())
    except Exception as exc:
        raise SortInterrupted(f"Pacing source failed: {exc}") from exc


async def _wait(sink: VisualizationSink, pacing: Pacing, factor: float) -> float:
    duration = _current_delay(pacing) * factor
    try:
        await sink.sleep(duration)
    except Exception as exc:
        raise SortInterrupted(f"Sink failed to sleep {duration:g} ms: {exc}") from exc
    return duration


# ---------------------------------------------------------------------------
# One step
# ---------------------------------------------------------------------------
async def apply_step(step: Step, seq: List[int], sink: VisualizationSink, pacing: Pacing) -> float:
    """Apply one step end-to-end.  Returns the milliseconds waited."""
    for index in _step_positions(step):
        _check_index(seq, index)

    if isinstance(step, Compare):
        _tag(sink, step.positions, BarState.COMPARING)
        waited = await _wait(sink, pacing, 1.0)
        _tag(sink, step.positions, BarState.NONE)
        return waited

    if isinstance(step, Swap):
        pair = (step.i, step.j)
        _tag(sink, pair, BarState.SWAPPING)
        waited = await _wait(sink, pacing, 1.0)
        apply_mutation(step, seq)
        _push(sink, step.i, seq[step.i])
        _push(sink, step.j, seq[step.j])
        _tag(sink, pair, BarState.NONE)
        return waited

    if isinstance(step, Overwrite):
        apply_mutation(step, seq)
        _push(sink, step.index, step.value)
        return 0.0

    if isinstance(step, MarkSorted):
        _tag(sink, (step.index,), BarState.SORTED)
        return await _wait(sink, pacing, 0.5)

    if isinstance(step, Highlight):
        _tag(sink, step.positions, step.state)
        return await _wait(sink, pacing, 1.0)

    if isinstance(step, Clear):
        _tag(sink, step.positions, BarState.NONE)
        return 0.0

    if isinstance(step, Pause):
        return await _wait(sink, pacing, step.factor)

    raise TypeError(f"Unknown step type: {type(step).__name__}")


# ---------------------------------------------------------------------------
# Whole run
# ---------------------------------------------------------------------------
async def run_sort(
    algorithm: str,
    seq: List[int],
    sink: VisualizationSink,
    pacing: Pacing,
) -> RunMetrics:
    """
    Sort ``seq`` in place with the named algorithm, animating through ``sink``.

    Args:
        algorithm : Registry key ("bubble", "selection", "insertion", "merge", "quick").
        seq       : The sequence; mutated in place.
        sink      : Where tags, values and waits go.
        pacing    : Zero-arg callable returning the current delay unit in ms.

    Raises:
        InvalidConfiguration – before any step, nothing mutated.
        SortInterrupted      – mid-run; ``seq`` keeps its partial order.
    """
    info = resolve_algorithm(algorithm)
    if not callable(pacing):
        raise InvalidConfiguration(f"Pacing must be callable, got {pacing!r}")
    try:
        delay = pacing()
    except Exception as exc:
        raise InvalidConfiguration(f"Pacing source failed before the sort started: {exc}") from exc
    validate_delay(delay)

    recorder = RunRecorder(info, size=len(seq))
    recorder.start()
    logger.info(f"Starting {info.label} on {len(seq)} values (d={delay:g} ms)")

    try:
        for step in info.fn(seq):
            recorder.record(step, await apply_step(step, seq, sink, pacing))

        for index in range(len(seq)):
            step = MarkSorted(index)
            recorder.record(step, await apply_step(step, seq, sink, pacing))
    except SortInterrupted as exc:
        exc.algorithm = info.key
        exc.steps_applied = recorder.steps_applied
        logger.warning(
            f"{info.label} interrupted after {recorder.steps_applied} steps: {exc}",
            exc_info=True,
        )
        raise

    metrics = recorder.finish()
    logger.info(
        f"{info.label} finished: {metrics.total_steps} steps, {metrics.swaps} swaps, "
        f"{metrics.writes} writes, {metrics.animation_ms:g} ms of animation"
    )
    return metrics
