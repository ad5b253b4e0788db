"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector  – dropdown + Start Sorting button
  • array_controls      – size slider + Generate New Array
  • speed_selector      – pacing presets
  • algorithm_info      – name, description, complexities
  • status_panel        – "Ready to sort" / "Sorting..." / …
  • metrics_panel       – steps, swaps, writes, animation time

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine); the app
    stitches them together.
  - Controls carry a `disabled` attribute while a sort is in flight.
"""

from html import escape
from typing import Dict, List, Optional

from sortviz.algorithms import AlgoInfo
from sortviz.engine import RunMetrics, SPEED_PRESETS, SPEED_LABELS


def _disabled(flag: bool) -> str:
    return "disabled" if flag else ""


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    disabled: bool = False,
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{escape(algo.label)} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <select id="algorithm-select" {_disabled(disabled)}>
        {''.join(options)}
      </select>
      <button id="start-sort" class="btn-primary" {_disabled(disabled)}>▶ Start Sorting</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls
# ---------------------------------------------------------------------------
def array_controls(size: int, min_size: int = 1, max_size: int = 100, disabled: bool = False) -> str:
    return f"""
    <div class="panel array-controls">
      <h3>Array</h3>
      <label for="array-size">Size: <span id="size-value">{size}</span></label>
      <input type="range" id="array-size" min="{min_size}" max="{max_size}" value="{size}" {_disabled(disabled)}>
      <button id="generate-array" class="btn-secondary" {_disabled(disabled)}>Generate New Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed Selector
# ---------------------------------------------------------------------------
def speed_selector(selected: Optional[str] = "medium", presets: Dict[str, int] = SPEED_PRESETS) -> str:
    options = []
    for key, ms in presets.items():
        sel = 'selected' if key == selected else ''
        label = SPEED_LABELS.get(key, key)
        options.append(f'<option value="{key}" {sel}>{label} ({ms} ms)</option>')

    return f"""
    <div class="panel speed-control">
      <h3>Speed</h3>
      <select id="speed-control">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Info Card
# ---------------------------------------------------------------------------
def algorithm_info(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return '<div class="panel algorithm-info"><p class="placeholder">No algorithm selected.</p></div>'

    return f"""
    <div class="panel algorithm-info">
      <h3 id="algo-name">{escape(info.label)}</h3>
      <p id="algo-description">{escape(info.description)}</p>
      <table>
        <tr><td>Time:</td><td><strong id="time-complexity">{info.complexity_time}</strong></td></tr>
        <tr><td>Space:</td><td><strong id="space-complexity">{info.complexity_space}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------
def status_panel(message: str) -> str:
    return f'<div class="panel status-panel"><span id="status">{escape(message)}</span></div>'


# ---------------------------------------------------------------------------
# Metrics Panel
# ---------------------------------------------------------------------------
def metrics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel metrics-panel">
          <h3>Run Metrics</h3>
          <p class="placeholder">Sort the array to see metrics.</p>
        </div>
        """

    return f"""
    <div class="panel metrics-panel">
      <h3>Run Metrics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Array Size:</td><td><strong>{metrics.size}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Writes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Animation:</td><td><strong>{metrics.animation_ms / 1000:.1f} s</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
      </table>
    </div>
    """
