"""
app.py — Sorting Visualizer Flask App
======================================
The web server that powers the visualizer.

Routes:
  GET  /                      – main UI
  GET  /api/state             – current session state
  POST /api/array/generate    – generate a new sequence
  POST /api/config/algo       – select the algorithm
  POST /api/config/speed      – change the pacing unit
  POST /api/sort              – run the selected sort, return its trace

State management:
  Each browser gets a SortSession, kept server-side in SESSIONS and
  looked up by an id stored in the Flask session cookie.  SESSIONS holds
  at most MAX_SESSIONS entries; the least recently used idle ones go first.
  /api/sort runs the engine against a RecordingSink that records the
  waits instead of sleeping through them; the browser replays the trace with the same
  timings, so the server never holds a request open for the length of
  an animation.
"""

import asyncio
import os
import secrets
import threading
import uuid
from collections import OrderedDict

from flask import Flask, render_template_string, request, jsonify, session

from sortviz.algorithms import get_algorithm, list_algorithms
from sortviz.bars.sequence import MIN_SIZE, MAX_SIZE
from sortviz.bars.state import BarState
from sortviz.engine import RecordingSink, SortSession, SessionStatus, PacingClock
from sortviz.engine.pacing import DEFAULT_DELAY_MS
from sortviz.errors import InvalidConfiguration, SessionBusy
from sortviz.ui import (
    render_bars,
    CanvasConfig,
    algorithm_selector,
    array_controls,
    speed_selector,
    algorithm_info,
    status_panel,
    metrics_panel,
)


app = Flask(__name__)
app.secret_key = os.environ.get("SORTVIZ_SECRET_KEY") or secrets.token_hex(32)

# Least recently used first; idle sessions beyond the cap are evicted.
MAX_SESSIONS = int(os.environ.get("SORTVIZ_MAX_SESSIONS", "256"))
SESSIONS: "OrderedDict[str, SortSession]" = OrderedDict()
_SESSIONS_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Session Helpers
# ---------------------------------------------------------------------------
def get_sort_session() -> SortSession:
    """Return this browser's SortSession, creating it on first use."""
    sid = session.get("sid")
    with _SESSIONS_LOCK:
        if sid is not None and sid in SESSIONS:
            SESSIONS.move_to_end(sid)
            return SESSIONS[sid]

        sid = uuid.uuid4().hex
        session["sid"] = sid
        SESSIONS[sid] = SortSession()
        _evict_idle_sessions()
        return SESSIONS[sid]


def _evict_idle_sessions() -> None:
    """Drop least recently used idle sessions until the map fits MAX_SESSIONS.

    The newest entry (last) is never dropped.
    """
    for sid in list(SESSIONS)[:-1]:
        if len(SESSIONS) <= MAX_SESSIONS:
            break
        if not SESSIONS[sid].busy:
            del SESSIONS[sid]


def error(message: str, status: int):
    return jsonify({"error": message}), status


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    sort_session = get_sort_session()
    info = get_algorithm(sort_session.algorithm)
    busy = sort_session.busy

    # a finished sort stays green across reloads
    tags = None
    if sort_session.status is SessionStatus.COMPLETED:
        tags = {i: BarState.SORTED for i in range(len(sort_session.sequence))}

    return render_template_string(
        INDEX_TEMPLATE,
        svg=render_bars(sort_session.sequence, tags),
        algo_selector=algorithm_selector(list_algorithms(), sort_session.algorithm, disabled=busy),
        array=array_controls(sort_session.size, MIN_SIZE, MAX_SIZE, disabled=busy),
        speed=speed_selector(sort_session.clock.preset),
        info=algorithm_info(info),
        status=status_panel(sort_session.status.value),
        metrics=metrics_panel(sort_session.last_metrics),
        palette=CanvasConfig.bar_colors,
        delay_ms=sort_session.clock.delay_ms,
    )


@app.route("/api/state")
def api_state():
    return jsonify(get_sort_session().snapshot())


# ---------------------------------------------------------------------------
# API: Sequence
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    sort_session = get_sort_session()
    data = request.get_json(silent=True) or {}

    try:
        values = sort_session.regenerate(size=data.get("size"), seed=data.get("seed"))
    except SessionBusy as e:
        return error(str(e), 409)
    except InvalidConfiguration as e:
        return error(str(e), 400)

    return jsonify({
        "svg": render_bars(values),
        "values": values,
        "size": sort_session.size,
        "status": sort_session.status.value,
        "metrics": metrics_panel(None),
    })


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    sort_session = get_sort_session()
    data = request.get_json(silent=True) or {}

    try:
        sort_session.select_algorithm(data.get("algo_key", ""))
    except SessionBusy as e:
        return error(str(e), 409)
    except InvalidConfiguration as e:
        return error(str(e), 400)

    return jsonify({
        "algo_key": sort_session.algorithm,
        "info": algorithm_info(get_algorithm(sort_session.algorithm)),
    })


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    sort_session = get_sort_session()
    data = request.get_json(silent=True) or {}

    try:
        if "delay_ms" in data:
            sort_session.set_delay(data["delay_ms"])
        else:
            sort_session.set_speed(data.get("speed", ""))
    except InvalidConfiguration as e:
        return error(str(e), 400)

    return jsonify({"speed": sort_session.clock.preset, "delay_ms": sort_session.clock.delay_ms})


# ---------------------------------------------------------------------------
# API: Run Sort
# ---------------------------------------------------------------------------
@app.route("/api/sort", methods=["POST"])
def api_sort():
    sort_session = get_sort_session()
    initial = list(sort_session.sequence)
    sink = RecordingSink(values=initial)

    # A zero unit would record every wait as 0 ms and lose the d/2 ratios,
    # so record against the default unit; the browser rescales to the live one.
    clock = sort_session.clock
    if clock.delay_ms == 0:
        clock = PacingClock(DEFAULT_DELAY_MS)
    delay_ms = clock.delay_ms

    try:
        status = asyncio.run(sort_session.run(sink, clock=clock))
    except SessionBusy as e:
        return error(str(e), 409)
    except InvalidConfiguration as e:
        return error(str(e), 400)

    metrics = sort_session.last_metrics if status is SessionStatus.COMPLETED else None
    if metrics and clock is not sort_session.clock:
        metrics.animation_ms = 0.0
    return jsonify({
        "status": status.value,
        "completed": status is SessionStatus.COMPLETED,
        "algo_key": sort_session.algorithm,
        "delay_ms": delay_ms,
        "initial": initial,
        "values": list(sort_session.sequence),
        "events": sink.export(),
        "metrics": metrics.to_dict() if metrics else None,
        "metrics_html": metrics_panel(metrics),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main {
      flex: 1;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: center;
      gap: 16px;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 13px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      color: var(--accent-cyan);
      margin-bottom: 12px;
    }

    select, input[type=range], button { width: 100%; margin-top: 8px; }
    select, button {
      background: var(--bg-darker);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 8px;
    }
    button.btn-primary { background: var(--accent-cyan); color: var(--bg-darker); font-weight: 700; }
    button:disabled, select:disabled, input:disabled { opacity: 0.4; cursor: not-allowed; }

    td { padding: 2px 8px 2px 0; color: var(--text-secondary); }
    .placeholder { color: var(--text-secondary); font-style: italic; }
    #status { font-family: 'JetBrains Mono', monospace; color: var(--accent-emerald); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-selector">{{ algo_selector|safe }}</div>
    <div id="array">{{ array|safe }}</div>
    <div id="speed">{{ speed|safe }}</div>
    <div id="info">{{ info|safe }}</div>
    <div id="metrics">{{ metrics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas">{{ svg|safe }}</div>
    <div id="status-line">{{ status|safe }}</div>
  </div>

  <script>
    const PALETTE = {{ palette|tojson }};
    let currentDelay = {{ delay_ms|tojson }};

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function sleep(ms) {
      return new Promise(resolve => setTimeout(resolve, ms));
    }

    function setStatus(text) {
      document.getElementById('status').textContent = text;
    }

    function setControlsDisabled(flag) {
      ['algorithm-select', 'array-size', 'generate-array', 'start-sort'].forEach(id => {
        const el = document.getElementById(id);
        if (el) el.disabled = flag;
      });
    }

    // Bar updates mirror the sink: tag(positions, state) and set_value(index, value)
    function tagBars(positions, state) {
      positions.forEach(i => {
        const bar = document.getElementById('bar-' + i);
        if (!bar) return;
        bar.setAttribute('class', 'bar ' + state);
        bar.dataset.state = state;
        bar.querySelector('rect').setAttribute('fill', PALETTE[state] || PALETTE['none']);
      });
    }

    function setBarValue(index, value) {
      const svg = document.getElementById('bars-svg');
      const bar = document.getElementById('bar-' + index);
      if (!svg || !bar) return;
      const scaleMax = +svg.dataset.scaleMax;
      const usable = +svg.dataset.usableHeight;
      const baseline = +svg.dataset.baseline;
      const h = Math.max(1, Math.round(value / scaleMax * usable));
      const rect = bar.querySelector('rect');
      rect.setAttribute('height', h);
      rect.setAttribute('y', baseline - h);
      const label = bar.querySelector('text');
      if (label) {
        label.textContent = value;
        label.setAttribute('y', baseline - h - 4);
      }
      bar.dataset.value = value;
    }

    // Waits are rescaled by the live speed setting, so a speed change
    // during playback applies from the next step on.
    async function playTrace(events, recordedDelay) {
      for (const e of events) {
        if (e.kind === 'tag') tagBars(e.positions, e.state);
        else if (e.kind === 'value') setBarValue(e.index, e.value);
        else if (e.kind === 'sleep') {
          // recordedDelay is never 0, so every wait keeps its multiplier
          await sleep(e.duration_ms * currentDelay / recordedDelay);
        }
      }
    }

    document.getElementById('start-sort')?.addEventListener('click', async () => {
      setControlsDisabled(true);
      setStatus('Sorting...');
      const data = await post('/api/sort', {});
      if (data.error) {
        setStatus(data.error);
        setControlsDisabled(false);
        return;
      }
      await playTrace(data.events, data.delay_ms);
      setStatus(data.status);
      document.getElementById('metrics').innerHTML = data.metrics_html;
      setControlsDisabled(false);
    });

    document.getElementById('generate-array')?.addEventListener('click', async () => {
      const size = +document.getElementById('array-size').value;
      const data = await post('/api/array/generate', {size});
      if (data.svg) document.getElementById('canvas').innerHTML = data.svg;
      if (data.metrics) document.getElementById('metrics').innerHTML = data.metrics;
      setStatus(data.status || data.error);
    });

    document.getElementById('array-size')?.addEventListener('input', async (e) => {
      document.getElementById('size-value').textContent = e.target.value;
      const data = await post('/api/array/generate', {size: +e.target.value});
      if (data.svg) document.getElementById('canvas').innerHTML = data.svg;
      if (data.status) setStatus(data.status);
    });

    document.getElementById('algorithm-select')?.addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.info) document.getElementById('info').innerHTML = data.info;
    });

    document.getElementById('speed-control')?.addEventListener('change', async (e) => {
      const data = await post('/api/config/speed', {speed: e.target.value});
      if (data.delay_ms !== undefined) currentDelay = data.delay_ms;
    });
  </script>
</body>
</html>
"""
