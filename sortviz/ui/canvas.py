"""
canvas.py — SVG Bar Renderer
==============================
Pure rendering function: values + tags → SVG string.

The renderer consumes:
  • values  – the sequence (one bar per position)
  • tags    – {position: BarState} (missing positions render as NONE)
  • config  – visual config (canvas size, colors, fonts, …)

Design decisions:
  - NO mutation.  Stateless: the caller passes everything in and gets a
    string back.
  - Every bar is a <g id="bar-{i}"> holding a <rect> and a value <text>,
    with `data-state` / `data-value` attributes, so the browser playback
    can restyle one bar without re-rendering the canvas.
  - Heights are scaled against max(MAX_VALUE, max(values)) so a fresh
    sequence always fits and bar heights stay comparable across runs.
"""

from typing import Dict, List, Optional

from sortviz.bars.state import BarState
from sortviz.bars.sequence import MAX_VALUE


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:   int = 900
    height:  int = 420
    padding: int = 20
    bg:      str = "#0d1117"

    # bar colors (state → fill)
    bar_colors: Dict[str, str] = {
        "none":      "#0ea5e9",   # cyan
        "comparing": "#f59e0b",   # amber
        "swapping":  "#f43f5e",   # rose
        "pivot":     "#a855f7",   # purple
        "sorted":    "#10b981",   # emerald
    }

    # bars
    bar_gap:          int = 2
    bar_min_width:    int = 3
    bar_radius:       int = 2
    label_min_width:  int = 16    # narrower bars drop their value label
    label_color:      str = "#e6edf3"
    label_size:       int = 10


CONFIG = CanvasConfig()


def bar_width(count: int, config: CanvasConfig = CONFIG) -> int:
    """At least 3 px wide, with a 2 px gap between bars."""
    if count <= 0:
        return config.bar_min_width
    usable = config.width - 2 * config.padding
    return max(config.bar_min_width, usable // count - config.bar_gap)


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    values: List[int],
    tags: Optional[Dict[int, BarState]] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        values : Bar magnitudes, left to right.
        tags   : Optional {position: BarState}.
        config : Visual config.
    """
    tags = tags or {}
    width = bar_width(len(values), config)
    scale_max = max([MAX_VALUE] + list(values))
    usable_h = config.height - 2 * config.padding
    baseline = config.height - config.padding

    svg_parts = [
        f'<svg id="bars-svg" width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" '
        f'data-scale-max="{scale_max}" data-usable-height="{usable_h}" data-baseline="{baseline}">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    for index, value in enumerate(values):
        state = BarState.parse(tags.get(index, BarState.NONE))
        svg_parts.append(_render_bar(index, value, state, width, scale_max, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Bar Rendering
# ---------------------------------------------------------------------------
def _render_bar(
    index: int,
    value: int,
    state: BarState,
    width: int,
    scale_max: int,
    config: CanvasConfig,
) -> str:
    usable_h = config.height - 2 * config.padding
    h = max(1, round(value / scale_max * usable_h)) if scale_max else 1
    x = config.padding + index * (width + config.bar_gap)
    y = config.height - config.padding - h
    fill = config.bar_colors.get(state.value, config.bar_colors["none"])

    parts = [
        f'<g id="bar-{index}" class="bar {state.value}" data-state="{state.value}" data-value="{value}">',
        f'  <rect x="{x}" y="{y}" width="{width}" height="{h}" rx="{config.bar_radius}" fill="{fill}"/>',
    ]
    if width >= config.label_min_width:
        parts.append(
            f'  <text x="{x + width / 2:g}" y="{y - 4}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="\'JetBrains Mono\', monospace" '
            f'fill="{config.label_color}">{value}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)
