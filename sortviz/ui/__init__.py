"""
ui/
---
Presentation layer.

    from sortviz.ui import render_bars
    from sortviz.ui import algorithm_selector, array_controls, …
"""

from sortviz.ui.canvas import render_bars, bar_width, CanvasConfig

from sortviz.ui.controls import (
    algorithm_selector,
    array_controls,
    speed_selector,
    algorithm_info,
    status_panel,
    metrics_panel,
)

__all__ = [
    "render_bars",
    "bar_width",
    "CanvasConfig",
    "algorithm_selector",
    "array_controls",
    "speed_selector",
    "algorithm_info",
    "status_panel",
    "metrics_panel",
]
