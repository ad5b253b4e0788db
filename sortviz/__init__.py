"""
sortviz
=======
Animated sorting algorithm visualizer.

    sortviz.bars        – sequence generator and bar state tags
    sortviz.algorithms  – step model and the five instrumented sorts
    sortviz.engine      – pacing clock, sinks, runner, session controller
    sortviz.ui          – SVG bars and HTML control panels
    sortviz.app         – Flask web app
"""

__version__ = "1.0.0"
