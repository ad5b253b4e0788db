"""
pacing.py — Pacing Clock
=========================
One process-wide delay unit `d` (milliseconds).  Every instrumented step
waits some multiple of it, which is what makes the animation watchable.

The runner never caches `d`: it calls the clock at every wait, so a
speed change mid-sort takes effect on the next step (in-flight waits
are not shortened retroactively).
"""

import math
from typing import Dict

from sortviz.errors import InvalidConfiguration


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per unit)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "very-slow": 300,
    "slow":      200,
    "medium":    100,
    "fast":      50,
    "very-fast": 10,
}

SPEED_LABELS: Dict[str, str] = {
    "very-slow": "Very Slow",
    "slow":      "Slow",
    "medium":    "Medium",
    "fast":      "Fast",
    "very-fast": "Very Fast",
}

DEFAULT_SPEED:    str = "medium"
DEFAULT_DELAY_MS: int = SPEED_PRESETS[DEFAULT_SPEED]


def validate_delay(value) -> float:
    """Return ``value`` as float milliseconds, or raise InvalidConfiguration."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"Delay must be a number of milliseconds, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"Delay must be a finite, non-negative number, got {value!r}")
    return float(value)


# ---------------------------------------------------------------------------
# PacingClock
# ---------------------------------------------------------------------------
class PacingClock:
    """
    Callable holder of the current delay unit.

    Attributes:
        delay_ms : Current unit in milliseconds.
        preset   : Name of the preset that set it, or None for a raw value.
    """

    def __init__(self, delay_ms: float = DEFAULT_DELAY_MS):
        self.delay_ms: float = validate_delay(delay_ms)
        self.preset = self._preset_for(self.delay_ms)

    def __call__(self) -> float:
        return self.delay_ms

    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise InvalidConfiguration(
                f"Unknown speed {preset!r}; expected one of {', '.join(SPEED_PRESETS)}"
            )
        self.delay_ms = float(SPEED_PRESETS[preset])
        self.preset = preset

    def set_delay(self, delay_ms: float) -> None:
        self.delay_ms = validate_delay(delay_ms)
        self.preset = self._preset_for(self.delay_ms)

    @staticmethod
    def _preset_for(delay_ms: float):
        for name, value in SPEED_PRESETS.items():
            if value == delay_ms:
                return name
        return None

    def __repr__(self) -> str:
        return f"PacingClock(delay_ms={self.delay_ms:g}, preset={self.preset})"
