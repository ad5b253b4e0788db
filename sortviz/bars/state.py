from enum import Enum


# ---------------------------------------------------------------------------
# Bar State Enum: maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class BarState(Enum):
    """
    Transient tag of a POSITION in the sequence, never of a value.

    Purely visual: no algorithm reads it back, and it must never
    influence a comparison.
    """

    NONE      = "none"        # default slate
    COMPARING = "comparing"   # amber: being looked at right now
    SWAPPING  = "swapping"    # rose: value about to move
    PIVOT     = "pivot"       # purple: quick sort partition pivot
    SORTED    = "sorted"      # emerald: settled, never touched again

    @classmethod
    def parse(cls, value) -> "BarState":
        """Accept a BarState or its string value."""
        if isinstance(value, cls):
            return value
        return cls(value)
