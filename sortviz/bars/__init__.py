"""
bars/
-----
Data layer.  Public API:

    from sortviz.bars import BarState, generate
"""

from sortviz.bars.state    import BarState
from sortviz.bars.sequence import (
    generate,
    validate_size,
    DEFAULT_SIZE,
    MIN_SIZE,
    MAX_SIZE,
    MIN_VALUE,
    MAX_VALUE,
)

__all__ = [
    "BarState",
    "generate",
    "validate_size",
    "DEFAULT_SIZE", "MIN_SIZE", "MAX_SIZE",
    "MIN_VALUE",    "MAX_VALUE",
]
