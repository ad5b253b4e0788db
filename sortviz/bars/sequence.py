"""
sequence.py — Sequence Generator
=================================
Produces the fresh list of magnitudes a sort runs over.

Defaults mirror the control panel: 50 bars, at most 100, heights
between 10 and 359 px.
"""

import logging
import random
from typing import List, Optional

from sortviz.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

DEFAULT_SIZE: int = 50
MIN_SIZE:     int = 1
MAX_SIZE:     int = 100
MIN_VALUE:    int = 10
MAX_VALUE:    int = 359


def validate_size(n) -> int:
    """Return ``n`` if it is a usable sequence length, else raise."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidConfiguration(f"Sequence size must be an integer, got {n!r}")
    if n < MIN_SIZE:
        raise InvalidConfiguration(f"Sequence size must be at least {MIN_SIZE}, got {n}")
    return n


def generate(
    n: int,
    min_value: int = MIN_VALUE,
    max_value: int = MAX_VALUE,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Return ``n`` independent uniform integers in ``[min_value, max_value]``.

    Args:
        n         : Number of elements (>= 1).
        min_value : Inclusive lower bound (>= 0).
        max_value : Inclusive upper bound (>= min_value).
        seed      : Optional seed for a reproducible sequence. A private
                    Random instance is used so the global state is untouched.

    Raises:
        InvalidConfiguration – before anything is generated.
    """
    validate_size(n)
    if min_value < 0:
        raise InvalidConfiguration(f"Magnitudes must be non-negative, got min_value={min_value}")
    if min_value > max_value:
        raise InvalidConfiguration(f"min_value {min_value} exceeds max_value {max_value}")

    rng = random.Random(seed)
    values = [rng.randint(min_value, max_value) for _ in range(n)]
    logger.debug(f"Generated sequence of {n} values in [{min_value}, {max_value}]")
    return values
