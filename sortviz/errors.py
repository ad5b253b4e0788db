"""
errors.py — Exception Hierarchy
================================
Everything the engine and the session raise on purpose lives here so the
web layer can map it to HTTP status codes in one place.

    SortVizError
      ├── InvalidConfiguration   bad size / bounds / delay / algorithm key
      ├── SortInterrupted        a step's dependency (sink, clock) failed
      └── SessionBusy            a sort is already in flight

Index errors raised by the engine itself are NOT part of this hierarchy;
they are bugs and propagate as-is.
"""


class SortVizError(Exception):
    """Base class for every deliberate sortviz failure."""


class InvalidConfiguration(SortVizError, ValueError):
    """Rejected before any step runs; nothing has been mutated."""


class SortInterrupted(SortVizError):
    """
    A running sort was aborted part-way.

    The sequence is left exactly as the last completed step left it.
    The failing dependency's exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, algorithm: str = "", steps_applied: int = 0):
        super().__init__(message)
        self.algorithm = algorithm
        self.steps_applied = steps_applied


class SessionBusy(SortVizError):
    """The session refused a request because a sort is running."""
