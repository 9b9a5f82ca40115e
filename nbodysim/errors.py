"""Exception hierarchy for nbodysim."""

from __future__ import annotations


class NBodyError(Exception):
    """Base class for all nbodysim errors."""


class OutOfDomainError(NBodyError, ValueError):
    """Query time lies outside the recorded trajectory interval."""

    def __init__(self, time: float, t_start: float, t_end: float) -> None:
        self.time = time
        self.t_start = t_start
        self.t_end = t_end
        super().__init__(
            f"time {time!r} outside recorded interval [{t_start!r}, {t_end!r}]"
        )


class UnsupportedIntegratorError(NBodyError, ValueError):
    """Integrator kind is not recognized."""


class DimensionMismatchError(NBodyError, ValueError):
    """Body count inferred from trajectory state disagrees with the definition."""


class IntegrationError(NBodyError, RuntimeError):
    """Raised by an integrator that failed to advance the state."""
