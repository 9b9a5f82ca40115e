"""Base interface for integrators and the integrator kind registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..errors import UnsupportedIntegratorError

if TYPE_CHECKING:
    from .callbacks import StepCallback
    from .trajectory import RawTrajectory

# Guard against runaway step counts (e.g. step size collapse)
DEFAULT_MAX_STEPS = 1_000_000


class IntegratorFamily(Enum):
    """Mathematical character of an integration scheme."""

    # General-purpose schemes on a flat first-order state
    GENERIC = "generic"
    # Energy-conserving schemes on a partitioned second-order state
    SYMPLECTIC = "symplectic"


class IntegratorKind(Enum):
    """Supported integration schemes."""

    RK23 = "RK23"
    RK45 = "RK45"
    DOP853 = "DOP853"
    VELOCITY_VERLET = "velocity_verlet"
    YOSHIDA4 = "yoshida4"

    @property
    def family(self) -> IntegratorFamily:
        return INTEGRATOR_FAMILIES[self]

    @classmethod
    def parse(cls, value: Any) -> IntegratorKind:
        """
        Resolve an integrator kind from an enum member, value or name.

        Raises:
            UnsupportedIntegratorError: If ``value`` names no known kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for kind in cls:
                if key in (kind.value.lower(), kind.name.lower()):
                    return kind
        raise UnsupportedIntegratorError(
            f"unsupported integrator kind {value!r}; "
            f"expected one of {[kind.value for kind in cls]}"
        )


INTEGRATOR_FAMILIES: dict[IntegratorKind, IntegratorFamily] = {
    IntegratorKind.RK23: IntegratorFamily.GENERIC,
    IntegratorKind.RK45: IntegratorFamily.GENERIC,
    IntegratorKind.DOP853: IntegratorFamily.GENERIC,
    IntegratorKind.VELOCITY_VERLET: IntegratorFamily.SYMPLECTIC,
    IntegratorKind.YOSHIDA4: IntegratorFamily.SYMPLECTIC,
}


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    An integrator advances a problem over its time span, records every
    accepted step, and runs an optional callback after each one.
    """

    @abstractmethod
    def solve(
        self,
        problem: Any,
        callback: StepCallback | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> RawTrajectory:
        """
        Integrate ``problem`` over its time span.

        Args:
            problem: Problem in the form this integrator accepts.
            callback: Called with the step state after every accepted step.
            max_steps: Maximum number of accepted steps.

        Returns:
            The recorded trajectory.

        Raises:
            IntegrationError: If the scheme fails to advance the state.
        """
        ...
