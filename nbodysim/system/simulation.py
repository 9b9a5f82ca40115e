"""Simulation definition."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from .bodies import Body
from .boundary import BoundaryCondition, OpenBoundaryConditions

if TYPE_CHECKING:
    from ..thermostats import AndersenThermostat


@dataclass(frozen=True, eq=False)
class SimulationDefinition:
    """
    Everything an integrator needs to run an n-body simulation.

    The body order is shared with the integrator state: column i of any
    position or velocity block belongs to ``bodies[i]``.

    Attributes:
        bodies: Ordered bodies.
        potentials: Mapping from potential kind (e.g. "lennard_jones") to
            its parameters.
        boundary_conditions: Boundary of the simulation space.
        thermostat: Optional thermostat configuration.
    """

    bodies: Sequence[Body]
    potentials: Mapping[str, Any] = field(default_factory=dict)
    boundary_conditions: BoundaryCondition = field(
        default_factory=OpenBoundaryConditions
    )
    thermostat: AndersenThermostat | None = None

    def __post_init__(self) -> None:
        bodies = tuple(self.bodies)
        if not bodies:
            raise ValueError("a simulation needs at least one body")
        object.__setattr__(self, "bodies", bodies)
        object.__setattr__(
            self, "potentials", MappingProxyType(dict(self.potentials))
        )

    @property
    def n_bodies(self) -> int:
        """Return number of bodies."""
        return len(self.bodies)

    def masses(self) -> NDArray[np.floating]:
        """Masses in body order, shape (n,)."""
        return np.array([body.mass for body in self.bodies], dtype=np.float64)

    def initial_positions(self) -> NDArray[np.floating]:
        """Initial positions, shape (3, n)."""
        return np.column_stack([body.position for body in self.bodies])

    def initial_velocities(self) -> NDArray[np.floating]:
        """Initial velocities, shape (3, n)."""
        return np.column_stack([body.velocity for body in self.bodies])

    def __repr__(self) -> str:
        kinds = ", ".join(self.potentials) or "none"
        return (
            f"SimulationDefinition(n_bodies={self.n_bodies}, "
            f"potentials=[{kinds}], "
            f"boundary_conditions={type(self.boundary_conditions).__name__}, "
            f"thermostat={self.thermostat!r})"
        )
