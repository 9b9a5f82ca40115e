"""Bodies, potentials, boundaries and the simulation definition."""

from .bodies import Body
from .boundary import (
    BoundaryCondition,
    CubicPeriodicBoundaryConditions,
    OpenBoundaryConditions,
    PeriodicBoundaryConditions,
    apply_boundary_conditions,
)
from .potentials import (
    GRAVITATIONAL,
    LENNARD_JONES,
    GravitationalParameters,
    LennardJonesParameters,
)
from .simulation import SimulationDefinition

__all__ = [
    "Body",
    "BoundaryCondition",
    "OpenBoundaryConditions",
    "PeriodicBoundaryConditions",
    "CubicPeriodicBoundaryConditions",
    "apply_boundary_conditions",
    "LENNARD_JONES",
    "GRAVITATIONAL",
    "LennardJonesParameters",
    "GravitationalParameters",
    "SimulationDefinition",
]
