"""Integrator implementations."""

from .base import (
    DEFAULT_MAX_STEPS,
    INTEGRATOR_FAMILIES,
    Integrator,
    IntegratorFamily,
    IntegratorKind,
)
from .callbacks import (
    CallbackSet,
    DiscreteCallback,
    ManifoldProjection,
    StepCallback,
    StepState,
)
from .generic import ScipyIntegrator
from .problems import (
    ODEProblem,
    SecondOrderODEProblem,
    ode_problem,
    second_order_problem,
)
from .registry import create_integrator
from .symplectic import (
    SymplecticIntegrator,
    VelocityVerletIntegrator,
    Yoshida4Integrator,
)
from .trajectory import (
    FlatTrajectory,
    PartitionedState,
    PartitionedTrajectory,
    RawTrajectory,
    TrajectoryLayout,
)

__all__ = [
    # Base classes
    "Integrator",
    "IntegratorFamily",
    "IntegratorKind",
    "INTEGRATOR_FAMILIES",
    "DEFAULT_MAX_STEPS",
    "create_integrator",
    # Integrators
    "ScipyIntegrator",
    "SymplecticIntegrator",
    "VelocityVerletIntegrator",
    "Yoshida4Integrator",
    # Problems
    "ODEProblem",
    "SecondOrderODEProblem",
    "ode_problem",
    "second_order_problem",
    # Callbacks
    "StepState",
    "StepCallback",
    "DiscreteCallback",
    "CallbackSet",
    "ManifoldProjection",
    # Trajectories
    "RawTrajectory",
    "FlatTrajectory",
    "PartitionedTrajectory",
    "PartitionedState",
    "TrajectoryLayout",
]
