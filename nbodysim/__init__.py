"""
nbodysim - observables and run strategies for n-body simulations.

Design Principles:
- One immutable result type over two trajectory layouts
- Integrator family decides the callbacks (energy projection or thermostat)
- Energies and temperature as pure functions of a result

Quick Start:
    >>> from nbodysim import Body, SimulationDefinition, run_simulation
    >>> from nbodysim.observables import total_energy
    >>> result = run_simulation(definition, "velocity_verlet", (0.0, 1.0), dt=0.01)
    >>> print(total_energy(result, 0.5))
"""

__version__ = "0.1.0"

from . import observables
from .analysis import EnergyAnalyzer
from .constants import G_NEWTON, K_BOLTZMANN
from .errors import (
    DimensionMismatchError,
    IntegrationError,
    NBodyError,
    OutOfDomainError,
    UnsupportedIntegratorError,
)
from .integrators import IntegratorFamily, IntegratorKind, TrajectoryLayout
from .observables import FrameIterator
from .results import TrajectoryResult
from .runner import SimulationRunner, run_simulation
from .system import (
    Body,
    CubicPeriodicBoundaryConditions,
    GravitationalParameters,
    LennardJonesParameters,
    OpenBoundaryConditions,
    PeriodicBoundaryConditions,
    SimulationDefinition,
)
from .thermostats import AndersenThermostat, AndersenThermostatCallback

__all__ = [
    "observables",
    "Body",
    "SimulationDefinition",
    "LennardJonesParameters",
    "GravitationalParameters",
    "OpenBoundaryConditions",
    "PeriodicBoundaryConditions",
    "CubicPeriodicBoundaryConditions",
    "AndersenThermostat",
    "AndersenThermostatCallback",
    "IntegratorKind",
    "IntegratorFamily",
    "TrajectoryLayout",
    "SimulationRunner",
    "run_simulation",
    "TrajectoryResult",
    "FrameIterator",
    "EnergyAnalyzer",
    "K_BOLTZMANN",
    "G_NEWTON",
    "NBodyError",
    "OutOfDomainError",
    "UnsupportedIntegratorError",
    "DimensionMismatchError",
    "IntegrationError",
]
