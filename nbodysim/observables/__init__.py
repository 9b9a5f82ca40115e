"""Observables computed from simulation results."""

from .accessors import ALL, get_masses, get_position, get_velocity, phase_state
from .energy import (
    distances,
    initial_energy,
    kinetic_energy,
    kinetic_energy_at,
    potential_energy,
    potential_energy_at,
    temperature,
    total_energy,
)
from .frames import FrameIterator

__all__ = [
    "ALL",
    "get_position",
    "get_velocity",
    "get_masses",
    "phase_state",
    "kinetic_energy",
    "kinetic_energy_at",
    "potential_energy",
    "potential_energy_at",
    "total_energy",
    "initial_energy",
    "temperature",
    "distances",
    "FrameIterator",
]
