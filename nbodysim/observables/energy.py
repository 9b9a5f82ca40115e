"""Energy and temperature of a simulated system."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import K_BOLTZMANN
from ..system.boundary import apply_boundary_conditions
from ..system.potentials import LENNARD_JONES
from .accessors import get_masses, get_position, get_velocity

if TYPE_CHECKING:
    from ..results import TrajectoryResult
    from ..system import SimulationDefinition


def kinetic_energy(velocities: ArrayLike, definition: SimulationDefinition) -> float:
    """
    Total kinetic energy: sum_i (m_i / 2) * |v_i|^2.

    Args:
        velocities: Velocity block, shape (3, n).
        definition: Simulation definition providing the masses.
    """
    velocities = np.asarray(velocities, dtype=np.float64)
    masses = get_masses(definition)
    return float(np.dot(np.sum(velocities**2, axis=0), masses / 2))


def potential_energy(positions: ArrayLike, definition: SimulationDefinition) -> float:
    """
    Lennard-Jones potential energy of a configuration.

    Sums 4 * epsilon * [(sigma^2/r^2)^6 - (sigma^2/r^2)^3] over all pairs
    i < j whose boundary-reduced separation lies inside the cutoff. Only the
    Lennard-Jones term is accounted for; other potential kinds contribute
    nothing, and a definition without Lennard-Jones has zero potential
    energy.

    Args:
        positions: Position block, shape (3, n).
        definition: Simulation definition.
    """
    params = definition.potentials.get(LENNARD_JONES)
    if params is None:
        return 0.0

    positions = np.asarray(positions, dtype=np.float64)
    boundary = definition.boundary_conditions
    n = positions.shape[1]

    e_lj = 0.0
    for i in range(n):
        r_i = positions[:, i]
        for j in range(i + 1, n):
            r_ij = apply_boundary_conditions(r_i, positions[:, j], boundary, params)
            if r_ij is None:
                continue
            r2 = np.dot(r_ij, r_ij)
            # Coincident bodies give an infinite energy
            with np.errstate(divide="ignore", over="ignore"):
                s6 = (params.sigma2 / r2) ** 3
            # s12 - s6, without inf - inf
            e_lj += s6 * (s6 - 1.0)

    return float(4.0 * params.epsilon * e_lj)


def kinetic_energy_at(result: TrajectoryResult, time: float) -> float:
    """Kinetic energy of the trajectory at ``time``."""
    return kinetic_energy(get_velocity(result, time), result.definition)


def potential_energy_at(result: TrajectoryResult, time: float) -> float:
    """Potential energy of the trajectory at ``time``."""
    return potential_energy(get_position(result, time), result.definition)


def total_energy(result: TrajectoryResult, time: float) -> float:
    """Kinetic plus potential energy at ``time``."""
    return kinetic_energy_at(result, time) + potential_energy_at(result, time)


def initial_energy(definition: SimulationDefinition) -> float:
    """Total energy of the definition's initial coordinates and velocities."""
    e_pot = potential_energy(definition.initial_positions(), definition)
    e_kin = kinetic_energy(definition.initial_velocities(), definition)
    return e_pot + e_kin


def temperature(result: TrajectoryResult, time: float) -> float:
    """
    Temperature estimate mean_i(|v_i|^2 * m_i) / (3 * k_B).

    k_B is the SI Boltzmann constant.
    """
    velocities = get_velocity(result, time)
    masses = get_masses(result.definition)
    return float(np.mean(np.sum(velocities**2, axis=0) * masses) / (3 * K_BOLTZMANN))


def distances(result: TrajectoryResult, time: float) -> NDArray[np.floating]:
    """
    Euclidean distances between all ordered pairs of distinct bodies.

    Pairs are listed row-major, (0, 1), (0, 2), ..., (1, 0), (1, 2), ...
    Distances are raw, without the minimum image convention.
    """
    positions = get_position(result, time)
    diff = positions[:, :, np.newaxis] - positions[:, np.newaxis, :]
    d = np.sqrt(np.sum(diff**2, axis=0))
    return d[~np.eye(d.shape[0], dtype=bool)]
