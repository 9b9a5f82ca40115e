"""Newtonian gravitational force."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import ForceProvider, pair_indices

if TYPE_CHECKING:
    from ..system import GravitationalParameters, SimulationDefinition


class GravitationalForce(ForceProvider):
    """
    Pairwise Newtonian attraction, F_i = -G m_i m_j (r_i - r_j) / |r_i - r_j|^3.

    There is no cutoff; displacements still go through the boundary.
    """

    def __init__(self, params: GravitationalParameters) -> None:
        self.params = params

    def compute(
        self, positions: NDArray[np.floating], definition: SimulationDefinition
    ) -> NDArray[np.floating]:
        n = positions.shape[1]
        forces = np.zeros((3, n), dtype=np.float64)
        i_indices, j_indices = pair_indices(n)
        if len(i_indices) == 0:
            return forces

        masses = definition.masses()
        dr = definition.boundary_conditions.minimum_image(
            positions[:, i_indices] - positions[:, j_indices]
        )
        r = np.maximum(np.sqrt(np.sum(dr**2, axis=0)), 1e-300)

        scale = -self.params.G * masses[i_indices] * masses[j_indices] / r**3
        pair_forces = scale[np.newaxis, :] * dr

        np.add.at(forces.T, i_indices, pair_forces.T)
        np.add.at(forces.T, j_indices, -pair_forces.T)

        return forces
