"""Lennard-Jones force implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import ForceProvider, pair_indices

if TYPE_CHECKING:
    from ..system import LennardJonesParameters, SimulationDefinition


class LennardJonesForce(ForceProvider):
    """
    Lennard-Jones 12-6 force with a spherical cutoff.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]

    Displacements go through the definition's boundary conditions, so
    periodic systems use the minimum image convention.

    Attributes:
        params: Lennard-Jones parameters (epsilon, sigma^2, cutoff^2).
    """

    def __init__(self, params: LennardJonesParameters) -> None:
        self.params = params

    def compute(
        self, positions: NDArray[np.floating], definition: SimulationDefinition
    ) -> NDArray[np.floating]:
        """
        Compute Lennard-Jones forces.

        Args:
            positions: Body positions, shape (3, n).
            definition: Simulation definition.

        Returns:
            Forces array of shape (3, n).
        """
        n = positions.shape[1]
        forces = np.zeros((3, n), dtype=np.float64)
        i_indices, j_indices = pair_indices(n)
        if len(i_indices) == 0:
            return forces

        # dr points from j to i
        dr = definition.boundary_conditions.minimum_image(
            positions[:, i_indices] - positions[:, j_indices]
        )
        r2 = np.sum(dr**2, axis=0)

        # Apply cutoff
        mask = r2 < self.params.cutoff2
        if not np.any(mask):
            return forces

        i_indices = i_indices[mask]
        j_indices = j_indices[mask]
        dr = dr[:, mask]
        r2 = np.maximum(r2[mask], 1e-20)

        s6 = (self.params.sigma2 / r2) ** 3
        s12 = s6**2

        # F_i = 24 * epsilon * (2*s12 - s6) / r^2 * dr
        scale = 24.0 * self.params.epsilon * (2.0 * s12 - s6) / r2
        pair_forces = scale[np.newaxis, :] * dr

        # Newton's third law
        np.add.at(forces.T, i_indices, pair_forces.T)
        np.add.at(forces.T, j_indices, -pair_forces.T)

        return forces
