"""Composite force field combining multiple force providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..system.potentials import GRAVITATIONAL, LENNARD_JONES
from .base import ForceProvider
from .gravitational import GravitationalForce
from .lennard_jones import LennardJonesForce

if TYPE_CHECKING:
    from ..system import SimulationDefinition

# Potential kind -> force provider type
FORCE_PROVIDERS: dict[str, type[ForceProvider]] = {
    LENNARD_JONES: LennardJonesForce,
    GRAVITATIONAL: GravitationalForce,
}


class ForceField(ForceProvider):
    """
    Composite force field combining multiple force providers.

    Implements the composite pattern: a ForceField is itself a ForceProvider
    that aggregates contributions from multiple terms.

    Example:
        ff = ForceField.from_definition(definition)
        accel = ff.accelerations(positions, definition)
    """

    def __init__(self, terms: list[ForceProvider] | None = None) -> None:
        """
        Initialize composite force field.

        Args:
            terms: List of force providers to combine.
        """
        self.terms: list[ForceProvider] = terms if terms is not None else []

    @classmethod
    def from_definition(cls, definition: SimulationDefinition) -> ForceField:
        """
        Build the force field for every recognized potential kind.

        Unknown kinds are ignored and contribute no force.
        """
        terms = [
            FORCE_PROVIDERS[kind](params)
            for kind, params in definition.potentials.items()
            if kind in FORCE_PROVIDERS
        ]
        return cls(terms)

    def compute(
        self, positions: NDArray[np.floating], definition: SimulationDefinition
    ) -> NDArray[np.floating]:
        """
        Compute total forces from all terms.

        Args:
            positions: Body positions, shape (3, n).
            definition: Simulation definition.

        Returns:
            Total forces array of shape (3, n).
        """
        total_forces = np.zeros_like(positions, dtype=np.float64)

        for term in self.terms:
            total_forces += term.compute(positions, definition)

        return total_forces

    def accelerations(
        self, positions: NDArray[np.floating], definition: SimulationDefinition
    ) -> NDArray[np.floating]:
        """Total forces divided by body masses, shape (3, n)."""
        return self.compute(positions, definition) / definition.masses()[np.newaxis, :]
