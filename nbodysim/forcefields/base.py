"""Base interface for force providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import SimulationDefinition


class ForceProvider(ABC):
    """
    Abstract base class for force computation modules.

    Forces drive the integrator's right-hand side. Energy accounting
    lives in ``nbodysim.observables.energy`` and is independent of which
    providers are active.
    """

    @abstractmethod
    def compute(
        self, positions: NDArray[np.floating], definition: SimulationDefinition
    ) -> NDArray[np.floating]:
        """
        Compute forces on all bodies.

        Args:
            positions: Body positions, shape (3, n).
            definition: Simulation definition (masses, boundary).

        Returns:
            Forces array of shape (3, n).
        """
        ...


def pair_indices(n: int) -> tuple[NDArray[np.integer], NDArray[np.integer]]:
    """All unordered pairs (i, j) with i < j."""
    return np.triu_indices(n, k=1)
