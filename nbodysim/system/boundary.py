"""Boundary conditions and pair displacements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

if TYPE_CHECKING:
    from .potentials import LennardJonesParameters


class BoundaryCondition(ABC):
    """
    Abstract base class for simulation boundaries.

    Arrays follow the column convention used throughout the package:
    a block of positions has shape (3, n), one column per body.
    """

    @property
    def is_periodic(self) -> bool:
        return False

    @abstractmethod
    def minimum_image(self, dr: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Reduce raw displacement(s) under this boundary.

        Args:
            dr: Displacement(s), shape (3,) or (3, m).

        Returns:
            Displacement(s) of the same shape.
        """
        ...

    def wrap_positions(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """Return positions folded into the primary cell (identity if open)."""
        return np.asarray(positions, dtype=np.float64).copy()

    def displacement(
        self,
        r_i: NDArray[np.floating],
        r_j: NDArray[np.floating],
        cutoff2: float = np.inf,
    ) -> NDArray[np.floating] | None:
        """
        Displacement r_i - r_j, or None when the pair is beyond the cutoff.

        Args:
            r_i: Position of the first body, shape (3,).
            r_j: Position of the second body, shape (3,).
            cutoff2: Squared cutoff radius.
        """
        dr = self.minimum_image(np.asarray(r_i) - np.asarray(r_j))
        if np.dot(dr, dr) >= cutoff2:
            return None
        return dr


@dataclass(frozen=True)
class OpenBoundaryConditions(BoundaryCondition):
    """Unbounded space: displacements are taken as is."""

    def minimum_image(self, dr: NDArray[np.floating]) -> NDArray[np.floating]:
        return np.asarray(dr, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class PeriodicBoundaryConditions(BoundaryCondition):
    """
    Orthorhombic periodic box with its origin at zero.

    Attributes:
        lengths: Box side lengths [Lx, Ly, Lz].
    """

    lengths: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert lengths."""
        lengths = np.array(self.lengths, dtype=np.float64)
        if lengths.shape == ():
            lengths = np.full(3, float(lengths))
        if lengths.shape != (3,):
            raise ValueError(f"Box lengths must be scalar or (3,), got {lengths.shape}")
        if np.any(lengths <= 0):
            raise ValueError(f"Box lengths must be positive, got {lengths}")
        lengths.flags.writeable = False
        object.__setattr__(self, "lengths", lengths)

    @property
    def is_periodic(self) -> bool:
        return True

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.prod(self.lengths))

    def _column(self) -> NDArray[np.floating]:
        return self.lengths[:, np.newaxis]

    def minimum_image(self, dr: NDArray[np.floating]) -> NDArray[np.floating]:
        dr = np.asarray(dr, dtype=np.float64)
        lengths = self.lengths if dr.ndim == 1 else self._column()
        return dr - lengths * np.round(dr / lengths)

    def wrap_positions(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Fold positions into the primary cell: x - L * floor(x / L).

        Args:
            positions: Positions of shape (3,) or (3, n).
        """
        positions = np.asarray(positions, dtype=np.float64)
        lengths = self.lengths if positions.ndim == 1 else self._column()
        return positions - lengths * np.floor(positions / lengths)


class CubicPeriodicBoundaryConditions(PeriodicBoundaryConditions):
    """Cubic periodic box of side L."""

    def __init__(self, L: float) -> None:
        super().__init__(np.full(3, float(L)))

    @property
    def L(self) -> float:
        return float(self.lengths[0])


def apply_boundary_conditions(
    r_i: ArrayLike,
    r_j: ArrayLike,
    boundary: BoundaryCondition,
    params: LennardJonesParameters,
) -> NDArray[np.floating] | None:
    """
    Pair displacement under the boundary, honoring the potential's cutoff.

    Returns:
        The (minimum-image) displacement r_i - r_j, or None when the pair
        lies at or beyond the cutoff radius of ``params``.
    """
    return boundary.displacement(
        np.asarray(r_i, dtype=np.float64),
        np.asarray(r_j, dtype=np.float64),
        params.cutoff2,
    )
