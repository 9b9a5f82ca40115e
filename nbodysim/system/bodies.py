"""Body representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, eq=False)
class Body:
    """
    A point mass with initial kinematic state.

    Attributes:
        position: Initial position, shape (3,).
        velocity: Initial velocity, shape (3,).
        mass: Mass (positive).
    """

    position: NDArray[np.floating]
    velocity: NDArray[np.floating]
    mass: float

    def __post_init__(self) -> None:
        """Validate and freeze arrays."""
        position = np.array(self.position, dtype=np.float64)
        velocity = np.array(self.velocity, dtype=np.float64)
        if position.shape != (3,):
            raise ValueError(f"position must have shape (3,), got {position.shape}")
        if velocity.shape != (3,):
            raise ValueError(f"velocity must have shape (3,), got {velocity.shape}")
        if not self.mass > 0:
            raise ValueError(f"mass must be positive, got {self.mass}")

        position.flags.writeable = False
        velocity.flags.writeable = False
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "velocity", velocity)
        object.__setattr__(self, "mass", float(self.mass))
