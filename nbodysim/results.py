"""Result of a simulation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from .integrators.trajectory import PartitionedState, RawTrajectory
    from .observables.frames import FrameIterator
    from .system import SimulationDefinition


@dataclass(frozen=True, eq=False)
class TrajectoryResult:
    """
    Immutable pairing of a recorded trajectory and the definition that produced it.

    Calling the result forwards to the trajectory: ``result(t)`` is the raw
    interpolated state at time t. Use ``nbodysim.observables`` to extract
    positions, velocities and energies.

    Attributes:
        trajectory: Recorded trajectory (partitioned or flat layout).
        definition: Originating simulation definition.
    """

    trajectory: RawTrajectory
    definition: SimulationDefinition

    def __call__(self, time: float) -> PartitionedState | NDArray[np.floating]:
        return self.trajectory(time)

    @property
    def n_bodies(self) -> int:
        """Return number of bodies."""
        return self.definition.n_bodies

    @property
    def t(self) -> NDArray[np.floating]:
        """Native recorded time grid."""
        return self.trajectory.t

    @property
    def t_span(self) -> tuple[float, float]:
        return self.trajectory.t_span

    @property
    def n_steps(self) -> int:
        """Number of recorded time steps."""
        return len(self.trajectory)

    def frames(self) -> FrameIterator:
        """Position snapshots over the recorded grid, for animation."""
        from .observables.frames import FrameIterator

        return FrameIterator(self)

    def __repr__(self) -> str:
        t_start, t_end = self.t_span
        return (
            f"TrajectoryResult(N={self.n_bodies}, "
            f"layout={self.trajectory.layout.value}, "
            f"time_steps={self.n_steps}, t=[{t_start:g}, {t_end:g}])"
        )
