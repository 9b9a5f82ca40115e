"""Interpolatable trajectories recorded by integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import CubicHermiteSpline

from ..errors import OutOfDomainError


class TrajectoryLayout(Enum):
    """How a trajectory stores velocities and positions."""

    # (velocities, positions) as two (3, n) blocks
    PARTITIONED = "partitioned"
    # one (3, 2n) block, velocities in the first n columns
    FLAT = "flat"


class PartitionedState(NamedTuple):
    """Velocity and position blocks, each of shape (3, n)."""

    velocities: NDArray[np.floating]
    positions: NDArray[np.floating]


def _frozen(values: ArrayLike) -> NDArray[np.floating]:
    array = np.array(values, dtype=np.float64)
    array.flags.writeable = False
    return array


def _hermite(
    t: NDArray[np.floating], y: NDArray[np.floating], dydt: NDArray[np.floating]
) -> CubicHermiteSpline | None:
    if len(t) < 2:
        return None
    k = len(t)
    return CubicHermiteSpline(t, y.reshape(k, -1), dydt.reshape(k, -1), axis=0)


class RawTrajectory(ABC):
    """
    Trajectory over the recorded grid, queryable at any time inside it.

    Between recorded steps values are cubic Hermite interpolants built
    from the recorded values and their time derivatives. Queries at a
    recorded time return the recorded value exactly. Queries outside
    ``[t[0], t[-1]]`` raise OutOfDomainError.
    """

    layout: TrajectoryLayout

    def __init__(self, t: ArrayLike) -> None:
        t = _frozen(t)
        if t.ndim != 1 or len(t) == 0:
            raise ValueError("trajectory needs a non-empty 1-D time grid")
        if np.any(np.diff(t) <= 0):
            raise ValueError("trajectory times must be strictly increasing")
        self._t = t

    @property
    def t(self) -> NDArray[np.floating]:
        """Native recorded time grid (read-only)."""
        return self._t

    @property
    def t_span(self) -> tuple[float, float]:
        return float(self._t[0]), float(self._t[-1])

    def __len__(self) -> int:
        return len(self._t)

    def _locate(self, time: float) -> int | None:
        """Index of a recorded step equal to ``time``, else None."""
        t_start, t_end = self.t_span
        if not t_start <= time <= t_end:
            raise OutOfDomainError(time, t_start, t_end)
        index = int(np.searchsorted(self._t, time))
        if index < len(self._t) and self._t[index] == time:
            return index
        return None

    @abstractmethod
    def __call__(self, time: float) -> PartitionedState | NDArray[np.floating]:
        """Interpolated state at ``time``."""
        ...


class FlatTrajectory(RawTrajectory):
    """
    Trajectory of a first-order system with a flat (3, 2n) state.

    Attributes:
        u: Recorded states, shape (k, 3, 2n).
        du: Recorded time derivatives, shape (k, 3, 2n).
    """

    layout = TrajectoryLayout.FLAT

    def __init__(self, t: ArrayLike, u: ArrayLike, du: ArrayLike) -> None:
        super().__init__(t)
        self.u = _frozen(u)
        self.du = _frozen(du)
        if self.u.shape[0] != len(self.t) or self.u.shape != self.du.shape:
            raise ValueError(
                f"states {self.u.shape} and derivatives {self.du.shape} do not "
                f"match {len(self.t)} recorded times"
            )
        self._spline = _hermite(self.t, self.u, self.du)

    def __call__(self, time: float) -> NDArray[np.floating]:
        index = self._locate(time)
        if index is not None:
            return self.u[index].copy()
        return self._spline(time).reshape(self.u.shape[1:])


class PartitionedTrajectory(RawTrajectory):
    """
    Trajectory of a second-order system with separate velocity and position blocks.

    Attributes:
        velocities: Recorded velocities, shape (k, 3, n).
        positions: Recorded positions, shape (k, 3, n).
        accelerations: Recorded accelerations, shape (k, 3, n).
    """

    layout = TrajectoryLayout.PARTITIONED

    def __init__(
        self,
        t: ArrayLike,
        velocities: ArrayLike,
        positions: ArrayLike,
        accelerations: ArrayLike,
    ) -> None:
        super().__init__(t)
        self.velocities = _frozen(velocities)
        self.positions = _frozen(positions)
        self.accelerations = _frozen(accelerations)
        shape = self.positions.shape
        if (
            shape[0] != len(self.t)
            or self.velocities.shape != shape
            or self.accelerations.shape != shape
        ):
            raise ValueError(
                f"velocity {self.velocities.shape}, position {shape} and "
                f"acceleration {self.accelerations.shape} blocks do not match "
                f"{len(self.t)} recorded times"
            )
        self._position_spline = _hermite(self.t, self.positions, self.velocities)
        self._velocity_spline = _hermite(self.t, self.velocities, self.accelerations)

    def __call__(self, time: float) -> PartitionedState:
        index = self._locate(time)
        if index is not None:
            return PartitionedState(
                self.velocities[index].copy(), self.positions[index].copy()
            )
        block = self.positions.shape[1:]
        return PartitionedState(
            self._velocity_spline(time).reshape(block),
            self._position_spline(time).reshape(block),
        )
