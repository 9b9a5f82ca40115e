"""Fixed-step symplectic integrators for second-order systems."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import IntegrationError
from .base import DEFAULT_MAX_STEPS, Integrator
from .callbacks import StepState
from .trajectory import PartitionedState, PartitionedTrajectory

if TYPE_CHECKING:
    from collections.abc import Callable

    from .callbacks import StepCallback
    from .problems import SecondOrderODEProblem

LOGGER = logging.getLogger(__name__)


class SymplecticIntegrator(Integrator):
    """
    Composition of velocity Verlet sub-steps.

    One step of size dt applies a velocity Verlet (kick-drift-kick) sub-step
    of size ``w * dt`` for each weight w in ``weights``:

        v(t + h/2) = v(t) + 0.5 * h * a(t)
        r(t + h)   = r(t) + h * v(t + h/2)
        v(t + h)   = v(t + h/2) + 0.5 * h * a(t + h)

    Positions are not wrapped into a periodic box, so the recorded
    trajectory stays continuous.

    Attributes:
        dt: Integration timestep.
    """

    weights: tuple[float, ...] = (1.0,)

    def __init__(self, dt: float) -> None:
        """
        Initialize symplectic integrator.

        Args:
            dt: Integration timestep.
        """
        if not dt > 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self._dt = float(dt)

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self._dt

    def _advance(
        self,
        velocities: NDArray[np.floating],
        positions: NDArray[np.floating],
        accel: NDArray[np.floating],
        h: float,
        acceleration: Callable[[NDArray[np.floating]], NDArray[np.floating]],
    ) -> NDArray[np.floating]:
        """Advance velocities and positions in place; return the new acceleration."""
        for weight in self.weights:
            sub = weight * h
            velocities += 0.5 * sub * accel
            positions += sub * velocities
            accel = acceleration(positions)
            velocities += 0.5 * sub * accel
        return accel

    def solve(
        self,
        problem: SecondOrderODEProblem,
        callback: StepCallback | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> PartitionedTrajectory:
        t0, t1 = problem.t_span
        n_steps = max(1, int(np.ceil((t1 - t0) / self._dt - 1e-9)))
        if n_steps > max_steps:
            raise IntegrationError(
                f"{type(self).__name__} needs {n_steps} steps, more than {max_steps}"
            )
        # Times from the step index avoid accumulated rounding
        grid = t0 + self._dt * np.arange(n_steps + 1)
        grid[-1] = t1

        velocities = problem.v0.copy()
        positions = problem.x0.copy()
        accel = problem.acceleration(positions)

        recorded_v = [velocities.copy()]
        recorded_x = [positions.copy()]
        recorded_a = [accel.copy()]

        for t_prev, t in zip(grid[:-1], grid[1:]):
            accel = self._advance(
                velocities, positions, accel, t - t_prev, problem.acceleration
            )
            if not np.all(np.isfinite(velocities)) or not np.all(
                np.isfinite(positions)
            ):
                raise IntegrationError(
                    f"{type(self).__name__} produced non-finite state at t={t}"
                )

            if callback is not None:
                state = PartitionedState(velocities, positions)
                step = StepState(float(t), float(t_prev), state)
                callback(step)
                if step.modified:
                    accel = problem.acceleration(positions)

            recorded_v.append(velocities.copy())
            recorded_x.append(positions.copy())
            recorded_a.append(accel.copy())

        LOGGER.debug("%s: %d steps of dt=%g", type(self).__name__, n_steps, self._dt)
        return PartitionedTrajectory(
            grid, np.array(recorded_v), np.array(recorded_x), np.array(recorded_a)
        )


class VelocityVerletIntegrator(SymplecticIntegrator):
    """
    Velocity Verlet integrator (kick-drift-kick formulation).

    Properties:
    - Symplectic: preserves phase space volume
    - Time-reversible
    - Second-order accurate in positions and velocities
    """

    weights = (1.0,)


_CBRT2 = 2.0 ** (1.0 / 3.0)


class Yoshida4Integrator(SymplecticIntegrator):
    """
    Fourth-order Yoshida integrator.

    Triple-jump composition of velocity Verlet sub-steps with weights
    w1, w0, w1 where w1 = 1 / (2 - 2^(1/3)) and w0 = -2^(1/3) / (2 - 2^(1/3)).
    """

    weights = (
        1.0 / (2.0 - _CBRT2),
        -_CBRT2 / (2.0 - _CBRT2),
        1.0 / (2.0 - _CBRT2),
    )
