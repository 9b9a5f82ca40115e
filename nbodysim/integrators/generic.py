"""Adaptive integrators backed by scipy's explicit Runge-Kutta solvers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import DOP853, RK23, RK45, OdeSolver

from ..errors import IntegrationError
from .base import DEFAULT_MAX_STEPS, Integrator
from .callbacks import StepState
from .trajectory import FlatTrajectory

if TYPE_CHECKING:
    from .callbacks import StepCallback
    from .problems import ODEProblem

LOGGER = logging.getLogger(__name__)

SCIPY_SOLVERS: dict[str, type[OdeSolver]] = {
    "RK23": RK23,
    "RK45": RK45,
    "DOP853": DOP853,
}


class ScipyIntegrator(Integrator):
    """
    Adaptive explicit Runge-Kutta integration on a flat state.

    Wraps a scipy ``OdeSolver`` and drives it one accepted step at a time.
    When a callback modifies the state the solver is restarted from the
    modified state, keeping the last step size as its first guess.

    Attributes:
        method: Name of the scipy solver ("RK23", "RK45", "DOP853").
        rtol: Relative tolerance.
        atol: Absolute tolerance.
        max_step: Maximum allowed step size.
        first_step: Initial step size (None lets scipy choose).
    """

    def __init__(
        self,
        method: str = "RK45",
        rtol: float = 1e-8,
        atol: float = 1e-10,
        max_step: float = np.inf,
        first_step: float | None = None,
    ) -> None:
        if method not in SCIPY_SOLVERS:
            raise ValueError(f"unknown scipy solver {method!r}")
        self.method = method
        self.rtol = rtol
        self.atol = atol
        self.max_step = max_step
        self.first_step = first_step

    def _start(
        self,
        fun,
        t0: float,
        y0: NDArray[np.floating],
        t_bound: float,
        first_step: float | None,
    ) -> OdeSolver:
        return SCIPY_SOLVERS[self.method](
            fun,
            t0,
            y0,
            t_bound,
            rtol=self.rtol,
            atol=self.atol,
            max_step=self.max_step,
            first_step=first_step,
        )

    def solve(
        self,
        problem: ODEProblem,
        callback: StepCallback | None = None,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> FlatTrajectory:
        shape = problem.u0.shape
        t0, t_bound = problem.t_span

        def fun(t: float, y: NDArray[np.floating]) -> NDArray[np.floating]:
            return problem.rhs(t, y.reshape(shape)).ravel()

        solver = self._start(fun, t0, problem.u0.ravel(), t_bound, self.first_step)

        times = [t0]
        states = [problem.u0.copy()]
        derivatives = [problem.rhs(t0, problem.u0)]
        n_restarts = 0

        while solver.status == "running":
            if len(times) > max_steps:
                raise IntegrationError(
                    f"{self.method} exceeded {max_steps} steps at t={solver.t}"
                )

            message = solver.step()
            if solver.status == "failed":
                raise IntegrationError(
                    f"{self.method} failed at t={solver.t}: {message}"
                )

            u = solver.y.reshape(shape).copy()
            if not np.all(np.isfinite(u)):
                raise IntegrationError(
                    f"{self.method} produced non-finite state at t={solver.t}"
                )

            if callback is not None:
                step = StepState(solver.t, solver.t_old, u)
                callback(step)
                if step.modified and solver.status == "running":
                    # Resume with the step size the solver proposed next
                    proposed = getattr(solver, "h_abs", solver.step_size)
                    first_step = min(proposed, t_bound - solver.t)
                    solver = self._start(fun, solver.t, u.ravel(), t_bound, first_step)
                    n_restarts += 1

            times.append(solver.t)
            states.append(u)
            derivatives.append(problem.rhs(solver.t, u))

        LOGGER.debug(
            "%s: %d accepted steps, %d restarts",
            self.method,
            len(times) - 1,
            n_restarts,
        )
        return FlatTrajectory(np.array(times), np.array(states), np.array(derivatives))
