"""Equations of motion handed to integrators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..forcefields import ForceField

if TYPE_CHECKING:
    from ..system import SimulationDefinition


def _validate_span(t_span: tuple[float, float]) -> tuple[float, float]:
    t0, t1 = (float(t) for t in t_span)
    if not (np.isfinite(t0) and np.isfinite(t1)) or t1 <= t0:
        raise ValueError(f"t_span must be a finite increasing interval, got {t_span}")
    return t0, t1


@dataclass(frozen=True, eq=False)
class ODEProblem:
    """
    First-order system du/dt = rhs(t, u) on a flat (3, 2n) state.

    Attributes:
        rhs: Right-hand side, returns an array shaped like ``u``.
        u0: Initial state, velocities in the first n columns.
        t_span: Integration interval (t0, t1).
    """

    rhs: Callable[[float, NDArray[np.floating]], NDArray[np.floating]]
    u0: NDArray[np.floating]
    t_span: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "u0", np.array(self.u0, dtype=np.float64))
        object.__setattr__(self, "t_span", _validate_span(self.t_span))


@dataclass(frozen=True, eq=False)
class SecondOrderODEProblem:
    """
    Second-order system d2x/dt2 = acceleration(x).

    Attributes:
        acceleration: Acceleration as a function of positions, shape (3, n).
        v0: Initial velocities, shape (3, n).
        x0: Initial positions, shape (3, n).
        t_span: Integration interval (t0, t1).
    """

    acceleration: Callable[[NDArray[np.floating]], NDArray[np.floating]]
    v0: NDArray[np.floating]
    x0: NDArray[np.floating]
    t_span: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "v0", np.array(self.v0, dtype=np.float64))
        object.__setattr__(self, "x0", np.array(self.x0, dtype=np.float64))
        object.__setattr__(self, "t_span", _validate_span(self.t_span))
        if self.v0.shape != self.x0.shape:
            raise ValueError(
                f"velocity block {self.v0.shape} does not match position block "
                f"{self.x0.shape}"
            )


def ode_problem(
    definition: SimulationDefinition, t_span: tuple[float, float]
) -> ODEProblem:
    """Flat first-order problem for the definition's bodies and potentials."""
    n = definition.n_bodies
    force_field = ForceField.from_definition(definition)

    def rhs(t: float, u: NDArray[np.floating]) -> NDArray[np.floating]:
        velocities = u[:, :n]
        positions = u[:, n:]
        accelerations = force_field.accelerations(positions, definition)
        return np.hstack([accelerations, velocities])

    u0 = np.hstack([definition.initial_velocities(), definition.initial_positions()])
    return ODEProblem(rhs, u0, t_span)


def second_order_problem(
    definition: SimulationDefinition, t_span: tuple[float, float]
) -> SecondOrderODEProblem:
    """Second-order problem for the definition's bodies and potentials."""
    force_field = ForceField.from_definition(definition)

    def acceleration(positions: NDArray[np.floating]) -> NDArray[np.floating]:
        return force_field.accelerations(positions, definition)

    return SecondOrderODEProblem(
        acceleration,
        definition.initial_velocities(),
        definition.initial_positions(),
        t_span,
    )
