"""Simulation runner: integrator dispatch and callback assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from .integrators import (
    DEFAULT_MAX_STEPS,
    CallbackSet,
    IntegratorFamily,
    IntegratorKind,
    ManifoldProjection,
    StepCallback,
    create_integrator,
    ode_problem,
    second_order_problem,
)
from .observables.energy import initial_energy, kinetic_energy, potential_energy
from .results import TrajectoryResult
from .thermostats import AndersenThermostat, AndersenThermostatCallback

if TYPE_CHECKING:
    from .system import SimulationDefinition

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunStrategy:
    """
    How a run is set up for an integrator family.

    Attributes:
        conservation_projection: Project onto the initial-energy manifold
            after every accepted step.
        auxiliary_callbacks: Attach callbacks for the definition's
            auxiliary processes (thermostats).
    """

    conservation_projection: bool
    auxiliary_callbacks: bool


RUN_STRATEGIES: dict[IntegratorFamily, RunStrategy] = {
    IntegratorFamily.GENERIC: RunStrategy(
        conservation_projection=True, auxiliary_callbacks=False
    ),
    # Symplectic schemes conserve energy by construction
    IntegratorFamily.SYMPLECTIC: RunStrategy(
        conservation_projection=False, auxiliary_callbacks=True
    ),
}


def energy_projection(
    definition: SimulationDefinition, rtol: float = 1e-10
) -> ManifoldProjection:
    """
    Projection of a flat state back onto the initial total energy.

    The residual E0 - kinetic_energy(v) - potential_energy(u) is driven to
    zero by adjusting the velocity block only.

    Args:
        definition: Simulation definition.
        rtol: Residual tolerance relative to |E0|.
    """
    n = definition.n_bodies
    masses = definition.masses()
    e0 = initial_energy(definition)

    def residual(u: NDArray[np.floating]) -> float:
        e_kin = kinetic_energy(u[:, :n], definition)
        e_pot = potential_energy(u[:, n:], definition)
        return e0 - e_kin - e_pot

    def gradient(u: NDArray[np.floating]) -> NDArray[np.floating]:
        grad = np.zeros_like(u)
        grad[:, :n] = -masses[np.newaxis, :] * u[:, :n]
        return grad

    mask = np.zeros((3, 2 * n), dtype=bool)
    mask[:, :n] = True

    abstol = rtol * abs(e0) if e0 != 0 else rtol
    return ManifoldProjection(residual, gradient=gradient, mask=mask, abstol=abstol)


def auxiliary_callbacks(definition: SimulationDefinition) -> CallbackSet:
    """Callbacks for the auxiliary processes configured on the definition."""
    callbacks: list[StepCallback] = []

    if isinstance(definition.thermostat, AndersenThermostat):
        callbacks.append(AndersenThermostatCallback(definition.thermostat, definition))

    return CallbackSet(*callbacks)


class SimulationRunner:
    """
    Runs a simulation definition with a chosen integrator.

    Generic integrators advance a flat (velocities | positions) state and
    are corrected back onto the initial energy after every accepted step.
    Symplectic integrators advance a partitioned state and get the
    definition's auxiliary callbacks instead.

    Example:
        runner = SimulationRunner(definition)
        result = runner.run("velocity_verlet", (0.0, 10.0), dt=0.01)
    """

    def __init__(self, definition: SimulationDefinition) -> None:
        self._definition = definition

    @property
    def definition(self) -> SimulationDefinition:
        return self._definition

    def build_callbacks(
        self, kind: IntegratorKind, projection_rtol: float = 1e-10
    ) -> CallbackSet:
        """Assemble the step callbacks ``kind``'s family calls for."""
        strategy = RUN_STRATEGIES[kind.family]
        callbacks: list[StepCallback] = []

        if strategy.conservation_projection:
            callbacks.append(energy_projection(self._definition, projection_rtol))
        if strategy.auxiliary_callbacks:
            callbacks.extend(auxiliary_callbacks(self._definition).callbacks)
        elif self._definition.thermostat is not None:
            LOGGER.warning(
                "%s integrators ignore the configured thermostat", kind.family.value
            )

        return CallbackSet(*callbacks)

    def run(
        self,
        integrator_kind: IntegratorKind | str = IntegratorKind.RK45,
        t_span: tuple[float, float] = (0.0, 1.0),
        max_steps: int = DEFAULT_MAX_STEPS,
        projection_rtol: float = 1e-10,
        **options: Any,
    ) -> TrajectoryResult:
        """
        Integrate the definition over ``t_span``.

        Args:
            integrator_kind: Integrator kind (enum member or its value).
            t_span: Integration interval (t0, t1).
            max_steps: Maximum number of accepted steps.
            projection_rtol: Energy projection tolerance relative to |E0|.
            **options: Integrator options (``dt`` for symplectic kinds;
                ``rtol``, ``atol``, ``max_step``, ``first_step`` for generic).

        Returns:
            TrajectoryResult wrapping the recorded trajectory.

        Raises:
            UnsupportedIntegratorError: If ``integrator_kind`` is unknown.
            IntegrationError: If the integrator fails.
        """
        kind = IntegratorKind.parse(integrator_kind)
        integrator = create_integrator(kind, **options)
        callbacks = self.build_callbacks(kind, projection_rtol)

        if kind.family is IntegratorFamily.SYMPLECTIC:
            problem = second_order_problem(self._definition, t_span)
        else:
            problem = ode_problem(self._definition, t_span)

        LOGGER.info(
            "Running %d bodies with %s (%s family, %d callbacks) over %s",
            self._definition.n_bodies,
            kind.value,
            kind.family.value,
            len(callbacks),
            problem.t_span,
        )
        trajectory = integrator.solve(
            problem, callback=callbacks or None, max_steps=max_steps
        )

        result = TrajectoryResult(trajectory, self._definition)
        LOGGER.info("Simulation complete: %r", result)
        return result


def run_simulation(
    definition: SimulationDefinition,
    integrator_kind: IntegratorKind | str = IntegratorKind.RK45,
    t_span: tuple[float, float] = (0.0, 1.0),
    **options: Any,
) -> TrajectoryResult:
    """Run ``definition`` with ``integrator_kind``; see SimulationRunner.run."""
    return SimulationRunner(definition).run(integrator_kind, t_span, **options)
