"""Andersen thermostat configuration and its step callback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .constants import K_BOLTZMANN
from .integrators.callbacks import StepCallback

if TYPE_CHECKING:
    from .integrators.callbacks import StepState
    from .system import SimulationDefinition


@dataclass(frozen=True)
class AndersenThermostat:
    """
    Andersen stochastic collision thermostat settings.

    Attributes:
        temperature: Bath temperature T.
        collision_frequency: Average collision rate nu (1/time).
        kb: Boltzmann constant in the simulation's units.
        seed: Random seed for reproducibility.
    """

    temperature: float
    collision_frequency: float
    kb: float = K_BOLTZMANN
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.temperature < 0:
            raise ValueError(
                f"temperature must be non-negative, got {self.temperature}"
            )
        if self.collision_frequency < 0:
            raise ValueError(
                "collision_frequency must be non-negative, "
                f"got {self.collision_frequency}"
            )


class AndersenThermostatCallback(StepCallback):
    """
    Randomly reassigns body velocities after every accepted step.

    Each body collides with probability nu * dt, dt being the length of the
    accepted step, and gets a new velocity ``v_dev * N(0, 1)^3`` with
    ``v_dev = sqrt(kb * T / m_1)``. The scale uses the mass of the first body
    for every body.

    Attributes:
        config: Thermostat settings.
        n_bodies: Number of bodies.
        v_dev: Velocity standard deviation per component.
    """

    def __init__(
        self, config: AndersenThermostat, definition: SimulationDefinition
    ) -> None:
        self.config = config
        self.n_bodies = definition.n_bodies
        # TODO: confirm whether each body should use its own mass here
        first_mass = definition.bodies[0].mass
        self.v_dev = float(np.sqrt(config.kb * config.temperature / first_mass))
        self._rng = np.random.default_rng(config.seed)

    def affect(self, step: StepState) -> None:
        """
        Apply Andersen collisions to the step's velocity block in place.

        Args:
            step: Step state holding a PartitionedState.
        """
        velocities = step.u.velocities
        collision_prob = self.config.collision_frequency * step.dt

        collided = False
        for i in range(self.n_bodies):
            if self._rng.random() < collision_prob:
                velocities[:, i] = self.v_dev * self._rng.standard_normal(3)
                collided = True

        if collided:
            step.mark_modified()
