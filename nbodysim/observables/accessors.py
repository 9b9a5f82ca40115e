"""Position, velocity and mass extraction from trajectory results."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..errors import DimensionMismatchError
from ..integrators.trajectory import TrajectoryLayout

if TYPE_CHECKING:
    from ..results import TrajectoryResult
    from ..system import SimulationDefinition

# Sentinel index selecting every body
ALL = None

Block = NDArray[np.floating]


def _partitioned_blocks(state) -> tuple[Block, Block]:
    return state.velocities, state.positions


def _flat_blocks(state) -> tuple[Block, Block]:
    n = state.shape[1] // 2
    return state[:, :n], state[:, n:]


# Layout -> function splitting an interpolated state into (velocities, positions)
_LAYOUT_BLOCKS: dict[TrajectoryLayout, Callable[..., tuple[Block, Block]]] = {
    TrajectoryLayout.PARTITIONED: _partitioned_blocks,
    TrajectoryLayout.FLAT: _flat_blocks,
}


def phase_state(result: TrajectoryResult, time: float) -> tuple[Block, Block]:
    """
    Velocity and position blocks at ``time``, each of shape (3, n).

    Raises:
        OutOfDomainError: If ``time`` is outside the recorded interval.
        DimensionMismatchError: If the trajectory's body count differs from
            the definition's.
    """
    split = _LAYOUT_BLOCKS[result.trajectory.layout]
    velocities, positions = split(result(time))

    n = result.definition.n_bodies
    if velocities.shape != (3, n) or positions.shape != (3, n):
        raise DimensionMismatchError(
            f"trajectory holds velocity block {velocities.shape} and position "
            f"block {positions.shape}, definition has {n} bodies"
        )
    return velocities, positions


def _select(block: Block, index: int | None) -> Block:
    if index is ALL:
        return block
    n = block.shape[1]
    if not 0 <= index < n:
        raise IndexError(f"body index {index} out of range for {n} bodies")
    return block[:, index]


def get_position(
    result: TrajectoryResult, time: float, index: int | None = ALL
) -> NDArray[np.floating]:
    """
    Body positions at ``time``.

    Args:
        result: Simulation result.
        time: Query time inside the recorded interval (need not be a
            recorded step).
        index: Zero-based body index, or ALL for every body.

    Returns:
        Shape (3, n) for ALL, shape (3,) for a single body.
    """
    _, positions = phase_state(result, time)
    return _select(positions, index)


def get_velocity(
    result: TrajectoryResult, time: float, index: int | None = ALL
) -> NDArray[np.floating]:
    """
    Body velocities at ``time``.

    Args:
        result: Simulation result.
        time: Query time inside the recorded interval.
        index: Zero-based body index, or ALL for every body.

    Returns:
        Shape (3, n) for ALL, shape (3,) for a single body.
    """
    velocities, _ = phase_state(result, time)
    return _select(velocities, index)


def get_masses(definition: SimulationDefinition) -> NDArray[np.floating]:
    """Masses in body order, shape (n,)."""
    return definition.masses()
