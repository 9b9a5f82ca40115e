"""Per-step position snapshots for animation."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .accessors import get_position

if TYPE_CHECKING:
    from ..results import TrajectoryResult


class FrameIterator:
    """
    Lazy sequence of (positions, time) pairs over the recorded time grid.

    One frame per recorded step, positions of shape (3, n). Under periodic
    boundaries every snapshot is folded into the primary cell with
    x - L * floor(x / L). Each ``iter()`` starts over from the first step
    and yields the same sequence.

    Example:
        for positions, t in FrameIterator(result):
            draw(positions, t)
    """

    def __init__(self, result: TrajectoryResult) -> None:
        self._result = result

    def __len__(self) -> int:
        return self._result.n_steps

    def __iter__(self) -> Iterator[tuple[NDArray[np.floating], float]]:
        boundary = self._result.definition.boundary_conditions
        for time in self._result.t:
            positions = get_position(self._result, time)
            if boundary.is_periodic:
                positions = boundary.wrap_positions(positions)
            yield positions, float(time)
