"""Step callbacks run by integrators after every accepted step."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..errors import IntegrationError


class StepState:
    """
    The integrator's working state, handed explicitly to callbacks.

    ``u`` is the live state of the stepper: a (3, 2n) array for flat
    systems, a PartitionedState for second-order systems. Callbacks may
    modify it in place and must then call ``mark_modified()``.

    Attributes:
        t: Time at the end of the accepted step.
        t_prev: Time at the start of the accepted step.
        u: Working state.
    """

    def __init__(self, t: float, t_prev: float, u: Any) -> None:
        self.t = t
        self.t_prev = t_prev
        self.u = u
        self._modified = False

    @property
    def dt(self) -> float:
        """Elapsed time of the accepted step."""
        return self.t - self.t_prev

    @property
    def modified(self) -> bool:
        return self._modified

    def mark_modified(self) -> None:
        """Signal that ``u`` was changed and the stepper must resync."""
        self._modified = True


class StepCallback(ABC):
    """
    Abstract base class for per-step callbacks.

    ``affect`` runs after an accepted step whenever ``condition`` holds.
    """

    def condition(self, step: StepState) -> bool:
        """Decide whether to fire at this step (default: always)."""
        return True

    @abstractmethod
    def affect(self, step: StepState) -> None:
        """Apply the callback's effect to the step state."""
        ...

    def __call__(self, step: StepState) -> None:
        if self.condition(step):
            self.affect(step)


class DiscreteCallback(StepCallback):
    """Callback assembled from a condition function and an affect function."""

    def __init__(
        self,
        condition: Callable[[StepState], bool],
        affect: Callable[[StepState], None],
    ) -> None:
        self._condition = condition
        self._affect = affect

    def condition(self, step: StepState) -> bool:
        return bool(self._condition(step))

    def affect(self, step: StepState) -> None:
        self._affect(step)


class CallbackSet(StepCallback):
    """Ordered collection of callbacks, itself usable as a callback."""

    def __init__(self, *callbacks: StepCallback) -> None:
        self.callbacks: tuple[StepCallback, ...] = callbacks

    def __len__(self) -> int:
        return len(self.callbacks)

    def __bool__(self) -> bool:
        return bool(self.callbacks)

    def affect(self, step: StepState) -> None:
        for callback in self.callbacks:
            callback(step)


class ManifoldProjection(StepCallback):
    """
    Project a flat state onto the zero set of a scalar residual.

    Each Newton iteration takes the minimum-norm correction
    ``du = -g * grad / |grad|^2`` over the projected components, where g is
    the residual and grad its gradient. Components outside ``mask`` are
    left untouched.

    Attributes:
        residual: Function of the flat state returning a scalar.
        gradient: Optional analytic gradient of the residual, same shape as
            the state. Finite differences over the masked components are
            used when omitted.
        mask: Boolean array selecting the projected components.
        abstol: Residual magnitude considered converged.
        max_iterations: Newton iterations before giving up.
    """

    def __init__(
        self,
        residual: Callable[[NDArray[np.floating]], float],
        gradient: Callable[[NDArray[np.floating]], NDArray[np.floating]] | None = None,
        mask: NDArray[np.bool_] | None = None,
        abstol: float = 1e-10,
        max_iterations: int = 20,
    ) -> None:
        self.residual = residual
        self.gradient = gradient
        self.mask = None if mask is None else np.asarray(mask, dtype=bool)
        self.abstol = abstol
        self.max_iterations = max_iterations

    def _finite_difference(
        self, u: NDArray[np.floating], mask: NDArray[np.bool_]
    ) -> NDArray[np.floating]:
        grad = np.zeros_like(u)
        base = self.residual(u)
        probe = u.copy()
        for index in zip(*np.nonzero(mask)):
            h = np.sqrt(np.finfo(np.float64).eps) * max(abs(u[index]), 1.0)
            probe[index] = u[index] + h
            grad[index] = (self.residual(probe) - base) / h
            probe[index] = u[index]
        return grad

    def affect(self, step: StepState) -> None:
        u = step.u
        mask = np.ones(u.shape, dtype=bool) if self.mask is None else self.mask

        for _ in range(self.max_iterations):
            g = self.residual(u)
            if not np.isfinite(g):
                raise IntegrationError(f"non-finite projection residual at t={step.t}")
            if abs(g) <= self.abstol:
                return

            if self.gradient is not None:
                grad = np.where(mask, self.gradient(u), 0.0)
            else:
                grad = self._finite_difference(u, mask)
            norm2 = float(np.sum(grad**2))
            if norm2 == 0.0:
                raise IntegrationError(
                    f"projection residual {g:.3e} has zero gradient at t={step.t}"
                )

            correction = g * grad / norm2
            u -= correction
            step.mark_modified()

            # Correction below round-off: the residual cannot shrink further
            if np.linalg.norm(correction) <= 1e-14 * max(np.linalg.norm(u[mask]), 1.0):
                return

        g = self.residual(u)
        if abs(g) > self.abstol:
            raise IntegrationError(
                f"manifold projection did not converge at t={step.t} "
                f"(residual {g:.3e}, tolerance {self.abstol:.3e})"
            )
