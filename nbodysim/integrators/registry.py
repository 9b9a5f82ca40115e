"""Integrator construction from an integrator kind."""

from __future__ import annotations

from typing import Any

from .base import Integrator, IntegratorKind
from .generic import ScipyIntegrator
from .symplectic import VelocityVerletIntegrator, Yoshida4Integrator


def create_integrator(kind: IntegratorKind | str, **options: Any) -> Integrator:
    """
    Instantiate the integrator for ``kind``.

    Args:
        kind: Integrator kind (enum member or its value).
        **options: Constructor options. Symplectic kinds take ``dt``;
            generic kinds take ``rtol``, ``atol``, ``max_step``, ``first_step``.

    Raises:
        UnsupportedIntegratorError: If ``kind`` is not recognized.
    """
    kind = IntegratorKind.parse(kind)
    if kind is IntegratorKind.VELOCITY_VERLET:
        return VelocityVerletIntegrator(**options)
    if kind is IntegratorKind.YOSHIDA4:
        return Yoshida4Integrator(**options)
    return ScipyIntegrator(method=kind.value, **options)
