"""Potential parameter types."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import G_NEWTON

LENNARD_JONES = "lennard_jones"
GRAVITATIONAL = "gravitational"


@dataclass(frozen=True)
class LennardJonesParameters:
    """
    Parameters of the Lennard-Jones 12-6 potential.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]

    Attributes:
        epsilon: Well depth.
        sigma: Characteristic length.
        cutoff: Interaction cutoff radius. Defaults to 2.5 * sigma.
    """

    epsilon: float = 1.0
    sigma: float = 1.0
    cutoff: float | None = None
    sigma2: float = field(init=False)
    cutoff2: float = field(init=False)

    def __post_init__(self) -> None:
        if self.sigma <= 0:
            raise ValueError(f"sigma must be positive, got {self.sigma}")
        cutoff = 2.5 * self.sigma if self.cutoff is None else self.cutoff
        if cutoff <= 0:
            raise ValueError(f"cutoff must be positive, got {cutoff}")
        object.__setattr__(self, "cutoff", float(cutoff))
        object.__setattr__(self, "sigma2", float(self.sigma) ** 2)
        object.__setattr__(self, "cutoff2", float(cutoff) ** 2)


@dataclass(frozen=True)
class GravitationalParameters:
    """
    Parameters of Newtonian gravity.

    Attributes:
        G: Gravitational constant.
    """

    G: float = G_NEWTON
