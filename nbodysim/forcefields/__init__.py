"""Force field components."""

from .base import ForceProvider
from .composite import ForceField
from .gravitational import GravitationalForce
from .lennard_jones import LennardJonesForce

__all__ = ["ForceProvider", "ForceField", "LennardJonesForce", "GravitationalForce"]
