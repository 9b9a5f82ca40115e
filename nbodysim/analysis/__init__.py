"""Analysis of simulation results."""

from .energy import EnergyAnalyzer

__all__ = ["EnergyAnalyzer"]
