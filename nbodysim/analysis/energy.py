"""Energy analysis over a recorded trajectory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from ..observables.energy import kinetic_energy_at, potential_energy_at, temperature

if TYPE_CHECKING:
    from ..results import TrajectoryResult


class EnergyAnalyzer:
    """
    Energy and temperature analyzer.

    Evaluates at every recorded step:
    - Kinetic energy
    - Potential energy (Lennard-Jones term)
    - Total energy
    - Temperature
    and summarizes energy conservation (drift).

    Example:
        stats = EnergyAnalyzer().analyze(result)
        print(stats["relative_drift"])
    """

    @property
    def name(self) -> str:
        """Analyzer name."""
        return "energy"

    def analyze(self, result: TrajectoryResult) -> dict[str, Any]:
        """
        Compute energy time series and statistics.

        Args:
            result: Simulation result.

        Returns:
            Dictionary with energy arrays and statistics.
        """
        times = np.array(result.t, dtype=np.float64)
        kinetic = np.array([kinetic_energy_at(result, t) for t in times])
        potential = np.array([potential_energy_at(result, t) for t in times])
        total = kinetic + potential
        temp = np.array([temperature(result, t) for t in times])

        results: dict[str, Any] = {
            "time": times,
            "kinetic": kinetic,
            "potential": potential,
            "total": total,
            "temperature": temp,
            "n_frames": len(times),
            "kinetic_mean": float(np.mean(kinetic)),
            "kinetic_std": float(np.std(kinetic)),
            "potential_mean": float(np.mean(potential)),
            "potential_std": float(np.std(potential)),
            "total_mean": float(np.mean(total)),
            "total_std": float(np.std(total)),
            "temperature_mean": float(np.mean(temp)),
            "temperature_std": float(np.std(temp)),
        }

        # Energy drift (conservation check)
        if len(times) > 1:
            slope, _ = np.polyfit(times, total, 1)
            results["energy_drift_per_time"] = float(slope)

            e_mean = np.mean(np.abs(total))
            if e_mean > 0:
                results["relative_drift"] = float(
                    np.abs(slope) * (times[-1] - times[0]) / e_mean
                )

        return results
