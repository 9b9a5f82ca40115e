#!/usr/bin/env python
"""
Small Lennard-Jones cluster coupled to an Andersen thermostat.

This example demonstrates:
- Temperature control via stochastic velocity collisions
- Frame iteration over a periodic box
- Temperature statistics from the energy analyzer

Reduced units are used, so the thermostat's kb is set to 1.

Usage:
    python examples/run_nvt_simulation.py
"""

import numpy as np

from nbodysim import (
    AndersenThermostat,
    Body,
    CubicPeriodicBoundaryConditions,
    EnergyAnalyzer,
    LennardJonesParameters,
    SimulationDefinition,
    run_simulation,
)
from nbodysim.system import LENNARD_JONES


def main():
    print("=" * 60)
    print("Andersen-thermostatted LJ cluster")
    print("=" * 60)

    rng = np.random.default_rng(0)
    grid = 4.0 + 1.2 * np.arange(3)
    bodies = [
        Body([x, y, z], rng.normal(0, 0.3, 3), 1.0)
        for x in grid
        for y in grid
        for z in grid
    ]
    definition = SimulationDefinition(
        bodies,
        {LENNARD_JONES: LennardJonesParameters()},
        CubicPeriodicBoundaryConditions(10.0),
        thermostat=AndersenThermostat(0.5, collision_frequency=1.0, kb=1.0, seed=1),
    )

    result = run_simulation(definition, "velocity_verlet", (0.0, 5.0), dt=0.005)

    # Temperature in reduced units: the analyzer reports SI kelvin
    velocities = result.trajectory.velocities
    masses = definition.masses()
    reduced_t = np.mean(np.sum(velocities**2, axis=1) * masses, axis=1) / 3
    stats = EnergyAnalyzer().analyze(result)

    print(f"\n{result!r}")
    print(f"Mean reduced temperature: {reduced_t.mean():.3f} (target 0.5)")
    print(f"Mean total energy:        {stats['total_mean']:.4f}")

    frames = list(result.frames())
    inside = sum(
        bool(np.all((positions >= 0) & (positions < 10.0))) for positions, _ in frames
    )
    print(f"Frames inside the box:    {inside} of {len(frames)}")


if __name__ == "__main__":
    main()
