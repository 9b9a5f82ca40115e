#!/usr/bin/env python
"""
Quick start example - define bodies, run, and query observables.

Runs the same Lennard-Jones pair with a generic (energy-projected) and a
symplectic integrator and compares their energies.

Usage:
    python examples/quickstart.py
"""

import logging

import numpy as np

from nbodysim import (
    Body,
    EnergyAnalyzer,
    LennardJonesParameters,
    SimulationDefinition,
    run_simulation,
)
from nbodysim.observables import distances, get_position, initial_energy, total_energy
from nbodysim.system import LENNARD_JONES


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 60)
    print("nbodysim Quick Start")
    print("=" * 60)

    bodies = [
        Body([0.0, 0.0, 0.0], [0.1, 0.5, 0.0], 1.0),
        Body([1.5, 0.0, 0.0], [-0.1, 0.5, 0.0], 1.0),
    ]
    definition = SimulationDefinition(bodies, {LENNARD_JONES: LennardJonesParameters()})
    e0 = initial_energy(definition)
    print(f"\nInitial energy: {e0:.8f}")

    # 1. Generic adaptive integrator, projected onto the initial energy
    print("\n1. RK45 with energy projection:")
    print("-" * 40)
    result = run_simulation(definition, "RK45", (0.0, 5.0))
    print(f"   {result!r}")
    print(f"   Energy at t=2.5:  {total_energy(result, 2.5):.8f}")
    print(f"   Separation at t=5: {distances(result, 5.0)[0]:.4f}")

    # 2. Symplectic integrator on a fixed grid
    print("\n2. Velocity Verlet (dt=0.005):")
    print("-" * 40)
    result = run_simulation(definition, "velocity_verlet", (0.0, 5.0), dt=0.005)
    stats = EnergyAnalyzer().analyze(result)
    print(f"   {result!r}")
    print(f"   Energy std:       {stats['total_std']:.2e}")
    print(f"   Relative drift:   {stats['relative_drift']:.2e}")
    print(f"   Body 1 at t=5:    {np.round(get_position(result, 5.0, 1), 4)}")

    print("\n" + "=" * 60)
    print("Done.")
    print("=" * 60)


if __name__ == "__main__":
    main()
