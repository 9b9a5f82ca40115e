"""Physical constants (SI units)."""

# Boltzmann constant (J/K)
K_BOLTZMANN = 1.380649e-23

# Newtonian constant of gravitation (m^3 kg^-1 s^-2)
G_NEWTON = 6.67430e-11
