"""
Calorically Perfect Gas Equation of State.

All relations are written per unit mass except where noted:

    p   = (γ - 1) ρ (E - |v|²/2 - k)
    c²  = γ p / ρ
    T   = p / (ρ R)
    H   = E + p / ρ

where E is the specific total energy and k the turbulent kinetic energy
(zero for laminar flow).

Dimension Agnostic:
    All functions work with any array shape - scalars, 1D arrays, 2D fields -
    and with NumPy, PyTorch or JAX inputs transparently.
"""

from .backend import get_backend, floor


def pressure(gamma, density, energy, velocity2, turb_ke=0.0):
    """Static pressure from specific total energy."""
    return (gamma - 1.0) * density * (energy - 0.5 * velocity2 - turb_ke)


def sound_speed_squared(gamma, pressure_val, density):
    """Radicand γp/ρ of the speed of sound; non-positive means non-realizable."""
    return gamma * pressure_val / density


def sound_speed(gamma, pressure_val, density):
    """
    Speed of sound sqrt(γp/ρ).
    
    A negative radicand is clipped to zero so the result stays real; callers
    check ``sound_speed_squared`` for realizability.
    """
    radicand = sound_speed_squared(gamma, pressure_val, density)
    backend = get_backend(radicand)
    return backend.sqrt(floor(radicand, 0.0))


def temperature(gas_constant, pressure_val, density):
    """Ideal-gas temperature p / (ρR)."""
    return pressure_val / (density * gas_constant)


def total_enthalpy(density, energy, pressure_val):
    """Specific total enthalpy H = (ρE + p) / ρ."""
    return (density * energy + pressure_val) / density


def total_energy(gamma, density, pressure_val, velocity2, turb_ke=0.0):
    """Specific total energy from primitive quantities (inverse of ``pressure``)."""
    return pressure_val / ((gamma - 1.0) * density) + 0.5 * velocity2 + turb_ke
