"""
Global constants for the flow variable containers.

This module defines index layouts and numerical guards used throughout the
codebase to ensure consistency in array shapes and indexing.
"""

# Regularization added to denominators in the SST blending arguments
EPS = 1.0e-16

# Conserved vector components (compressible flow)
RHO_IDX = 0   # Density; momentum follows at 1..n_dim, energy at n_dim+1

# Primitive vector components
T_IDX = 0     # Temperature
VEL_IDX = 1   # First velocity component

# Turbulence scalars
NU_TILDE_IDX = 0  # SA working variable
TKE_IDX = 0       # Turbulent kinetic energy (SST)
OMEGA_IDX = 1     # Specific dissipation rate (SST)


def n_var_flow(n_dim: int) -> int:
    """Number of conserved variables: density, momentum, energy."""
    return n_dim + 2


def n_prim_var_euler(n_dim: int) -> int:
    """Primitive variables (T, v, P, rho, h, c) for inviscid flow."""
    return n_dim + 5


def n_prim_var_ns(n_dim: int) -> int:
    """Primitive variables for viscous flow, with laminar and eddy viscosity."""
    return n_dim + 7


def n_prim_var_grad(n_dim: int) -> int:
    """Primitive variables carrying gradients and limiters (T, v, P, rho)."""
    return n_dim + 3


def energy_index(n_dim: int) -> int:
    return n_dim + 1


def p_index(n_dim: int) -> int:
    return n_dim + 1


def rho_index(n_dim: int) -> int:
    return n_dim + 2


def h_index(n_dim: int) -> int:
    return n_dim + 3


def a_index(n_dim: int) -> int:
    return n_dim + 4


def lam_visc_index(n_dim: int) -> int:
    return n_dim + 5


def eddy_visc_index(n_dim: int) -> int:
    return n_dim + 6
