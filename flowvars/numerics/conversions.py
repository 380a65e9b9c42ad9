"""
Batched conservative <-> primitive conversion for compressible flow.

Field versions of the per-point Euler closure conversion, JIT-compiled with
JAX. Arrays carry the variable index on the last axis:

    U = [ρ, ρu, ρv, (ρw), ρE]                 shape (..., n_dim + 2)
    V = [T, u, v, (w), p, ρ, H, c]            shape (..., n_dim + 5)

Realizability is reported per point instead of raising: a point is
realizable when ρ, p, c² and T are all strictly positive.
"""

from functools import partial

from flowvars.physics.jax_config import jax, jnp
from flowvars.physics import gas


@jax.jit
def cons_to_prim_jax(U, gamma, gas_constant, turb_ke=0.0):
    """
    Convert conserved to primitive variables.
    
    Parameters
    ----------
    U : jnp.ndarray (..., n_dim + 2)
        Conserved variables.
    gamma : float
        Ratio of specific heats.
    gas_constant : float
        Specific gas constant.
    turb_ke : float or jnp.ndarray (...)
        Turbulent kinetic energy removed from the internal energy
        (two-equation closures; 0 otherwise).
    
    Returns
    -------
    V : jnp.ndarray (..., n_dim + 5)
        Primitive variables (non-physical values are kept where unrealizable).
    realizable : jnp.ndarray (...) of bool
        Realizability mask.
    """
    n_dim = U.shape[-1] - 2
    rho = U[..., 0]
    vel = U[..., 1:n_dim + 1] / rho[..., None]
    velocity2 = jnp.sum(vel ** 2, axis=-1)
    energy = U[..., n_dim + 1] / rho

    p = gas.pressure(gamma, rho, energy, velocity2, turb_ke)
    c2 = gas.sound_speed_squared(gamma, p, rho)
    c = gas.sound_speed(gamma, p, rho)
    T = gas.temperature(gas_constant, p, rho)
    h = gas.total_enthalpy(rho, energy, p)

    V = jnp.concatenate(
        [T[..., None], vel, p[..., None], rho[..., None], h[..., None], c[..., None]],
        axis=-1,
    )
    realizable = (rho > 0.0) & (p > 0.0) & (c2 > 0.0) & (T > 0.0)
    return V, realizable


@partial(jax.jit, static_argnames=("n_dim",))
def prim_to_cons_jax(V, gamma, n_dim):
    """
    Convert primitive to conserved variables.
    
    Only T, velocity, p and ρ are read, so viscous primitive vectors
    (with trailing viscosity slots) are accepted as well.
    
    Parameters
    ----------
    V : jnp.ndarray (..., n_prim)
        Primitive variables.
    gamma : float
        Ratio of specific heats.
    n_dim : int
        Number of spatial dimensions (static).
    
    Returns
    -------
    U : jnp.ndarray (..., n_dim + 2)
    """
    vel = V[..., 1:n_dim + 1]
    p = V[..., n_dim + 1]
    rho = V[..., n_dim + 2]
    velocity2 = jnp.sum(vel ** 2, axis=-1)
    rho_e = rho * gas.total_energy(gamma, rho, p, velocity2)
    return jnp.concatenate([rho[..., None], rho[..., None] * vel, rho_e[..., None]], axis=-1)
