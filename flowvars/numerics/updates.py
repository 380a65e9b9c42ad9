"""
Bounded solution updates for whole fields.

Field counterparts of the per-point clipped and conservative updates. Both
start from the *old* snapshot so repeated application within one stage does
not drift:

    clipped:      Q = clip(Q_old + ΔQ, lo, hi)
    conservative: Q = clip((Q_old ρ_old + ΔQ) / ρ, lo, hi)

The conservative form advances the density-weighted quantity ρQ and then
divides by the new carrier density.
"""

from flowvars.physics.jax_config import jax, jnp


@jax.jit
def apply_clipped_update(Q_old, dQ, lower, upper):
    """Apply a clipped increment to the old snapshot.
    
    Parameters
    ----------
    Q_old : jnp.ndarray
        Old values of one variable (any shape).
    dQ : jnp.ndarray
        Increment (same shape).
    lower, upper : float or jnp.ndarray
        Bounds (broadcastable).
        
    Returns
    -------
    jnp.ndarray
        Updated values, within [lower, upper].
    """
    return jnp.minimum(jnp.maximum(Q_old + dQ, lower), upper)


@jax.jit
def apply_conservative_update(Q_old, dQ, density, density_old, lower, upper):
    """Apply a density-weighted increment, rescaled by the new density.
    
    Parameters
    ----------
    Q_old : jnp.ndarray
        Old per-unit-mass values.
    dQ : jnp.ndarray
        Increment of the density-weighted quantity.
    density, density_old : jnp.ndarray
        New and old carrier densities.
    lower, upper : float or jnp.ndarray
        Bounds (broadcastable).
        
    Returns
    -------
    jnp.ndarray
        Updated per-unit-mass values, within [lower, upper].
    """
    Q_new = (Q_old * density_old + dQ) / density
    return jnp.minimum(jnp.maximum(Q_new, lower), upper)
