"""JAX configuration for the batched kernels: 64-bit precision everywhere."""

import jax
import jax.numpy as jnp

# Match the float64 per-point closures.
jax.config.update("jax_enable_x64", True)

__all__ = ['jax', 'jnp']
