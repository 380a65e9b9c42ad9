"""
Numerical kernels for whole fields of flow variables.

This module provides:
- Numba vorticity / strain-rate kernels from velocity gradients
- JAX conservative <-> primitive conversion with realizability masks
- JAX clipped and conservative solution updates
"""

from .gradients import (
    vorticity_vector,
    strain_rate_magnitude,
    compute_vorticity,
    compute_strain_rate,
)

from .conversions import (
    cons_to_prim_jax,
    prim_to_cons_jax,
)

from .updates import (
    apply_clipped_update,
    apply_conservative_update,
)

__all__ = [
    # Gradients
    'vorticity_vector',
    'strain_rate_magnitude',
    'compute_vorticity',
    'compute_strain_rate',
    # Conversions
    'cons_to_prim_jax',
    'prim_to_cons_jax',
    # Updates
    'apply_clipped_update',
    'apply_conservative_update',
]
