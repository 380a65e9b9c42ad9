"""
Array backend dispatch for the closure formulas.

The physics functions are written once and evaluated on whatever the caller
hands in: Python/NumPy scalars and arrays (per-point closures), PyTorch
tensors (differentiable sensitivities) or JAX arrays (jitted field kernels).
"""

import numpy as np
import torch

from .jax_config import jax, jnp


def get_backend(x):
    """Get the appropriate math backend (numpy, torch or jax.numpy) for input x."""
    if isinstance(x, torch.Tensor):
        return torch
    if isinstance(x, jax.Array):
        return jnp
    return np


def floor(x, value: float):
    """Elementwise max(x, value) for a scalar bound, on any backend."""
    if isinstance(x, torch.Tensor):
        return torch.clamp(x, min=value)
    return get_backend(x).maximum(x, value)
