"""
Velocity-Gradient Derived Quantities.

This module computes vorticity and strain-rate magnitude from the velocity
gradient tensor, optimized with Numba JIT compilation.

Convention:
    grad_vel[i, j] = ∂u_i/∂x_j  (rows: velocity component, cols: direction)

Vorticity (curl of velocity):
    ω_x = ∂w/∂y - ∂v/∂z
    ω_y = ∂u/∂z - ∂w/∂x
    ω_z = ∂v/∂x - ∂u/∂y
In 2D only ω_z is populated; ω_x = ω_y = 0.

Strain-rate magnitude (deviatoric, as used by turbulence production):
    |S| = sqrt(2 S'_ij S'_ij),  S'_ij = ½(∂u_i/∂x_j + ∂u_j/∂x_i) - ⅓ δ_ij ∇·u

The single-tensor kernels serve the per-point viscous closure; the stacked
versions serve whole fields of shape (N, n_dim, n_dim).
"""

import numpy as np
from numba import njit


@njit(cache=True)
def _vorticity_kernel(grad_vel: np.ndarray, out: np.ndarray) -> None:
    """Fill out[0:3] with the curl of velocity."""
    n_dim = grad_vel.shape[0]
    out[0] = 0.0
    out[1] = 0.0
    out[2] = grad_vel[1, 0] - grad_vel[0, 1]
    if n_dim == 3:
        out[0] = grad_vel[2, 1] - grad_vel[1, 2]
        out[1] = -(grad_vel[2, 0] - grad_vel[0, 2])


@njit(cache=True)
def _strain_mag_kernel(grad_vel: np.ndarray) -> float:
    """Deviatoric strain-rate magnitude sqrt(2 S'_ij S'_ij)."""
    n_dim = grad_vel.shape[0]
    div = 0.0
    for i in range(n_dim):
        div += grad_vel[i, i]

    s2 = 0.0
    # Diagonal part
    for i in range(n_dim):
        s2 += (grad_vel[i, i] - div / 3.0) ** 2
    # Off-diagonals (symmetric, counted twice)
    for i in range(n_dim):
        for j in range(i + 1, n_dim):
            s2 += 2.0 * (0.5 * (grad_vel[i, j] + grad_vel[j, i])) ** 2

    return np.sqrt(2.0 * s2)


@njit(cache=True)
def _vorticity_field_kernel(grad_vel: np.ndarray, omega: np.ndarray) -> None:
    for n in range(grad_vel.shape[0]):
        _vorticity_kernel(grad_vel[n], omega[n])


@njit(cache=True)
def _strain_field_kernel(grad_vel: np.ndarray, s_mag: np.ndarray) -> None:
    for n in range(grad_vel.shape[0]):
        s_mag[n] = _strain_mag_kernel(grad_vel[n])


def vorticity_vector(grad_vel: np.ndarray, out: np.ndarray = None) -> np.ndarray:
    """
    Compute the vorticity vector of a single velocity-gradient tensor.
    
    Parameters
    ----------
    grad_vel : ndarray, shape (n_dim, n_dim)
        Velocity gradient ∂u_i/∂x_j.
    out : ndarray, shape (3,), optional
        Destination buffer.
        
    Returns
    -------
    omega : ndarray, shape (3,)
    """
    if out is None:
        out = np.zeros(3, dtype=np.float64)
    _vorticity_kernel(np.asarray(grad_vel, dtype=np.float64), out)
    return out


def strain_rate_magnitude(grad_vel: np.ndarray) -> float:
    """Strain-rate magnitude of a single velocity-gradient tensor."""
    return float(_strain_mag_kernel(np.asarray(grad_vel, dtype=np.float64)))


def compute_vorticity(grad_vel: np.ndarray) -> np.ndarray:
    """
    Compute vorticity vectors for a stack of velocity-gradient tensors.
    
    Parameters
    ----------
    grad_vel : ndarray, shape (N, n_dim, n_dim)
        
    Returns
    -------
    omega : ndarray, shape (N, 3)
    """
    grad_vel = np.ascontiguousarray(grad_vel, dtype=np.float64)
    omega = np.zeros((grad_vel.shape[0], 3), dtype=np.float64)
    _vorticity_field_kernel(grad_vel, omega)
    return omega


def compute_strain_rate(grad_vel: np.ndarray) -> np.ndarray:
    """
    Compute strain-rate magnitudes for a stack of velocity-gradient tensors.
    
    Parameters
    ----------
    grad_vel : ndarray, shape (N, n_dim, n_dim)
        
    Returns
    -------
    S_mag : ndarray, shape (N,)
    """
    grad_vel = np.ascontiguousarray(grad_vel, dtype=np.float64)
    s_mag = np.zeros(grad_vel.shape[0], dtype=np.float64)
    _strain_field_kernel(grad_vel, s_mag)
    return s_mag
