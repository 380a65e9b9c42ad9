"""
Menter SST Blending Functions.

Implements the blending and limiter functions of Menter's k-ω SST model
(Menter 1994, AIAA J. 32(8)):

    CD_kω = max(2 ρ σ_ω2 (1/ω) ∇k·∇ω, CD_floor)
    arg2A = √k / (β* ω d)
    arg2B = 500 μ / (ρ d² ω)
    arg1  = min(max(arg2A, arg2B), 4 ρ σ_ω2 k / (CD_kω d²))
    F1    = tanh(arg1⁴)
    F2    = tanh(max(2 arg2A, arg2B)²)

Each denominator carries an EPS² regularization so the functions stay finite
at the wall (d = 0). F1 → 1 at solid walls (k-ω behaviour) and F1 → 0 in the
free stream (k-ε behaviour). F2 feeds the shear-stress limiter in

    μ_t = ρ a1 k / max(a1 ω, |S| F2)

Dimension Agnostic:
    Scalars and fields alike; gradient vectors are reduced over the last axis.
    NumPy, PyTorch and JAX inputs are supported transparently.
"""

from ..constants import EPS
from .backend import get_backend, floor


def cross_diffusion(density, omega, grad_k, grad_omega,
                    sigma_om2: float = 0.856, cross_diff_floor: float = 1.0e-20):
    """
    Compute the floored cross-diffusion term CD_kω.
    
    Parameters
    ----------
    density, omega : array_like
        Density and specific dissipation rate (any shape S).
    grad_k, grad_omega : array_like
        Gradients of k and ω, shape S + (n_dim,).
    sigma_om2 : float
        Outer-layer ω diffusion coefficient.
    cross_diff_floor : float
        Lower bound of the result.
        
    Returns
    -------
    CDkw : array_like
        Cross-diffusion (shape S), never below ``cross_diff_floor``, also
        when ω is numerically zero.
    """
    omega_safe = floor(omega, EPS)
    dot = (grad_k * grad_omega).sum(-1)
    cd = 2.0 * density * sigma_om2 / omega_safe * dot
    return floor(cd, cross_diff_floor)


def blending_functions(k, omega, grad_k, grad_omega, density, viscosity, wall_distance,
                       sigma_om2: float = 0.856, beta_star: float = 0.09,
                       cross_diff_floor: float = 1.0e-20):
    """
    Compute the SST blending functions F1, F2 and the cross-diffusion term.
    
    Parameters
    ----------
    k, omega : array_like
        Turbulent kinetic energy and specific dissipation rate.
    grad_k, grad_omega : array_like
        Gradients of k and ω (trailing axis = spatial dimension).
    density : array_like
        Flow density ρ.
    viscosity : array_like
        Laminar dynamic viscosity μ.
    wall_distance : array_like
        Distance to the nearest solid wall.
    sigma_om2, beta_star, cross_diff_floor : float
        Model constants.
        
    Returns
    -------
    F1, F2, CDkw : array_like
        Blending function, limiter blending function, cross-diffusion.
    """
    backend = get_backend(k)
    eps2 = EPS * EPS
    d2 = wall_distance * wall_distance

    cd_kw = cross_diffusion(density, omega, grad_k, grad_omega, sigma_om2, cross_diff_floor)

    arg2A = backend.sqrt(k) / (beta_star * omega * wall_distance + eps2)
    arg2B = 500.0 * viscosity / (density * d2 * omega + eps2)
    arg2 = backend.maximum(arg2A, arg2B)
    arg1 = backend.minimum(arg2, 4.0 * density * sigma_om2 * k / (cd_kw * d2 + eps2))
    F1 = backend.tanh(arg1 ** 4)

    arg2 = backend.maximum(2.0 * arg2A, arg2B)
    F2 = backend.tanh(arg2 ** 2)

    return F1, F2, cd_kw


def blend(f1, inner, outer):
    """Blend an inner (k-ω) and outer (k-ε) coefficient: F1·inner + (1 - F1)·outer."""
    return f1 * inner + (1.0 - f1) * outer


def eddy_viscosity(density, k, omega, strain_mag, f2, a1: float = 0.31):
    """SST eddy viscosity with the Bradshaw shear-stress limiter."""
    backend = get_backend(k)
    denom = backend.maximum(a1 * omega, strain_mag * f2)
    return density * a1 * k / floor(denom, EPS)
