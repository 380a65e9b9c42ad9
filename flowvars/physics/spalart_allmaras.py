"""
Spalart-Allmaras Eddy Viscosity.

The one-equation model transports the working variable ν̃; the eddy
viscosity follows from the viscous damping function fv1:

    μ_t = ρ ν̃ fv1(χ),   χ = ν̃ / ν = ρ ν̃ / μ
    fv1 = χ³ / (χ³ + cv1³)

Dimension Agnostic:
    All functions work with any shape and with NumPy, PyTorch or JAX inputs.

Robustness:
    Negative ν̃ (numerical undershoot) is clamped to zero before fv1 is
    evaluated, so the eddy viscosity is never negative.
"""

from .backend import floor


def fv1(chi, cv1: float = 7.1):
    """
    Compute fv1 damping function and its derivative.
    
    fv1 = chi³ / (chi³ + cv1³)
    
    Parameters
    ----------
    chi : array_like
        Viscosity ratio ν̃/ν (any shape).
    cv1 : float
        Model constant.
        
    Returns
    -------
    val : array_like
        fv1 value (same shape as input).
    grad : array_like
        d(fv1)/d(chi) (same shape as input).
    """
    chi3 = chi ** 3
    denom = chi3 + cv1 ** 3

    val = chi3 / denom

    # d/dchi [chi^3 / (chi^3 + cv1^3)] = 3chi^2 * cv1^3 / denom^2
    grad = (3 * chi**2 * cv1**3) / (denom ** 2)

    return val, grad


def eddy_viscosity(density, nu_tilde, laminar_viscosity, cv1: float = 7.1):
    """
    Compute μ_t = ρ ν̃ fv1(χ).
    
    Parameters
    ----------
    density : array_like
        Flow density ρ.
    nu_tilde : array_like
        SA working variable ν̃ (kinematic, may contain negative values).
    laminar_viscosity : array_like
        Molecular dynamic viscosity μ.
    cv1 : float
        Model constant.
    """
    nu_tilde_safe = floor(nu_tilde, 0.0)
    chi = density * nu_tilde_safe / laminar_viscosity
    fv1_val, _ = fv1(chi, cv1)
    return density * nu_tilde_safe * fv1_val
