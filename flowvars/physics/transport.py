"""
Molecular Transport Properties.

Sutherland's law for the dynamic viscosity of a gas:

    μ(T) = μ_ref (T / T_ref)^(3/2) (T_ref + S) / (T + S)

which grows sub-linearly (~T^(1/2)) at high temperature, and Fourier
conductivity from laminar and turbulent Prandtl numbers.
"""

import torch

from .backend import get_backend


def sutherland_viscosity(temperature, mu_ref, temperature_ref, sutherland_constant):
    """
    Compute the laminar dynamic viscosity from Sutherland's law.
    
    Parameters
    ----------
    temperature : array_like
        Static temperature (any shape, NumPy/PyTorch/JAX).
    mu_ref, temperature_ref, sutherland_constant : float
        Reference viscosity, reference temperature and Sutherland constant S.
        
    Returns
    -------
    mu : array_like
        Dynamic viscosity (same shape and type as temperature).
    """
    backend = get_backend(temperature)
    power = torch.pow if backend is torch else backend.power
    ratio = temperature / temperature_ref
    return (mu_ref * power(ratio, 1.5)
            * (temperature_ref + sutherland_constant) / (temperature + sutherland_constant))


def sutherland_viscosity_with_gradient(temperature, mu_ref, temperature_ref, sutherland_constant):
    """
    Returns (mu, d(mu)/dT).
    
    dμ/dT = μ [3/(2T) - 1/(T + S)]
    """
    mu = sutherland_viscosity(temperature, mu_ref, temperature_ref, sutherland_constant)
    grad = mu * (1.5 / temperature - 1.0 / (temperature + sutherland_constant))
    return mu, grad


def thermal_conductivity(cp, mu_lam, mu_turb, prandtl_lam, prandtl_turb):
    """Effective conductivity k = cp (μ_l/Pr_l + μ_t/Pr_t)."""
    return cp * (mu_lam / prandtl_lam + mu_turb / prandtl_turb)
