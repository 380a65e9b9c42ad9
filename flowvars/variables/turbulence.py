"""
Turbulence-model closures.

A turbulence closure owns its own PointState holding the transported
turbulence scalars, plus the eddy viscosity it hands to the viscous closure:

    SAClosure   one equation,  solution = [ν̃]
    SSTClosure  two equations, solution = [k, ω], plus blending functions

The eddy viscosity is never derived implicitly: ``compute_eddy_viscosity``
evaluates the model relation, ``set_mut`` stores an externally supplied one.
"""

from typing import Optional

import numpy as np

from ..config.schema import PhysicalConstants
from ..constants import NU_TILDE_IDX, TKE_IDX, OMEGA_IDX
from ..physics import spalart_allmaras, sst
from .base import PointState


class TurbulenceClosure:
    """
    Eddy-viscosity storage shared by all turbulence variants.

    Parameters
    ----------
    state : PointState
        Storage of the turbulence scalars (n_var = 1 or 2).
    constants : PhysicalConstants
        Read-only constants provider.
    """

    def __init__(self, state: PointState, constants: PhysicalConstants) -> None:
        self.state = state
        self.constants = constants
        self.n_dim = state.n_dim
        self.mu_t = 0.0

    def get_mut(self) -> float:
        return self.mu_t

    def set_mut(self, mu_t: float) -> None:
        self.mu_t = mu_t

    def get_turb_ke(self) -> float:
        """Turbulent kinetic energy entering the pressure; zero without a k equation."""
        return 0.0


class SAClosure(TurbulenceClosure):
    """Spalart-Allmaras one-equation closure."""

    def __init__(self, state: PointState, constants: PhysicalConstants) -> None:
        assert state.n_var == 1, "Spalart-Allmaras transports a single scalar"
        super().__init__(state, constants)

    @classmethod
    def from_values(cls, nu_tilde: float, mu_t: float, n_dim: int,
                    constants: PhysicalConstants, dual_time: bool = False) -> "SAClosure":
        state = PointState(n_dim, 1, dual_time=dual_time)
        state.solution[NU_TILDE_IDX] = nu_tilde
        state.store_old_solution()
        closure = cls(state, constants)
        closure.set_mut(mu_t)
        return closure

    def get_nu_tilde(self) -> float:
        return float(self.state.solution[NU_TILDE_IDX])

    def compute_eddy_viscosity(self, density: float, laminar_viscosity: float) -> float:
        """μ_t = ρ ν̃ fv1(χ); stored and returned."""
        nu_tilde = np.float64(self.state.solution[NU_TILDE_IDX])
        mu_t = spalart_allmaras.eddy_viscosity(
            density, nu_tilde, np.float64(laminar_viscosity), self.constants.sa.cv1)
        self.mu_t = float(mu_t)
        return self.mu_t


class SSTClosure(TurbulenceClosure):
    """
    Menter k-ω SST two-equation closure.

    The blending functions are evaluated from the gradients of k and ω held
    in the closure's own gradient buffer, so they must be accumulated before
    ``set_blending_func`` is called.
    """

    def __init__(self, state: PointState, constants: PhysicalConstants) -> None:
        assert state.n_var == 2, "SST transports k and omega"
        super().__init__(state, constants)
        self.f1 = 1.0
        self.f2 = 0.0
        self.cd_kw = 0.0

    @classmethod
    def from_values(cls, k: float, omega: float, mu_t: float, n_dim: int,
                    constants: PhysicalConstants, dual_time: bool = False) -> "SSTClosure":
        state = PointState(n_dim, 2, dual_time=dual_time)
        state.solution[TKE_IDX] = k
        state.solution[OMEGA_IDX] = omega
        state.store_old_solution()
        closure = cls(state, constants)
        closure.set_mut(mu_t)
        return closure

    def get_turb_ke(self) -> float:
        return float(self.state.solution[TKE_IDX])

    def get_omega(self) -> float:
        return float(self.state.solution[OMEGA_IDX])

    def set_blending_func(self, viscosity: float, wall_distance: float, density: float) -> None:
        """
        Evaluate F1, F2 and the cross-diffusion term at this point.

        Parameters
        ----------
        viscosity : float
            Laminar dynamic viscosity μ.
        wall_distance : float
            Distance to the nearest solid wall.
        density : float
            Flow density ρ.
        """
        coeffs = self.constants.sst
        solution = self.state.solution
        gradient = self.state.gradient
        f1, f2, cd_kw = sst.blending_functions(
            np.float64(solution[TKE_IDX]), np.float64(solution[OMEGA_IDX]),
            gradient[TKE_IDX], gradient[OMEGA_IDX],
            np.float64(density), np.float64(viscosity), np.float64(wall_distance),
            sigma_om2=coeffs.sigma_om2, beta_star=coeffs.beta_star,
            cross_diff_floor=coeffs.cross_diff_floor,
        )
        self.f1 = float(f1)
        self.f2 = float(f2)
        self.cd_kw = float(cd_kw)

    def get_f1_blending(self) -> float:
        return self.f1

    def get_f2_blending(self) -> float:
        return self.f2

    def get_cross_diff(self) -> float:
        return self.cd_kw

    def blend(self, inner: float, outer: float) -> float:
        """F1 inner + (1 - F1) outer, e.g. blend(beta_1, beta_2)."""
        return float(sst.blend(self.f1, inner, outer))

    def compute_eddy_viscosity(self, density: float, strain_mag: float,
                               f2: Optional[float] = None) -> float:
        """
        μ_t = ρ a1 k / max(a1 ω, |S| F2); stored and returned.

        Uses the stored F2 unless one is passed explicitly.
        """
        f2 = self.f2 if f2 is None else f2
        mu_t = sst.eddy_viscosity(
            np.float64(density), np.float64(self.state.solution[TKE_IDX]),
            np.float64(self.state.solution[OMEGA_IDX]), np.float64(strain_mag),
            np.float64(f2), self.constants.sst.a1)
        self.mu_t = float(mu_t)
        return self.mu_t
