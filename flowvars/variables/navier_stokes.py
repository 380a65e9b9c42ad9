"""
Viscous (Navier-Stokes) closure.

Composes an EulerClosure and adds transport properties:
    - laminar viscosity from Sutherland's law (function of temperature only),
    - eddy viscosity, supplied by a turbulence closure and stored as-is,
    - vorticity vector and strain-rate magnitude from the primitive gradient.

Both viscosities live in the two trailing slots of the primitive vector so
that residual assembly reads them alongside T, v, p and ρ.
"""

from typing import Optional

import numpy as np

from ..config.schema import PhysicalConstants
from ..constants import (
    T_IDX, VEL_IDX, lam_visc_index, eddy_visc_index, p_index, n_prim_var_ns,
)
from ..numerics.gradients import vorticity_vector, strain_rate_magnitude
from ..physics import gas, transport
from .euler import EulerClosure


class ViscousClosure:
    """
    Transport-property closure on top of a compressible closure.

    Parameters
    ----------
    flow : EulerClosure
        Compressible closure with a primitive vector of length >= n_dim + 7.
    constants : PhysicalConstants, optional
        Constants provider; defaults to the one the flow closure holds.
    """

    def __init__(self, flow: EulerClosure, constants: Optional[PhysicalConstants] = None) -> None:
        assert flow.n_prim_var >= n_prim_var_ns(flow.n_dim), \
            "flow closure lacks viscosity slots; build it with n_prim_var_ns(n_dim)"
        self.flow = flow
        self.constants = constants if constants is not None else flow.constants
        self.n_dim = flow.n_dim

        self.vorticity = np.zeros(3)
        self.strain_mag = 0.0

    @classmethod
    def from_state(cls, density: float, velocity, energy: float, n_dim: int,
                   constants: PhysicalConstants, dual_time: bool = False) -> "ViscousClosure":
        """Build flow and viscous closures from density, velocity and specific energy."""
        flow = EulerClosure.from_state(density, velocity, energy, n_dim, constants,
                                       dual_time=dual_time, n_prim_var=n_prim_var_ns(n_dim))
        closure = cls(flow, constants)
        closure.recompute_primitives()
        return closure

    @property
    def state(self):
        return self.flow.state

    # ------------------------------------------------------------------
    # Viscosities
    # ------------------------------------------------------------------

    def set_laminar_viscosity(self) -> None:
        """Sutherland viscosity at the current temperature."""
        visc = self.constants.viscosity
        temperature = np.float64(self.flow.primitive[T_IDX])
        self.flow.primitive[lam_visc_index(self.n_dim)] = transport.sutherland_viscosity(
            temperature, visc.mu_ref, visc.temperature_ref, visc.sutherland_constant)

    def set_eddy_viscosity(self, eddy_visc: float) -> None:
        self.flow.primitive[eddy_visc_index(self.n_dim)] = eddy_visc

    def get_laminar_viscosity(self) -> float:
        return float(self.flow.primitive[lam_visc_index(self.n_dim)])

    def get_eddy_viscosity(self) -> float:
        return float(self.flow.primitive[eddy_visc_index(self.n_dim)])

    def get_effective_viscosity(self) -> float:
        """Molecular plus eddy viscosity."""
        return self.get_laminar_viscosity() + self.get_eddy_viscosity()

    def get_thermal_conductivity(self) -> float:
        """cp (μ_l/Pr_l + μ_t/Pr_t)."""
        visc = self.constants.viscosity
        return float(transport.thermal_conductivity(
            self.constants.cp, self.get_laminar_viscosity(), self.get_eddy_viscosity(),
            visc.prandtl_lam, visc.prandtl_turb))

    # ------------------------------------------------------------------
    # Velocity-gradient quantities
    # ------------------------------------------------------------------

    def _velocity_gradient(self) -> np.ndarray:
        return self.flow.gradient_primitive[VEL_IDX:VEL_IDX + self.n_dim, :]

    def set_vorticity(self) -> None:
        """Curl of velocity from the primitive gradient; 2D fills only the z component."""
        vorticity_vector(self._velocity_gradient(), out=self.vorticity)

    def get_vorticity(self, dim: int) -> float:
        assert 0 <= dim < 3, f"vorticity component {dim} out of range"
        return float(self.vorticity[dim])

    def get_vorticity_magnitude(self) -> float:
        return float(np.sqrt(np.dot(self.vorticity, self.vorticity)))

    def set_strain_mag(self) -> None:
        self.strain_mag = strain_rate_magnitude(self._velocity_gradient())

    def get_strain_mag(self) -> float:
        return self.strain_mag

    # ------------------------------------------------------------------
    # Primitive recomputation
    # ------------------------------------------------------------------

    def set_pressure(self, turb_ke: float = 0.0) -> bool:
        """Pressure with the turbulent kinetic energy removed from the total energy."""
        flow = self.flow
        p = gas.pressure(self.constants.gamma, flow.get_density_solution(),
                         flow.get_energy(), flow.velocity2, turb_ke)
        flow.primitive[p_index(self.n_dim)] = p
        return bool(p > 0.0)

    def recompute_primitives(self, eddy_viscosity: float = 0.0, turb_ke: float = 0.0) -> bool:
        """
        Re-derive primitives, laminar viscosity and the eddy-viscosity slot.

        Parameters
        ----------
        eddy_viscosity : float
            Eddy viscosity supplied by the turbulence closure (0 for laminar flow).
        turb_ke : float
            Turbulent kinetic energy of a two-equation model (0 otherwise).

        Returns
        -------
        bool
            Realizability of density, pressure, sound speed and temperature.
        """
        flow = self.flow
        flow.set_velocity()
        check_dens = flow.set_density()
        check_press = self.set_pressure(turb_ke)
        check_sos = flow.set_sound_speed()
        check_temp = flow.set_temperature()
        flow.set_enthalpy()
        self.set_laminar_viscosity()
        self.set_eddy_viscosity(eddy_viscosity)
        flow.set_gradient_primitive_zero()
        return bool(check_dens and check_press and check_sos and check_temp)

    def set_wall_temperature(self, temperature: float) -> None:
        """Impose the temperature of an isothermal wall."""
        self.flow.primitive[T_IDX] = temperature
