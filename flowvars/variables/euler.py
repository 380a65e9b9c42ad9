"""
Compressible (Euler) closure.

Adds the primitive-variable vector, its gradient and limiter, and the
perfect-gas equation of state on top of a PointState holding the conserved
solution U = [ρ, ρv, ρE].

Primitive layout (see flowvars.constants):
    V = [T, v_1..v_nDim, p, ρ, H, c]   (+ [μ_lam, μ_t] for viscous flow)

Only T, velocity, p and ρ carry gradients and limiters.

The primitive vector is stale after any change of the conserved solution;
nothing recomputes it implicitly. Call ``recompute_primitives`` after each
update. Conversions never raise on non-physical input: they return a
realizability flag and leave the best available (non-physical) values in
place, so the caller decides whether to clip, limit or revert.
"""

from typing import Optional, Tuple

import numpy as np

from ..config.schema import PhysicalConstants
from ..constants import (
    T_IDX, VEL_IDX, RHO_IDX,
    energy_index, p_index, rho_index, h_index, a_index,
    n_var_flow, n_prim_var_euler, n_prim_var_grad,
)
from ..physics import gas
from .base import PointState


class EulerClosure:
    """
    Compressible closure bound to one point's conserved state.

    Parameters
    ----------
    state : PointState
        Conserved solution storage (n_var = n_dim + 2).
    constants : PhysicalConstants
        Read-only constants provider.
    n_prim_var : int, optional
        Length of the primitive vector. Defaults to the inviscid layout;
        the viscous closure requests two extra viscosity slots.
    """

    def __init__(self, state: PointState, constants: PhysicalConstants,
                 n_prim_var: Optional[int] = None) -> None:
        n_dim = state.n_dim
        assert state.n_var >= n_var_flow(n_dim), "conserved state too short for compressible flow"

        self.state = state
        self.constants = constants
        self.n_dim = n_dim
        self.n_prim_var = n_prim_var if n_prim_var is not None else n_prim_var_euler(n_dim)
        self.n_prim_var_grad = n_prim_var_grad(n_dim)

        self.primitive = np.zeros(self.n_prim_var)
        self.gradient_primitive = np.zeros((self.n_prim_var_grad, n_dim))
        self.limiter_primitive = np.zeros(self.n_prim_var_grad)

        self.velocity2 = 0.0
        self.precond_beta = 0.0

    @classmethod
    def from_state(cls, density: float, velocity, energy: float, n_dim: int,
                   constants: PhysicalConstants, dual_time: bool = False,
                   n_prim_var: Optional[int] = None) -> "EulerClosure":
        """
        Build a closure initialized from density, velocity and specific total energy.

        Both the solution and its old snapshot are set, and the primitives are
        computed once.
        """
        state = PointState(n_dim, n_var_flow(n_dim), dual_time=dual_time)
        velocity = np.asarray(velocity, dtype=np.float64)
        state.solution[RHO_IDX] = density
        state.solution[VEL_IDX:VEL_IDX + n_dim] = density * velocity
        state.solution[energy_index(n_dim)] = density * energy
        state.store_old_solution()
        if dual_time:
            state.store_solution_time_n()
            state.store_solution_time_n1()

        closure = cls(state, constants, n_prim_var=n_prim_var)
        closure.recompute_primitives()
        return closure

    # ------------------------------------------------------------------
    # Pure conversions
    # ------------------------------------------------------------------

    def cons_to_prim(self, U, V: Optional[np.ndarray] = None) -> Tuple[np.ndarray, bool]:
        """
        Convert a conserved vector to primitives with the perfect-gas EOS.

        Parameters
        ----------
        U : array_like, length n_dim + 2
            Conserved variables [ρ, ρv, ρE].
        V : ndarray, optional
            Destination (length >= n_dim + 5); allocated when omitted.

        Returns
        -------
        V : ndarray
            Primitive variables; non-physical values are kept on failure.
        realizable : bool
            False when ρ, p, c² or T is non-positive.
        """
        n_dim = self.n_dim
        gamma = self.constants.gamma
        if V is None:
            V = np.zeros(self.n_prim_var)

        rho = np.float64(U[RHO_IDX])
        vel = np.asarray(U[VEL_IDX:VEL_IDX + n_dim], dtype=np.float64) / rho
        velocity2 = np.dot(vel, vel)
        energy = np.float64(U[energy_index(n_dim)]) / rho

        p = gas.pressure(gamma, rho, energy, velocity2)
        c2 = gas.sound_speed_squared(gamma, p, rho)
        T = gas.temperature(self.constants.gas_constant, p, rho)

        V[T_IDX] = T
        V[VEL_IDX:VEL_IDX + n_dim] = vel
        V[p_index(n_dim)] = p
        V[rho_index(n_dim)] = rho
        V[h_index(n_dim)] = gas.total_enthalpy(rho, energy, p)
        V[a_index(n_dim)] = gas.sound_speed(gamma, p, rho)

        realizable = rho > 0.0 and p > 0.0 and c2 > 0.0 and T > 0.0
        return V, bool(realizable)

    def prim_to_cons(self, V, U: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Convert primitives back to the conserved vector (inverse of cons_to_prim).

        Only T, velocity, p and ρ are read.
        """
        n_dim = self.n_dim
        if U is None:
            U = np.zeros(n_var_flow(n_dim))

        rho = np.float64(V[rho_index(n_dim)])
        p = np.float64(V[p_index(n_dim)])
        vel = np.asarray(V[VEL_IDX:VEL_IDX + n_dim], dtype=np.float64)
        velocity2 = np.dot(vel, vel)

        U[RHO_IDX] = rho
        U[VEL_IDX:VEL_IDX + n_dim] = rho * vel
        U[energy_index(n_dim)] = rho * gas.total_energy(self.constants.gamma, rho, p, velocity2)
        return U

    # ------------------------------------------------------------------
    # Primitive recomputation from the current solution
    # ------------------------------------------------------------------

    def set_velocity(self) -> None:
        """Velocity components and |v|² from the current solution."""
        n_dim = self.n_dim
        solution = self.state.solution
        vel = solution[VEL_IDX:VEL_IDX + n_dim] / solution[RHO_IDX]
        self.primitive[VEL_IDX:VEL_IDX + n_dim] = vel
        self.velocity2 = float(np.dot(vel, vel))

    def set_density(self) -> bool:
        density = float(self.state.solution[RHO_IDX])
        self.primitive[rho_index(self.n_dim)] = density
        return density > 0.0

    def set_pressure(self) -> bool:
        """Pressure from the solution; requires set_velocity first."""
        p = gas.pressure(self.constants.gamma, self.get_density_solution(),
                         self.get_energy(), self.velocity2)
        self.primitive[p_index(self.n_dim)] = p
        return bool(p > 0.0)

    def set_sound_speed(self) -> bool:
        """Speed of sound; requires set_pressure first. Left untouched when γp/ρ <= 0."""
        radical = gas.sound_speed_squared(self.constants.gamma, self.get_pressure(),
                                          self.get_density_solution())
        if radical <= 0.0:
            return False
        self.primitive[a_index(self.n_dim)] = np.sqrt(radical)
        return True

    def set_temperature(self) -> bool:
        """Temperature; requires set_pressure first."""
        T = gas.temperature(self.constants.gas_constant, self.get_pressure(),
                            self.get_density_solution())
        self.primitive[T_IDX] = T
        return bool(T > 0.0)

    def set_enthalpy(self) -> None:
        n_dim = self.n_dim
        solution = self.state.solution
        self.primitive[h_index(n_dim)] = (
            (solution[energy_index(n_dim)] + self.get_pressure()) / solution[RHO_IDX]
        )

    def recompute_primitives(self) -> bool:
        """
        Re-derive all primitives from the current solution.

        Also zeroes the primitive gradient buffer for the next accumulation
        pass. Returns the realizability flag; nothing is reverted on failure.
        """
        self.set_velocity()
        check_dens = self.set_density()
        check_press = self.set_pressure()
        check_sos = self.set_sound_speed()
        check_temp = self.set_temperature()
        self.set_enthalpy()
        self.set_gradient_primitive_zero()
        return bool(check_dens and check_press and check_sos and check_temp)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_density_solution(self):
        """Density straight from the conserved solution (numpy scalar, may be <= 0)."""
        return self.state.solution[RHO_IDX]

    def get_density(self) -> float:
        return float(self.primitive[rho_index(self.n_dim)])

    def get_energy(self) -> float:
        """Specific total energy E = (ρE)/ρ from the current solution."""
        solution = self.state.solution
        return float(solution[energy_index(self.n_dim)] / solution[RHO_IDX])

    def get_pressure(self) -> float:
        return float(self.primitive[p_index(self.n_dim)])

    def get_sound_speed(self) -> float:
        return float(self.primitive[a_index(self.n_dim)])

    def get_enthalpy(self) -> float:
        return float(self.primitive[h_index(self.n_dim)])

    def get_temperature(self) -> float:
        return float(self.primitive[T_IDX])

    def get_velocity(self, dim: int) -> float:
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        return float(self.primitive[VEL_IDX + dim])

    def get_velocity2(self) -> float:
        return self.velocity2

    def get_proj_vel(self, vector) -> float:
        """Velocity projected on ``vector`` (not normalized)."""
        vel = self.primitive[VEL_IDX:VEL_IDX + self.n_dim]
        return float(np.dot(vel, vector))

    def get_primitive(self, var: Optional[int] = None):
        if var is None:
            return self.primitive.copy()
        assert 0 <= var < self.n_prim_var, f"primitive index {var} out of range"
        return float(self.primitive[var])

    def set_primitive(self, values, var: Optional[int] = None) -> None:
        if var is None:
            self.primitive[:] = values
        else:
            assert 0 <= var < self.n_prim_var, f"primitive index {var} out of range"
            self.primitive[var] = values

    # ------------------------------------------------------------------
    # Primitive gradient and limiter
    # ------------------------------------------------------------------

    def set_gradient_primitive_zero(self) -> None:
        self.gradient_primitive[:, :] = 0.0

    def set_gradient_primitive(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_prim_var_grad and 0 <= dim < self.n_dim
        self.gradient_primitive[var, dim] = value

    def add_gradient_primitive(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_prim_var_grad and 0 <= dim < self.n_dim
        self.gradient_primitive[var, dim] += value

    def subtract_gradient_primitive(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_prim_var_grad and 0 <= dim < self.n_dim
        self.gradient_primitive[var, dim] -= value

    def get_gradient_primitive(self, var: Optional[int] = None, dim: Optional[int] = None):
        if var is None:
            return self.gradient_primitive.copy()
        assert 0 <= var < self.n_prim_var_grad, f"primitive index {var} out of range"
        if dim is None:
            return self.gradient_primitive[var].copy()
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        return float(self.gradient_primitive[var, dim])

    def set_limiter_primitive(self, var: int, value: float) -> None:
        assert 0 <= var < self.n_prim_var_grad, f"primitive index {var} out of range"
        self.limiter_primitive[var] = value

    def get_limiter_primitive(self, var: Optional[int] = None):
        if var is None:
            return self.limiter_primitive.copy()
        assert 0 <= var < self.n_prim_var_grad, f"primitive index {var} out of range"
        return float(self.limiter_primitive[var])

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def set_velocity_old(self, velocity) -> None:
        """Old momentum = velocity × current density."""
        n_dim = self.n_dim
        self.state.solution_old[VEL_IDX:VEL_IDX + n_dim] = (
            np.asarray(velocity, dtype=np.float64) * self.state.solution[RHO_IDX]
        )

    def set_preconditioner_beta(self, value: float) -> None:
        self.precond_beta = value

    def get_preconditioner_beta(self) -> float:
        return self.precond_beta
