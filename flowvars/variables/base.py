"""
Per-point solution storage for finite-volume solvers.

PointState holds everything a discretization point carries independently of
the physics: the conserved solution and its time-history snapshots, gradient
and limiter buffers, eigenvalue/time-step bookkeeping, dissipation support,
and residual-smoothing / multigrid accumulators.

Protocols:
    Gradient, limiter and undivided-Laplacian buffers follow a two-phase
    protocol: zero them, then accumulate neighbour contributions. They are only
    meaningful for reads after the accumulation pass of all points completes.

    Old and time-level snapshots are NOT kept in sync with ``solution``; the
    time integrator copies them explicitly (store_old_solution, ...).

    The maximum-eigenvalue accumulators are running maxima: reset with
    set_max_lambda*(0) and then fold contributions in with add_max_lambda*.

Index arguments must lie in [0, n_var) / [0, n_dim). They are checked by
assertions only (disabled under ``python -O``).
"""

from typing import ClassVar, Optional, Sequence

import numpy as np

from ..constants import VEL_IDX, energy_index


class PointState:
    """
    Generic per-point storage and update primitives.

    Parameters
    ----------
    n_dim : int
        Number of spatial dimensions. Process-wide: the first instance binds
        it, every later instance must agree.
    n_var : int
        Number of conserved variables of this instance.
    dual_time : bool
        Allocate the solution history at time levels n and n-1.
    """

    _n_dim: ClassVar[Optional[int]] = None

    def __init__(self, n_dim: int, n_var: int, dual_time: bool = False) -> None:
        PointState.bind_dimension(n_dim)
        self.n_var = n_var

        self.solution = np.zeros(n_var)
        self.solution_old = np.zeros(n_var)
        self.solution_time_n: Optional[np.ndarray] = None
        self.solution_time_n1: Optional[np.ndarray] = None
        if dual_time:
            self.solution_time_n = np.zeros(n_var)
            self.solution_time_n1 = np.zeros(n_var)

        # Spatial reconstruction
        self.gradient = np.zeros((n_var, n_dim))
        self.limiter = np.zeros(n_var)
        self.solution_max = np.zeros(n_var)
        self.solution_min = np.zeros(n_var)

        # Auxiliary scalar (e.g. adjoint sensitivities)
        self.aux_var = 0.0
        self.aux_var_gradient = np.zeros(n_dim)

        # Time step and spectral radii
        self.delta_time = 0.0
        self.max_lambda = 0.0
        self.max_lambda_inv = 0.0
        self.max_lambda_visc = 0.0
        self.lambda_ = 0.0

        # Artificial dissipation
        self.sensor = 0.0
        self.undivided_laplacian = np.zeros(n_var)

        # Multigrid forcing and residual smoothing
        self.res_trunc_error = np.zeros(n_var)
        self.residual_old = np.zeros(n_var)
        self.residual_sum = np.zeros(n_var)

    # ------------------------------------------------------------------
    # Process-wide dimension
    # ------------------------------------------------------------------

    @classmethod
    def bind_dimension(cls, n_dim: int) -> None:
        """Set the process-wide number of dimensions (once)."""
        assert n_dim in (2, 3), f"n_dim must be 2 or 3, got {n_dim}"
        if PointState._n_dim is None:
            PointState._n_dim = n_dim
        assert PointState._n_dim == n_dim, \
            f"n_dim is bound to {PointState._n_dim}; cannot create a {n_dim}D state"

    @classmethod
    def reset_dimension(cls) -> None:
        """Release the process-wide dimension (solver teardown, tests)."""
        PointState._n_dim = None

    @property
    def n_dim(self) -> int:
        return PointState._n_dim

    @property
    def dual_time(self) -> bool:
        return self.solution_time_n is not None

    # ------------------------------------------------------------------
    # Solution access
    # ------------------------------------------------------------------

    def set_solution(self, values, var: Optional[int] = None) -> None:
        """Overwrite the whole solution vector, or one entry when ``var`` is given."""
        if var is None:
            self.solution[:] = values
        else:
            assert 0 <= var < self.n_var, f"variable index {var} out of range"
            self.solution[var] = values

    def get_solution(self, var: Optional[int] = None):
        """Copy of the solution vector, or one entry as float."""
        if var is None:
            return self.solution.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution[var])

    def set_solution_old(self, values, var: Optional[int] = None) -> None:
        if var is None:
            self.solution_old[:] = values
        else:
            assert 0 <= var < self.n_var, f"variable index {var} out of range"
            self.solution_old[var] = values

    def get_solution_old(self, var: Optional[int] = None):
        if var is None:
            return self.solution_old.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution_old[var])

    def get_solution_time_n(self, var: Optional[int] = None):
        assert self.dual_time, "dual-time history not allocated"
        if var is None:
            return self.solution_time_n.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution_time_n[var])

    def get_solution_time_n1(self, var: Optional[int] = None):
        assert self.dual_time, "dual-time history not allocated"
        if var is None:
            return self.solution_time_n1.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution_time_n1[var])

    def set_solution_zero(self, var: Optional[int] = None) -> None:
        if var is None:
            self.solution[:] = 0.0
        else:
            assert 0 <= var < self.n_var, f"variable index {var} out of range"
            self.solution[var] = 0.0

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def add_solution(self, var: int, delta: float) -> None:
        """solution[var] += delta."""
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.solution[var] += delta

    def add_clipped_solution(self, var: int, delta: float,
                             lower: float, upper: float) -> None:
        """
        solution[var] = clamp(solution_old[var] + delta, lower, upper).

        Reads the old snapshot, so calling it repeatedly within one stage
        does not accumulate.
        """
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        value = self.solution_old[var] + delta
        self.solution[var] = min(max(value, lower), upper)

    def add_conservative_solution(self, var: int, delta: float,
                                  density: float, density_old: float,
                                  lower: float, upper: float) -> None:
        """
        solution[var] = clamp((solution_old[var]*density_old + delta)/density, lower, upper).

        ``delta`` is the increment of the density-weighted quantity, so the
        conserved amount is preserved when the carrier density changes.
        """
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        value = (self.solution_old[var] * density_old + delta) / density
        self.solution[var] = min(max(value, lower), upper)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def store_old_solution(self) -> None:
        """solution -> solution_old."""
        self.solution_old[:] = self.solution

    def restore_old_solution(self) -> None:
        """solution_old -> solution."""
        self.solution[:] = self.solution_old

    def store_solution_time_n(self) -> None:
        """solution -> solution_time_n."""
        assert self.dual_time, "dual-time history not allocated"
        self.solution_time_n[:] = self.solution

    def store_solution_time_n1(self) -> None:
        """solution_time_n -> solution_time_n1 (call before store_solution_time_n)."""
        assert self.dual_time, "dual-time history not allocated"
        self.solution_time_n1[:] = self.solution_time_n

    # ------------------------------------------------------------------
    # Momentum helpers (wall boundary conditions)
    # ------------------------------------------------------------------

    def set_vel_solution_zero(self) -> None:
        self.solution[VEL_IDX:VEL_IDX + self.n_dim] = 0.0

    def set_vel_solution_vector(self, vector: Sequence[float]) -> None:
        self.solution[VEL_IDX:VEL_IDX + self.n_dim] = vector

    def set_vel_solution_old_zero(self) -> None:
        self.solution_old[VEL_IDX:VEL_IDX + self.n_dim] = 0.0

    def set_vel_solution_old_vector(self, vector: Sequence[float]) -> None:
        self.solution_old[VEL_IDX:VEL_IDX + self.n_dim] = vector

    # ------------------------------------------------------------------
    # Gradient and limiter
    # ------------------------------------------------------------------

    def set_gradient_zero(self) -> None:
        self.gradient[:, :] = 0.0

    def set_gradient(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_var and 0 <= dim < self.n_dim
        self.gradient[var, dim] = value

    def set_gradient_matrix(self, values) -> None:
        """Overwrite the full (n_var, n_dim) gradient."""
        self.gradient[:, :] = values

    def add_gradient(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_var and 0 <= dim < self.n_dim
        self.gradient[var, dim] += value

    def subtract_gradient(self, var: int, dim: int, value: float) -> None:
        assert 0 <= var < self.n_var and 0 <= dim < self.n_dim
        self.gradient[var, dim] -= value

    def get_gradient(self, var: Optional[int] = None, dim: Optional[int] = None):
        """Full gradient matrix (copy), one variable's gradient, or one entry."""
        if var is None:
            return self.gradient.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        if dim is None:
            return self.gradient[var].copy()
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        return float(self.gradient[var, dim])

    def set_limiter(self, var: int, value: float) -> None:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.limiter[var] = value

    def get_limiter(self, var: Optional[int] = None):
        if var is None:
            return self.limiter.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.limiter[var])

    def set_solution_max(self, var: int, value: float) -> None:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.solution_max[var] = value

    def set_solution_min(self, var: int, value: float) -> None:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.solution_min[var] = value

    def get_solution_max(self, var: int) -> float:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution_max[var])

    def get_solution_min(self, var: int) -> float:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution_min[var])

    # ------------------------------------------------------------------
    # Auxiliary variable
    # ------------------------------------------------------------------

    def set_aux_var(self, value: float) -> None:
        self.aux_var = value

    def get_aux_var(self) -> float:
        return self.aux_var

    def set_aux_var_gradient_zero(self) -> None:
        self.aux_var_gradient[:] = 0.0

    def set_aux_var_gradient(self, dim: int, value: float) -> None:
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        self.aux_var_gradient[dim] = value

    def add_aux_var_gradient(self, dim: int, value: float) -> None:
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        self.aux_var_gradient[dim] += value

    def subtract_aux_var_gradient(self, dim: int, value: float) -> None:
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        self.aux_var_gradient[dim] -= value

    def get_aux_var_gradient(self, dim: Optional[int] = None):
        if dim is None:
            return self.aux_var_gradient.copy()
        assert 0 <= dim < self.n_dim, f"dimension index {dim} out of range"
        return float(self.aux_var_gradient[dim])

    # ------------------------------------------------------------------
    # Time step and eigenvalues
    # ------------------------------------------------------------------

    def set_delta_time(self, value: float) -> None:
        self.delta_time = value

    def get_delta_time(self) -> float:
        return self.delta_time

    def set_max_lambda(self, value: float) -> None:
        self.max_lambda = value

    def set_max_lambda_inv(self, value: float) -> None:
        self.max_lambda_inv = value

    def set_max_lambda_visc(self, value: float) -> None:
        self.max_lambda_visc = value

    def add_max_lambda(self, value: float) -> None:
        """Fold a contribution into the running maximum."""
        self.max_lambda = max(self.max_lambda, value)

    def add_max_lambda_inv(self, value: float) -> None:
        self.max_lambda_inv = max(self.max_lambda_inv, value)

    def add_max_lambda_visc(self, value: float) -> None:
        self.max_lambda_visc = max(self.max_lambda_visc, value)

    def get_max_lambda(self) -> float:
        return self.max_lambda

    def get_max_lambda_inv(self) -> float:
        return self.max_lambda_inv

    def get_max_lambda_visc(self) -> float:
        return self.max_lambda_visc

    def set_lambda(self, value: float) -> None:
        self.lambda_ = value

    def add_lambda(self, value: float) -> None:
        """Accumulate (sum) a spectral-radius contribution."""
        self.lambda_ += value

    def get_lambda(self) -> float:
        return self.lambda_

    # ------------------------------------------------------------------
    # Artificial dissipation
    # ------------------------------------------------------------------

    def set_sensor(self, value: float) -> None:
        self.sensor = value

    def get_sensor(self) -> float:
        return self.sensor

    def set_und_lapl_zero(self) -> None:
        self.undivided_laplacian[:] = 0.0

    def set_und_lapl(self, var: int, value: float) -> None:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.undivided_laplacian[var] = value

    def add_und_lapl(self, values) -> None:
        self.undivided_laplacian += values

    def subtract_und_lapl(self, values, var: Optional[int] = None) -> None:
        """Subtract a full vector, or a scalar from one entry when ``var`` is given."""
        if var is None:
            self.undivided_laplacian -= values
        else:
            assert 0 <= var < self.n_var, f"variable index {var} out of range"
            self.undivided_laplacian[var] -= values

    def get_undivided_laplacian(self, var: Optional[int] = None):
        if var is None:
            return self.undivided_laplacian.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.undivided_laplacian[var])

    # ------------------------------------------------------------------
    # Residual smoothing and truncation error
    # ------------------------------------------------------------------

    def set_residual_old(self, values) -> None:
        self.residual_old[:] = values

    def get_residual_old(self) -> np.ndarray:
        return self.residual_old.copy()

    def add_residual_sum(self, values) -> None:
        self.residual_sum += values

    def set_residual_sum_zero(self) -> None:
        self.residual_sum[:] = 0.0

    def get_residual_sum(self) -> np.ndarray:
        return self.residual_sum.copy()

    def add_res_trunc_error(self, values) -> None:
        self.res_trunc_error += values

    def subtract_res_trunc_error(self, values) -> None:
        self.res_trunc_error -= values

    def set_res_trunc_error_zero(self) -> None:
        self.res_trunc_error[:] = 0.0

    def set_val_res_trunc_error_zero(self, var: int) -> None:
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        self.res_trunc_error[var] = 0.0

    def set_vel_res_trunc_error_zero(self) -> None:
        """Zero the momentum entries (strong no-slip walls)."""
        self.res_trunc_error[VEL_IDX:VEL_IDX + self.n_dim] = 0.0

    def set_energy_res_trunc_error_zero(self) -> None:
        """Zero the energy entry (isothermal walls)."""
        self.res_trunc_error[energy_index(self.n_dim)] = 0.0

    def get_res_trunc_error(self) -> np.ndarray:
        return self.res_trunc_error.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_dim={self.n_dim}, n_var={self.n_var}, dual_time={self.dual_time})"
