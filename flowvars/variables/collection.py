"""
Collection of per-point variables for a whole field.

VariableSet loops the per-point protocol over all points and bridges to the
batched JAX kernels: solutions are gathered into (N, n_var) arrays, updated
or checked in one jitted call, and scattered back.
"""

from typing import List, Sequence

import numpy as np
from loguru import logger

from ..numerics.conversions import cons_to_prim_jax
from ..numerics.updates import apply_clipped_update, apply_conservative_update
from ..physics.jax_config import jnp
from .factory import PhysicsKind, PointVariables


class VariableSet:
    """
    Field of PointVariables sharing one physics kind.

    Parameters
    ----------
    points : sequence of PointVariables
        Per-point variables, all of the same kind.
    """

    def __init__(self, points: Sequence[PointVariables]) -> None:
        self.points: List[PointVariables] = list(points)
        assert self.points, "empty variable set"
        self.kind = self.points[0].kind
        assert all(p.kind is self.kind for p in self.points), "mixed physics kinds"

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> PointVariables:
        return self.points[index]

    def _states(self, turbulence: bool):
        if turbulence:
            return [p.require_turbulence().state for p in self.points]
        return [p.require_flow().state for p in self.points]

    # ------------------------------------------------------------------
    # Per-point protocol over the field
    # ------------------------------------------------------------------

    def store_old_solution(self) -> None:
        """Snapshot solution -> solution_old for flow and turbulence states."""
        for p in self.points:
            p.require_flow().state.store_old_solution()
            if p.turbulence is not None:
                p.turbulence.state.store_old_solution()

    def set_gradient_zero(self) -> None:
        """Zero every gradient buffer before an accumulation pass."""
        for p in self.points:
            flow = p.require_flow()
            flow.state.set_gradient_zero()
            flow.set_gradient_primitive_zero()
            if p.turbulence is not None:
                p.turbulence.state.set_gradient_zero()

    def recompute_primitives(self) -> np.ndarray:
        """
        Recompute primitives at every point.

        Returns
        -------
        ndarray of bool (N,)
            Realizability mask.
        """
        mask = np.array([p.recompute_primitives() for p in self.points], dtype=bool)
        n_bad = int((~mask).sum())
        if n_bad:
            logger.warning("{} of {} points non-realizable after primitive update",
                           n_bad, len(mask))
        return mask

    # ------------------------------------------------------------------
    # Gather
    # ------------------------------------------------------------------

    def gather_solution(self, turbulence: bool = False) -> np.ndarray:
        """Stack the solution vectors into an (N, n_var) array."""
        if self.kind is PhysicsKind.BASELINE and not turbulence:
            return np.stack([p.baseline.get_solution() for p in self.points])
        return np.stack([s.solution for s in self._states(turbulence)])

    def gather_primitive(self) -> np.ndarray:
        """Stack the primitive vectors into an (N, n_prim_var) array."""
        return np.stack([p.require_flow().primitive for p in self.points])

    # ------------------------------------------------------------------
    # Batched updates
    # ------------------------------------------------------------------

    def add_clipped_solution(self, var: int, deltas, lower: float, upper: float,
                             turbulence: bool = False) -> None:
        """
        Field version of PointState.add_clipped_solution for variable ``var``.

        ``turbulence`` selects the turbulence states instead of the mean flow.
        """
        states = self._states(turbulence)
        q_old = jnp.asarray([s.solution_old[var] for s in states])
        q_new = np.asarray(apply_clipped_update(q_old, jnp.asarray(deltas), lower, upper))
        for state, value in zip(states, q_new):
            state.solution[var] = value

    def add_conservative_solution(self, var: int, deltas, density, density_old,
                                  lower: float, upper: float,
                                  turbulence: bool = False) -> None:
        """Field version of PointState.add_conservative_solution for variable ``var``."""
        states = self._states(turbulence)
        q_old = jnp.asarray([s.solution_old[var] for s in states])
        q_new = np.asarray(apply_conservative_update(
            q_old, jnp.asarray(deltas), jnp.asarray(density), jnp.asarray(density_old),
            lower, upper))
        for state, value in zip(states, q_new):
            state.solution[var] = value

    def check_realizability(self) -> np.ndarray:
        """
        Realizability of the current mean-flow solutions, without touching
        the stored primitives.
        """
        constants = self.points[0].require_flow().constants
        U = jnp.asarray(self.gather_solution())
        turb_ke = 0.0
        if self.kind is PhysicsKind.RANS_SST:
            turb_ke = jnp.asarray([p.turbulence.get_turb_ke() for p in self.points])
        _, realizable = cons_to_prim_jax(U, constants.gamma, constants.gas_constant, turb_ke)
        return np.asarray(realizable)
