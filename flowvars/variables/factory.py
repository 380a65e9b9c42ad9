"""
Per-point variable factory.

Selects the physics variant once per configuration and assembles the
matching closures into a ``PointVariables`` record, so that every script
and solver component builds point states the same way.

Capability slots per kind:

    kind            flow  viscous  turbulence  baseline
    baseline         -       -         -          x
    euler            x       -         -          -
    navier_stokes    x       x         -          -
    rans_sa          x       x      SAClosure     -
    rans_sst         x       x      SSTClosure    -
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
from loguru import logger

from ..config.schema import ClosureConfig, PhysicalConstants
from ..constants import n_prim_var_ns
from .baseline import BaselineState
from .euler import EulerClosure
from .navier_stokes import ViscousClosure
from .turbulence import TurbulenceClosure, SAClosure, SSTClosure


class PhysicsKind(Enum):
    """Physics variants of a point state."""
    BASELINE = "baseline"            # Restart values only
    EULER = "euler"                  # Inviscid compressible
    NAVIER_STOKES = "navier_stokes"  # Laminar viscous
    RANS_SA = "rans_sa"              # Spalart-Allmaras
    RANS_SST = "rans_sst"            # Menter k-omega SST

    @property
    def is_viscous(self) -> bool:
        return self in (PhysicsKind.NAVIER_STOKES, PhysicsKind.RANS_SA, PhysicsKind.RANS_SST)

    @property
    def is_turbulent(self) -> bool:
        return self in (PhysicsKind.RANS_SA, PhysicsKind.RANS_SST)


@dataclass
class PointVariables:
    """
    Tagged variant holding the closures of one discretization point.

    Components that need a physics-specific quantity request the capability
    with ``require_*``; requesting one the variant lacks is a programming
    error and fails the assertion.
    """
    kind: PhysicsKind
    flow: Optional[EulerClosure] = None
    viscous: Optional[ViscousClosure] = None
    turbulence: Optional[TurbulenceClosure] = None
    baseline: Optional[BaselineState] = None

    def require_flow(self) -> EulerClosure:
        assert self.flow is not None, f"{self.kind.value} variables have no flow closure"
        return self.flow

    def require_viscous(self) -> ViscousClosure:
        assert self.viscous is not None, f"{self.kind.value} variables have no viscous closure"
        return self.viscous

    def require_turbulence(self) -> TurbulenceClosure:
        assert self.turbulence is not None, f"{self.kind.value} variables have no turbulence closure"
        return self.turbulence

    def require_sst(self) -> SSTClosure:
        assert isinstance(self.turbulence, SSTClosure), \
            f"{self.kind.value} variables have no SST closure"
        return self.turbulence

    def get_solution(self) -> np.ndarray:
        """Copy of the mean-flow (or restart) solution vector."""
        if self.kind is PhysicsKind.BASELINE:
            return self.baseline.get_solution()
        return self.require_flow().state.get_solution()

    def recompute_primitives(self) -> bool:
        """
        Re-derive the primitives after a solution update.

        Viscous variants receive the eddy viscosity currently held by the
        turbulence closure and, for SST, the turbulent kinetic energy.
        """
        kind = self.kind
        if kind is PhysicsKind.EULER:
            return self.flow.recompute_primitives()
        if kind is PhysicsKind.NAVIER_STOKES:
            return self.viscous.recompute_primitives()
        if kind.is_turbulent:
            return self.viscous.recompute_primitives(
                eddy_viscosity=self.turbulence.get_mut(),
                turb_ke=self.turbulence.get_turb_ke(),
            )
        raise AssertionError(f"{kind.value} variables have no primitives")

    def update_eddy_viscosity(self, wall_distance: float) -> float:
        """
        Evaluate the turbulence model and store μ_t in the viscous closure.

        The primitive gradient (and, for SST, the k/ω gradient) must have
        been accumulated beforehand.

        Returns
        -------
        float
            The new eddy viscosity.
        """
        turbulence = self.require_turbulence()
        viscous = self.require_viscous()
        density = self.flow.get_density()
        mu_lam = viscous.get_laminar_viscosity()

        if isinstance(turbulence, SSTClosure):
            viscous.set_strain_mag()
            turbulence.set_blending_func(mu_lam, wall_distance, density)
            mu_t = turbulence.compute_eddy_viscosity(density, viscous.get_strain_mag())
        else:
            mu_t = turbulence.compute_eddy_viscosity(density, mu_lam)

        viscous.set_eddy_viscosity(mu_t)
        return mu_t


def _parse_kind(kind: Union[str, PhysicsKind]) -> PhysicsKind:
    if isinstance(kind, PhysicsKind):
        return kind
    try:
        return PhysicsKind(kind)
    except ValueError:
        raise ValueError(f"Unknown physics kind: {kind!r}. "
                         f"Use one of {[k.value for k in PhysicsKind]}") from None


def create_point_variables(
    kind: Union[str, PhysicsKind],
    n_dim: int,
    constants: Optional[PhysicalConstants] = None,
    # Mean-flow initial state
    density: float = 1.0,
    velocity: Optional[Sequence[float]] = None,
    energy: Optional[float] = None,
    # Turbulence initial state
    nu_tilde: float = 0.0,
    turb_ke: float = 0.0,
    omega: float = 1.0,
    mu_t: float = 0.0,
    # Restart values
    baseline_solution: Optional[Sequence[float]] = None,
    dual_time: bool = False,
) -> PointVariables:
    """
    Create the per-point variables of one physics variant.

    Parameters
    ----------
    kind : str or PhysicsKind
        "baseline", "euler", "navier_stokes", "rans_sa" or "rans_sst".
    n_dim : int
        Number of spatial dimensions (2 or 3).
    constants : PhysicalConstants, optional
        Constants provider (default: standard air).
    density : float
        Initial density (default: 1.0).
    velocity : sequence of float, optional
        Initial velocity (default: at rest).
    energy : float, optional
        Initial specific total energy, including the turbulent kinetic
        energy for SST. Defaults to the energy of a gas at rest with
        p = ρ / γ (unit sound speed).
    nu_tilde : float
        Spalart-Allmaras working variable (default: 0.0).
    turb_ke, omega : float
        SST turbulence scalars (default: 0.0, 1.0).
    mu_t : float
        Initial eddy viscosity (default: 0.0).
    baseline_solution : sequence of float, optional
        Restart values for the baseline variant.
    dual_time : bool
        Allocate dual-time solution history (default: False).

    Returns
    -------
    PointVariables
        Variant with primitives already computed.

    Raises
    ------
    ValueError
        If ``kind`` is not a known physics variant.
    """
    kind = _parse_kind(kind)
    if constants is None:
        constants = PhysicalConstants()
    logger.debug("Creating {} point variables (n_dim={}, dual_time={})",
                 kind.value, n_dim, dual_time)

    if kind is PhysicsKind.BASELINE:
        assert baseline_solution is not None, "baseline variables need restart values"
        return PointVariables(kind=kind, baseline=BaselineState(baseline_solution))

    if velocity is None:
        velocity = np.zeros(n_dim)
    assert len(velocity) == n_dim, f"expected {n_dim} velocity components"
    if energy is None:
        velocity2 = float(np.dot(velocity, velocity))
        pressure = density / constants.gamma
        energy = pressure / ((constants.gamma - 1.0) * density) + 0.5 * velocity2 + turb_ke

    n_prim_var = n_prim_var_ns(n_dim) if kind.is_viscous else None
    flow = EulerClosure.from_state(density, velocity, energy, n_dim, constants,
                                   dual_time=dual_time, n_prim_var=n_prim_var)
    variables = PointVariables(kind=kind, flow=flow)

    if kind.is_viscous:
        variables.viscous = ViscousClosure(flow, constants)
    if kind is PhysicsKind.RANS_SA:
        variables.turbulence = SAClosure.from_values(nu_tilde, mu_t, n_dim, constants,
                                                     dual_time=dual_time)
    elif kind is PhysicsKind.RANS_SST:
        variables.turbulence = SSTClosure.from_values(turb_ke, omega, mu_t, n_dim, constants,
                                                      dual_time=dual_time)

    if kind.is_viscous:
        variables.recompute_primitives()
    return variables


def from_config(config: ClosureConfig, **initial) -> PointVariables:
    """
    Create point variables from a ClosureConfig.

    Keyword arguments are forwarded to ``create_point_variables`` as the
    initial state.
    """
    return create_point_variables(
        config.state.kind,
        config.state.n_dim,
        config.constants,
        dual_time=config.state.dual_time,
        **initial,
    )
