"""
Configuration schema for the flow variable closures.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
The ``PhysicalConstants`` tree is the read-only constants provider handed to every
closure; it is frozen so that no closure can mutate it.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class GasConfig:
    """Calorically perfect gas properties."""
    
    gamma: float = 1.4             # Ratio of specific heats
    gas_constant: float = 287.058  # Specific gas constant [J/(kg·K)]


@dataclass(frozen=True)
class ViscosityConfig:
    """Sutherland viscosity law and Prandtl numbers."""
    
    mu_ref: float = 1.716e-5           # Reference viscosity [kg/(m·s)]
    temperature_ref: float = 273.15    # Reference temperature [K]
    sutherland_constant: float = 110.4 # Sutherland temperature S [K]
    prandtl_lam: float = 0.72
    prandtl_turb: float = 0.90


@dataclass(frozen=True)
class SAConstants:
    """Spalart-Allmaras one-equation model coefficients."""
    
    cv1: float = 7.1
    cb1: float = 0.1355
    cb2: float = 0.622
    sigma: float = 2.0 / 3.0
    kappa: float = 0.41


@dataclass(frozen=True)
class SSTConstants:
    """Menter SST two-equation model coefficients (Menter 1994).
    
    Index 1 refers to the inner (k-omega) layer, index 2 to the outer
    (transformed k-epsilon) layer.
    """
    
    sigma_k1: float = 0.85
    sigma_k2: float = 1.0
    sigma_om1: float = 0.5
    sigma_om2: float = 0.856
    beta_1: float = 0.075
    beta_2: float = 0.0828
    beta_star: float = 0.09
    a1: float = 0.31
    kappa: float = 0.41
    cross_diff_floor: float = 1.0e-20  # Lower bound on CD_kw


@dataclass(frozen=True)
class PhysicalConstants:
    """Constants provider: gas, transport and turbulence-model coefficients."""
    
    gas: GasConfig = field(default_factory=GasConfig)
    viscosity: ViscosityConfig = field(default_factory=ViscosityConfig)
    sa: SAConstants = field(default_factory=SAConstants)
    sst: SSTConstants = field(default_factory=SSTConstants)
    
    @property
    def gamma(self) -> float:
        return self.gas.gamma
    
    @property
    def gas_constant(self) -> float:
        return self.gas.gas_constant
    
    @property
    def cp(self) -> float:
        """Specific heat at constant pressure."""
        return self.gas.gamma * self.gas.gas_constant / (self.gas.gamma - 1.0)
    
    @property
    def cv(self) -> float:
        """Specific heat at constant volume."""
        return self.gas.gas_constant / (self.gas.gamma - 1.0)


@dataclass
class StateConfig:
    """Per-point state layout selected once per solver configuration."""
    
    # Physics kind: "baseline", "euler", "navier_stokes", "rans_sa", "rans_sst"
    kind: str = "euler"
    n_dim: int = 2
    dual_time: bool = False  # Allocate solution history for dual-time stepping


@dataclass
class ClosureConfig:
    """Complete closure configuration."""
    
    constants: PhysicalConstants = field(default_factory=PhysicalConstants)
    state: StateConfig = field(default_factory=StateConfig)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset configurations
def standard_air_preset() -> PhysicalConstants:
    """Dimensional air at standard conditions (SI units)."""
    return PhysicalConstants()


def nondimensional_preset() -> PhysicalConstants:
    """Reference-scaled gas: rho_ref = p_ref * gamma = T_ref = mu_ref = 1."""
    gamma = 1.4
    return PhysicalConstants(
        gas=GasConfig(gamma=gamma, gas_constant=1.0 / gamma),
        viscosity=ViscosityConfig(
            mu_ref=1.0,
            temperature_ref=1.0,
            sutherland_constant=110.4 / 273.15,
        ),
    )


PRESETS = {
    'standard-air': standard_air_preset,
    'nondimensional': nondimensional_preset,
}
