"""
Configuration module for the flow variable closures.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    ClosureConfig,
    StateConfig,
    PhysicalConstants,
    GasConfig,
    ViscosityConfig,
    SAConstants,
    SSTConstants,
    standard_air_preset,
    nondimensional_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    save_yaml,
)

__all__ = [
    # Schema classes
    'ClosureConfig',
    'StateConfig',
    'PhysicalConstants',
    'GasConfig',
    'ViscosityConfig',
    'SAConstants',
    'SSTConstants',
    # Presets
    'standard_air_preset',
    'nondimensional_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'save_yaml',
]
