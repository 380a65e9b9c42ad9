"""
Per-point flow variables.

This module provides:
- PointState: generic per-point storage and update primitives
- EulerClosure / ViscousClosure: compressible and viscous closures
- SAClosure / SSTClosure: turbulence-model closures
- BaselineState: restart-only container
- PointVariables / create_point_variables: tagged physics variant
- VariableSet: field-wide helpers over many points
"""

from .base import PointState
from .euler import EulerClosure
from .navier_stokes import ViscousClosure
from .turbulence import TurbulenceClosure, SAClosure, SSTClosure
from .baseline import BaselineState
from .factory import PhysicsKind, PointVariables, create_point_variables, from_config
from .collection import VariableSet

__all__ = [
    'PointState',
    'EulerClosure',
    'ViscousClosure',
    'TurbulenceClosure',
    'SAClosure',
    'SSTClosure',
    'BaselineState',
    'PhysicsKind',
    'PointVariables',
    'create_point_variables',
    'from_config',
    'VariableSet',
]
