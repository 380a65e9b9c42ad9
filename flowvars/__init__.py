"""
flowvars: per-point flow variables and closure relations for compressible
finite-volume solvers.
"""

__version__ = "0.1.0"
