"""
Closure formulas: equation of state, transport laws and turbulence-model
functions. Backend agnostic (NumPy, PyTorch, JAX).
"""
