"""
Baseline (restart) container: a bare solution vector with no closure.
"""

from typing import Optional

import numpy as np


class BaselineState:
    """
    Holds values read back from persisted output.

    Parameters
    ----------
    solution : array_like
        Initial values; copied.
    n_var : int, optional
        Number of stored variables, defaults to ``len(solution)``. Values
        beyond the provided ones start at zero.
    """

    def __init__(self, solution, n_var: Optional[int] = None) -> None:
        values = np.asarray(solution, dtype=np.float64).ravel()
        self.n_var = n_var if n_var is not None else values.size
        assert values.size <= self.n_var, "more values than variables"
        self.solution = np.zeros(self.n_var)
        self.solution[:values.size] = values

    def get_solution(self, var: Optional[int] = None):
        if var is None:
            return self.solution.copy()
        assert 0 <= var < self.n_var, f"variable index {var} out of range"
        return float(self.solution[var])

    def set_solution(self, values, var: Optional[int] = None) -> None:
        if var is None:
            self.solution[:] = values
        else:
            assert 0 <= var < self.n_var, f"variable index {var} out of range"
            self.solution[var] = values

    def __repr__(self) -> str:
        return f"BaselineState(n_var={self.n_var})"
