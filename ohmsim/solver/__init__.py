from .linear import solve_linear_system  # noqa: F401
from .picard import (  # noqa: F401
    NumericDivergenceError,
    Solution,
    SolverConfig,
    assemble,
    picard_solve,
)
from .state import commit_solution  # noqa: F401
from .step import solve  # noqa: F401

__all__ = [
    "NumericDivergenceError",
    "Solution",
    "SolverConfig",
    "assemble",
    "commit_solution",
    "picard_solve",
    "solve",
    "solve_linear_system",
]
