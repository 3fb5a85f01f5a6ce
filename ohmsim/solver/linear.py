from __future__ import annotations
import numpy as np
from ..config import PIVOT_TOL

Array = np.ndarray


def solve_linear_system(A: Array, b: Array, pivot_tol: float = PIVOT_TOL) -> Array:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    At each column the row with the largest remaining magnitude is swapped into
    place before eliminating below it. A column whose best pivot falls under
    ``pivot_tol`` is left alone and its unknown is reported as 0, so singular or
    disconnected sub-networks still produce a finite answer instead of raising.

    Args:
        A: Square system matrix. Not modified.
        b: Right-hand side. Not modified.
        pivot_tol: Smallest pivot magnitude accepted (default: 1e-20).

    Returns:
        Solution vector x with free variables set to zero.
    """
    M = np.array(A, dtype=float)
    x = np.array(b, dtype=float)
    n = x.shape[0]

    for i in range(n):
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if p != i:
            M[[i, p]] = M[[p, i]]
            x[[i, p]] = x[[p, i]]

        pivot = M[i, i]
        if abs(pivot) < pivot_tol:
            continue

        factors = M[i + 1:, i] / pivot
        M[i + 1:, i + 1:] -= np.outer(factors, M[i, i + 1:])
        M[i + 1:, i] = 0.0
        x[i + 1:] -= factors * x[i]

    res = np.zeros(n)
    for i in range(n - 1, -1, -1):
        if abs(M[i, i]) < pivot_tol:
            res[i] = 0.0  # free variable
            continue
        res[i] = (x[i] - M[i, i + 1:] @ res[i + 1:]) / M[i, i]
    return res
