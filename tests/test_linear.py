"""Tests for the dense Gaussian elimination solver."""

import numpy as np
import pytest

from ohmsim.solver.linear import solve_linear_system


class TestSolveLinearSystem:

    def test_diagonal(self):
        A = np.diag([2.0, 4.0, 0.5])
        b = np.array([2.0, 2.0, 2.0])
        np.testing.assert_allclose(solve_linear_system(A, b), [1.0, 0.5, 4.0])

    def test_zero_leading_entry_needs_row_swap(self):
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        b = np.array([3.0, 4.0])
        np.testing.assert_allclose(solve_linear_system(A, b), [4.0, 3.0])

    def test_matches_numpy_on_well_conditioned_system(self):
        rng = np.random.default_rng(1234)
        A = rng.normal(size=(8, 8)) + 8 * np.eye(8)
        b = rng.normal(size=8)
        np.testing.assert_allclose(solve_linear_system(A, b), np.linalg.solve(A, b),
                                   rtol=1e-10, atol=1e-12)

    def test_inputs_not_modified(self):
        A = np.array([[0.0, 2.0], [3.0, 1.0]])
        b = np.array([1.0, 2.0])
        A_before, b_before = A.copy(), b.copy()
        solve_linear_system(A, b)
        np.testing.assert_array_equal(A, A_before)
        np.testing.assert_array_equal(b, b_before)

    def test_singular_column_is_free_variable(self):
        A = np.array([[1.0, 0.0], [0.0, 0.0]])
        b = np.array([2.0, 5.0])
        x = solve_linear_system(A, b)
        assert x[0] == pytest.approx(2.0)
        assert x[1] == 0.0

    def test_all_zero_matrix_returns_zeros(self):
        x = solve_linear_system(np.zeros((3, 3)), np.ones(3))
        np.testing.assert_array_equal(x, np.zeros(3))

    def test_pivot_threshold(self):
        A = np.array([[1e-25, 0.0], [0.0, 1.0]])
        b = np.array([1.0, 3.0])
        x = solve_linear_system(A, b)
        assert x[0] == 0.0
        assert x[1] == pytest.approx(3.0)
        # same system solves once the threshold is lowered
        x = solve_linear_system(A, b, pivot_tol=1e-30)
        assert x[0] == pytest.approx(1e25)

    def test_accepts_nested_lists(self):
        x = solve_linear_system([[4.0, 1.0], [1.0, 3.0]], [1.0, 2.0])
        np.testing.assert_allclose(np.array([[4.0, 1.0], [1.0, 3.0]]) @ x, [1.0, 2.0])
