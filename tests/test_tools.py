import numpy as np
import pytest

from mcmcscan.core.errors import NotPositiveDefiniteError
from mcmcscan.utils.tools import (
    as_column,
    inverse_residual,
    is_positive_definite,
    lower_cholesky,
    lu_det_and_inverse,
    population_mean_and_covariance,
)


class TestAsColumn:
    def test_vector_becomes_column(self):
        assert as_column([1.0, 2.0, 3.0]).shape == (3, 1)

    def test_row_becomes_column(self):
        result = as_column(np.array([[1.0, 2.0]]))
        assert result.shape == (2, 1)
        assert result.dtype == float

    def test_scalar_becomes_column(self):
        assert as_column(4.0).shape == (1, 1)


class TestPositiveDefinite:
    def test_identity(self):
        assert is_positive_definite(np.eye(3))

    def test_indefinite(self):
        assert not is_positive_definite(np.array([[1.0, 2.0], [2.0, 1.0]]))


class TestLowerCholesky:
    def test_factor_reproduces_matrix(self):
        A = np.array([[4.0, 1.0, 0.5], [1.0, 3.0, 0.2], [0.5, 0.2, 2.0]])
        L = lower_cholesky(A)
        assert np.allclose(L, np.tril(L))
        assert np.allclose(L @ L.T, A)

    def test_indefinite_raises(self):
        with pytest.raises(NotPositiveDefiniteError):
            lower_cholesky(np.array([[1.0, 2.0], [2.0, 1.0]]))


class TestLuDetAndInverse:
    def test_matches_numpy(self):
        rng = np.random.default_rng(3)
        X = rng.normal(size=(4, 4))
        A = X @ X.T + 0.1 * np.eye(4)
        det, inverse = lu_det_and_inverse(A)
        assert np.isclose(det, np.linalg.det(A))
        assert np.allclose(inverse, np.linalg.inv(A))

    def test_row_swaps_keep_sign(self):
        # The first pivot forces a row interchange
        A = np.array([[1.0, 2.0], [2.0, 5.0]])
        det, inverse = lu_det_and_inverse(A)
        assert np.isclose(det, 1.0)
        assert np.allclose(inverse, [[5.0, -2.0], [-2.0, 1.0]])

    def test_negative_determinant_raises(self):
        with pytest.raises(NotPositiveDefiniteError):
            lu_det_and_inverse(np.array([[0.0, 1.0], [1.0, 0.0]]))

    def test_singular_raises(self):
        with pytest.raises(NotPositiveDefiniteError):
            lu_det_and_inverse(np.array([[1.0, 1.0], [1.0, 1.0]]))


class TestPopulationMeanAndCovariance:
    def test_divisor_is_number_of_points(self):
        X = np.array([[0.0, 1.0, 0.0, 1.0], [0.0, 0.0, 1.0, 1.0]])
        mean, cov = population_mean_and_covariance(X)
        assert mean.shape == (2, 1)
        assert np.allclose(mean, [[0.5], [0.5]])
        assert np.allclose(cov, 0.25 * np.eye(2))

    def test_exactly_symmetric(self):
        X = np.random.default_rng(7).normal(size=(5, 20))
        _, cov = population_mean_and_covariance(X)
        assert np.array_equal(cov, cov.T)
        assert np.allclose(cov, np.cov(X, bias=True))


def test_inverse_residual():
    A = np.array([[2.0, 0.0], [0.0, 4.0]])
    assert inverse_residual(A, np.diag([0.5, 0.25])) == 0.0
    assert np.isclose(inverse_residual(A, np.diag([0.5, 0.3])), 0.2)
