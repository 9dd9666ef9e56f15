"""
Script housing some linear-algebra helper functions
"""

# Imports
from typing import Tuple

import numpy as np
import scipy.linalg

from mcmcscan.core.errors import NotPositiveDefiniteError


def as_column(x) -> np.ndarray:
    """Return x as a float column vector of shape (d, 1)."""
    return np.asarray(x, dtype=float).reshape(-1, 1)


def is_positive_definite(A: np.ndarray) -> bool:
    """
    Check if a matrix A is positive definite by attempting Cholesky decomposition.

    Parameters
    ----------
    A : (d, d) array
        Matrix to check for positive definiteness

    Returns
    -------
    is_pd : bool
        True if A is positive definite, False otherwise
    """
    try:
        np.linalg.cholesky(A)
        return True
    except np.linalg.LinAlgError:
        return False


def lower_cholesky(A: np.ndarray) -> np.ndarray:
    """
    Lower-triangular Cholesky factor L of A, such that L @ L.T == A.

    Only the lower triangle of A is read.

    Raises
    ------
    NotPositiveDefiniteError
        If A has no Cholesky factor.
    """
    try:
        return scipy.linalg.cholesky(A, lower=True)
    except np.linalg.LinAlgError as exc:
        raise NotPositiveDefiniteError() from exc


def lu_det_and_inverse(A: np.ndarray) -> Tuple[float, np.ndarray]:
    """
    Determinant and inverse of a square matrix from a single LU decomposition.

    Parameters
    ----------
    A : (d, d) array
        Square, non-singular matrix

    Returns
    -------
    det : float
        Determinant of A
    inverse : (d, d) array
        Inverse of A

    Raises
    ------
    NotPositiveDefiniteError
        If the determinant is not positive. The inverse is never attempted
        in that case.
    """
    d = A.shape[0]
    lu, piv = scipy.linalg.lu_factor(A, check_finite=True)

    # Each row interchange recorded in piv flips the sign
    swaps = np.count_nonzero(piv != np.arange(d))
    det = float(np.prod(np.diag(lu))) * (-1.0 if swaps % 2 else 1.0)
    if not det > 0.0:
        raise NotPositiveDefiniteError()

    inverse = scipy.linalg.lu_solve((lu, piv), np.eye(d))
    return det, inverse


def population_mean_and_covariance(X: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Mean and population covariance (divisor N) of a set of points.

    Parameters
    ----------
    X : (d, N) array
        N points in d dimensions, one per column

    Returns
    -------
    mean : (d, 1) array
    cov : (d, d) array
    """
    d, N = X.shape
    mean = np.sum(X, axis=1, keepdims=True) / N
    diff = X - mean
    cov = diff @ diff.T / N
    # Exact symmetry; the product above is symmetric up to round-off only
    cov = 0.5 * (cov + cov.T)
    return mean, cov


def inverse_residual(A: np.ndarray, A_inv: np.ndarray) -> float:
    """Largest absolute entry of A_inv @ A - I."""
    return float(np.max(np.abs(A_inv @ A - np.eye(A.shape[0]))))
