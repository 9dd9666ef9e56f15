"""
Running statistics over the current points of an ensemble of chains.

The ensemble mean, population covariance, inverse covariance and covariance
determinant are computed from scratch once. After that, every accepted step
replaces exactly one ensemble member, and the statistics are carried forward
with a closed-form rank-2 update instead of a fresh O(d^3) decomposition.

With n members, replacing x by y = x + s changes the covariance by

    C' = C + a0 b0^T + a1 b1^T,

    a0 = s / n,                          b0 = x - mean,
    a1 = (x - mean + (n-1)/n s) / n,     b1 = s,

so that, with A = [a0 a1], B = [b0 b1] and M = I + B^T C^-1 A (2 x 2),

    det(C') = det(C) det(M),
    C'^-1   = C^-1 - C^-1 A M^-1 B^T C^-1.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError, NotPositiveDefiniteError
from mcmcscan.core.sample import Sample
from mcmcscan.utils.tools import (
    inverse_residual,
    lower_cholesky,
    lu_det_and_inverse,
    population_mean_and_covariance,
)


@dataclass(frozen=True, eq=False)
class EnsembleStatistics:
    """
    Statistics of the current sample of every chain.

    Values are never modified in place: an update returns a new object, which
    keeps the rejection path of a speculative update free of rollback.

    Attributes:
        mean (np.ndarray): Ensemble mean, shape (d, 1).
        covariance (np.ndarray): Population covariance, shape (d, d).
        covariance_inv (np.ndarray): Inverse of the covariance, shape (d, d).
        covariance_det (float): Determinant of the covariance, always > 0.
    """

    mean: np.ndarray
    covariance: np.ndarray
    covariance_inv: np.ndarray
    covariance_det: float

    @classmethod
    def from_samples(cls, samples: Sequence[Sample]) -> "EnsembleStatistics":
        """
        Compute the statistics from scratch.

        Args:
            samples: The current sample of every chain.

        Raises:
            InvalidArgumentError: If samples is empty or of mixed dimension.
            NotPositiveDefiniteError: If the covariance is singular or not
                positive definite.
        """
        if samples is None or len(samples) == 0:
            raise InvalidArgumentError("cannot compute statistics of no samples")
        dimensions = {sample.dimension for sample in samples}
        if len(dimensions) != 1:
            raise InvalidArgumentError(
                f"samples have mixed dimensions {sorted(dimensions)}"
            )

        X = np.hstack([sample.parameters for sample in samples])
        mean, covariance = population_mean_and_covariance(X)
        covariance_det, covariance_inv = lu_det_and_inverse(covariance)

        # A positive determinant alone does not rule out an even number of
        # negative eigenvalues
        lower_cholesky(covariance)

        return cls._frozen(mean, covariance, covariance_inv, covariance_det)

    @classmethod
    def _frozen(cls, mean, covariance, covariance_inv, covariance_det) -> "EnsembleStatistics":
        for array in (mean, covariance, covariance_inv):
            array.setflags(write=False)
        return cls(
            mean=mean,
            covariance=covariance,
            covariance_inv=covariance_inv,
            covariance_det=float(covariance_det),
        )

    @property
    def dimension(self) -> int:
        return self.mean.shape[0]

    def replace_member(self, old: Sample, new: Sample, num_chains: int) -> "EnsembleStatistics":
        """
        Statistics after the ensemble member ``old`` is replaced by ``new``.

        Args:
            old: Current sample of the chain being updated.
            new: Sample taking its place.
            num_chains: Ensemble size n.

        Returns:
            A new EnsembleStatistics; self is left unchanged.

        Raises:
            InvalidArgumentError: If the samples do not match the dimension or
                num_chains is not positive.
            NotPositiveDefiniteError: If the updated covariance would have a
                non-positive determinant.
        """
        if old.dimension != self.dimension or new.dimension != self.dimension:
            raise InvalidArgumentError("sample dimension does not match the ensemble")
        if num_chains <= 0:
            raise InvalidArgumentError("num_chains must be positive")

        n = float(num_chains)
        x = old.parameters
        shift = new.parameters - x
        offset = x - self.mean

        mean = self.mean + shift / n

        a = (shift / n, (offset + (n - 1.0) / n * shift) / n)
        b = (offset, shift)

        # M[i][j] = delta_ij + b_i^T C^-1 a_j
        inv_a = [self.covariance_inv @ a_j for a_j in a]
        M = np.eye(2)
        for i in range(2):
            for j in range(2):
                M[i, j] += (b[i].T @ inv_a[j]).item()

        # 2 x 2 closed form; det(C') = det(C) det(M)
        M_det = M[0, 0] * M[1, 1] - M[0, 1] * M[1, 0]
        if not M_det > 0.0:
            raise NotPositiveDefiniteError()
        M_inv = np.array([[M[1, 1], -M[0, 1]], [-M[1, 0], M[0, 0]]]) / M_det

        covariance = self.covariance + a[0] @ b[0].T + a[1] @ b[1].T
        covariance = 0.5 * (covariance + covariance.T)

        covariance_det = self.covariance_det * M_det

        b_inv = [b_j.T @ self.covariance_inv for b_j in b]
        covariance_inv = self.covariance_inv.copy()
        for i in range(2):
            for j in range(2):
                covariance_inv -= M_inv[i, j] * (inv_a[i] @ b_inv[j])
        covariance_inv = 0.5 * (covariance_inv + covariance_inv.T)

        return self._frozen(mean, covariance, covariance_inv, covariance_det)

    def cholesky(self) -> np.ndarray:
        """Lower Cholesky factor of the covariance (raises NotPositiveDefiniteError)."""
        return lower_cholesky(self.covariance)

    def inverse_residual(self) -> float:
        """Largest absolute entry of covariance_inv @ covariance - I."""
        return inverse_residual(self.covariance, self.covariance_inv)

    def __repr__(self) -> str:
        return (
            f"EnsembleStatistics(dimension={self.dimension}, "
            f"covariance_det={self.covariance_det:.4g})"
        )
