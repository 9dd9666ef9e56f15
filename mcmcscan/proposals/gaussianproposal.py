"""
Gaussian proposal shaped by the ensemble covariance
"""

from typing import Optional

import numpy as np

from mcmcscan.core.problem import ProblemProtocol, validate_measurement
from mcmcscan.core.proposal import ProposalProtocol
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics
from mcmcscan.utils.logging import ScanLogger

logger = ScanLogger.get_logger(__name__)


class EnsembleGaussianProposal(ProposalProtocol):
    """
    Random walk proposal with step f * L * z, z ~ N(0, I).

    L is the lower Cholesky factor of the current ensemble covariance and
    f = scale / sqrt(d). The default scale of 2.381 is the usual optimum for
    Gaussian random-walk Metropolis in high dimension.

    Candidates outside the valid region of the problem are redrawn until one is
    valid. With a degenerate support this loop does not terminate.
    """

    def __init__(self, problem: ProblemProtocol, scale: float = 2.381):
        if not isinstance(problem, ProblemProtocol):
            raise TypeError("problem must implement is_valid and measure.")
        if not scale > 0.0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.problem = problem
        self.scale = scale

    def scale_factor(self, dim: int) -> float:
        return self.scale / np.sqrt(dim)

    def sample(self, current: Sample, statistics: EnsembleStatistics, rng: np.random.Generator, cholesky: Optional[np.ndarray] = None) -> Sample:
        """
        Draw a valid trial point around current and measure it.

        Args:
            current: Sample the step starts from.
            statistics: Current ensemble statistics.
            rng: Random generator of the scan.
            cholesky: Precomputed lower Cholesky factor of the covariance.

        Raises:
            NotPositiveDefiniteError: If the covariance has no Cholesky factor.
            InvalidArgumentError: If the measurements of the trial point differ
                in length from those of current.
        """
        dim = current.dimension
        L = statistics.cholesky() if cholesky is None else cholesky
        step_matrix = self.scale_factor(dim) * L

        tries = 0
        while True:
            tries += 1
            z = rng.standard_normal((dim, 1))
            trial_parameters = current.parameters + step_matrix @ z
            if self.problem.is_valid(trial_parameters):
                break

        if tries > 1:
            logger.debug("Trial point found after %d draws", tries)

        measurements, likelihood = validate_measurement(
            self.problem.measure(trial_parameters), current.num_measurements
        )
        return Sample(parameters=trial_parameters, measurements=measurements, likelihood=likelihood)
