"""
Class file for the annealed Metropolis-Hastings kernel
"""

# Imports
from dataclasses import dataclass

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError
from mcmcscan.core.kernel import KernelProtocol
from mcmcscan.core.proposal import ProposalProtocol
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics


@dataclass(frozen=True)
class AnnealingSchedule:
    """
    Simulated-annealing exponent applied to the likelihood ratio.

    The exponent ramps from 0.01 up to 1 over the first half of the burn-in,
    then stays at 1:

        lambda(k) = 0.01 ** (1 - k / k_half)   for k <= k_half
        lambda(k) = 1                          for k >  k_half

    with k_half = burn_fraction * max_steps / 2.
    """

    max_steps: int
    burn_fraction: float
    floor: float = 0.01

    def __post_init__(self) -> None:
        if self.max_steps <= 0:
            raise InvalidArgumentError(f"max_steps must be positive, got {self.max_steps}")
        if not 0.0 <= self.burn_fraction <= 1.0:
            raise InvalidArgumentError(
                f"burn_fraction must be in [0, 1], got {self.burn_fraction}"
            )
        if not 0.0 < self.floor <= 1.0:
            raise InvalidArgumentError(f"floor must be in (0, 1], got {self.floor}")

    @property
    def threshold(self) -> float:
        """Step count after which the exponent is exactly 1."""
        return self.burn_fraction * self.max_steps / 2.0

    def __call__(self, step: int) -> float:
        threshold = self.threshold
        if threshold <= 0.0 or step > threshold:
            return 1.0
        return self.floor ** (1.0 - step / threshold)


class AnnealedMetropolisKernel(KernelProtocol):
    """
    Metropolis-Hastings kernel for the adaptive ensemble scan.

    The proposal density depends on the ensemble covariance, which itself
    changes when the trial is accepted. The acceptance ratio therefore carries
    the ratio of the reverse and forward proposal densities,

        sqrt(det C / det C') * exp(-d^T (C'^-1 - C^-1) d / (2 f^2)),

    with d the trial shift, times the annealed likelihood ratio
    (L(y) / L(x)) ** lambda.
    """

    def __init__(self, proposal: ProposalProtocol, schedule: AnnealingSchedule):
        """
        Initialize the kernel with a proposal and an annealing schedule.
        """
        self.proposal = proposal
        self.schedule = schedule

    def propose(self, current: Sample, statistics: EnsembleStatistics, rng: np.random.Generator) -> Sample:
        """
        Generate a trial sample from the current sample using the proposal.
        """
        return self.proposal.sample(current, statistics, rng)

    def log_acceptance_ratio(self, current: Sample, proposed: Sample, statistics: EnsembleStatistics, trial_statistics: EnsembleStatistics, step: int) -> float:
        """
        Logarithm of the unclipped acceptance ratio.

        Returns 0.0 (accept) when the current likelihood is zero, and -inf when
        only the trial likelihood is zero.
        """
        if current.likelihood == 0.0:
            return 0.0
        if proposed.likelihood == 0.0:
            return -np.inf

        f = self.proposal.scale_factor(current.dimension)
        shift = proposed.parameters - current.parameters
        inverse_change = trial_statistics.covariance_inv - statistics.covariance_inv
        quadratic = (shift.T @ inverse_change @ shift).item()

        log_det_ratio = np.log(statistics.covariance_det) - np.log(trial_statistics.covariance_det)
        log_likelihood_ratio = np.log(proposed.likelihood) - np.log(current.likelihood)

        return 0.5 * log_det_ratio - quadratic / (2.0 * f * f) + self.schedule(step) * log_likelihood_ratio

    def acceptance_ratio(self, current: Sample, proposed: Sample, statistics: EnsembleStatistics, trial_statistics: EnsembleStatistics, step: int) -> float:
        """
        Compute the acceptance probability for the proposed sample.
        """
        check = self.log_acceptance_ratio(current, proposed, statistics, trial_statistics, step)
        if check > 0:
            ar = 1.0
        else:
            ar = float(np.exp(check))

        return ar
