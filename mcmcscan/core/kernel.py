"""
Template class file for the kernel
"""

# Imports
import numpy as np
from typing import Protocol
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics


class KernelProtocol(Protocol):
    """
    Protocol for ensemble MCMC transition kernels.
    """

    def propose(self, current: 'Sample', statistics: 'EnsembleStatistics', rng: np.random.Generator) -> 'Sample':
        """Generate trial sample from current sample"""
        raise NotImplementedError("Implement propose method")

    def acceptance_ratio(self, current: 'Sample', proposed: 'Sample', statistics: 'EnsembleStatistics', trial_statistics: 'EnsembleStatistics', step: int) -> float:
        """Compute acceptance probability of the trial at the given step"""
        raise NotImplementedError("Implement acceptance_ratio method")
