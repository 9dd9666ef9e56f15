"""
Template class file for proposal
"""

# Imports
import numpy as np
from typing import Protocol
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics


class ProposalProtocol(Protocol):
    """
    Protocol for ensemble-informed proposal distributions
    """

    def scale_factor(self, dim: int) -> float:
        """Scale f applied to the covariance-shaped step"""
        raise NotImplementedError("Implement scale_factor method")

    def sample(self, current: 'Sample', statistics: 'EnsembleStatistics', rng: np.random.Generator) -> 'Sample':
        """Generate a valid, measured trial sample from the current sample"""
        raise NotImplementedError("Implement sample method")
