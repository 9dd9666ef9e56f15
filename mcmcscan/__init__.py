from mcmcscan.core.chain import Chain
from mcmcscan.core.config import ScanConfig
from mcmcscan.core.errors import (
    InvalidArgumentError,
    NotPositiveDefiniteError,
    SinkUnavailableError,
)
from mcmcscan.core.problem import FunctionalProblem, ProblemProtocol
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics
from mcmcscan.samplers.ensemble_scan import AdaptiveScan, ScanStatus

__version__ = "0.1.0"

__all__ = [
    "AdaptiveScan",
    "Chain",
    "EnsembleStatistics",
    "FunctionalProblem",
    "InvalidArgumentError",
    "NotPositiveDefiniteError",
    "ProblemProtocol",
    "Sample",
    "ScanConfig",
    "ScanStatus",
    "SinkUnavailableError",
]
