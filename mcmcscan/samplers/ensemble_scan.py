"""
Class file for the adaptive ensemble scan.
"""

import os
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from mcmcscan.core.chain import Chain
from mcmcscan.core.config import ScanConfig
from mcmcscan.core.errors import (
    InvalidArgumentError,
    NotPositiveDefiniteError,
    SinkUnavailableError,
)
from mcmcscan.core.problem import ProblemProtocol, validate_measurement
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics
from mcmcscan.kernels.metropolis import AnnealedMetropolisKernel, AnnealingSchedule
from mcmcscan.proposals.gaussianproposal import EnsembleGaussianProposal
from mcmcscan.utils.logging import ScanLogger
from mcmcscan.utils.tools import as_column

logger = ScanLogger.get_logger(__name__)


class ScanStatus(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    TERMINATED = "terminated"


class AdaptiveScan:
    """
    Adaptive Metropolis-Hastings scan over an ensemble of parallel chains.

    Every step picks one chain at random and proposes a move from its current
    sample with a Gaussian shaped by the covariance of the current samples of
    all chains. The acceptance ratio accounts for the change of that covariance
    and anneals the likelihood ratio during the first half of the burn-in.

    Attributes:
        problem (ProblemProtocol): Supplies parameter validity and measurements.
        dim (int): Dimension of the parameter space.
        config (ScanConfig): Scan settings.
        kernel (AnnealedMetropolisKernel): Transition kernel of the scan.

    Examples:
        >>> config = ScanConfig(max_steps=10000, burn_fraction=0.1, num_chains=10)
        >>> with AdaptiveScan(problem, dim=3, config=config) as scan:
        ...     scan.initialize(seeds)
        ...     acceptance_rate = scan.run()
    """

    def __init__(self, problem: ProblemProtocol, dim: int, config: ScanConfig, rng: Optional[np.random.Generator] = None):

        if not isinstance(problem, ProblemProtocol):
            raise TypeError("problem must implement is_valid and measure.")
        if dim <= 0:
            raise InvalidArgumentError(f"dimension must be positive, got {dim}")
        # More chains than dimensions, or the covariance is singular by construction
        if config.num_chains <= dim:
            raise InvalidArgumentError(
                f"need more chains than dimensions, got {config.num_chains} chains for {dim} dimensions"
            )

        self.problem = problem
        self.dim = dim
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.schedule = AnnealingSchedule(max_steps=config.max_steps, burn_fraction=config.burn_fraction)
        self.proposal = EnsembleGaussianProposal(problem, scale=config.scale)
        self.kernel = AnnealedMetropolisKernel(self.proposal, self.schedule)

        self._chains: List[Chain] = []
        self._statistics: Optional[EnsembleStatistics] = None
        self._num_steps = 0
        self._num_accepted = 0
        self._status = ScanStatus.UNINITIALIZED

    # ==================== Introspection ====================
    @property
    def status(self) -> ScanStatus:
        return self._status

    @property
    def chains(self) -> Tuple[Chain, ...]:
        return tuple(self._chains)

    @property
    def statistics(self) -> Optional[EnsembleStatistics]:
        return self._statistics

    @property
    def num_chains(self) -> int:
        return self.config.num_chains

    @property
    def max_steps(self) -> int:
        return self.config.max_steps

    @property
    def num_steps(self) -> int:
        return self._num_steps

    @property
    def num_accepted(self) -> int:
        return self._num_accepted

    @property
    def acceptance_rate(self) -> float:
        return self._num_accepted / self._num_steps if self._num_steps else 0.0

    def lambda_(self) -> float:
        """Annealing exponent at the current step count."""
        return self.schedule(self._num_steps)

    # ==================== Lifecycle ====================
    def initialize(self, seeds: Sequence[Tuple[np.ndarray, str]]) -> None:
        """
        Seed the chains and compute the ensemble statistics.

        Parameters:
        ----------
            seeds: One (parameters, sink) pair per chain, as produced by a
                chain seed supplier.

        Raises:
        -------
            InvalidArgumentError: If the seeds are malformed or invalid, share a
                sink, or measure to vectors of different lengths.
            SinkUnavailableError: If a chain sink cannot be opened.
            NotPositiveDefiniteError: If the seeds span a degenerate ensemble.
        """
        if self._status is not ScanStatus.UNINITIALIZED:
            raise RuntimeError(f"scan is already {self._status.value}")
        if seeds is None or len(seeds) != self.num_chains:
            raise InvalidArgumentError(
                f"expected {self.num_chains} chain seeds, got {0 if seeds is None else len(seeds)}"
            )

        # Each chain owns its sink exclusively
        sink_paths = [os.path.abspath(sink) if sink else sink for _, sink in seeds]
        if len(set(sink_paths)) != len(sink_paths):
            raise InvalidArgumentError("chain seeds must name distinct sinks")

        samples = []
        num_measurements = None
        for i_chain, (parameters, sink) in enumerate(seeds):
            if parameters is None:
                raise InvalidArgumentError(f"chain seed {i_chain + 1} is null")
            parameters = as_column(parameters)
            if parameters.shape[0] != self.dim:
                raise InvalidArgumentError(
                    f"chain seed {i_chain + 1} has dimension {parameters.shape[0]}, expected {self.dim}"
                )
            if not self.problem.is_valid(parameters):
                raise InvalidArgumentError(f"chain seed {i_chain + 1} has invalid parameters")
            measurements, likelihood = validate_measurement(
                self.problem.measure(parameters), num_measurements
            )
            num_measurements = measurements.size
            samples.append((Sample(parameters, measurements, likelihood), sink))

        # The covariance check comes before any sink is touched
        statistics = EnsembleStatistics.from_samples([sample for sample, _ in samples])

        self._chains = [Chain(sample, sink, self.config.buffer_size) for sample, sink in samples]
        self._statistics = statistics
        self._status = ScanStatus.READY
        logger.info("Initialized %d chains in %d dimensions", self.num_chains, self.dim)

    def step(self) -> bool:
        """
        Run one step of the scan.

        Returns:
        -------
            accepted (bool): Whether the trial sample replaced the current one.
        """
        if self._status not in (ScanStatus.READY, ScanStatus.RUNNING):
            raise RuntimeError(f"cannot step a scan that is {self._status.value}")
        if self._num_steps >= self.max_steps:
            raise RuntimeError("scan has already reached max_steps")
        self._status = ScanStatus.RUNNING

        # The annealing exponent uses the count including this step; the
        # counter itself only advances once the trial has been evaluated
        step = self._num_steps + 1

        chain_to_update = int(self.rng.integers(self.num_chains))
        chain = self._chains[chain_to_update]
        current = chain.current_sample

        trial = self.kernel.propose(current, self._statistics, self.rng)

        try:
            trial_statistics = self._statistics.replace_member(current, trial, self.num_chains)
        except NotPositiveDefiniteError:
            logger.debug("Step %d: trial would break positive definiteness, rejected", step)
            trial_statistics = None

        accepted = False
        if trial_statistics is not None:
            ar = self.kernel.acceptance_ratio(current, trial, self._statistics, trial_statistics, step)
            accepted = self.rng.random() <= ar

        if accepted:
            self._statistics = trial_statistics
            self._num_accepted += 1
            next_sample = trial
        else:
            next_sample = current

        self._num_steps = step
        try:
            chain.append(next_sample)
        except SinkUnavailableError:
            logger.warning("Error flushing chain %d, will try again next time", chain_to_update + 1)

        return accepted

    def run(self) -> float:
        """
        Run the scan until max_steps steps have been taken.

        Returns:
        -------
            acceptance_rate (float): Fraction of accepted steps in this run.
        """
        if self._status not in (ScanStatus.READY, ScanStatus.RUNNING):
            raise RuntimeError(f"cannot run a scan that is {self._status.value}")

        steps_before = self._num_steps
        accepted_before = self._num_accepted

        while self._num_steps < self.max_steps:
            self.step()
            if self._num_steps % self.config.print_iteration == 0:
                logger.info("Iteration %d/%d", self._num_steps, self.max_steps)

        steps_run = self._num_steps - steps_before
        acceptance_rate = (self._num_accepted - accepted_before) / steps_run if steps_run else 0.0
        logger.info("Finished %d steps, acceptance rate %.3f", steps_run, acceptance_rate)
        return acceptance_rate

    def close(self) -> None:
        """
        Flush every chain completely, including its current sample.

        All chains are tried even if one of them fails; the first failure is
        raised afterwards and the scan stays open so close() can be retried.
        """
        if self._status is ScanStatus.TERMINATED:
            return

        failure = None
        for i_chain, chain in enumerate(self._chains):
            try:
                chain.flush_all()
            except SinkUnavailableError as exc:
                logger.warning("Error flushing chain %d at teardown", i_chain + 1)
                if failure is None:
                    failure = exc
        if failure is not None:
            raise failure

        self._status = ScanStatus.TERMINATED

    def __enter__(self) -> "AdaptiveScan":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
