"""
Runs one of the toy ensemble scans.

Usage:
    python examples/toyscan.py 1    # 3D Gaussian target point
    python examples/toyscan.py 2    # 2D ring around a centre point

Chain files are written to examples/toyscan<N>/.
"""

import argparse
import os

import numpy as np

from mcmcscan.core.config import ScanConfig
from mcmcscan.problems.toyscans import BOX_LOWER, BOX_UPPER, GaussianTargetProblem, RingProblem
from mcmcscan.samplers.ensemble_scan import AdaptiveScan
from mcmcscan.utils.logging import ScanLogger
from mcmcscan.utils.post_processing import get_parameters
from mcmcscan.utils.seeds import uniform_box_seeds


def build_problem(selection: int):
    if selection == 1:
        return GaussianTargetProblem(
            target_point=np.array([1.0, 1.0, 1.0]),
            uncertainties=np.array([0.1, 0.5, 1.0]),
        )
    return RingProblem(center_point=np.array([0.0, 0.0]), radius=5.0, uncertainty=0.5)


def main():
    parser = argparse.ArgumentParser(description="Run a toy ensemble MCMC scan.")
    parser.add_argument("scan", type=int, choices=[1, 2], help="toy scan to run")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args()

    logger = ScanLogger.get_logger("mcmcscan")

    config = ScanConfig(max_steps=10000, burn_fraction=0.1, num_chains=10, buffer_size=25, seed=args.seed)
    problem = build_problem(args.scan)
    output_dir = os.path.join("examples", f"toyscan{args.scan}")

    rng = np.random.default_rng(args.seed)
    seeds = uniform_box_seeds(
        config.num_chains, problem.dim, BOX_LOWER, BOX_UPPER,
        output_dir=output_dir, prefix=f"ToyScan{args.scan}", rng=rng,
    )

    with AdaptiveScan(problem, problem.dim, config, rng=rng) as scan:
        scan.initialize(seeds)
        acceptance_rate = scan.run()

    positions = get_parameters([sink for _, sink in seeds], burnin=config.burn_fraction)
    logger.info("Acceptance rate: %.3f", acceptance_rate)
    logger.info("Posterior mean: %s", np.array2string(positions.mean(axis=1), precision=3))


if __name__ == "__main__":
    main()
