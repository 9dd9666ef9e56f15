"""
Chain seed suppliers.

A seed supplier produces, for every chain, an initial parameter vector and the
sink the chain writes to. Its output is what AdaptiveScan.initialize consumes.
"""

import os
from typing import List, Optional, Tuple, Union

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError

ArrayLike = Union[float, np.ndarray]


def chain_filename(prefix: str, i_chain: int) -> str:
    """Sink filename of the (0-based) i_chain-th chain; numbering is 1-based."""
    return f"{prefix}_chain{i_chain + 1}.dat"


def uniform_box_seeds(
    num_chains: int,
    dim: int,
    lower: ArrayLike,
    upper: ArrayLike,
    output_dir: str = ".",
    prefix: str = "scan",
    rng: Optional[np.random.Generator] = None,
) -> List[Tuple[np.ndarray, str]]:
    """
    Draw chain seeds uniformly inside a box.

    Parameters
    ----------
    num_chains : int
        Number of seeds to draw
    dim : int
        Dimension of the parameter space
    lower, upper : float or (d,) array
        Box bounds, per dimension or shared
    output_dir : str
        Directory the chain sinks are placed in; created if missing
    prefix : str
        Filename prefix of the chain sinks
    rng : np.random.Generator, optional
        Random generator; a fresh one is used if None

    Returns
    -------
    seeds : list of ((d, 1) array, str)
        Seed parameters and sink path of every chain
    """
    if num_chains <= 0 or dim <= 0:
        raise InvalidArgumentError("bad input to uniform_box_seeds()")

    lower = np.broadcast_to(np.asarray(lower, dtype=float).reshape(-1), (dim,)).reshape(-1, 1)
    upper = np.broadcast_to(np.asarray(upper, dtype=float).reshape(-1), (dim,)).reshape(-1, 1)
    if np.any(upper <= lower):
        raise InvalidArgumentError("upper bounds must exceed lower bounds")

    rng = rng if rng is not None else np.random.default_rng()
    os.makedirs(output_dir, exist_ok=True)

    seeds = []
    for i_chain in range(num_chains):
        # Expand [0, 1) onto [lower, upper)
        parameters = lower + (upper - lower) * rng.random((dim, 1))
        seeds.append((parameters, os.path.join(output_dir, chain_filename(prefix, i_chain))))

    return seeds
