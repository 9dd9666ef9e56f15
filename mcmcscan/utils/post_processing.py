"""Reading chain sink files back for analysis.

A sink holds one record per flushed sample: a line of parameters, a line of
measurements, a line with the likelihood, and a blank separator line.
"""
import os

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError

from typing import List, Optional, Sequence, Tuple, Union


def _parse_line(line: str, path: str, record: int) -> np.ndarray:
    try:
        return np.array([float(token) for token in line.split()], dtype=float)
    except ValueError as exc:
        raise InvalidArgumentError(f"{path}: record {record} is not numeric") from exc


def read_chain(path: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Load the samples a chain has flushed to its sink.

    Parameters:
    ----------
        path (str): Sink file of the chain.

    Returns:
    -------
        parameters (np.ndarray): (N, d) array, one row per sample.
        measurements (np.ndarray): (N, m) array, one row per sample.
        likelihoods (np.ndarray): (N,) array.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"The file {path} does not exist.")

    with open(path, "r") as f:
        blocks = [block for block in f.read().split("\n\n") if block.strip()]

    parameters, measurements, likelihoods = [], [], []
    for record, block in enumerate(blocks, start=1):
        lines = block.strip("\n").split("\n")
        if len(lines) != 3:
            raise InvalidArgumentError(
                f"{path}: record {record} has {len(lines)} lines, expected 3"
            )
        params = _parse_line(lines[0], path, record)
        meas = _parse_line(lines[1], path, record)
        like = _parse_line(lines[2], path, record)
        if like.size != 1:
            raise InvalidArgumentError(f"{path}: record {record} has no single likelihood")
        if parameters and (params.size != parameters[0].size or meas.size != measurements[0].size):
            raise InvalidArgumentError(f"{path}: record {record} changes the vector sizes")
        parameters.append(params)
        measurements.append(meas)
        likelihoods.append(like.item())

    if not parameters:
        return np.empty((0, 0)), np.empty((0, 0)), np.empty(0)

    return np.vstack(parameters), np.vstack(measurements), np.array(likelihoods)


def get_parameters(paths: Union[str, Sequence[str]], burnin: Optional[float] = 0.0) -> np.ndarray:
    """
    Stack the parameters of one or more chains, discarding burn-in.

    Parameters
    ----------
    paths : str or list of str
        Sink files of the chains.
    burnin : float, optional
        Fraction of each chain's samples to discard. Default is 0.

    Returns
    -------
    positions : np.ndarray
        2D numpy array of shape (d, N), where d is the number of dimensions and N is the number of samples.
    """
    if burnin < 0:
        raise ValueError("Burn-in must be a positive value.")
    if isinstance(paths, (str, os.PathLike)):
        paths = [paths]

    kept: List[np.ndarray] = []
    for path in paths:
        parameters, _, _ = read_chain(path)
        n_burnin = int(parameters.shape[0] * burnin)
        if parameters.shape[0] > n_burnin:
            kept.append(parameters[n_burnin:])

    if not kept:
        raise ValueError("No samples left after discarding burn-in.")

    return np.vstack(kept).T
