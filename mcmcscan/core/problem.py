"""
Problem interfaces for the ensemble scan.

This module provides the ProblemProtocol that every scanned problem must
implement: a validity predicate over the parameter space and a measurement
function returning the measurements and likelihood of a point. Measurements
are validated automatically when the scan evaluates a point.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError


@runtime_checkable
class ProblemProtocol(Protocol):
    """
    Protocol defining the required interface for scanned problems.

    Both methods receive a parameter vector of shape (d, 1).

    ``is_valid`` must be pure: it is called repeatedly while rejection-sampling
    trial points over the support of the problem.

    ``measure`` may be expensive. It is called once per valid trial point and
    returns a tuple ``(measurements, likelihood)`` with a non-empty measurement
    vector and a non-negative likelihood.

    Examples:
        Class::

            class Box:
                def is_valid(self, params: np.ndarray) -> bool:
                    return bool(np.all(np.abs(params) <= 10.0))

                def measure(self, params: np.ndarray):
                    r = float(np.linalg.norm(params))
                    return np.array([r]), float(np.exp(-0.5 * r ** 2))

        Functions::

            problem = FunctionalProblem(is_valid=lambda p: True,
                                        measure=lambda p: (p.ravel(), 1.0))
    """

    def is_valid(self, params: np.ndarray) -> bool:
        """Whether the parameters lie in the valid region of the space."""
        ...

    def measure(self, params: np.ndarray) -> Tuple[np.ndarray, float]:
        """Measurements and likelihood at the parameters."""
        ...


class FunctionalProblem:
    """Problem assembled from an injected pair of plain functions."""

    def __init__(
        self,
        is_valid: Callable[[np.ndarray], bool],
        measure: Callable[[np.ndarray], Tuple[Any, float]],
    ):
        if not callable(is_valid) or not callable(measure):
            raise TypeError("is_valid and measure must be callable.")
        self._is_valid = is_valid
        self._measure = measure

    def is_valid(self, params: np.ndarray) -> bool:
        return bool(self._is_valid(params))

    def measure(self, params: np.ndarray) -> Tuple[Any, float]:
        return self._measure(params)


def validate_measurement(output: Any, num_measurements: Optional[int] = None) -> Tuple[np.ndarray, float]:
    """
    Validate that a measurement result satisfies ProblemProtocol.

    Args:
        output: Value returned by ``ProblemProtocol.measure``.
        num_measurements: Expected length of the measurement vector, if known.

    Returns:
        The measurements as a 1-D float array and the likelihood as a float.

    Raises:
        TypeError: If output is not a (measurements, likelihood) pair.
        InvalidArgumentError: If the measurements are empty or of the wrong
            length, or the likelihood is negative or not a number.
    """
    if not isinstance(output, tuple) or len(output) != 2:
        raise TypeError(
            f"measure must return a (measurements, likelihood) tuple, "
            f"got {type(output).__name__}."
        )

    measurements, likelihood = output
    if measurements is None:
        raise InvalidArgumentError("measure returned null measurements")
    measurements = np.asarray(measurements, dtype=float).ravel()
    if measurements.size == 0:
        raise InvalidArgumentError("measure returned empty measurements")
    if num_measurements is not None and measurements.size != num_measurements:
        raise InvalidArgumentError(
            f"measure returned {measurements.size} measurements, expected {num_measurements}"
        )

    likelihood = np.asarray(likelihood, dtype=float)
    if likelihood.size != 1:
        raise InvalidArgumentError(
            f"likelihood must be a scalar, got shape {likelihood.shape}"
        )
    likelihood = likelihood.item()
    if np.isnan(likelihood) or likelihood < 0.0:
        raise InvalidArgumentError(f"likelihood must be non-negative, got {likelihood}")

    return measurements, likelihood
