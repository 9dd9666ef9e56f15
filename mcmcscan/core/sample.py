"""
Sample representation for the ensemble scan.

This module provides the Sample dataclass which records one evaluated point of
the parameter space: the parameters, the measurements computed there, and the
likelihood of the point.
"""

from dataclasses import dataclass

import numpy as np

from mcmcscan.core.errors import InvalidArgumentError


def _as_readonly(values, name: str, column: bool) -> np.ndarray:
    """Read-only float copy of a vector input."""
    if values is None:
        raise InvalidArgumentError(f"input {name} is null")
    try:
        array = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"input {name} is not numeric") from exc
    if array.size == 0:
        raise InvalidArgumentError(f"input {name} is empty")
    if array.ndim > 1 and sum(n > 1 for n in array.shape) > 1:
        raise InvalidArgumentError(
            f"input {name} must be a vector, got shape {array.shape}"
        )
    array = array.reshape(-1, 1) if column else array.reshape(-1)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Sample:
    """
    One evaluated point in the parameter space.

    Samples are immutable. The constructor copies its inputs and the stored
    arrays are read-only. Two samples with identical contents are still two
    distinct entities: equality and hashing are by identity, since a chain
    repeats the very same Sample object when the walker stays in place.

    Attributes:
        parameters (np.ndarray):
            Parameter vector, stored as a column vector of shape (d, 1).

        measurements (np.ndarray):
            Measurement vector computed at the parameters, shape (m,).

        likelihood (float):
            Likelihood of the point. Must be non-negative.

    Examples:
        >>> sample = Sample(
        ...     parameters=np.array([[1.0], [2.0]]),
        ...     measurements=np.array([0.5, 0.1, 3.0]),
        ...     likelihood=0.2,
        ... )
        >>> sample.parameters.shape
        (2, 1)
    """

    parameters: np.ndarray
    measurements: np.ndarray
    likelihood: float

    def __post_init__(self) -> None:
        parameters = _as_readonly(self.parameters, "parameters", column=True)
        measurements = _as_readonly(self.measurements, "measurements", column=False)

        try:
            likelihood = np.asarray(self.likelihood, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError("input likelihood is not a number") from exc
        if likelihood.size != 1:
            raise InvalidArgumentError("input likelihood is not a scalar")
        likelihood = likelihood.item()
        if np.isnan(likelihood):
            raise InvalidArgumentError("input likelihood is NaN")
        if likelihood < 0.0:
            raise InvalidArgumentError("input likelihood is negative")

        object.__setattr__(self, "parameters", parameters)
        object.__setattr__(self, "measurements", measurements)
        object.__setattr__(self, "likelihood", likelihood)

    @property
    def dimension(self) -> int:
        """Number of parameters d."""
        return self.parameters.shape[0]

    @property
    def num_measurements(self) -> int:
        """Number of measurements m."""
        return self.measurements.shape[0]

    def __repr__(self) -> str:
        return (
            f"Sample(dimension={self.dimension}, "
            f"num_measurements={self.num_measurements}, "
            f"likelihood={self.likelihood:.4g})"
        )
