"""
This script defines two toy problems for the ensemble scan.

GaussianTargetProblem: 3D scan for a single target point. The posterior is a
Gaussian centred on the target with the given per-axis uncertainties.

RingProblem: 2D scan for a circle of given radius around a centre point. The
posterior is a ring, which is handy for watching the chains move.

Both keep the chains inside the box [-10, 10] in every dimension.
"""

# Imports
import numpy as np

from mcmcscan.core.errors import InvalidArgumentError

BOX_LOWER = -10.0
BOX_UPPER = 10.0


def in_box(params: np.ndarray, lower: float = BOX_LOWER, upper: float = BOX_UPPER) -> bool:
    """Whether every component of params lies in [lower, upper]."""
    params = np.asarray(params)
    return bool(np.all((params >= lower) & (params <= upper)))


class GaussianTargetProblem:
    """
    Seeks out a single target point in a 3D parameter space.

    The measurements are the distance from the target and the polar and
    azimuthal angles (radians) of the displacement from the target.
    """

    dim = 3

    def __init__(self, target_point: np.ndarray, uncertainties: np.ndarray):
        target_point = np.asarray(target_point, dtype=float).reshape(-1, 1)
        uncertainties = np.asarray(uncertainties, dtype=float).reshape(-1, 1)
        if target_point.shape[0] != self.dim or uncertainties.shape[0] != self.dim:
            raise InvalidArgumentError("need 3d vectors")
        if np.any(uncertainties <= 0.0):
            raise InvalidArgumentError("uncertainties must be positive")
        self.target_point = target_point
        self.uncertainties = uncertainties

    def is_valid(self, params: np.ndarray) -> bool:
        return in_box(params)

    def measure(self, params: np.ndarray):
        displacement = np.asarray(params, dtype=float).reshape(-1, 1) - self.target_point
        dx, dy, dz = displacement.ravel()

        distance = float(np.sqrt(dx**2 + dy**2 + dz**2))
        theta = float(np.arccos(np.clip(dz / distance, -1.0, 1.0))) if distance > 0.0 else 0.0
        phi = float(np.arctan2(dy, dx))
        measurements = np.array([distance, theta, phi])

        likelihood = float(np.exp(-0.5 * np.sum((displacement / self.uncertainties) ** 2)))
        return measurements, likelihood


class RingProblem:
    """
    Seeks out a ring of given radius around a centre point in 2D.

    The likelihood is a Gaussian in the distance from the centre, with mean
    radius and standard deviation uncertainty. The measurements are the
    distance and the angle (radians, in [0, pi]) between the displacement
    and the first axis.
    """

    dim = 2

    def __init__(self, center_point: np.ndarray, radius: float, uncertainty: float):
        center_point = np.asarray(center_point, dtype=float).reshape(-1, 1)
        if center_point.shape[0] != self.dim or radius < 0.0 or uncertainty <= 0.0:
            raise InvalidArgumentError("invalid input to RingProblem")
        self.center_point = center_point
        self.radius = float(radius)
        self.uncertainty = float(uncertainty)

    def is_valid(self, params: np.ndarray) -> bool:
        return in_box(params)

    def measure(self, params: np.ndarray):
        displacement = np.asarray(params, dtype=float).reshape(-1, 1) - self.center_point
        dx, dy = displacement.ravel()

        distance = float(np.hypot(dx, dy))
        theta = float(np.arccos(np.clip(dx / distance, -1.0, 1.0))) if distance > 0.0 else 0.0
        measurements = np.array([distance, theta])

        likelihood = float(np.exp(-0.5 * ((distance - self.radius) / self.uncertainty) ** 2))
        return measurements, likelihood
