"""
Scan configuration.
"""

from dataclasses import dataclass
from typing import Optional

from mcmcscan.core.errors import InvalidArgumentError


@dataclass(frozen=True)
class ScanConfig:
    """
    Settings of one adaptive ensemble scan.

    Attributes:
        max_steps (int):
            Total number of steps the scan runs for. Must be positive.

        burn_fraction (float):
            Fraction of max_steps treated as burn-in, in [0, 1]. The annealing
            exponent ramps up to 1 over the first half of the burn-in.

        num_chains (int):
            Number of parallel chains. Must exceed the parameter dimension,
            which is checked by the scan itself.

        buffer_size (int):
            Number of buffered samples that triggers a chain flush. Default: 25.

        print_iteration (int):
            Number of steps between progress log messages. Default: 1000.

        seed (Optional[int]):
            Seed of the scan's random generator. Default: None (fresh entropy).

        scale (float):
            Numerator of the proposal scale factor f = scale / sqrt(d).
            Default: 2.381.
    """

    max_steps: int
    burn_fraction: float
    num_chains: int
    buffer_size: int = 25
    print_iteration: int = 1000
    seed: Optional[int] = None
    scale: float = 2.381

    def __post_init__(self) -> None:
        if self.max_steps <= 0:
            raise InvalidArgumentError(f"max_steps must be positive, got {self.max_steps}")
        if not 0.0 <= self.burn_fraction <= 1.0:
            raise InvalidArgumentError(
                f"burn_fraction must be in [0, 1], got {self.burn_fraction}"
            )
        if self.num_chains <= 0:
            raise InvalidArgumentError(f"num_chains must be positive, got {self.num_chains}")
        if self.buffer_size <= 0:
            raise InvalidArgumentError("cannot have zero buffer size")
        if self.print_iteration <= 0:
            raise InvalidArgumentError(
                f"print_iteration must be positive, got {self.print_iteration}"
            )
        if not self.scale > 0.0:
            raise InvalidArgumentError(f"scale must be positive, got {self.scale}")
