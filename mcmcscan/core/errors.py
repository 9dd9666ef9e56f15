"""
Error kinds raised by the scan components.
"""

import numpy as np


class InvalidArgumentError(ValueError):
    """Malformed constructor or call input. Fatal to the call, never retried."""


class SinkUnavailableError(OSError):
    """
    A chain could not open (or write to) its backing sink.

    Recoverable: the chain keeps its buffer intact and the flush is retried on
    the next append, explicit flush or teardown.
    """

    def __init__(self, message: str = "could not open file for chain buffer flushing"):
        super().__init__(message)


class NotPositiveDefiniteError(np.linalg.LinAlgError):
    """The ensemble covariance is (or would become) not positive definite."""

    def __init__(self, message: str = "covariance matrix is no longer positive definite"):
        super().__init__(message)
