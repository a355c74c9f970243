"""
lmbeis.errors

Exception hierarchy for the toolkit.
"""

import numpy as np


class LMBError(Exception):
    """
    Base class for all errors raised by the toolkit.
    """


class ConfigurationError(LMBError, ValueError):
    """
    A parameter, region, temperature-function kind or option is missing
    or malformed.
    """


class NonConvergenceError(LMBError, ArithmeticError):
    """
    A root-find failed for one or more setpoints.
    """

    def __init__(self, message, indices=()):
        self.message = message
        self.indices = tuple(int(i) for i in np.atleast_1d(indices))
        super().__init__(f"{message} (setpoint indices: {list(self.indices)})")


class NoBracketError(NonConvergenceError):
    """
    The function does not change sign over the search interval.
    """


class MaxIterationsError(NonConvergenceError):
    """
    The root-finder ran out of iterations before meeting its tolerance.
    """
