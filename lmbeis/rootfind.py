"""
lmbeis.rootfind

Bracketed root-finding for monotonic scalar equations func(x) = target,
solved independently for each target with Brent's method.
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy.optimize import root_scalar

from lmbeis import config
from lmbeis.errors import NoBracketError, MaxIterationsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootResult:
    root: np.ndarray        # converged abscissae
    iterations: np.ndarray  # iterations used per target

    @property
    def max_iterations(self):
        return int(self.iterations.max(initial=0))


def solve_bracketed(
    func,
    targets,
    lo: float,
    hi: float,
    xtol: float = config.ROOT_XTOL,
    rtol: float = config.ROOT_RTOL,
    maxiter: int = config.ROOT_MAXITER,
) -> RootResult:
    """
    Solve func(x) = target on [lo, hi] for each target.

    :param func: Scalar callable, continuous on [lo, hi].
    :param targets: Values to solve for (scalar or 1-D array).
    :param lo: Lower end of the search interval.
    :param hi: Upper end of the search interval.
    :param xtol: Absolute tolerance on x.
    :param rtol: Relative tolerance on x.
    :param maxiter: Maximum number of iterations per target.
    :return: RootResult
    :raises NoBracketError: func - target does not change sign over [lo, hi].
    :raises MaxIterationsError: tolerance not met within maxiter iterations.
    """
    targets = np.atleast_1d(np.asarray(targets, dtype=float))
    flo, fhi = func(lo), func(hi)

    bad, = np.nonzero(~(np.sign(flo - targets) * np.sign(fhi - targets) <= 0))
    if bad.size:
        raise NoBracketError("Function does not change sign over the search interval", bad)

    root = np.empty(targets.shape)
    iterations = np.zeros(targets.shape, dtype=int)
    failed = []
    for k, target in enumerate(targets):
        if flo == target:
            root[k] = lo
            continue
        if fhi == target:
            root[k] = hi
            continue
        sol = root_scalar(
            lambda x: func(x) - target,
            bracket=(lo, hi), method='brentq',
            xtol=xtol, rtol=rtol, maxiter=maxiter,
        )
        root[k] = sol.root
        iterations[k] = sol.iterations
        if not sol.converged:
            failed.append(k)

    if failed:
        raise MaxIterationsError(f"Root not found to tolerance within {maxiter} iterations", failed)

    result = RootResult(root, iterations)
    logger.debug(
        "Solved %d root(s); at most %d iteration(s).", root.size, result.max_iterations
    )
    return result
