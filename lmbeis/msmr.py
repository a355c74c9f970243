"""
lmbeis.msmr

Multi-species multi-reaction (MSMR) open-circuit potential and kinetics
of an intercalation electrode.

Each gallery j holds a share X_j of the electrode capacity and fills
according to

    x_j = X_j / (1 + exp(f (U - U0_j) / omega_j)),   theta = sum_j x_j,

with f = F/(RT). The OCP U(theta) is the inverse of this relation and is
found by root-finding. Linearized Butler-Volmer kinetics of each gallery
give a charge-transfer resistance Rct_j = 1/(f i0_j); the galleries share
one interface, so they combine in parallel.
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy.special import expit

from lmbeis import config
from lmbeis.constants import thermal_factor, zero_Celsius
from lmbeis.errors import ConfigurationError, NonConvergenceError
from lmbeis.rootfind import solve_bracketed
from lmbeis.util import as_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OCPData:
    """
    OCP evaluated at a vector of lithiation points. Reusable as a cache
    while the MSMR parameters and temperature stay unchanged; nothing
    checks that they did.
    """
    theta: np.ndarray       # lithiation setpoints (n,)
    Uocp: np.ndarray        # open-circuit potential [V] (n,)
    xj: np.ndarray          # gallery partial lithiations (J, n)
    TdegC: float
    iterations: np.ndarray  # root-find iterations per setpoint (n,)


@dataclass(frozen=True)
class ChargeTransferData:
    Rct: np.ndarray   # total charge-transfer resistance [Ohm] (n,)
    Rctj: np.ndarray  # per-gallery charge-transfer resistance [Ohm] (J, n)
    i0j: np.ndarray   # per-gallery exchange current [A] (J, n)
    Uocp: np.ndarray  # (n,)
    xj: np.ndarray    # (J, n)


class MSMR:
    """
    MSMR model of one electrode.

    :param U0: Standard potential of each gallery [V].
    :param X: Capacity share of each gallery; must sum to 1.
    :param omega: Ideality factor of each gallery; must be positive.
    :param k0: Kinetic rate constant [A], scalar or one per gallery.
    :param alpha: Charge-transfer symmetry factor, scalar or one per gallery.
    """

    def __init__(self, U0, X, omega, k0=1.0, alpha=0.5):
        self.U0 = as_vector(U0)
        self.J = self.U0.size
        self.X = self._per_gallery('X', X)
        self.omega = self._per_gallery('omega', omega)
        self.k0 = self._per_gallery('k0', k0)
        self.alpha = self._per_gallery('alpha', alpha)

        if self.J == 0:
            raise ConfigurationError("MSMR model needs at least one gallery.")
        if np.any(self.omega <= 0):
            raise ConfigurationError(f"MSMR ideality factors must be positive, got omega={self.omega.tolist()}.")
        if np.any(self.X <= 0):
            raise ConfigurationError(f"MSMR capacity shares must be positive, got X={self.X.tolist()}.")
        if not np.isclose(self.X.sum(), 1.0, rtol=config.MSMR_CAPACITY_RTOL, atol=0):
            raise ConfigurationError(f"MSMR capacity shares must sum to 1, got sum(X)={self.X.sum()}.")

    def _per_gallery(self, name, value):
        value = as_vector(value)
        if value.size == 1:
            return np.full(self.J, value[0])
        if value.size != self.J:
            raise ConfigurationError(
                f"MSMR parameter '{name}' has {value.size} entries but there are {self.J} galleries."
            )
        return value

    @classmethod
    def from_params(cls, pos):
        """
        Build from the resolved parameters of the positive electrode.
        """
        return cls(pos.U0, pos.X, pos.omega, pos.k0, pos.alpha)

    @property
    def Xtotal(self):
        return float(self.X.sum())

    def _fill(self, U, f):
        # Fractional filling of each gallery, shape (J, n).
        return expit(-f * (U[np.newaxis, :] - self.U0[:, np.newaxis]) / self.omega[:, np.newaxis])

    def lithiation(self, U, TdegC: float = config.DEFAULT_TDEGC):
        """
        Total and per-gallery lithiation at potential(s) U [V].

        :return: (theta, xj) with shapes (n,) and (J, n).
        """
        U = as_vector(U)
        f = thermal_factor(zero_Celsius + TdegC)
        xj = self.X[:, np.newaxis] * self._fill(U, f)
        return xj.sum(axis=0), xj

    def dUocp(self, U, TdegC: float = config.DEFAULT_TDEGC):
        """
        Slope of the OCP, dU/dtheta [V], at potential(s) U [V].
        """
        U = as_vector(U)
        f = thermal_factor(zero_Celsius + TdegC)
        p = self._fill(U, f)
        dtheta = -f * np.sum(self.X[:, np.newaxis] * p * (1 - p) / self.omega[:, np.newaxis], axis=0)
        with np.errstate(divide='ignore'):
            return 1 / dtheta

    def ocp(self, theta, TdegC: float = config.DEFAULT_TDEGC) -> OCPData:
        """
        Open-circuit potential at the lithiation setpoint(s) theta.

        Each setpoint is an independent root-find of lithiation(U) = theta.
        The endpoints theta = 0 and theta = sum(X) (or exactly 1) map to
        U = +inf and U = -inf respectively.

        :raises NoBracketError: theta lies outside [0, sum(X)].
        :raises MaxIterationsError: root-find did not converge.
        """
        theta = as_vector(theta)
        T = zero_Celsius + TdegC
        f = thermal_factor(T)

        Uocp = np.empty_like(theta)
        iterations = np.zeros(theta.shape, dtype=int)
        empty = theta == 0
        full = (theta == self.Xtotal) | (theta == 1.0)
        Uocp[empty] = np.inf
        Uocp[full] = -np.inf
        interior, = np.nonzero(~(empty | full))

        if interior.size:
            target = theta[interior]
            width = config.MSMR_BRACKET_WIDTH * self.omega.max() / f
            Umin = self.U0.min() - width
            Umax = self.U0.max() + width

            def total_lithiation(U):
                return float(np.dot(self.X, expit(-f * (U - self.U0) / self.omega)))

            try:
                result = solve_bracketed(total_lithiation, target, Umin, Umax)
            except NonConvergenceError as err:
                raise type(err)(
                    f"MSMR OCP at theta={target[list(err.indices)].tolist()}: {err.message}",
                    interior[list(err.indices)],
                ) from err
            Uocp[interior] = result.root
            iterations[interior] = result.iterations
            logger.debug(
                "MSMR OCP solved at %d setpoint(s), %d iteration(s) max.",
                interior.size, result.max_iterations,
            )

        _, xj = self.lithiation(Uocp, TdegC)
        return OCPData(theta, Uocp, xj, TdegC, iterations)

    def rct(self, ocp_data: OCPData, TdegC: float = None) -> ChargeTransferData:
        """
        Charge-transfer resistance at the equilibrium potentials in
        ocp_data. The gallery lithiations are recomputed from the cached
        potentials with this model's parameters.

        :param ocp_data: Cached OCP (see ocp()).
        :param TdegC: Temperature [degC]. DEFAULT ocp_data.TdegC.
        """
        if TdegC is None:
            TdegC = ocp_data.TdegC
        U = as_vector(ocp_data.Uocp)
        f = thermal_factor(zero_Celsius + TdegC)
        p = self._fill(U, f)
        q = expit(f * (U[np.newaxis, :] - self.U0[:, np.newaxis]) / self.omega[:, np.newaxis])
        wa = (self.omega * self.alpha)[:, np.newaxis]
        wc = (self.omega * (1 - self.alpha))[:, np.newaxis]
        i0j = self.k0[:, np.newaxis] * p**wa * q**wc
        with np.errstate(divide='ignore'):
            Rctj = 1 / (f * i0j)
            Rct = 1 / np.sum(1 / Rctj, axis=0)
        return ChargeTransferData(Rct, Rctj, i0j, U, self.X[:, np.newaxis] * p)
