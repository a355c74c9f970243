"""
lmbeis.util

Project utilities: overflow-safe hyperbolic ratios and input shaping.

The hyperbolic ratios take a complex argument with non-negative real part
(principal square roots of impedance ratios) and a position 0 <= a <= 1.
They are written with decaying exponentials so that large arguments (high
frequency) do not overflow, and with expm1 so that small arguments do not
cancel. A Taylor series near zero makes the DC limit (s = 0) exact.
"""

import numpy as np

from lmbeis import config


def as_vector(x, dtype=float):
    """
    Flatten a scalar, row, or column sequence to a 1-D numpy array.
    """
    return np.asarray(x, dtype=dtype).ravel()


def read_only(value):
    """
    Return a write-protected copy of an array; other values pass through.
    """
    if isinstance(value, np.ndarray):
        value = value.copy()
        value.setflags(write=False)
    return value


def _small_or_exact(z, series, exact, threshold=config.SMALL_ARG):
    z = np.asarray(z, dtype=complex)
    small = np.abs(z) < threshold
    with np.errstate(all='ignore'):
        return np.where(small, series(z), exact(z))


def sinh_ratio(a, nu):
    """
    sinh(a*nu) / sinh(nu)
    """
    def exact(z):
        return np.exp((a - 1)*z) * np.expm1(-2*a*z) / np.expm1(-2*z)

    def series(z):
        return a * (1 + (a**2 - 1)*z**2/6)

    return _small_or_exact(nu, series, exact)


def cosh_ratio(a, nu):
    """
    nu * cosh(a*nu) / sinh(nu)
    """
    def exact(z):
        return -z * np.exp((a - 1)*z) * (2 + np.expm1(-2*a*z)) / np.expm1(-2*z)

    def series(z):
        return 1 + (a**2/2 - 1/6)*z**2

    return _small_or_exact(nu, series, exact)


def cosh_integral(a, nu):
    """
    (cosh(a*nu) - 1) / (nu * sinh(nu)) = 2 sinh(a*nu/2)^2 / (nu * sinh(nu))
    """
    def exact(z):
        return -np.exp((a - 1)*z) * np.expm1(-a*z)**2 / np.expm1(-2*z) / z

    def series(z):
        return a**2/2 + (a**4/24 - a**2/12)*z**2

    return _small_or_exact(nu, series, exact)


def tanhc(z):
    """
    tanh(z) / z, equal to 1 at z = 0.
    """
    def exact(z):
        e = np.expm1(-2*z)
        return -e / (2 + e) / z

    def series(z):
        return 1 - z**2/3

    return _small_or_exact(z, series, exact)


# Taylor coefficients of b*coth(b) - 1 in powers of b^2.
_EXCESS_SERIES = (1/3, -1/45, 2/945, -1/4725, 2/93555, -1382/638512875)


def tanh_excess(b):
    """
    (b - tanh(b)) / tanh(b) = b*coth(b) - 1, which vanishes like b^2/3 at
    b = 0.
    """
    def exact(z):
        e = np.expm1(-2*z)
        return -z * (2 + e) / e - 1

    def series(z):
        z2 = z**2
        return z2 * np.polyval(_EXCESS_SERIES[::-1], z2)

    return _small_or_exact(b, series, exact, config.EXCESS_SERIES_ARG)
