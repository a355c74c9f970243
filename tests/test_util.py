"""Test the overflow-safe hyperbolic ratios."""

import numpy as np
import pytest

from lmbeis import config
from lmbeis.util import as_vector, sinh_ratio, cosh_ratio, cosh_integral, tanhc, tanh_excess


NU = np.array([2e-4, 5e-4 + 5e-4j, 0.01 + 0.02j, 0.5, 1.5 + 0.7j, 6.0 + 6.0j])
A = np.array([0.0, 0.3, 1.0])[:, np.newaxis]

# Arguments either side of the series crossovers.
NEAR_SMALL = np.array([5e-5, 9.9e-5, 1.01e-4, 2e-4, 1.1e-3, 0.05]) * np.exp(0.25j*np.pi)
NEAR_EXCESS = np.array([1.01e-3, 2e-3, 0.05, 0.0999, 0.1001, 0.15])


def excess_reference(b):
    """b*coth(b) - 1 from its Taylor series through b^14."""
    b2 = b**2
    coeffs = [1/3, -1/45, 2/945, -1/4725, 2/93555, -1382/638512875, 4/18243225]
    return sum(c * b2**(k + 1) for k, c in enumerate(coeffs))


# Reference forms free of cancellation at small arguments.
RATIOS = [
    (sinh_ratio, lambda a, nu: np.sinh(a*nu)/np.sinh(nu)),
    (cosh_ratio, lambda a, nu: nu*np.cosh(a*nu)/np.sinh(nu)),
    (cosh_integral, lambda a, nu: 2*np.sinh(a*nu/2)**2/(nu*np.sinh(nu))),
]


@pytest.mark.parametrize("func, direct", RATIOS)
def test_ratios_match_direct_form(func, direct):
    assert np.allclose(func(A, NU), direct(A, NU), rtol=1e-12, atol=1e-15)


@pytest.mark.parametrize("func, direct", RATIOS)
def test_ratios_accurate_across_series_crossover(func, direct):
    a = np.array([0.3, 1.0])[:, np.newaxis]
    assert np.allclose(func(a, NEAR_SMALL), direct(a, NEAR_SMALL), rtol=1e-13, atol=0)


def test_tanhc_accurate_across_series_crossover():
    assert np.allclose(tanhc(NEAR_SMALL), np.tanh(NEAR_SMALL)/NEAR_SMALL, rtol=1e-13, atol=0)


@pytest.mark.parametrize("rotation", [1.0, np.exp(0.25j*np.pi)])
def test_tanh_excess_accurate_across_series_crossover(rotation):
    b = NEAR_EXCESS * rotation
    assert np.allclose(tanh_excess(b), excess_reference(b), rtol=1e-12, atol=0)
    assert (abs(b) < config.EXCESS_SERIES_ARG).any()
    assert (abs(b) > config.EXCESS_SERIES_ARG).any()


def test_ratios_do_not_overflow():
    nu = np.array([800.0 + 800.0j, 1e5 + 1e5j])
    for func in (sinh_ratio, cosh_ratio, cosh_integral):
        assert np.all(np.isfinite(func(A, nu)))
    assert np.all(np.isfinite(tanhc(nu)))
    assert np.all(np.isfinite(tanh_excess(nu)))


def test_zero_argument_limits():
    assert sinh_ratio(0.4, 0.0) == pytest.approx(0.4)
    assert cosh_ratio(0.4, 0.0) == 1
    assert cosh_integral(1.0, 0.0) == 0.5
    assert tanhc(0.0) == 1
    assert tanh_excess(0.0) == 0


@pytest.mark.parametrize("z", [0.3, 2.0 + 1.0j, 20.0])
def test_tanh_forms(z):
    assert tanhc(z) == pytest.approx(np.tanh(z)/z, rel=1e-12)
    assert tanh_excess(z) == pytest.approx((z - np.tanh(z))/np.tanh(z), rel=1e-12)


def test_as_vector_flattens():
    assert as_vector(2.0).shape == (1,)
    assert as_vector([[1, 2, 3]]).shape == (3,)
    assert as_vector([[1], [2]]).dtype == float
