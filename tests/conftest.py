"""Shared cell models for the test-suite."""

import numpy as np
import pytest

from lmbeis.cellparams import CellModel, Const, Negative, Positive, Layer, Fixed, Arrhenius


def make_model(half_cell=False, single_gallery=False, R0=None, name='Test LMB cell'):
    """Two-gallery NMC-like lithium-metal cell (single gallery: ideal Nernstian electrode)."""
    if single_gallery:
        msmr = dict(U0=Fixed(np.array([3.9])), X=Fixed(np.array([1.0])),
                    omega=Fixed(np.array([1.0])), k0=Fixed(np.array([0.8])))
    else:
        msmr = dict(U0=Fixed(np.array([4.16756, 4.02477])), X=Fixed(np.array([0.4, 0.6])),
                    omega=Fixed(np.array([1.12446, 1.71031])),
                    k0=Arrhenius(np.array([0.99738674, 0.71850266]), 30e3))

    const = Const(
        Q=Fixed(0.269177),
        W=Fixed(0.237798),
        taue=Fixed(25.4882),
        R0=None if R0 is None else Fixed(R0),
    )
    neg = Negative(
        k0=Arrhenius(1.895276, 40e3),
        alpha=Fixed(0.5),
        Rf=Fixed(0.002),
        Rdl=Fixed(0.000156245),
        Cdl=Fixed(0.0012672),
        nDL=Fixed(1.0),
    )
    pos = Positive(
        sigma=Fixed(241.896),
        kappa=Arrhenius(5.76159, 15e3),
        theta0=Fixed(0.999996),
        theta100=Fixed(0.10836198),
        Dsref=Arrhenius(0.00083125, 25e3),
        Rf=Fixed(0.047348),
        Rdl=Fixed(0.023674),
        Cdl=Fixed(0.023674),
        nDL=Fixed(0.95),
        alpha=Fixed(0.5),
        **msmr,
    )
    if half_cell:
        return CellModel(name, const, neg, pos, eff=Layer(Fixed(10.0), name='eff'))
    return CellModel(
        name, const, neg, pos,
        dll=Layer(Fixed(20.0), name='dll'),
        sep=Layer(Fixed(20.0), name='sep'),
    )


@pytest.fixture
def full_cell():
    return make_model()


@pytest.fixture
def half_cell():
    return make_model(half_cell=True)


@pytest.fixture
def nernst_cell():
    return make_model(single_gallery=True)


@pytest.fixture
def freq():
    """Test frequencies: 100 kHz to 0.3 mHz."""
    return np.logspace(5, -3.5, 60)
