"""
lmbeis.tf

Closed-form transfer functions Variable(s)/Iapp(s) of the linearized
lumped-parameter LMB cell model.

Geometry (normalized coordinate x):
    x = 0       lithium-metal / electrolyte interface
    0 <= x < 2  electrolyte-only layers (dll + sep, or eff for half cells)
    2 <= x <= 3 porous positive electrode
    x = 3       positive current collector

The electrolyte potential is referenced to phie(0) = 0. Interfacial
currents are positive when anodic (current leaving the solid), so that
phise = Z * ifdl at both interfaces.

Every tf_xx(s, x, setpoint) returns a complex array of shape
(len(x), len(s)).
"""

import numpy as np

from lmbeis.setpoint import Setpoint
from lmbeis.util import as_vector, sinh_ratio, cosh_ratio, cosh_integral, tanhc, tanh_excess

X_POS = 2.0  # start of the positive electrode
X_CC = 3.0   # current collector


def dl_admittance(s, Rdl, Cdl, nDL):
    """
    Admittance of a constant-phase double layer Cdl s^nDL in series with Rdl.
    """
    with np.errstate(all='ignore'):
        sn = np.where(s == 0, 0, s**nDL)
    return Cdl*sn / (1 + Rdl*Cdl*sn)


def electrolyte_factor(s, setpoint: Setpoint):
    """
    Multiplier 1 + W*tanh(sqrt(s taue))/sqrt(s taue) on the ionic
    resistance. Equals 1+W at DC and falls to 1 at high frequency as salt
    polarization no longer keeps up.
    """
    const = setpoint.params.const
    return 1 + const.W * tanhc(np.sqrt(s * const.taue))


def diffusion_admittance(s, setpoint: Setpoint):
    """
    Admittance of solid diffusion in the spherical particles of the
    positive electrode, 1/Zd. Behaves like s*Cint at low frequency,
    Cint = 3600 Q / (|theta100 - theta0| |dU/dtheta|).
    """
    pos = setpoint.params.pos
    Q = setpoint.params.const.Q
    b = np.sqrt(s / pos.Dsref)
    return (
        -10_800 * Q * pos.Dsref * tanh_excess(b)
        / setpoint.dUocp / abs(pos.theta100 - pos.theta0)
    )


class _Cell:
    """
    Frequency-dependent building blocks at one setpoint.
    """

    def __init__(self, s, setpoint: Setpoint):
        p = setpoint.params
        self.setpoint = setpoint
        self.s = s
        self.w = electrolyte_factor(s, setpoint)

        # Lithium-metal interface.
        self.Ydl_n = dl_admittance(s, p.neg.Rdl, p.neg.Cdl, p.neg.nDL)
        self.Yf_n = 1 / setpoint.Rct_n + 0*s
        self.Zn = p.neg.Rf + 1/(self.Yf_n + self.Ydl_n)

        # Positive-electrode interface (lumped over the electrode).
        self.Yd = diffusion_admittance(s, setpoint)
        self.Yf_p = self.Yd / (1 + setpoint.Rct_p*self.Yd)
        self.Ydl_p = dl_admittance(s, p.pos.Rdl, p.pos.Cdl, p.pos.nDL)
        Ypar = self.Yf_p + self.Ydl_p
        self.Yint = Ypar / (1 + p.pos.Rf*Ypar)

        # Transmission line.
        self.kappa = p.pos.kappa / self.w
        self.sigma = p.pos.sigma
        self.nu = np.sqrt((1/self.kappa + 1/self.sigma) * self.Yint)

    def phie_layers(self, x):
        rho = 0
        for layer in self.setpoint.params.layers:
            frac = np.clip((x - layer.x0) / (layer.x1 - layer.x0), 0, 1)
            rho = rho + frac / layer.kappa
        return -self.w * rho

    def ie_pos(self, z):
        k, sg, nu = self.kappa, self.sigma, self.nu
        return (k*(1 - sinh_ratio(z, nu)) + sg*sinh_ratio(1 - z, nu)) / (k + sg)

    def ifdl_pos(self, z):
        k, sg, nu = self.kappa, self.sigma, self.nu
        return -(k*cosh_ratio(z, nu) + sg*cosh_ratio(1 - z, nu)) / (k + sg)

    def phie_pos(self, z):
        k, sg, nu = self.kappa, self.sigma, self.nu
        ie_integral = (
            k*(z - cosh_integral(z, nu))
            + sg*(cosh_integral(1, nu) - cosh_integral(1 - z, nu))
        ) / (k + sg)
        return self.phie_layers(X_POS) - ie_integral/k

    def phise_pos(self, z):
        with np.errstate(divide='ignore', invalid='ignore'):
            return self.ifdl_pos(z) / self.Yint

    def if_pos(self, z):
        with np.errstate(divide='ignore', invalid='ignore'):
            return self.ifdl_pos(z) * self.Yf_p / (self.Yf_p + self.Ydl_p)

    def if_neg(self):
        return self.Yf_n / (self.Yf_n + self.Ydl_n)


def _assemble(name, s, x, setpoint, neg=None, layers=None, pos=None):
    """
    Evaluate a variable at each position, dispatching on the region the
    position falls in. `neg` handles x = 0 (interface), `layers` handles
    the electrolyte layers and `pos` the positive electrode (given z = x-2).
    """
    s = as_vector(s, complex)
    x = as_vector(x)
    at_neg = (x == 0) if neg is not None else np.zeros(x.shape, dtype=bool)
    in_pos = ((x >= X_POS) & (x <= X_CC)) if pos is not None else np.zeros(x.shape, dtype=bool)
    in_layers = (
        ((x >= 0) & (x < X_POS) & ~at_neg) if layers is not None
        else np.zeros(x.shape, dtype=bool)
    )
    invalid = ~(at_neg | in_layers | in_pos)
    if invalid.any():
        raise ValueError(f"{name} is not defined at x = {x[invalid].tolist()}.")

    cell = _Cell(s[np.newaxis, :], setpoint)
    out = np.empty((x.size, s.size), dtype=complex)
    if at_neg.any():
        out[at_neg] = neg(cell)
    if in_layers.any():
        out[in_layers] = layers(cell, x[in_layers][:, np.newaxis])
    if in_pos.any():
        out[in_pos] = pos(cell, x[in_pos][:, np.newaxis] - X_POS)
    return out


def tf_phie(s, x, setpoint: Setpoint):
    """
    Electrolyte potential, Phie(x,s)/Iapp(s) [Ohm]. Defined on [0, 3].
    """
    return _assemble(
        'Phie', s, x, setpoint,
        layers=lambda cell, x: cell.phie_layers(x),
        pos=lambda cell, z: cell.phie_pos(z),
    )


def tf_phise(s, x, setpoint: Setpoint):
    """
    Solid-electrolyte potential difference, Phise(x,s)/Iapp(s) [Ohm].
    Defined at x = 0 and on [2, 3].
    """
    return _assemble(
        'Phise', s, x, setpoint,
        neg=lambda cell: cell.Zn,
        pos=lambda cell, z: cell.phise_pos(z),
    )


def tf_phis(s, x, setpoint: Setpoint):
    """
    Solid potential, Phis(x,s)/Iapp(s) [Ohm]. Defined at x = 0 and on [2, 3].
    """
    return _assemble(
        'Phis', s, x, setpoint,
        neg=lambda cell: cell.Zn,
        pos=lambda cell, z: cell.phie_pos(z) + cell.phise_pos(z),
    )


def tf_ie(s, x, setpoint: Setpoint):
    """
    Ionic current in the electrolyte, Ie(x,s)/Iapp(s). Defined on [0, 3].
    """
    return _assemble(
        'Ie', s, x, setpoint,
        layers=lambda cell, x: np.ones(np.broadcast(x, cell.s).shape),
        pos=lambda cell, z: cell.ie_pos(z),
    )


def tf_is(s, x, setpoint: Setpoint):
    """
    Electronic current in the solid, Is(x,s)/Iapp(s). Defined at x = 0
    and on [2, 3].
    """
    return _assemble(
        'Is', s, x, setpoint,
        neg=lambda cell: np.ones(cell.s.shape),
        pos=lambda cell, z: 1 - cell.ie_pos(z),
    )


def tf_ifdl(s, x, setpoint: Setpoint):
    """
    Total interfacial (faradaic plus double-layer) current density,
    Ifdl(x,s)/Iapp(s). Defined at x = 0 and on [2, 3].
    """
    return _assemble(
        'Ifdl', s, x, setpoint,
        neg=lambda cell: np.ones(cell.s.shape),
        pos=lambda cell, z: cell.ifdl_pos(z),
    )


def tf_if(s, x, setpoint: Setpoint):
    """
    Faradaic current density, If(x,s)/Iapp(s). Defined at x = 0 and on
    [2, 3].
    """
    return _assemble(
        'If', s, x, setpoint,
        neg=lambda cell: cell.if_neg(),
        pos=lambda cell, z: cell.if_pos(z),
    )


def tf_idl(s, x, setpoint: Setpoint):
    """
    Double-layer current density, Idl(x,s)/Iapp(s). Defined at x = 0 and
    on [2, 3].
    """
    return _assemble(
        'Idl', s, x, setpoint,
        neg=lambda cell: 1 - cell.if_neg(),
        pos=lambda cell, z: cell.ifdl_pos(z) - cell.if_pos(z),
    )


def tf_thetass(s, x, setpoint: Setpoint):
    """
    Solid-surface lithiation of the positive electrode, Thetass(x,s)/Iapp(s)
    [1/A]. Defined on [2, 3].
    """
    pos_params = setpoint.params.pos
    Q = setpoint.params.const.Q

    def thetass(cell, z):
        b = np.sqrt(cell.s / pos_params.Dsref)
        with np.errstate(divide='ignore', invalid='ignore'):
            return (
                -cell.if_pos(z) * abs(pos_params.theta100 - pos_params.theta0)
                / 10_800 / Q / pos_params.Dsref / tanh_excess(b)
            )

    return _assemble('Thetass', s, x, setpoint, pos=thetass)


def tf_zcell(s, setpoint: Setpoint):
    """
    Cell impedance Zcell(s) = -Vcell(s)/Iapp(s) [Ohm], shape (len(s),).

    Vcell = Phis(3) - Phis(0) = Phie(3) + Phise(3) - Phise(0).
    """
    phise = tf_phise(s, [0, X_CC], setpoint)
    phie = tf_phie(s, X_CC, setpoint)
    vcell = -phise[0] + phie[0] + phise[1]
    return -vcell
