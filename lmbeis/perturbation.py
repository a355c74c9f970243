"""
lmbeis.perturbation

Baker-Verbrugge perturbation resistance of an LMB cell. Lumped-parameter
model.

The reduced-order perturbation approximation [1] models cell voltage as

    vcell(t) = Uocv(thetaAvg(t)) - iapp(t)*Rtotal(thetaAvg(t))

where Rtotal(theta) is the SOC-dependent perturbation resistance of the
cell. The approximation holds while iapp(t) appears constant on the scale
of the solid diffusion time Rs^2/Ds. thetaAvg(t) is the average lithiation
of the positive electrode ("absolute" SOC).

[1] Daniel R. Baker and Mark W. Verbrugge 2021 J. Electrochem. Soc. 168 050526
"""

import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Optional, Union

import numpy as np

from lmbeis import config
from lmbeis.cellparams.model import CellModel
from lmbeis.cellparams.resolve import ResolvedParameterSet, as_resolved
from lmbeis.constants import thermal_factor, zero_Celsius
from lmbeis.errors import ConfigurationError
from lmbeis.msmr import MSMR, OCPData
from lmbeis.util import as_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerturbationParts:
    """
    Components of the perturbation resistance.
    """
    R0: float             # SOC-invariant equivalent series resistance [Ohm]
    Rct_n: float          # negative-electrode charge transfer, part of R0 (NaN if R0 given) [Ohm]
    Rdiff: np.ndarray     # SOC-dependent solid-diffusion resistance [Ohm] (n,)
    Rct_p: np.ndarray     # positive-electrode charge transfer [Ohm] (n,)
    Rctj_p: Optional[np.ndarray] = None  # per-gallery charge transfer [Ohm] (J, n)


@dataclass(frozen=True)
class PerturbationResistance:
    Rtotal: np.ndarray    # (n,)
    parts: PerturbationParts
    U: np.ndarray         # OCP at each lithiation setpoint [V] (n,)
    param: dict = field(default_factory=dict)


def series_resistance(params: ResolvedParameterSet, f: float):
    """
    SOC-invariant series resistance R0 and the negative-electrode
    charge-transfer resistance included in it.

    :return: (R0, Rct_n); Rct_n is NaN when the model specifies R0 directly.
    """
    if params.const.R0 is not None:
        return float(params.const.R0), np.nan

    pos, neg = params.pos, params.neg
    Rct_n = 1 / f / neg.k0
    R_layers = sum(1 / layer.kappa for layer in params.layers)
    R0 = (
        (pos.Rf + Rct_n + neg.Rf) + 1/pos.sigma/3
        + (1 + params.const.W)*(1/pos.kappa/3 + R_layers)
    )
    return float(R0), float(Rct_n)


def diffusion_resistance(params: ResolvedParameterSet, theta, f: float):
    """
    Solid-diffusion resistance at each lithiation setpoint. Infinite at
    theta = 0 and theta = 1.
    """
    pos = params.pos
    with np.errstate(divide='ignore'):
        return (
            abs(pos.theta100 - pos.theta0) / f / params.const.Q / pos.Dsref
            / theta / (1 - theta) / 5 / 10_800
        )


def _check_lithiation(theta_avg):
    theta = np.asarray(theta_avg)
    if theta.dtype.kind not in 'iuf':
        raise ConfigurationError(f"Lithiation setpoints must be numeric, got dtype '{theta.dtype}'.")
    if theta.ndim > 2 or (theta.ndim == 2 and min(theta.shape) > 1):
        raise ConfigurationError(f"Lithiation setpoints must form a vector, got shape {theta.shape}.")
    return as_vector(theta)


def _check_options(TdegC, ocp_data, compute_rctj, n):
    if isinstance(TdegC, bool) or not isinstance(TdegC, Real):
        raise ConfigurationError(f"Option 'TdegC' must be a real scalar, got {TdegC!r}.")
    if ocp_data is not None:
        if not isinstance(ocp_data, OCPData):
            raise ConfigurationError(f"Option 'ocp_data' must be OCPData, got '{type(ocp_data).__name__}'.")
        if np.size(ocp_data.Uocp) != n:
            raise ConfigurationError(
                f"Option 'ocp_data' holds {np.size(ocp_data.Uocp)} setpoints but {n} were requested."
            )
    if not isinstance(compute_rctj, (bool, np.bool_)):
        raise ConfigurationError(f"Option 'compute_rctj' must be boolean, got {compute_rctj!r}.")


def get_perturbation_resistance(
    model: Union[CellModel, ResolvedParameterSet],
    theta_avg,
    *,
    TdegC: float = config.DEFAULT_TDEGC,
    ocp_data: Optional[OCPData] = None,
    compute_rctj: bool = False,
) -> PerturbationResistance:
    """
    Compute the perturbation resistance of an LMB cell at the average
    positive-electrode lithiation values theta_avg.

    :param model: Cell model, or parameter values already resolved at TdegC.
    :param theta_avg: Lithiation setpoints; scalar, row, or column sequence.
    :param TdegC: Temperature [degC]. DEFAULT 25.
    :param ocp_data: OCP already computed at theta_avg with the current MSMR
        parameters and temperature. Skips the root-find; a stale cache is
        not detected and yields wrong results.
    :param compute_rctj: Also return the per-gallery charge-transfer
        resistances. DEFAULT False.
    :return: PerturbationResistance; every vector is 1-D and aligned with
        the flattened theta_avg.
    """
    theta = _check_lithiation(theta_avg)
    _check_options(TdegC, ocp_data, compute_rctj, theta.size)

    params = as_resolved(model, TdegC)
    f = thermal_factor(zero_Celsius + TdegC)

    R0, Rct_n = series_resistance(params, f)
    Rdiff = diffusion_resistance(params, theta, f)

    msmr = MSMR.from_params(params.pos)
    if ocp_data is None:
        ocp_data = msmr.ocp(theta, TdegC)
    else:
        logger.debug("Using cached OCP at %d setpoint(s).", theta.size)
    ct = msmr.rct(ocp_data, TdegC)

    Rtotal = R0 + ct.Rct + Rdiff

    parts = PerturbationParts(
        R0=R0,
        Rct_n=Rct_n,
        Rdiff=Rdiff,
        Rct_p=ct.Rct,
        Rctj_p=ct.Rctj if compute_rctj else None,
    )
    return PerturbationResistance(
        Rtotal=Rtotal,
        parts=parts,
        U=ct.Uocp,
        param={'TdegC': TdegC, 'ocp_data': ocp_data, 'compute_rctj': compute_rctj},
    )
