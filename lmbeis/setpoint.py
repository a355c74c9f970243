"""
lmbeis.setpoint

Evaluate a cell model at one (state-of-charge, temperature) operating point.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from lmbeis import config
from lmbeis.cellparams.model import CellModel
from lmbeis.cellparams.resolve import ResolvedParameterSet, as_resolved
from lmbeis.constants import thermal_factor, zero_Celsius
from lmbeis.errors import ConfigurationError
from lmbeis.msmr import MSMR, OCPData
from lmbeis.util import read_only

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Setpoint:
    """
    Coefficients of the linearized cell model at one operating point.
    """
    params: ResolvedParameterSet
    soc: float        # state of charge [-], 0..1
    TdegC: float
    T: float          # [K]
    f: float          # F/(RT) [1/V]
    theta: float      # positive-electrode lithiation
    Uocp: float       # positive-electrode OCP [V]
    dUocp: float      # dUocp/dtheta [V]
    xj: np.ndarray    # gallery partial lithiations (J,)
    i0j: np.ndarray   # gallery exchange currents [A] (J,)
    Rctj: np.ndarray  # gallery charge-transfer resistances [Ohm] (J,)
    Rct_p: float      # positive-electrode charge-transfer resistance [Ohm]
    Rct_n: float      # negative-electrode charge-transfer resistance [Ohm]


def eval_setpoint(
    model: Union[CellModel, ResolvedParameterSet],
    soc: float,
    TdegC: float = config.DEFAULT_TDEGC,
    ocp_data: Optional[OCPData] = None,
) -> Setpoint:
    """
    Evaluate the cell model at a state of charge and temperature.

    :param model: Cell model or parameter values already resolved at TdegC.
    :param soc: Cell state of charge [-], 0 to 1.
    :param TdegC: Temperature [degC]. DEFAULT 25.
    :param ocp_data: Cached OCP at the lithiation corresponding to soc.
    :return: Setpoint
    """
    if not np.isscalar(soc) or isinstance(soc, (bool, str)):
        raise ConfigurationError(f"Expected scalar state of charge but got {soc!r}.")

    params = as_resolved(model, TdegC)
    T = zero_Celsius + TdegC
    f = thermal_factor(T)
    pos = params.pos
    theta = pos.theta0 + soc*(pos.theta100 - pos.theta0)

    msmr = MSMR.from_params(pos)
    if ocp_data is None:
        ocp_data = msmr.ocp(theta, TdegC)
    elif np.size(ocp_data.Uocp) != 1:
        raise ConfigurationError(
            f"Cached OCP holds {np.size(ocp_data.Uocp)} setpoints; a setpoint needs exactly one."
        )
    ct = msmr.rct(ocp_data, TdegC)
    Uocp = float(ct.Uocp[0])

    logger.debug("Setpoint soc=%g, %g degC: theta=%g, Uocp=%g V.", soc, TdegC, theta, Uocp)
    return Setpoint(
        params=params,
        soc=float(soc),
        TdegC=TdegC,
        T=T,
        f=f,
        theta=float(theta),
        Uocp=Uocp,
        dUocp=float(msmr.dUocp(Uocp, TdegC)[0]),
        xj=read_only(ct.xj[:, 0]),
        i0j=read_only(ct.i0j[:, 0]),
        Rctj=read_only(ct.Rctj[:, 0]),
        Rct_p=float(ct.Rct[0]),
        Rct_n=1 / f / params.neg.k0,
    )

