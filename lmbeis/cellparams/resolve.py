"""
lmbeis.cellparams.resolve

Resolve a cell model at a temperature, producing the flat set of parameter
values consumed by the MSMR, transfer-function and perturbation engines.
"""

import logging
from dataclasses import dataclass, fields, MISSING
from typing import NamedTuple, Optional, Union

import numpy as np

from lmbeis import config
from lmbeis.cellparams.model import CellModel, REGION_CLASSES, TEMPERATURE_FUNCTIONS
from lmbeis.constants import zero_Celsius
from lmbeis.errors import ConfigurationError
from lmbeis.util import read_only

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstValues:
    Q: float
    W: float
    taue: float
    R0: Optional[float] = None


@dataclass(frozen=True)
class NegativeValues:
    k0: float
    alpha: float
    Rf: float
    Rdl: float
    Cdl: float
    nDL: float


@dataclass(frozen=True)
class PositiveValues:
    sigma: float
    kappa: float
    theta0: float
    theta100: float
    Dsref: float
    Rf: float
    Rdl: float
    Cdl: float
    nDL: float
    U0: np.ndarray
    X: np.ndarray
    omega: np.ndarray
    k0: np.ndarray
    alpha: np.ndarray


@dataclass(frozen=True)
class LayerValues:
    kappa: float


VALUE_CLASSES = {
    'const': ConstValues,
    'neg': NegativeValues,
    'pos': PositiveValues,
    'sep': LayerValues,
    'dll': LayerValues,
    'eff': LayerValues,
}


class ElectrolyteLayer(NamedTuple):
    """
    Electrolyte-only layer spanning [x0, x1] in normalized coordinates.
    """
    name: str
    x0: float
    x1: float
    kappa: float


@dataclass(frozen=True)
class ResolvedParameterSet:
    """
    Parameter values of a cell model at one temperature.
    """
    TdegC: float
    const: ConstValues
    neg: NegativeValues
    pos: PositiveValues
    sep: Optional[LayerValues] = None
    dll: Optional[LayerValues] = None
    eff: Optional[LayerValues] = None

    @property
    def T(self):
        return zero_Celsius + self.TdegC

    @property
    def layers(self):
        """
        Electrolyte layers between the lithium-metal interface (x=0) and the
        porous electrode (x=2). A half cell lumps them into one `eff` layer.
        """
        if self.eff is not None:
            return (ElectrolyteLayer('eff', 0.0, 2.0, self.eff.kappa),)
        return (
            ElectrolyteLayer('dll', 0.0, 1.0, self.dll.kappa),
            ElectrolyteLayer('sep', 1.0, 2.0, self.sep.kappa),
        )


def resolve_parameter(region: str, name: str, param, TdegC: float):
    """
    Evaluate one parameter at temperature TdegC [degC].
    """
    if not isinstance(param, TEMPERATURE_FUNCTIONS):
        raise ConfigurationError(
            f"Parameter '{region}.{name}' has unrecognized temperature-function "
            f"kind '{type(param).__name__}'."
        )
    try:
        value = param(TdegC=TdegC)
    except ConfigurationError as err:
        raise ConfigurationError(f"Parameter '{region}.{name}' ({param.kind}): {err}") from err
    return read_only(value)


def check_regions(model: CellModel):
    """
    Raise ConfigurationError if a region required by the model is absent.
    """
    for name in ('const', 'neg', 'pos'):
        section = getattr(model, name)
        if not isinstance(section, REGION_CLASSES[name]):
            raise ConfigurationError(f"Cell model '{model.name}' is missing region '{name}'.")
    if model.eff is None:
        missing = [name for name in ('dll', 'sep') if getattr(model, name) is None]
        if missing:
            raise ConfigurationError(
                f"Cell model '{model.name}' is missing region(s) {missing}; "
                f"supply both 'dll' and 'sep', or 'eff'."
            )


def resolve_at_temperature(model: CellModel, TdegC: float = config.DEFAULT_TDEGC) -> ResolvedParameterSet:
    """
    Evaluate every parameter of a cell model at temperature TdegC [degC].

    :param model: Cell model whose parameters are temperature functions.
    :param TdegC: Temperature [degC]. DEFAULT 25.
    :return: ResolvedParameterSet.
    """
    check_regions(model)
    regions = {}
    for region in model.section_names:
        section = getattr(model, region)
        values = {}
        for f in fields(VALUE_CLASSES[region]):
            param = getattr(section, f.name)
            if param is None:
                if f.default is MISSING:
                    raise ConfigurationError(f"Missing required parameter '{region}.{f.name}'.")
                values[f.name] = None
                continue
            values[f.name] = resolve_parameter(region, f.name, param, TdegC)
        regions[region] = VALUE_CLASSES[region](**values)
    logger.debug("Resolved cell model '%s' at %g degC.", model.name, TdegC)
    return ResolvedParameterSet(TdegC=TdegC, **regions)


def as_resolved(
    params: Union[CellModel, ResolvedParameterSet],
    TdegC: float = config.DEFAULT_TDEGC,
) -> ResolvedParameterSet:
    """
    Accept either a cell model or an already-resolved parameter set and
    return the resolved parameter set.
    """
    if isinstance(params, ResolvedParameterSet):
        if params.TdegC != TdegC:
            logger.warning(
                "Using parameter values resolved at %g degC for a calculation at %g degC.",
                params.TdegC, TdegC,
            )
        return params
    if isinstance(params, CellModel):
        return resolve_at_temperature(params, TdegC)
    raise ConfigurationError(
        f"Expected CellModel or ResolvedParameterSet but got '{type(params).__name__}'."
    )
