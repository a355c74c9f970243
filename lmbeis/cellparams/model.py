"""
lmbeis.cellparams.model

Objects for working with LMB cell models.

A cell model is a closed schema: a fixed set of regions, each with a fixed
set of parameter slots. Every slot holds one of three temperature
functions (Fixed, Lookup, Arrhenius), which are called with a temperature
to fetch the parameter value.
"""

from dataclasses import dataclass, field
from numbers import Number
from typing import Optional, Union

import numpy as np

from lmbeis import config
from lmbeis.constants import R, zero_Celsius
from lmbeis.errors import ConfigurationError

Value = Union[np.ndarray, Number]


@dataclass
class Fixed:
    """
    Temperature-invariant parameter.
    """
    value: Value
    kind = 'fix'

    def __call__(self, TdegC: float = config.DEFAULT_TDEGC):
        return self.value


@dataclass
class Lookup:
    """
    Lookup table indexed by a discrete temperature axis. Row k of `values`
    holds the parameter value at temperature `TdegC[k]`. No interpolation
    is performed between rows.
    """
    TdegC: np.ndarray
    values: np.ndarray
    kind = 'lut'

    def __post_init__(self):
        self.TdegC = np.atleast_1d(np.asarray(self.TdegC, dtype=float))
        self.values = np.asarray(self.values, dtype=float)
        if self.values.ndim == 0 or self.values.shape[0] != self.TdegC.size:
            raise ConfigurationError(
                f"Lookup table has {self.TdegC.size} temperatures but "
                f"values of shape {self.values.shape}."
            )

    def __call__(self, TdegC: float = config.DEFAULT_TDEGC):
        ind, = np.nonzero(self.TdegC == TdegC)
        if ind.size == 0:
            raise ConfigurationError(
                f"No table entry at {TdegC} degC (table has {self.TdegC.tolist()})."
            )
        value = self.values[ind[0]]
        return value.item() if np.ndim(value) == 0 else value


@dataclass
class Arrhenius:
    """
    Parameter with Arrhenius temperature dependence:

        value(T) = value_ref * exp(Eact/R * (1/Tref - 1/T))

    Eact is in J/mol and may be negative (value drops as T rises).
    """
    value: Value
    Eact: Value
    Tref: float = config.DEFAULT_TREF
    kind = 'Eact'

    def __call__(self, TdegC: float = config.DEFAULT_TDEGC):
        T = zero_Celsius + TdegC
        return self.value * np.exp(self.Eact / R * (1/self.Tref - 1/T))


TemperatureFunction = Union[Fixed, Lookup, Arrhenius]
TEMPERATURE_FUNCTIONS = (Fixed, Lookup, Arrhenius)


class Section:
    """
    Base class for the regions of a cell model.
    """
    name = ''


@dataclass
class Const(Section):
    """
    Cell-wide parameters.
    """
    Q: TemperatureFunction       # total capacity [Ah]
    W: TemperatureFunction       # electrolyte polarization factor [-]
    taue: TemperatureFunction    # electrolyte diffusion time constant [s]
    R0: Optional[TemperatureFunction] = None  # lumped series resistance [Ohm]
    name = 'const'


@dataclass
class Negative(Section):
    """
    Lithium-metal electrode interface.
    """
    k0: TemperatureFunction      # [A]
    alpha: TemperatureFunction
    Rf: TemperatureFunction      # [Ohm]
    Rdl: TemperatureFunction     # [Ohm]
    Cdl: TemperatureFunction     # [F]
    nDL: TemperatureFunction
    name = 'neg'


@dataclass
class Positive(Section):
    """
    Porous intercalation electrode with MSMR thermodynamics.
    """
    sigma: TemperatureFunction   # [1/Ohm]
    kappa: TemperatureFunction   # [1/Ohm]
    theta0: TemperatureFunction
    theta100: TemperatureFunction
    Dsref: TemperatureFunction   # [1/s]
    Rf: TemperatureFunction      # [Ohm]
    Rdl: TemperatureFunction     # [Ohm]
    Cdl: TemperatureFunction     # [F]
    nDL: TemperatureFunction
    U0: TemperatureFunction      # [V], one per gallery
    X: TemperatureFunction
    omega: TemperatureFunction
    k0: TemperatureFunction      # [A], scalar or one per gallery
    alpha: TemperatureFunction
    name = 'pos'


@dataclass
class Layer(Section):
    """
    Electrolyte-only layer (separator, dendrite layer, or their lumped
    combination for half cells).
    """
    kappa: TemperatureFunction   # [1/Ohm]
    name: str = field(default='sep', compare=False)


REGION_CLASSES = {
    'const': Const,
    'neg': Negative,
    'pos': Positive,
    'sep': Layer,
    'dll': Layer,
    'eff': Layer,
}


@dataclass
class CellModel:
    """
    LMB cell model. Supply `eff` for a half cell, or `dll` and `sep`
    for a full cell; `eff` wins when both are present.
    """
    name: str
    const: Const
    neg: Negative
    pos: Positive
    sep: Optional[Layer] = None
    dll: Optional[Layer] = None
    eff: Optional[Layer] = None

    @property
    def section_names(self):
        return tuple(
            name for name in REGION_CLASSES
            if getattr(self, name) is not None
        )

    def __str__(self):
        return f"CellModel({self.name!r}, regions={list(self.section_names)})"
