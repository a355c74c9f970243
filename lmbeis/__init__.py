"""
LMB-EIS-Toolkit
===============

Transfer functions and Baker-Verbrugge perturbation resistance of
lithium-metal battery cells, for parameter estimation from EIS data.

Modules:
- cellparams: Cell model schema, temperature resolution, model ingestion
- msmr: MSMR open-circuit potential and charge-transfer kinetics
- setpoint: Evaluation of a cell model at one SOC and temperature
- tf: Closed-form transfer functions and cell impedance
- perturbation: Reduced-order perturbation resistance
"""

from lmbeis.cellparams import (
    CellModel, Const, Negative, Positive, Layer,
    Fixed, Lookup, Arrhenius,
    ResolvedParameterSet, resolve_at_temperature, as_resolved,
    load_cell_model,
)
from lmbeis.errors import (
    LMBError, ConfigurationError, NonConvergenceError, NoBracketError, MaxIterationsError,
)
from lmbeis.msmr import MSMR, OCPData, ChargeTransferData
from lmbeis.setpoint import Setpoint, eval_setpoint
from lmbeis.tf import (
    tf_phie, tf_phise, tf_phis, tf_ie, tf_is, tf_ifdl, tf_if, tf_idl, tf_thetass, tf_zcell,
)
from lmbeis.perturbation import (
    PerturbationParts, PerturbationResistance, get_perturbation_resistance,
)

__version__ = '0.1.0'

__all__ = [
    # Cell model
    'CellModel', 'Const', 'Negative', 'Positive', 'Layer',
    'Fixed', 'Lookup', 'Arrhenius',
    'ResolvedParameterSet', 'resolve_at_temperature', 'as_resolved',
    'load_cell_model',
    # Errors
    'LMBError', 'ConfigurationError', 'NonConvergenceError', 'NoBracketError', 'MaxIterationsError',
    # MSMR
    'MSMR', 'OCPData', 'ChargeTransferData',
    # Setpoint
    'Setpoint', 'eval_setpoint',
    # Transfer functions
    'tf_phie', 'tf_phise', 'tf_phis', 'tf_ie', 'tf_is', 'tf_ifdl', 'tf_if', 'tf_idl',
    'tf_thetass', 'tf_zcell',
    # Perturbation resistance
    'PerturbationParts', 'PerturbationResistance', 'get_perturbation_resistance',
]
