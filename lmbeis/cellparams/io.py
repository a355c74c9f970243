"""
lmbeis.cellparams.io

Build cell models from the nested mappings produced by external loaders
(spreadsheet readers, JSON files, regression drivers).

Expected layout:

    {
        "const": {"Q": {"kind": "fix", "value": 0.27}, ...},
        "pos": {"U0": {"kind": "fix", "value": "[4.16, 4.02]"},
                "Dsref": {"kind": "Eact", "value": 8e-4, "Eact": 20.0}, ...},
        "eff": {"kappa": {"kind": "lut", "TdegC": [0, 25], "values": [20, 35]}},
        ...
    }

Activation energies are given in kJ/mol. Bare numbers are taken as `fix`.
"""

import json
from numbers import Number

import numpy as np

from lmbeis.cellparams.model import CellModel, Fixed, Lookup, Arrhenius, REGION_CLASSES
from lmbeis.cellparams.resolve import check_regions
from lmbeis.errors import ConfigurationError


def load_cell_model(data, name='Unnamed LMB cell model'):
    """
    Build a CellModel from a nested mapping of parameter descriptions.
    """
    sections = {}
    for name_sec, params in data.items():
        name_sec = name_sec.lower()
        cls = secname2class(name_sec)
        kwargs = {
            name_param: make_parameter(name_sec, name_param, desc)
            for name_param, desc in params.items()
        }
        if 'name' in kwargs:
            raise ConfigurationError(f"Region '{name_sec}' may not define a parameter called 'name'.")
        try:
            section = cls(**kwargs)
        except TypeError as err:
            raise ConfigurationError(f"Region '{name_sec}': {err}") from err
        if name_sec in ('sep', 'dll', 'eff'):
            section.name = name_sec
        sections[name_sec] = section

    model = CellModel(
        name,
        const=sections.get('const'),
        neg=sections.get('neg'),
        pos=sections.get('pos'),
        sep=sections.get('sep'),
        dll=sections.get('dll'),
        eff=sections.get('eff'),
    )
    check_regions(model)
    return model


def make_parameter(region, name, desc):
    """
    Build the temperature function of one parameter from its description.
    """
    if isinstance(desc, (Number, np.ndarray, list, str)):
        return Fixed(str2value(region, name, desc))
    try:
        kind = desc['kind']
    except (TypeError, KeyError):
        raise ConfigurationError(f"Parameter '{region}.{name}' does not declare a temperature-function kind.")

    try:
        if kind == 'fix':
            return Fixed(str2value(region, name, desc['value']))
        elif kind == 'lut':
            return Lookup(
                str2value(region, name, desc['TdegC']),
                str2value(region, name, desc['values']),
            )
        elif kind == 'Eact':
            # Convert kJ to J.
            Eact = str2value(region, name, desc['Eact']) * 1_000
            if 'Tref' in desc:
                return Arrhenius(str2value(region, name, desc['value']), Eact, float(desc['Tref']))
            return Arrhenius(str2value(region, name, desc['value']), Eact)
    except KeyError as err:
        raise ConfigurationError(f"Parameter '{region}.{name}' ({kind}) is missing field {err}.") from err
    raise ConfigurationError(f"Parameter '{region}.{name}' has unrecognized temperature-function kind '{kind}'.")


def str2value(region, name, value):
    """
    Convert a number, list, or JSON string such as "[1, 2]" to a float or
    a numpy vector.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.decoder.JSONDecodeError:
            raise ConfigurationError(f"Could not decode parameter '{region}.{name}' as JSON.")
    value = np.asarray(value)
    if value.dtype.kind not in 'iuf':
        raise ConfigurationError(f"Expected numeric type for parameter '{region}.{name}' but got '{value.dtype}'.")
    if value.size == 0:
        raise ConfigurationError(f"Parameter '{region}.{name}' has no value.")
    if value.ndim == 0:
        return float(value)
    return value.astype(float)


def secname2class(secname):
    try:
        return REGION_CLASSES[secname]
    except KeyError:
        raise ConfigurationError(f"Don't know how to classify region '{secname}'.")
