"""Test building cell models from loader mappings."""

import numpy as np
import pytest

from lmbeis.cellparams import load_cell_model, Fixed, Lookup, Arrhenius, resolve_at_temperature
from lmbeis.errors import ConfigurationError


@pytest.fixture
def cell_mapping():
    return {
        "const": {"Q": 0.269177, "W": {"kind": "fix", "value": 0.237798}, "taue": 25.0},
        "neg": {
            "k0": {"kind": "Eact", "value": 1.895276, "Eact": 40.0},
            "alpha": 0.5, "Rf": 0.002, "Rdl": 1.5e-4, "Cdl": 1.2e-3, "nDL": 1.0,
        },
        "pos": {
            "sigma": 241.896, "kappa": 5.76159,
            "theta0": 0.999996, "theta100": 0.10836198,
            "Dsref": {"kind": "Eact", "value": 8.3125e-4, "Eact": "25", "Tref": 298.15},
            "Rf": 0.047348, "Rdl": 0.023674, "Cdl": 0.023674, "nDL": 0.95,
            "U0": {"kind": "fix", "value": "[4.16756, 4.02477]"},
            "X": {"kind": "fix", "value": "[0.4, 0.6]"},
            "omega": [1.12446, 1.71031],
            "k0": "[0.99738674, 0.71850266]",
            "alpha": 0.5,
        },
        "EFF": {"kappa": {"kind": "lut", "TdegC": [0, 25], "values": [20.0, 34.8]}},
    }


def test_load_cell_model(cell_mapping):
    model = load_cell_model(cell_mapping, name='cellNMC')
    assert model.name == 'cellNMC'
    assert set(model.section_names) == {'const', 'neg', 'pos', 'eff'}
    assert model.eff.name == 'eff'
    assert isinstance(model.const.Q, Fixed)
    assert isinstance(model.eff.kappa, Lookup)
    assert isinstance(model.pos.Dsref, Arrhenius)
    assert np.array_equal(model.pos.U0.value, [4.16756, 4.02477])
    assert str(model) == "CellModel('cellNMC', regions=['const', 'neg', 'pos', 'eff'])"


def test_activation_energy_in_kilojoules(cell_mapping):
    model = load_cell_model(cell_mapping)
    assert model.neg.k0.Eact == pytest.approx(40e3)
    assert model.pos.Dsref.Eact == pytest.approx(25e3)


def test_loaded_model_resolves(cell_mapping):
    params = resolve_at_temperature(load_cell_model(cell_mapping), 0.0)
    assert params.eff.kappa == 20.0
    assert params.pos.k0.shape == (2,)


def test_unknown_kind(cell_mapping):
    cell_mapping["pos"]["sigma"] = {"kind": "poly", "value": [1, 2]}
    with pytest.raises(ConfigurationError, match=r"pos\.sigma.*'poly'"):
        load_cell_model(cell_mapping)


def test_missing_kind(cell_mapping):
    cell_mapping["pos"]["sigma"] = {"value": 241.896}
    with pytest.raises(ConfigurationError, match=r"pos\.sigma"):
        load_cell_model(cell_mapping)


def test_unknown_region(cell_mapping):
    cell_mapping["anode"] = {"kappa": 1.0}
    with pytest.raises(ConfigurationError, match="anode"):
        load_cell_model(cell_mapping)


def test_unknown_parameter(cell_mapping):
    cell_mapping["eff"] = {"kappa": 1.0, "psi": 0.001}
    del cell_mapping["EFF"]
    with pytest.raises(ConfigurationError, match="eff"):
        load_cell_model(cell_mapping)


def test_missing_region(cell_mapping):
    del cell_mapping["EFF"]
    cell_mapping["sep"] = {"kappa": 20.0}
    with pytest.raises(ConfigurationError, match="dll"):
        load_cell_model(cell_mapping)


@pytest.mark.parametrize("bad", ["[1, 2", "[]", '["a", "b"]'])
def test_bad_vectors(cell_mapping, bad):
    cell_mapping["pos"]["U0"] = {"kind": "fix", "value": bad}
    with pytest.raises(ConfigurationError, match=r"pos\.U0"):
        load_cell_model(cell_mapping)
