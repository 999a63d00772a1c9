import math

import pytest

from pluckysynth.parameters import (
    ChoiceParameter,
    FloatParameter,
    ParameterSet,
    create_parameter_layout,
)

IDS = [
    "gain",
    "source",
    "decay",
    "width",
    "filterCutoff",
    "lowFilterCutoff",
    "tremoloRate",
    "tremoloDepth",
    "reverbSize",
    "reverbMix",
]


def test_layout_order():
    assert [p.id for p in create_parameter_layout()] == IDS
    assert list(ParameterSet()) == IDS
    assert len(ParameterSet()) == len(IDS)


def test_defaults():
    params = ParameterSet()
    assert params["gain"] == 0.5
    assert params["source"] == 0
    assert params["decay"] == 0.97
    assert params["filterCutoff"] == 2000.0
    assert params["lowFilterCutoff"] == 20.0


def test_values_are_clamped():
    params = ParameterSet()
    params["gain"] = 5.0
    params["decay"] = 0.1
    assert params["gain"] == params.definition("gain").maximum
    assert params["decay"] == params.definition("decay").minimum


@pytest.mark.parametrize("name,value", [("gain", 0.123), ("tremoloRate", 3.14159), ("filterCutoff", 1234.4)])
def test_values_snap_to_interval(name, value):
    params = ParameterSet()
    params[name] = value
    p = params.definition(name)
    steps = (params[name] - p.minimum) / p.interval
    assert steps == pytest.approx(round(steps), abs=1e-6)
    assert abs(params[name] - value) <= p.interval / 2 + 1e-9


def test_unknown_parameter():
    params = ParameterSet()
    with pytest.raises(KeyError):
        params["volume"]
    with pytest.raises(KeyError):
        params["volume"] = 1.0
    assert list(params) == IDS
    assert "volume" not in list(params)
    assert params["gain"] == 0.5


def test_choice_by_name_and_number():
    params = ParameterSet()
    params["source"] = "Noise"
    assert params["source"] == 3
    params["source"] = 7
    assert params["source"] == 3
    params["source"] = -2
    assert params["source"] == 0
    params["source"] = 1.6
    assert params["source"] == 2


def test_unknown_choice_name():
    with pytest.raises(ValueError):
        ParameterSet()["source"] = "Triangle"


def test_reset_restores_defaults():
    params = ParameterSet()
    params["gain"] = 0.9
    params["source"] = "Square"
    params.reset()
    assert params["gain"] == params.definition("gain").default
    assert params["source"] == params.definition("source").default


def test_duplicate_ids_rejected():
    gain = FloatParameter("gain", "Gain", 0.0, 1.0, 0.01, 0.5)
    with pytest.raises(ValueError):
        ParameterSet([gain, gain])


def test_invalid_definitions_rejected():
    with pytest.raises(ValueError):
        FloatParameter("x", "X", 1.0, 1.0)
    with pytest.raises(ValueError):
        ChoiceParameter("c", "C", ())
    with pytest.raises(ValueError):
        ChoiceParameter("c", "C", ("a", "b"), 2)


def test_skewed_range_endpoints_and_round_trip():
    p = ParameterSet().definition("filterCutoff")
    assert p.to_normalised(p.minimum) == 0.0
    assert p.to_normalised(p.maximum) == pytest.approx(1.0)
    for value in (20.0, 100.0, 2000.0, 15000.0):
        assert p.from_normalised(p.to_normalised(value)) == pytest.approx(value)


def test_skew_gives_more_travel_to_low_values():
    p = ParameterSet().definition("filterCutoff")
    midpoint = p.from_normalised(0.5)
    assert midpoint < (p.minimum + p.maximum) / 2
    assert not math.isnan(midpoint)


def test_unskewed_normalisation_is_linear():
    p = ParameterSet().definition("gain")
    assert p.to_normalised(p.default) == pytest.approx(p.default)
    assert p.from_normalised(0.25) == pytest.approx(0.25)