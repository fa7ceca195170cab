import pytest

from tremolokit.parameters import (
    BoolParameter,
    ChoiceParameter,
    FloatParameter,
    Parameters,
)


def test_defaults():
    parameters = Parameters()
    assert parameters.rate.get() == pytest.approx(5.0)
    assert parameters.bypassed.get() is False
    assert parameters.waveform.get_index() == 0
    assert parameters.waveform.current_choice_name() == "Sine"


def test_identifiers_and_choices():
    parameters = Parameters()
    assert [p.parameter_id for p in parameters] == [
        "modulation.rate",
        "bypassed",
        "modulation.waveform",
    ]
    assert parameters.waveform.choices == ("Sine", "Triangle")
    assert parameters.rate.label == "Hz"


def test_rate_is_clamped_to_range():
    rate = Parameters().rate
    rate.set(100.0)
    assert rate.get() == pytest.approx(20.0)
    rate.set(-3.0)
    assert rate.get() == pytest.approx(0.1)


def test_rate_snaps_to_interval():
    rate = Parameters().rate
    rate.set(5.004)
    assert rate.get() == pytest.approx(5.0, abs=1e-5)


@pytest.mark.parametrize("value", [0.1, 0.5, 1.0, 7.25, 10.0, 19.99, 20.0])
def test_rate_set_keeps_legal_values(value):
    rate = Parameters().rate
    rate.set(value)
    assert rate.get() == pytest.approx(value, abs=1e-4)


@pytest.mark.parametrize("value", [0.1, 0.37, 2.0, 13.3, 20.0])
def test_normalisation_round_trip(value):
    rate = Parameters().rate
    normalised = rate.convert_to_normalised(value)
    assert 0.0 <= normalised <= 1.0
    assert rate.convert_from_normalised(normalised) == pytest.approx(value)


def test_normalisation_ends_and_monotonicity():
    rate = Parameters().rate
    assert rate.convert_to_normalised(rate.minimum) == 0.0
    assert rate.convert_to_normalised(rate.maximum) == 1.0
    values = [0.1, 0.5, 1.0, 4.0, 9.0, 20.0]
    normalised = [rate.convert_to_normalised(v) for v in values]
    assert normalised == sorted(normalised)
    # the skew gives the lower part of the range more travel
    assert rate.convert_to_normalised(5.0) > 0.5


def test_unskewed_parameter_is_linear():
    parameter = FloatParameter("gain", "Gain", 0.0, 10.0, 0.0, 1.0, 2.0, "dB")
    assert parameter.convert_to_normalised(5.0) == pytest.approx(0.5)
    assert parameter.convert_from_normalised(0.25) == pytest.approx(2.5)


def test_bool_parameter_set_and_get():
    parameter = BoolParameter("flag", "Flag", True)
    assert parameter.get() is True
    parameter.set(0)
    assert parameter.get() is False


def test_choice_index_is_clamped():
    waveform = Parameters().waveform
    waveform.set_index(1)
    assert waveform.current_choice_name() == "Triangle"
    waveform.set_index(5)
    assert waveform.get_index() == 1
    waveform.set_index(-2)
    assert waveform.get_index() == 0


def test_invalid_constructions_raise():
    with pytest.raises(ValueError):
        FloatParameter("x", "X", 1.0, 1.0)
    with pytest.raises(ValueError):
        FloatParameter("x", "X", 0.0, 1.0, skew=0.0)
    with pytest.raises(ValueError):
        ChoiceParameter("c", "C", [], 0)


def test_parameter_sets_are_independent():
    first = Parameters()
    second = Parameters()
    first.rate.set(12.0)
    first.bypassed.set(True)
    assert second.rate.get() == pytest.approx(5.0)
    assert second.bypassed.get() is False