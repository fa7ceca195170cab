import numpy as np
import pytest

from tremolokit.tremolo import ApplySmoothing, LfoWaveform, Oscillator, Tremolo

SAMPLE_RATE = 48000.0


def extract_lfo(tremolo, buffer, channelwise=False):
    buffer.fill(1.0)
    if channelwise:
        tremolo.process_channelwise(buffer)
    else:
        tremolo.process(buffer)
    buffer -= 1.0


def make_tremolo(waveform=LfoWaveform.SINE, block=int(SAMPLE_RATE)):
    tremolo = Tremolo()
    tremolo.set_lfo_waveform(waveform)
    tremolo.prepare(SAMPLE_RATE, block)
    return tremolo


def test_extract_sine_lfo():
    tremolo = make_tremolo(LfoWaveform.SINE)
    buffer = np.ones((1, int(SAMPLE_RATE)), dtype=np.float32)
    tremolo.process(buffer)
    raw_lfo = tremolo.read_all_lfo_samples()
    lfo = buffer[0] - np.float32(1.0)
    assert raw_lfo[2400] == pytest.approx(1.0, abs=2.5e-3)
    assert raw_lfo[7200] == pytest.approx(-1.0, abs=2.5e-3)
    assert lfo[0] == pytest.approx(0.0, abs=1e-6)
    assert lfo[2400] == pytest.approx(0.4, abs=1e-3)
    assert lfo[7200] == pytest.approx(-0.4, abs=1e-3)
    assert lfo.max() <= 0.4 + 1e-5
    assert lfo.min() >= -0.4 - 1e-5


def test_extract_triangle_lfo():
    tremolo = make_tremolo(LfoWaveform.TRIANGLE)
    buffer = np.ones((1, int(SAMPLE_RATE)), dtype=np.float32)
    tremolo.process(buffer)
    raw_lfo = tremolo.read_all_lfo_samples()
    lfo = buffer[0] - np.float32(1.0)
    assert raw_lfo[1200] == pytest.approx(0.5, abs=2.5e-3)
    assert raw_lfo[2400] == pytest.approx(1.0, abs=2.5e-3)
    assert lfo[0] == pytest.approx(0.0, abs=1e-6)
    assert lfo[1200] == pytest.approx(0.2, abs=1e-3)
    assert lfo[2400] == pytest.approx(0.4, abs=1e-3)
    assert lfo[7200] == pytest.approx(-0.4, abs=1e-3)


def test_lfo_waveform_transition_is_smooth():
    tremolo = make_tremolo()
    block = int(SAMPLE_RATE)
    buffer = np.ones((1, block), dtype=np.float32)
    output = np.zeros(2 * block, dtype=np.float32)

    tremolo.set_lfo_waveform(LfoWaveform.SINE)
    tremolo.process(buffer)
    output[:block] = buffer[0] - np.float32(1.0)
    tremolo.read_all_lfo_samples()

    tremolo.set_lfo_waveform(LfoWaveform.TRIANGLE)
    buffer.fill(1.0)
    tremolo.process(buffer)
    output[block:] = buffer[0] - np.float32(1.0)
    triangle_lfo = tremolo.read_all_lfo_samples()

    assert np.max(np.abs(np.diff(output))) < 1e-3
    # after the transition the waveform is a triangle
    assert output[block + 2400] == pytest.approx(0.2, abs=2e-3)
    assert triangle_lfo[2400] == pytest.approx(0.5, abs=5e-3)


def test_waveform_change_without_smoothing_is_immediate():
    tremolo = make_tremolo()
    buffer = np.ones((1, 2400), dtype=np.float32)
    tremolo.set_lfo_waveform(LfoWaveform.TRIANGLE, ApplySmoothing.NO)
    tremolo.process(buffer)
    raw_lfo = tremolo.read_all_lfo_samples()
    assert raw_lfo[1200] == pytest.approx(0.5, abs=2.5e-3)
    assert buffer[0, 1200] - 1.0 == pytest.approx(0.2, abs=1e-3)


def test_samplewise_and_channelwise_processing_yield_identical_results():
    rng = np.random.default_rng(0)
    signal = rng.uniform(-1.0, 1.0, int(SAMPLE_RATE)).astype(np.float32)
    samplewise = signal[np.newaxis, :].copy()
    channelwise = samplewise.copy()

    samplewise_tremolo = Tremolo()
    channelwise_tremolo = Tremolo()
    samplewise_tremolo.prepare(SAMPLE_RATE, len(signal))
    channelwise_tremolo.prepare(SAMPLE_RATE, len(signal))

    samplewise_tremolo.process(samplewise)
    channelwise_tremolo.process_channelwise(channelwise)

    np.testing.assert_allclose(samplewise, channelwise, atol=1e-5)
    assert not np.allclose(samplewise, signal)


def test_channelwise_processes_at_most_four_blocks():
    tremolo = Tremolo()
    tremolo.prepare(SAMPLE_RATE, 10)
    buffer = np.full((1, 100), 2.0, dtype=np.float32)
    tremolo.process_channelwise(buffer)
    lfo = tremolo.read_all_lfo_samples()
    assert len(lfo) == 40
    np.testing.assert_array_equal(buffer[0, 40:], np.full(60, 2.0))
    np.testing.assert_allclose(buffer[0, :40], 2.0 * (1.0 + 0.4 * lfo), atol=1e-5)
    assert not np.all(buffer[0, 1:40] == 2.0)


def test_all_channels_receive_the_same_modulation():
    tremolo = make_tremolo(block=512)
    buffer = np.ones((2, 512), dtype=np.float32)
    tremolo.process(buffer)
    np.testing.assert_array_equal(buffer[0], buffer[1])


def test_one_dimensional_buffer_is_processed_in_place():
    tremolo = make_tremolo(block=4800)
    buffer = np.ones(4800, dtype=np.float32)
    tremolo.process(buffer)
    assert buffer[2400] == pytest.approx(1.4, abs=1e-3)


def test_read_all_lfo_samples_returns_generated_lfo():
    tremolo = make_tremolo(block=480)
    buffer = np.zeros((1, 480), dtype=np.float32)
    extract_lfo(tremolo, buffer)
    lfo = tremolo.read_all_lfo_samples()
    assert len(lfo) == 480
    np.testing.assert_allclose(buffer[0], 0.4 * lfo, atol=1e-6)
    assert len(tremolo.read_all_lfo_samples()) == 0


def test_reset_restarts_lfo_and_clears_queue():
    tremolo = make_tremolo(block=1000)
    buffer = np.zeros((1, 1000), dtype=np.float32)
    extract_lfo(tremolo, buffer)
    tremolo.reset()
    assert len(tremolo.read_all_lfo_samples()) == 0
    extract_lfo(tremolo, buffer)
    assert buffer[0, 0] == pytest.approx(0.0, abs=1e-6)


def test_rate_change_without_smoothing():
    tremolo = make_tremolo(block=4800)
    tremolo.set_modulation_rate_hz(10.0, ApplySmoothing.NO)
    buffer = np.ones((1, 4800), dtype=np.float32)
    tremolo.process(buffer)
    raw_lfo = tremolo.read_all_lfo_samples()
    assert raw_lfo[1200] == pytest.approx(1.0, abs=2.5e-3)
    assert buffer[0, 1200] - 1.0 == pytest.approx(0.4, abs=1e-3)


def test_rate_change_with_smoothing_ramps_frequency():
    smoothed = make_tremolo(block=4800)
    forced = make_tremolo(block=4800)
    smoothed.set_modulation_rate_hz(10.0)
    forced.set_modulation_rate_hz(10.0, ApplySmoothing.NO)
    a = np.ones((1, 4800), dtype=np.float32)
    b = np.ones((1, 4800), dtype=np.float32)
    smoothed.process(a)
    forced.process(b)
    smoothed_lfo = smoothed.read_all_lfo_samples()
    forced_lfo = forced.read_all_lfo_samples()
    assert smoothed_lfo[1200] < forced_lfo[1200]
    assert a[0, 1200] < b[0, 1200]


def test_invalid_waveform_is_rejected():
    with pytest.raises(ValueError):
        Tremolo().set_lfo_waveform(7)


def test_non_float_buffer_is_rejected():
    with pytest.raises(TypeError):
        make_tremolo(block=4).process(np.ones((1, 4), dtype=np.int32))


def test_oscillator_starts_at_zero_and_tracks_frequency():
    oscillator = Oscillator(lambda phase: phase)
    oscillator.prepare(4.0)
    oscillator.set_frequency(1.0, True)
    values = [oscillator.process_sample(0.0) for _ in range(5)]
    assert values == pytest.approx([-np.pi, -np.pi / 2, 0.0, np.pi / 2, -np.pi])
    assert oscillator.frequency == 1.0


def test_oscillator_rejects_non_positive_sample_rate():
    with pytest.raises(ValueError):
        Oscillator(lambda phase: 0.0).prepare(0.0)