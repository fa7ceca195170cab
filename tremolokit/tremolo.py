"""Tremolo effect: amplitude modulation of audio by a low-frequency oscillator."""

from __future__ import annotations

import math
from enum import Enum, IntEnum
from typing import Callable, Iterator

import numpy as np

from tremolokit.bypass import LinearSmoothedValue
from tremolokit.sample_fifo import SampleFifo

_F32 = np.float32
_TWO_PI = 2.0 * math.pi


class ApplySmoothing(Enum):
    """Whether a parameter change is ramped or applied at once."""

    NO = "no"
    YES = "yes"


class LfoWaveform(IntEnum):
    """Shapes the modulating oscillator can take."""

    SINE = 0
    TRIANGLE = 1


class _MultiplicativeRamp:
    """A value that moves towards its target by a constant ratio per step."""

    def __init__(self, initial_value: float) -> None:
        self._current = float(initial_value)
        self._target = float(initial_value)
        self._step = 1.0
        self._countdown = 0
        self._steps_to_target = 0

    @property
    def target(self) -> float:
        return self._target

    def reset(self, sample_rate: float, ramp_length_seconds: float) -> None:
        self._steps_to_target = int(math.floor(ramp_length_seconds * sample_rate))
        self.set_current_and_target(self._target)

    def set_current_and_target(self, value: float) -> None:
        self._current = float(value)
        self._target = float(value)
        self._countdown = 0

    def set_target(self, value: float) -> None:
        value = float(value)
        if value == self._target:
            return
        if self._steps_to_target <= 0 or value <= 0.0 or self._current <= 0.0:
            self.set_current_and_target(value)
            return
        self._target = value
        self._countdown = self._steps_to_target
        self._step = math.exp(
            (math.log(self._target) - math.log(self._current)) / self._countdown
        )

    def next_value(self) -> float:
        if self._countdown <= 0:
            return self._target
        self._countdown -= 1
        if self._countdown > 0:
            self._current *= self._step
        else:
            self._current = self._target
        return self._current


class Oscillator:
    """Periodic generator driven by a waveform function of phase in [-pi, pi)."""

    _FREQUENCY_RAMP_SECONDS = 0.05

    def __init__(self, function: Callable[[float], float]) -> None:
        self._function = function
        self._sample_rate = 48000.0
        self._phase = 0.0
        self._frequency = _MultiplicativeRamp(440.0)

    @property
    def frequency(self) -> float:
        """Frequency the oscillator is heading to, in hertz."""
        return self._frequency.target

    def prepare(self, sample_rate: float) -> None:
        """Set the sample rate and restart from phase zero."""
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self._sample_rate = float(sample_rate)
        self.reset()

    def set_frequency(self, frequency: float, force: bool = False) -> None:
        """Change the frequency, either at once or over a short ramp."""
        if force:
            self._frequency.set_current_and_target(frequency)
        else:
            self._frequency.set_target(frequency)

    def reset(self) -> None:
        """Restart from phase zero and finish any frequency ramp."""
        self._phase = 0.0
        if self._sample_rate > 0:
            self._frequency.reset(self._sample_rate, self._FREQUENCY_RAMP_SECONDS)

    def process_sample(self, input_value: float = 0.0) -> float:
        """Return ``input_value`` plus the next generated sample."""
        increment = _TWO_PI * self._frequency.next_value() / self._sample_rate
        phase = self._advance(increment)
        return input_value + self._function(phase - math.pi)

    def _advance(self, increment: float) -> float:
        last = self._phase
        following = last + increment
        while following >= _TWO_PI:
            following -= _TWO_PI
        self._phase = following
        return last


def _sine(phase: float) -> float:
    # the oscillator starts at -pi; shift so that the output starts at zero
    return math.sin(phase + math.pi)


def _triangle(phase: float) -> float:
    # offset by pi/2 so that the triangle starts at zero like the sine
    offset_phase = phase - math.pi / 2.0
    ft = offset_phase / _TWO_PI
    return 4.0 * abs(ft - math.floor(ft + 0.5)) - 1.0


def _as_channels(buffer: np.ndarray) -> np.ndarray:
    """Return a writable (channels, samples) view of ``buffer``."""
    if not isinstance(buffer, np.ndarray):
        raise TypeError("audio buffers must be numpy arrays")
    if not np.issubdtype(buffer.dtype, np.floating):
        raise TypeError(f"audio buffers must hold floats, not {buffer.dtype}")
    if buffer.ndim == 1:
        return buffer[np.newaxis, :]
    if buffer.ndim != 2:
        raise ValueError("audio buffers must have shape (channels, samples)")
    return buffer


class Tremolo:
    """Modulates the amplitude of every channel with a shared LFO."""

    MODULATION_DEPTH = _F32(0.4)
    DEFAULT_RATE_HZ = 5.0
    _WAVEFORM_TRANSITION_SECONDS = 0.025

    def __init__(self) -> None:
        self._lfos = {
            LfoWaveform.SINE: Oscillator(_sine),
            LfoWaveform.TRIANGLE: Oscillator(_triangle),
        }
        self._current_lfo = LfoWaveform.SINE
        self._lfo_to_set = self._current_lfo
        self._lfo_transition_smoother = LinearSmoothedValue(0.0)
        self._lfo_samples = np.zeros(0, dtype=np.float32)
        self._lfo_sample_fifo = SampleFifo()
        self.set_modulation_rate_hz(self.DEFAULT_RATE_HZ, ApplySmoothing.NO)

    @property
    def lfo_waveform(self) -> LfoWaveform:
        """The waveform most recently requested."""
        return self._lfo_to_set

    def prepare(self, sample_rate: float, expected_max_frames_per_block: int) -> None:
        """Set up the oscillators, the LFO queue and working storage."""
        if expected_max_frames_per_block < 0:
            raise ValueError("block size must not be negative")
        for lfo in self._lfos.values():
            lfo.prepare(sample_rate)
        self._lfo_sample_fifo.prepare(sample_rate)
        self._lfo_transition_smoother.reset(
            sample_rate, self._WAVEFORM_TRANSITION_SECONDS
        )
        # allocate defensively
        self._lfo_samples = np.zeros(
            4 * int(expected_max_frames_per_block), dtype=np.float32
        )

    def set_modulation_rate_hz(
        self, rate_hz: float, apply_smoothing: ApplySmoothing = ApplySmoothing.YES
    ) -> None:
        """Change the LFO frequency."""
        force = apply_smoothing is ApplySmoothing.NO
        for lfo in self._lfos.values():
            lfo.set_frequency(rate_hz, force)

    def set_lfo_waveform(
        self, waveform: LfoWaveform, apply_smoothing: ApplySmoothing = ApplySmoothing.YES
    ) -> None:
        """Select the LFO waveform; the change takes effect on the next block."""
        waveform = LfoWaveform(waveform)
        self._lfo_to_set = waveform
        if apply_smoothing is ApplySmoothing.NO:
            self._current_lfo = waveform

    def process(self, buffer: np.ndarray) -> None:
        """Apply the tremolo in place, frame by frame."""
        block = _as_channels(buffer)
        self._update_lfo_waveform()
        frames = block.shape[1]
        lfo = np.fromiter(self._lfo_values(frames), dtype=np.float32, count=frames)
        block *= self.MODULATION_DEPTH * lfo + _F32(1.0)

    def process_channelwise(self, buffer: np.ndarray) -> None:
        """Apply the tremolo in place, one channel at a time.

        At most four times the block size given to ``prepare`` is processed.
        """
        block = _as_channels(buffer)
        self._update_lfo_waveform()
        count = min(len(self._lfo_samples), block.shape[1])
        self._lfo_samples[:count] = np.fromiter(
            self._lfo_values(count), dtype=np.float32, count=count
        )
        modulation = self._lfo_samples[:count] * self.MODULATION_DEPTH + _F32(1.0)
        block[:, :count] *= modulation

    def reset(self) -> None:
        """Restart the oscillators and discard queued LFO samples."""
        for lfo in self._lfos.values():
            lfo.reset()
        self._lfo_sample_fifo.reset()

    def read_all_lfo_samples(self) -> np.ndarray:
        """Return every LFO sample generated since the previous call."""
        return self._lfo_sample_fifo.pop_all()

    def _lfo_values(self, count: int) -> Iterator[float]:
        for _ in range(count):
            value = self._next_lfo_value()
            self._lfo_sample_fifo.push(value)
            yield value

    def _update_lfo_waveform(self) -> None:
        if self._lfo_to_set != self._current_lfo:
            self._lfo_transition_smoother.set_current_and_target_value(
                self._next_lfo_value()
            )
            self._current_lfo = self._lfo_to_set
            self._lfo_transition_smoother.set_target_value(self._next_lfo_value())

    def _next_lfo_value(self) -> float:
        if self._lfo_transition_smoother.is_smoothing():
            return self._lfo_transition_smoother.get_next_value()
        return float(_F32(self._lfos[self._current_lfo].process_sample(0.0)))