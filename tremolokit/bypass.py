"""Cross-fading between processed and unprocessed audio on bypass changes."""

from __future__ import annotations

import math

import numpy as np

_F32 = np.float32


def _channels(buffer: np.ndarray) -> np.ndarray:
    """Return a (channels, samples) view of ``buffer`` that writes through."""
    if not isinstance(buffer, np.ndarray):
        raise TypeError("audio buffers must be numpy arrays")
    if buffer.ndim == 1:
        return buffer[np.newaxis, :]
    if buffer.ndim != 2:
        raise ValueError("audio buffers must have shape (channels, samples)")
    return buffer


class LinearSmoothedValue:
    """A single-precision value that ramps linearly towards its target."""

    def __init__(self, initial_value: float = 0.0) -> None:
        value = _F32(initial_value)
        self._current = value
        self._target = value
        self._step = _F32(0.0)
        self._countdown = 0
        self._steps_to_target = 0

    @property
    def current_value(self) -> float:
        return float(self._current)

    @property
    def target_value(self) -> float:
        return float(self._target)

    def reset(self, sample_rate: float, ramp_length_seconds: float) -> None:
        """Set the ramp length and jump to the current target."""
        if sample_rate < 0 or ramp_length_seconds < 0:
            raise ValueError("sample rate and ramp length must not be negative")
        self._steps_to_target = int(math.floor(ramp_length_seconds * sample_rate))
        self.set_current_and_target_value(self._target)

    def set_current_and_target_value(self, value: float) -> None:
        """Jump to ``value`` with no ramp."""
        value = _F32(value)
        self._current = value
        self._target = value
        self._countdown = 0

    def set_target_value(self, value: float) -> None:
        """Start ramping from the current value towards ``value``."""
        value = _F32(value)
        if value == self._target:
            return
        if self._steps_to_target <= 0:
            self.set_current_and_target_value(value)
            return
        self._target = value
        self._countdown = self._steps_to_target
        self._step = _F32((self._target - self._current) / _F32(self._countdown))

    def is_smoothing(self) -> bool:
        return self._countdown > 0

    def get_next_value(self) -> float:
        """Advance the ramp by one step and return the new value."""
        if not self.is_smoothing():
            return float(self._target)
        self._countdown -= 1
        if self._countdown > 0:
            self._current = _F32(self._current + self._step)
        else:
            self._current = self._target
        return float(self._current)

    def apply_gain(self, buffer: np.ndarray, num_samples: int) -> None:
        """Multiply the first ``num_samples`` of every channel, in place."""
        block = _channels(buffer)
        if not 0 <= num_samples <= block.shape[1]:
            raise ValueError(
                f"cannot apply gain to {num_samples} samples of a "
                f"{block.shape[1]}-sample buffer"
            )
        if self.is_smoothing():
            gains = np.fromiter(
                (self.get_next_value() for _ in range(num_samples)),
                dtype=np.float32,
                count=num_samples,
            )
            block[:, :num_samples] *= gains
        else:
            block[:, :num_samples] *= self._target


class BypassTransitionSmoother:
    """Cross-fades dry and wet signals when the bypass state changes.

    Call ``set_bypass`` once per block, then ``set_dry_buffer`` before the
    effect runs and ``mix_to_wet_buffer`` after it.  Both calls do nothing
    while the effect is fully active.
    """

    def __init__(self, crossfade_length_seconds: float = 0.01) -> None:
        if not crossfade_length_seconds > 0.0:
            raise ValueError("crossfade length must be positive")
        self._crossfade_length_seconds = float(crossfade_length_seconds)
        self._sample_rate_hz = 0.0
        self._dry_gain = LinearSmoothedValue(0.0)
        self._wet_gain = LinearSmoothedValue(1.0)
        self._dry_buffer = np.zeros((0, 0), dtype=np.float32)
        self.reset()

    def prepare(self, sample_rate: float, maximum_block_size: int, num_channels: int) -> None:
        """Allocate the dry buffer and set the sample rate."""
        self._sample_rate_hz = float(sample_rate)
        self._dry_buffer = np.zeros(
            (int(num_channels), int(maximum_block_size)), dtype=np.float32
        )
        self._dry_gain.reset(sample_rate, self._crossfade_length_seconds)
        self._wet_gain.reset(sample_rate, self._crossfade_length_seconds)
        self.reset()

    def set_bypass(self, bypass: bool) -> None:
        """Start a cross-fade towards the given bypass state."""
        if bool(bypass) == self._is_bypassed():
            return

        current = _F32(self._dry_gain.current_value)
        target = _F32(1.0 if bypass else 0.0)
        duration = self._crossfade_length_seconds * float(abs(target - current))

        self._dry_gain.reset(self._sample_rate_hz, duration)
        self._wet_gain.reset(self._sample_rate_hz, duration)

        self._dry_gain.set_current_and_target_value(current)
        self._dry_gain.set_target_value(target)

        self._wet_gain.set_current_and_target_value(_F32(1.0) - current)
        self._wet_gain.set_target_value(_F32(1.0) - target)

    def set_bypass_forced(self, bypass: bool) -> None:
        """Switch to the given bypass state at once, without a cross-fade."""
        self._dry_gain.set_current_and_target_value(1.0 if bypass else 0.0)
        self._wet_gain.set_current_and_target_value(
            _F32(1.0) - _F32(self._dry_gain.target_value)
        )

    def is_transitioning(self) -> bool:
        return self._dry_gain.is_smoothing() or self._wet_gain.is_smoothing()

    def set_dry_buffer(self, buffer: np.ndarray) -> None:
        """Store the unprocessed block, scaled by the dry gain."""
        if self._should_avoid_processing():
            return
        block = _channels(buffer)
        channels, samples = self._check_fits(block)
        self._dry_buffer[:channels, :samples] = block
        self._dry_gain.apply_gain(self._dry_buffer, samples)

    def mix_to_wet_buffer(self, buffer: np.ndarray) -> None:
        """Scale the processed block by the wet gain and add the stored dry block."""
        if self._should_avoid_processing():
            return
        block = _channels(buffer)
        channels, samples = self._check_fits(block)
        self._wet_gain.apply_gain(block, samples)
        block += self._dry_buffer[:channels, :samples]

    def reset(self) -> None:
        """Return to the active state and clear the stored dry block."""
        self.set_bypass_forced(False)
        self._dry_buffer.fill(0.0)

    def _check_fits(self, block: np.ndarray) -> tuple[int, int]:
        channels, samples = block.shape
        max_channels, max_samples = self._dry_buffer.shape
        if channels > max_channels or samples > max_samples:
            raise ValueError(
                f"buffer of shape {block.shape} exceeds the prepared "
                f"shape {self._dry_buffer.shape}"
            )
        return channels, samples

    def _is_bypassed(self) -> bool:
        return self._dry_gain.target_value == 1.0

    def _should_avoid_processing(self) -> bool:
        return not self.is_transitioning() and not self._is_bypassed()