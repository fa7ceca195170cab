"""Audio processor combining the tremolo, its parameters and bypass handling."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Union

import numpy as np

from tremolokit.bypass import BypassTransitionSmoother
from tremolokit.json_serializer import (
    PLUGIN_NAME,
    DeserializationError,
    deserialize,
    serialize,
)
from tremolokit.parameters import BoolParameter, Parameters
from tremolokit.tremolo import ApplySmoothing, LfoWaveform, Tremolo

logger = logging.getLogger(__name__)


class ChannelSet(Enum):
    """Channel layouts a bus can have; the value is the channel count."""

    DISABLED = 0
    MONO = 1
    STEREO = 2

    @property
    def size(self) -> int:
        return self.value


def _as_channels(buffer: np.ndarray) -> np.ndarray:
    """Return a writable (channels, samples) view of ``buffer``."""
    if not isinstance(buffer, np.ndarray):
        raise TypeError("audio buffers must be numpy arrays")
    if buffer.ndim == 1:
        return buffer[np.newaxis, :]
    if buffer.ndim != 2:
        raise ValueError("audio buffers must have shape (channels, samples)")
    return buffer


class PluginProcessor:
    """Applies the tremolo to audio blocks and manages the effect's state."""

    name = PLUGIN_NAME
    accepts_midi = False
    produces_midi = False
    is_midi_effect = False

    def __init__(self) -> None:
        self._input_set = ChannelSet.STEREO
        self._output_set = ChannelSet.STEREO
        self._parameters = Parameters()
        self._tremolo = Tremolo()
        self._bypass_transition_smoother = BypassTransitionSmoother()
        self._current_sample_rate = 0.0

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def bypass_parameter(self) -> BoolParameter:
        return self._parameters.bypassed

    @property
    def total_num_input_channels(self) -> int:
        return self._input_set.size

    @property
    def total_num_output_channels(self) -> int:
        return self._output_set.size

    def prepare_to_play(self, sample_rate: float, expected_max_frames_per_block: int) -> None:
        """Get ready to process blocks of at most the given size."""
        self._current_sample_rate = float(sample_rate)
        self._tremolo.prepare(sample_rate, expected_max_frames_per_block)
        self._bypass_transition_smoother.prepare(
            sample_rate,
            int(expected_max_frames_per_block),
            max(self.total_num_input_channels, self.total_num_output_channels),
        )

    def release_resources(self) -> None:
        """Reset the effect once playback stops."""
        self._tremolo.reset()
        self._bypass_transition_smoother.reset()

    @staticmethod
    def is_buses_layout_supported(input_set: ChannelSet, output_set: ChannelSet) -> bool:
        """Mono or stereo output, with the input matching the output."""
        if output_set not in (ChannelSet.MONO, ChannelSet.STEREO):
            return False
        return output_set == input_set

    def process_block(self, buffer: np.ndarray) -> None:
        """Process one block of audio in place."""
        block = _as_channels(buffer)
        for channel in range(
            self.total_num_input_channels,
            min(self.total_num_output_channels, block.shape[0]),
        ):
            block[channel].fill(0.0)

        bypassed = self._parameters.bypassed.get()
        bypassed_and_not_transitioning = (
            bypassed and not self._bypass_transition_smoother.is_transitioning()
        )
        # a fully bypassed effect takes parameter changes at once, so that the
        # LFO does not morph when the bypass is switched off
        apply_smoothing = (
            ApplySmoothing.NO if bypassed_and_not_transitioning else ApplySmoothing.YES
        )

        self._tremolo.set_modulation_rate_hz(self._parameters.rate.get(), apply_smoothing)
        self._tremolo.set_lfo_waveform(
            LfoWaveform(self._parameters.waveform.get_index()), apply_smoothing
        )
        self._bypass_transition_smoother.set_bypass(bypassed)

        if bypassed_and_not_transitioning:
            return

        self._bypass_transition_smoother.set_dry_buffer(block)
        self._tremolo.process(block)
        self._bypass_transition_smoother.mix_to_wet_buffer(block)

    def get_state_information(self) -> bytes:
        """Return the parameters as UTF-8 encoded JSON."""
        return serialize(self._parameters).encode("utf-8")

    def set_state_information(self, data: Union[bytes, str]) -> None:
        """Restore the parameters; unusable data is logged and ignored."""
        try:
            deserialize(data, self._parameters)
        except DeserializationError as error:
            logger.warning("could not restore state: %s", error)

        # no smoothing: a loaded state should take effect at once
        self._bypass_transition_smoother.set_bypass_forced(self._parameters.bypassed.get())
        self._tremolo.set_lfo_waveform(
            LfoWaveform(self._parameters.waveform.get_index()), ApplySmoothing.NO
        )
        self._tremolo.set_modulation_rate_hz(self._parameters.rate.get(), ApplySmoothing.NO)

    def read_all_lfo_samples(self) -> np.ndarray:
        """Return every LFO sample generated since the previous call."""
        return self._tremolo.read_all_lfo_samples()

    def get_sample_rate_thread_safe(self) -> float:
        """The most recent sample rate given to ``prepare_to_play``."""
        return self._current_sample_rate

    def get_tail_length_seconds(self) -> float:
        return 0.0

    def get_num_programs(self) -> int:
        # some hosts do not cope with zero programs
        return 1