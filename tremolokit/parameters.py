"""Automatable parameters of the tremolo effect."""

from __future__ import annotations

import math
from typing import Iterator, Sequence, Union

import numpy as np


class FloatParameter:
    """A single-precision parameter on a skewed, quantised range."""

    def __init__(
        self,
        parameter_id: str,
        name: str,
        minimum: float,
        maximum: float,
        interval: float = 0.0,
        skew: float = 1.0,
        default: float = 0.0,
        label: str = "",
    ) -> None:
        if not minimum < maximum:
            raise ValueError("the range minimum must be below its maximum")
        if interval < 0:
            raise ValueError("the interval must not be negative")
        if not skew > 0:
            raise ValueError("the skew factor must be positive")
        self.parameter_id = parameter_id
        self.name = name
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.interval = float(interval)
        self.skew = float(skew)
        self.default = float(np.float32(default))
        self.label = label
        self._value = np.float32(default)

    def get(self) -> float:
        return float(self._value)

    def set(self, value: float) -> None:
        """Store ``value`` clamped to the range and snapped to the interval."""
        normalised = self.convert_to_normalised(value)
        self._value = np.float32(self._snap(self.convert_from_normalised(normalised)))

    def convert_to_normalised(self, value: float) -> float:
        """Map a value in the range to [0, 1]."""
        proportion = (float(value) - self.minimum) / (self.maximum - self.minimum)
        proportion = min(1.0, max(0.0, proportion))
        if self.skew == 1.0:
            return proportion
        return proportion**self.skew

    def convert_from_normalised(self, normalised: float) -> float:
        """Map a value in [0, 1] back to the range."""
        proportion = min(1.0, max(0.0, float(normalised)))
        if self.skew != 1.0 and proportion > 0.0:
            proportion = math.exp(math.log(proportion) / self.skew)
        return self.minimum + (self.maximum - self.minimum) * proportion

    def _snap(self, value: float) -> float:
        if self.interval > 0:
            value = self.minimum + self.interval * math.floor(
                (value - self.minimum) / self.interval + 0.5
            )
        if value <= self.minimum:
            return self.minimum
        return min(value, self.maximum)

    def __repr__(self) -> str:
        return f"FloatParameter({self.parameter_id!r}, value={self.get()})"


class BoolParameter:
    """An on/off parameter."""

    def __init__(self, parameter_id: str, name: str, default: bool = False) -> None:
        self.parameter_id = parameter_id
        self.name = name
        self.default = bool(default)
        self._value = bool(default)

    def get(self) -> bool:
        return self._value

    def set(self, value: bool) -> None:
        self._value = bool(value)

    def __repr__(self) -> str:
        return f"BoolParameter({self.parameter_id!r}, value={self._value})"


class ChoiceParameter:
    """A parameter selecting one of a fixed list of named choices."""

    def __init__(
        self, parameter_id: str, name: str, choices: Sequence[str], default_index: int = 0
    ) -> None:
        if not choices:
            raise ValueError("a choice parameter needs at least one choice")
        self.parameter_id = parameter_id
        self.name = name
        self.choices: tuple[str, ...] = tuple(choices)
        self._index = self._clamp(default_index)
        self.default_index = self._index

    def get_index(self) -> int:
        return self._index

    def set_index(self, index: int) -> None:
        """Select a choice; indices outside the list are clamped to it."""
        self._index = self._clamp(index)

    def current_choice_name(self) -> str:
        return self.choices[self._index]

    def _clamp(self, index: int) -> int:
        return min(len(self.choices) - 1, max(0, int(index)))

    def __repr__(self) -> str:
        return f"ChoiceParameter({self.parameter_id!r}, value={self.current_choice_name()!r})"


Parameter = Union[FloatParameter, BoolParameter, ChoiceParameter]


class Parameters:
    """The parameters exposed by the tremolo effect."""

    def __init__(self) -> None:
        self.rate = FloatParameter(
            "modulation.rate",
            "Modulation rate",
            0.1,
            20.0,
            0.01,
            0.4,
            5.0,
            "Hz",
        )
        self.bypassed = BoolParameter("bypassed", "Bypass", False)
        self.waveform = ChoiceParameter(
            "modulation.waveform", "Modulation waveform", ["Sine", "Triangle"], 0
        )

    def __iter__(self) -> Iterator[Parameter]:
        yield self.rate
        yield self.bypassed
        yield self.waveform