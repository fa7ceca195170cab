"""Builds the plotted curve of the LFO from samples read off the audio thread."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from tremolokit.strided_queue import StridedQueue


class LfoCurve:
    """Keeps a decimated history of LFO samples as a polyline to draw.

    ``update`` is meant to be called once per display frame with the frame's
    timestamp.  While the effect is bypassed the curve scrolls with zeros.
    """

    POINTS_ON_PATH = 22050
    PERIODS_TO_PLOT_OF_1HZ_WAVEFORM = 4
    Y_LIMIT = 1.1

    def __init__(
        self,
        read_all_lfo_samples: Callable[[], Sequence[float]],
        get_current_sample_rate: Callable[[], float],
        is_bypassed: Callable[[], bool],
    ) -> None:
        self._read_all_lfo_samples = read_all_lfo_samples
        self._get_current_sample_rate = get_current_sample_rate
        self._is_bypassed = is_bypassed
        self._samples = StridedQueue(self.POINTS_ON_PATH)
        self._last_timestamp_seconds: Optional[float] = None
        self._points: tuple[tuple[float, float], ...] = ()
        self._samples_to_path()

    def update(self, timestamp_seconds: float) -> None:
        """Take in the samples produced since the previous frame."""
        self._update_samples_queue(float(timestamp_seconds))
        self._samples_to_path()

    def stride(self) -> int:
        """How many LFO samples one plotted point stands for."""
        return int(
            self._get_current_sample_rate()
            * self.PERIODS_TO_PLOT_OF_1HZ_WAVEFORM
            / self.POINTS_ON_PATH
        )

    def points(self) -> tuple[tuple[float, float], ...]:
        """The curve as (x, y) points, oldest first, x counting from zero."""
        return self._points

    def transform(self, width: float, height: float) -> tuple[float, float, float, float, float, float]:
        """Affine transform mapping the curve onto a width x height area.

        Returned as (a, b, c, d, e, f) with x' = a*x + b*y + c and
        y' = d*x + e*y + f.  The point (0, Y_LIMIT) maps to the top-left
        corner, (0, -Y_LIMIT) to the bottom-left and (last x, -Y_LIMIT) to
        the bottom-right.
        """
        end_x = self._points[-1][0] if self._points else 0.0
        if end_x == 0.0:
            raise ValueError("the curve has no horizontal extent to map")
        return (
            width / end_x,
            0.0,
            0.0,
            0.0,
            -height / (2.0 * self.Y_LIMIT),
            height / 2.0,
        )

    def _update_samples_queue(self, timestamp_seconds: float) -> None:
        if self._last_timestamp_seconds is None:
            self._last_timestamp_seconds = timestamp_seconds
            return

        samples = self._read_all_lfo_samples()
        self._samples.set_stride(self.stride())

        if self._is_bypassed():
            seconds_passed = timestamp_seconds - self._last_timestamp_seconds
            samples_passed = max(0, int(self._get_current_sample_rate() * seconds_passed))
            self._samples.push_back_zeros(samples_passed)
        elif len(samples) > 0:
            self._samples.push_back(samples)

        self._last_timestamp_seconds = timestamp_seconds

    def _samples_to_path(self) -> None:
        self._points = tuple(
            (float(index), float(self._samples[index])) for index in range(len(self._samples))
        )