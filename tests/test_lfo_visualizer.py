import numpy as np
import pytest

from tremolokit.lfo_visualizer import LfoCurve


class _Reader:
    def __init__(self, *blocks):
        self._blocks = list(blocks)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self._blocks:
            return np.asarray(self._blocks.pop(0), dtype=np.float32)
        return np.zeros(0, dtype=np.float32)


def _curve(reader, sample_rate, state):
    return LfoCurve(reader, lambda: sample_rate, lambda: state["bypassed"])


def test_initial_curve_is_flat_with_all_points():
    curve = _curve(_Reader(), 48000.0, {"bypassed": False})
    points = curve.points()
    assert len(points) == LfoCurve.POINTS_ON_PATH
    assert all(y == 0.0 for _, y in points)


def test_x_coordinates_count_up_from_zero():
    curve = _curve(_Reader(), 48000.0, {"bypassed": False})
    xs = [x for x, _ in curve.points()]
    assert xs[0] == 0.0
    assert all(b - a == 1.0 for a, b in zip(xs, xs[1:]))


def test_stride_for_common_sample_rate():
    curve = _curve(_Reader(), 44100.0, {"bypassed": False})
    assert curve.stride() == 8


def test_first_update_only_records_timestamp():
    reader = _Reader([1.0, 2.0, 3.0])
    curve = _curve(reader, 1.0, {"bypassed": False})
    curve.update(0.0)
    assert reader.calls == 0
    assert all(y == 0.0 for _, y in curve.points())


def test_new_samples_appear_at_the_end():
    reader = _Reader([1.0, 2.0, 3.0])
    curve = _curve(reader, 1.0, {"bypassed": False})
    curve.update(0.0)
    curve.update(1.0)
    ys = [y for _, y in curve.points()]
    assert ys[-3:] == [1.0, 2.0, 3.0]
    assert all(y == 0.0 for y in ys[:-3])
    assert len(ys) == LfoCurve.POINTS_ON_PATH


def test_bypass_scrolls_zeros_for_elapsed_time():
    state = {"bypassed": False}
    reader = _Reader([1.0, 2.0, 3.0], [5.0, 5.0, 5.0])
    curve = _curve(reader, 1.0, state)
    curve.update(0.0)
    curve.update(1.0)
    state["bypassed"] = True
    curve.update(3.0)
    ys = [y for _, y in curve.points()]
    assert ys[-5:] == [1.0, 2.0, 3.0, 0.0, 0.0]
    assert reader.calls == 2


def test_transform_maps_reference_points_to_corners():
    curve = _curve(_Reader(), 48000.0, {"bypassed": False})
    width, height = 504.0, 94.0
    a, b, c, d, e, f = curve.transform(width, height)
    end_x = curve.points()[-1][0]
    limit = LfoCurve.Y_LIMIT

    def apply(x, y):
        return a * x + b * y + c, d * x + e * y + f

    assert apply(0.0, limit) == pytest.approx((0.0, 0.0))
    assert apply(0.0, -limit) == pytest.approx((0.0, height))
    assert apply(end_x, -limit) == pytest.approx((width, height))
    assert apply(end_x, 0.0)[1] == pytest.approx(height / 2)