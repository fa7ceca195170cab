"""Component geometry of the tremolo editor and the small example windows."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntFlag
from typing import NamedTuple, Optional, Union

Number = Union[int, float]

EDITOR_WIDTH = 540
EDITOR_HEIGHT = 270


@dataclass
class Rectangle:
    """An axis-aligned rectangle whose ``remove_from_*`` methods cut it up."""

    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0

    @property
    def right(self) -> Number:
        return self.x + self.width

    @property
    def bottom(self) -> Number:
        return self.y + self.height

    def copy(self) -> "Rectangle":
        return dataclasses.replace(self)

    def reduced(self, dx: Number, dy: Optional[Number] = None) -> "Rectangle":
        """A copy shrunk by ``dx`` on the left and right and ``dy`` on top and bottom."""
        dy = dx if dy is None else dy
        return Rectangle(
            self.x + dx,
            self.y + dy,
            max(0, self.width - 2 * dx),
            max(0, self.height - 2 * dy),
        )

    def remove_from_top(self, amount: Number) -> "Rectangle":
        """Cut a strip off the top and return it."""
        amount = min(self._checked(amount), self.height)
        strip = Rectangle(self.x, self.y, self.width, amount)
        self.y += amount
        self.height -= amount
        return strip

    def remove_from_bottom(self, amount: Number) -> "Rectangle":
        """Cut a strip off the bottom and return it."""
        amount = min(self._checked(amount), self.height)
        strip = Rectangle(self.x, self.y + self.height - amount, self.width, amount)
        self.height -= amount
        return strip

    def remove_from_left(self, amount: Number) -> "Rectangle":
        """Cut a strip off the left and return it."""
        amount = min(self._checked(amount), self.width)
        strip = Rectangle(self.x, self.y, amount, self.height)
        self.x += amount
        self.width -= amount
        return strip

    def remove_from_right(self, amount: Number) -> "Rectangle":
        """Cut a strip off the right and return it."""
        amount = min(self._checked(amount), self.width)
        strip = Rectangle(self.x + self.width - amount, self.y, amount, self.height)
        self.width -= amount
        return strip

    def centre(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains_rectangle(self, other: "Rectangle") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    @staticmethod
    def _checked(amount: Number) -> Number:
        if amount < 0:
            raise ValueError(f"cannot remove a negative amount ({amount})")
        return amount


class Justification(IntFlag):
    """Placement of content within an area, combinable as flags."""

    LEFT = 1
    RIGHT = 2
    HORIZONTALLY_CENTRED = 4
    TOP = 8
    BOTTOM = 16
    VERTICALLY_CENTRED = 32
    HORIZONTALLY_JUSTIFIED = 64
    CENTRED = 36
    CENTRED_LEFT = 33
    CENTRED_RIGHT = 34
    CENTRED_TOP = 12
    CENTRED_BOTTOM = 20
    TOP_LEFT = 9
    TOP_RIGHT = 10
    BOTTOM_LEFT = 17
    BOTTOM_RIGHT = 18

    def place(self, width: Number, height: Number, area: Rectangle) -> Rectangle:
        """Position a ``width`` x ``height`` box inside ``area``."""
        if self & Justification.HORIZONTALLY_CENTRED:
            x = area.x + (area.width - width) / 2
        elif self & Justification.RIGHT:
            x = area.right - width
        else:
            x = area.x
        if self & Justification.VERTICALLY_CENTRED:
            y = area.y + (area.height - height) / 2
        elif self & Justification.BOTTOM:
            y = area.bottom - height
        else:
            y = area.y
        return Rectangle(x, y, width, height)


# Justifications shown together by the example; the plain ones conflict with these.
LABEL_JUSTIFICATIONS = (
    Justification.CENTRED,
    Justification.CENTRED_LEFT,
    Justification.CENTRED_RIGHT,
    Justification.CENTRED_TOP,
    Justification.CENTRED_BOTTOM,
    Justification.TOP_LEFT,
    Justification.TOP_RIGHT,
    Justification.BOTTOM_LEFT,
    Justification.BOTTOM_RIGHT,
)


@dataclass(frozen=True)
class EditorLayout:
    """Bounds of every component of the tremolo editor."""

    background: Rectangle
    logo: Rectangle
    lfo_visualizer: Rectangle
    rate_slider: Rectangle
    rate_label: Rectangle
    waveform_combo_box: Rectangle
    waveform_label: Rectangle
    bypass_button: Rectangle
    bypass_label: Rectangle


def _trimmed(bounds: Rectangle, top: int, right: int, bottom: int, left: int) -> Rectangle:
    area = bounds.copy()
    area.remove_from_top(top)
    area.remove_from_right(right)
    area.remove_from_bottom(bottom)
    area.remove_from_left(left)
    return area


def editor_layout(width: int = EDITOR_WIDTH, height: int = EDITOR_HEIGHT) -> EditorLayout:
    """Lay out the editor's components in a ``width`` x ``height`` window."""
    bounds = Rectangle(0, 0, width, height)

    lfo_bounds = bounds.reduced(18, 27)
    lfo_bounds.remove_from_top(122)

    rate_bounds = bounds.reduced(230, 40)
    rate_bounds.remove_from_bottom(110)

    return EditorLayout(
        background=bounds.copy(),
        logo=Rectangle(16, 16, 105, 24),
        lfo_visualizer=lfo_bounds,
        rate_slider=rate_bounds,
        rate_label=rate_bounds.copy(),
        waveform_combo_box=_trimmed(bounds, 66, 392, 176, 16),
        # labels get more room than the design to avoid ellipsis insertion
        waveform_label=_trimmed(bounds, 48, 461, 206, 20),
        bypass_button=_trimmed(bounds, 66, 16, 176, 392),
        bypass_label=_trimmed(bounds, 48, 104, 206, 396),
    )


def coordinates_layout(width: Number = 400, height: Number = 400) -> tuple[Rectangle, Rectangle]:
    """Split the area into an upper and a lower half."""
    bounds = Rectangle(0.0, 0.0, float(width), float(height))
    half_height = bounds.height / 2.0
    upper = Rectangle(bounds.x, bounds.y, bounds.width, half_height)
    lower = Rectangle(bounds.x, bounds.y + half_height, bounds.width, half_height)
    return upper, lower


def justification_label_bounds(width: int = 500, height: int = 500) -> Rectangle:
    """The area every label of the justification example shares."""
    return Rectangle(0, 0, width, height).reduced(20)


class TaskLayout(NamedTuple):
    start_button: Rectangle
    progress_bar: Rectangle
    result_label: Rectangle


def long_running_task_layout(width: int = 500, height: int = 300) -> TaskLayout:
    """Stack the button, progress bar and result label from the top."""
    bounds = Rectangle(0, 0, width, height)
    return TaskLayout(
        start_button=bounds.remove_from_top(100).reduced(20),
        progress_bar=bounds.remove_from_top(100).reduced(20),
        result_label=bounds.remove_from_top(100).reduced(20),
    )