"""Colours, gradients and geometry of the tremolo editor's custom look."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

Bounds = tuple[float, float, float, float]
Point = tuple[float, float]

BUTTON_INSET_WIDTH = 2.0
FONT_POINT_HEIGHT = 12.0
SIDE_LABEL_POINT_HEIGHT = 10.0
RATE_LABEL_POINT_HEIGHT = 12.0
INTER_MEDIUM = "Inter Medium"
INTER_BOLD = "Inter Bold"


class Colors(IntEnum):
    """Named colours of the editor's palette."""

    ORANGE = 0
    PALE_BLUE = 1


@dataclass(frozen=True)
class Colour:
    """A 32-bit ARGB colour."""

    argb: int

    def __init__(self, argb: int) -> None:
        argb = int(argb)
        if not 0 <= argb <= 0xFFFFFFFF:
            raise ValueError(f"ARGB value {argb:#x} does not fit in 32 bits")
        object.__setattr__(self, "argb", argb)

    @classmethod
    def from_components(cls, alpha: int, red: int, green: int, blue: int) -> "Colour":
        for component in (alpha, red, green, blue):
            if not 0 <= component <= 0xFF:
                raise ValueError(f"colour component {component} out of range")
        return cls((alpha << 24) | (red << 16) | (green << 8) | blue)

    def to_hex(self) -> str:
        """Eight upper-case hex digits, alpha first."""
        return f"{self.argb:08X}"

    def components(self) -> tuple[int, int, int, int]:
        """The (alpha, red, green, blue) components, each 0..255."""
        return (
            (self.argb >> 24) & 0xFF,
            (self.argb >> 16) & 0xFF,
            (self.argb >> 8) & 0xFF,
            self.argb & 0xFF,
        )

    def interpolated_with(self, other: "Colour", proportion: float) -> "Colour":
        """Blend linearly towards ``other``; 0 gives self, 1 gives ``other``."""
        proportion = min(1.0, max(0.0, float(proportion)))
        mixed = (
            round(a + (b - a) * proportion)
            for a, b in zip(self.components(), other.components())
        )
        return Colour.from_components(*mixed)


_PALETTE = {
    Colors.ORANGE: Colour(0xFFFFAA00),
    Colors.PALE_BLUE: Colour(0xFFDDECFF),
}

TRANSPARENT_BLACK = Colour(0x00000000)
DARK_BLUE = Colour(0xFF153245)


def get_color(color: Colors) -> Colour:
    """Return the palette colour for ``color``."""
    return _PALETTE[Colors(color)]


@dataclass
class ColourGradient:
    """Colour stops between positions 0 and 1, linear or radial."""

    start: Colour
    end: Colour
    radial: bool = False
    _stops: list[tuple[float, Colour]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._stops = [(0.0, self.start), (1.0, self.end)]

    @property
    def stops(self) -> tuple[tuple[float, Colour], ...]:
        return tuple(self._stops)

    def add_colour(self, position: float, colour: Colour) -> None:
        """Insert a stop; a stop already at ``position`` is replaced."""
        position = float(position)
        if not 0.0 <= position <= 1.0:
            raise ValueError(f"gradient position {position} outside [0, 1]")
        positions = [stop[0] for stop in self._stops]
        index = bisect.bisect_left(positions, position)
        if index < len(self._stops) and self._stops[index][0] == position:
            self._stops[index] = (position, colour)
        else:
            self._stops.insert(index, (position, colour))

    def colour_at(self, position: float) -> Colour:
        """The colour at ``position``, blending between neighbouring stops."""
        position = min(1.0, max(0.0, float(position)))
        positions = [stop[0] for stop in self._stops]
        index = bisect.bisect_right(positions, position)
        if index >= len(self._stops):
            return self._stops[-1][1]
        if index == 0:
            return self._stops[0][1]
        (low_pos, low), (high_pos, high) = self._stops[index - 1], self._stops[index]
        if high_pos == low_pos:
            return high
        return low.interpolated_with(high, (position - low_pos) / (high_pos - low_pos))


def blue_button_gradient() -> ColourGradient:
    gradient = ColourGradient(Colour(0xFF4A7090), Colour(0xFF324258))
    gradient.add_colour(0.73, Colour(0xFF315160))
    return gradient


def orange_button_gradient() -> ColourGradient:
    return ColourGradient(Colour(0xFFFF901A), Colour(0xFFFFC300))


def button_inset_gradient() -> ColourGradient:
    gradient = ColourGradient(Colour(0xFF22232C), Colour(0xFF263235))
    gradient.add_colour(0.35, Colour(0xFF303538))
    return gradient


COLOUR_SCHEME = {
    "combo_box.text": get_color(Colors.PALE_BLUE),
    "label.text": get_color(Colors.PALE_BLUE),
    "popup_menu.background": DARK_BLUE,
    "popup_menu.text": get_color(Colors.PALE_BLUE),
    "popup_menu.highlighted_text": Colour(0xFF0C131E),
    "popup_menu.highlighted_background": get_color(Colors.ORANGE),
    "bubble.background": DARK_BLUE,
    "bubble.outline": Colour(0xFF0C0E16),
}


def rotary_value_angle(slider_pos: float, start_angle: float, end_angle: float) -> float:
    """Angle the value arc of a rotary slider reaches at ``slider_pos``."""
    return start_angle + slider_pos * (end_angle - start_angle)


def _reduced(bounds: Bounds, dx: float, dy: float | None = None) -> Bounds:
    dy = dx if dy is None else dy
    x, y, width, height = bounds
    return (x + dx, y + dy, max(0.0, width - 2.0 * dx), max(0.0, height - 2.0 * dy))


class KnobBounds(NamedTuple):
    """Nested areas a rotary knob is drawn in, outermost first."""

    canal: Bounds
    value_arc: Bounds
    knob: Bounds
    knob_top: Bounds


def knob_bounds(x: float, y: float, width: float, height: float) -> KnobBounds:
    """Areas of the knob canal, value arc, knob body and knob top."""
    canal = _reduced((float(x), float(y), float(width), float(height)), 3.75)
    knob = _reduced(canal, 4.0)
    return KnobBounds(
        canal=canal,
        value_arc=_reduced(canal, 0.25),
        knob=knob,
        knob_top=_reduced(knob, 7.0),
    )


def combo_box_arrow(width: float, height: float) -> tuple[Point, Point, Point]:
    """The downward arrow of a combo box: top-left, bottom tip, top-right."""
    x, y, w, h = _reduced((0.0, 0.0, float(width), float(height)), 10.0, 11.0)
    removed = min(104.0, w)
    x += removed
    w -= removed
    return ((x, y), (x + w / 2.0, y + h), (x + w, y))


@dataclass(frozen=True)
class ToggleStyle:
    """How a toggle button is drawn in one of its states."""

    gradient: ColourGradient
    text_colour: Colour
    font: str
    bold: bool
    point_height: float = FONT_POINT_HEIGHT


def toggle_button_style(toggled: bool) -> ToggleStyle:
    """Blue with pale text when off; orange with dark bold text when on."""
    if toggled:
        return ToggleStyle(orange_button_gradient(), Colour(0xFF501A0B), INTER_BOLD, True)
    return ToggleStyle(
        blue_button_gradient(), get_color(Colors.PALE_BLUE), INTER_MEDIUM, False
    )


def about_message(
    manufacturer: str, name: str, version: str, build_date: str, build_time: str
) -> str:
    """Text of the bubble shown when the logo is double-clicked."""
    return f"{manufacturer}\n{name}\n{build_date}\n{build_time}\nv{version}"