"""Colour parsing from hex codes and horizontal gradient images."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass
from typing import Sequence, Tuple

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Color:
    """An sRGB colour with straight alpha, components in 0.0..1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def mix(self, other: "Color", t: float) -> "Color":
        """Blend component-wise towards ``other`` by factor ``t``."""
        n = 1.0 - t
        return Color(
            self.r * n + other.r * t,
            self.g * n + other.g * t,
            self.b * n + other.b * t,
            self.a * n + other.a * t,
        )

    def to_rgba8(self) -> Tuple[int, int, int, int]:
        """Return the colour as four bytes, truncating and saturating."""
        return tuple(_to_byte(c) for c in (self.r, self.g, self.b, self.a))  # type: ignore[return-value]


def _to_byte(value: float) -> int:
    scaled = value * 255.0
    if scaled != scaled:  # NaN
        return 0
    return max(0, min(255, int(scaled)))


BLACK = Color(0.0, 0.0, 0.0)


def _parse_component(text: str, name: str) -> int:
    if not text or not all(ch in _HEX_DIGITS for ch in text):
        raise ValueError(f"Invalid {name} component: {text!r}")
    return int(text, 16)


def hex_to_srgb(hex_code: str) -> Tuple[float, float, float]:
    """Parse ``#rrggbb`` (leading ``#`` optional) into normalised sRGB values.

    Raises ValueError when the code is malformed.
    """
    digits = hex_code.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color code length: {len(digits)}")
    r = _parse_component(digits[0:2], "red")
    g = _parse_component(digits[2:4], "green")
    b = _parse_component(digits[4:6], "blue")
    return (r / 255.0, g / 255.0, b / 255.0)


def hex_to_vec4(hex_code: str) -> Tuple[float, float, float, float]:
    """Return ``(r, g, b, 1.0)``, or all zeros when the code is invalid."""
    try:
        r, g, b = hex_to_srgb(hex_code)
    except ValueError:
        return (0.0, 0.0, 0.0, 0.0)
    return (r, g, b, 1.0)


def hex_to_color(hex_code: str) -> Color:
    """Return the colour for a hex code, or black when the code is invalid."""
    try:
        r, g, b = hex_to_srgb(hex_code)
    except ValueError:
        return BLACK
    return Color(r, g, b)


class Easle(enum.Enum):
    """Named palette colours."""

    PARCHMENT = "#c3a38a"

    def as_color(self) -> Color:
        return hex_to_color(self.value)


@dataclass(frozen=True)
class GradientImage:
    """A square RGBA8 image whose rows all hold the same gradient."""

    width: int
    height: int
    data: bytes


def color_gradient(hex_codes: Sequence[str], width: int) -> GradientImage:
    """Build a square image running left to right through ``hex_codes``.

    The width is split evenly between consecutive pairs of colours; any
    columns left over are filled with the last colour.
    """
    if len(hex_codes) < 2:
        raise ValueError("a gradient needs at least two colours")
    if width < 0:
        raise ValueError("width must not be negative")

    sections = len(hex_codes) - 1
    section_width = width // sections

    gradient = []
    for start_code, end_code in zip(hex_codes, hex_codes[1:]):
        start, end = hex_to_color(start_code), hex_to_color(end_code)
        gradient.extend(start.mix(end, j / section_width) for j in range(section_width))

    last = hex_to_color(hex_codes[-1])
    gradient.extend(last for _ in range(width - len(gradient)))

    row = bytes(byte for color in gradient for byte in color.to_rgba8())
    size = len(gradient)
    return GradientImage(width=size, height=size, data=row * size)