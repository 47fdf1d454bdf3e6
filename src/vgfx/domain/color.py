"""RGBA colors.

Channels are floats in [0, 1]. Every producing operation clamps, so a Color
can never hold an out-of-range channel. Compositing and blend modes live in
``vgfx.core.blending``.
"""

import math
import string
from dataclasses import dataclass

from vgfx.exceptions import ColorParseError


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def _to_byte(channel: float) -> int:
    return int(channel * 255 + 0.5)


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with channels clamped into [0, 1].

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
        a: Alpha (0 = fully transparent, 1 = opaque)
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _clamp01(self.r))
        object.__setattr__(self, "g", _clamp01(self.g))
        object.__setattr__(self, "b", _clamp01(self.b))
        object.__setattr__(self, "a", _clamp01(self.a))

    @property
    def is_opaque(self) -> bool:
        return self.a >= 1.0

    @property
    def is_transparent(self) -> bool:
        return self.a <= 0.0

    def with_alpha(self, alpha: float) -> "Color":
        """Same color with a replaced alpha."""
        return Color(self.r, self.g, self.b, alpha)

    def scale_alpha(self, factor: float) -> "Color":
        """Same color with alpha multiplied by ``factor``."""
        return Color(self.r, self.g, self.b, self.a * factor)

    def to_hex(self) -> str:
        """Hexadecimal form, ``#RRGGBB`` for opaque colors else ``#RRGGBBAA``.

        Each channel is rounded to the nearest of 255 levels.

        Examples:
            >>> rgb(1.0, 0.0, 0.0).to_hex()
            '#FF0000'
            >>> rgba(0, 0, 0, 0).to_hex()
            '#00000000'
        """
        r, g, b, a = (_to_byte(c) for c in (self.r, self.g, self.b, self.a))
        if a == 255:
            return f"#{r:02X}{g:02X}{b:02X}"
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"

    def to_hsv(self) -> tuple[float, float, float]:
        """Hue in [0, 360), saturation and value in [0, 1]. Alpha is dropped."""
        hi = max(self.r, self.g, self.b)
        lo = min(self.r, self.g, self.b)
        delta = hi - lo
        if delta == 0.0:
            hue = 0.0
        elif hi == self.r:
            hue = 60.0 * (((self.g - self.b) / delta) % 6)
        elif hi == self.g:
            hue = 60.0 * ((self.b - self.r) / delta + 2)
        else:
            hue = 60.0 * ((self.r - self.g) / delta + 4)
        saturation = 0.0 if hi == 0.0 else delta / hi
        return (hue % 360.0, saturation, hi)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)


def rgba(r: float, g: float, b: float, a: float) -> Color:
    """Color from four channels, each clamped into [0, 1]."""
    return Color(r, g, b, a)


def rgb(r: float, g: float, b: float) -> Color:
    """Opaque color from three channels."""
    return Color(r, g, b, 1.0)


def gray(level: float) -> Color:
    """Opaque gray with all color channels equal to ``level``."""
    return Color(level, level, level, 1.0)


def hsv(h: float, s: float, v: float) -> Color:
    """Opaque color from hue (degrees, wrapped mod 360), saturation and value."""
    h = h % 360.0
    s = _clamp01(s)
    v = _clamp01(v)
    chroma = v * s
    sector = h / 60.0
    x = chroma * (1 - abs(sector % 2 - 1))
    m = v - chroma
    if sector < 1:
        r, g, b = chroma, x, 0.0
    elif sector < 2:
        r, g, b = x, chroma, 0.0
    elif sector < 3:
        r, g, b = 0.0, chroma, x
    elif sector < 4:
        r, g, b = 0.0, x, chroma
    elif sector < 5:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    return Color(r + m, g + m, b + m, 1.0)


def from_hex(text: str) -> Color:
    """Parse ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA``.

    Raises:
        ColorParseError: If the text is not a valid hex color
    """
    digits = text.strip()
    if not digits.startswith("#"):
        raise ColorParseError(text, "missing leading '#'")
    digits = digits[1:]
    if not all(ch in string.hexdigits for ch in digits):
        raise ColorParseError(text, "invalid hex digit")
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        raise ColorParseError(text, "expected 3, 4, 6 or 8 hex digits")
    values = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    return Color(*values)


def lerp_color(c1: Color, c2: Color, t: float) -> Color:
    """Per-channel linear interpolation including alpha.

    ``t`` is not clamped, matching ``Vector.lerp``; the result is clamped by
    Color construction.
    """
    return Color(
        c1.r + (c2.r - c1.r) * t,
        c1.g + (c2.g - c1.g) * t,
        c1.b + (c2.b - c1.b) * t,
        c1.a + (c2.a - c1.a) * t,
    )


def transparent() -> Color:
    return Color(0.0, 0.0, 0.0, 0.0)


def black() -> Color:
    return Color(0.0, 0.0, 0.0)


def white() -> Color:
    return Color(1.0, 1.0, 1.0)


def red() -> Color:
    return Color(1.0, 0.0, 0.0)


def green() -> Color:
    return Color(0.0, 1.0, 0.0)


def blue() -> Color:
    return Color(0.0, 0.0, 1.0)


def yellow() -> Color:
    return Color(1.0, 1.0, 0.0)


def cyan() -> Color:
    return Color(0.0, 1.0, 1.0)


def magenta() -> Color:
    return Color(1.0, 0.0, 1.0)


def gold() -> Color:
    return Color(1.0, 0.843, 0.0)


def orange() -> Color:
    return Color(1.0, 0.647, 0.0)


def purple() -> Color:
    return Color(0.5, 0.0, 0.5)
