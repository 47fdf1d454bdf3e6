"""Color compositing and blend modes.

``blend`` is Porter-Duff "source over". The five separable blend modes use
the W3C Compositing and Blending formulas with ``top`` as the source and
``bottom`` as the backdrop; their alpha is the average of both alphas. Every
function maps channels in [0, 1] to [0, 1].
"""

import math
from collections.abc import Callable
from enum import Enum

from vgfx.domain.color import Color, transparent


def blend(top: Color, bottom: Color) -> Color:
    """Composite ``top`` over ``bottom``.

    ``a_out = a_top + a_bottom * (1 - a_top)`` and each color channel is the
    alpha-weighted mix divided by ``a_out``. Two fully transparent inputs
    give transparent black instead of dividing by zero.
    """
    a_out = top.a + bottom.a * (1 - top.a)
    if a_out <= 0.0:
        return transparent()
    weight = bottom.a * (1 - top.a)
    return Color(
        (top.r * top.a + bottom.r * weight) / a_out,
        (top.g * top.a + bottom.g * weight) / a_out,
        (top.b * top.a + bottom.b * weight) / a_out,
        a_out,
    )


def _separable(fn: Callable[[float, float], float], top: Color, bottom: Color) -> Color:
    return Color(
        fn(top.r, bottom.r),
        fn(top.g, bottom.g),
        fn(top.b, bottom.b),
        (top.a + bottom.a) / 2,
    )


def _multiply(s: float, b: float) -> float:
    return s * b


def _screen(s: float, b: float) -> float:
    return s + b - s * b


def _hard_light(s: float, b: float) -> float:
    if s <= 0.5:
        return _multiply(b, 2 * s)
    return _screen(b, 2 * s - 1)


def _overlay(s: float, b: float) -> float:
    return _hard_light(b, s)


def _soft_light(s: float, b: float) -> float:
    if s <= 0.5:
        return b - (1 - 2 * s) * b * (1 - b)
    if b <= 0.25:
        d = ((16 * b - 12) * b + 4) * b
    else:
        d = math.sqrt(b)
    return b + (2 * s - 1) * (d - b)


def multiply(top: Color, bottom: Color) -> Color:
    """Per channel ``top * bottom``; always darkens."""
    return _separable(_multiply, top, bottom)


def screen(top: Color, bottom: Color) -> Color:
    """Per channel ``1 - (1 - top) * (1 - bottom)``; always lightens."""
    return _separable(_screen, top, bottom)


def overlay(top: Color, bottom: Color) -> Color:
    """Multiply where the backdrop is dark, screen where it is light."""
    return _separable(_overlay, top, bottom)


def hard_light(top: Color, bottom: Color) -> Color:
    """Overlay with the roles of source and backdrop swapped."""
    return _separable(_hard_light, top, bottom)


def soft_light(top: Color, bottom: Color) -> Color:
    """Softer variant of hard light (W3C formula)."""
    return _separable(_soft_light, top, bottom)


class BlendMode(Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"


_MODES: dict[BlendMode, Callable[[Color, Color], Color]] = {
    BlendMode.NORMAL: blend,
    BlendMode.MULTIPLY: multiply,
    BlendMode.SCREEN: screen,
    BlendMode.OVERLAY: overlay,
    BlendMode.HARD_LIGHT: hard_light,
    BlendMode.SOFT_LIGHT: soft_light,
}


def blend_with(mode: BlendMode, top: Color, bottom: Color) -> Color:
    """Combine two colors with the given mode."""
    return _MODES[mode](top, bottom)
