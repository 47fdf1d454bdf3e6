"""Pointwise evaluation of images.

``evaluate`` is the reference semantics of the image algebra. Structural
renderers must agree with it, and the sampling renderer calls it directly.

    eval(Constant(c), p)      = c
    eval(Shape(path, f), p)   = f(p) inside path, else transparent
    eval(Compose(a, b), p)    = blend(eval(b, p), eval(a, p))
    eval(Cut(a, path), p)     = eval(a, p) inside path, else transparent
    eval(Transformed(a, t), p) = eval(a, invert(t)(p))
    eval(Opacity(a, k), p)    = eval(a, p) with alpha * k
    eval(GradientImage(g), p) = g.sample(p)
    eval(Functional(fn), p)   = fn(p)

Evaluation recurses once per combinator level and has no shared state, so
independent points can be evaluated on different threads.
"""

from vgfx.core.blending import blend
from vgfx.core.geometry import DEFAULT_FLATTEN_TOLERANCE, contains_point
from vgfx.domain.color import Color, transparent
from vgfx.domain.gradient import Gradient
from vgfx.domain.image import (
    Compose,
    Constant,
    Cut,
    Fill,
    Functional,
    GradientImage,
    Image,
    Opacity,
    Shape,
    Transformed,
)
from vgfx.domain.vector import Vector


def fill_color(fill: Fill, point: Vector) -> Color:
    """Color of a shape fill at ``point``."""
    if isinstance(fill, Gradient):
        return fill.sample(point)
    return fill


def evaluate(
    image: Image,
    point: Vector,
    tolerance: float = DEFAULT_FLATTEN_TOLERANCE,
) -> Color:
    """Color of ``image`` at ``point``.

    Args:
        image: Image to evaluate
        point: Point in image space
        tolerance: Curve flattening tolerance for inside tests

    Returns:
        The color at the point

    Raises:
        NonInvertibleTransformError: If a Transformed node has a singular matrix
    """
    match image:
        case Constant(color=color):
            return color
        case Shape(path=path, fill=fill, fill_rule=rule):
            if contains_point(path, point, rule, tolerance):
                return fill_color(fill, point)
            return transparent()
        case Compose(base=base, over=over):
            return blend(evaluate(over, point, tolerance), evaluate(base, point, tolerance))
        case Cut(image=inner, path=path, fill_rule=rule):
            if contains_point(path, point, rule, tolerance):
                return evaluate(inner, point, tolerance)
            return transparent()
        case Transformed(image=inner, transform=transform):
            return evaluate(inner, transform.invert().apply(point), tolerance)
        case Opacity(image=inner, factor=factor):
            return evaluate(inner, point, tolerance).scale_alpha(factor)
        case GradientImage(gradient=gradient):
            return gradient.sample(point)
        case Functional(fn=fn):
            return fn(point)
    raise TypeError(f"Not an image: {image!r}")
