"""Structural lowering of images to documents.

Finite shape compositions can be emitted as draw commands instead of a
sampled grid. Lowering walks the image tree once, carrying the accumulated
transform and opacity, and only succeeds when the resulting commands paint
exactly what ``vgfx.core.evaluator.evaluate`` computes:

- Constant: a rectangle covering the canvas
- Shape: a path command (color fills under any transform, gradient fills
  only untransformed)
- Compose: base commands followed by over commands
- Transformed: merged into the accumulated transform
- Opacity: folded into the alpha of a single painted command
- GradientImage: an untransformed canvas-sized rectangle

Cut and Functional images, and group opacity over several commands, raise
``UnsupportedImageError`` so callers can fall back to sampling.
"""

import itertools
from collections.abc import Iterator

from vgfx.domain.color import Color
from vgfx.domain.document import (
    Document,
    DrawCommand,
    GradientDef,
    GradientRef,
    PathCommand,
    RectangleCommand,
)
from vgfx.domain.gradient import Gradient
from vgfx.domain.image import (
    Compose,
    Constant,
    Cut,
    Functional,
    GradientImage,
    Image,
    Opacity,
    Shape,
    Transformed,
)
from vgfx.domain.transform import IDENTITY, Transform, compose
from vgfx.exceptions import UnsupportedImageError


def image_to_document(image: Image, width: float, height: float) -> Document:
    """Lower an image to draw commands on a ``width x height`` canvas.

    Args:
        image: Image to lower
        width: Canvas width
        height: Canvas height

    Returns:
        Document painting the image

    Raises:
        UnsupportedImageError: If the image has no exact structural form
        NonInvertibleTransformError: If a transform in the tree is singular
    """
    ids = (f"gradient-{n}" for n in itertools.count(1))
    commands = _lower(image, IDENTITY, 1.0, width, height, ids)
    return Document(width, height, tuple(commands))


def can_lower(image: Image) -> bool:
    """Check if ``image`` has a structural form."""
    try:
        image_to_document(image, 1.0, 1.0)
    except UnsupportedImageError:
        return False
    return True


def _gradient_commands(
    gradient: Gradient, ids: Iterator[str]
) -> tuple[GradientDef, GradientRef]:
    gid = next(ids)
    return GradientDef(gid, gradient), GradientRef(gid)


def _lower(
    image: Image,
    transform: Transform,
    alpha: float,
    width: float,
    height: float,
    ids: Iterator[str],
) -> list[DrawCommand]:
    match image:
        case Constant(color=color):
            if color.is_transparent:
                return []
            return [RectangleCommand(0, 0, width, height, color.scale_alpha(alpha))]

        case Shape(path=path, fill=fill, fill_rule=rule):
            if not path.has_drawing:
                return []
            if isinstance(fill, Color):
                placed = path if transform.is_identity else path.transform(transform.apply)
                return [PathCommand(placed, fill.scale_alpha(alpha), rule)]
            if not transform.is_identity:
                raise UnsupportedImageError("Shape", "gradient fill under a transform")
            definition, ref = _gradient_commands(fill.scale_alpha(alpha), ids)
            return [definition, PathCommand(path, ref, rule)]

        case Compose(base=base, over=over):
            return _lower(base, transform, alpha, width, height, ids) + _lower(
                over, transform, alpha, width, height, ids
            )

        case Transformed(image=inner, transform=inner_transform):
            inner_transform.invert()
            return _lower(
                inner, compose(inner_transform, transform), alpha, width, height, ids
            )

        case Opacity(image=inner, factor=factor):
            commands = _lower(inner, transform, alpha * factor, width, height, ids)
            painted = [c for c in commands if not isinstance(c, GradientDef)]
            if len(painted) > 1:
                raise UnsupportedImageError("Opacity", "group opacity over several shapes")
            return commands

        case GradientImage(gradient=g):
            if not transform.is_identity:
                raise UnsupportedImageError("GradientImage", "transformed gradient")
            definition, ref = _gradient_commands(g.scale_alpha(alpha), ids)
            return [definition, RectangleCommand(0, 0, width, height, ref)]

        case Cut():
            raise UnsupportedImageError("Cut")

        case Functional():
            raise UnsupportedImageError("Functional")

    raise TypeError(f"Not an image: {image!r}")
