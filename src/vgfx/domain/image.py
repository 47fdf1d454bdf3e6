"""The Image algebra.

An Image denotes a total function from plane points to colors. It is a closed
sum type of eight immutable variants:

- Constant: The same color everywhere
- Shape: A fill (color or gradient) inside a path, transparent outside
- Compose: ``over`` painted on top of ``base``
- Cut: An image restricted to the interior of a path
- Transformed: An image moved by an affine transform
- Opacity: An image with alpha scaled by a factor in [0, 1]
- GradientImage: A gradient filling the whole plane
- Functional: An arbitrary point -> color function

Trees are built bottom-up from existing values, so they cannot contain
cycles. Combinators never modify their receiver. Evaluation lives in
``vgfx.core.evaluator``; every consumer matches the variants exhaustively.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Union

from vgfx.domain.color import Color, transparent
from vgfx.domain.gradient import (
    AxialGeometry,
    ConicGeometry,
    Gradient,
    LinearGeometry,
    RadialGeometry,
)
from vgfx.domain.path import FillRule, Path
from vgfx.domain.transform import (
    Transform,
    compose as compose_transforms,
    make_rotate,
    make_scale,
    make_translate,
)
from vgfx.domain.vector import ORIGIN, Box, Vector
from vgfx.exceptions import UnboundedImageError

Fill = Union[Color, Gradient]


class ImageOps:
    """Combinators shared by every Image variant."""

    def apply_transform(self, transform: Transform) -> "Image":
        """Move the image by ``transform``; nested transforms are merged."""
        if isinstance(self, Transformed):
            return Transformed(self.image, compose_transforms(self.transform, transform))
        return Transformed(self, transform)  # type: ignore[arg-type]

    def scale(self, sx: float, sy: float | None = None) -> "Image":
        return self.apply_transform(make_scale(sx, sy))

    def rotate(self, angle: float, about: Vector | None = None) -> "Image":
        """Rotate counter-clockwise by ``angle`` radians."""
        return self.apply_transform(make_rotate(angle, about))

    def translate_img(self, dx: float, dy: float) -> "Image":
        return self.apply_transform(make_translate(dx, dy))

    def compose(self, other: "Image") -> "Image":
        """Paint ``other`` over this image."""
        return Compose(self, other)  # type: ignore[arg-type]

    def cut(self, path: Path, fill_rule: FillRule = FillRule.NONZERO) -> "Image":
        """Restrict the image to the interior of ``path``."""
        return Cut(self, path, fill_rule)  # type: ignore[arg-type]

    def with_opacity(self, alpha: float) -> "Image":
        """Scale alpha by ``alpha`` (clamped into [0, 1]).

        Repeated calls multiply: ``img.with_opacity(a).with_opacity(b)`` is
        ``img.with_opacity(a * b)``.
        """
        factor = _clamp_factor(alpha)
        if isinstance(self, Opacity):
            return Opacity(self.image, self.factor * factor)
        return Opacity(self, factor)  # type: ignore[arg-type]

    def bounds(self) -> Box | None:
        """Box outside of which the image is fully transparent.

        Returns None when the image is unbounded (constants, gradients,
        functions) or draws nothing.
        """
        bounded, box = _support(self)  # type: ignore[arg-type]
        return box if bounded else None

    def tile(self, nx: int, ny: int, cell: tuple[float, float] | None = None) -> "Image":
        """Repeat the image ``nx`` times to the right and ``ny`` times down.

        An image that draws nothing is returned unchanged.

        Args:
            nx: Number of columns (at least 1)
            ny: Number of rows (at least 1)
            cell: Step between copies; defaults to the image's bounds size

        Raises:
            UnboundedImageError: If no cell is given and the image is unbounded
            ValueError: If nx or ny is below 1
        """
        if nx < 1 or ny < 1:
            raise ValueError(f"tile counts must be positive, got {nx}x{ny}")
        if cell is None:
            bounded, box = _support(self)  # type: ignore[arg-type]
            if not bounded:
                raise UnboundedImageError("tile")
            if box is None:
                return self  # type: ignore[return-value]
            cell = (box.width, box.height)
        step_x, step_y = cell
        result: Image = self  # type: ignore[assignment]
        for j in range(ny):
            for i in range(nx):
                if i == 0 and j == 0:
                    continue
                result = result.compose(self.translate_img(i * step_x, j * step_y))
        return result

    def checkerboard(
        self,
        other: "Image",
        nx: int,
        ny: int,
        cell_width: float,
        cell_height: float,
    ) -> "Image":
        """Alternate this image and ``other`` over an ``nx`` by ``ny`` grid.

        Cell ``(i, j)`` spans ``[i*w, (i+1)*w) x [j*h, (j+1)*h)`` and shows
        this image when ``i + j`` is even, ``other`` otherwise.
        """
        if nx < 1 or ny < 1:
            raise ValueError(f"checkerboard counts must be positive, got {nx}x{ny}")
        result: Image = empty()
        for j in range(ny):
            for i in range(nx):
                source = self if (i + j) % 2 == 0 else other
                cell = Path.rect(i * cell_width, j * cell_height, cell_width, cell_height)
                result = result.compose(source.cut(cell))
        return result


@dataclass(frozen=True)
class Constant(ImageOps):
    color: Color


@dataclass(frozen=True)
class Shape(ImageOps):
    path: Path
    fill: Fill
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True)
class Compose(ImageOps):
    base: "Image"
    over: "Image"


@dataclass(frozen=True)
class Cut(ImageOps):
    image: "Image"
    path: Path
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True)
class Transformed(ImageOps):
    image: "Image"
    transform: Transform


@dataclass(frozen=True)
class Opacity(ImageOps):
    image: "Image"
    factor: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "factor", _clamp_factor(self.factor))


@dataclass(frozen=True)
class GradientImage(ImageOps):
    gradient: Gradient


@dataclass(frozen=True)
class Functional(ImageOps):
    fn: Callable[[Vector], Color]


Image = Union[Constant, Shape, Compose, Cut, Transformed, Opacity, GradientImage, Functional]


def _clamp_factor(value: float) -> float:
    if value != value:  # NaN
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def _support(image: Image) -> tuple[bool, Box | None]:
    """(is_bounded, box); a bounded image with box None draws nothing."""
    match image:
        case Constant(color=color):
            return (True, None) if color.is_transparent else (False, None)
        case Shape(path=path):
            return True, path.bounds()
        case Compose(base=base, over=over):
            base_bounded, base_box = _support(base)
            over_bounded, over_box = _support(over)
            if not (base_bounded and over_bounded):
                return False, None
            if base_box is None or over_box is None:
                return True, base_box or over_box
            return True, base_box.union(over_box)
        case Cut(image=inner, path=path):
            clip = path.bounds()
            if clip is None:
                return True, None
            inner_bounded, inner_box = _support(inner)
            if not inner_bounded:
                return True, clip
            if inner_box is None:
                return True, None
            return True, inner_box.intersection(clip)
        case Transformed(image=inner, transform=transform):
            inner_bounded, inner_box = _support(inner)
            if not inner_bounded or inner_box is None:
                return inner_bounded, None
            return True, Box.from_points(transform.apply(p) for p in inner_box.corners())
        case Opacity(image=inner, factor=factor):
            if factor == 0.0:
                return True, None
            return _support(inner)
        case GradientImage() | Functional():
            return False, None
    raise TypeError(f"Not an image: {image!r}")


# -- constructors ----------------------------------------------------------


def const_color(color: Color) -> Image:
    """The same color at every point."""
    return Constant(color)


def empty() -> Image:
    """Fully transparent everywhere."""
    return Constant(transparent())


def shape(path: Path, fill: Fill, fill_rule: FillRule = FillRule.NONZERO) -> Image:
    """Fill the interior of ``path`` with a color or gradient."""
    return Shape(path, fill, fill_rule)


def circle(color: Color, r: float) -> Image:
    """Disc of radius ``r`` centered at the origin."""
    return Shape(Path.circle(ORIGIN, r), color)


def ellipse(color: Color, rx: float, ry: float) -> Image:
    """Ellipse centered at the origin."""
    return Shape(Path.ellipse(ORIGIN, rx, ry), color)


def rectangle(color: Color, w: float, h: float) -> Image:
    """``w`` by ``h`` rectangle centered at the origin."""
    return Shape(Path.rect(-w / 2, -h / 2, w, h), color)


def line(color: Color, p1: Vector, p2: Vector, thickness: float = 1.0) -> Image:
    """Straight stroke from ``p1`` to ``p2``."""
    return Shape(Path.line(p1, p2, thickness), color)


def polygon(
    color: Color,
    points: Sequence[Vector],
    fill_rule: FillRule = FillRule.NONZERO,
) -> Image:
    """Closed polygon; self-intersections are resolved by ``fill_rule``."""
    return Shape(Path.polygon(points), color, fill_rule)


def gradient(g: Gradient) -> Image:
    """A gradient covering the whole plane."""
    return GradientImage(g)


def linear_gradient(c1: Color, c2: Color, start: Vector, end: Vector) -> Image:
    return GradientImage(Gradient.two_stop(LinearGeometry(start, end), c1, c2))


def radial_gradient(c1: Color, c2: Color, center: Vector, radius: float) -> Image:
    return GradientImage(Gradient.two_stop(RadialGeometry(center, radius), c1, c2))


def axial_gradient(
    c1: Color, c2: Color, start: Vector, end: Vector, width: float
) -> Image:
    """``c1`` on the line through start and end, ``c2`` at ``width`` from it."""
    return GradientImage(Gradient.two_stop(AxialGeometry(start, end, width), c1, c2))


def conic_gradient(
    c1: Color, c2: Color, center: Vector, start_angle: float = 0.0
) -> Image:
    return GradientImage(Gradient.two_stop(ConicGeometry(center, start_angle), c1, c2))


def from_function(fn: Callable[[Vector], Color]) -> Image:
    """Image defined by an arbitrary point -> color function."""
    return Functional(fn)
