"""Affine transforms.

A Transform holds the six coefficients ``(a, b, c, d, e, f)`` of the map::

    x' = a*x + c*y + e
    y' = b*x + d*y + f

Composition order is fixed: ``compose(t1, t2)`` applies ``t1`` first and then
``t2`` (the matrix product ``M2 @ M1``). ``t1.then(t2)`` reads the same way.
"""

import math
from dataclasses import dataclass

from vgfx.domain.vector import Vector
from vgfx.exceptions import NonInvertibleTransformError


@dataclass(frozen=True, slots=True)
class Transform:
    """Immutable 2x3 affine matrix."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY

    def apply(self, point: Vector) -> Vector:
        """Map a point through the transform."""
        return Vector(
            self.a * point.x + self.c * point.y + self.e,
            self.b * point.x + self.d * point.y + self.f,
        )

    def apply_vector(self, v: Vector) -> Vector:
        """Map a displacement (translation ignored)."""
        return Vector(self.a * v.x + self.c * v.y, self.b * v.x + self.d * v.y)

    def then(self, other: "Transform") -> "Transform":
        """Transform that applies ``self`` and then ``other``."""
        return compose(self, other)

    def invert(self) -> "Transform":
        """Inverse transform.

        Raises:
            NonInvertibleTransformError: If the determinant is zero or not finite
        """
        det = self.determinant
        if det == 0.0 or not math.isfinite(det):
            raise NonInvertibleTransformError(self)
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return Transform(
            a=a,
            b=b,
            c=c,
            d=d,
            e=-(a * self.e + c * self.f),
            f=-(b * self.e + d * self.f),
        )

    def to_tuple(self) -> tuple[float, float, float, float, float, float]:
        """Coefficients as ``(a, b, c, d, e, f)``."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)


IDENTITY = Transform()


def identity() -> Transform:
    """The neutral element of composition."""
    return IDENTITY


def compose(t1: Transform, t2: Transform) -> Transform:
    """Transform that applies ``t1`` first, then ``t2``.

    Examples:
        >>> t = compose(make_translate(1, 0), make_scale(2))
        >>> t.apply(Vector(0, 0))
        Vector(x=2.0, y=0.0)
    """
    return Transform(
        a=t2.a * t1.a + t2.c * t1.b,
        b=t2.b * t1.a + t2.d * t1.b,
        c=t2.a * t1.c + t2.c * t1.d,
        d=t2.b * t1.c + t2.d * t1.d,
        e=t2.a * t1.e + t2.c * t1.f + t2.e,
        f=t2.b * t1.e + t2.d * t1.f + t2.f,
    )


def apply(transform: Transform, point: Vector) -> Vector:
    """Evaluate the affine map at ``point``."""
    return transform.apply(point)


def make_translate(dx: float, dy: float) -> Transform:
    return Transform(e=float(dx), f=float(dy))


def make_scale(sx: float, sy: float | None = None) -> Transform:
    """Scale about the origin; ``sy`` defaults to ``sx``."""
    return Transform(a=float(sx), d=float(sx if sy is None else sy))


def make_rotate(angle: float, about: Vector | None = None) -> Transform:
    """Counter-clockwise rotation by ``angle`` radians around ``about``."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    rotation = Transform(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)
    if about is None:
        return rotation
    return compose(
        compose(make_translate(-about.x, -about.y), rotation),
        make_translate(about.x, about.y),
    )


def make_skew(ax: float, ay: float = 0.0) -> Transform:
    """Skew by angles ``ax`` (along x) and ``ay`` (along y), in radians."""
    return Transform(b=math.tan(ay), c=math.tan(ax))
