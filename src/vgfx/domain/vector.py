"""Points, displacements and axis-aligned boxes.

This module defines the two smallest geometric value types:
- Vector: A 2D point or displacement
- Box: An axis-aligned bounding box with ordered corners
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector:
    """A point or displacement in the plane.

    Immutable and hashable. Every operation returns a new Vector.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vector":
        return Vector(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vector":
        return Vector(self.x / k, self.y / k)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def scale(self, k: float) -> "Vector":
        """Multiply both components by ``k``."""
        return self * k

    def dot(self, other: "Vector") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def distance_to(self, other: "Vector") -> float:
        """Euclidean distance to another point."""
        return (other - self).length()

    def normalize(self) -> "Vector":
        """Unit vector in the same direction.

        The zero vector normalizes to the zero vector instead of raising.
        """
        length = self.length()
        if length == 0.0:
            return Vector(0.0, 0.0)
        return Vector(self.x / length, self.y / length)

    def lerp(self, other: "Vector", t: float) -> "Vector":
        """Linear interpolation ``self + (other - self) * t``.

        ``t`` is not clamped: values outside [0, 1] extrapolate along the line.
        """
        return Vector(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def rotate(self, angle: float, about: "Vector | None" = None) -> "Vector":
        """Rotate counter-clockwise by ``angle`` radians around ``about``.

        Args:
            angle: Rotation angle in radians
            about: Pivot point (origin if None)

        Returns:
            Rotated point
        """
        cx, cy = (about.x, about.y) if about is not None else (0.0, 0.0)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        dx = self.x - cx
        dy = self.y - cy
        return Vector(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)

    def is_close(self, other: "Vector", tolerance: float = 1e-9) -> bool:
        """Check component-wise closeness."""
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


ORIGIN = Vector(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Box:
    """Axis-aligned box with ``min <= max`` on both axes.

    Boxes are produced by bounds computations. Use ``Box.from_points`` when
    building one by hand so the corners are always ordered.

    Attributes:
        min: Corner with the smallest coordinates
        max: Corner with the largest coordinates
    """

    min: Vector
    max: Vector

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValueError(f"Inverted box corners: {self.min} > {self.max}")

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> "Box":
        """Smallest box containing all points.

        Raises:
            ValueError: If no points are given
        """
        pts = list(points)
        if not pts:
            raise ValueError("Box.from_points requires at least one point")
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(Vector(min(xs), min(ys)), Vector(max(xs), max(ys)))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def center(self) -> Vector:
        return Vector((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)

    def corners(self) -> tuple[Vector, Vector, Vector, Vector]:
        """Corners in order: min, (max.x, min.y), max, (min.x, max.y)."""
        return (
            self.min,
            Vector(self.max.x, self.min.y),
            self.max,
            Vector(self.min.x, self.max.y),
        )

    def include(self, point: Vector) -> "Box":
        """Grow the box to contain ``point``."""
        return Box(
            Vector(min(self.min.x, point.x), min(self.min.y, point.y)),
            Vector(max(self.max.x, point.x), max(self.max.y, point.y)),
        )

    def union(self, other: "Box") -> "Box":
        """Smallest box containing both boxes."""
        return self.include(other.min).include(other.max)

    def intersection(self, other: "Box") -> "Box | None":
        """Overlap of two boxes, or None if they are disjoint."""
        lo = Vector(max(self.min.x, other.min.x), max(self.min.y, other.min.y))
        hi = Vector(min(self.max.x, other.max.x), min(self.max.y, other.max.y))
        if lo.x > hi.x or lo.y > hi.y:
            return None
        return Box(lo, hi)

    def contains(self, point: Vector) -> bool:
        """Check if a point lies inside or on the boundary."""
        return (
            self.min.x <= point.x <= self.max.x and self.min.y <= point.y <= self.max.y
        )
