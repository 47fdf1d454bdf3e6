"""Gradients: color stops laid out along a geometric parameter.

A gradient maps a point to a position ``t`` (the geometry decides how),
clamps ``t`` into [0, 1] and interpolates between the two stops that
bracket it.

Geometries:
- LinearGeometry: ``t`` is the projection onto the segment start -> end
- RadialGeometry: ``t`` is the distance from the center over the radius
- AxialGeometry: ``t`` is the distance from the line start -> end over width,
  so colors are mirrored on both sides of the axis
- ConicGeometry: ``t`` is the angle swept from ``start_angle`` over a full turn
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from vgfx.domain.color import Color, lerp_color
from vgfx.domain.vector import Vector
from vgfx.exceptions import GradientError


class GradientKind(Enum):
    LINEAR = "linear"
    RADIAL = "radial"
    AXIAL = "axial"
    CONIC = "conic"


@dataclass(frozen=True, slots=True)
class GradientStop:
    """A (position, color) anchor; position is clamped into [0, 1]."""

    position: float
    color: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", min(max(float(self.position), 0.0), 1.0))


@dataclass(frozen=True, slots=True)
class LinearGeometry:
    start: Vector
    end: Vector


@dataclass(frozen=True, slots=True)
class RadialGeometry:
    center: Vector
    radius: float


@dataclass(frozen=True, slots=True)
class AxialGeometry:
    start: Vector
    end: Vector
    width: float


@dataclass(frozen=True, slots=True)
class ConicGeometry:
    center: Vector
    start_angle: float = 0.0


GradientGeometry = Union[LinearGeometry, RadialGeometry, AxialGeometry, ConicGeometry]


@dataclass(frozen=True, slots=True)
class Gradient:
    """Immutable gradient definition.

    Stops are sorted by position on construction (ties keep their given
    order). A degenerate geometry (equal endpoints, zero radius or width)
    yields the first stop's color everywhere.

    Attributes:
        geometry: How points map to a position along the gradient
        stops: At least one stop, ascending by position
    """

    geometry: GradientGeometry
    stops: tuple[GradientStop, ...]

    def __post_init__(self) -> None:
        stops = tuple(self.stops)
        if not stops:
            raise GradientError("A gradient needs at least one color stop")
        object.__setattr__(
            self, "stops", tuple(sorted(stops, key=lambda s: s.position))
        )

    @classmethod
    def two_stop(cls, geometry: GradientGeometry, c1: Color, c2: Color) -> "Gradient":
        """Gradient running from ``c1`` at 0 to ``c2`` at 1."""
        return cls(geometry, (GradientStop(0.0, c1), GradientStop(1.0, c2)))

    @property
    def kind(self) -> GradientKind:
        match self.geometry:
            case LinearGeometry():
                return GradientKind.LINEAR
            case RadialGeometry():
                return GradientKind.RADIAL
            case AxialGeometry():
                return GradientKind.AXIAL
            case ConicGeometry():
                return GradientKind.CONIC
        raise TypeError(f"Unknown gradient geometry: {self.geometry!r}")

    def position(self, point: Vector) -> float | None:
        """Unclamped gradient parameter at ``point``.

        Returns:
            The parameter, or None when the geometry is degenerate
        """
        match self.geometry:
            case LinearGeometry(start=start, end=end):
                axis = end - start
                length_sq = axis.dot(axis)
                if length_sq == 0.0:
                    return None
                return (point - start).dot(axis) / length_sq
            case RadialGeometry(center=center, radius=radius):
                if radius <= 0.0:
                    return None
                return (point - center).length() / radius
            case AxialGeometry(start=start, end=end, width=width):
                direction = (end - start).normalize()
                if width <= 0.0 or direction == Vector(0.0, 0.0):
                    return None
                return abs(direction.cross(point - start)) / width
            case ConicGeometry(center=center, start_angle=start_angle):
                offset = point - center
                angle = math.atan2(offset.y, offset.x) - start_angle
                return (angle % math.tau) / math.tau
        raise TypeError(f"Unknown gradient geometry: {self.geometry!r}")

    def color_at(self, t: float) -> Color:
        """Interpolated color at parameter ``t`` (clamped into [0, 1])."""
        t = min(max(t, 0.0), 1.0)
        first = self.stops[0]
        if t <= first.position:
            return first.color
        for lower, upper in zip(self.stops, self.stops[1:]):
            if t <= upper.position:
                span = upper.position - lower.position
                if span == 0.0:
                    return upper.color
                return lerp_color(lower.color, upper.color, (t - lower.position) / span)
        return self.stops[-1].color

    def sample(self, point: Vector) -> Color:
        """Gradient color at ``point``."""
        t = self.position(point)
        if t is None:
            return self.stops[0].color
        return self.color_at(t)

    def scale_alpha(self, factor: float) -> "Gradient":
        """Same gradient with every stop's alpha multiplied by ``factor``."""
        return Gradient(
            self.geometry,
            tuple(GradientStop(s.position, s.color.scale_alpha(factor)) for s in self.stops),
        )
