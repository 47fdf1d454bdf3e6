"""Path segments and the persistent Path builder.

This module defines:
- MoveTo, LineTo, CubicTo, QuadTo, ArcTo, ClosePath: the segment variants
- PathSegment: Union of the segment variants
- FillRule: Interior test used when a path is filled or used as a clip
- Path: An immutable, ordered sequence of segments

Every builder call returns a new Path; the receiver is never modified.
Geometry algorithms over paths (bounds, arc reduction, containment) live in
``vgfx.core.geometry``.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from vgfx.domain.vector import Vector
from vgfx.exceptions import MalformedPathError

if TYPE_CHECKING:
    from vgfx.domain.vector import Box

# Quarter-circle cubic approximation constant: 4/3 * (sqrt(2) - 1)
KAPPA = 0.5522847498307936


class FillRule(Enum):
    """Rule deciding which points are inside a (possibly self-intersecting) path.

    NONZERO is the default for every fill and clip in vgfx.
    """

    NONZERO = "nonzero"
    EVENODD = "evenodd"


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at ``point``."""

    point: Vector


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line to ``point``."""

    point: Vector


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier with two control points."""

    c1: Vector
    c2: Vector
    end: Vector


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier with one control point."""

    control: Vector
    end: Vector


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Elliptical arc in SVG endpoint form.

    Attributes:
        rx: X radius
        ry: Y radius
        rotation: Rotation of the ellipse x-axis, in radians
        large_arc: Choose the arc spanning more than 180 degrees
        sweep: Choose the arc drawn in the positive-angle direction
        end: End point
    """

    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    end: Vector


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current subpath back to its start."""


PathSegment = Union[MoveTo, LineTo, CubicTo, QuadTo, ArcTo, ClosePath]

DRAWING_SEGMENTS = (LineTo, CubicTo, QuadTo, ArcTo)


def segment_end(segment: PathSegment) -> Vector | None:
    """End point of a segment (None for ClosePath)."""
    match segment:
        case MoveTo(point=p) | LineTo(point=p):
            return p
        case CubicTo(end=p) | QuadTo(end=p) | ArcTo(end=p):
            return p
        case ClosePath():
            return None
    raise TypeError(f"Not a path segment: {segment!r}")


@dataclass(frozen=True)
class Path:
    """Ordered, immutable sequence of path segments.

    A drawing segment before the first MoveTo is rejected when the Path is
    constructed. Paths are hashable so geometry results can be cached.

    Attributes:
        segments: The segments in drawing order
    """

    segments: tuple[PathSegment, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))
        for index, segment in enumerate(self.segments):
            if isinstance(segment, MoveTo):
                break
            if isinstance(segment, DRAWING_SEGMENTS):
                raise MalformedPathError(segment, index)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    # -- construction -----------------------------------------------------

    @classmethod
    def empty(cls) -> "Path":
        """A path with no segments."""
        return cls()

    def _append(self, segment: PathSegment) -> "Path":
        if isinstance(segment, DRAWING_SEGMENTS) and self.current_point is None:
            raise MalformedPathError(segment, len(self.segments))
        return Path(self.segments + (segment,))

    def move_to(self, p: Vector) -> "Path":
        return self._append(MoveTo(p))

    def line_to(self, p: Vector) -> "Path":
        return self._append(LineTo(p))

    def curve_to(self, c1: Vector, c2: Vector, end: Vector) -> "Path":
        """Append a cubic Bezier."""
        return self._append(CubicTo(c1, c2, end))

    def qcurve_to(self, c: Vector, end: Vector) -> "Path":
        """Append a quadratic Bezier."""
        return self._append(QuadTo(c, end))

    def earc_to(
        self,
        rx: float,
        ry: float,
        rotation: float,
        large_arc: bool,
        sweep: bool,
        end: Vector,
    ) -> "Path":
        """Append an elliptical arc.

        A zero radius or an end point equal to the current point cannot
        describe an ellipse; such arcs are appended as a LineTo to ``end``.
        """
        current = self.current_point
        if current is not None and (rx == 0 or ry == 0 or current == end):
            return self._append(LineTo(end))
        return self._append(ArcTo(abs(rx), abs(ry), rotation, large_arc, sweep, end))

    def close_path(self) -> "Path":
        return self._append(ClosePath())

    def extend(self, segments: Iterable[PathSegment]) -> "Path":
        """Append several segments at once."""
        return Path(self.segments + tuple(segments))

    @classmethod
    def rect(cls, x: float, y: float, w: float, h: float) -> "Path":
        """Closed rectangle with corner ``(x, y)``."""
        return (
            cls()
            .move_to(Vector(x, y))
            .line_to(Vector(x + w, y))
            .line_to(Vector(x + w, y + h))
            .line_to(Vector(x, y + h))
            .close_path()
        )

    @classmethod
    def ellipse(cls, center: Vector, rx: float, ry: float) -> "Path":
        """Closed ellipse built from four cubic quadrants."""
        cx, cy = center.x, center.y
        kx = rx * KAPPA
        ky = ry * KAPPA
        return (
            cls()
            .move_to(Vector(cx + rx, cy))
            .curve_to(Vector(cx + rx, cy + ky), Vector(cx + kx, cy + ry), Vector(cx, cy + ry))
            .curve_to(Vector(cx - kx, cy + ry), Vector(cx - rx, cy + ky), Vector(cx - rx, cy))
            .curve_to(Vector(cx - rx, cy - ky), Vector(cx - kx, cy - ry), Vector(cx, cy - ry))
            .curve_to(Vector(cx + kx, cy - ry), Vector(cx + rx, cy - ky), Vector(cx + rx, cy))
            .close_path()
        )

    @classmethod
    def circle(cls, center: Vector, r: float) -> "Path":
        return cls.ellipse(center, r, r)

    @classmethod
    def polygon(cls, points: Sequence[Vector]) -> "Path":
        """Closed polygon through ``points``; empty for no points."""
        if not points:
            return cls()
        path = cls().move_to(points[0])
        for p in points[1:]:
            path = path.line_to(p)
        return path.close_path()

    @classmethod
    def line(cls, p1: Vector, p2: Vector, thickness: float) -> "Path":
        """Outline of a straight stroke of the given thickness.

        A zero-length or zero-thickness line has no area and yields an
        empty path.
        """
        direction = (p2 - p1).normalize()
        if direction == Vector(0.0, 0.0) or thickness <= 0:
            return cls()
        offset = Vector(-direction.y, direction.x) * (thickness / 2)
        return cls.polygon([p1 + offset, p2 + offset, p2 - offset, p1 - offset])

    # -- queries ----------------------------------------------------------

    @property
    def current_point(self) -> Vector | None:
        """Pen position after the last segment (None before the first MoveTo)."""
        current: Vector | None = None
        start: Vector | None = None
        for segment in self.segments:
            if isinstance(segment, MoveTo):
                current = start = segment.point
            elif isinstance(segment, ClosePath):
                current = start
            else:
                current = segment_end(segment)
        return current

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def has_drawing(self) -> bool:
        """True if any segment draws something."""
        return any(isinstance(s, DRAWING_SEGMENTS) for s in self.segments)

    def bounds(self) -> "Box | None":
        """Exact bounding box, or None when nothing is drawn."""
        from vgfx.core.geometry import path_bounds

        return path_bounds(self)

    def to_curves(self) -> "Path":
        """Same path with every ArcTo replaced by cubic segments."""
        from vgfx.core.geometry import reduce_arcs

        return reduce_arcs(self)

    def transform(self, fn: Callable[[Vector], Vector]) -> "Path":
        """Map every point of every segment through ``fn``.

        Segment kinds and order are preserved, except that elliptical arcs
        are first reduced to cubic curves: a bare point map cannot carry arc
        radii and rotation.

        Args:
            fn: Point mapping, e.g. ``Transform.apply``

        Returns:
            New transformed path
        """
        mapped: list[PathSegment] = []
        for segment in self.to_curves().segments:
            match segment:
                case MoveTo(point=p):
                    mapped.append(MoveTo(fn(p)))
                case LineTo(point=p):
                    mapped.append(LineTo(fn(p)))
                case CubicTo(c1=c1, c2=c2, end=end):
                    mapped.append(CubicTo(fn(c1), fn(c2), fn(end)))
                case QuadTo(control=c, end=end):
                    mapped.append(QuadTo(fn(c), fn(end)))
                case ClosePath():
                    mapped.append(segment)
        return Path(tuple(mapped))
