"""Geometric operations on paths.

This module provides the analytic geometry behind paths and shapes:
- Exact bounding boxes, including Bezier curve extrema and arc extrema
- Elliptical arc endpoint -> center parameterization
- Arc to cubic Bezier reduction
- Path flattening to polygons
- Point-in-path testing with nonzero or even-odd winding

All functions are pure and stateless.
"""

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from vgfx.core._bezier import cubic_point, flatten_cubic, flatten_quadratic, quadratic_point
from vgfx.domain.path import (
    ArcTo,
    ClosePath,
    CubicTo,
    FillRule,
    LineTo,
    MoveTo,
    Path,
    PathSegment,
    QuadTo,
)
from vgfx.domain.vector import Box, Vector

logger = logging.getLogger(__name__)

DEFAULT_FLATTEN_TOLERANCE = 0.05
MAX_ARC_SEGMENT_ANGLE = math.pi / 2

_EPSILON = 1e-12


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Real roots of ``a*t**2 + b*t + c = 0``.

    Falls back to the linear equation when ``a`` vanishes.

    Examples:
        >>> sorted(solve_quadratic(1.0, -3.0, 2.0))
        [1.0, 2.0]
        >>> solve_quadratic(0.0, 2.0, -1.0)
        [0.5]
    """
    if abs(a) < _EPSILON:
        if abs(b) < _EPSILON:
            return []
        return [-c / b]
    disc = b * b - 4 * a * c
    if disc < 0:
        return []
    sq = math.sqrt(disc)
    # Numerically stable form avoiding cancellation
    q = -0.5 * (b + math.copysign(sq, b))
    if q == 0.0:
        return [0.0]
    roots = [q / a, c / q]
    return roots if roots[0] != roots[1] else roots[:1]


def cubic_extrema(p0: float, p1: float, p2: float, p3: float) -> list[float]:
    """Parameters in (0, 1) where one coordinate of a cubic is extremal.

    The derivative of a cubic Bezier is the quadratic
    ``3 * (A*t**2 + B*t + C)``; its roots are the candidate extrema.
    """
    a = -p0 + 3 * p1 - 3 * p2 + p3
    b = 2 * (p0 - 2 * p1 + p2)
    c = p1 - p0
    return [t for t in solve_quadratic(a, b, c) if 0.0 < t < 1.0]


def quadratic_extrema(p0: float, p1: float, p2: float) -> list[float]:
    """Parameter in (0, 1) where one coordinate of a quadratic is extremal."""
    denom = p0 - 2 * p1 + p2
    if denom == 0.0:
        return []
    t = (p0 - p1) / denom
    return [t] if 0.0 < t < 1.0 else []


@dataclass(frozen=True, slots=True)
class ArcCenter:
    """Center parameterization of an elliptical arc.

    Points on the arc are ``center + R(rotation) @ (rx*cos(a), ry*sin(a))``
    for ``a`` running from ``start_angle`` to ``start_angle + delta``.
    """

    center: Vector
    rx: float
    ry: float
    rotation: float
    start_angle: float
    delta: float

    def point_at(self, angle: float) -> Vector:
        cos_r, sin_r = math.cos(self.rotation), math.sin(self.rotation)
        x = self.rx * math.cos(angle)
        y = self.ry * math.sin(angle)
        return Vector(
            self.center.x + cos_r * x - sin_r * y,
            self.center.y + sin_r * x + cos_r * y,
        )

    def derivative_at(self, angle: float) -> Vector:
        cos_r, sin_r = math.cos(self.rotation), math.sin(self.rotation)
        x = -self.rx * math.sin(angle)
        y = self.ry * math.cos(angle)
        return Vector(cos_r * x - sin_r * y, sin_r * x + cos_r * y)

    def covers(self, angle: float) -> bool:
        """Check if ``angle`` lies within the swept range."""
        if self.delta >= 0:
            return (angle - self.start_angle) % math.tau <= self.delta
        return (self.start_angle - angle) % math.tau <= -self.delta


def is_degenerate_arc(start: Vector, arc: ArcTo) -> bool:
    """True when the arc cannot describe an ellipse and acts as a line."""
    return arc.rx == 0 or arc.ry == 0 or start == arc.end


def arc_center_parameters(start: Vector, arc: ArcTo) -> ArcCenter:
    """Convert an SVG endpoint arc to center form.

    Follows the SVG implementation notes (F.6.5 and F.6.6): radii too small
    to span the endpoints are scaled up, and the large-arc and sweep flags
    select one of the four candidate arcs.

    Raises:
        ValueError: If the arc is degenerate (see ``is_degenerate_arc``)
    """
    if is_degenerate_arc(start, arc):
        raise ValueError("Degenerate arc has no center parameterization")

    rx, ry = abs(arc.rx), abs(arc.ry)
    cos_r, sin_r = math.cos(arc.rotation), math.sin(arc.rotation)
    end = arc.end

    # Eq 5.1: move the midpoint to the origin and undo the rotation
    hx = (start.x - end.x) / 2
    hy = (start.y - end.y) / 2
    x1 = cos_r * hx + sin_r * hy
    y1 = -sin_r * hx + cos_r * hy

    # Eq 6.2: scale radii up when they cannot reach
    lam = (x1 / rx) ** 2 + (y1 / ry) ** 2
    if lam > 1:
        scale = math.sqrt(lam)
        rx *= scale
        ry *= scale

    # Eq 5.2
    num = (rx * ry) ** 2 - (rx * y1) ** 2 - (ry * x1) ** 2
    den = (rx * y1) ** 2 + (ry * x1) ** 2
    coef = math.sqrt(max(0.0, num / den))
    if arc.large_arc == arc.sweep:
        coef = -coef
    cx1 = coef * rx * y1 / ry
    cy1 = -coef * ry * x1 / rx

    # Eq 5.3: back to user space
    center = Vector(
        cos_r * cx1 - sin_r * cy1 + (start.x + end.x) / 2,
        sin_r * cx1 + cos_r * cy1 + (start.y + end.y) / 2,
    )

    # Eq 5.5-5.6
    u = Vector((x1 - cx1) / rx, (y1 - cy1) / ry)
    v = Vector((-x1 - cx1) / rx, (-y1 - cy1) / ry)
    start_angle = math.atan2(u.y, u.x)
    delta = math.atan2(u.cross(v), u.dot(v))
    if not arc.sweep and delta > 0:
        delta -= math.tau
    elif arc.sweep and delta < 0:
        delta += math.tau

    return ArcCenter(center, rx, ry, arc.rotation, start_angle, delta)


def arc_to_cubics(
    start: Vector,
    arc: ArcTo,
    max_segment_angle: float = MAX_ARC_SEGMENT_ANGLE,
) -> list[LineTo | CubicTo]:
    """Approximate an elliptical arc with cubic Bezier segments.

    The sweep is split into equal sub-arcs no wider than
    ``max_segment_angle``; each becomes one cubic whose control points sit
    ``4/3 * tan(delta/4)`` along the arc tangents. Degenerate arcs reduce
    to a single LineTo.

    Args:
        start: Current point when the arc begins
        arc: The arc segment
        max_segment_angle: Widest sub-arc, in radians

    Returns:
        Segments replacing the arc
    """
    if is_degenerate_arc(start, arc):
        logger.debug("Degenerate arc reduced to line", extra={"end": arc.end.to_tuple()})
        return [LineTo(arc.end)]

    params = arc_center_parameters(start, arc)
    count = max(1, math.ceil(abs(params.delta) / max_segment_angle - 1e-9))
    step = params.delta / count
    alpha = 4 / 3 * math.tan(step / 4)

    curves: list[LineTo | CubicTo] = []
    angle = params.start_angle
    p0 = start
    for i in range(count):
        next_angle = angle + step
        p3 = arc.end if i == count - 1 else params.point_at(next_angle)
        c1 = p0 + params.derivative_at(angle) * alpha
        c2 = p3 - params.derivative_at(next_angle) * alpha
        curves.append(CubicTo(c1, c2, p3))
        angle = next_angle
        p0 = p3
    return curves


def arc_bounds_points(start: Vector, arc: ArcTo) -> list[Vector]:
    """Points whose box is the exact bounding box of an arc."""
    if is_degenerate_arc(start, arc):
        return [start, arc.end]
    params = arc_center_parameters(start, arc)
    cos_r, sin_r = math.cos(params.rotation), math.sin(params.rotation)
    angle_x = math.atan2(-params.ry * sin_r, params.rx * cos_r)
    angle_y = math.atan2(params.ry * cos_r, params.rx * sin_r)
    points = [start, arc.end]
    for angle in (angle_x, angle_x + math.pi, angle_y, angle_y + math.pi):
        if params.covers(angle):
            points.append(params.point_at(angle))
    return points


def segment_bounds_points(start: Vector, segment: PathSegment) -> list[Vector]:
    """Endpoints plus interior extrema of one drawing segment."""
    match segment:
        case LineTo(point=p):
            return [start, p]
        case QuadTo(control=c, end=end):
            points = [start, end]
            for t in quadratic_extrema(start.x, c.x, end.x):
                points.append(
                    Vector(quadratic_point(start.x, c.x, end.x, t), quadratic_point(start.y, c.y, end.y, t))
                )
            for t in quadratic_extrema(start.y, c.y, end.y):
                points.append(
                    Vector(quadratic_point(start.x, c.x, end.x, t), quadratic_point(start.y, c.y, end.y, t))
                )
            return points
        case CubicTo(c1=c1, c2=c2, end=end):
            points = [start, end]
            ts = cubic_extrema(start.x, c1.x, c2.x, end.x) + cubic_extrema(
                start.y, c1.y, c2.y, end.y
            )
            for t in ts:
                points.append(
                    Vector(
                        cubic_point(start.x, c1.x, c2.x, end.x, t),
                        cubic_point(start.y, c1.y, c2.y, end.y, t),
                    )
                )
            return points
        case ArcTo():
            return arc_bounds_points(start, segment)
    raise TypeError(f"Not a drawing segment: {segment!r}")


def path_bounds(path: Path) -> Box | None:
    """Exact bounding box of everything a path draws.

    Curved segments contribute their interior extrema, found by solving
    ``dB/dt = 0`` per axis. Trailing or lone MoveTo points draw nothing and
    are not included.

    Returns:
        The box, or None when the path has no drawing segment
    """
    box: Box | None = None
    current: Vector | None = None
    subpath_start: Vector | None = None

    for segment in path.segments:
        match segment:
            case MoveTo(point=p):
                current = subpath_start = p
            case ClosePath():
                current = subpath_start
            case _:
                assert current is not None  # guaranteed by Path construction
                for point in segment_bounds_points(current, segment):
                    box = Box(point, point) if box is None else box.include(point)
                current = _end_of(segment)
    return box


def _end_of(segment: LineTo | CubicTo | QuadTo | ArcTo) -> Vector:
    return segment.point if isinstance(segment, LineTo) else segment.end


def reduce_arcs(path: Path, max_segment_angle: float = MAX_ARC_SEGMENT_ANGLE) -> Path:
    """Replace every ArcTo with equivalent cubic segments."""
    if not any(isinstance(s, ArcTo) for s in path.segments):
        return path
    segments: list[PathSegment] = []
    current: Vector | None = None
    subpath_start: Vector | None = None
    for segment in path.segments:
        match segment:
            case MoveTo(point=p):
                current = subpath_start = p
                segments.append(segment)
            case ClosePath():
                current = subpath_start
                segments.append(segment)
            case ArcTo():
                assert current is not None
                segments.extend(arc_to_cubics(current, segment, max_segment_angle))
                current = segment.end
            case _:
                segments.append(segment)
                current = _end_of(segment)
    return Path(tuple(segments))


@lru_cache(maxsize=512)
def flatten_path(
    path: Path, tolerance: float = DEFAULT_FLATTEN_TOLERANCE
) -> tuple[tuple[Vector, ...], ...]:
    """Approximate a path by polygons, one per subpath.

    Each polygon is implicitly closed when used for filling. Results are
    cached per (path, tolerance) since paths are immutable.

    Args:
        path: Path to flatten
        tolerance: Maximum distance between a curve and its polyline

    Returns:
        Tuple of polygons with at least two vertices each
    """
    polygons: list[tuple[Vector, ...]] = []
    current_poly: list[Vector] = []
    subpath_start: Vector | None = None

    def finish() -> None:
        if len(current_poly) >= 2:
            polygons.append(tuple(current_poly))

    for segment in reduce_arcs(path).segments:
        match segment:
            case MoveTo(point=p):
                finish()
                current_poly = [p]
                subpath_start = p
            case ClosePath():
                finish()
                current_poly = [subpath_start] if subpath_start is not None else []
            case LineTo(point=p):
                current_poly.append(p)
            case QuadTo(control=c, end=end):
                current_poly.extend(flatten_quadratic([current_poly[-1], c, end], tolerance)[1:])
            case CubicTo(c1=c1, c2=c2, end=end):
                current_poly.extend(flatten_cubic([current_poly[-1], c1, c2, end], tolerance)[1:])
    finish()
    return tuple(polygons)


def winding_number(point: Vector, polygon: tuple[Vector, ...]) -> int:
    """Signed number of times a closed polygon winds around ``point``.

    Casts a horizontal ray to the right and adds +1 for each upward edge
    crossing to the left of the point and -1 for each downward one.

    Examples:
        >>> square = (Vector(0, 0), Vector(2, 0), Vector(2, 2), Vector(0, 2))
        >>> winding_number(Vector(1, 1), square)
        1
        >>> winding_number(Vector(3, 3), square)
        0
    """
    n = len(polygon)
    if n < 3:
        return 0

    winding = 0
    px, py = point.x, point.y
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        is_left = (b.x - a.x) * (py - a.y) - (px - a.x) * (b.y - a.y)
        if a.y <= py:
            if b.y > py and is_left > 0:
                winding += 1
        elif b.y <= py and is_left < 0:
            winding -= 1
    return winding


def contains_point(
    path: Path,
    point: Vector,
    fill_rule: FillRule = FillRule.NONZERO,
    tolerance: float = DEFAULT_FLATTEN_TOLERANCE,
) -> bool:
    """Determine if ``point`` is inside the filled area of ``path``.

    Args:
        path: Path whose subpaths are filled (each implicitly closed)
        point: The point to test
        fill_rule: NONZERO (any net winding) or EVENODD (odd winding)
        tolerance: Curve flattening tolerance

    Returns:
        True if the point is inside
    """
    total = sum(winding_number(point, polygon) for polygon in flatten_path(path, tolerance))
    if fill_rule is FillRule.EVENODD:
        return total % 2 == 1
    return total != 0
