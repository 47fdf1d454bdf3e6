"""Internal Bezier curve evaluation and flattening.

This is an internal module containing helper functions for geometry.
Not intended for public use.
"""

import math

from vgfx.domain.vector import Vector

# Subdivision depth cap: 2**16 pieces per curve is far below any tolerance
MAX_DEPTH = 16


def quadratic_point(p0: float, p1: float, p2: float, t: float) -> float:
    """Evaluate one coordinate of a quadratic Bezier at ``t``."""
    mt = 1 - t
    return mt * mt * p0 + 2 * mt * t * p1 + t * t * p2


def cubic_point(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """Evaluate one coordinate of a cubic Bezier at ``t``."""
    mt = 1 - t
    return mt * mt * mt * p0 + 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t * p3


def _mid(a: Vector, b: Vector) -> Vector:
    return Vector((a.x + b.x) / 2, (a.y + b.y) / 2)


def flatten_quadratic(
    points: list[Vector], tolerance: float, depth: int = 0
) -> list[Vector]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, including both endpoints
    """
    p0, p1, p2 = points

    # Curve midpoint (at t=0.5) against the chord midpoint
    curve_mid = Vector(
        0.25 * p0.x + 0.5 * p1.x + 0.25 * p2.x,
        0.25 * p0.y + 0.5 * p1.y + 0.25 * p2.y,
    )
    chord_mid = _mid(p0, p2)
    distance = math.hypot(curve_mid.x - chord_mid.x, curve_mid.y - chord_mid.y)

    if distance <= tolerance or depth >= MAX_DEPTH:
        return [p0, p2]

    left = flatten_quadratic([p0, _mid(p0, p1), curve_mid], tolerance, depth + 1)
    right = flatten_quadratic([curve_mid, _mid(p1, p2), p2], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Vector], tolerance: float, depth: int = 0) -> list[Vector]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. Flatness is measured by
    the distance of both control points from the chord, so S-shaped curves
    whose midpoint happens to lie on the chord are still subdivided.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, including both endpoints
    """
    p0, p1, p2, p3 = points

    if depth >= MAX_DEPTH or _cubic_is_flat(p0, p1, p2, p3, tolerance):
        return [p0, p3]

    # First level
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)
    # Second level
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)
    # Third level (midpoint)
    mid = _mid(r1, r2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, depth + 1)

    return left[:-1] + right


def _cubic_is_flat(p0: Vector, p1: Vector, p2: Vector, p3: Vector, tolerance: float) -> bool:
    chord = p3 - p0
    length = chord.length()
    if length == 0.0:
        return max(p0.distance_to(p1), p0.distance_to(p2)) <= tolerance
    d1 = abs(chord.cross(p1 - p0)) / length
    d2 = abs(chord.cross(p2 - p0)) / length
    # A flat cubic deviates at most 3/4 of its control polygon offset
    return 0.75 * max(d1, d2) <= tolerance
