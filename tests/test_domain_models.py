"""Tests for domain models to verify they work correctly."""

import math
import random

import pytest

from vgfx.domain import (
    ArcTo,
    Box,
    ClosePath,
    CubicTo,
    Document,
    Gradient,
    GradientKind,
    GradientRef,
    GradientStop,
    LineTo,
    MoveTo,
    Path,
    Transform,
    Vector,
)
from vgfx.domain.color import (
    Color,
    black,
    from_hex,
    gray,
    green,
    hsv,
    lerp_color,
    red,
    rgb,
    rgba,
    white,
)
from vgfx.domain.document import CircleCommand, GradientDef, RectangleCommand
from vgfx.domain.gradient import (
    AxialGeometry,
    ConicGeometry,
    LinearGeometry,
    RadialGeometry,
)
from vgfx.domain.transform import (
    IDENTITY,
    compose,
    make_rotate,
    make_scale,
    make_skew,
    make_translate,
)
from vgfx.exceptions import (
    ColorParseError,
    GradientError,
    MalformedPathError,
    NonInvertibleTransformError,
)


class TestVector:
    """Tests for Vector class."""

    def test_arithmetic(self) -> None:
        """Test vector operators."""
        a = Vector(1.0, 2.0)
        b = Vector(3.0, -1.0)
        assert a + b == Vector(4.0, 1.0)
        assert a - b == Vector(-2.0, 3.0)
        assert a * 2 == Vector(2.0, 4.0)
        assert 2 * a == Vector(2.0, 4.0)
        assert a / 2 == Vector(0.5, 1.0)
        assert -a == Vector(-1.0, -2.0)

    def test_products_and_length(self) -> None:
        """Test dot, cross and length."""
        assert Vector(1, 2).dot(Vector(3, 4)) == 11
        assert Vector(1, 0).cross(Vector(0, 1)) == 1
        assert Vector(3, 4).length() == 5.0
        assert Vector(0, 0).distance_to(Vector(3, 4)) == 5.0

    def test_normalize_zero_vector(self) -> None:
        """Test that the zero vector normalizes to itself."""
        assert Vector(0, 0).normalize() == Vector(0.0, 0.0)
        assert Vector(0, 5).normalize() == Vector(0.0, 1.0)

    def test_lerp_extrapolates(self) -> None:
        """Test that lerp does not clamp its parameter."""
        a = Vector(0, 0)
        b = Vector(10, 0)
        assert a.lerp(b, 0.5) == Vector(5.0, 0.0)
        assert a.lerp(b, 2.0) == Vector(20.0, 0.0)

    def test_rotate_about_pivot(self) -> None:
        """Test rotation around a pivot point."""
        p = Vector(2, 1).rotate(math.pi / 2, about=Vector(1, 1))
        assert p.is_close(Vector(1, 2), 1e-12)

    def test_vector_immutable(self) -> None:
        """Test that vector is immutable."""
        v = Vector(1.0, 2.0)
        with pytest.raises(AttributeError):
            v.x = 3.0  # type: ignore


class TestBox:
    """Tests for Box class."""

    def test_from_points(self) -> None:
        """Test box construction from points."""
        box = Box.from_points([Vector(3, 1), Vector(-1, 4), Vector(0, 0)])
        assert box == Box(Vector(-1, 0), Vector(3, 4))
        assert box.width == 4
        assert box.height == 4
        assert box.center == Vector(1.0, 2.0)

    def test_inverted_corners_rejected(self) -> None:
        """Test that min must not exceed max."""
        with pytest.raises(ValueError):
            Box(Vector(2, 0), Vector(1, 1))

    def test_from_no_points(self) -> None:
        """Test that an empty point set has no box."""
        with pytest.raises(ValueError):
            Box.from_points([])

    def test_union_and_intersection(self) -> None:
        """Test combining boxes."""
        a = Box(Vector(0, 0), Vector(2, 2))
        b = Box(Vector(1, 1), Vector(3, 3))
        assert a.union(b) == Box(Vector(0, 0), Vector(3, 3))
        assert a.intersection(b) == Box(Vector(1, 1), Vector(2, 2))
        assert a.intersection(Box(Vector(5, 5), Vector(6, 6))) is None

    def test_contains_boundary(self) -> None:
        """Test that boundary points are contained."""
        box = Box(Vector(0, 0), Vector(2, 2))
        assert box.contains(Vector(2, 1))
        assert not box.contains(Vector(2.1, 1))


class TestTransform:
    """Tests for Transform and its constructors."""

    def test_compose_order(self) -> None:
        """Test that compose applies the first transform first."""
        t = compose(make_translate(1, 0), make_scale(2))
        assert t.apply(Vector(0, 0)) == Vector(2.0, 0.0)
        u = compose(make_scale(2), make_translate(1, 0))
        assert u.apply(Vector(0, 0)) == Vector(1.0, 0.0)

    def test_then_matches_compose(self) -> None:
        """Test that then reads like compose."""
        a = make_rotate(0.3)
        b = make_translate(4, -2)
        assert a.then(b) == compose(a, b)

    def test_identity_is_exact_neutral(self) -> None:
        """Test that composing with the identity returns an equal transform."""
        t = Transform(1.5, 0.25, -0.75, 2.0, 3.0, -4.0)
        assert compose(t, IDENTITY) == t
        assert compose(IDENTITY, t) == t
        assert IDENTITY.is_identity
        assert not t.is_identity

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_identity_neutral_on_random_transforms(self, seed: int) -> None:
        """Test identity composition on seeded random transforms."""
        rng = random.Random(seed)
        for _ in range(100):
            t = Transform(*(rng.uniform(-1e3, 1e3) for _ in range(6)))
            assert compose(t, IDENTITY) == t
            assert compose(IDENTITY, t) == t
            assert t.then(IDENTITY) == t

    def test_invert_round_trip(self) -> None:
        """Test that a transform followed by its inverse fixes points."""
        t = compose(make_rotate(0.7, Vector(3, 4)), make_skew(0.2, 0.1)).then(make_scale(2, 3))
        p = Vector(12.5, -7.25)
        back = t.then(t.invert()).apply(p)
        assert back.is_close(p, 1e-9)

    def test_singular_transform_not_invertible(self) -> None:
        """Test that a zero determinant cannot be inverted."""
        with pytest.raises(NonInvertibleTransformError):
            make_scale(0, 1).invert()

    def test_rotate_about_point(self) -> None:
        """Test rotation around a pivot."""
        p = make_rotate(math.pi / 2, about=Vector(1, 1)).apply(Vector(2, 1))
        assert p.is_close(Vector(1, 2), 1e-12)

    def test_apply_vector_ignores_translation(self) -> None:
        """Test that displacements are not translated."""
        t = make_translate(5, 5).then(make_scale(2))
        assert t.apply_vector(Vector(1, 0)) == Vector(2.0, 0.0)


class TestColor:
    """Tests for Color and its constructors."""

    def test_channels_clamped(self) -> None:
        """Test that out-of-range channels are clamped."""
        c = Color(2.0, -1.0, 0.5, 3.0)
        assert c.to_tuple() == (1.0, 0.0, 0.5, 1.0)
        assert Color(float("nan"), 0, 0).r == 0.0

    def test_to_hex(self) -> None:
        """Test hex formatting for opaque and translucent colors."""
        assert rgb(1.0, 0.0, 0.0).to_hex() == "#FF0000"
        assert rgba(0, 0, 0, 0).to_hex() == "#00000000"
        assert rgba(1, 1, 1, 0.5).to_hex() == "#FFFFFF80"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("#F2F2F2", "#F2F2F2"),
            ("#abc", "#AABBCC"),
            ("#abcd", "#AABBCCDD"),
            ("#00FF0080", "#00FF0080"),
        ],
    )
    def test_from_hex(self, text: str, expected: str) -> None:
        """Test parsing every accepted hex form."""
        assert from_hex(text).to_hex() == expected

    @pytest.mark.parametrize(
        "text", ["red", "#12345", "#GGGGGG", "", "#+1+1+1", "#-1-1-1", "#0x1234"]
    )
    def test_from_hex_invalid(self, text: str) -> None:
        """Test that malformed hex colors are rejected."""
        with pytest.raises(ColorParseError):
            from_hex(text)

    def test_hsv(self) -> None:
        """Test HSV conversion and hue wrapping."""
        assert hsv(120, 1, 1) == green()
        assert hsv(480, 1, 1) == hsv(120, 1, 1)
        assert red().to_hsv() == (0.0, 1.0, 1.0)

    def test_lerp_color(self) -> None:
        """Test per-channel interpolation."""
        assert lerp_color(black(), white(), 0.5) == gray(0.5)

    def test_alpha_helpers(self) -> None:
        """Test alpha replacement and scaling."""
        c = red().with_alpha(0.5)
        assert c.a == 0.5
        assert c.scale_alpha(0.5).a == 0.25
        assert not c.is_opaque
        assert red().is_opaque


class TestPath:
    """Tests for Path construction and queries."""

    def test_builder_is_persistent(self) -> None:
        """Test that builder calls never modify the receiver."""
        p1 = Path.empty().move_to(Vector(0, 0))
        p2 = p1.line_to(Vector(1, 0))
        assert len(p1) == 1
        assert len(p2) == 2
        assert p2.segments == (MoveTo(Vector(0, 0)), LineTo(Vector(1, 0)))

    def test_drawing_before_move_rejected(self) -> None:
        """Test that a drawing segment needs a current point."""
        with pytest.raises(MalformedPathError):
            Path.empty().line_to(Vector(1, 1))
        with pytest.raises(MalformedPathError) as exc_info:
            Path((LineTo(Vector(1, 1)),))
        assert exc_info.value.index == 0

    def test_current_point(self) -> None:
        """Test pen position tracking through close_path."""
        p = Path.empty().move_to(Vector(1, 1)).line_to(Vector(5, 1))
        assert p.current_point == Vector(5, 1)
        assert p.close_path().current_point == Vector(1, 1)
        assert Path.empty().current_point is None

    def test_degenerate_arc_becomes_line(self) -> None:
        """Test that zero radii or a zero-length arc append a line."""
        start = Path.empty().move_to(Vector(0, 0))
        assert start.earc_to(0, 5, 0, False, True, Vector(10, 0)).segments[-1] == LineTo(
            Vector(10, 0)
        )
        assert start.earc_to(5, 5, 0, False, True, Vector(0, 0)).segments[-1] == LineTo(
            Vector(0, 0)
        )

    def test_arc_radii_made_positive(self) -> None:
        """Test that negative radii are stored as absolute values."""
        p = Path.empty().move_to(Vector(0, 0)).earc_to(-5, -3, 0, False, True, Vector(10, 0))
        arc = p.segments[-1]
        assert isinstance(arc, ArcTo)
        assert (arc.rx, arc.ry) == (5, 3)

    def test_rect_bounds_exact(self) -> None:
        """Test that a rectangle's bounds are its corners."""
        assert Path.rect(0, 0, 10, 5).bounds() == Box(Vector(0, 0), Vector(10, 5))

    def test_empty_bounds(self) -> None:
        """Test that paths drawing nothing have no bounds."""
        assert Path.empty().bounds() is None
        assert Path.empty().move_to(Vector(3, 3)).bounds() is None

    def test_line_outline(self) -> None:
        """Test the outline of a thick line."""
        outline = Path.line(Vector(0, 0), Vector(10, 0), 2)
        assert outline.bounds() == Box(Vector(0, -1), Vector(10, 1))
        assert Path.line(Vector(1, 1), Vector(1, 1), 2).is_empty

    def test_polygon_closed(self) -> None:
        """Test that polygons end with close_path."""
        p = Path.polygon([Vector(0, 0), Vector(1, 0), Vector(0, 1)])
        assert isinstance(p.segments[-1], ClosePath)
        assert Path.polygon([]).is_empty

    def test_transform_reduces_arcs(self) -> None:
        """Test that mapping a path replaces arcs with cubics."""
        p = Path.empty().move_to(Vector(0, 0)).earc_to(10, 10, 0, False, True, Vector(20, 0))
        moved = p.transform(make_translate(5, 0).apply)
        assert all(not isinstance(s, ArcTo) for s in moved.segments)
        assert isinstance(moved.segments[1], CubicTo)
        assert moved.current_point == Vector(25, 0)


class TestGradient:
    """Tests for Gradient class."""

    def test_requires_stops(self) -> None:
        """Test that a gradient without stops is rejected."""
        with pytest.raises(GradientError):
            Gradient(LinearGeometry(Vector(0, 0), Vector(1, 0)), ())

    def test_stops_sorted(self) -> None:
        """Test that stops are sorted by position."""
        g = Gradient(
            LinearGeometry(Vector(0, 0), Vector(1, 0)),
            (GradientStop(1.0, white()), GradientStop(0.0, black())),
        )
        assert [s.position for s in g.stops] == [0.0, 1.0]
        assert g.kind is GradientKind.LINEAR

    def test_linear_sample(self) -> None:
        """Test linear interpolation and clamping outside the segment."""
        g = Gradient.two_stop(LinearGeometry(Vector(0, 0), Vector(10, 0)), black(), white())
        assert g.sample(Vector(5, 7)) == gray(0.5)
        assert g.sample(Vector(-5, 0)) == black()
        assert g.sample(Vector(50, 0)) == white()

    def test_radial_sample(self) -> None:
        """Test that radial position is distance over radius."""
        g = Gradient.two_stop(RadialGeometry(Vector(0, 0), 10), black(), white())
        assert g.sample(Vector(0, 5)) == gray(0.5)

    def test_axial_is_symmetric(self) -> None:
        """Test that axial colors mirror across the axis."""
        g = Gradient.two_stop(AxialGeometry(Vector(0, 0), Vector(10, 0), 4), black(), white())
        assert g.position(Vector(5, 2)) == pytest.approx(0.5)
        assert g.sample(Vector(5, 2)) == g.sample(Vector(5, -2))

    def test_conic_position(self) -> None:
        """Test that conic position is the swept angle over a full turn."""
        g = Gradient.two_stop(ConicGeometry(Vector(0, 0)), black(), white())
        assert g.position(Vector(0, 1)) == pytest.approx(0.25)
        assert g.kind is GradientKind.CONIC

    def test_degenerate_uses_first_stop(self) -> None:
        """Test that a degenerate geometry paints the first stop color."""
        g = Gradient.two_stop(LinearGeometry(Vector(3, 3), Vector(3, 3)), red(), white())
        assert g.sample(Vector(100, 0)) == red()
        r = Gradient.two_stop(RadialGeometry(Vector(0, 0), 0), red(), white())
        assert r.sample(Vector(1, 1)) == red()

    def test_scale_alpha(self) -> None:
        """Test that alpha scaling applies to every stop."""
        g = Gradient.two_stop(LinearGeometry(Vector(0, 0), Vector(1, 0)), red(), white())
        assert [s.color.a for s in g.scale_alpha(0.5).stops] == [0.5, 0.5]


class TestDocument:
    """Tests for Document builder."""

    def test_builder_is_persistent(self) -> None:
        """Test that builder calls return new documents in order."""
        doc = Document(100, 50)
        drawn = doc.rectangle(0, 0, 100, 50, white()).circle(Vector(10, 10), 5, red())
        assert len(doc) == 0
        assert len(drawn) == 2
        assert isinstance(drawn.commands[0], RectangleCommand)
        assert isinstance(drawn.commands[1], CircleCommand)

    def test_gradient_defs(self) -> None:
        """Test gradient definitions and references."""
        g = Gradient.two_stop(LinearGeometry(Vector(0, 0), Vector(1, 0)), red(), white())
        doc = Document(10, 10).gradient("sky", g).rectangle(0, 0, 10, 10, GradientRef("sky"))
        assert doc.gradient_defs() == {"sky": g}
        assert isinstance(doc.commands[0], GradientDef)
