"""SVG renderer adapter.

Two ways to turn graphics into SVG markup:

- ``render_document``: one element per draw command, in document order
- ``render_image_to_svg``: sample an image on a regular grid and emit one
  opaque rectangle per cell, row by row

``render_image`` picks between them: it lowers the image structurally when
possible and falls back to sampling otherwise.
"""

import math
import time
from xml.sax.saxutils import escape, quoteattr

from vgfx.config import VgfxSettings, get_default_settings
from vgfx.core.blending import blend
from vgfx.core.geometry import DEFAULT_FLATTEN_TOLERANCE
from vgfx.core.sampler import sample_grid
from vgfx.domain.color import Color, white
from vgfx.domain.document import (
    CircleCommand,
    Document,
    EllipseCommand,
    GradientDef,
    GradientRef,
    LineCommand,
    Paint,
    PathCommand,
    PolygonCommand,
    RectangleCommand,
    TextCommand,
)
from vgfx.domain.gradient import (
    AxialGeometry,
    ConicGeometry,
    Gradient,
    GradientStop,
    LinearGeometry,
    RadialGeometry,
)
from vgfx.domain.image import Image
from vgfx.domain.path import ArcTo, ClosePath, CubicTo, FillRule, LineTo, MoveTo, Path, QuadTo
from vgfx.domain.vector import Vector
from vgfx.exceptions import RenderError, UnsupportedFeatureError, UnsupportedImageError
from vgfx.io._format import format_number
from vgfx.io.converter import image_to_document
from vgfx.utils.logging import RenderLogger, get_logger

SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILY = "Arial, sans-serif"


class _Writer:
    """Formats numbers at a fixed precision."""

    def __init__(self, precision: int) -> None:
        self.precision = precision

    def num(self, value: float) -> str:
        return format_number(value, self.precision)

    def point(self, p: Vector) -> str:
        return f"{self.num(p.x)} {self.num(p.y)}"


def path_data(path: Path, precision: int = 4) -> str:
    """SVG ``d`` attribute for a path.

    Arc rotation is converted from radians to degrees.
    """
    w = _Writer(precision)
    parts: list[str] = []
    for segment in path.segments:
        match segment:
            case MoveTo(point=p):
                parts.append(f"M {w.point(p)}")
            case LineTo(point=p):
                parts.append(f"L {w.point(p)}")
            case CubicTo(c1=c1, c2=c2, end=end):
                parts.append(f"C {w.point(c1)} {w.point(c2)} {w.point(end)}")
            case QuadTo(control=c, end=end):
                parts.append(f"Q {w.point(c)} {w.point(end)}")
            case ArcTo(rx=rx, ry=ry, rotation=rotation, large_arc=large, sweep=sweep, end=end):
                parts.append(
                    f"A {w.num(rx)} {w.num(ry)} {w.num(math.degrees(rotation))} "
                    f"{int(large)} {int(sweep)} {w.point(end)}"
                )
            case ClosePath():
                parts.append("Z")
    return " ".join(parts)


def _stops(stops: tuple[GradientStop, ...], w: _Writer) -> list[str]:
    return [
        f'    <stop offset="{w.num(s.position)}" stop-color="{s.color.to_hex()}"/>'
        for s in stops
    ]


def _mirrored_stops(stops: tuple[GradientStop, ...]) -> tuple[GradientStop, ...]:
    lower = [GradientStop(0.5 - s.position / 2, s.color) for s in reversed(stops)]
    upper = [GradientStop(0.5 + s.position / 2, s.color) for s in stops]
    return tuple(lower + upper)


def gradient_element(gid: str, gradient: Gradient, precision: int = 4) -> str:
    """``<linearGradient>`` or ``<radialGradient>`` element for a gradient.

    Axial gradients become linear gradients across the axis with mirrored
    stops.

    Raises:
        UnsupportedFeatureError: For conic gradients
    """
    w = _Writer(precision)
    ident = quoteattr(gid)
    match gradient.geometry:
        case LinearGeometry(start=start, end=end):
            head = (
                f'  <linearGradient id={ident} gradientUnits="userSpaceOnUse" '
                f'x1="{w.num(start.x)}" y1="{w.num(start.y)}" '
                f'x2="{w.num(end.x)}" y2="{w.num(end.y)}">'
            )
            return "\n".join([head, *_stops(gradient.stops, w), "  </linearGradient>"])
        case RadialGeometry(center=center, radius=radius):
            head = (
                f'  <radialGradient id={ident} gradientUnits="userSpaceOnUse" '
                f'cx="{w.num(center.x)}" cy="{w.num(center.y)}" r="{w.num(radius)}">'
            )
            return "\n".join([head, *_stops(gradient.stops, w), "  </radialGradient>"])
        case AxialGeometry(start=start, end=end, width=width):
            direction = (end - start).normalize()
            normal = Vector(-direction.y, direction.x) * width
            p1 = start - normal
            p2 = start + normal
            head = (
                f'  <linearGradient id={ident} gradientUnits="userSpaceOnUse" '
                f'x1="{w.num(p1.x)}" y1="{w.num(p1.y)}" '
                f'x2="{w.num(p2.x)}" y2="{w.num(p2.y)}">'
            )
            stops = _mirrored_stops(gradient.stops)
            return "\n".join([head, *_stops(stops, w), "  </linearGradient>"])
        case ConicGeometry():
            raise UnsupportedFeatureError("conic gradients", "SVG")
    raise TypeError(f"Unknown gradient geometry: {gradient.geometry!r}")


def _paint(fill: Paint, known: set[str]) -> str:
    if isinstance(fill, GradientRef):
        if fill.id not in known:
            raise RenderError(f"Unknown gradient reference '{fill.id}'")
        return f"url(#{fill.id})"
    return fill.to_hex()


def render_document(document: Document, precision: int = 4) -> str:
    """Render a document as a standalone SVG string.

    Elements appear in document order; gradient definitions are collected
    into ``<defs>``.

    Args:
        document: Document to render
        precision: Decimal places for coordinates

    Returns:
        SVG markup

    Raises:
        RenderError: On a fill referring to an undefined gradient
        UnsupportedFeatureError: On conic gradients
    """
    w = _Writer(precision)
    width, height = w.num(document.width), w.num(document.height)
    lines = [
        f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    ]

    definitions = [c for c in document.commands if isinstance(c, GradientDef)]
    known = {d.id for d in definitions}
    if definitions:
        lines.append("<defs>")
        lines.extend(gradient_element(d.id, d.gradient, precision) for d in definitions)
        lines.append("</defs>")

    for command in document.commands:
        match command:
            case CircleCommand(center=c, r=r, fill=fill):
                lines.append(
                    f'<circle cx="{w.num(c.x)}" cy="{w.num(c.y)}" r="{w.num(r)}" '
                    f'fill="{_paint(fill, known)}"/>'
                )
            case RectangleCommand(x=x, y=y, w=rw, h=rh, fill=fill):
                lines.append(
                    f'<rect x="{w.num(x)}" y="{w.num(y)}" width="{w.num(rw)}" '
                    f'height="{w.num(rh)}" fill="{_paint(fill, known)}"/>'
                )
            case LineCommand(p1=p1, p2=p2, thickness=thickness, color=color):
                lines.append(
                    f'<line x1="{w.num(p1.x)}" y1="{w.num(p1.y)}" '
                    f'x2="{w.num(p2.x)}" y2="{w.num(p2.y)}" stroke="{color.to_hex()}" '
                    f'stroke-width="{w.num(thickness)}" stroke-linecap="round"/>'
                )
            case PathCommand(path=path, fill=fill, fill_rule=rule):
                rule_attr = ' fill-rule="evenodd"' if rule is FillRule.EVENODD else ""
                lines.append(
                    f'<path d="{path_data(path, precision)}" '
                    f'fill="{_paint(fill, known)}"{rule_attr}/>'
                )
            case TextCommand(text=text, anchor=anchor, size=size, color=color):
                lines.append(
                    f'<text x="{w.num(anchor.x)}" y="{w.num(anchor.y)}" '
                    f'font-family="{FONT_FAMILY}" font-size="{w.num(size)}" '
                    f'fill="{color.to_hex()}" text-anchor="middle" '
                    f'dominant-baseline="middle">{escape(text)}</text>'
                )
            case EllipseCommand(center=c, rx=rx, ry=ry, fill=fill):
                lines.append(
                    f'<ellipse cx="{w.num(c.x)}" cy="{w.num(c.y)}" rx="{w.num(rx)}" '
                    f'ry="{w.num(ry)}" fill="{_paint(fill, known)}"/>'
                )
            case PolygonCommand(points=points, fill=fill):
                coords = " ".join(f"{w.num(p.x)},{w.num(p.y)}" for p in points)
                lines.append(f'<polygon points="{coords}" fill="{_paint(fill, known)}"/>')
            case GradientDef():
                pass

    lines.append("</svg>")
    return "\n".join(lines)


def render_image_to_svg(
    image: Image,
    width: float,
    height: float,
    samples: int,
    background: Color | None = None,
    max_workers: int | None = None,
    tolerance: float = DEFAULT_FLATTEN_TOLERANCE,
    precision: int = 4,
) -> str:
    """Render any image by sampling it on a ``samples x samples`` grid.

    Each cell is evaluated once at its center, composited over the opaque
    ``background`` (white by default, alpha forced to 1) and emitted as one
    rectangle, in row-major order.

    Args:
        image: Image to sample
        width: Canvas width
        height: Canvas height
        samples: Cells per axis
        background: Opaque color under every cell
        max_workers: Worker threads for sampling
        tolerance: Curve flattening tolerance
        precision: Decimal places for coordinates

    Returns:
        SVG markup
    """
    base = background.with_alpha(1.0) if background is not None else white()
    grid = sample_grid(image, width, height, samples, max_workers, tolerance)
    document = Document(width, height)
    for x, y, cw, ch, color in grid.cells():
        document = document.rectangle(x, y, cw, ch, blend(color, base))
    return render_document(document, precision)


def render_image(
    image: Image,
    settings: VgfxSettings | None = None,
    logger: RenderLogger | None = None,
) -> str:
    """Render an image structurally when possible, else by sampling.

    Args:
        image: Image to render
        settings: Canvas, sampling and geometry settings
        logger: Receives the chosen path and statistics

    Returns:
        SVG markup
    """
    settings = settings or get_default_settings()
    render = settings.render
    logger = logger or RenderLogger(get_logger())
    start = time.time()

    if render.prefer_structural:
        try:
            document = image_to_document(image, render.width, render.height)
        except UnsupportedImageError as e:
            logger.log_fallback(e.variant, e.reason)
        else:
            output = render_document(document, render.precision)
            logger.log_structural(len(document), (time.time() - start) * 1000)
            return output

    output = render_image_to_svg(
        image,
        render.width,
        render.height,
        render.samples,
        background=render.background_color(),
        max_workers=settings.processing.max_workers,
        tolerance=settings.geometry.flatten_tolerance,
        precision=render.precision,
    )
    logger.log_sampled(render.samples * render.samples, (time.time() - start) * 1000)
    return output
