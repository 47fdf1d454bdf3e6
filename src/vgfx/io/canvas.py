"""HTML5 Canvas renderer adapter.

Emits a JavaScript function ``drawVgGraphics(canvas)`` that replays a
document's draw commands on a 2D context, in document order. Elliptical
arcs are emitted as ``bezierCurveTo`` calls since the canvas API has no
endpoint-form arc.
"""

import re

from vgfx.core.geometry import MAX_ARC_SEGMENT_ANGLE, reduce_arcs
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
from vgfx.domain.path import ClosePath, CubicTo, FillRule, LineTo, MoveTo, Path, QuadTo
from vgfx.domain.vector import Vector
from vgfx.exceptions import RenderError
from vgfx.io._format import format_number

FONT_FAMILY = "Arial, sans-serif"
FUNCTION_NAME = "drawVgGraphics"

_HEADER = [
    "// Generated Canvas JavaScript",
    "function {name}(canvas) {{",
    "  const ctx = canvas.getContext('2d');",
    "  canvas.width = {width};",
    "  canvas.height = {height};",
    "  ",
    "  // Clear canvas",
    "  ctx.clearRect(0, 0, canvas.width, canvas.height);",
    "  ",
    "  // Drawing commands",
]

_FOOTER = [
    "}}",
    "",
    "// Usage: {name}(document.getElementById('myCanvas'));",
]


def _js_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def gradient_variable(gid: str) -> str:
    """JavaScript identifier holding the gradient ``gid``."""
    return "gradient_" + re.sub(r"[^0-9A-Za-z_]", "_", gid)


class CanvasRenderer:
    """Translates documents to Canvas 2D JavaScript.

    Example:
        renderer = CanvasRenderer()
        script = renderer.render(document)
    """

    def __init__(
        self,
        precision: int = 4,
        max_arc_segment_angle: float = MAX_ARC_SEGMENT_ANGLE,
    ) -> None:
        self._precision = precision
        self._max_arc_segment_angle = max_arc_segment_angle

    def _num(self, value: float) -> str:
        return format_number(value, self._precision)

    def _args(self, *values: float) -> str:
        return ", ".join(self._num(v) for v in values)

    def _paint(self, fill: Paint, known: set[str]) -> str:
        if isinstance(fill, GradientRef):
            if fill.id not in known:
                raise RenderError(f"Unknown gradient reference '{fill.id}'")
            return gradient_variable(fill.id)
        return _js_string(fill.to_hex())

    def _gradient(self, gid: str, gradient: Gradient) -> list[str]:
        var = gradient_variable(gid)
        stops = gradient.stops
        match gradient.geometry:
            case LinearGeometry(start=s, end=e):
                create = f"ctx.createLinearGradient({self._args(s.x, s.y, e.x, e.y)})"
            case RadialGeometry(center=c, radius=r):
                create = f"ctx.createRadialGradient({self._args(c.x, c.y, 0, c.x, c.y, r)})"
            case AxialGeometry(start=s, end=e, width=width):
                direction = (e - s).normalize()
                normal = Vector(-direction.y, direction.x) * width
                p1, p2 = s - normal, s + normal
                create = f"ctx.createLinearGradient({self._args(p1.x, p1.y, p2.x, p2.y)})"
                stops = tuple(
                    [GradientStop(0.5 - st.position / 2, st.color) for st in reversed(stops)]
                    + [GradientStop(0.5 + st.position / 2, st.color) for st in stops]
                )
            case ConicGeometry(center=c, start_angle=angle):
                create = f"ctx.createConicGradient({self._args(angle, c.x, c.y)})"
            case _:
                raise TypeError(f"Unknown gradient geometry: {gradient.geometry!r}")
        lines = [f"const {var} = {create};"]
        lines.extend(
            f"{var}.addColorStop({self._num(st.position)}, {_js_string(st.color.to_hex())});"
            for st in stops
        )
        return lines

    def _trace(self, path: Path) -> list[str]:
        lines = ["ctx.beginPath();"]
        for segment in reduce_arcs(path, self._max_arc_segment_angle).segments:
            match segment:
                case MoveTo(point=p):
                    lines.append(f"ctx.moveTo({self._args(p.x, p.y)});")
                case LineTo(point=p):
                    lines.append(f"ctx.lineTo({self._args(p.x, p.y)});")
                case CubicTo(c1=c1, c2=c2, end=e):
                    lines.append(
                        f"ctx.bezierCurveTo({self._args(c1.x, c1.y, c2.x, c2.y, e.x, e.y)});"
                    )
                case QuadTo(control=c, end=e):
                    lines.append(f"ctx.quadraticCurveTo({self._args(c.x, c.y, e.x, e.y)});")
                case ClosePath():
                    lines.append("ctx.closePath();")
        return lines

    def render_commands(self, document: Document) -> list[str]:
        """Statement lines (unindented) for every command in the document.

        Raises:
            RenderError: On a fill referring to an undefined gradient
        """
        known = {c.id for c in document.commands if isinstance(c, GradientDef)}
        lines: list[str] = []
        for command in document.commands:
            match command:
                case GradientDef(id=gid, gradient=gradient):
                    lines.extend(self._gradient(gid, gradient))
                case CircleCommand(center=c, r=r, fill=fill):
                    lines.append("ctx.beginPath();")
                    lines.append(f"ctx.arc({self._args(c.x, c.y, r)}, 0, 2 * Math.PI);")
                    lines.append(f"ctx.fillStyle = {self._paint(fill, known)};")
                    lines.append("ctx.fill();")
                case RectangleCommand(x=x, y=y, w=w, h=h, fill=fill):
                    lines.append(f"ctx.fillStyle = {self._paint(fill, known)};")
                    lines.append(f"ctx.fillRect({self._args(x, y, w, h)});")
                case LineCommand(p1=p1, p2=p2, thickness=thickness, color=color):
                    lines.append("ctx.beginPath();")
                    lines.append(f"ctx.moveTo({self._args(p1.x, p1.y)});")
                    lines.append(f"ctx.lineTo({self._args(p2.x, p2.y)});")
                    lines.append(f"ctx.strokeStyle = {_js_string(color.to_hex())};")
                    lines.append(f"ctx.lineWidth = {self._num(thickness)};")
                    lines.append("ctx.lineCap = 'round';")
                    lines.append("ctx.stroke();")
                case PathCommand(path=path, fill=fill, fill_rule=rule):
                    lines.extend(self._trace(path))
                    lines.append(f"ctx.fillStyle = {self._paint(fill, known)};")
                    lines.append(
                        "ctx.fill('evenodd');" if rule is FillRule.EVENODD else "ctx.fill();"
                    )
                case TextCommand(text=text, anchor=anchor, size=size, color=color):
                    lines.append(f"ctx.font = '{self._num(size)}px {FONT_FAMILY}';")
                    lines.append(f"ctx.fillStyle = {_js_string(color.to_hex())};")
                    lines.append("ctx.textAlign = 'center';")
                    lines.append("ctx.textBaseline = 'middle';")
                    lines.append(
                        f"ctx.fillText({_js_string(text)}, {self._args(anchor.x, anchor.y)});"
                    )
                case EllipseCommand(center=c, rx=rx, ry=ry, fill=fill):
                    lines.append("ctx.beginPath();")
                    lines.append(f"ctx.ellipse({self._args(c.x, c.y, rx, ry)}, 0, 0, 2 * Math.PI);")
                    lines.append(f"ctx.fillStyle = {self._paint(fill, known)};")
                    lines.append("ctx.fill();")
                case PolygonCommand(points=points, fill=fill):
                    lines.extend(self._trace(Path.polygon(points)))
                    lines.append(f"ctx.fillStyle = {self._paint(fill, known)};")
                    lines.append("ctx.fill();")
        return lines

    def render(self, document: Document) -> str:
        """Complete script for a document."""
        fields = {
            "name": FUNCTION_NAME,
            "width": self._num(document.width),
            "height": self._num(document.height),
        }
        header = [line.format(**fields) for line in _HEADER]
        body = ["  " + line for line in self.render_commands(document)]
        footer = [line.format(**fields) for line in _FOOTER]
        return "\n".join([*header, *body, *footer])


def render_document(document: Document, precision: int = 4) -> str:
    """Render a document as Canvas 2D JavaScript."""
    return CanvasRenderer(precision=precision).render(document)

