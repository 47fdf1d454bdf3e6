"""Documents: ordered lists of structural draw commands.

A Document is what renderer adapters consume. Commands are painted in order,
later ones over earlier ones. Fills are either a Color or a ``GradientRef``
naming a ``GradientDef`` that appears earlier in the same document.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

from vgfx.domain.color import Color
from vgfx.domain.gradient import Gradient
from vgfx.domain.path import FillRule, Path
from vgfx.domain.vector import Vector


@dataclass(frozen=True, slots=True)
class GradientRef:
    """Reference to a gradient defined in the document."""

    id: str


Paint = Union[Color, GradientRef]


@dataclass(frozen=True, slots=True)
class CircleCommand:
    center: Vector
    r: float
    fill: Paint


@dataclass(frozen=True, slots=True)
class RectangleCommand:
    x: float
    y: float
    w: float
    h: float
    fill: Paint


@dataclass(frozen=True, slots=True)
class LineCommand:
    p1: Vector
    p2: Vector
    thickness: float
    color: Color


@dataclass(frozen=True, slots=True)
class PathCommand:
    path: Path
    fill: Paint
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True, slots=True)
class TextCommand:
    """Opaque text leaf drawn centered on ``anchor``."""

    text: str
    anchor: Vector
    size: float
    color: Color


@dataclass(frozen=True, slots=True)
class EllipseCommand:
    center: Vector
    rx: float
    ry: float
    fill: Paint


@dataclass(frozen=True, slots=True)
class PolygonCommand:
    points: tuple[Vector, ...]
    fill: Paint


@dataclass(frozen=True, slots=True)
class GradientDef:
    id: str
    gradient: Gradient


DrawCommand = Union[
    CircleCommand,
    RectangleCommand,
    LineCommand,
    PathCommand,
    TextCommand,
    EllipseCommand,
    PolygonCommand,
    GradientDef,
]


@dataclass(frozen=True)
class Document:
    """Immutable canvas description; builder methods return new documents.

    Attributes:
        width: Canvas width
        height: Canvas height
        commands: Draw commands in painting order
    """

    width: float
    height: float
    commands: tuple[DrawCommand, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)

    def _add(self, command: DrawCommand) -> "Document":
        return Document(self.width, self.height, self.commands + (command,))

    def extend(self, commands: Iterable[DrawCommand]) -> "Document":
        return Document(self.width, self.height, self.commands + tuple(commands))

    def circle(self, center: Vector, r: float, fill: Paint) -> "Document":
        return self._add(CircleCommand(center, r, fill))

    def rectangle(self, x: float, y: float, w: float, h: float, fill: Paint) -> "Document":
        return self._add(RectangleCommand(x, y, w, h, fill))

    def line(self, p1: Vector, p2: Vector, thickness: float, color: Color) -> "Document":
        return self._add(LineCommand(p1, p2, thickness, color))

    def path(
        self, path: Path, fill: Paint, fill_rule: FillRule = FillRule.NONZERO
    ) -> "Document":
        return self._add(PathCommand(path, fill, fill_rule))

    def text(self, text: str, anchor: Vector, size: float, color: Color) -> "Document":
        return self._add(TextCommand(text, anchor, size, color))

    def ellipse(self, center: Vector, rx: float, ry: float, fill: Paint) -> "Document":
        return self._add(EllipseCommand(center, rx, ry, fill))

    def polygon(self, points: Sequence[Vector], fill: Paint) -> "Document":
        return self._add(PolygonCommand(tuple(points), fill))

    def gradient(self, id: str, gradient: Gradient) -> "Document":
        """Define a gradient that later fills can use via ``GradientRef(id)``."""
        return self._add(GradientDef(id, gradient))

    def gradient_defs(self) -> dict[str, Gradient]:
        """All gradient definitions by id."""
        return {
            command.id: command.gradient
            for command in self.commands
            if isinstance(command, GradientDef)
        }
