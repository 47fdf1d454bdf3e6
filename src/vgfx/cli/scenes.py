"""Built-in demo scenes for the CLI.

A scene is either a Document, drawn command by command, or an Image, which
the renderers lower structurally or sample.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

from vgfx.domain import color, image
from vgfx.domain.color import Color
from vgfx.domain.document import Document
from vgfx.domain.gradient import AxialGeometry, Gradient, RadialGeometry
from vgfx.domain.image import Image
from vgfx.domain.path import Path
from vgfx.domain.vector import Vector
from vgfx.exceptions import SceneNotFoundError

BACKGROUND = "#F2F2F2"


@dataclass(frozen=True)
class Scene:
    """A named, lazily built scene."""

    name: str
    description: str
    width: int
    height: int
    build: Callable[[], Document | Image]


def _basic_shapes() -> Document:
    return (
        Document(300, 200)
        .rectangle(0, 0, 300, 200, color.from_hex(BACKGROUND))
        .circle(Vector(80, 100), 30, color.red())
        .rectangle(150, 70, 60, 60, color.green())
        .line(Vector(50, 160), Vector(250, 160), 3, color.blue())
        .text("Canvas Rendering", Vector(150, 40), 16, color.black())
    )


def _path_demo() -> Document:
    outline = (
        Path.empty()
        .move_to(Vector(50, 50))
        .line_to(Vector(150, 50))
        .qcurve_to(Vector(200, 75), Vector(150, 100))
        .line_to(Vector(50, 100))
        .close_path()
    )
    return (
        Document(250, 150)
        .rectangle(0, 0, 250, 150, color.from_hex(BACKGROUND))
        .path(outline, color.magenta())
        .text("Canvas Path Demo", Vector(125, 30), 14, color.black())
    )


def _composition() -> Image:
    sun = image.circle(color.gold(), 40).translate_img(80, 70)
    tilted = image.rectangle(color.blue(), 80, 50).rotate(math.pi / 8).translate_img(200, 120)
    ghost = image.circle(color.red(), 35).with_opacity(0.5).translate_img(150, 110)
    ground = image.line(color.black(), Vector(20, 180), Vector(280, 180), 4)
    return (
        image.const_color(color.from_hex(BACKGROUND))
        .compose(sun)
        .compose(tilted)
        .compose(ghost)
        .compose(ground)
    )


def _gradients() -> Image:
    sky = image.linear_gradient(
        color.rgb(0.1, 0.2, 0.6), color.rgb(0.9, 0.6, 0.3), Vector(0, 0), Vector(0, 200)
    )
    glow = Gradient.two_stop(RadialGeometry(Vector(90, 100), 50), color.yellow(), color.orange())
    beam = Gradient.two_stop(
        AxialGeometry(Vector(160, 60), Vector(280, 140), 30),
        color.white(),
        color.purple(),
    )
    return (
        sky.compose(image.shape(Path.circle(Vector(90, 100), 50), glow))
        .compose(image.shape(Path.rect(160, 60, 120, 80), beam))
    )


def _mandelbrot_color(point: Vector, max_iterations: int = 48) -> Color:
    c = complex(point.x / 100.0 - 2.0, point.y / 100.0 - 1.0)
    z = 0j
    for n in range(max_iterations):
        z = z * z + c
        if abs(z) > 2.0:
            return color.hsv(360.0 * n / max_iterations, 0.8, 1.0)
    return color.black()


def _mandelbrot() -> Image:
    return image.from_function(_mandelbrot_color)


SCENES: dict[str, Scene] = {
    scene.name: scene
    for scene in (
        Scene("basic-shapes", "Circle, square, line and label", 300, 200, _basic_shapes),
        Scene("path-demo", "Closed path with a quadratic curve", 250, 150, _path_demo),
        Scene("composition", "Transformed and translucent shapes", 300, 200, _composition),
        Scene("gradients", "Linear, radial and axial gradients", 300, 200, _gradients),
        Scene("mandelbrot", "Escape-time fractal (sampled)", 300, 200, _mandelbrot),
    )
}


def get_scene(name: str) -> Scene:
    """Look up a built-in scene.

    Raises:
        SceneNotFoundError: If no scene has this name
    """
    try:
        return SCENES[name]
    except KeyError:
        raise SceneNotFoundError(name) from None
