"""Unit tests for the renderer layer.

Tests for number formatting, the SVG and Canvas renderers, structural
lowering and the output writer.
"""

import math
import re
from pathlib import Path as FilePath

import pytest

from vgfx.config import OutputFormat, RenderConfig, VgfxSettings
from vgfx.domain import color, image
from vgfx.domain.document import (
    Document,
    GradientDef,
    GradientRef,
    PathCommand,
    RectangleCommand,
)
from vgfx.domain.gradient import (
    AxialGeometry,
    ConicGeometry,
    Gradient,
    LinearGeometry,
    RadialGeometry,
)
from vgfx.domain.path import ArcTo, FillRule, MoveTo, Path
from vgfx.domain.transform import make_scale
from vgfx.domain.vector import Vector
from vgfx.exceptions import (
    NonInvertibleTransformError,
    OutputWriteError,
    RenderError,
    UnsupportedFeatureError,
    UnsupportedImageError,
)
from vgfx.io import canvas, svg
from vgfx.io._format import format_number
from vgfx.io.converter import can_lower, image_to_document
from vgfx.io.writer import OutputWriter, default_output_path, write_output
from vgfx.utils import RenderLogger, get_logger


def two_stop(geometry) -> Gradient:
    return Gradient.two_stop(geometry, color.red(), color.blue())


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (80.0, "80"),
            (2.5, "2.5"),
            (-0.00001, "0"),
            (1 / 3, "0.3333"),
            (-12.75, "-12.75"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        """Test trimming of trailing zeros and negative zero."""
        assert format_number(value) == expected

    def test_precision(self) -> None:
        """Test a custom precision."""
        assert format_number(math.pi, 2) == "3.14"
        assert format_number(2.0, 0) == "2"


class TestSvgRenderer:
    """Tests for the SVG renderer."""

    def test_header(self) -> None:
        """Test the root element."""
        text = svg.render_document(Document(300, 200))
        assert text.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" width="300" height="200" '
            'viewBox="0 0 300 200">'
        )
        assert text.endswith("</svg>")

    def test_elements_in_order(self) -> None:
        """Test that commands become elements in document order."""
        doc = (
            Document(100, 100)
            .rectangle(0, 0, 100, 100, color.white())
            .circle(Vector(50, 50), 10, color.red())
            .line(Vector(0, 0), Vector(10, 10), 2, color.black())
            .ellipse(Vector(20, 20), 5, 3, color.blue())
            .polygon([Vector(0, 0), Vector(5, 0), Vector(0, 5)], color.green())
        )
        text = svg.render_document(doc)
        tags = re.findall(r"<(rect|circle|line|ellipse|polygon)\b", text)
        assert tags == ["rect", "circle", "line", "ellipse", "polygon"]
        assert '<circle cx="50" cy="50" r="10" fill="#FF0000"/>' in text
        assert 'stroke-linecap="round"' in text
        assert 'points="0,0 5,0 0,5"' in text

    def test_path_data(self) -> None:
        """Test path data for lines and arcs."""
        assert svg.path_data(Path.rect(0, 0, 10, 5)) == "M 0 0 L 10 0 L 10 5 L 0 5 Z"
        arc = Path((MoveTo(Vector(0, 0)), ArcTo(5, 3, math.pi / 2, True, False, Vector(4, 4))))
        assert svg.path_data(arc) == "M 0 0 A 5 3 90 1 0 4 4"

    def test_evenodd_attribute(self) -> None:
        """Test that the fill rule is written for even-odd paths."""
        doc = Document(10, 10).path(Path.rect(0, 0, 5, 5), color.red(), FillRule.EVENODD)
        assert 'fill-rule="evenodd"' in svg.render_document(doc)

    def test_text_escaped(self) -> None:
        """Test that text content is XML-escaped."""
        doc = Document(10, 10).text("a < b & c", Vector(5, 5), 12, color.black())
        text = svg.render_document(doc)
        assert ">a &lt; b &amp; c</text>" in text
        assert 'font-family="Arial, sans-serif"' in text

    def test_translucent_fill(self) -> None:
        """Test that alpha is kept in the color."""
        doc = Document(10, 10).rectangle(0, 0, 5, 5, color.red().with_alpha(0.5))
        assert 'fill="#FF000080"' in svg.render_document(doc)

    def test_gradient_defs(self) -> None:
        """Test gradient definitions and references."""
        doc = (
            Document(10, 10)
            .gradient("g1", two_stop(LinearGeometry(Vector(0, 0), Vector(10, 0))))
            .gradient("g2", two_stop(RadialGeometry(Vector(5, 5), 5)))
            .rectangle(0, 0, 10, 10, GradientRef("g1"))
            .circle(Vector(5, 5), 5, GradientRef("g2"))
        )
        text = svg.render_document(doc)
        assert "<defs>" in text
        assert '<linearGradient id="g1"' in text
        assert '<radialGradient id="g2"' in text
        assert 'fill="url(#g1)"' in text
        assert text.index("</defs>") < text.index("<rect")

    def test_axial_gradient_mirrored(self) -> None:
        """Test that axial gradients become mirrored linear gradients."""
        element = svg.gradient_element(
            "a", two_stop(AxialGeometry(Vector(0, 0), Vector(10, 0), 4))
        )
        offsets = re.findall(r'offset="([^"]+)"', element)
        assert offsets == ["0", "0.5", "0.5", "1"]
        assert 'x1="0" y1="-4" x2="0" y2="4"' in element

    def test_conic_gradient_unsupported(self) -> None:
        """Test that SVG has no conic gradients."""
        doc = Document(10, 10).gradient("c", two_stop(ConicGeometry(Vector(5, 5))))
        with pytest.raises(UnsupportedFeatureError):
            svg.render_document(doc)

    def test_unknown_gradient_ref(self) -> None:
        """Test that undefined gradient references are rejected."""
        doc = Document(10, 10).rectangle(0, 0, 5, 5, GradientRef("missing"))
        with pytest.raises(RenderError):
            svg.render_document(doc)


class TestCanvasRenderer:
    """Tests for the Canvas renderer."""

    def test_function_wrapper(self) -> None:
        """Test the generated function and its size."""
        text = canvas.render_document(Document(40, 30))
        assert text.startswith("// Generated Canvas JavaScript\nfunction drawVgGraphics(canvas) {")
        assert "  canvas.width = 40;\n  canvas.height = 30;" in text
        assert text.endswith("// Usage: drawVgGraphics(document.getElementById('myCanvas'));")

    def test_arcs_become_bezier_curves(self) -> None:
        """Test that elliptical arcs are traced with bezierCurveTo."""
        path = Path.empty().move_to(Vector(0, 0)).earc_to(10, 10, 0, False, True, Vector(20, 0))
        text = canvas.render_document(Document(30, 30).path(path, color.red()))
        assert text.count("ctx.bezierCurveTo(") == 2
        assert "ctx.bezierCurveTo(" in text and "20, 0);" in text

    def test_evenodd_fill(self) -> None:
        """Test the even-odd fill call."""
        doc = Document(10, 10).path(Path.rect(0, 0, 5, 5), color.red(), FillRule.EVENODD)
        assert "  ctx.fill('evenodd');" in canvas.render_document(doc)

    def test_gradients(self) -> None:
        """Test gradient creation calls."""
        doc = (
            Document(10, 10)
            .gradient("lin", two_stop(LinearGeometry(Vector(0, 0), Vector(10, 0))))
            .gradient("rad", two_stop(RadialGeometry(Vector(5, 5), 5)))
            .gradient("con", two_stop(ConicGeometry(Vector(5, 5), 0.5)))
            .rectangle(0, 0, 10, 10, GradientRef("con"))
        )
        text = canvas.render_document(doc)
        assert "const gradient_lin = ctx.createLinearGradient(0, 0, 10, 0);" in text
        assert "const gradient_rad = ctx.createRadialGradient(5, 5, 0, 5, 5, 5);" in text
        assert "const gradient_con = ctx.createConicGradient(0.5, 5, 5);" in text
        assert "gradient_lin.addColorStop(0, '#FF0000');" in text
        assert "ctx.fillStyle = gradient_con;" in text

    def test_text_quoted(self) -> None:
        """Test that quotes in text are escaped."""
        doc = Document(10, 10).text("it's", Vector(5, 5), 12, color.black())
        assert "ctx.fillText('it\\'s', 5, 5);" in canvas.render_document(doc)

    def test_ellipse(self) -> None:
        """Test the ellipse call."""
        doc = Document(10, 10).ellipse(Vector(5, 5), 4, 2, color.red())
        assert "ctx.ellipse(5, 5, 4, 2, 0, 0, 2 * Math.PI);" in canvas.render_document(doc)


class TestConverter:
    """Tests for structural lowering of images."""

    def test_composition_lowered(self) -> None:
        """Test that finite shape compositions become draw commands."""
        img = image.const_color(color.white()).compose(
            image.circle(color.red(), 10).translate_img(50, 50)
        )
        doc = image_to_document(img, 100, 100)
        assert doc.commands[0] == RectangleCommand(0, 0, 100, 100, color.white())
        path_command = doc.commands[1]
        assert isinstance(path_command, PathCommand)
        box = path_command.path.bounds()
        assert box is not None
        assert box.min.is_close(Vector(40, 40), 1e-9)

    def test_opacity_folded_into_leaf(self) -> None:
        """Test that opacity over one shape scales its alpha."""
        doc = image_to_document(image.circle(color.red(), 5).with_opacity(0.5), 10, 10)
        (command,) = doc.commands
        assert isinstance(command, PathCommand)
        assert command.fill == color.red().with_alpha(0.5)

    def test_group_opacity_unsupported(self) -> None:
        """Test that opacity over several shapes is not lowered."""
        group = image.circle(color.red(), 5).compose(image.circle(color.blue(), 3))
        with pytest.raises(UnsupportedImageError):
            image_to_document(group.with_opacity(0.5), 10, 10)

    def test_gradient_image(self) -> None:
        """Test that a full-plane gradient becomes a gradient rectangle."""
        img = image.linear_gradient(color.red(), color.blue(), Vector(0, 0), Vector(10, 0))
        doc = image_to_document(img, 10, 10)
        assert isinstance(doc.commands[0], GradientDef)
        assert doc.commands[1] == RectangleCommand(0, 0, 10, 10, GradientRef("gradient-1"))

    @pytest.mark.parametrize(
        "img",
        [
            image.const_color(color.red()).cut(Path.rect(0, 0, 5, 5)),
            image.from_function(lambda p: color.red()),
            image.linear_gradient(
                color.red(), color.blue(), Vector(0, 0), Vector(1, 0)
            ).translate_img(1, 1),
        ],
    )
    def test_unsupported(self, img) -> None:
        """Test images without a structural form."""
        assert not can_lower(img)
        with pytest.raises(UnsupportedImageError):
            image_to_document(img, 10, 10)

    def test_singular_transform(self) -> None:
        """Test that lowering through a singular transform raises."""
        img = image.circle(color.red(), 1).apply_transform(make_scale(0, 1))
        with pytest.raises(NonInvertibleTransformError):
            image_to_document(img, 10, 10)

    def test_transparent_constant_draws_nothing(self) -> None:
        """Test that a transparent background is dropped."""
        assert len(image_to_document(image.empty(), 10, 10)) == 0


class TestRenderImage:
    """Tests for render_image and sampled output."""

    @staticmethod
    def settings(samples: int = 4) -> VgfxSettings:
        return VgfxSettings(render=RenderConfig(width=10, height=10, samples=samples))

    def test_structural_path(self) -> None:
        """Test that lowerable images are emitted as shapes."""
        logger = RenderLogger(get_logger())
        text = svg.render_image(image.circle(color.red(), 3), self.settings(), logger)
        assert "<path " in text
        assert logger.stats.structural_count == 1
        assert logger.stats.sampled_count == 0

    def test_sampling_fallback(self) -> None:
        """Test that other images are sampled one rect per cell."""
        logger = RenderLogger(get_logger())
        img = image.from_function(lambda p: color.red())
        text = svg.render_image(img, self.settings(4), logger)
        assert text.count("<rect ") == 16
        assert logger.stats.fallback_count == 1
        assert logger.stats.fallbacks == [("Functional", "")]
        assert logger.stats.cells_sampled == 16

    def test_sampled_cells_opaque(self) -> None:
        """Test that sampled cells are composited over the background."""
        img = image.const_color(color.red().with_alpha(0.5))
        text = svg.render_image_to_svg(img, 10, 10, 2)
        fills = re.findall(r'fill="(#[0-9A-F]+)"', text)
        assert fills == ["#FF8080"] * 4

    def test_translucent_background_made_opaque(self) -> None:
        """Test that a translucent background still yields opaque cells."""
        text = svg.render_image_to_svg(
            image.empty(), 10, 10, 2, background=color.white().with_alpha(0.5)
        )
        fills = re.findall(r'fill="(#[0-9A-F]+)"', text)
        assert fills == ["#FFFFFF"] * 4

    def test_sampled_rect_geometry(self) -> None:
        """Test rectangle placement in row-major order."""
        text = svg.render_image_to_svg(image.empty(), 10, 20, 2, background=color.black())
        rects = re.findall(r'<rect x="([^"]+)" y="([^"]+)" width="([^"]+)" height="([^"]+)"', text)
        assert rects == [
            ("0", "0", "5", "10"),
            ("5", "0", "5", "10"),
            ("0", "10", "5", "10"),
            ("5", "10", "5", "10"),
        ]


class TestOutputWriter:
    """Tests for OutputWriter."""

    def test_write_creates_parents(self, tmp_path: FilePath) -> None:
        """Test writing into a new directory."""
        target = tmp_path / "nested" / "scene.svg"
        written = write_output("<svg/>", target)
        assert written == 6
        assert target.read_text(encoding="utf-8") == "<svg/>"

    def test_write_failure(self, tmp_path: FilePath) -> None:
        """Test that OS errors become OutputWriteError."""
        with pytest.raises(OutputWriteError) as exc_info:
            OutputWriter(tmp_path).write("x")
        assert exc_info.value.path == str(tmp_path)

    @pytest.mark.parametrize(
        ("output_format", "expected"),
        [
            (OutputFormat.SVG, "path-demo.svg"),
            (OutputFormat.CANVAS, "path-demo.js"),
            (OutputFormat.SAMPLED_SVG, "path-demo-sampled.svg"),
        ],
    )
    def test_default_output_path(self, output_format: OutputFormat, expected: str) -> None:
        """Test default naming for each format."""
        assert default_output_path("path-demo", output_format) == FilePath(expected)

    def test_output_path_in_directory(self, tmp_path: FilePath) -> None:
        """Test naming inside a given directory."""
        path = OutputWriter.get_output_path("mandelbrot", OutputFormat.SVG, tmp_path)
        assert path == tmp_path / "mandelbrot.svg"
