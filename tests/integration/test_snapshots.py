"""Renderer output compared against stored snapshots.

The Canvas fixtures are the reference output for the two demo documents and
must match byte for byte.
"""

from pathlib import Path

import pytest

from vgfx.cli.scenes import get_scene
from vgfx.io import canvas, svg

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class TestCanvasSnapshots:
    """Canvas output for the demo documents."""

    @pytest.mark.parametrize(
        ("scene", "fixture"),
        [
            ("basic-shapes", "canvas_basic_shapes.js"),
            ("path-demo", "canvas_path_demo.js"),
        ],
    )
    def test_matches_fixture(self, scene: str, fixture: str) -> None:
        """Test that the generated script equals the stored snapshot."""
        document = get_scene(scene).build()
        assert canvas.render_document(document) == read_fixture(fixture)

    def test_no_trailing_newline(self) -> None:
        """Test that the script ends with the usage comment."""
        text = canvas.render_document(get_scene("path-demo").build())
        assert text.endswith("'myCanvas'));")


class TestSvgScenes:
    """SVG output for the demo scenes."""

    def test_basic_shapes(self) -> None:
        """Test the elements of the basic shapes document."""
        text = svg.render_document(get_scene("basic-shapes").build())
        assert '<rect x="0" y="0" width="300" height="200" fill="#F2F2F2"/>' in text
        assert '<circle cx="80" cy="100" r="30" fill="#FF0000"/>' in text
        assert '<rect x="150" y="70" width="60" height="60" fill="#00FF00"/>' in text
        assert (
            '<line x1="50" y1="160" x2="250" y2="160" stroke="#0000FF" '
            'stroke-width="3" stroke-linecap="round"/>'
        ) in text
        assert ">Canvas Rendering</text>" in text

    def test_path_demo(self) -> None:
        """Test the path of the path demo document."""
        text = svg.render_document(get_scene("path-demo").build())
        assert '<path d="M 50 50 L 150 50 Q 200 75 150 100 L 50 100 Z" fill="#FF00FF"/>' in text

    @pytest.mark.parametrize("scene", ["composition", "gradients"])
    def test_image_scenes_lower_structurally(self, scene: str) -> None:
        """Test that the shape-based image scenes need no sampling."""
        from vgfx.io.converter import can_lower

        assert can_lower(get_scene(scene).build())
