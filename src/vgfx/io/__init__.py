"""Renderer adapters for vgfx.

This module turns documents and images into backend text. It is the only
layer that knows about output formats.

Key responsibilities:
- Lower images to structural draw commands
- Emit SVG markup and Canvas 2D JavaScript
- Sample images that have no structural form
- Write rendered output to disk

Key classes and functions:
- image_to_document: Structural lowering of an image
- CanvasRenderer: Document -> Canvas JavaScript
- render_document (svg, canvas): Document -> text
- render_image: Image -> SVG, structural with sampling fallback
- OutputWriter: Save rendered text
"""

from vgfx.io import canvas, svg
from vgfx.io.canvas import CanvasRenderer
from vgfx.io.converter import can_lower, image_to_document
from vgfx.io.svg import render_image, render_image_to_svg
from vgfx.io.writer import OutputWriter, default_output_path, write_output

__all__ = [
    "CanvasRenderer",
    "OutputWriter",
    "can_lower",
    "canvas",
    "default_output_path",
    "image_to_document",
    "render_image",
    "render_image_to_svg",
    "svg",
    "write_output",
]
