"""vgfx - Declarative 2D vector graphics.

vgfx treats an image as a mathematical object: a pure function from a point of
the plane to a color, assembled from a small algebra of combinators (solid
fills, shapes, gradients, composition, clipping, affine transforms and opacity).
A path model with exact bounding boxes and arc-to-Bezier reduction supplies the
shapes and clip regions.

Example:
    >>> from vgfx.domain import color, image
    >>> img = image.circle(color.red(), 50.0).compose(
    ...     image.rectangle(color.blue(), 30, 30).translate_img(60, 0)
    ... )

Rendering to SVG or Canvas JavaScript lives in ``vgfx.io``.
"""

__version__ = "0.1.0"
__author__ = "vgfx contributors"

__all__ = ["__author__", "__version__"]
