"""Domain models for vgfx.

This module contains the value types of the engine. All models are:

- Immutable (frozen dataclasses); operations return new values
- Hashable, so geometry results can be cached per value
- Free of rendering concerns

Key classes:
- Vector, Box: Points and axis-aligned boxes
- Transform: Affine maps
- Color: RGBA colors with clamped channels
- Path: Segment sequences with a persistent builder
- Gradient: Color stops over a linear, radial, axial or conic layout
- Image variants: The compositional image algebra
- Document: Ordered structural draw commands for renderers
"""

from vgfx.domain import color, image
from vgfx.domain.color import Color
from vgfx.domain.document import Document, GradientRef
from vgfx.domain.gradient import Gradient, GradientKind, GradientStop
from vgfx.domain.image import (
    Compose,
    Constant,
    Cut,
    Functional,
    GradientImage,
    Image,
    Opacity,
    Shape,
    Transformed,
)
from vgfx.domain.path import (
    ArcTo,
    ClosePath,
    CubicTo,
    FillRule,
    LineTo,
    MoveTo,
    Path,
    PathSegment,
    QuadTo,
)
from vgfx.domain.transform import Transform
from vgfx.domain.vector import Box, Vector

__all__: list[str] = [
    # Modules
    "color",
    "image",
    # Geometry
    "Vector",
    "Box",
    "Transform",
    # Paths
    "FillRule",
    "PathSegment",
    "MoveTo",
    "LineTo",
    "CubicTo",
    "QuadTo",
    "ArcTo",
    "ClosePath",
    "Path",
    # Paint
    "Color",
    "Gradient",
    "GradientKind",
    "GradientStop",
    # Images
    "Image",
    "Constant",
    "Shape",
    "Compose",
    "Cut",
    "Transformed",
    "Opacity",
    "GradientImage",
    "Functional",
    # Documents
    "Document",
    "GradientRef",
]
