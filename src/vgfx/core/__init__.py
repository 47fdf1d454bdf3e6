"""Core algorithms for vgfx.

This module contains the algorithms over the domain values:

- Geometry (exact bounds, curve extrema, arc reduction, point-in-path)
- Compositing (source-over and the separable blend modes)
- Evaluation (the reference point -> color semantics of images)
- Sampling (regular-grid evaluation, optionally threaded)

All functions are:
- Stateless (safe to call from worker threads)
- Pure (no side effects)

Key functions:
- path_bounds: Exact bounding box of a path
- arc_to_cubics: Reduce an elliptical arc to cubic Bezier segments
- contains_point: Nonzero / even-odd inside test
- blend: Porter-Duff source-over
- evaluate: Color of an image at a point
- sample_grid: Evaluate an image over a regular grid
"""

from vgfx.core.blending import (
    BlendMode,
    blend,
    blend_with,
    hard_light,
    multiply,
    overlay,
    screen,
    soft_light,
)
from vgfx.core.evaluator import evaluate
from vgfx.core.geometry import (
    arc_center_parameters,
    arc_to_cubics,
    contains_point,
    cubic_extrema,
    flatten_path,
    path_bounds,
    quadratic_extrema,
    reduce_arcs,
    solve_quadratic,
    winding_number,
)
from vgfx.core.sampler import SampleGrid, sample_grid

__all__ = [
    # Compositing
    "BlendMode",
    "blend",
    "blend_with",
    "hard_light",
    "multiply",
    "overlay",
    "screen",
    "soft_light",
    # Evaluation
    "SampleGrid",
    "evaluate",
    "sample_grid",
    # Geometry
    "arc_center_parameters",
    "arc_to_cubics",
    "contains_point",
    "cubic_extrema",
    "flatten_path",
    "path_bounds",
    "quadratic_extrema",
    "reduce_arcs",
    "solve_quadratic",
    "winding_number",
]
