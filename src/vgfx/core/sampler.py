"""Regular-grid sampling of images.

A ``width x height`` canvas is split into a ``samples x samples`` grid and the
image is evaluated once at the center of each cell. Rows can be evaluated on
a thread pool: evaluation is side-effect free, and threads (unlike worker
processes) can run Functional images whose closures cannot be pickled.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from vgfx.core.evaluator import evaluate
from vgfx.core.geometry import DEFAULT_FLATTEN_TOLERANCE
from vgfx.domain.color import Color
from vgfx.domain.image import Image
from vgfx.domain.vector import Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SampleGrid:
    """Sampled colors in row-major order.

    Attributes:
        width: Canvas width
        height: Canvas height
        samples: Cells per axis
        rows: ``samples`` rows of ``samples`` colors each, top to bottom
    """

    width: float
    height: float
    samples: int
    rows: tuple[tuple[Color, ...], ...]

    @property
    def cell_width(self) -> float:
        return self.width / self.samples

    @property
    def cell_height(self) -> float:
        return self.height / self.samples

    def cells(self):
        """Yield ``(x, y, w, h, color)`` for each cell in row-major order."""
        w, h = self.cell_width, self.cell_height
        for j, row in enumerate(self.rows):
            for i, color in enumerate(row):
                yield (i * w, j * h, w, h, color)


def cell_center(i: int, j: int, width: float, height: float, samples: int) -> Vector:
    """Center of grid cell ``(i, j)``."""
    return Vector((i + 0.5) * width / samples, (j + 0.5) * height / samples)


def _sample_row(
    image: Image, j: int, width: float, height: float, samples: int, tolerance: float
) -> tuple[Color, ...]:
    return tuple(
        evaluate(image, cell_center(i, j, width, height, samples), tolerance)
        for i in range(samples)
    )


def sample_grid(
    image: Image,
    width: float,
    height: float,
    samples: int,
    max_workers: int | None = None,
    tolerance: float = DEFAULT_FLATTEN_TOLERANCE,
) -> SampleGrid:
    """Evaluate ``image`` at every cell center of a regular grid.

    Args:
        image: Image to sample
        width: Canvas width
        height: Canvas height
        samples: Cells per axis
        max_workers: Worker threads; None or 1 samples sequentially
        tolerance: Curve flattening tolerance for inside tests

    Returns:
        SampleGrid with rows in row-major order

    Raises:
        ValueError: If ``samples`` is not positive
        NonInvertibleTransformError: Propagated from evaluation
    """
    if samples < 1:
        raise ValueError(f"samples must be positive, got {samples}")

    if max_workers is None or max_workers <= 1:
        rows = [_sample_row(image, j, width, height, samples, tolerance) for j in range(samples)]
        return SampleGrid(width, height, samples, tuple(rows))

    logger.debug("Sampling on %d threads", max_workers)
    results: dict[int, tuple[Color, ...]] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_sample_row, image, j, width, height, samples, tolerance): j
            for j in range(samples)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return SampleGrid(width, height, samples, tuple(results[j] for j in range(samples)))
