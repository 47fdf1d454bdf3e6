"""Exception hierarchy for vgfx."""

from typing import Any


class VgfxError(Exception):
    """Base exception for all vgfx errors."""

    pass


class GeometryError(VgfxError):
    """Errors in path construction or geometric calculations."""

    pass


class MalformedPathError(GeometryError):
    """A drawing segment appeared before the first MoveTo."""

    def __init__(self, segment: Any, index: int) -> None:
        self.segment = segment
        self.index = index
        super().__init__(
            f"Segment {index} ({type(segment).__name__}) has no current point: "
            "a path must start with move_to"
        )


class TransformError(VgfxError):
    """Errors related to affine transforms."""

    pass


class NonInvertibleTransformError(TransformError):
    """A transform with zero determinant was inverted."""

    def __init__(self, transform: Any) -> None:
        self.transform = transform
        super().__init__(f"Transform is not invertible: {transform!r}")


class ColorError(VgfxError):
    """Errors related to colors."""

    pass


class ColorParseError(ColorError):
    """A textual color could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse color '{text}': {reason}")


class GradientError(VgfxError):
    """Invalid gradient definition."""

    pass


class ImageError(VgfxError):
    """Errors related to image combinators."""

    pass


class UnboundedImageError(ImageError):
    """An operation needs a finite support box but the image has none."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"Cannot {operation}: image is unbounded and no explicit size was given"
        )


class RenderError(VgfxError):
    """Errors raised by renderer adapters."""

    pass


class UnsupportedImageError(RenderError):
    """An image cannot be lowered to structural draw commands."""

    def __init__(self, variant: str, reason: str | None = None) -> None:
        self.variant = variant
        self.reason = reason
        message = f"Image variant '{variant}' has no structural form"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnsupportedFeatureError(RenderError):
    """A backend cannot express a feature."""

    def __init__(self, feature: str, backend: str) -> None:
        self.feature = feature
        self.backend = backend
        super().__init__(f"{backend} output does not support {feature}")


class OutputWriteError(RenderError):
    """Error writing rendered output to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")


class SceneNotFoundError(RenderError):
    """Requested demo scene does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Scene '{name}' not found")
