"""Configuration settings for vgfx."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from vgfx.core.geometry import DEFAULT_FLATTEN_TOLERANCE, MAX_ARC_SEGMENT_ANGLE
from vgfx.domain.color import Color, from_hex
from vgfx.exceptions import ColorParseError


class OutputFormat(str, Enum):
    """Renderer backend."""

    SVG = "svg"
    CANVAS = "canvas"
    SAMPLED_SVG = "sampled-svg"

    @property
    def extension(self) -> str:
        """File extension for this format."""
        return "js" if self is OutputFormat.CANVAS else "svg"


class GeometryConfig(BaseModel):
    """Tolerances for curve flattening and arc reduction."""

    flatten_tolerance: float = Field(
        default=DEFAULT_FLATTEN_TOLERANCE,
        gt=0.0,
        le=10.0,
        description="Max distance between a curve and its flattened polyline",
    )
    max_arc_segment_angle: float = Field(
        default=MAX_ARC_SEGMENT_ANGLE,
        gt=0.0,
        le=MAX_ARC_SEGMENT_ANGLE,
        description="Largest sweep (radians) approximated by one cubic segment",
    )


class RenderConfig(BaseModel):
    """Configuration for renderer adapters."""

    width: int = Field(default=300, ge=1, description="Canvas width")
    height: int = Field(default=200, ge=1, description="Canvas height")
    samples: int = Field(
        default=64,
        ge=1,
        le=1024,
        description="Grid cells per axis for sampled output",
    )
    background: str = Field(
        default="#FFFFFF",
        description="Opaque color sampled cells are composited over",
    )
    precision: int = Field(
        default=4,
        ge=0,
        le=12,
        description="Decimal places for coordinates in SVG output",
    )
    prefer_structural: bool = Field(
        default=True,
        description="Emit shapes as elements when possible instead of sampling",
    )

    @field_validator("background")
    @classmethod
    def _check_background(cls, value: str) -> str:
        try:
            color = from_hex(value)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        if color.a < 1.0:
            raise ValueError(f"background must be opaque, got {value}")
        return value

    def background_color(self) -> Color:
        """Parsed background color."""
        return from_hex(self.background)


class ProcessingConfig(BaseModel):
    """Configuration for grid sampling."""

    max_workers: int | None = Field(
        default=None,
        description="Worker threads for sampling (None or 1 = sequential)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VgfxSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VgfxSettings:
    """Get default application settings."""
    return VgfxSettings()
