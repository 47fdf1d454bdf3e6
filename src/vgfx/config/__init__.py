"""Configuration management for vgfx.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Flattening and arc reduction tolerances
- RenderConfig: Canvas size, sampling and output settings
- ProcessingConfig: Sampling worker settings
- LoggingConfig: Logging settings
- VgfxSettings: Main application settings
"""

from vgfx.config.settings import (
    GeometryConfig,
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    RenderConfig,
    VgfxSettings,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "LoggingConfig",
    "OutputFormat",
    "ProcessingConfig",
    "RenderConfig",
    "VgfxSettings",
    "get_default_settings",
]
