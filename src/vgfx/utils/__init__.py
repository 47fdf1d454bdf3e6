"""Utility functions for vgfx.

This module provides utility functions including:

- Logging setup and configuration
- Render statistics tracking
"""

from vgfx.utils.logging import (
    RenderLogger,
    RenderStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "RenderLogger",
    "RenderStats",
    "configure_logging",
    "get_logger",
]
