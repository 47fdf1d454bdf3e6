"""Command-line interface for vgfx.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Built-in demo scenes
- SVG, Canvas and sampled SVG output
- Quiet mode and optional log files
- Detailed error reporting
"""

from vgfx.cli.app import cli, main

__all__ = ["cli", "main"]
