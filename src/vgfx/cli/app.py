"""CLI application entry point for vgfx.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from vgfx import __version__
from vgfx.cli.output import (
    console,
    print_error,
    print_header,
    print_scene_info,
    print_scene_table,
    print_step,
    print_success,
)
from vgfx.cli.scenes import SCENES, Scene, get_scene
from vgfx.config import (
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    RenderConfig,
    VgfxSettings,
)
from vgfx.domain.document import Document
from vgfx.domain.image import Image
from vgfx.exceptions import OutputWriteError, UnsupportedFeatureError, VgfxError
from vgfx.io import canvas, svg
from vgfx.io.canvas import CanvasRenderer
from vgfx.io.converter import image_to_document
from vgfx.io.svg import render_image, render_image_to_svg
from vgfx.io.writer import OutputWriter
from vgfx.utils import RenderLogger, configure_logging, get_logger

# Create the Typer app
app = typer.Typer(
    name="vgfx",
    help="Render declarative vector graphics scenes to SVG or Canvas JavaScript.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]vgfx[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render declarative vector graphics scenes."""


@app.command()
def render(
    scene_name: Annotated[
        str,
        typer.Argument(
            help="Name of a built-in scene (see 'vgfx scenes')",
            show_default=False,
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format",
            case_sensitive=False,
        ),
    ] = OutputFormat.SVG,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {scene}.{ext})",
        ),
    ] = None,
    samples: Annotated[
        int,
        typer.Option(
            "--samples",
            "-s",
            help="Grid cells per axis when sampling",
            min=1,
            max=1024,
        ),
    ] = 64,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of sampling threads (default: sequential)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Render a built-in scene.

    Document scenes are drawn command by command. Image scenes are emitted
    as shapes when they have a structural form and sampled otherwise.

    Example:
        vgfx render basic-shapes --format canvas

    This will create basic-shapes.js in the current directory.
    """
    render_logger = RenderLogger(get_logger())
    try:
        scene = get_scene(scene_name)

        settings = VgfxSettings(
            render=RenderConfig(width=scene.width, height=scene.height, samples=samples),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )

        if settings.logging.log_file is not None:
            logger = configure_logging(
                log_file=settings.logging.log_file,
                console_level=settings.logging.log_level,
                file_level=settings.logging.file_log_level,
                quiet=quiet,
            )
        else:
            logger = get_logger()
        render_logger = RenderLogger(logger)

        if not quiet:
            print_header(__version__)

        built = scene.build()
        kind = "document" if isinstance(built, Document) else "image"
        if not quiet:
            print_step("Rendering")
            print_scene_info(scene.name, kind, scene.width, scene.height, output_format.value)

        text = render_scene(scene, built, output_format, settings, render_logger)

        output_path = output or OutputWriter.get_output_path(scene.name, output_format)
        OutputWriter(output_path).write(text)

        if not quiet:
            print_success(
                output_path=str(output_path),
                file_size=_format_file_size(output_path),
                stats=render_logger.stats,
            )

    except OutputWriteError as e:
        render_logger.log_render_error(scene_name, e)
        print_error(f"Could not write output: {e.reason}")
        raise typer.Exit(code=1)
    except VgfxError as e:
        render_logger.log_render_error(scene_name, e)
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        render_logger.log_render_error(scene_name, e)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def scenes() -> None:
    """List the built-in scenes."""
    print_scene_table(
        [(s.name, f"{s.width}x{s.height}", s.description) for s in SCENES.values()]
    )


def render_scene(
    scene: Scene,
    built: Document | Image,
    output_format: OutputFormat,
    settings: VgfxSettings,
    render_logger: RenderLogger,
) -> str:
    """Render a built scene in the requested format.

    Args:
        scene: Scene metadata
        built: The scene's document or image
        output_format: Renderer backend
        settings: Render settings
        render_logger: Receives render path and timing

    Returns:
        Rendered text

    Raises:
        UnsupportedFeatureError: Sampled output requested for a document scene
        UnsupportedImageError: Canvas output of an image with no structural form
    """
    render_logger.log_scene_start(scene.name, output_format.value)
    precision = settings.render.precision
    start = time.time()

    if isinstance(built, Document):
        if output_format is OutputFormat.SAMPLED_SVG:
            raise UnsupportedFeatureError("document scenes", "Sampled SVG")
        if output_format is OutputFormat.CANVAS:
            text = canvas.render_document(built, precision)
        else:
            text = svg.render_document(built, precision)
        render_logger.log_structural(len(built), (time.time() - start) * 1000)
        return text

    match output_format:
        case OutputFormat.SVG:
            return render_image(built, settings, render_logger)
        case OutputFormat.CANVAS:
            document = image_to_document(built, scene.width, scene.height)
            renderer = CanvasRenderer(precision, settings.geometry.max_arc_segment_angle)
            text = renderer.render(document)
            render_logger.log_structural(len(document), (time.time() - start) * 1000)
            return text
        case OutputFormat.SAMPLED_SVG:
            render = settings.render
            text = render_image_to_svg(
                built,
                render.width,
                render.height,
                render.samples,
                background=render.background_color(),
                max_workers=settings.processing.max_workers,
                tolerance=settings.geometry.flatten_tolerance,
                precision=precision,
            )
            render_logger.log_sampled(render.samples * render.samples, (time.time() - start) * 1000)
            return text

    raise ValueError(f"Unknown output format: {output_format!r}")


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
