"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vgfx.utils.logging import RenderStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]vgfx[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(name: str, kind: str, width: int, height: int, output_format: str) -> None:
    """Print what is about to be rendered.

    Args:
        name: Scene name
        kind: "document" or "image"
        width: Canvas width
        height: Canvas height
        output_format: Renderer backend
    """
    console.print(
        f"  {name} ({kind}) {SYM_DOT} {width}x{height} {SYM_DOT} {output_format}"
    )


def print_scene_table(rows: list[tuple[str, str, str]]) -> None:
    """Print the built-in scenes.

    Args:
        rows: (name, size, description) per scene
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Scene")
    table.add_column("Size")
    table.add_column("Description")
    for name, size, description in rows:
        table.add_row(name, size, description)
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(output_path: str, file_size: str, stats: RenderStats) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        stats: Statistics collected while rendering
    """
    time_str = _format_time(stats.total_duration_ms / 1000)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    if stats.sampled_count:
        console.print(f"  {stats.cells_sampled:,} cells sampled")
    else:
        console.print(f"  {stats.commands_emitted} draw commands")
    for variant, reason in stats.fallbacks:
        detail = f": {reason}" if reason else ""
        console.print(f"  [yellow]{variant}[/yellow] sampled{detail}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
