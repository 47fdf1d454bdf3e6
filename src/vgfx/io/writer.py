"""Output writer for rendered graphics.

This module provides the OutputWriter class for saving renderer output
with a predictable naming convention.
"""

from pathlib import Path

from vgfx.config import OutputFormat
from vgfx.exceptions import OutputWriteError


class OutputWriter:
    """Writes rendered text to disk.

    Example:
        writer = OutputWriter(Path("out/scene.svg"))
        writer.write(svg_text)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the output will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, text: str) -> int:
        """Write ``text`` as UTF-8, creating parent directories.

        Returns:
            Number of bytes written

        Raises:
            OutputWriteError: If the file cannot be written
        """
        data = text.encode("utf-8")
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_bytes(data)
        except OSError as e:
            raise OutputWriteError(str(self._output_path), str(e)) from e
        return len(data)

    @staticmethod
    def get_output_path(scene: str, output_format: OutputFormat, directory: Path | None = None) -> Path:
        """Generate the default output path for a scene.

        Converts: ("path-demo", CANVAS) -> path-demo.js
                  ("mandelbrot", SAMPLED_SVG) -> mandelbrot-sampled.svg

        Args:
            scene: Scene name
            output_format: Renderer backend
            directory: Parent directory (current directory if None)

        Returns:
            Output path
        """
        suffix = "-sampled" if output_format is OutputFormat.SAMPLED_SVG else ""
        name = f"{scene}{suffix}.{output_format.extension}"
        return (directory or Path(".")) / name


def write_output(text: str, path: Path) -> int:
    """Write rendered ``text`` to ``path``.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    return OutputWriter(path).write(text)


def default_output_path(scene: str, output_format: OutputFormat) -> Path:
    """Default output file for a scene, in the current directory."""
    return OutputWriter.get_output_path(scene, output_format)
