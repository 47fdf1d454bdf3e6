"""Logging utilities for vgfx."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class RenderStats:
    """Statistics from a rendering run."""

    structural_count: int = 0
    sampled_count: int = 0
    fallback_count: int = 0
    commands_emitted: int = 0
    cells_sampled: int = 0
    fallbacks: list[tuple[str, str]] = field(default_factory=list)
    durations_ms: list[float] = field(default_factory=list)

    @property
    def total_duration_ms(self) -> float:
        """Total time spent rendering."""
        return sum(self.durations_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"vgfx_{timestamp}.log")

    file_numeric_level = getattr(logging, file_level.upper())
    console_numeric_level = getattr(logging, console_level.upper())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_numeric_level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_numeric_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("vgfx")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


def get_logger(name: str = "vgfx") -> structlog.stdlib.BoundLogger:
    """structlog logger routed through the stdlib logger ``name``.

    Records go wherever configure_logging sent them; until then the stdlib
    defaults drop everything below WARNING.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


class RenderLogger:
    """Logger for tracking which render path ran and how long it took."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_scene_start(self, scene: str, output_format: str) -> None:
        """Log start of a scene render."""
        self._logger.debug("Rendering scene", scene=scene, format=output_format)

    def log_structural(self, commands: int, duration_ms: float) -> None:
        """Log a render emitted as structural draw commands."""
        self._logger.info(
            "Rendered structurally",
            commands=commands,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.structural_count += 1
        self._stats.commands_emitted += commands
        self._stats.durations_ms.append(duration_ms)

    def log_sampled(self, cells: int, duration_ms: float) -> None:
        """Log a render produced by grid sampling."""
        self._logger.info(
            "Rendered by sampling",
            cells=cells,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.sampled_count += 1
        self._stats.cells_sampled += cells
        self._stats.durations_ms.append(duration_ms)

    def log_fallback(self, variant: str, reason: str | None = None) -> None:
        """Log that structural lowering failed and sampling will be used."""
        self._logger.debug(
            "Structural lowering unavailable",
            variant=variant,
            reason=reason,
        )
        self._stats.fallback_count += 1
        self._stats.fallbacks.append((variant, reason or ""))

    def log_render_error(self, scene: str, error: Exception) -> None:
        """Log a failed render."""
        self._logger.error(
            "Render failed",
            scene=scene,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
