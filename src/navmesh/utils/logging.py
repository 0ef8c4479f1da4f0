"""Logging utilities for Navmesh."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class BuildStats:
    """Statistics from a map build."""

    island_count: int = 0
    triangle_count: int = 0
    diagonals_found: int = 0
    diagonals_applied: int = 0
    untriangulated_pieces: int = 0
    error_count: int = 0
    warnings: list[tuple[int, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def diagonals_skipped(self) -> int:
        return self.diagonals_found - self.diagonals_applied

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so configuring
    twice does not duplicate output.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

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

    logger = structlog.get_logger("navmesh")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BuildLogger:
    """Logger for tracking map build progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = BuildStats()

    def log_island_start(self, island_index: int, vertex_count: int) -> None:
        """Log start of island triangulation."""
        self._logger.debug("Triangulating island", island=island_index, vertices=vertex_count)

    def log_island_complete(
        self,
        island_index: int,
        triangle_count: int,
        diagonals_found: int,
        diagonals_applied: int,
        untriangulated_pieces: int,
        duration_ms: float,
    ) -> None:
        """Log island triangulation, complete or best effort."""
        self._logger.info(
            "Island triangulated",
            island=island_index,
            triangles=triangle_count,
            diagonals=diagonals_applied,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.island_count += 1
        self._stats.triangle_count += triangle_count
        self._stats.diagonals_found += diagonals_found
        self._stats.diagonals_applied += diagonals_applied
        self._stats.untriangulated_pieces += untriangulated_pieces

    def log_diagonals_skipped(self, island_index: int, skipped: int) -> None:
        """Log diagonals that could not split any piece."""
        if skipped:
            self._logger.debug("Diagonals skipped", island=island_index, skipped=skipped)

    def log_island_warning(self, island_index: int, detail: str) -> None:
        """Log a best-effort fallback; the build carries on."""
        self._logger.warning("Island triangulation warning", island=island_index, detail=detail)
        self._stats.warnings.append((island_index, detail))

    def log_island_error(self, island_index: int, error: Exception) -> None:
        """Log an island rejected by validation."""
        self._logger.error(
            "Island rejected",
            island=island_index,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats
