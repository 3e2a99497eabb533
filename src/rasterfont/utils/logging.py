"""Logging utilities for rasterfont."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_TAG = "_rasterfont_handler"


@dataclass
class ProcessingStats:
    """Statistics from a conversion run."""

    vectorized_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    holes_traced: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        if not self.glyph_timings_ms:
            return None
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)

    @property
    def min_glyph_time_ms(self) -> float | None:
        return min(self.glyph_timings_ms) if self.glyph_timings_ms else None

    @property
    def max_glyph_time_ms(self) -> float | None:
        return max(self.glyph_timings_ms) if self.glyph_timings_ms else None


def _install_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG, True)
    logging.getLogger().addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _install_handler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _install_handler(console_handler)

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

    logger = structlog.get_logger("rasterfont")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


def configure_worker_logging(level: int = logging.WARNING) -> None:
    """Keep worker processes quiet: only warnings and errors reach stderr."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["level", "event"]),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


class ProcessingLogger:
    """Logger for tracking conversion progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_glyph_start(self, glyph_name: str) -> None:
        """Log start of glyph processing."""
        self._logger.debug("Vectorizing glyph", glyph=glyph_name)

    def log_glyph_complete(
        self,
        glyph_name: str,
        parts: int,
        holes: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph vectorization."""
        self._logger.info(
            "Glyph vectorized",
            glyph=glyph_name,
            parts=parts,
            holes=holes,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.vectorized_count += 1
        self._stats.holes_traced += holes
        self._stats.glyph_timings_ms.append(duration_ms)

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.info("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        glyph_name: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log glyph processing error."""
        error_type = type(error).__name__ if isinstance(error, Exception) else "Error"
        self._logger.warning(
            "Glyph vectorization failed",
            glyph=glyph_name,
            error=str(error),
            error_type=error_type,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
