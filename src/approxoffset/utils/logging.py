"""Logging utilities for Approxoffset."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    curves_emitted: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    cycle_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_cycle_time_ms(self) -> float | None:
        """Average time per processed cycle."""
        if not self.cycle_timings_ms:
            return None
        return sum(self.cycle_timings_ms) / len(self.cycle_timings_ms)

    @property
    def min_cycle_time_ms(self) -> float | None:
        return min(self.cycle_timings_ms) if self.cycle_timings_ms else None

    @property
    def max_cycle_time_ms(self) -> float | None:
        return max(self.cycle_timings_ms) if self.cycle_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"approxoffset_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
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

    logger = structlog.get_logger("approxoffset")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking cycle processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_cycle_start(self, polygon_name: str, cycle_id: int, vertex_count: int) -> None:
        """Log start of cycle processing."""
        self._logger.debug(
            "Processing polygon",
            polygon=polygon_name,
            cycle_id=cycle_id,
            vertices=vertex_count,
        )

    def log_cycle_complete(
        self,
        polygon_name: str,
        cycle_id: int,
        curve_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful cycle computation."""
        self._logger.info(
            "Cycle computed",
            polygon=polygon_name,
            cycle_id=cycle_id,
            curves=curve_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.curves_emitted += curve_count
        self._stats.cycle_timings_ms.append(duration_ms)

    def log_cycle_skipped(self, polygon_name: str, reason: str) -> None:
        """Log skipped polygon."""
        self._logger.debug("Polygon skipped", polygon=polygon_name, reason=reason)
        self._stats.skipped_count += 1

    def log_cycle_error(
        self,
        polygon_name: str,
        error: Exception,
        traceback: str | None = None,
        error_type: str | None = None,
    ) -> None:
        """Log cycle processing error."""
        self._logger.error(
            "Cycle computation failed",
            polygon=polygon_name,
            error=str(error),
            error_type=error_type or type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((polygon_name, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
