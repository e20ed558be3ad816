"""Logging utilities for LED Layout."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_MARKER = "_ledlayout_handler"


@dataclass
class PlacementStats:
    """Statistics from a batch placement run."""

    placed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    modules_placed: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    character_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Seconds between start and end, or 0 when unfinished."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_character_time_ms(self) -> float | None:
        if not self.character_timings_ms:
            return None
        return sum(self.character_timings_ms) / len(self.character_timings_ms)


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Set up structlog with a console handler and an optional JSON file handler.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Minimum level shown on stderr
        file_level: Minimum level written to log_file
        quiet: Only show errors on the console

    Returns:
        Logger bound to "ledlayout"
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(_mark(file_handler))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(_mark(console_handler))

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

    logger = structlog.get_logger("ledlayout")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class PlacementLogger:
    """Logger for tracking placement progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PlacementStats()

    def log_character_start(self, char_id: str) -> None:
        """Log start of character placement."""
        self._logger.debug("Placing character", char=char_id)

    def log_character_complete(
        self,
        char_id: str,
        modules_placed: int,
        target_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful character placement."""
        self._logger.info(
            "Character placed",
            char=char_id,
            modules=modules_placed,
            target=target_count,
            duration_ms=round(duration_ms, 2),
        )
        if modules_placed < target_count:
            self._logger.warning(
                "Placement short of target",
                char=char_id,
                modules=modules_placed,
                target=target_count,
            )
        self._stats.placed_count += 1
        self._stats.modules_placed += modules_placed
        self._stats.character_timings_ms.append(duration_ms)

    def log_character_skipped(self, char_id: str, reason: str) -> None:
        """Log skipped character."""
        self._logger.debug("Character skipped", char=char_id, reason=reason)
        self._stats.skipped_count += 1

    def log_character_error(
        self,
        char_id: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log character placement error."""
        self._logger.error(
            "Character placement failed",
            char=char_id,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((char_id, str(error)))

    def log_validation(self, ok: bool, severity: str, reason: str | None, **metrics: float) -> None:
        """Log a path edit validation outcome."""
        log = self._logger.info if ok else self._logger.warning
        log("Path edit validated", ok=ok, severity=severity, reason=reason, **metrics)

    @property
    def stats(self) -> PlacementStats:
        """Get current placement statistics."""
        return self._stats
