"""
HuePick Structured Logging
Centralized loguru configuration plus helpers for the events the engine reports.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from huepick.config import config


class StructuredLogger:
    """Structured logger for the HuePick color engine."""

    def __init__(self, level: Optional[str] = None):
        self.level = level or config.LOG_LEVEL
        self._configure_logger()

    def _configure_logger(self):
        """Route loguru output to stderr with bound fields appended."""
        # Remove default handler
        logger.remove()

        logger.add(
            sys.stderr,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}",
            level=self.level,
            serialize=False  # Set to True for JSON output
        )

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        bound = logger.bind(**extra) if extra else logger
        # depth=2 attributes the record to the caller, not this wrapper
        bound.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)

    def log_sample(self, uri: str, mode: str, extractor: str, count: int):
        """Record a sampling request and how many colors it produced."""
        self._log("INFO", "Sampled colors", {
            "uri": uri[:80],
            "mode": mode,
            "extractor": extractor,
            "count": count,
        })

    def log_palette(self, uri: str, strategy: str, count: int, duration_ms: float):
        """Record a palette extraction with its timing."""
        self._log("INFO", "Extracted palette", {
            "uri": uri[:80],
            "strategy": strategy,
            "count": count,
            "duration_ms": round(duration_ms, 1),
        })


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
