"""
Structured logging system for TalentMatch.

Provides centralized logging with console and file outputs plus
metrics tracking for ranking passes and history similarity checks.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for candidate scoring and similarity checks.
    """

    def __init__(
        self,
        name: str = "talentmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        # Scoring runs on worker threads
        self._lock = threading.Lock()
        self.metrics = {
            "rank_requests": 0,
            "candidates_scored": 0,
            "candidates_filtered": 0,
            "extraction_failures": 0,
            "errors_by_type": {},
            "similarity_checks": 0,
            "histories_compared": 0,
            "histories_flagged": 0,
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"talentmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_rank_request(self):
        with self._lock:
            self.metrics["rank_requests"] += 1

    def record_candidate_scored(self, included: bool):
        """Record one scored candidate and whether it passed the threshold."""
        with self._lock:
            self.metrics["candidates_scored"] += 1
            if not included:
                self.metrics["candidates_filtered"] += 1

    def record_extraction_failure(self, error_type: str):
        with self._lock:
            self.metrics["extraction_failures"] += 1
            errors = self.metrics["errors_by_type"]
            errors[error_type] = errors.get(error_type, 0) + 1

    def record_similarity_check(self, compared: int, flagged: int):
        """Record one similarity check over ``compared`` histories."""
        with self._lock:
            self.metrics["similarity_checks"] += 1
            self.metrics["histories_compared"] += compared
            self.metrics["histories_flagged"] += flagged

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        with self._lock:
            snapshot = dict(self.metrics)
            snapshot["errors_by_type"] = dict(self.metrics["errors_by_type"])

        scored = snapshot["candidates_scored"]
        snapshot["inclusion_rate"] = 0
        if scored > 0:
            snapshot["inclusion_rate"] = round(
                (scored - snapshot["candidates_filtered"]) / scored, 3
            )
        return snapshot

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Matching Session Metrics ===")
        self.info(f"Rank requests: {metrics['rank_requests']}")
        self.info(
            f"Candidates scored: {metrics['candidates_scored']} "
            f"({metrics['inclusion_rate'] * 100:.1f}% above threshold)"
        )
        self.info(
            f"Similarity checks: {metrics['similarity_checks']} "
            f"({metrics['histories_flagged']}/{metrics['histories_compared']} histories flagged)"
        )

        if metrics["errors_by_type"]:
            self.info("Extraction errors:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "talentmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
