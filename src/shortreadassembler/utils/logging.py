"""Centralized logging utilities for ShortReadAssembler.

Provides a single place to configure logging and fetch namespaced loggers.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOGGER_NAMESPACE = "shortreadassembler"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# Log rotation settings
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Configure logging for the 'shortreadassembler' namespace.

    Args:
        level: Logging level for the application logger
        log_file: Optional path for log file output
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Notes:
        - Root logger kept at WARNING to suppress third-party noise
        - Console handler uses concise format; file handler (if any) is detailed at DEBUG
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(logging.DEBUG if log_file else level)
    # Avoid duplicate logs if called multiple times
    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            app_logger.addHandler(file_handler)
        except OSError as e:
            import warnings

            warnings.warn(f"Failed to create log file {log_file}: {e}")

    # Do not propagate to root to avoid double-printing
    app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger under the 'shortreadassembler' root."""
    base = logging.getLogger(LOGGER_NAMESPACE)
    return base.getChild(name)


class LogTemplates:
    """Standard log message templates for stage and tool lifecycle messages.

    Example usage:
        logger.info(LogTemplates.STAGE_START.format(stage="assemble", sample="A"))
    """

    # Sample lifecycle
    SAMPLE_START = "Processing sample: {sample} ({index}/{total})"
    SAMPLE_COMPLETE = "Sample {sample} complete: {artifact}"
    SAMPLE_FAILED = "Sample {sample} failed: {reason}"

    # Stage lifecycle
    STAGE_START = "[{sample}] Running stage: {stage}"
    STAGE_SUCCESS = "[{sample}] Completed stage: {stage} in {duration:.1f}s"
    STAGE_FAILURE = "[{sample}] Stage {stage} failed (exit code {exit_code})"
    STAGE_SKIPPED = "[{sample}] Skipping stage: {stage} - {reason}"

    # Polishing
    POLISH_ROUND = "[{sample}] Polishing round {round}/{total}"
    POLISH_SOFT_STOP = "[{sample}] Polishing stopped at round {round}: {reason}"

    # External tool execution
    TOOL_START = "Running {tool_name}: {command}"
    TOOL_FAILURE = "{tool_name} failed with exit code {exit_code}"
