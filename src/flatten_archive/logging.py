from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import structlog

_LOGGING_CONFIGURED = False


def _has_file_handler(root: logging.Logger, filename: Path) -> bool:
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(filename) for h in root.handlers
    )


def setup_logging(filename: str | Path | None = None) -> structlog.BoundLogger:
    """Set up structured logging for the flatten_archive module.

    The first call configures structlog and a stderr handler. Passing
    `filename` (on any call) also appends log lines to that file.

    Args:
        filename: Optional path to a log file, in addition to stderr.

    Returns:
        A structlog logger instance configured for the flatten_archive module.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED:
        logging.basicConfig(
            level=logging.INFO,
            handlers=[logging.StreamHandler(sys.stderr)],
            format="%(message)s",
        )
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_CONFIGURED = True

    if filename:
        root = logging.getLogger()
        path = Path(filename)
        if not _has_file_handler(root, path):
            handler = logging.FileHandler(str(path), encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(handler)

    return structlog.get_logger("flatten_archive")


logger = setup_logging()
