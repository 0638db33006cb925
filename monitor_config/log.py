"""Logging setup and custom levels for monitor-config.

Levels (ascending):
    TRACE =  5  — raw kscreen-doctor output
    DEBUG = 10  — parsed outputs, resolved entries, planned directives
    INFO  = 20  — commands executed, layout saves (default for the log file)

Usage:
    import monitor_config.log  # must be imported once before any logger is used
    logger = logging.getLogger(__name__)
    logger.trace("very noisy message")
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_LOG_FILE = '~/.cache/monitor-config/monitor-config.log'


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


# Patch Logger class once at import time
logging.Logger.trace = _trace  # type: ignore[attr-defined]


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Setup logging to both console and file.

    Args:
        debug: Enable debug level logging on the console
        log_file: Path to log file (default: ~/.cache/monitor-config/monitor-config.log)

    Calling it again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger('monitor_config')
    logger.setLevel(TRACE if debug else logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        log_file = os.path.expanduser(DEFAULT_LOG_FILE)

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler (rotate log file when it gets too large)
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console handler (only warnings and errors unless debugging)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(TRACE if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger
