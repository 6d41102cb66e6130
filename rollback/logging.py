"""Package logger for rollback.

Every module logs through ``get_logger(__name__)``, which hangs its logger off
the ``rollback`` logger. That logger gets one handler the first time any
module asks for a logger; levels and handlers of child loggers are left alone
so they inherit from it.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "rollback"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a single handler to the ``rollback`` logger.

    Only the first call configures anything; later calls return the logger
    unchanged.

    Args:
        level: Level of the ``rollback`` logger (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to StreamHandler on stderr).

    Returns:
        The ``rollback`` logger.
    """
    global _ROOT_LOGGER_CONFIGURED

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _ROOT_LOGGER_CONFIGURED:
        return root_logger

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # Records still reach the root logger (and pytest's caplog).
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring the package logger first.

    Batch lifecycle messages go out at DEBUG; the only WARNING the package
    emits is for failed compensations when ``log_compensation_errors`` is set,
    and an ERROR when a scheduled batch's callback raises.
    """
    setup_root_logger()
    return logging.getLogger(name)
