"""Logging configuration for compflow using loguru.

Every component logs through ``get_logger(<component>)`` so records carry
the component name (``scheduler``, ``display``, ``sources.words`` ...).
The file sink defaults to ``compflow.log`` in the project root; the
``COMPFLOW_LOG_FILE`` and ``COMPFLOW_LOG_LEVEL`` environment variables
override path and level, and an empty ``COMPFLOW_LOG_FILE`` turns the file
sink off.
"""

import os
import sys
from typing import Optional

from loguru import logger

from compflow.utils import get_project_root

LOG_FILE_ENV = "COMPFLOW_LOG_FILE"
LOG_LEVEL_ENV = "COMPFLOW_LOG_LEVEL"
DEFAULT_LOG_NAME = "compflow.log"

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_log_file_path: Optional[str] = None


def _resolve_log_file(log_file: Optional[str]) -> Optional[str]:
    global _log_file_path

    if log_file is None:
        if _log_file_path is not None:
            return _log_file_path or None
        log_file = os.getenv(LOG_FILE_ENV, os.path.join(get_project_root(), DEFAULT_LOG_NAME))

    if log_file and not os.path.isabs(log_file):
        log_file = os.path.join(get_project_root(), log_file)
    _log_file_path = log_file
    return log_file or None


def setup_logger(
    log_file: Optional[str] = None,
    log_level: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    console_output: bool = False,
) -> None:
    """
    (Re)configure the compflow sinks.

    Args:
        log_file: Log file path. None keeps the previously configured file
            (or the environment/default one on first call); "" disables it.
        log_level: Minimum level; defaults to ``COMPFLOW_LOG_LEVEL`` or INFO
        rotation: Log rotation size
        retention: How long to keep rotated logs
        console_output: Also log to stderr with colors
    """
    level = (log_level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    path = _resolve_log_file(log_file)

    logger.remove()

    if console_output:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if path is not None:
        logger.add(
            path,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )


def current_log_file() -> Optional[str]:
    """Path of the active file sink, or None when file logging is off."""
    return _log_file_path or None


def get_logger(name: Optional[str] = None):
    """
    Get a logger bound to a component name.

    Args:
        name: Component name shown in every record; defaults to "compflow"

    Returns:
        Logger instance
    """
    return logger.bind(name=name or "compflow")


# Records logged through the bare logger still need the name extra
logger.configure(extra={"name": "compflow"})
setup_logger()
