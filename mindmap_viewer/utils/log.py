"""
Logging Setup
=============

Every module logs through ``logging.getLogger(__name__)``. Entry points call
``get_logger`` once to attach handlers:

    - Console: INFO and above, ``LEVEL: message``
    - File (optional): DEBUG and above, ``time | name | level | message``

``ContextLogger`` appends keyword context as ``message | key=value`` and
shortens long string values (node labels can be whole sentences).

Usage:
    logger = get_logger(__name__)
    logger.info("Viewer opened", title=mind_map.title, nodes=24)
    # Output: "INFO: Viewer opened | title=Data Analysis with Py... | nodes=24"
"""

import logging
import os
from typing import Any, Optional

from config.settings import settings

MAX_VALUE_LENGTH = 24
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


def shorten(value: Any, limit: int = MAX_VALUE_LENGTH) -> Any:
    """Truncate long strings to ``limit`` characters plus '...'."""
    if isinstance(value, str) and len(value) > limit:
        return value[:limit] + '...'
    return value


class ContextLogger:
    """
    Thin wrapper around a stdlib logger that formats keyword context.

    Args:
        name: Logger name (usually __name__)
        log_file: Optional log file path
    """

    def __init__(self, name: str, log_file: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        if not any(getattr(h, '_mindmap_console', False) for h in self.logger.handlers):
            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler._mindmap_console = True
            self.logger.addHandler(console_handler)

        if log_file and not any(
            isinstance(h, logging.FileHandler)
            and h.baseFilename == os.path.abspath(log_file)
            for h in self.logger.handlers
        ):
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            self.logger.addHandler(file_handler)

    @staticmethod
    def format_message(message: str, **kwargs) -> str:
        """``message | k1=v1 | k2=v2`` with long values shortened."""
        if not kwargs:
            return message
        context = ' | '.join(f'{k}={shorten(v)}' for k, v in kwargs.items())
        return f'{message} | {context}'

    def debug(self, message: str, **kwargs):
        self.logger.debug(self.format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(self.format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self.format_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(self.format_message(message, **kwargs))


def get_logger(name: str, log_file: Optional[str] = None) -> ContextLogger:
    """
    Get a context logger.

    Args:
        name: Logger name (use __name__)
        log_file: Optional log file path (default: settings.log_file)

    Returns:
        ContextLogger instance
    """
    return ContextLogger(name, log_file or settings.log_file)
