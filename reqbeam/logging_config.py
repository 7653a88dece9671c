"""
Logging setup for the ReqBeam service.

Modules obtain their loggers with ``logging.getLogger(__name__)``;
this module only wires the root logger once at startup.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Calling this more than once replaces the previous handlers instead
    of stacking duplicates.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    return root_logger
