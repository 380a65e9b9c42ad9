"""
Loguru configuration for flowvars.

Modules log through ``from loguru import logger``; this module only decides
where records go. The per-point hot path never logs: factories report the
selected physics variant at DEBUG, VariableSet reports non-realizable
points at WARNING and the config loader reports loaded files at INFO.
"""

import sys
from loguru import logger

_BASE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
_TIME_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "


def setup_logging(level="INFO", show_time=True, sink=None):
    """Configure loguru for flowvars.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    sink : file-like or callable, optional
        Destination of the records (default: stderr, colorized).
    """
    logger.remove()

    log_format = _TIME_FORMAT + _BASE_FORMAT if show_time else _BASE_FORMAT
    if sink is None:
        logger.add(sys.stderr, format=log_format, level=level, colorize=True)
    else:
        logger.add(sink, format=log_format, level=level, colorize=False)

    return logger


def disable_logging():
    """Silence all flowvars records (e.g. inside test suites or benchmark loops)."""
    logger.disable("flowvars")


def enable_logging():
    """Re-enable flowvars records after disable_logging()."""
    logger.enable("flowvars")


# Default setup
setup_logging()
