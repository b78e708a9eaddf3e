"""Opt-in logging for airportsim.

Everything logs under the ``airportsim`` logger, which is silent until the
application attaches a handler. The control tower traces every spawn, crash,
repair and runway decision at DEBUG, tagged with the tick it happened on;
runs and sweeps report start, end and per-seed results at INFO.

Example:
    import airportsim

    airportsim.enable_console_logging(level="DEBUG")
    airportsim.simulate(commercial_probability=0.01, ticks=240, seed=1)

    # 10:30:00 [tick 17] DEBUG airportsim.tower.control_tower: ARRIVAL: Light #4. ...
    # 10:30:00 [tick -] INFO airportsim.simulator: Simulation finished: ...

Environment variables (read by configure_from_env):
    AS_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    AS_LOG_FILE: Write the trace to this file instead of stderr
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

__all__ = [
    "TickFilter",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "set_level",
]

LOGGER_NAME = "airportsim"

TRACE_FORMAT = "%(asctime)s [tick %(tick)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TickFilter(logging.Filter):
    """Makes sure every record has a ``tick`` attribute for TRACE_FORMAT.

    The tower passes ``extra={"tick": n}``; records from anywhere else get
    ``-``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "tick"):
            record.tick = "-"
        return True


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _install(handler: logging.Handler, level: LogLevel | int, format: str) -> None:
    handler.setFormatter(logging.Formatter(format, DATE_FORMAT))
    handler.addFilter(TickFilter())
    handler.setLevel(_get_level(level))
    logger = _get_logger()
    logger.setLevel(_get_level(level))
    logger.addHandler(handler)


def enable_console_logging(level: LogLevel | int = "INFO", format: str = TRACE_FORMAT) -> logging.StreamHandler:
    """Send airportsim logs to stderr.

    Args:
        level: Log level name or int. DEBUG shows the per-tick trace.
        format: Format string; ``%(tick)s`` is always available.

    Returns:
        The created StreamHandler.
    """
    handler = logging.StreamHandler()
    _install(handler, level, format)
    return handler


def configure_from_env() -> logging.Handler | None:
    """Configure logging from AS_LOGGING and AS_LOG_FILE.

    Does nothing and returns None when neither variable is set. A level
    without a file logs to stderr; a file without a level logs at INFO.

    Example:
        $ AS_LOGGING=DEBUG AS_LOG_FILE=out/trace.log python -m airportsim -t 240
    """
    level = os.environ.get("AS_LOGGING", "").upper()
    log_file = os.environ.get("AS_LOG_FILE", "")

    if not level and not log_file:
        return None

    level = level or "INFO"
    if not log_file:
        return enable_console_logging(level=level)

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path)
    _install(handler, level, TRACE_FORMAT)
    return handler


def set_level(level: LogLevel | int) -> None:
    """Change the airportsim logger level, keeping its handlers."""
    _get_logger().setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove every airportsim handler and silence the logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
