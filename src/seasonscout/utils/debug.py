"""Logging helpers for SeasonScout.

Provides debug(), info(), warn(), error() for consistent logging across the
engine and the CLI, plus trace_stage() for the per-heuristic traces emitted
while a filename is being detected.

Debug output is switched on with the SEASONSCOUT_DEBUG environment variable
("1", "true" or "yes"); it is read once at import time.
"""

import logging
import os
import sys
from typing import Optional

DEBUG_ENV_VAR = "SEASONSCOUT_DEBUG"
DEBUG_ON = os.getenv(DEBUG_ENV_VAR, "0").lower() in {"1", "true", "yes"}
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"

_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Return the shared ``seasonscout`` logger, configuring it on first use."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("seasonscout")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
    _logger = logger
    return logger


def debug(msg: str) -> None:
    """Log *msg* at debug level and echo it to stdout, only when debugging."""
    if DEBUG_ON:
        get_logger().debug(msg)
        print(f"[DEBUG] {msg}", file=sys.stdout, flush=True)


def trace_stage(stage: str, detail: object) -> None:
    """Record what a detection stage contributed for the current filename."""
    debug(f"stage {stage}: {detail}")


def info(msg: str) -> None:
    get_logger().info(msg)


def warn(msg: str) -> None:
    get_logger().warning(msg)


def error(msg: str) -> None:
    get_logger().error(msg)
