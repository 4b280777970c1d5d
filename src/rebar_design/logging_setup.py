from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {name}:{function} - {message}"


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Enable package logging with a stderr sink (DEBUG when *verbose*)."""
    logger.remove()
    logger.enable("rebar_design")
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=_FORMAT,
               backtrace=False, diagnose=False)
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="5 MB", retention=10,
                   backtrace=False, diagnose=False)
