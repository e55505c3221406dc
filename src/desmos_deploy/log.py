from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send package logs to stderr. Calling it again only updates the level."""
    logger = logging.getLogger("desmos_deploy")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    return logger
