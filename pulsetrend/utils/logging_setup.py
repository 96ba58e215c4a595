"""
Logging configuration.
"""

import logging
import sys
from typing import Optional

import config.settings as settings


def setup_logging(log_level: str = settings.LOG_LEVEL, log_file: Optional[str] = None):
    """Configure logging for the entire application."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=handlers,
        force=True
    )
