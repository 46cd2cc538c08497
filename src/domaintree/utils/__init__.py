"""
Utility helpers shared across domaintree packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import humanize_field_name

__all__ = ["configure_logging", "get_logger", "humanize_field_name", "time_call"]
