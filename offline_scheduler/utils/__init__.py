"""Utility modules for the offline scheduler."""

from offline_scheduler.utils.logging import ContextLogger, setup_logger
from offline_scheduler.utils.time import get_timezone, iso_timestamp, now_millis, utc_now

__all__ = [
    "setup_logger",
    "ContextLogger",
    "get_timezone",
    "iso_timestamp",
    "now_millis",
    "utc_now",
]
