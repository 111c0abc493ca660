"""
Utility helpers used by the importers and mutators.

This subpackage exposes the run log, structured error reports, toast-style
notifications and the listing cache.
"""

from .cache import ListingCache
from .errors import ERRORS, ImportInProgressError, report_error, report_ok
from .logs import log_message
from .notifications import Notification, Notifier

__all__ = [
    "ERRORS",
    "ImportInProgressError",
    "ListingCache",
    "Notification",
    "Notifier",
    "log_message",
    "report_error",
    "report_ok",
]
