"""Utility functions for the invoice dashboard."""

from .activity import log_activity
from .cache import revalidate_path

__all__ = [
    "log_activity",
    "revalidate_path",
]
