"""Utility functions for coworkers."""

from coworkers.utils.helpers import ensure_dir, get_data_path, parse_timestamp, utcnow

__all__ = ["ensure_dir", "get_data_path", "parse_timestamp", "utcnow"]
