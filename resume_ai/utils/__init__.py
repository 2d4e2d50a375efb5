"""Utility exports."""

from .helpers import (
    is_valid_url,
    sanitize_for_log,
    split_list_items,
    unique_preserving_order,
)
from .logger import format_fields, get_logger

__all__ = [
    "get_logger",
    "format_fields",
    "is_valid_url",
    "sanitize_for_log",
    "split_list_items",
    "unique_preserving_order",
]
