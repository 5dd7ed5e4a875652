"""Utility functions for goldbook."""

from goldbook.utils.date_parser import parse_date
from goldbook.utils.numeric import (
    parse_numeric_value,
    format_numeric_value,
    round_for_storage,
)

__all__ = [
    "parse_date",
    "parse_numeric_value",
    "format_numeric_value",
    "round_for_storage",
]
