"""Utility modules for fskit.

This module exports commonly used utility functions.
"""

from fskit.utils.formatting import (
    console,
    create_entry_table,
    err_console,
    format_value,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_entry_table",
    "err_console",
    "format_value",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
