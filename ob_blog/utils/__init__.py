"""
Shared utility functions.

This package contains utility code used across the engine and
the command-line workflow.
"""

from .logging import JsonlFormatter, entry_context, log_event, log_warning, setup_logging

__all__ = [
    "setup_logging",
    "entry_context",
    "log_event",
    "log_warning",
    "JsonlFormatter",
]
