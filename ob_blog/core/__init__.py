"""
Core domain models.

This package contains data types that are independent of any
specific document or command.
"""

from .types import CONTAINER_TAGS, DocumentKind, Entry

__all__ = [
    "Entry",
    "DocumentKind",
    "CONTAINER_TAGS",
]
