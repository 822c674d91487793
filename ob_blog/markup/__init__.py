"""
Streaming document mutation engine.

This package reads XML/HTML documents one token at a time and rewrites
them around a single marker comment, without building a tree.
"""

from .engine import PassResult, extract_inner, insert, remove
from .errors import (
    AmbiguousMarker,
    DocumentError,
    MalformedDocument,
    MissingMarker,
    PreambleMismatch,
)
from .fragments import permalink, render_fragment
from .reader import TokenReader
from .writer import TokenWriter

__all__ = [
    "PassResult",
    "insert",
    "remove",
    "extract_inner",
    "render_fragment",
    "permalink",
    "TokenReader",
    "TokenWriter",
    "DocumentError",
    "MalformedDocument",
    "MissingMarker",
    "AmbiguousMarker",
    "PreambleMismatch",
]
