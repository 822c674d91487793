"""
Errors raised by the document mutation engine.

Every error here is fatal to the pass that raised it. Callers build all
outputs in memory first, so an exception always leaves the files on disk
exactly as they were.
"""

from __future__ import annotations


class DocumentError(Exception):
    """Base class for document mutation failures."""


class MalformedDocument(DocumentError):
    """The tokenizer could not make progress.

    Attributes:
        offset: UTF-8 byte offset where tokenizing stopped
        reason: Short description of what was expected
    """

    def __init__(self, offset: int, reason: str):
        super().__init__(f"Malformed document at byte {offset}: {reason}")
        self.offset = offset
        self.reason = reason


class MissingMarker(DocumentError):
    """No sentinel comment was found in the document."""

    def __init__(self, marker: str):
        super().__init__(
            f"No <!-- {marker} --> marker found; the document needs exactly one"
        )
        self.marker = marker


class AmbiguousMarker(DocumentError):
    """More than one sentinel comment was found in the document."""

    def __init__(self, marker: str, offset: int):
        super().__init__(
            f"Second <!-- {marker} --> marker at byte {offset}; the document needs exactly one"
        )
        self.marker = marker
        self.offset = offset


class PreambleMismatch(DocumentError):
    """The generated preamble around the sentinel is missing or unterminated."""
