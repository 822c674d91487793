"""
Marker comments that anchor tool-generated content.

A document holds exactly one sentinel comment, ``<!-- OB -->`` by default.
Fragments are spliced in right after it. Per-entry pages additionally
bracket the generated preamble and close the generated body, so the body
can be recovered later without knowing the preamble's shape:

    <!-- OB -->
    <!-- OB:preamble -->
    <h1>Title</h1> ...
    <!-- /OB:preamble -->
    <p>body</p><!-- /OB:body -->
"""

from __future__ import annotations

import re

from .tokens import Comment, Token

DEFAULT_MARKER = "OB"


def is_comment(token: Token, text: str) -> bool:
    """Return True if ``token`` is a comment whose stripped content is ``text``."""
    return isinstance(token, Comment) and token.content.strip() == text


def comment(text: str) -> str:
    return f"<!-- {text} -->"


def preamble_start(marker: str = DEFAULT_MARKER) -> str:
    return f"{marker}:preamble"


def preamble_end(marker: str = DEFAULT_MARKER) -> str:
    return f"/{marker}:preamble"


def body_end(marker: str = DEFAULT_MARKER) -> str:
    return f"/{marker}:body"


def find_comment(text: str, marker: str = DEFAULT_MARKER) -> str | None:
    """Return the first marker comment (sentinel or sub-marker) found in ``text``."""
    names = "|".join(
        re.escape(name) for name in (marker, preamble_start(marker), preamble_end(marker), body_end(marker))
    )
    match = re.search(rf"<!--\s*(?:{names})\s*-->", text)
    return match.group(0) if match else None
