"""Markdown to HTML conversion for drafts."""

from __future__ import annotations

import markdown


def render_markdown(text: str, extensions: list[str] | None = None) -> str:
    """Convert a Markdown draft to an HTML fragment.

    The result is spliced into documents as-is; raw HTML in the draft
    (for instance a body recovered by ``ob edit``) passes through.
    """
    return markdown.markdown(text, extensions=list(extensions or []), output_format="html")
