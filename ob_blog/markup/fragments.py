"""
Fragment builder: render an entry into the markup spliced at the marker.

These functions are pure. They know nothing about the documents the
fragments end up in; the engine decides where they go.
"""

from __future__ import annotations

from html import escape

from ..core.types import DocumentKind, Entry
from . import markers
from .writer import cdata_block


def permalink(base_url: str, entry_id: str) -> str:
    """Stable public address of an entry's page."""
    return f"{base_url}{entry_id}"


def render_block(entry: Entry) -> str:
    """Render the heading, byline and timestamp, with the cover image first if set."""
    parts: list[str] = []
    if entry.image:
        parts.append(
            f'<img class="cover" src="{escape(entry.image, quote=True)}" '
            f'alt="{escape(entry.name, quote=True)}"/>'
        )
    parts.append(f"<h1>{escape(entry.name)}</h1>")
    parts.append(f'<p class="byline">{escape(entry.author)}</p>')
    parts.append(f"<time>{escape(entry.date)}</time>")
    return "\n".join(parts)


def render_template_fragment(entry: Entry, content: str, marker: str = markers.DEFAULT_MARKER) -> str:
    """Fragment for a per-entry page: bracketed preamble, then the body.

    ``content`` is kept byte for byte so it can be recovered unchanged by
    ``extract_inner``.
    """
    return (
        f"\n{markers.comment(markers.preamble_start(marker))}\n"
        f"{render_block(entry)}\n"
        f"{markers.comment(markers.preamble_end(marker))}\n"
        f"{content}"
        f"{markers.comment(markers.body_end(marker))}"
    )


def render_index_fragment(entry: Entry, base_url: str) -> str:
    link = escape(permalink(base_url, entry.id), quote=True)
    return f"\n<li id='{entry.id}'><a href=\"{link}\">{render_block(entry)}</a></li>"


def render_feed_fragment(entry: Entry, content: str, base_url: str) -> str:
    link = escape(permalink(base_url, entry.id))
    body = (render_block(entry) + content).replace("\r", "").replace("\n", "")
    return (
        f"\n<item id='{entry.id}'>\n"
        f"<title>{escape(entry.name)}</title>\n"
        f"<link>{link}</link>\n"
        f"<guid>{link}</guid>\n"
        f"<description>{_cdata(body)}</description>\n"
        f"</item>"
    )


def render_fragment(
    kind: DocumentKind,
    entry: Entry,
    content: str,
    base_url: str,
    marker: str = markers.DEFAULT_MARKER,
) -> str:
    """Render the fragment for ``kind``."""
    if kind is DocumentKind.TEMPLATE:
        return render_template_fragment(entry, content, marker)
    if kind is DocumentKind.INDEX:
        return render_index_fragment(entry, base_url)
    if kind is DocumentKind.FEED:
        return render_feed_fragment(entry, content, base_url)
    raise ValueError(f"Unknown document kind: {kind!r}")


def _cdata(content: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two.
    # Each section ends with the newline remove() writes after normalized
    # CDATA, so a split item survives later remove passes byte for byte.
    return cdata_block(content.replace("]]>", "]]]]>\n<![CDATA[>"))
