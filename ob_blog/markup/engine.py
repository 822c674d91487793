"""
Streaming mutation passes over blog documents.

Each pass reads the document once through a ``TokenReader`` and decides,
token by token, whether to copy it, drop it, or inject something after it.
Nothing is buffered beyond the current token and no tree is built. The
passes work on text and return the new bytes; writing them to disk is the
caller's job, which keeps a failed pass from touching any file.

Three passes exist:
- insert: splice a fragment after the marker (pruning old feed items)
- remove: drop the container element carrying an entry id
- extract_inner: recover the body written into a per-entry page
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from ..core.types import CONTAINER_TAGS, DocumentKind, Entry
from . import markers
from .errors import AmbiguousMarker, MalformedDocument, MissingMarker, PreambleMismatch
from .reader import TokenReader
from .tokens import CData, ElementClose, ElementOpen, EndOfInput, Text
from .writer import TokenWriter


@dataclass
class PassResult:
    """Output of a mutation pass.

    Attributes:
        data: The complete new document, UTF-8 encoded
        removed: Ids of containers dropped by the pass, in document order
    """

    data: bytes
    removed: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


def remove(document: str, target_id: str) -> PassResult:
    """Drop the ``li``/``item`` container whose attributes include ``target_id``.

    Everything else is copied unchanged, except that CDATA sections are
    re-emitted in their normalized ``<![CDATA[...]]>\\n`` form. An id that
    matches nothing is not an error: the document comes back unchanged and
    ``removed`` is empty.
    """
    writer = TokenWriter()
    removed: list[str] = []
    skip_tag: str | None = None
    skip_depth = 0
    drop_whitespace = False
    after_cdata = False

    for token in TokenReader(document):
        if skip_tag is not None:
            skip_depth += _nesting_step(token, skip_tag)
            if skip_depth == 0:
                skip_tag = None
                drop_whitespace = True
            elif isinstance(token, EndOfInput):
                raise MalformedDocument(token.offset, f"unclosed <{skip_tag}> container")
            continue

        if (
            isinstance(token, ElementOpen)
            and token.name.lower() in CONTAINER_TAGS
            and token.has_value(target_id)
        ):
            removed.append(target_id)
            if token.self_closing:
                drop_whitespace = True
            else:
                skip_tag = token.name
                skip_depth = 1
            continue

        if isinstance(token, Text):
            if drop_whitespace and token.is_whitespace:
                drop_whitespace = False
                continue
            raw = token.raw
            # The newline after a normalized CDATA block belongs to the block.
            if after_cdata and raw.startswith("\n"):
                raw = raw[1:]
            writer.write_raw(raw)
        elif isinstance(token, CData):
            writer.write_cdata(token.content)
        else:
            writer.write(token)

        drop_whitespace = False
        after_cdata = isinstance(token, CData)

    return PassResult(data=writer.getvalue(), removed=removed)


def insert(
    document: str,
    entry: Entry,
    fragment: str,
    kind: DocumentKind,
    retention: int | None = None,
    marker: str = markers.DEFAULT_MARKER,
) -> PassResult:
    """Splice ``fragment`` immediately after the document's marker comment.

    For ``DocumentKind.FEED`` the fragment counts as the first item and any
    existing item beyond ``retention`` is dropped, so the newest items
    survive. For ``DocumentKind.TEMPLATE`` the ``<title>`` element gets the
    entry name prepended to its text.

    Raises:
        MissingMarker: The document has no marker comment
        AmbiguousMarker: The document has more than one marker comment
        MalformedDocument: The document could not be tokenized
    """
    if kind is DocumentKind.FEED and (retention is None or retention < 1):
        raise ValueError("Feed inserts need a retention of at least 1")

    writer = TokenWriter()
    pruned: list[str] = []
    container = kind.container_tag
    item_count = 1
    prune_depth = 0
    drop_whitespace = False
    seen_marker = False

    for token in TokenReader(document):
        if prune_depth:
            prune_depth += _nesting_step(token, container)
            if prune_depth == 0:
                drop_whitespace = True
            elif isinstance(token, EndOfInput):
                raise MalformedDocument(token.offset, f"unclosed <{container}> container")
            continue

        if drop_whitespace and isinstance(token, Text) and token.is_whitespace:
            drop_whitespace = False
            continue
        drop_whitespace = False

        if kind is DocumentKind.FEED and isinstance(token, ElementOpen) and token.is_named(container):
            item_count += 1
            if item_count > retention:
                pruned.append(_container_id(token))
                if token.self_closing:
                    drop_whitespace = True
                else:
                    prune_depth = 1
                continue

        if markers.is_comment(token, marker):
            if seen_marker:
                raise AmbiguousMarker(marker, token.offset)
            seen_marker = True
            writer.write(token)
            writer.write_raw(fragment)
            continue

        writer.write(token)
        if (
            kind is DocumentKind.TEMPLATE
            and isinstance(token, ElementOpen)
            and token.is_named("title")
            and not token.self_closing
        ):
            writer.write_raw(escape(entry.name))

    if not seen_marker:
        raise MissingMarker(marker)
    return PassResult(data=writer.getvalue(), removed=pruned)


def extract_inner(document: str, marker: str = markers.DEFAULT_MARKER) -> str:
    """Recover the body previously inserted into a per-entry page.

    The generated preamble (between the ``OB:preamble`` comments) is
    discarded. The body runs from the end of the preamble up to the
    ``/OB:body`` comment, or up to the close of the element holding the
    marker for pages without one.

    Raises:
        MissingMarker: The page has no marker comment
        AmbiguousMarker: The page has more than one marker comment
        PreambleMismatch: The marker is not followed by a complete preamble
    """
    start, end, stop = markers.preamble_start(marker), markers.preamble_end(marker), markers.body_end(marker)
    depth = 0
    inner_level: int | None = None
    state = "search"
    parts: list[str] = []

    for token in TokenReader(document):
        if isinstance(token, ElementOpen) and not token.self_closing:
            depth += 1
        elif isinstance(token, ElementClose):
            depth -= 1

        if markers.is_comment(token, marker):
            if inner_level is not None:
                raise AmbiguousMarker(marker, token.offset)
            inner_level = depth
            state = "expect_preamble"
            continue

        if state == "expect_preamble":
            if markers.is_comment(token, start):
                state = "preamble"
            elif not (isinstance(token, Text) and token.is_whitespace):
                raise PreambleMismatch(f"No <!-- {start} --> comment after the marker")
        elif state == "preamble":
            if markers.is_comment(token, end):
                state = "body"
            elif isinstance(token, EndOfInput) or depth < inner_level:
                raise PreambleMismatch(f"No <!-- {end} --> comment closes the preamble")
        elif state == "body":
            if markers.is_comment(token, stop) or isinstance(token, EndOfInput) or depth < inner_level:
                state = "done"
            else:
                parts.append(token.raw)

    if inner_level is None:
        raise MissingMarker(marker)

    body = "".join(parts)
    # The fragment builder puts one newline between the preamble and the body.
    if body.startswith("\n"):
        body = body[1:]
    return body


def _nesting_step(token, tag: str) -> int:
    if isinstance(token, ElementOpen) and token.is_named(tag) and not token.self_closing:
        return 1
    if isinstance(token, ElementClose) and token.is_named(tag):
        return -1
    return 0


def _container_id(token: ElementOpen) -> str:
    for name, value in token.attributes:
        if name.lower() == "id":
            return value
    return token.attributes[0][1] if token.attributes else ""
