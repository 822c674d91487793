"""
Streaming tokenizer for the blog's XML/HTML documents.

The reader walks the raw text once, left to right, and yields one token per
structural unit. It is deliberately lenient about nesting (it never checks
that close tags match) but strict about syntax: anything it cannot tokenize
raises ``MalformedDocument`` with the byte offset where it stopped.
"""

from __future__ import annotations

import re
from typing import Iterator

from .errors import MalformedDocument
from .tokens import (
    CData,
    Comment,
    Declaration,
    ElementClose,
    ElementOpen,
    EndOfInput,
    Text,
    Token,
)


_NAME = r"[A-Za-z_:][-A-Za-z0-9_:.]*"
_ATTR = r"""[^\s"'=/<>]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""
_OPEN_TAG_RE = re.compile(rf"<({_NAME})((?:\s+{_ATTR})*)\s*(/?)>")
_CLOSE_TAG_RE = re.compile(rf"</({_NAME})\s*>")
_ATTR_RE = re.compile(r"""([^\s"'=/<>]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""")

# Elements that never take a close tag in HTML.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)
# Elements whose content is raw text up to the matching close tag.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class TokenReader:
    """Lazy, single-use token stream over one document.

    Iterating yields tokens in document order and always finishes with
    ``EndOfInput``. The stream cannot be rewound; build a new reader to read
    the document again.

    Example:
        >>> [type(t).__name__ for t in TokenReader("<p>hi</p>")]
        ['ElementOpen', 'Text', 'ElementClose', 'EndOfInput']
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._byte_offset = 0
        self._tokens = self._scan()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        return next(self._tokens)

    @property
    def byte_offset(self) -> int:
        """Byte offset of the next unread character."""
        return self._byte_offset

    def _scan(self) -> Iterator[Token]:
        text = self._text
        end = len(text)
        raw_text_tag: str | None = None

        while self._pos < end:
            if raw_text_tag is not None:
                token = self._read_raw_text(raw_text_tag)
                raw_text_tag = None
                if token is not None:
                    yield token
                continue

            if text[self._pos] != "<":
                stop = text.find("<", self._pos)
                yield self._emit(Text, stop if stop != -1 else end)
                continue

            if text.startswith("<!--", self._pos):
                stop = self._find("-->", self._pos + 4, "unterminated comment")
                content = text[self._pos + 4 : stop]
                yield self._emit(Comment, stop + 3, content=content)
            elif text.startswith("<![CDATA[", self._pos):
                stop = self._find("]]>", self._pos + 9, "unterminated CDATA section")
                content = text[self._pos + 9 : stop]
                yield self._emit(CData, stop + 3, content=content)
            elif text.startswith("<?", self._pos):
                stop = self._find("?>", self._pos + 2, "unterminated processing instruction")
                yield self._emit(Declaration, stop + 2)
            elif text.startswith("<!", self._pos):
                stop = self._find(">", self._pos + 2, "unterminated declaration")
                yield self._emit(Declaration, stop + 1)
            elif text.startswith("</", self._pos):
                match = _CLOSE_TAG_RE.match(text, self._pos)
                if match is None:
                    raise MalformedDocument(self._byte_offset, "invalid close tag")
                yield self._emit(ElementClose, match.end(), name=match.group(1))
            else:
                match = _OPEN_TAG_RE.match(text, self._pos)
                if match is None:
                    raise MalformedDocument(self._byte_offset, "invalid open tag")
                name = match.group(1)
                lowered = name.lower()
                self_closing = bool(match.group(3)) or lowered in VOID_ELEMENTS
                yield self._emit(
                    ElementOpen,
                    match.end(),
                    name=name,
                    attributes=_parse_attributes(match.group(2)),
                    self_closing=self_closing,
                )
                if not self_closing and lowered in RAW_TEXT_ELEMENTS:
                    raw_text_tag = lowered

        yield EndOfInput(offset=self._byte_offset)

    def _read_raw_text(self, tag: str) -> Text | None:
        pattern = re.compile(rf"</{tag}[\s>]", re.IGNORECASE)
        match = pattern.search(self._text, self._pos)
        if match is None:
            raise MalformedDocument(self._byte_offset, f"unterminated <{tag}> element")
        if match.start() == self._pos:
            return None
        return self._emit(Text, match.start())

    def _find(self, needle: str, start: int, reason: str) -> int:
        stop = self._text.find(needle, start)
        if stop == -1:
            raise MalformedDocument(self._byte_offset, reason)
        return stop

    def _emit(self, kind, stop: int, **fields) -> Token:
        raw = self._text[self._pos : stop]
        token = kind(raw=raw, offset=self._byte_offset, **fields)
        self._pos = stop
        self._byte_offset += len(raw.encode("utf-8"))
        return token


def _parse_attributes(source: str) -> tuple[tuple[str, str], ...]:
    attributes = []
    for match in _ATTR_RE.finditer(source):
        name, double, single, bare = match.groups()
        value = next((v for v in (double, single, bare) if v is not None), "")
        attributes.append((name, value))
    return tuple(attributes)
