"""
Token types yielded by the document reader.

Each token keeps the exact source text it was read from (``raw``) so that a
pass which copies tokens through reproduces the input byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ElementOpen:
    """An opening tag such as ``<item id='abc'>``.

    Attributes:
        name: Tag name as written in the source
        attributes: Attribute name/value pairs in source order; valueless
            attributes carry an empty string
        raw: Exact source text of the tag
        self_closing: True for ``<x/>`` and HTML void elements, which have no
            matching close tag
        offset: UTF-8 byte offset of the tag in the source
    """

    name: str
    attributes: tuple[tuple[str, str], ...] = ()
    raw: str = ""
    self_closing: bool = False
    offset: int = 0

    def has_value(self, value: str) -> bool:
        return any(attr_value == value for _, attr_value in self.attributes)

    def is_named(self, name: str) -> bool:
        return self.name.lower() == name.lower()


@dataclass(frozen=True)
class ElementClose:
    name: str
    raw: str = ""
    offset: int = 0

    def is_named(self, name: str) -> bool:
        return self.name.lower() == name.lower()


@dataclass(frozen=True)
class Text:
    raw: str
    offset: int = 0

    @property
    def is_whitespace(self) -> bool:
        return not self.raw.strip()


@dataclass(frozen=True)
class Comment:
    """A ``<!-- ... -->`` comment; ``content`` is the text between the delimiters."""

    content: str
    raw: str = ""
    offset: int = 0


@dataclass(frozen=True)
class CData:
    content: str
    raw: str = ""
    offset: int = 0


@dataclass(frozen=True)
class Declaration:
    """Doctype or processing instruction, copied through untouched."""

    raw: str
    offset: int = 0


@dataclass(frozen=True)
class EndOfInput:
    offset: int = 0
    raw: str = field(default="", repr=False)


Token = ElementOpen | ElementClose | Text | Comment | CData | Declaration | EndOfInput
