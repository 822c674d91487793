"""
Core data types for the blog publisher.

This module defines the fundamental data structures shared by the engine
and the command-line workflow:
- Entry: One blog post, draft or published
- DocumentKind: The three kinds of document a fragment can be spliced into
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


@dataclass
class Entry:
    """Represents one blog post tracked in the entry list.

    Attributes:
        id: Opaque unique identifier, generated once when the draft is created
        name: Display title of the post
        author: Byline shown under the title
        date: Formatted publication timestamp, empty while unpublished
        image: Optional cover image URL
        published: Whether the post currently appears on the site
    """

    id: str
    name: str
    author: str = ""
    date: str = ""
    image: str | None = None
    published: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        image = data.get("image")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            author=str(data.get("author") or ""),
            date=str(data.get("date") or ""),
            image=str(image) if image else None,
            published=bool(data.get("published", False)),
        )


class DocumentKind(Enum):
    """Which document a mutation pass targets.

    TEMPLATE produces a new per-entry page; INDEX and FEED are rewritten in
    place and hold one container element per published entry.
    """

    TEMPLATE = "template"
    INDEX = "index"
    FEED = "feed"

    @property
    def container_tag(self) -> str | None:
        if self is DocumentKind.INDEX:
            return "li"
        if self is DocumentKind.FEED:
            return "item"
        return None


CONTAINER_TAGS = ("li", "item")
