"""Output side of a mutation pass."""

from __future__ import annotations

from .tokens import Token


def cdata_block(content: str) -> str:
    """Return the normalized serialization of a CDATA section."""
    return f"<![CDATA[{content}]]>\n"


class TokenWriter:
    """Accumulates a pass's output in the order it is written.

    The writer copies what it is given and nothing else: it never reorders,
    merges or drops tokens. Any token left out of the output was left out by
    the pass itself.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, token: Token) -> None:
        """Append a token exactly as it appeared in the source."""
        self._parts.append(token.raw)

    def write_raw(self, text: str) -> None:
        """Append an injected literal, e.g. a rendered fragment."""
        self._parts.append(text)

    def write_cdata(self, content: str) -> None:
        self._parts.append(cdata_block(content))

    def getvalue(self) -> bytes:
        return "".join(self._parts).encode("utf-8")
