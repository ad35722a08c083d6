"""
Queryable parse tree over rendered HTML.

Thin wrapper around BeautifulSoup exposing only what the engine needs:
CSS-selector traversal, attribute reads and text-content reads. Nodes compare
by identity so the structural analyzer can correlate form descendants with
classified elements.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


class Node:
    """A single element in the parse tree."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._tag is other._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"Node(<{self.name}>)"

    @property
    def name(self) -> str:
        return (self._tag.name or "").lower()

    def attr(self, name: str) -> str | None:
        """Return a stripped attribute value, or None when absent or empty."""
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            value = " ".join(value)
        value = str(value).strip()
        return value or None

    def has_attr(self, name: str) -> bool:
        """Whether the attribute is present, even if empty."""
        return self._tag.has_attr(name)

    @property
    def text(self) -> str:
        """Visible text content with whitespace collapsed."""
        return collapse_whitespace(self._tag.get_text())

    def find(self, selector: str) -> list[Node]:
        """All descendants matching a CSS selector, in document order."""
        return [Node(tag) for tag in self._tag.select(selector)]

    def find_first(self, selector: str) -> Node | None:
        tag = self._tag.select_one(selector)
        return Node(tag) if tag is not None else None


class Document(Node):
    """Root of a parsed HTML document."""

    __slots__ = ()

    @classmethod
    def parse(cls, html: str) -> Document:
        return cls(BeautifulSoup(html or "", "html.parser"))

    @property
    def title(self) -> str:
        node = self.find_first("title")
        return node.text if node else ""


def parse(html: str) -> Document:
    """Parse an HTML string into a queryable Document."""
    return Document.parse(html)
