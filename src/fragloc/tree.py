"""Document tree capability interface and a BeautifulSoup adapter.

The resolver never touches a concrete DOM. Callers adapt their tree to
``DocumentTree``; ``SoupTree`` covers the common case of a document parsed
with bs4.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import Tag

CONTAINER_TAG = "package"


@runtime_checkable
class DocumentTree(Protocol):
    """Operations the resolution engine needs from a document tree."""

    def container_element(self) -> Any | None:
        """Top-level container element (used for part index 0)."""
        ...

    def top_level_nodes(self) -> Sequence[Any]:
        """Children of the document node itself, in document order."""
        ...

    def get_element_by_id(self, element_id: str) -> Any | None: ...

    def child_nodes(self, node: Any) -> Sequence[Any]:
        """All children of ``node`` (elements, text, comments), in order."""
        ...

    def is_element(self, node: Any) -> bool: ...

    def tag_name(self, node: Any) -> str: ...

    def get_attribute(self, node: Any, name: str) -> str | None: ...

    def parent_node(self, node: Any) -> Any | None: ...


class SoupTree:
    """``DocumentTree`` over a ``bs4.BeautifulSoup`` document.

    Children come from ``Tag.contents``, so whitespace-only strings and
    comments count toward child ordinals just like DOM ``childNodes``.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def from_markup(cls, markup: str | bytes, features: str = "html.parser") -> SoupTree:
        return cls(BeautifulSoup(markup, features))

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def container_element(self) -> Tag | None:
        return self._soup.find(CONTAINER_TAG)

    def top_level_nodes(self) -> Sequence[Any]:
        return list(self._soup.contents)

    def get_element_by_id(self, element_id: str) -> Tag | None:
        return self._soup.find(attrs={"id": element_id})

    def child_nodes(self, node: Any) -> Sequence[Any]:
        if not isinstance(node, Tag):
            return ()
        return list(node.contents)

    def is_element(self, node: Any) -> bool:
        return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)

    def tag_name(self, node: Any) -> str:
        if not isinstance(node, Tag):
            return ""
        return (node.name or "").lower()

    def get_attribute(self, node: Any, name: str) -> str | None:
        if not isinstance(node, Tag):
            return None
        value = node.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel, ...) come back as lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def parent_node(self, node: Any) -> Any | None:
        return getattr(node, "parent", None)
