"""Read-only element-tree abstraction walked by the link classifier.

The classifier never touches a live page.  It receives any object that
satisfies :class:`DomNode`, which keeps it testable against synthetic trees.
:class:`SoupNode` adapts a BeautifulSoup parse of fetched HTML.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol

from bs4 import BeautifulSoup, Tag


class DomNode(Protocol):
    """Minimal view of one rendered element."""

    @property
    def tag_name(self) -> str:
        """Lower-case tag name, e.g. ``"div"``."""

    @property
    def parent(self) -> Optional["DomNode"]:
        """The parent element, or ``None`` at the root."""

    @property
    def text(self) -> str:
        """Concatenated text content of the element and its descendants."""

    def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, or ``None`` when the attribute is absent."""

    def previous_siblings(self) -> Iterator["DomNode"]:
        """Preceding *element* siblings, nearest first."""

    def descendants(self) -> Iterator["DomNode"]:
        """All descendant elements in document order."""


class SoupNode:
    """:class:`DomNode` backed by a ``bs4`` :class:`~bs4.Tag`."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag_name}>)"

    @property
    def tag_name(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def parent(self) -> Optional[SoupNode]:
        parent = self._tag.parent
        # The BeautifulSoup object itself is the document, not an element.
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupNode(parent)

    @property
    def text(self) -> str:
        return self._tag.get_text()

    def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as ``class`` into lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def previous_siblings(self) -> Iterator[SoupNode]:
        for sibling in self._tag.previous_siblings:
            if isinstance(sibling, Tag):
                yield SoupNode(sibling)

    def descendants(self) -> Iterator[SoupNode]:
        for node in self._tag.descendants:
            if isinstance(node, Tag):
                yield SoupNode(node)


def parse_html(html: str) -> SoupNode:
    """Parse *html* and return the document root as a :class:`SoupNode`.

    The root wraps the ``BeautifulSoup`` object so that :meth:`descendants`
    covers the whole document, ``<head>`` included.
    """
    soup = BeautifulSoup(html, "html.parser")
    return SoupNode(soup)


def find_base_href(root: DomNode) -> Optional[str]:
    """Return the first ``<base href>`` value in the document, if any."""
    for node in root.descendants():
        if node.tag_name == "base":
            href = node.get_attribute("href")
            if href:
                return href.strip()
    return None
