"""Link classification: turns a page's element tree into grouped link targets.

Every ``<a href>`` in document order is resolved, filtered and then assigned
to the group of the nearest ancestor that "owns" it (a heading, a sectioning
element, a titled list or a meaningfully-named ``<div>``).  Groups appear in
the order they are first encountered; links keep document order inside
their group.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from backend.errors import BinderError
from backend.links.models import LinkGroup, LinkRecord
from backend.links.tree import DomNode, find_base_href

# ---------------------------------------------------------------------------
# Heuristic tables
# ---------------------------------------------------------------------------

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_SECTION_TAGS = frozenset({"section", "article", "nav", "aside", "main", "header", "footer"})
_LIST_TAGS = frozenset({"ul", "ol"})
_STOP_TAGS = frozenset({"body", "html"})

_GENERIC_LAYOUT_NAMES = re.compile(r"^(container|wrapper|inner|outer|col|row)$", re.IGNORECASE)
_SKIPPED_EXTENSIONS = re.compile(
    r"\.(jpg|jpeg|png|gif|svg|webp|ico|pdf|zip|exe|dmg|mp3|mp4|wav)$",
    re.IGNORECASE,
)

_HEADING_TEXT_LIMIT = 50
_DISPLAY_TEXT_LIMIT = 100

UNGROUPED_ID = "ungrouped"
UNGROUPED_NAME = "Other Links"


class ClassificationSkip(BinderError):
    """One anchor is unusable; it is dropped without being reported."""


# ---------------------------------------------------------------------------
# Label helpers
# ---------------------------------------------------------------------------

def format_label(raw: str) -> str:
    """Turn a CSS id/class token into a readable label.

    ``"footer-links"`` → ``"Footer Links"``, ``"mainNav"`` → ``"Main Nav"``.
    """
    label = re.sub(r"[-_]", " ", raw)
    label = re.sub(r"([a-z])([A-Z])", r"\1 \2", label)
    label = re.sub(r"\b\w", lambda m: m.group(0).upper(), label)
    return label.strip()


def _heading_text(node: DomNode) -> str:
    return node.text.strip()[:_HEADING_TEXT_LIMIT]


def _is_heading(node: DomNode) -> bool:
    return node.tag_name in _HEADING_TAGS


def _first_class(node: DomNode) -> str:
    tokens = (node.get_attribute("class") or "").split()
    return tokens[0] if tokens else ""


def _identifier(node: DomNode) -> str:
    """The element's ``id``, or its first class token when it has no id."""
    return node.get_attribute("id") or _first_class(node)


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def _preceding_heading(node: DomNode) -> Optional[DomNode]:
    for sibling in node.previous_siblings():
        if _is_heading(sibling):
            return sibling
    return None


def _group_for_section(node: DomNode) -> Tuple[str, str]:
    for child in node.descendants():
        if _is_heading(child):
            text = _heading_text(child)
            return f"section-{text}", text
    label = (
        node.get_attribute("aria-label")
        or node.get_attribute("id")
        or node.tag_name
    )
    return f"{node.tag_name.upper()}-{label}", format_label(label)


def _group_for_list(node: DomNode) -> Optional[Tuple[str, str]]:
    list_parent = node.parent
    if list_parent is None:
        return None
    # Only the immediately preceding element sibling counts here.
    previous = next(list_parent.previous_siblings(), None)
    if previous is not None and _is_heading(previous):
        text = _heading_text(previous)
        return f"list-{text}", text
    ident = _identifier(list_parent)
    if ident and len(ident) > 2:
        return f"list-{ident}", format_label(ident)
    return None


def _group_for_div(node: DomNode) -> Optional[Tuple[str, str]]:
    ident = _identifier(node)
    if ident and len(ident) > 2 and not _GENERIC_LAYOUT_NAMES.match(ident):
        return f"div-{ident}", format_label(ident)
    return None


def find_parent_group(anchor: DomNode) -> Tuple[str, str]:
    """Return ``(group_id, group_name)`` for *anchor*.

    Walks from the anchor's parent towards ``<body>``; the first ancestor
    that matches one of the rules below wins:

    1. a heading among the ancestor's preceding siblings;
    2. a sectioning element (its first heading, else aria-label/id/tag);
    3. a list whose parent is titled by a heading or a meaningful id/class;
    4. a ``<div>`` with a meaningful id/class.
    """
    current = anchor.parent
    while current is not None and current.tag_name not in _STOP_TAGS:
        heading = _preceding_heading(current)
        if heading is not None:
            text = _heading_text(heading)
            return f"heading-{text}", text

        tag = current.tag_name
        if tag in _SECTION_TAGS:
            return _group_for_section(current)

        if tag in _LIST_TAGS:
            group = _group_for_list(current)
            if group is not None:
                return group

        if tag == "div":
            group = _group_for_div(current)
            if group is not None:
                return group

        current = current.parent

    return UNGROUPED_ID, UNGROUPED_NAME


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def _resolve_target(anchor: DomNode, base_url: str, page_path: str, seen: set[str]) -> str:
    """Resolve *anchor*'s href to an absolute URL or raise :class:`ClassificationSkip`."""
    href = (anchor.get_attribute("href") or "").strip()
    if not href:
        raise ClassificationSkip("empty href")
    try:
        target = urljoin(base_url, href)
        parts = urlsplit(target)
    except ValueError as exc:
        raise ClassificationSkip(f"unresolvable href {href!r}") from exc
    if not parts.scheme or not parts.netloc:
        raise ClassificationSkip(f"not absolute: {target!r}")

    if target in seen:
        raise ClassificationSkip("duplicate")
    if parts.scheme.lower() not in ("http", "https"):
        raise ClassificationSkip(f"scheme {parts.scheme!r}")
    if "#" in target and (parts.path or "/") == page_path:
        raise ClassificationSkip("same-page fragment")
    if _SKIPPED_EXTENSIONS.search(parts.path):
        raise ClassificationSkip("non-document resource")
    if "javascript:" in target.lower():
        raise ClassificationSkip("script pseudo-scheme")
    return target


def _display_text(anchor: DomNode, url: str) -> str:
    text = anchor.text.strip()
    return (text or urlsplit(url).path or url)[:_DISPLAY_TEXT_LIMIT]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify(root: DomNode, page_url: str) -> List[LinkGroup]:
    """Group every usable link under *root* by its structural context.

    Args:
        root: Read-only tree of the rendered page (document or ``<body>``).
        page_url: Absolute URL of the page; used to resolve relative hrefs,
            spot same-page fragments and compute ``same_origin``.

    Returns:
        Groups in encounter order.  Each surviving URL appears exactly once.
    """
    page = urlsplit(page_url)
    base_url = urljoin(page_url, find_base_href(root) or "")
    page_host = page.hostname

    seen: set[str] = set()
    groups: Dict[str, LinkGroup] = {}

    for node in root.descendants():
        if node.tag_name != "a" or node.get_attribute("href") is None:
            continue
        try:
            target = _resolve_target(node, base_url, page.path or "/", seen)
        except ClassificationSkip:
            continue
        seen.add(target)

        group_id, group_name = find_parent_group(node)
        group = groups.get(group_id)
        if group is None:
            group = groups[group_id] = LinkGroup(group_id=group_id, group_name=group_name)

        group.links.append(
            LinkRecord(
                url=target,
                display_text=_display_text(node, target),
                same_origin=urlsplit(target).hostname == page_host,
            )
        )

    return list(groups.values())
