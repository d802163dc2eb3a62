"""Data models for the link-discovery pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class LinkRecord:
    """One candidate link target discovered on a page."""

    url: str
    display_text: str
    same_origin: bool

    def matches(self, text: str) -> bool:
        """Case-insensitive substring test against the display text or URL."""
        needle = text.lower()
        return needle in self.display_text.lower() or needle in self.url.lower()


@dataclass
class LinkGroup:
    """Links that share the same owning ancestor in the page structure."""

    group_id: str
    group_name: str
    links: List[LinkRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def filter_groups(
    groups: List[LinkGroup],
    match: Optional[str] = None,
    same_origin_only: bool = False,
) -> List[LinkGroup]:
    """Return copies of *groups* keeping only the links that pass both filters.

    Groups left without links are dropped; order is preserved.
    """
    filtered: List[LinkGroup] = []
    for group in groups:
        links = [
            lnk for lnk in group.links
            if (not same_origin_only or lnk.same_origin) and (not match or lnk.matches(match))
        ]
        if links:
            filtered.append(LinkGroup(group.group_id, group.group_name, links))
    return filtered
