"""Utilities for rendering link groups in the CLI."""

from __future__ import annotations

from typing import List

from backend.links.models import LinkGroup, LinkRecord


def render_groups(groups: List[LinkGroup]) -> str:
    """Render link groups as an ASCII tree.

    Example::

        📂 Resources (2)
        ├── 🌐 Docs — https://docs.example.org/
        └── 🔗 About — https://example.com/about
    """
    if not groups:
        return "No links found."

    lines: List[str] = []
    for group in groups:
        lines.append(f"📂 {group.group_name or '(untitled)'} ({len(group.links)})")
        count = len(group.links)
        for i, link in enumerate(group.links):
            connector = "└── " if i == count - 1 else "├── "
            lines.append(f"{connector}{_get_icon(link)} {link.display_text} — {link.url}")
    return "\n".join(lines)


def _get_icon(link: LinkRecord) -> str:
    return "🔗" if link.same_origin else "🌐"
