"""Links package — source-page fetch & link classification."""

from backend.links.classifier import classify, format_label
from backend.links.fetcher import collect_links, extract_title, fetch_url
from backend.links.models import LinkGroup, LinkRecord, RawPage, filter_groups
from backend.links.tree import DomNode, SoupNode, parse_html

__all__ = [
    "classify",
    "format_label",
    "collect_links",
    "extract_title",
    "fetch_url",
    "LinkGroup",
    "LinkRecord",
    "RawPage",
    "filter_groups",
    "DomNode",
    "SoupNode",
    "parse_html",
]
