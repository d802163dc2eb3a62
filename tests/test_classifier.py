"""Tests for link classification (filtering + grouping heuristics).

Two kinds of input are used:
- small synthetic trees built from ``_El`` (a minimal ``DomNode``), to show
  the classifier depends only on the tree protocol;
- real HTML parsed through ``parse_html`` (BeautifulSoup adapter).
"""

from __future__ import annotations

from typing import Iterator, Optional

from backend.links.classifier import classify, find_parent_group, format_label
from backend.links.models import LinkGroup, LinkRecord, filter_groups
from backend.links.tree import parse_html

PAGE_URL = "https://example.com/index.html"


# ---------------------------------------------------------------------------
# Synthetic tree helper
# ---------------------------------------------------------------------------

class _El:
    """Tiny in-memory element: ``_El("div", child, "text", id="x", class_="y")``."""

    def __init__(self, tag: str, *children, **attrs) -> None:
        self.tag_name = tag
        self._attrs = {k.rstrip("_").replace("_", "-"): v for k, v in attrs.items()}
        self._children = list(children)
        self.parent: Optional[_El] = None
        for child in self._children:
            if isinstance(child, _El):
                child.parent = self

    @property
    def text(self) -> str:
        return "".join(c if isinstance(c, str) else c.text for c in self._children)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._attrs.get(name)

    def previous_siblings(self) -> Iterator[_El]:
        if self.parent is None:
            return
        siblings = [c for c in self.parent._children if isinstance(c, _El)]
        index = siblings.index(self)
        yield from reversed(siblings[:index])

    def descendants(self) -> Iterator[_El]:
        for child in self._children:
            if isinstance(child, _El):
                yield child
                yield from child.descendants()


def _groups_by_name(groups) -> dict[str, list[str]]:
    return {g.group_name: [lnk.url for lnk in g.links] for g in groups}


# ---------------------------------------------------------------------------
# format_label
# ---------------------------------------------------------------------------

class TestFormatLabel:
    def test_hyphens_become_spaces(self) -> None:
        assert format_label("footer-links") == "Footer Links"

    def test_underscores_become_spaces(self) -> None:
        assert format_label("site_map") == "Site Map"

    def test_camel_case_is_split(self) -> None:
        assert format_label("mainNav") == "Main Nav"

    def test_trims_whitespace(self) -> None:
        assert format_label("-related-") == "Related"

    def test_keeps_rest_of_word_case(self) -> None:
        assert format_label("FAQ") == "FAQ"


# ---------------------------------------------------------------------------
# End-to-end on parsed HTML
# ---------------------------------------------------------------------------

_RESOURCES_HTML = """\
<html>
<head><title>Index</title></head>
<body>
  <div class="content">
    <h2>Resources</h2>
    <ul>
      <li><a href="https://alpha.org/docs">Alpha docs</a></li>
      <li><a href="https://beta.net/guide">Beta guide</a></li>
      <li><a href="https://gamma.io/">Gamma</a></li>
    </ul>
  </div>
  <div id="footer-links">
    <a href="/privacy">Privacy</a>
    <a href="/terms">Terms</a>
  </div>
</body>
</html>
"""


class TestClassifyEndToEnd:
    def test_heading_list_and_footer_div_make_two_groups(self) -> None:
        groups = classify(parse_html(_RESOURCES_HTML), PAGE_URL)

        assert [(g.group_name, len(g.links)) for g in groups] == [
            ("Resources", 3),
            ("Footer Links", 2),
        ]
        assert groups[0].group_id == "heading-Resources"
        assert groups[1].group_id == "div-footer-links"

    def test_links_keep_document_order(self) -> None:
        groups = classify(parse_html(_RESOURCES_HTML), PAGE_URL)
        assert [lnk.url for lnk in groups[0].links] == [
            "https://alpha.org/docs",
            "https://beta.net/guide",
            "https://gamma.io/",
        ]

    def test_relative_links_resolve_and_are_same_origin(self) -> None:
        groups = classify(parse_html(_RESOURCES_HTML), PAGE_URL)
        footer = groups[1].links
        assert footer[0] == LinkRecord(
            url="https://example.com/privacy",
            display_text="Privacy",
            same_origin=True,
        )
        assert all(not lnk.same_origin for lnk in groups[0].links)

    def test_classification_is_deterministic(self) -> None:
        first = classify(parse_html(_RESOURCES_HTML), PAGE_URL)
        second = classify(parse_html(_RESOURCES_HTML), PAGE_URL)
        assert [g.group_id for g in first] == [g.group_id for g in second]
        assert [g.links for g in first] == [g.links for g in second]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFiltering:
    def _urls(self, body: str, page_url: str = PAGE_URL) -> list[str]:
        groups = classify(parse_html(f"<html><body>{body}</body></html>"), page_url)
        return [lnk.url for g in groups for lnk in g.links]

    def test_duplicates_are_kept_once(self) -> None:
        urls = self._urls(
            '<a href="https://a.com/x">1</a>'
            '<p><a href="https://a.com/x">2</a></p>'
        )
        assert urls == ["https://a.com/x"]

    def test_same_page_fragment_is_dropped(self) -> None:
        urls = self._urls('<a href="#top">Top</a><a href="/index.html#faq">FAQ</a>')
        assert urls == []

    def test_fragment_on_other_path_is_kept(self) -> None:
        urls = self._urls('<a href="/other.html#part">Other</a>')
        assert urls == ["https://example.com/other.html#part"]

    def test_non_http_schemes_are_dropped(self) -> None:
        urls = self._urls(
            '<a href="mailto:me@example.com">Mail</a>'
            '<a href="ftp://files.example.com/a">FTP</a>'
            '<a href="tel:+123">Call</a>'
        )
        assert urls == []

    def test_script_pseudo_scheme_is_dropped(self) -> None:
        urls = self._urls(
            '<a href="javascript:void(0)">JS</a>'
            '<a href="https://example.com/go?next=javascript:alert(1)">Sneaky</a>'
        )
        assert urls == []

    def test_media_and_binary_extensions_are_dropped(self) -> None:
        urls = self._urls(
            '<a href="/photo.JPG">Photo</a>'
            '<a href="/paper.pdf">Paper</a>'
            '<a href="/setup.exe">Setup</a>'
            '<a href="/song.mp3">Song</a>'
            '<a href="/clip.mp4">Clip</a>'
            '<a href="/bundle.zip">Zip</a>'
            '<a href="/article.html">Article</a>'
        )
        assert urls == ["https://example.com/article.html"]

    def test_extension_check_ignores_query_string(self) -> None:
        urls = self._urls('<a href="/view?file=a.png">Viewer</a>')
        assert urls == ["https://example.com/view?file=a.png"]

    def test_empty_href_is_dropped(self) -> None:
        assert self._urls('<a href="">Nothing</a><a>No href</a>') == []

    def test_base_href_is_honoured(self) -> None:
        html = (
            '<html><head><base href="https://cdn.example.net/docs/"></head>'
            '<body><a href="intro.html">Intro</a></body></html>'
        )
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].links[0].url == "https://cdn.example.net/docs/intro.html"


class TestDisplayText:
    def test_text_is_trimmed_and_capped(self) -> None:
        long_text = "x" * 150
        groups = classify(
            parse_html(f'<body><a href="/a">  {long_text}  </a></body>'), PAGE_URL
        )
        assert groups[0].links[0].display_text == "x" * 100

    def test_empty_text_falls_back_to_path(self) -> None:
        groups = classify(parse_html('<body><a href="/about/team"></a></body>'), PAGE_URL)
        assert groups[0].links[0].display_text == "/about/team"

    def test_long_path_fallback_is_capped(self) -> None:
        path = "/" + "a" * 150
        groups = classify(parse_html(f'<body><a href="{path}"></a></body>'), PAGE_URL)
        display = groups[0].links[0].display_text
        assert display == path[:100]
        assert len(display) == 100


# ---------------------------------------------------------------------------
# Grouping rules
# ---------------------------------------------------------------------------

class TestGrouping:
    def test_section_with_heading_uses_heading(self) -> None:
        html = (
            "<body><section><div><h3>Latest News</h3></div>"
            '<p><a href="/news/1">One</a></p></section></body>'
        )
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "section-Latest News"
        assert groups[0].group_name == "Latest News"

    def test_nav_without_heading_uses_aria_label(self) -> None:
        html = '<body><nav aria-label="primary_navigation"><a href="/a">A</a></nav></body>'
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "NAV-primary_navigation"
        assert groups[0].group_name == "Primary Navigation"

    def test_footer_without_label_uses_tag_name(self) -> None:
        html = '<body><footer><a href="/a">A</a></footer></body>'
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "FOOTER-footer"
        assert groups[0].group_name == "Footer"

    def test_list_parent_id_names_the_group(self) -> None:
        html = '<body><div id="sidebar-menu"><ul><li><a href="/a">A</a></li></ul></div></body>'
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "list-sidebar-menu"
        assert groups[0].group_name == "Sidebar Menu"

    def test_list_parent_heading_names_the_group(self) -> None:
        tree = _El(
            "body",
            _El("h4", "Partners"),
            _El("div", _El("ul", _El("li", _El("a", "P1", href="https://p1.com/")))),
        )
        groups = classify(tree, PAGE_URL)
        assert groups[0].group_id == "list-Partners"
        assert groups[0].group_name == "Partners"

    def test_list_rule_only_checks_immediate_sibling(self) -> None:
        anchor = _El("a", "P1", href="https://p1.com/")
        _El(
            "body",
            _El("h4", "Partners"),
            _El("p", "intro"),
            _El("span", _El("ol", _El("li", anchor))),
        )
        # The list rule misses the heading; the span's sibling scan finds it.
        assert find_parent_group(anchor) == ("heading-Partners", "Partners")

    def test_generic_layout_names_are_skipped(self) -> None:
        html = (
            '<body><div class="container"><div class="row">'
            '<div class="col"><a href="/a">A</a></div></div></div></body>'
        )
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "ungrouped"
        assert groups[0].group_name == "Other Links"

    def test_class_token_used_when_no_id(self) -> None:
        html = '<body><div class="related-posts card"><a href="/a">A</a></div></body>'
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "div-related-posts"
        assert groups[0].group_name == "Related Posts"

    def test_short_id_does_not_fall_back_to_class(self) -> None:
        html = '<body><div id="ab" class="products"><a href="/a">A</a></div></body>'
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_id == "ungrouped"

    def test_heading_text_capped_at_fifty_chars(self) -> None:
        heading = "H" * 80
        html = f"<body><h2>{heading}</h2><p><a href='/a'>A</a></p></body>"
        groups = classify(parse_html(html), PAGE_URL)
        assert groups[0].group_name == "H" * 50

    def test_groups_appear_in_encounter_order(self) -> None:
        tree = _El(
            "body",
            _El("div", _El("a", "x", href="https://x.com/"), id="second-block"),
            _El("div", _El("a", "y", href="https://y.com/"), id="first-block"),
            _El("div", _El("a", "z", href="https://z.com/"), id="second-block"),
        )
        groups = classify(tree, PAGE_URL)
        assert _groups_by_name(groups) == {
            "Second Block": ["https://x.com/", "https://z.com/"],
            "First Block": ["https://y.com/"],
        }
        assert [g.group_name for g in groups] == ["Second Block", "First Block"]

    def test_anchor_directly_in_body_is_ungrouped(self) -> None:
        groups = classify(_El("body", _El("a", "x", href="https://x.com/")), PAGE_URL)
        assert groups[0].group_id == "ungrouped"


# ---------------------------------------------------------------------------
# Filtering grouped links
# ---------------------------------------------------------------------------

class TestFilterGroups:
    def _groups(self) -> list:
        return [
            LinkGroup("heading-Resources", "Resources", [
                LinkRecord("https://alpha.org/docs", "Alpha docs", False),
                LinkRecord("https://example.com/guide", "User Guide", True),
            ]),
            LinkGroup("FOOTER-footer", "Footer", [
                LinkRecord("https://example.com/privacy", "Privacy", True),
            ]),
        ]

    def test_match_is_case_insensitive_on_text(self) -> None:
        groups = filter_groups(self._groups(), match="GUIDE")
        assert [(g.group_name, [lnk.url for lnk in g.links]) for g in groups] == [
            ("Resources", ["https://example.com/guide"]),
        ]

    def test_match_checks_url(self) -> None:
        groups = filter_groups(self._groups(), match="alpha.org")
        assert [lnk.display_text for g in groups for lnk in g.links] == ["Alpha docs"]

    def test_same_origin_and_match_combine(self) -> None:
        groups = filter_groups(self._groups(), match="example.com", same_origin_only=True)
        assert [lnk.url for g in groups for lnk in g.links] == [
            "https://example.com/guide",
            "https://example.com/privacy",
        ]

    def test_no_filters_keeps_everything_and_input_untouched(self) -> None:
        original = self._groups()
        assert filter_groups(original) == original
        filter_groups(original, match="nothing-matches")
        assert len(original[0].links) == 2
