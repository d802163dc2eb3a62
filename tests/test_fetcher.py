"""Tests for page fetching and ``collect_links``.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_url`` tests.
- Playwright is *not* exercised in the test suite (requires a browser install);
  the SPA-fallback path is covered by patching ``_fetch_with_playwright``.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx

from backend.links.fetcher import _is_spa, collect_links, extract_title, fetch_url
from backend.links.models import RawPage

# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Test Page</title></head>
<body>
  <main>
    <p>This is the main content of the test page with enough text to read.</p>
    <a href="https://example.com/page1">Link 1</a>
    <a href="/page2">Link 2</a>
    <a href="#fragment">Fragment (excluded)</a>
  </main>
  <footer><a href="https://other.org/about">About</a></footer>
</body>
</html>
"""

_SPA_HTML = """\
<!DOCTYPE html>
<html>
<head><title>React App</title></head>
<body>
  <div id="root"></div>
  <script src="/bundle.js"></script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# _is_spa unit tests
# ---------------------------------------------------------------------------

class TestIsSpa:
    def test_detects_react_root_div(self) -> None:
        assert _is_spa(_SPA_HTML) is True

    def test_detects_next_data(self) -> None:
        html = "<html><body><script>window.__NEXT_DATA__ = {}</script></body></html>"
        assert _is_spa(html) is True

    def test_detects_angular(self) -> None:
        html = '<html ng-version="12.0.0"><body>content</body></html>'
        assert _is_spa(html) is True

    def test_normal_page_not_spa(self) -> None:
        assert _is_spa(_SIMPLE_HTML) is False

    def test_minimal_body_heuristic(self) -> None:
        big_script = "<script>" + "x" * 2500 + "</script>"
        html = f"<html><body>{big_script}<p> </p></body></html>"
        assert _is_spa(html) is True


# ---------------------------------------------------------------------------
# fetch_url tests
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get("https://example.com/article").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            raw = fetch_url("https://example.com/article")

        assert isinstance(raw, RawPage)
        assert raw.url == "https://example.com/article"
        assert raw.status_code == 200
        assert "<title>Test Page</title>" in raw.html

    def test_http_error_raises(self) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with pytest.raises(httpx.HTTPStatusError):
                fetch_url("https://example.com/missing")

    def test_redirect_reports_final_url(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    301, headers={"Location": "https://example.com/new/"}
                )
            )
            respx.get("https://example.com/new/").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            raw = fetch_url("https://example.com/old")

        assert raw.url == "https://example.com/new/"

    def test_spa_triggers_playwright_fallback(self) -> None:
        playwright_result = RawPage(
            url="https://spa-app.example.com/",
            html=_SIMPLE_HTML,
            status_code=200,
        )
        with respx.mock:
            respx.get("https://spa-app.example.com/").mock(
                return_value=httpx.Response(200, text=_SPA_HTML)
            )
            with patch(
                "backend.links.fetcher._fetch_with_playwright",
                return_value=playwright_result,
            ) as mock_pw:
                raw = fetch_url("https://spa-app.example.com/")

        mock_pw.assert_called_once_with("https://spa-app.example.com/")
        assert raw.html == _SIMPLE_HTML


class TestExtractTitle:
    def test_extracts_title(self) -> None:
        assert extract_title(_SIMPLE_HTML) == "Test Page"

    def test_missing_title_returns_empty(self) -> None:
        assert extract_title("<html><body></body></html>") == ""

    def test_title_with_attributes(self) -> None:
        html = '<html><head><title lang="en">My Title</title></head></html>'
        assert extract_title(html) == "My Title"


# ---------------------------------------------------------------------------
# collect_links
# ---------------------------------------------------------------------------

class TestCollectLinks:
    def test_groups_links_from_fetched_page(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            groups = collect_links("https://example.com/")

        by_id = {g.group_id: g for g in groups}
        assert set(by_id) == {"MAIN-main", "FOOTER-footer"}

        main_urls = [lnk.url for lnk in by_id["MAIN-main"].links]
        assert main_urls == ["https://example.com/page1", "https://example.com/page2"]
        assert all(lnk.same_origin for lnk in by_id["MAIN-main"].links)

        about = by_id["FOOTER-footer"].links[0]
        assert about.url == "https://other.org/about"
        assert about.same_origin is False

    def test_fetch_errors_propagate(self) -> None:
        with respx.mock:
            respx.get("https://example.com/down").mock(
                return_value=httpx.Response(503, text="unavailable")
            )
            with pytest.raises(httpx.HTTPStatusError):
                collect_links("https://example.com/down")
