"""Tests for sitemap collection"""

import asyncio
import httpx
import pytest
from urlpatterns.models.sitemap import FetchErrorKind
from urlpatterns.services.sitemap_fetcher import SitemapFetcher, is_bare_domain, normalize_input
from urlpatterns.services.sitemap_parser import SitemapParseError


def _fetcher(routes, requested=None, **kwargs) -> SitemapFetcher:
    """
    Build a fetcher whose client answers from a route table.

    Route values are (status, body) tuples or exceptions to raise.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if requested is not None:
            requested.append(url)
        outcome = routes.get(url, (404, "missing"))
        if isinstance(outcome, Exception):
            raise outcome
        status_code, body = outcome
        return httpx.Response(status_code, text=body)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SitemapFetcher(client=client, **kwargs)


def _run(fetcher: SitemapFetcher, source: str):
    return asyncio.run(fetcher.fetch_urls(source))


class TestInputHelpers:
    """Tests for input normalization"""

    def test_normalize_adds_scheme(self):
        """Test https default for bare domains"""
        assert normalize_input(" example.com ") == "https://example.com"
        assert normalize_input("http://example.com/sitemap.xml") == "http://example.com/sitemap.xml"

    def test_normalize_rejects_blank(self):
        """Test blank input"""
        with pytest.raises(ValueError):
            normalize_input("   ")

    def test_is_bare_domain(self):
        """Test detection of host-only inputs"""
        assert is_bare_domain("https://example.com")
        assert is_bare_domain("https://example.com/")
        assert not is_bare_domain("https://example.com/sitemap.xml")


class TestSitemapFetcher:
    """Tests for SitemapFetcher"""

    def test_fetch_urlset(self, make_urlset):
        """Test a direct urlset"""
        fetcher = _fetcher({
            "https://example.com/sitemap.xml": (200, make_urlset(["https://example.com/a", "https://example.com/b"])),
        })
        result = _run(fetcher, "https://example.com/sitemap.xml")

        assert result.urls == ["https://example.com/a", "https://example.com/b"]
        assert result.errors == []
        assert result.sitemap_count == 1
        assert not result.truncated

    def test_bare_domain_uses_robots(self, make_urlset):
        """Test robots.txt discovery"""
        robots = "User-agent: *\nSitemap: https://example.com/pages.xml\n"
        fetcher = _fetcher({
            "https://example.com/robots.txt": (200, robots),
            "https://example.com/pages.xml": (200, make_urlset(["https://example.com/p"])),
        })
        result = _run(fetcher, "example.com")

        assert result.source == "https://example.com"
        assert result.urls == ["https://example.com/p"]

    def test_bare_domain_falls_back_to_sitemap_xml(self, make_urlset):
        """Test fallback when robots.txt is missing"""
        requested = []
        fetcher = _fetcher({
            "https://example.com/sitemap.xml": (200, make_urlset(["https://example.com/x"])),
        }, requested)
        result = _run(fetcher, "https://example.com/")

        assert requested == ["https://example.com/robots.txt", "https://example.com/sitemap.xml"]
        assert result.urls == ["https://example.com/x"]
        assert result.errors == []

    def test_index_children_collected(self, make_index, make_urlset):
        """Test one-level index expansion in order"""
        children = [f"https://example.com/s{i}.xml" for i in range(4)]
        routes = {"https://example.com/index.xml": (200, make_index(children))}
        for i, child in enumerate(children):
            routes[child] = (200, make_urlset([f"https://example.com/page/{i}"]))

        result = _run(_fetcher(routes), "https://example.com/index.xml")

        assert result.urls == [f"https://example.com/page/{i}" for i in range(4)]
        assert result.sitemap_count == 5

    def test_child_failure_is_isolated(self, make_index, make_urlset):
        """Test that a failed child does not cancel its siblings"""
        routes = {
            "https://example.com/index.xml": (200, make_index([
                "https://example.com/ok-1.xml",
                "https://example.com/gone.xml",
                "https://example.com/broken.xml",
                "https://example.com/ok-2.xml",
            ])),
            "https://example.com/ok-1.xml": (200, make_urlset(["https://example.com/1"])),
            "https://example.com/broken.xml": (200, "<urlset><url>"),
            "https://example.com/ok-2.xml": (200, make_urlset(["https://example.com/2"])),
        }
        result = _run(_fetcher(routes), "https://example.com/index.xml")

        assert result.urls == ["https://example.com/1", "https://example.com/2"]
        kinds = {e.url: e.error.kind for e in result.errors}
        assert kinds == {
            "https://example.com/gone.xml": FetchErrorKind.NOT_FOUND,
            "https://example.com/broken.xml": FetchErrorKind.PARSE,
        }

    def test_nested_index_not_followed(self, make_index):
        """Test that an index inside an index is skipped"""
        routes = {
            "https://example.com/index.xml": (200, make_index(["https://example.com/nested.xml"])),
            "https://example.com/nested.xml": (200, make_index(["https://example.com/deep.xml"])),
        }
        requested = []
        result = _run(_fetcher(routes, requested), "https://example.com/index.xml")

        assert "https://example.com/deep.xml" not in requested
        assert result.skipped_sitemaps == 1
        assert result.urls == []

    def test_child_sitemap_cap(self, make_index, make_urlset):
        """Test the limit on children traversed per index"""
        children = [f"https://example.com/s{i}.xml" for i in range(7)]
        routes = {"https://example.com/index.xml": (200, make_index(children))}
        for child in children:
            routes[child] = (200, make_urlset([child + "/page"]))

        result = _run(_fetcher(routes, max_child_sitemaps=5), "https://example.com/index.xml")

        assert len(result.urls) == 5
        assert result.skipped_sitemaps == 2

    def test_url_ceiling_truncates(self, make_urlset):
        """Test truncation at the collected URL limit"""
        urls = [f"https://example.com/{i}" for i in range(10)]
        fetcher = _fetcher(
            {"https://example.com/sitemap.xml": (200, make_urlset(urls))},
            max_collected_urls=4,
        )
        result = _run(fetcher, "https://example.com/sitemap.xml")

        assert result.urls == urls[:4]
        assert result.truncated

    def test_top_level_failure_reported(self):
        """Test that a failed source yields an error entry, not an exception"""
        fetcher = _fetcher({"https://example.com/sitemap.xml": (403, "denied")})
        result = _run(fetcher, "https://example.com/sitemap.xml")

        assert result.urls == []
        assert len(result.errors) == 1
        assert result.errors[0].error.kind is FetchErrorKind.UNAUTHORIZED
        assert result.errors[0].error.recoverable is False

    def test_network_failure_reported(self):
        """Test transport errors"""
        fetcher = _fetcher({
            "https://example.com/sitemap.xml": httpx.ConnectError("connection refused"),
        })
        result = _run(fetcher, "https://example.com/sitemap.xml")

        assert result.errors[0].error.kind is FetchErrorKind.NETWORK
        assert result.errors[0].error.recoverable is True

    def test_batch_size_clamped(self):
        """Test that concurrency stays between 3 and 5"""
        assert SitemapFetcher(batch_size=1).batch_size == 3
        assert SitemapFetcher(batch_size=4).batch_size == 4
        assert SitemapFetcher(batch_size=20).batch_size == 5


class TestClassifyError:
    """Tests for error classification"""

    def _status_error(self, status_code: int) -> httpx.HTTPStatusError:
        request = httpx.Request("GET", "https://example.com/sitemap.xml")
        response = httpx.Response(status_code, request=request)
        return httpx.HTTPStatusError("error", request=request, response=response)

    @pytest.mark.parametrize("status_code,kind,recoverable", [
        (404, FetchErrorKind.NOT_FOUND, False),
        (410, FetchErrorKind.NOT_FOUND, False),
        (401, FetchErrorKind.UNAUTHORIZED, False),
        (403, FetchErrorKind.UNAUTHORIZED, False),
        (500, FetchErrorKind.UNKNOWN, True),
    ])
    def test_http_status(self, status_code, kind, recoverable):
        """Test classification by status code"""
        info = SitemapFetcher.classify_error(self._status_error(status_code))

        assert info.kind is kind
        assert info.recoverable is recoverable

    def test_parse_error(self):
        """Test XML failures"""
        info = SitemapFetcher.classify_error(SitemapParseError("Invalid XML: boom"))

        assert info.kind is FetchErrorKind.PARSE
        assert info.message == "Invalid XML: boom"

    def test_timeout(self):
        """Test that timeouts count as network errors"""
        info = SitemapFetcher.classify_error(httpx.ReadTimeout("timed out"))
        assert info.kind is FetchErrorKind.NETWORK

    def test_unknown(self):
        """Test the fallback classification"""
        info = SitemapFetcher.classify_error(RuntimeError(""))

        assert info.kind is FetchErrorKind.UNKNOWN
        assert info.message == "Unknown error"
