"""Pytest configuration and fixtures"""

import pytest
from typing import List


@pytest.fixture
def product_urls() -> List[str]:
    """Product pages differing only by identifier"""
    return [
        "https://example.com/products/123",
        "https://example.com/products/456",
        "https://example.com/products/789",
    ]


@pytest.fixture
def route_urls() -> List[str]:
    """A route name recurring under several sections plus a one-off identifier"""
    return [
        "https://example.com/users/home",
        "https://example.com/products/home",
        "https://example.com/settings/home",
        "https://example.com/users/123",
    ]


@pytest.fixture
def tenant_urls() -> List[str]:
    """Tenant-style subdomains of one application"""
    return [
        "https://t1.app.com/x",
        "https://t2.app.com/x",
        "https://t3.app.com/x",
    ]


@pytest.fixture
def family_urls() -> List[str]:
    """Three route families with 6, 3 and 1 URLs"""
    return [
        "https://example.com/a",
        "https://example.com/a/1",
        "https://example.com/a/2",
        "https://example.com/b",
        "https://example.com/b/1",
        "https://example.com/b/2",
        "https://example.com/b/3",
        "https://example.com/b/4",
        "https://example.com/b/5",
        "https://example.com/c",
    ]


URLSET_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/products/1</loc></url>
  <url><loc> https://example.com/products/2 </loc></url>
  <url><loc></loc></url>
</urlset>
"""


@pytest.fixture
def urlset_xml() -> str:
    return URLSET_XML


def _urlset(urls: List[str], namespaced: bool = True) -> str:
    ns = ' xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' if namespaced else ''
    entries = ''.join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset{ns}>{entries}</urlset>'


def _index(sitemaps: List[str], namespaced: bool = True) -> str:
    ns = ' xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' if namespaced else ''
    entries = ''.join(f"<sitemap><loc>{s}</loc></sitemap>" for s in sitemaps)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex{ns}>{entries}</sitemapindex>'


@pytest.fixture
def make_urlset():
    """Builder for <urlset> documents"""
    return _urlset


@pytest.fixture
def make_index():
    """Builder for <sitemapindex> documents"""
    return _index
