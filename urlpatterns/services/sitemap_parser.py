"""Sitemap XML and robots.txt parsing"""

import xml.etree.ElementTree as ET
from enum import Enum
from typing import List, NamedTuple
from urllib.parse import urljoin

SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'


class SitemapParseError(ValueError):
    """Raised when content is not a valid sitemap document"""
    pass


class SitemapType(str, Enum):
    URLSET = "urlset"
    INDEX = "sitemapindex"


class ParsedSitemap(NamedTuple):
    type: SitemapType
    locations: List[str]


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def _find_all(element: ET.Element, name: str) -> List[ET.Element]:
    """Namespaced lookup with a fallback to non-namespaced elements"""
    found = element.findall(f'.//{{{SITEMAP_NS}}}{name}')
    if not found:
        found = element.findall(f'.//{name}')
    return found


def _find_first(element: ET.Element, name: str):
    found = element.find(f'{{{SITEMAP_NS}}}{name}')
    if found is None:
        found = element.find(name)
    return found


def parse_sitemap(content, base_url: str = '') -> ParsedSitemap:
    """
    Parse a sitemap document.

    Args:
        content: XML text or bytes
        base_url: URL the document came from, used to resolve relative child sitemaps

    Returns:
        Sitemap type and the locations it lists (page URLs or child sitemap URLs)

    Raises:
        SitemapParseError: If the XML is malformed or not a urlset/sitemapindex
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise SitemapParseError(f"Invalid XML: {e}") from e

    root_name = _local_name(root.tag)

    if root_name == SitemapType.URLSET.value:
        urls = []
        for loc in _find_all(root, 'loc'):
            text = (loc.text or '').strip()
            if text:
                urls.append(text)
        return ParsedSitemap(SitemapType.URLSET, urls)

    if root_name == SitemapType.INDEX.value:
        sitemaps = []
        for sitemap in _find_all(root, 'sitemap'):
            loc = _find_first(sitemap, 'loc')
            text = (loc.text or '').strip() if loc is not None else ''
            if not text:
                continue
            if base_url and not text.startswith(('http://', 'https://')):
                text = urljoin(base_url, text)
            sitemaps.append(text)
        return ParsedSitemap(SitemapType.INDEX, sitemaps)

    raise SitemapParseError(
        f"Not a valid sitemap: missing urlset or sitemapindex element (found <{root_name}>)"
    )


def parse_robots_sitemaps(text: str) -> List[str]:
    """
    Extract ``Sitemap:`` directives from robots.txt content.

    Returns:
        Declared sitemap URLs in order of appearance, without duplicates
    """
    declared = []
    for raw_line in text.splitlines():
        line = raw_line.split('#', 1)[0].strip()
        if not line.lower().startswith('sitemap:'):
            continue
        candidate = line.split(':', 1)[1].strip()
        if candidate and candidate not in declared:
            declared.append(candidate)
    return declared
