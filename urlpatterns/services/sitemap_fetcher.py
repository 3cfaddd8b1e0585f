"""Sitemap collection service"""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import urlsplit

import httpx

from ..models.sitemap import FetchError, FetchErrorInfo, FetchErrorKind, SitemapFetchResult
from .sitemap_parser import SitemapParseError, SitemapType, ParsedSitemap, parse_sitemap, parse_robots_sitemaps
from ..core.config import settings

logger = logging.getLogger(__name__)

MIN_BATCH_SIZE = 3
MAX_BATCH_SIZE = 5


def normalize_input(raw: str) -> str:
    """Add an https scheme to inputs given as a bare domain or scheme-less URL"""
    url = raw.strip()
    if not url:
        raise ValueError("A domain or sitemap URL is required")
    if not url.startswith(('http://', 'https://')):
        url = 'https://' + url
    return url


def is_bare_domain(url: str) -> bool:
    """True when the URL names only a host, with no path or query"""
    parsed = urlsplit(url)
    return parsed.path in ('', '/') and not parsed.query


class SitemapFetcher:
    """
    Collects page URLs from XML sitemaps.

    Given a bare domain, robots.txt is consulted for ``Sitemap:`` directives,
    falling back to ``/sitemap.xml``. Sitemap indexes are expanded one level
    deep in small concurrent batches; a failed child is recorded and does not
    affect its siblings. Failures are classified and returned, never raised.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        batch_size: Optional[int] = None,
        max_child_sitemaps: Optional[int] = None,
        max_collected_urls: Optional[int] = None
    ):
        """
        Initialize fetcher.

        Args:
            client: HTTP client to use; a short-lived one is created per call when omitted
            batch_size: Child sitemaps fetched concurrently (clamped to 3-5)
            max_child_sitemaps: Children traversed per sitemap index
            max_collected_urls: Ceiling on collected URLs
        """
        self._client = client
        size = batch_size if batch_size is not None else settings.sitemap_batch_size
        self.batch_size = max(MIN_BATCH_SIZE, min(MAX_BATCH_SIZE, size))
        self.max_child_sitemaps = (
            max_child_sitemaps if max_child_sitemaps is not None else settings.max_child_sitemaps
        )
        self.max_collected_urls = (
            max_collected_urls if max_collected_urls is not None else settings.max_collected_urls
        )

    async def fetch_urls(self, raw: str) -> SitemapFetchResult:
        """
        Collect all URLs reachable from a domain or sitemap URL.

        Args:
            raw: Domain (example.com) or sitemap URL

        Returns:
            Collected URLs plus classified errors

        Raises:
            ValueError: If the input is blank
        """
        source = normalize_input(raw)

        if self._client is not None:
            return await self._collect(self._client, source)

        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True
        ) as client:
            return await self._collect(client, source)

    async def discover_sitemaps(self, client: httpx.AsyncClient, url: str) -> List[str]:
        """
        Find the sitemaps of a site via robots.txt.

        Returns:
            Sitemaps declared in robots.txt, or ``/sitemap.xml`` when none are declared
        """
        parsed = urlsplit(url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        robots_url = f"{origin}/robots.txt"

        try:
            declared = parse_robots_sitemaps(await self._fetch_text(client, robots_url))
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeDecodeError) as e:
            logger.info(f"Could not read {robots_url}: {e}")
            declared = []

        if declared:
            logger.info(f"Found {len(declared)} sitemap(s) in {robots_url}")
            return declared

        logger.info(f"No sitemap declared in robots.txt, falling back to {origin}/sitemap.xml")
        return [f"{origin}/sitemap.xml"]

    async def _collect(self, client: httpx.AsyncClient, source: str) -> SitemapFetchResult:
        result = SitemapFetchResult(source=source)

        if is_bare_domain(source):
            sitemap_urls = await self.discover_sitemaps(client, source)
        else:
            sitemap_urls = [source]

        for sitemap_url in sitemap_urls:
            if result.truncated:
                break
            try:
                parsed = await self._fetch_sitemap(client, sitemap_url)
            except Exception as e:
                self._record_error(result, sitemap_url, e)
                continue

            result.sitemap_count += 1
            if parsed.type is SitemapType.URLSET:
                self._add_urls(result, parsed.locations)
            else:
                await self._collect_index(client, parsed.locations, result)

        logger.info(
            f"Collected {len(result.urls)} URLs from {result.sitemap_count} sitemap(s) "
            f"with {len(result.errors)} error(s)"
        )
        return result

    async def _collect_index(self, client: httpx.AsyncClient, children: List[str], result: SitemapFetchResult):
        if len(children) > self.max_child_sitemaps:
            logger.warning(
                f"Sitemap index lists {len(children)} sitemaps, only the first "
                f"{self.max_child_sitemaps} will be fetched"
            )
            result.skipped_sitemaps += len(children) - self.max_child_sitemaps
            children = children[:self.max_child_sitemaps]

        for start in range(0, len(children), self.batch_size):
            if result.truncated:
                break
            batch = children[start:start + self.batch_size]
            outcomes = await asyncio.gather(
                *(self._fetch_sitemap(client, url) for url in batch),
                return_exceptions=True
            )

            for url, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    self._record_error(result, url, outcome)
                elif outcome.type is SitemapType.INDEX:
                    # Nested indexes are not followed
                    logger.info(f"Skipping nested sitemap index {url}")
                    result.skipped_sitemaps += 1
                else:
                    result.sitemap_count += 1
                    self._add_urls(result, outcome.locations)

    async def _fetch_sitemap(self, client: httpx.AsyncClient, url: str) -> ParsedSitemap:
        logger.info(f"Fetching sitemap {url}")
        response = await client.get(url)
        response.raise_for_status()
        return parse_sitemap(response.content, url)

    async def _fetch_text(self, client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url)
        response.raise_for_status()
        return response.text

    def _add_urls(self, result: SitemapFetchResult, urls: List[str]):
        remaining = self.max_collected_urls - len(result.urls)
        if len(urls) > remaining:
            result.urls.extend(urls[:max(remaining, 0)])
            result.truncated = True
            logger.warning(f"URL limit of {self.max_collected_urls} reached, truncating collection")
        else:
            result.urls.extend(urls)

    def _record_error(self, result: SitemapFetchResult, url: str, error: Exception):
        info = self.classify_error(error)
        logger.warning(f"Failed to collect {url}: [{info.kind.value}] {info.message}")
        result.errors.append(FetchError(url=url, error=info))

    @staticmethod
    def classify_error(error: Exception) -> FetchErrorInfo:
        """
        Classify a collection failure.

        Args:
            error: Exception raised while fetching or parsing

        Returns:
            Error kind, user-facing message and whether retrying may help
        """
        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code in (404, 410):
                return FetchErrorInfo(
                    kind=FetchErrorKind.NOT_FOUND,
                    message=f"Sitemap not found ({status_code})",
                    recoverable=False
                )
            if status_code in (401, 403):
                return FetchErrorInfo(
                    kind=FetchErrorKind.UNAUTHORIZED,
                    message=f"Access denied ({status_code})",
                    recoverable=False
                )
            return FetchErrorInfo(
                kind=FetchErrorKind.UNKNOWN,
                message=f"HTTP {status_code}",
                recoverable=True
            )

        if isinstance(error, SitemapParseError):
            return FetchErrorInfo(kind=FetchErrorKind.PARSE, message=str(error), recoverable=False)

        if isinstance(error, httpx.TransportError):
            return FetchErrorInfo(
                kind=FetchErrorKind.NETWORK,
                message=f"Network error - check your connection ({error.__class__.__name__})",
                recoverable=True
            )

        return FetchErrorInfo(
            kind=FetchErrorKind.UNKNOWN,
            message=str(error) or "Unknown error",
            recoverable=True
        )


def get_sitemap_fetcher() -> SitemapFetcher:
    """Get a sitemap fetcher configured from settings"""
    return SitemapFetcher()
