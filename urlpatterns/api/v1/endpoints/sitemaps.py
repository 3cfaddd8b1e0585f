"""Sitemap collection endpoints"""

from typing import Optional
from fastapi import APIRouter, HTTPException, status, Query
from pydantic import BaseModel
from ....models.pattern import AnalysisResult
from ....models.sitemap import SitemapFetchRequest, SitemapFetchResult, SitemapFetchSummary
from ....services.pattern_analyzer import get_url_pattern_analyzer
from ....services.sitemap_fetcher import get_sitemap_fetcher

router = APIRouter(prefix="/sitemaps", tags=["sitemaps"])


class SitemapAnalysisResult(BaseModel):
    """Sitemap collection summary together with the pattern analysis"""
    fetch: SitemapFetchSummary
    analysis: AnalysisResult


async def _collect(url: str) -> SitemapFetchResult:
    fetcher = get_sitemap_fetcher()
    try:
        return await fetcher.fetch_urls(url)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.post("/fetch", response_model=SitemapFetchResult, status_code=status.HTTP_200_OK)
async def fetch_sitemap(request: SitemapFetchRequest) -> SitemapFetchResult:
    """
    Collect page URLs from a domain or sitemap.

    For a bare domain, robots.txt is checked for `Sitemap:` directives before
    falling back to `/sitemap.xml`. Sitemap indexes are expanded one level.

    **Request Body:**
    - `url`: Domain (example.com) or sitemap URL

    **Returns:**
    - `urls`: Collected URLs
    - `errors`: Classified, non-fatal errors (`network`, `not_found`, `parse`, `unauthorized`, `unknown`)
    - `truncated`: Whether the URL ceiling was hit

    **Errors:**
    - 400: Blank input
    """
    return await _collect(request.url)


@router.post("/analyze", response_model=SitemapAnalysisResult, status_code=status.HTTP_200_OK)
async def analyze_sitemap(
    request: SitemapFetchRequest,
    max_urls_shown: Optional[int] = Query(None, ge=0, description="URLs listed per pattern")
) -> SitemapAnalysisResult:
    """
    Collect URLs from a domain or sitemap and group them into patterns.

    Collection errors are reported in `fetch.errors`; URLs gathered before a
    failure are still analyzed.

    **Errors:**
    - 400: Blank input
    """
    result = await _collect(request.url)
    analyzer = get_url_pattern_analyzer()

    return SitemapAnalysisResult(
        fetch=SitemapFetchSummary.from_result(result),
        analysis=analyzer.analyze_with_summary(result.urls, max_urls_shown)
    )
