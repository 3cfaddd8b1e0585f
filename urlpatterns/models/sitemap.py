"""Sitemap collection models"""

from pydantic import BaseModel, Field
from typing import List
from enum import Enum


class FetchErrorKind(str, Enum):
    """Classification of a sitemap collection failure"""
    NETWORK = "network"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"


class FetchErrorInfo(BaseModel):
    """Classified error details"""
    kind: FetchErrorKind
    message: str
    recoverable: bool


class FetchError(BaseModel):
    """A failure tied to the URL that caused it"""
    url: str
    error: FetchErrorInfo


class SitemapFetchRequest(BaseModel):
    """Request to collect URLs from a domain or sitemap"""
    url: str = Field(..., min_length=1, description="Domain (example.com) or sitemap URL")

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://example.com/sitemap.xml"
            }
        }


class SitemapFetchResult(BaseModel):
    """URLs collected from sitemaps together with any non-fatal errors"""
    source: str = Field(..., description="Normalized input the collection started from")
    urls: List[str] = Field(default_factory=list)
    errors: List[FetchError] = Field(default_factory=list)
    sitemap_count: int = Field(default=0, ge=0, description="Sitemaps successfully parsed")
    truncated: bool = Field(default=False, description="Collection stopped at the URL ceiling")
    skipped_sitemaps: int = Field(default=0, ge=0, description="Child sitemaps not traversed")


class SitemapFetchSummary(BaseModel):
    """Fetch result without the URL list"""
    source: str
    url_count: int
    errors: List[FetchError]
    sitemap_count: int
    truncated: bool
    skipped_sitemaps: int

    @classmethod
    def from_result(cls, result: SitemapFetchResult) -> 'SitemapFetchSummary':
        return cls(
            source=result.source,
            url_count=len(result.urls),
            errors=result.errors,
            sitemap_count=result.sitemap_count,
            truncated=result.truncated,
            skipped_sitemaps=result.skipped_sitemaps
        )
