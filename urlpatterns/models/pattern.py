"""Pattern data models"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime


class Pattern(BaseModel):
    """A URL pattern and the concrete URLs it represents"""
    pattern: str = Field(..., description="URL template with variable segments replaced by the placeholder")
    count: int = Field(..., ge=1, description="Number of URLs represented by this pattern")
    urls: List[str] = Field(..., description="Contributing URLs in input order")
    depth: int = Field(default=0, ge=0, description="Number of ancestor patterns (for indentation)")

    @model_validator(mode='after')
    def validate_count(self) -> 'Pattern':
        if self.count != len(self.urls):
            raise ValueError(f'count ({self.count}) must equal the number of urls ({len(self.urls)})')
        return self

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "pattern": "https://example.com/products/…",
                "count": 3,
                "urls": [
                    "https://example.com/products/123",
                    "https://example.com/products/456",
                    "https://example.com/products/789"
                ],
                "depth": 1
            }
        }


class PatternView(BaseModel):
    """Display form of a pattern with the URL list capped"""
    pattern: str
    count: int = Field(..., ge=1)
    depth: int = Field(default=0, ge=0)
    urls: List[str] = Field(default_factory=list, description="First URLs of the pattern, capped for display")
    hidden_url_count: int = Field(default=0, ge=0, description="URLs not included in `urls`")

    @classmethod
    def from_pattern(cls, pattern: Pattern, max_urls: int) -> 'PatternView':
        shown = pattern.urls[:max_urls] if max_urls > 0 else []
        return cls(
            pattern=pattern.pattern,
            count=pattern.count,
            depth=pattern.depth,
            urls=shown,
            hidden_url_count=pattern.count - len(shown)
        )


class AnalyzeRequest(BaseModel):
    """Request to analyze a list of URLs"""
    urls: List[str] = Field(default_factory=list, description="Absolute URLs to analyze")
    text: Optional[str] = Field(None, description="Newline-separated URLs, e.g. pasted text")
    max_urls_shown: Optional[int] = Field(None, ge=0, description="URLs listed per pattern (defaults to server setting)")

    def collect_urls(self) -> List[str]:
        """Combine `urls` and the lines of `text`, dropping blank entries"""
        collected = [u for u in self.urls if u.strip()]
        if self.text:
            collected.extend(line for line in self.text.splitlines() if line.strip())
        return collected

    class Config:
        json_schema_extra = {
            "example": {
                "urls": [
                    "https://example.com/products/123",
                    "https://example.com/products/456"
                ],
                "max_urls_shown": 100
            }
        }


class AnalysisResult(BaseModel):
    """Complete analysis result"""
    analysis_timestamp: datetime
    total_urls_submitted: int
    urls_analyzed: int
    urls_rejected: int
    patterns_identified: int
    patterns: List[PatternView]

    class Config:
        json_schema_extra = {
            "example": {
                "analysis_timestamp": "2025-11-05T10:35:00Z",
                "total_urls_submitted": 3,
                "urls_analyzed": 3,
                "urls_rejected": 0,
                "patterns_identified": 1,
                "patterns": [
                    {
                        "pattern": "https://example.com/products/…",
                        "count": 3,
                        "depth": 0,
                        "urls": ["https://example.com/products/123"],
                        "hidden_url_count": 2
                    }
                ]
            }
        }
