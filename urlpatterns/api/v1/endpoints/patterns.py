"""Pattern analysis endpoints"""

from fastapi import APIRouter, HTTPException, status
from ....models.pattern import AnalyzeRequest, AnalysisResult
from ....services.pattern_analyzer import get_url_pattern_analyzer
from ....core.config import settings

router = APIRouter(prefix="/patterns", tags=["patterns"])


@router.post("/analyze", response_model=AnalysisResult, status_code=status.HTTP_200_OK)
async def analyze_urls(request: AnalyzeRequest) -> AnalysisResult:
    """
    Group a list of URLs into generalized patterns.

    URLs can be sent as a JSON array, as newline-separated text, or both.
    Blank, duplicate and malformed entries are ignored.

    **Request Body:**
    - `urls` (optional): Array of absolute URLs
    - `text` (optional): Newline-separated URLs
    - `max_urls_shown` (optional): URLs listed per pattern (default 100)

    **Returns:**
    - `patterns`: Ranked patterns with `pattern`, `count`, `depth` and a capped `urls` list
    - Counters for submitted, analyzed and rejected URLs

    **Errors:**
    - 400: No URLs supplied, or more than the per-request limit
    """
    urls = request.collect_urls()

    if not urls:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No URLs supplied"
        )

    if len(urls) > settings.max_urls_per_request:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Request exceeds maximum of {settings.max_urls_per_request} URLs"
        )

    analyzer = get_url_pattern_analyzer()
    return analyzer.analyze_with_summary(urls, request.max_urls_shown)
