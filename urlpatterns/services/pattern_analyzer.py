"""Main analyzer that orchestrates the pattern extraction pipeline"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from ..models.pattern import Pattern, PatternView, AnalysisResult
from .segment_trie import build_trie
from .pattern_collector import PatternCollector
from .hierarchical_ranker import HierarchicalRanker
from ..core.config import settings

logger = logging.getLogger(__name__)


class UrlPatternAnalyzer:
    """
    Pattern extraction pipeline:
    1. URL decomposition and deduplication
    2. Segment trie construction
    3. Pattern collection (masking decisions)
    4. Hierarchical ranking

    The analyzer only holds configuration; every call builds and discards its
    own trie, so one instance can be shared between callers.
    """

    def __init__(
        self,
        placeholder: Optional[str] = None,
        host_mask_threshold: Optional[int] = None,
        max_path_segments: Optional[int] = None
    ):
        self.max_path_segments = (
            max_path_segments if max_path_segments is not None else settings.max_path_segments
        )
        self.collector = PatternCollector(placeholder, host_mask_threshold)
        self.ranker = HierarchicalRanker()

    @property
    def placeholder(self) -> str:
        return self.collector.placeholder

    def analyze(self, urls: Sequence[str]) -> List[Pattern]:
        """
        Group URLs into ranked patterns.

        Blank, duplicate and malformed entries are dropped silently; an input
        with nothing usable yields an empty list.

        Args:
            urls: Absolute URL strings

        Returns:
            Patterns ordered by group total, then hierarchically
        """
        patterns, _, _ = self._run(urls)
        return patterns

    def analyze_with_summary(self, urls: Sequence[str], max_urls_shown: Optional[int] = None) -> AnalysisResult:
        """
        Analyze URLs and build a display-ready result.

        Args:
            urls: Absolute URL strings
            max_urls_shown: URLs listed per pattern (defaults to settings.url_display_limit)

        Returns:
            Analysis result with capped URL lists
        """
        if max_urls_shown is None:
            max_urls_shown = settings.url_display_limit

        patterns, accepted, rejected = self._run(urls)

        return AnalysisResult(
            analysis_timestamp=datetime.now(timezone.utc),
            total_urls_submitted=len(urls),
            urls_analyzed=accepted,
            urls_rejected=rejected,
            patterns_identified=len(patterns),
            patterns=[PatternView.from_pattern(p, max_urls_shown) for p in patterns]
        )

    def _run(self, urls: Sequence[str]):
        if not urls:
            return [], 0, 0

        # Step 1 & 2: Decompose and build the trie
        built = build_trie(urls, self.max_path_segments)
        if built.accepted == 0:
            logger.info(f"No valid URLs among {len(urls)} submitted")
            return [], 0, built.rejected

        # Step 3: Collect patterns
        pattern_map = self.collector.collect(built.root)

        # Step 4: Rank
        patterns = self.ranker.rank(pattern_map)

        logger.info(
            f"Analyzed {built.accepted} URLs into {len(patterns)} patterns "
            f"({built.rejected} rejected)"
        )
        return patterns, built.accepted, built.rejected


# Singleton instance
_url_pattern_analyzer = UrlPatternAnalyzer()


def get_url_pattern_analyzer() -> UrlPatternAnalyzer:
    """Get the URL pattern analyzer instance"""
    return _url_pattern_analyzer
