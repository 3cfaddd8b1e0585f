"""Hierarchical ranking of extracted patterns"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from pyuca import Collator
from ..models.pattern import Pattern

# Unicode Collation Algorithm, default table
_collator = Collator()


def collation_key(pattern: str) -> Tuple[Tuple[int, ...], str]:
    """
    Sort key giving locale-style lexical order.

    Letters compare case-insensitively first (``alpha`` before ``Beta``) and
    punctuation, including the placeholder, sorts before letters. The raw
    string breaks ties between collation-equal patterns.
    """
    return _collator.sort_key(pattern), pattern


def ancestors_of(candidate: str, known: Mapping[str, object]) -> List[str]:
    """
    Find the patterns that are ancestors of a candidate pattern.

    ``P`` is an ancestor when the candidate starts with ``P`` immediately
    followed by ``/``. Ancestors are returned shortest first.
    """
    found = []
    index = candidate.find('/')
    while index != -1:
        prefix = candidate[:index]
        if prefix in known:
            found.append(prefix)
        index = candidate.find('/', index + 1)
    return found


class HierarchicalRanker:
    """
    Orders patterns into families.

    Every pattern without an ancestor roots a group. Groups are ordered by the
    total number of URLs they cover (most first, ties by root pattern); within
    a group parents precede their descendants and siblings are ordered
    lexically.
    """

    def rank(self, pattern_map: Mapping[str, Sequence[str]]) -> List[Pattern]:
        """
        Rank patterns.

        Args:
            pattern_map: Dictionary mapping pattern string to contributing URLs

        Returns:
            Fully ordered list of patterns with depth set
        """
        if not pattern_map:
            return []

        parents: Dict[str, Optional[str]] = {}
        depths: Dict[str, int] = {}
        children: Dict[Optional[str], List[str]] = {}

        for pattern in pattern_map:
            ancestors = ancestors_of(pattern, pattern_map)
            parent = ancestors[-1] if ancestors else None
            parents[pattern] = parent
            depths[pattern] = len(ancestors)
            children.setdefault(parent, []).append(pattern)

        # Group totals keyed by root pattern
        totals: Dict[str, int] = {}
        for pattern, urls in pattern_map.items():
            root = self._root_of(pattern, parents)
            totals[root] = totals.get(root, 0) + len(urls)

        roots = sorted(children.get(None, []), key=lambda r: (-totals[r], collation_key(r)))

        ranked: List[Pattern] = []
        for root in roots:
            stack = [root]
            while stack:
                current = stack.pop()
                urls = list(pattern_map[current])
                ranked.append(Pattern(
                    pattern=current,
                    count=len(urls),
                    urls=urls,
                    depth=depths[current]
                ))
                # Reverse so the lexically smallest child is popped first
                stack.extend(sorted(children.get(current, []), key=collation_key, reverse=True))

        return ranked

    @staticmethod
    def _root_of(pattern: str, parents: Mapping[str, Optional[str]]) -> str:
        current = pattern
        while parents[current] is not None:
            current = parents[current]
        return current
