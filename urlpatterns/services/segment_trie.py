"""Segment trie construction"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional
from .url_decomposer import DecomposedUrl, try_decompose_url

logger = logging.getLogger(__name__)


class SegmentKind(str, Enum):
    """Positional role of a URL segment"""
    SCHEME = "scheme"
    DOMAIN = "domain"
    SUBDOMAIN = "subdomain"
    PATH = "path"


class Segment(NamedTuple):
    """One typed positional component of a URL"""
    kind: SegmentKind
    value: str

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.value}"


class TrieNode:
    """
    Node of the segment trie.

    Children are keyed by ``kind:value`` and owned by exactly one parent.
    ``count`` is the number of URLs passing through the node; ``urls`` holds
    only the URLs that terminate here.
    """

    __slots__ = ("value", "kind", "count", "urls", "children")

    def __init__(self, value: Optional[str] = None, kind: Optional[SegmentKind] = None):
        self.value = value
        self.kind = kind
        self.count = 0
        self.urls: List[str] = []
        self.children: Dict[str, 'TrieNode'] = {}

    def __repr__(self) -> str:
        return (
            f"TrieNode(kind={self.kind.value if self.kind else None!r}, value={self.value!r}, "
            f"count={self.count}, urls={len(self.urls)}, children={len(self.children)})"
        )


class TrieBuildResult(NamedTuple):
    """Root of a freshly built trie plus input accounting"""
    root: TrieNode
    accepted: int
    rejected: int


def segments_for(decomposed: DecomposedUrl) -> List[Segment]:
    """
    Build the segment sequence for a decomposed URL.

    Scheme first, then the base domain (last two host labels) so URLs group by
    domain, then the subdomain if any, then each path segment.
    """
    labels = decomposed.host_labels
    sequence = [
        Segment(SegmentKind.SCHEME, decomposed.scheme),
        Segment(SegmentKind.DOMAIN, '.'.join(labels[-2:])),
    ]
    if len(labels) > 2:
        sequence.append(Segment(SegmentKind.SUBDOMAIN, '.'.join(labels[:-2])))
    sequence.extend(Segment(SegmentKind.PATH, s) for s in decomposed.path_segments)
    return sequence


class SegmentTrie:
    """Shared-prefix tree of URL segment sequences"""

    def __init__(self):
        self.root = TrieNode()

    def insert(self, decomposed: DecomposedUrl) -> TrieNode:
        """
        Insert a decomposed URL, creating nodes as needed.

        Args:
            decomposed: URL to insert

        Returns:
            The node at which the URL terminates
        """
        node = self.root
        for segment in segments_for(decomposed):
            key = segment.key
            child = node.children.get(key)
            if child is None:
                child = TrieNode(segment.value, segment.kind)
                node.children[key] = child
            child.count += 1
            node = child
        node.urls.append(decomposed.original)
        return node


def prepare_urls(urls: Iterable[str]) -> List[str]:
    """Drop blank entries and exact duplicates, keeping first-seen order"""
    return list(dict.fromkeys(u for u in urls if u and u.strip()))


def build_trie(urls: Iterable[str], max_path_segments: Optional[int] = None) -> TrieBuildResult:
    """
    Build a segment trie from raw URL strings.

    Args:
        urls: Raw URL strings (may contain blanks, duplicates and malformed entries)
        max_path_segments: Depth cap forwarded to the decomposer

    Returns:
        Trie root with counts of accepted and rejected URLs
    """
    trie = SegmentTrie()
    accepted = 0
    rejected = 0

    for url in prepare_urls(urls):
        decomposed = try_decompose_url(url, max_path_segments)
        if decomposed is None:
            rejected += 1
            continue
        trie.insert(decomposed)
        accepted += 1

    logger.debug(f"Built segment trie from {accepted} URLs ({rejected} rejected)")
    return TrieBuildResult(root=trie.root, accepted=accepted, rejected=rejected)
