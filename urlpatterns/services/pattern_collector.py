"""Pattern collection over the segment trie"""

from typing import Callable, Dict, List, Optional, Sequence
from .segment_trie import Segment, SegmentKind, TrieNode
from .node_merger import NodeMerger
from ..core.config import settings


PatternMap = Dict[str, List[str]]


def render_pattern(segments: Sequence[Segment]) -> str:
    """
    Render a segment stack as a pattern string.

    ``scheme://[subdomain.]domain/path/...``; an empty path renders as ``/``.
    """
    if not segments:
        return ''

    scheme = None
    domain = None
    subdomain = None
    path_values = []
    for segment in segments:
        if segment.kind is SegmentKind.SCHEME:
            scheme = segment.value
        elif segment.kind is SegmentKind.DOMAIN:
            domain = segment.value
        elif segment.kind is SegmentKind.SUBDOMAIN:
            subdomain = segment.value
        else:
            path_values.append(segment.value)

    host = f"{subdomain}.{domain}" if subdomain is not None else (domain or '')
    prefix = f"{scheme}://" if scheme is not None else ''
    return f"{prefix}{host}/" + '/'.join(path_values)


class PatternCollector:
    """
    Walks a segment trie and decides, per segment kind, whether sibling values
    stay literal or collapse into a placeholder.

    Scheme and domain values are never masked. Subdomains are masked only when
    there are few distinct values (tenant-style hosts) so unrelated sites like
    ``shop.`` and ``blog.`` stay apart. Path values that recur at a position
    (traversal count > 1) are treated as route names and kept; values seen once
    are treated as identifiers and collapsed together.
    """

    def __init__(self, placeholder: Optional[str] = None, host_mask_threshold: Optional[int] = None):
        """
        Initialize collector.

        Args:
            placeholder: Token substituted for masked segments
            host_mask_threshold: Maximum distinct subdomains that will be masked
        """
        self.placeholder = placeholder if placeholder is not None else settings.placeholder
        self.host_mask_threshold = (
            host_mask_threshold if host_mask_threshold is not None else settings.host_mask_threshold
        )
        self.merger = NodeMerger(self.placeholder)

        self._rules: Dict[SegmentKind, Callable[[List[TrieNode], List[Segment], PatternMap], None]] = {
            SegmentKind.SCHEME: self._keep_each,
            SegmentKind.DOMAIN: self._keep_each,
            SegmentKind.SUBDOMAIN: self._mask_subdomains,
            SegmentKind.PATH: self._mask_unique_paths,
        }
        missing = set(SegmentKind) - set(self._rules)
        if missing:
            raise RuntimeError(f"No masking rule for segment kinds: {sorted(k.value for k in missing)}")

    def collect(self, root: TrieNode) -> PatternMap:
        """
        Collect patterns from a trie.

        Args:
            root: Trie root

        Returns:
            Dictionary mapping pattern string to contributing URLs, in insertion order
        """
        patterns: PatternMap = {}
        self._visit(root, [], patterns)
        return patterns

    def _visit(self, node: TrieNode, stack: List[Segment], patterns: PatternMap):
        if node.urls:
            patterns.setdefault(render_pattern(stack), []).extend(node.urls)

        by_kind: Dict[SegmentKind, List[TrieNode]] = {}
        for child in node.children.values():
            by_kind.setdefault(child.kind, []).append(child)

        for kind, children in by_kind.items():
            if len(children) == 1:
                # Nothing to generalize over a single value
                self._descend_literal(children[0], stack, patterns)
            else:
                self._rules[kind](children, stack, patterns)

    def _descend_literal(self, child: TrieNode, stack: List[Segment], patterns: PatternMap):
        self._visit(child, stack + [Segment(child.kind, child.value)], patterns)

    def _descend_masked(self, children: List[TrieNode], stack: List[Segment], patterns: PatternMap):
        merged = self.merger.merge(children)
        self._visit(merged, stack + [Segment(merged.kind, self.placeholder)], patterns)

    def _keep_each(self, children: List[TrieNode], stack: List[Segment], patterns: PatternMap):
        for child in children:
            self._descend_literal(child, stack, patterns)

    def _mask_subdomains(self, children: List[TrieNode], stack: List[Segment], patterns: PatternMap):
        if len(children) <= self.host_mask_threshold:
            self._descend_masked(children, stack, patterns)
        else:
            self._keep_each(children, stack, patterns)

    def _mask_unique_paths(self, children: List[TrieNode], stack: List[Segment], patterns: PatternMap):
        repeated = [c for c in children if c.count > 1]
        unique = [c for c in children if c.count == 1]

        for child in repeated:
            self._descend_literal(child, stack, patterns)

        if len(unique) > 1:
            self._descend_masked(unique, stack, patterns)
        elif unique:
            self._descend_literal(unique[0], stack, patterns)
