"""Trie node merging"""

from typing import Dict, List, Optional, Sequence
from .segment_trie import TrieNode
from ..core.config import settings


class NodeMerger:
    """
    Combines sibling trie nodes into a single virtual node.

    Merging is pure: the inputs are left untouched and the result shares no
    node with them, so merged subtrees can be merged again safely.
    """

    def __init__(self, placeholder: Optional[str] = None):
        """
        Initialize merger.

        Args:
            placeholder: Value given to a merged node whose inputs disagree
        """
        self.placeholder = placeholder if placeholder is not None else settings.placeholder

    def merge(self, nodes: Sequence[TrieNode]) -> TrieNode:
        """
        Merge nodes into one.

        Terminal URLs are concatenated in input order, counts are summed and
        children sharing a ``kind:value`` key are merged recursively.

        Args:
            nodes: Nodes to merge (at least one)

        Returns:
            New merged node
        """
        if not nodes:
            raise ValueError("Cannot merge an empty set of nodes")

        values = {node.value for node in nodes}
        value = nodes[0].value if len(values) == 1 else self.placeholder
        merged = TrieNode(value, nodes[0].kind)

        # Group children by key, preserving first-seen order
        grouped: Dict[str, List[TrieNode]] = {}
        for node in nodes:
            merged.count += node.count
            merged.urls.extend(node.urls)
            for key, child in node.children.items():
                grouped.setdefault(key, []).append(child)

        for key, children in grouped.items():
            merged.children[key] = self.merge(children)

        return merged
