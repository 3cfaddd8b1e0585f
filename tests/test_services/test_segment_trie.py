"""Tests for segment trie construction"""

from urlpatterns.services.url_decomposer import decompose_url
from urlpatterns.services.segment_trie import (
    Segment,
    SegmentKind,
    SegmentTrie,
    build_trie,
    prepare_urls,
    segments_for,
)


class TestSegmentsFor:
    """Tests for segment sequence construction"""

    def test_two_label_host_has_no_subdomain(self):
        """Test scheme, domain, then path segments"""
        segments = segments_for(decompose_url("https://example.com/a/b"))

        assert segments == [
            Segment(SegmentKind.SCHEME, "https"),
            Segment(SegmentKind.DOMAIN, "example.com"),
            Segment(SegmentKind.PATH, "a"),
            Segment(SegmentKind.PATH, "b"),
        ]

    def test_subdomain_joins_leading_labels(self):
        """Test that every label before the base domain forms the subdomain"""
        segments = segments_for(decompose_url("https://a.b.example.co/"))

        assert segments == [
            Segment(SegmentKind.SCHEME, "https"),
            Segment(SegmentKind.DOMAIN, "example.co"),
            Segment(SegmentKind.SUBDOMAIN, "a.b"),
        ]

    def test_single_label_host(self):
        """Test hosts such as localhost"""
        segments = segments_for(decompose_url("http://localhost/x"))
        assert segments[1] == Segment(SegmentKind.DOMAIN, "localhost")
        assert len(segments) == 3

    def test_segment_key(self):
        """Test kind:value keys"""
        assert Segment(SegmentKind.PATH, "home").key == "path:home"
        assert Segment(SegmentKind.SUBDOMAIN, "www").key == "subdomain:www"


class TestSegmentTrie:
    """Tests for trie insertion"""

    def setup_method(self):
        """Setup test fixtures"""
        self.trie = SegmentTrie()

    def test_insert_counts_traversals(self):
        """Test that every node on the path counts each URL"""
        for url in ["https://example.com/a/1", "https://example.com/a/2", "https://example.com/a"]:
            self.trie.insert(decompose_url(url))

        scheme = self.trie.root.children["scheme:https"]
        domain = scheme.children["domain:example.com"]
        a = domain.children["path:a"]

        assert scheme.count == 3
        assert domain.count == 3
        assert a.count == 3
        assert a.urls == ["https://example.com/a"]
        assert a.children["path:1"].count == 1
        assert a.children["path:2"].urls == ["https://example.com/a/2"]

    def test_terminating_url_not_counted_in_children(self):
        """Test that children sum to the parent count minus terminating URLs"""
        for url in ["https://example.com/a", "https://example.com/a/1"]:
            self.trie.insert(decompose_url(url))

        a = self.trie.root.children["scheme:https"].children["domain:example.com"].children["path:a"]
        child_total = sum(c.count for c in a.children.values())

        assert child_total == a.count - len(a.urls)

    def test_root_has_no_value(self):
        """Test the empty-prefix root"""
        assert self.trie.root.kind is None
        assert self.trie.root.value is None
        assert self.trie.root.count == 0


class TestBuildTrie:
    """Tests for build_trie"""

    def test_prepare_urls_drops_blanks_and_duplicates(self):
        """Test blank removal and first-seen deduplication"""
        urls = ["b", "", "a", "  ", "b", "\t", "a", "c"]
        assert prepare_urls(urls) == ["b", "a", "c"]

    def test_build_counts_accepted_and_rejected(self):
        """Test accounting of valid and malformed entries"""
        result = build_trie([
            "https://example.com/a",
            "https://example.com/a",
            "not-a-url",
            "",
            "https://example.com/b",
        ])

        assert result.accepted == 2
        assert result.rejected == 1
        assert result.root.children["scheme:https"].count == 2

    def test_dedup_is_exact_string_equality(self):
        """Test that near-duplicates are kept apart"""
        result = build_trie(["https://example.com/a", "https://example.com/a/"])
        a = result.root.children["scheme:https"].children["domain:example.com"].children["path:a"]

        assert result.accepted == 2
        assert a.urls == ["https://example.com/a", "https://example.com/a/"]
