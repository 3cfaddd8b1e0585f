"""URL decomposition service"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from ada_url import URL
from ..core.config import settings

logger = logging.getLogger(__name__)


class UrlParseError(ValueError):
    """Raised when a string is not an absolute, well-formed URL"""
    pass


@dataclass(frozen=True)
class DecomposedUrl:
    """A URL split into the positional components used for pattern extraction"""
    original: str
    scheme: str
    host_labels: Tuple[str, ...]
    path_segments: Tuple[str, ...]


def decompose_url(raw: str, max_path_segments: Optional[int] = None) -> DecomposedUrl:
    """
    Decompose an absolute URL into scheme, host labels and path segments.

    Parsing follows the WHATWG URL Standard: the host is lower-cased (IPv6
    hosts keep their brackets), dot segments in the path are resolved and
    characters outside the path set are percent-encoded. Path segments are
    otherwise kept as written, without percent-decoding.

    Args:
        raw: URL string to decompose
        max_path_segments: Reject URLs with more path segments than this

    Returns:
        Decomposed URL

    Raises:
        UrlParseError: If the string is not an absolute, well-formed URL
    """
    if max_path_segments is None:
        max_path_segments = settings.max_path_segments

    try:
        parsed = URL(raw.strip())
    except ValueError as e:
        raise UrlParseError(f"Malformed URL {raw!r}: {e}") from e

    # Scheme-only URLs such as mailto: have no host to group by
    hostname = parsed.hostname
    if not hostname:
        raise UrlParseError(f"URL has no host: {raw!r}")

    path_segments = tuple(s for s in parsed.pathname.split('/') if s)
    if len(path_segments) > max_path_segments:
        raise UrlParseError(
            f"URL path has {len(path_segments)} segments, limit is {max_path_segments}"
        )

    return DecomposedUrl(
        original=raw,
        scheme=parsed.protocol.rstrip(':'),
        host_labels=tuple(hostname.split('.')),
        path_segments=path_segments
    )


def try_decompose_url(raw: str, max_path_segments: Optional[int] = None) -> Optional[DecomposedUrl]:
    """Decompose a URL, returning None instead of raising on malformed input"""
    try:
        return decompose_url(raw, max_path_segments)
    except UrlParseError as e:
        logger.debug(f"Dropping unparseable URL: {e}")
        return None
