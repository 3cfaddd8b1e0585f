"""Command-line interface for URL pattern analysis"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from .core.config import settings
from .models.pattern import Pattern
from .services.pattern_analyzer import get_url_pattern_analyzer
from .services.sitemap_fetcher import SitemapFetcher

INDENT_MARKER = '└─ '


def read_urls(source: str, stdin: TextIO = sys.stdin) -> List[str]:
    """Read one URL per line from a file, or from stdin when source is '-'"""
    if source == '-':
        lines = stdin.read().splitlines()
    else:
        with open(source, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    return [line for line in lines if line.strip()]


def render_patterns(patterns: Sequence[Pattern], show_urls: int = 0) -> str:
    """
    Render patterns as an indented table.

    Args:
        patterns: Ranked patterns
        show_urls: URLs listed beneath each pattern (0 for none)

    Returns:
        Table text
    """
    if not patterns:
        return "No patterns found."

    width = max(len(str(p.count)) for p in patterns)
    lines = [f"{len(patterns)} pattern(s)", ""]

    for p in patterns:
        indent = ('  ' * p.depth + INDENT_MARKER) if p.depth else ''
        lines.append(f"{p.count:>{width}}  {indent}{p.pattern}")

        if show_urls > 0:
            pad = ' ' * (width + 2) + '  ' * (p.depth + 1)
            for url in p.urls[:show_urls]:
                lines.append(f"{pad}{url}")
            if p.count > show_urls:
                lines.append(f"{pad}...and {p.count - show_urls} more")

    return '\n'.join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='url-patterns',
        description='Group URLs into generalized patterns.'
    )
    parser.add_argument(
        'source',
        help="File with one URL per line ('-' for stdin), or a domain/sitemap URL with --sitemap"
    )
    parser.add_argument(
        '--sitemap',
        action='store_true',
        help='Treat SOURCE as a domain or sitemap URL and collect URLs from it'
    )
    parser.add_argument(
        '--show-urls',
        type=int,
        default=0,
        metavar='N',
        help='List the first N URLs under each pattern'
    )
    parser.add_argument('--json', action='store_true', help='Print patterns as JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    if args.sitemap:
        try:
            result = asyncio.run(SitemapFetcher().fetch_urls(args.source))
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        for failure in result.errors:
            print(
                f"WARNING: {failure.url}: [{failure.error.kind.value}] {failure.error.message}",
                file=sys.stderr
            )
        if result.truncated:
            print(f"WARNING: stopped after {len(result.urls)} URLs", file=sys.stderr)
        urls = result.urls
    else:
        try:
            urls = read_urls(args.source)
        except OSError as e:
            print(f"ERROR: cannot read {args.source}: {e}", file=sys.stderr)
            return 1

    patterns = get_url_pattern_analyzer().analyze(urls)

    if args.json:
        print(json.dumps([p.model_dump() for p in patterns], ensure_ascii=False, indent=2))
    else:
        print(render_patterns(patterns, args.show_urls))

    return 0 if patterns else 1


if __name__ == "__main__":
    raise SystemExit(main())
