"""
Command-line entry point: run the extraction pipeline over saved HTML.

Usage:
    python -m scraper.main search page.html --page 2
    python -m scraper.main details video.html --events
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from .config import ScraperConfig
from .observer import RecordingObserver, log_observer
from .pipeline import details_page, search_page


def _read_html(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    return Path(path).read_text(encoding='utf-8', errors='replace')


def run_search(args, config: ScraperConfig, observer) -> dict:
    page = search_page(_read_html(args.file), requested_page=args.page, config=config, observer=observer)
    return asdict(page)


def run_details(args, config: ScraperConfig, observer) -> dict:
    page = details_page(_read_html(args.file), config=config, observer=observer)
    if page is None:
        return {'error': 'Video details not found'}
    return asdict(page)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Extract video data from saved HTML pages')
    parser.add_argument('--cdn-host', default=ScraperConfig.cdn_host, help='CDN host whose URLs get escaped')
    parser.add_argument('--events', action='store_true', help='Include extraction events in the output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log extraction events to stderr')

    subparsers = parser.add_subparsers(dest='command', required=True)

    search = subparsers.add_parser('search', help='Extract a search results page')
    search.add_argument('file', help="HTML file, or '-' for stdin")
    search.add_argument('--page', type=int, default=1, help='Page number the HTML was fetched for')
    search.set_defaults(handler=run_search)

    details = subparsers.add_parser('details', help='Extract a video detail page')
    details.add_argument('file', help="HTML file, or '-' for stdin")
    details.set_defaults(handler=run_details)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        stream=sys.stderr,
    )

    config = ScraperConfig(cdn_host=args.cdn_host)
    recorder = RecordingObserver()

    def observer(event, details):
        recorder(event, details)
        log_observer(event, details)

    try:
        output = args.handler(args, config, observer)
    except OSError as e:
        print(f"Could not read {args.file}: {e}", file=sys.stderr)
        return 2

    if args.events:
        output['events'] = [{'event': name, **details} for name, details in recorder.events]

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    return 1 if 'error' in output else 0


if __name__ == '__main__':
    sys.exit(main())
