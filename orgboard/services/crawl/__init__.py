"""Board crawling subsystem.

Structure:
- base.py: errors, layout tables, record types and utilities
- fetcher.py: blocking httpx page fetcher
- spiders/: search results page and board page parsers
- pipeline.py: dedupe + JSONL staging writer
- runner.py: CLI entrypoint (`orgboard QUERY`)

Fetching uses httpx; the board page is parsed with selectolax and the search
page with BeautifulSoup.
"""

__all__ = [
    "base",
    "fetcher",
    "pipeline",
]
