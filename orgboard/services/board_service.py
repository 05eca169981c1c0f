"""Search a company by name and extract its board.

Usage:
    from orgboard.services.board_service import BoardService
    board = BoardService().lookup("Toyota")

The sequence is strictly serial: search page, first candidate, board page.
The first failure aborts the lookup; nothing is retried or cached.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Protocol

from orgboard.config import Settings
from orgboard.models.board import Board, Company

from .crawl.base import BoardRecord, NoResultsError, SourceMeta, now_iso
from .crawl.fetcher import HttpFetcher
from .crawl.spiders.board_spider import BoardSpider
from .crawl.spiders.search_spider import CompanySearchSpider


logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, url: str, params: Optional[Mapping[str, str]] = None) -> str:
        ...


class BoardService:
    def __init__(self, fetcher: Optional[Fetcher] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings.from_env()
        self.fetcher = fetcher or HttpFetcher(timeout=self.settings.timeout, headers=self.settings.headers)
        self.search_spider = CompanySearchSpider(base_url=self.settings.base_url)
        self.board_spider = BoardSpider(on_missing_field=self.settings.on_missing_field)

    def search(self, query: str) -> List[Company]:
        q = _clean_query(query)
        html = self.fetcher.fetch(self.search_spider.search_url(), params={"q": q})
        candidates = self.search_spider.parse_html(html, q)
        return [Company(name=name, url=url) for name, url in candidates]

    def fetch_board(self, company: Company) -> Board:
        html = self.fetcher.fetch(company.url)
        board = self.board_spider.parse_html(html)
        board.company_name = company.name
        company.board = board
        return board

    def lookup_company(self, query: str) -> Company:
        """First search candidate for `query`, with its board attached."""
        companies = self.search(query)
        if not companies:
            raise NoResultsError(_clean_query(query))
        first = companies[0]
        if len(companies) > 1:
            logger.info("%d candidates for %r, using %r", len(companies), query, first.name)
        self.fetch_board(first)
        return first

    def lookup(self, query: str) -> Board:
        return self.lookup_company(query).board

    def board_from_html(self, html: str, company_name: str) -> Board:
        """Extract a locally saved board page, naming it after `company_name`."""
        board = self.board_spider.parse_html(html)
        board.company_name = company_name
        return board

    def to_record(self, query: str, board: Board, source_url: Optional[str]) -> BoardRecord:
        meta = SourceMeta(
            source_site="theofficialboard",
            source_url=source_url,
            fetched_at=now_iso(),
            parser=self.board_spider.name,
        )
        return BoardRecord(query=query, board=board.model_dump(), meta=meta)


def _clean_query(query: str) -> str:
    q = (query or "").strip()
    if not q:
        raise ValueError("Search query must not be empty")
    return q
