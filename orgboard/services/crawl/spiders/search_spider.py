"""Company search results spider.

Parses the directory's search page into (name, board URL) candidates. Entries
are matched purely by layout; anything that does not look like a result
(decorative blocks, entries without a name or without a quoted path in their
`onclick`) is skipped rather than reported.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin
from typing import List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from ..base import PatternMatchError, SelectorRule, Spider, layout_index


logger = logging.getLogger(__name__)

SEARCH_PATH = "/company/search"

SEARCH_LAYOUT = (
    SelectorRule("document", "#results > ul > li > div > div > div.companyTitle", "entry"),
    SelectorRule("entry", "span.nom_entr", "name"),
)

ACTION_ATTR = "onclick"
_QUOTED_PATH = re.compile(r"'(?P<url>[^']*)'")


def extract_quoted_path(value: Optional[str]) -> str:
    """Return the first single-quoted substring of an action attribute."""
    m = _QUOTED_PATH.search(value or "")
    if not m:
        raise PatternMatchError(value or "")
    return m.group("url")


class CompanySearchSpider(Spider):
    name = "company_search"

    def __init__(
        self,
        *,
        base_url: str = "https://www.theofficialboard.jp",
        entry_sel: Optional[str] = None,
        name_sel: Optional[str] = None,
        action_attr: str = ACTION_ATTR,
    ) -> None:
        rules = layout_index(SEARCH_LAYOUT)
        self.base_url = base_url.rstrip("/")
        self.entry_sel = entry_sel or rules["entry"].child
        self.name_sel = name_sel or rules["name"].child
        self.action_attr = action_attr

    def search_url(self) -> str:
        return self.base_url + SEARCH_PATH

    def parse_html(self, html: Union[str, BeautifulSoup], query: str = "") -> List[Tuple[str, str]]:
        soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
        return self.extract_candidates(soup, query)

    def extract_candidates(self, soup: BeautifulSoup, query: str = "") -> List[Tuple[str, str]]:
        """Candidates in document order. The query is only used for log context."""
        out: List[Tuple[str, str]] = []
        for entry in soup.select(self.entry_sel):
            name_el = entry.select_one(self.name_sel)
            name = next(name_el.stripped_strings, None) if name_el else None
            if not name:
                logger.debug("search %r: entry without %s, skipped", query, self.name_sel)
                continue
            try:
                path = extract_quoted_path(entry.get(self.action_attr))
            except PatternMatchError as exc:
                logger.debug("search %r: %s, skipped %r", query, exc, name)
                continue
            out.append((name, urljoin(self.base_url + "/", path)))
        logger.info("search %r: %d candidate(s)", query, len(out))
        return out
