"""Board page spider: turns a company's board page into a `Board`.

Two passes run over the `div.board` container:

1. Flat board members: every contact block in the board columns
   (column > list > item > contact).
2. Branch rows: one manager per row (first organizational level) with the
   contacts of the second organizational level as direct reports.

Every contact carries a name and a title element. With the default `abort`
policy a missing one fails the whole extraction with `ExtractionError`; with
`skip` the contact (or, for a branch parent, the whole row) is dropped.

Selection is driven by `BOARD_LAYOUT`, so a markup change on the source site
is a table edit. Overrides can also be passed per spider instance.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from selectolax.lexbor import LexborHTMLParser, LexborNode

from orgboard.models.board import Board, Node

from ..base import (
    ExtractionError,
    MissingFieldPolicy,
    SelectorRule,
    Spider,
    layout_index,
)


logger = logging.getLogger(__name__)

BOARD_LAYOUT = (
    SelectorRule("document", "div.board", "board"),
    SelectorRule("board", "div.board-column > ul.board-block > li > div", "board_contact"),
    SelectorRule("board", "div.board-branch > div.board-branch-row", "branch_row"),
    SelectorRule("branch_row", "div.ocN1 > ul.board-block > li > div", "parent_contact"),
    SelectorRule("branch_row", "div.ocN2 > div > ul.board-block > li > div", "child_contact"),
    SelectorRule("contact", "div.oc-name", "name"),
    SelectorRule("contact", "div.oc-title", "title"),
)


def first_text(node: LexborNode) -> Optional[str]:
    """First non-blank text run inside `node`, trimmed. None when there is none.

    Only descendants of `node` are visited, in document order.
    """
    for child in node.iter(include_text=True):
        if child.is_text_node:
            text = (child.text() or "").strip()
        else:
            text = first_text(child)
        if text:
            return text
    return None


def select_first_text(node: LexborNode, selector: str) -> Optional[str]:
    """Text of the first `selector` match under `node`.

    Returns None when nothing matches and "" when the match holds no text.
    """
    found = node.css_first(selector)
    if found is None:
        return None
    return first_text(found) or ""


class _SkipContact(Exception):
    pass


class BoardSpider(Spider):
    name = "board_page"

    def __init__(
        self,
        *,
        on_missing_field: Union[MissingFieldPolicy, str] = MissingFieldPolicy.ABORT,
        layout: Optional[Dict[str, str]] = None,
    ) -> None:
        """`layout` maps a role of BOARD_LAYOUT (e.g. "name") to a replacement selector."""
        self.on_missing_field = MissingFieldPolicy.parse(on_missing_field)
        self.selectors = {role: rule.child for role, rule in layout_index(BOARD_LAYOUT).items()}
        for role, sel in (layout or {}).items():
            if role not in self.selectors:
                raise ValueError(f"Unknown layout role: {role}")
            self.selectors[role] = sel

    # --- Public API ---
    def parse_html(self, html: str) -> Board:
        return self.extract_board(LexborHTMLParser(html))

    def extract_board(self, doc: Union[LexborHTMLParser, LexborNode]) -> Board:
        board_el = doc.css_first(self.selectors["board"])
        if board_el is None:
            raise ExtractionError("board", self.selectors["board"])
        boards = self._board_members(board_el)
        members = self._branch_members(board_el)
        logger.info("board page: %d board member(s), %d branch row(s)", len(boards), len(members))
        return Board(company_name="", boards=boards, members=members, company_tree=[])

    # --- Passes ---
    def _board_members(self, board_el: LexborNode) -> List[Node]:
        out: List[Node] = []
        for contact in board_el.css(self.selectors["board_contact"]):
            try:
                out.append(self._contact(contact))
            except _SkipContact:
                continue
        return out

    def _branch_members(self, board_el: LexborNode) -> List[Node]:
        out: List[Node] = []
        for row in board_el.css(self.selectors["branch_row"]):
            parent = row.css_first(self.selectors["parent_contact"])
            if parent is None:
                if self.on_missing_field is MissingFieldPolicy.ABORT:
                    raise ExtractionError("parent_contact", self.selectors["parent_contact"])
                logger.warning("branch row without a parent contact, skipped")
                continue
            try:
                node = self._contact(parent)
            except _SkipContact:
                logger.warning("branch row parent unreadable, row skipped")
                continue
            for child in row.css(self.selectors["child_contact"]):
                try:
                    node.children.append(self._contact(child))
                except _SkipContact:
                    continue
            out.append(node)
        return out

    def _contact(self, contact: LexborNode) -> Node:
        name = select_first_text(contact, self.selectors["name"])
        title = select_first_text(contact, self.selectors["title"])
        missing = None
        if not name:
            missing = "name"
        elif title is None:
            missing = "title"
        if missing is not None:
            if self.on_missing_field is MissingFieldPolicy.ABORT:
                raise ExtractionError(missing, self.selectors[missing])
            logger.warning("contact without %s skipped (name=%r)", missing, name)
            raise _SkipContact(missing)
        return Node(name=name, title=title, children=[])
