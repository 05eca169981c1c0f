from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from orgboard.config import Settings

from ..board_service import BoardService
from .base import CrawlError, Spider
from .pipeline import write_jsonl


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgboard",
        description="Search a company by name and print its board as JSON",
    )
    parser.add_argument("query", help="Company name to search for")
    parser.add_argument("--base-url", help="Directory site origin (default: ORGBOARD_BASE_URL)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument(
        "--on-missing",
        choices=["abort", "skip"],
        help="Fail on a contact without name/title, or drop it",
    )
    parser.add_argument("--board-file", help="Parse a saved board page instead of searching")
    parser.add_argument("--out-dir", help="Also stage the board as a JSONL record here")
    parser.add_argument("--log-level", help="Logging level (default: ORGBOARD_LOG_LEVEL or WARNING)")
    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().override(
            base_url=args.base_url,
            timeout=args.timeout,
            on_missing_field=args.on_missing,
            log_level=args.log_level,
        )
    except ValueError as exc:
        # logging is not configured yet
        print(f"orgboard: configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = BoardService(settings=settings)
    try:
        if args.board_file:
            with open(args.board_file, "r", encoding="utf-8") as f:
                html = f.read()
            board = service.board_from_html(html, company_name=args.query.strip())
            source_url = args.board_file
        else:
            company = service.lookup_company(args.query)
            board = company.board
            source_url = company.url
    except (CrawlError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        logger.debug("lookup failed", exc_info=True)
        return 1

    print(board.model_dump_json())

    if args.out_dir:
        rec = service.to_record(args.query, board, source_url)
        path = write_jsonl(Spider.normalize_records([rec]), out_dir=args.out_dir, filename_prefix=f"boards-{args.query}")
        logger.info("staged board record at %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
