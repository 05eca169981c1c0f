from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional


def canonical_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def sha256_hexdigest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


# --- Errors ---

class CrawlError(Exception):
    """Base class for every failure the crawler surfaces to its callers."""


class TransportError(CrawlError):
    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to fetch {url}{detail}")


class NoResultsError(CrawlError):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No companies found for query {query!r}")


class ExtractionError(CrawlError):
    def __init__(self, role: str, selector: str) -> None:
        self.role = role
        self.selector = selector
        super().__init__(f"Missing {role} element (selector {selector!r})")


class PatternMatchError(CrawlError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"No quoted path found in {value!r}")


class MissingFieldPolicy(str, Enum):
    """What an extractor does when a contact lacks its name or title element."""

    ABORT = "abort"
    SKIP = "skip"

    @classmethod
    def parse(cls, value: Any) -> "MissingFieldPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"on_missing_field must be one of: {allowed} (got {value!r})") from None


# --- Layout tables ---

class SelectorRule(NamedTuple):
    """One step of a page layout: inside `parent`, `child` selects the element playing `role`."""

    parent: str
    child: str
    role: str


def layout_index(rules: Iterable[SelectorRule]) -> Dict[str, SelectorRule]:
    out: Dict[str, SelectorRule] = {}
    for rule in rules:
        if rule.role in out:
            raise ValueError(f"Duplicate layout role: {rule.role}")
        out[rule.role] = rule
    return out


# --- Records ---

@dataclass
class SourceMeta:
    source_site: str
    source_url: Optional[str]
    fetched_at: str  # ISO8601
    parser: str
    content_hash: Optional[str] = None


@dataclass
class BoardRecord:
    query: str
    board: Dict[str, Any]
    meta: SourceMeta

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        # Flatten meta for easier downstream processing
        meta = d.pop("meta", {})
        for k, v in (meta or {}).items():
            d[f"meta_{k}"] = v
        return d


class Spider:
    """Minimal spider contract.

    Subclasses parse one kind of page. `parse_html` works on markup already in
    hand; `fetch_*` helpers go through an injected fetcher.
    """

    name: str = "base"

    def parse_html(self, html: str, *args, **kwargs) -> Any:
        raise NotImplementedError

    @staticmethod
    def normalize_records(items: Iterable[Any]) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for x in items:
            if hasattr(x, "to_dict"):
                out.append(x.to_dict())
            elif isinstance(x, dict):
                out.append(x)
            else:
                raise TypeError(f"Unsupported record type: {type(x)}")
        return out
