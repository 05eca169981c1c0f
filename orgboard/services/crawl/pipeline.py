"""JSONL staging for extracted boards.

One record per line, named `<prefix>-<UTC timestamp>.jsonl`. Records that only
differ in their fetch time are written once, also across appends to an
existing file.
"""

from __future__ import annotations

import json
import os
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Set, Tuple

from .base import canonical_json, sha256_hexdigest


_VOLATILE_FIELDS = ("meta_fetched_at", "meta_content_hash")
_SLUG_RE = re.compile(r"[^0-9A-Za-z]+")


def slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text).strip("-").lower() or "record"


def content_hash(rec: Dict) -> str:
    stable = {k: v for k, v in rec.items() if k not in _VOLATILE_FIELDS}
    return sha256_hexdigest(canonical_json(stable))


def staging_path(out_dir: str, filename_prefix: str, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    return os.path.join(out_dir, f"{slugify(filename_prefix)}-{stamp}.jsonl")


def _key(rec: Dict) -> Tuple[str, str, str]:
    return (
        str(rec.get("meta_source_site") or ""),
        str(rec.get("meta_source_url") or ""),
        rec["meta_content_hash"],
    )


def _existing_keys(path: str) -> Set[Tuple[str, str, str]]:
    keys: Set[Tuple[str, str, str]] = set()
    if not os.path.isfile(path):
        return keys
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                rec = json.loads(line)
                rec.setdefault("meta_content_hash", content_hash(rec))
                keys.add(_key(rec))
    return keys


def write_jsonl(records: Iterable[Dict], out_dir: str, filename_prefix: str) -> str:
    """Append `records` to a timestamped JSONL file under `out_dir` and return its path.

    Each record gets a `meta_content_hash`; a record whose (site, url, hash)
    is already in the file is not written again.
    """
    os.makedirs(out_dir, exist_ok=True)
    path = staging_path(out_dir, filename_prefix)
    seen = _existing_keys(path)
    with open(path, "a", encoding="utf-8") as f:
        for rec in records:
            rec["meta_content_hash"] = rec.get("meta_content_hash") or content_hash(rec)
            key = _key(rec)
            if key in seen:
                continue
            seen.add(key)
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
    return path
