"""
Entry loading, date parsing and lookback-window filtering.
"""
import json
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from .data_models import Entry

_iso_date_prefix_re = re.compile(r"^(\d{4}-\d{2}-\d{2})")

EntryLike = Union[Entry, Mapping[str, Any]]


def parse_entry_date(value: Any) -> Optional[date]:
    """
    Accept date, datetime, 'YYYY-MM-DD' or a full ISO timestamp (its date part is used).
    Returns None for anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    m = _iso_date_prefix_re.match(value.strip())
    if not m:
        return None
    try:
        return datetime.strptime(m.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def coerce_entries(entries: Iterable[EntryLike]) -> List[Entry]:
    """
    Turn Entry objects or {text, date} mappings into Entry objects.
    Entries without text or without a parseable date are dropped silently.
    """
    out: List[Entry] = []
    for e in entries or []:
        if isinstance(e, Entry):
            text, raw_date = e.text, e.date
        elif isinstance(e, Mapping):
            text, raw_date = e.get("text"), e.get("date")
        else:
            continue
        if not isinstance(text, str) or not text.strip():
            continue
        d = parse_entry_date(raw_date)
        if d is None:
            continue
        out.append(Entry(text=text, date=d))
    return out


def filter_recent_entries(
    entries: Iterable[EntryLike],
    days_ago: int,
    today: Optional[date] = None,
) -> List[Entry]:
    """
    Keep entries dated on or after today - days_ago (today defaults to the UTC date).
    Order is preserved.
    """
    if days_ago < 0:
        raise ValueError(f"days_ago must be >= 0, got {days_ago}")
    cutoff = (today or utc_today()) - timedelta(days=days_ago)
    return [e for e in coerce_entries(entries) if e.date >= cutoff]


def load_entries(path: str) -> List[dict]:
    """
    Read entries from a JSON array file or a JSONL file of {text, date} objects.
    A JSON object with an "entries" list is accepted too.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = f.read()
    stripped = raw.lstrip()
    if stripped.startswith("[") or stripped.startswith("{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, list):
            return [d for d in data if isinstance(d, dict)]
        if isinstance(data, dict) and "entries" in data:
            items = data.get("entries") or []
            return [d for d in items if isinstance(d, dict)]
        if isinstance(data, dict):
            return [data]
    out: List[dict] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue
        rec = json.loads(line)
        if isinstance(rec, dict):
            out.append(rec)
    return out
