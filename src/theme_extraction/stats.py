"""
Per-candidate statistics: frequency, entry coverage and recency-decayed weight.
"""
import math
from datetime import datetime, time, timezone
from typing import Dict, Iterable, List, Optional

from . import config
from .data_models import Entry, ThemeStats
from .text_utils import count_occurrences, normalize_phrase


def entry_timestamp(entry: Entry) -> datetime:
    """Entries carry calendar dates; they are placed at midnight UTC."""
    return datetime.combine(entry.date, time.min, tzinfo=timezone.utc)


def recency_weight(entry: Entry, now: datetime, tau_days: float) -> float:
    """
    w = exp(-max(0, age_seconds) / (tau_days * 86400)).
    """
    age = (now - entry_timestamp(entry)).total_seconds()
    return math.exp(-max(0.0, age) / (max(tau_days, 1e-6) * 86400.0))


def aggregate_stats(
    candidates: Iterable[str],
    entries: List[Entry],
    tau_days: float = config.DEFAULT_DECAY_TAU_DAYS,
    now: Optional[datetime] = None,
    min_chars: int = config.DEFAULT_MIN_THEME_CHARS,
) -> Dict[str, ThemeStats]:
    """
    Single pass over entries; every candidate is tested against each entry's
    normalized text. freq counts occurrences, entries holds the indices of
    entries containing the phrase, recency_weighted sums the entry weights.

    Candidates never seen (freq < 1) or shorter than min_chars are pruned.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    stats: Dict[str, ThemeStats] = {c: ThemeStats(theme=c) for c in candidates if c}
    if not stats or not entries:
        return {}

    for idx, entry in enumerate(entries):
        norm = normalize_phrase(entry.text)
        if not norm:
            continue
        w = recency_weight(entry, now, tau_days)
        for theme, st in stats.items():
            hits = count_occurrences(theme, norm)
            if hits <= 0:
                continue
            st.freq += hits
            st.entries.add(idx)
            st.recency_weighted += w

    return {t: st for t, st in stats.items() if st.freq >= 1 and len(t) >= min_chars}
