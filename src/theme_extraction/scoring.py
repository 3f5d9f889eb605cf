"""
Significance scoring for theme candidates.
"""
import math
from typing import List, Mapping, Optional

from . import config
from .data_models import ThemeScore, ThemeStats
from .text_utils import word_count


def length_bonus(theme: str) -> float:
    """ln(words + 1) + 1: rewards specific multi-word phrases over single words."""
    return math.log(word_count(theme) + 1) + 1.0


def _norm(value: float, max_value: float) -> float:
    return (value / max_value) if max_value > 0 else 0.0


def score_themes(
    stats: Mapping[str, ThemeStats],
    weights: Optional[Mapping[str, float]] = None,
) -> List[ThemeScore]:
    """
    score = (0.3 * freq_norm + 0.4 * coverage_norm + 0.3 * recency_norm) * length_bonus

    Each statistic is normalized by its maximum across all surviving candidates.
    Returns ThemeScore objects sorted by score desc, then generation weight desc,
    then phrase, so equal inputs always produce the same order.
    """
    if not stats:
        return []
    weights = weights or {}
    max_freq = max(st.freq for st in stats.values())
    max_cov = max(len(st.entries) for st in stats.values())
    max_rec = max(st.recency_weighted for st in stats.values())

    scored: List[ThemeScore] = []
    for theme, st in stats.items():
        base = (
            config.SCORE_FREQ_WEIGHT * _norm(st.freq, max_freq)
            + config.SCORE_COVERAGE_WEIGHT * _norm(len(st.entries), max_cov)
            + config.SCORE_RECENCY_WEIGHT * _norm(st.recency_weighted, max_rec)
        )
        scored.append(
            ThemeScore(
                theme=theme,
                score=base * length_bonus(theme),
                weight=float(weights.get(theme, 0.0)),
                frequency=st.freq,
                recency=st.recency_weighted,
                coverage=len(st.entries),
            )
        )
    scored.sort(key=lambda s: (-s.score, -s.weight, s.theme))
    return scored
