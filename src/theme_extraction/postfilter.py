"""
Cleanup passes applied to the selected themes, in order:
noise -> generic single words -> substring suppression.
"""
from typing import List, Sequence

from . import config
from .constants import FUNCTION_WORDS, GENERIC_TERMS
from .data_models import ThemeScore
from .text_utils import contains_phrase, is_numeric


def is_noise_theme(theme: str) -> bool:
    t = theme.strip()
    if len(t) <= 2 or is_numeric(t):
        return True
    return all(w in FUNCTION_WORDS for w in t.split())


def drop_noise_themes(themes: Sequence[ThemeScore]) -> List[ThemeScore]:
    """Drop empty, very short, purely numeric and pure-stopword themes."""
    return [t for t in themes if not is_noise_theme(t.theme)]


def drop_generic_terms(themes: Sequence[ThemeScore]) -> List[ThemeScore]:
    """Drop single-word generic terms ("thing", "stuff"); phrases containing them stay."""
    out = []
    for t in themes:
        words = t.theme.split()
        if len(words) == 1 and words[0] in GENERIC_TERMS:
            continue
        out.append(t)
    return out


def suppress_subsumed(
    themes: Sequence[ThemeScore],
    freq_ratio: float = config.DEFAULT_SUBSUME_FREQ_RATIO,
    score_ratio: float = config.DEFAULT_SUBSUME_SCORE_RATIO,
) -> List[ThemeScore]:
    """
    Drop a theme when a longer theme in the list contains it (word-aligned) and
    the longer one has at least freq_ratio of its frequency and score_ratio of
    its score: "sister" folds into "my sister" unless "sister" is much more common.

    Every check runs against the input list, so applying the pass twice gives
    the same result as applying it once.
    """
    out = []
    for short in themes:
        short_freq = short.frequency or 0
        subsumed = False
        for long in themes:
            if len(long.theme) <= len(short.theme) or not contains_phrase(long.theme, short.theme):
                continue
            if (long.frequency or 0) >= freq_ratio * short_freq and long.score >= score_ratio * short.score:
                subsumed = True
                break
        if not subsumed:
            out.append(short)
    return out
