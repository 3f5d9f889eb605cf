"""
Advisory CBT-style tags for selected themes. Tags never affect scoring.
"""
from dataclasses import replace
from typing import List, NamedTuple, Sequence

from .constants import (
    CATEGORY_RULES,
    DISTORTION_RULES,
    NEGATION_RE,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
)
from .data_models import Category, DistortionType, Sentiment, ThemeScore
from .text_utils import normalize_phrase


class ThemeTags(NamedTuple):
    category: Category
    distortion_type: DistortionType
    sentiment: Sentiment
    has_negation: bool


def classify_category(theme: str) -> Category:
    for category, pattern in CATEGORY_RULES:
        if pattern.search(theme):
            return category
    return Category.GENERAL


def classify_distortion(theme: str) -> DistortionType:
    for distortion, pattern in DISTORTION_RULES:
        if pattern.search(theme):
            return distortion
    return DistortionType.NONE


def classify_sentiment(theme: str) -> Sentiment:
    pos = bool(POSITIVE_WORDS.search(theme))
    neg = bool(NEGATIVE_WORDS.search(theme))
    if pos and not neg:
        return Sentiment.POSITIVE
    if neg and not pos:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def annotate_theme(theme: str) -> ThemeTags:
    t = normalize_phrase(theme)
    return ThemeTags(
        category=classify_category(t),
        distortion_type=classify_distortion(t),
        sentiment=classify_sentiment(t),
        has_negation=bool(NEGATION_RE.search(t)),
    )


def annotate_themes(themes: Sequence[ThemeScore]) -> List[ThemeScore]:
    out = []
    for t in themes:
        tags = annotate_theme(t.theme)
        out.append(replace(t, **tags._asdict()))
    return out
