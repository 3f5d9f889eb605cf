import pytest

from theme_extraction.annotate import annotate_theme, annotate_themes
from theme_extraction.data_models import Category, DistortionType, Sentiment, ThemeScore


@pytest.mark.parametrize(
    "theme, distortion",
    [
        ("all my fault", DistortionType.PERSONALIZING),
        ("will never", DistortionType.FORTUNE_TELLING),
        ("i'm so stupid", DistortionType.LABELING),
        ("should call", DistortionType.SHOULD_STATEMENTS),
        ("disaster", DistortionType.CATASTROPHIZING),
        ("always messes up", DistortionType.ALL_OR_NOTHING),
        ("my sister", DistortionType.NONE),
    ],
)
def test_distortion_tags(theme, distortion):
    assert annotate_theme(theme).distortion_type == distortion


@pytest.mark.parametrize(
    "theme, category",
    [
        ("my sister", Category.PERSON),
        ("anxious", Category.EMOTION),
        ("should call", Category.ACTIVITY),
        ("will never", Category.COGNITION),
        ("painting", Category.ACTIVITY),
        ("blue sky", Category.GENERAL),
    ],
)
def test_category_tags(theme, category):
    assert annotate_theme(theme).category == category


@pytest.mark.parametrize(
    "theme, sentiment",
    [
        ("anxious", Sentiment.NEGATIVE),
        ("grateful", Sentiment.POSITIVE),
        ("i'm so stupid", Sentiment.NEGATIVE),
        ("my sister", Sentiment.NEUTRAL),
        ("happening", Sentiment.NEUTRAL),
        ("crypto", Sentiment.NEUTRAL),
        ("good but stressful", Sentiment.NEUTRAL),
    ],
)
def test_sentiment_tags(theme, sentiment):
    assert annotate_theme(theme).sentiment == sentiment


def test_negation_flag():
    assert annotate_theme("will never").has_negation
    assert annotate_theme("can't handle it").has_negation
    assert annotate_theme("not good enough").has_negation
    assert not annotate_theme("my sister").has_negation


def test_annotate_themes_keeps_scores():
    themes = [ThemeScore("my sister", 2.5, weight=8.0, frequency=2)]
    out = annotate_themes(themes)
    assert out[0].score == 2.5
    assert out[0].frequency == 2
    assert out[0].category == Category.PERSON
    assert out[0].has_negation is False
    assert themes[0].category is None


def test_to_dict_uses_camel_case_and_omits_unset():
    t = ThemeScore(
        "will never", 1.23456789,
        distortion_type=DistortionType.FORTUNE_TELLING,
        has_negation=True,
        frequency=2,
    )
    assert t.to_dict() == {
        "theme": "will never",
        "score": 1.234568,
        "distortionType": "fortuneTelling",
        "hasNegation": True,
        "frequency": 2,
    }
