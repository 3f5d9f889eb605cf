import pytest

from theme_extraction.data_models import ThemeScore
from theme_extraction.postfilter import (
    drop_generic_terms,
    drop_noise_themes,
    is_noise_theme,
    suppress_subsumed,
)


def _t(theme, score=1.0, freq=1):
    return ThemeScore(theme=theme, score=score, frequency=freq)


@pytest.mark.parametrize("theme", ["", "ab", "2024", "the", "of the", "not really"])
def test_noise_themes(theme):
    assert is_noise_theme(theme)


def test_real_phrases_are_not_noise():
    assert not is_noise_theme("not good enough")
    assert not is_noise_theme("my sister")


def test_drop_noise_keeps_order():
    themes = [_t("work stress"), _t("the"), _t("2024"), _t("hiking")]
    assert [t.theme for t in drop_noise_themes(themes)] == ["work stress", "hiking"]


def test_generic_single_words_dropped_but_phrases_kept():
    themes = [_t("thing"), _t("stuff"), _t("work thing"), _t("deadline")]
    assert [t.theme for t in drop_generic_terms(themes)] == ["work thing", "deadline"]


def test_shorter_theme_folds_into_longer_one():
    themes = [_t("my sister", score=2.0, freq=3), _t("sister", score=1.5, freq=3)]
    assert [t.theme for t in suppress_subsumed(themes)] == ["my sister"]


def test_independently_frequent_shorter_theme_survives():
    themes = [_t("sister wedding", score=2.0, freq=1), _t("sister", score=1.5, freq=5)]
    out = suppress_subsumed(themes)
    assert [t.theme for t in out] == ["sister wedding", "sister"]


def test_containment_is_word_aligned():
    themes = [_t("start over", score=3.0, freq=4), _t("art", score=1.0, freq=1)]
    assert len(suppress_subsumed(themes)) == 2


def test_suppression_is_idempotent():
    themes = [
        _t("my sister's wedding", score=3.0, freq=2),
        _t("sister's wedding", score=2.5, freq=2),
        _t("wedding", score=1.0, freq=6),
        _t("work deadline", score=2.0, freq=3),
    ]
    once = suppress_subsumed(themes)
    assert [t.theme for t in once] == ["my sister's wedding", "wedding", "work deadline"]
    assert suppress_subsumed(once) == once


def test_suppression_ratios_are_configurable():
    themes = [_t("my sister", score=2.0, freq=2), _t("sister", score=1.5, freq=3)]
    assert [t.theme for t in suppress_subsumed(themes)] == ["my sister", "sister"]
    relaxed = suppress_subsumed(themes, freq_ratio=0.5, score_ratio=0.5)
    assert [t.theme for t in relaxed] == ["my sister"]
