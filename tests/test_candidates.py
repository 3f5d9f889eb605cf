import pytest

from conftest import FakeNlp, make_doc
from theme_extraction.candidates import (
    extract_entity_candidates,
    extract_ngram_candidates,
    extract_noun_phrase_candidates,
    extract_pattern_candidates,
    extract_relation_candidates,
    generate_candidates,
    truncate_entries,
)


def test_cognitive_patterns_outweigh_ngrams():
    out = extract_pattern_candidates("I'm so stupid. It's all my fault.")
    assert out["i'm so stupid"] == 6.0
    assert out["all my fault"] == 6.0


@pytest.mark.parametrize(
    "text, phrase",
    [
        ("I'm not good enough", "not good enough"),
        ("I will never be happy", "will never"),
        ("I should call her", "should call"),
        ("I can't handle it anymore", "can't handle it"),
        ("He always messes up", "always messes up"),
        ("The party was a disaster", "disaster"),
    ],
)
def test_pattern_table_matches(text, phrase):
    out = extract_pattern_candidates(text)
    assert phrase in out
    assert out[phrase] >= 5.0


def test_relation_possessives():
    out = extract_relation_candidates("My sister called. Her boss yelled at my sister's friend.")
    assert out["my sister"] == 8.0
    assert out["her boss"] == 4.0


def test_ngram_weights_grow_with_length():
    out = extract_ngram_candidates("Deadline pressure keeps building")
    assert out["deadline"] == 0.5
    assert out["deadline pressure"] == 1.0
    assert out["deadline pressure keeps"] == 2.0
    assert out["deadline pressure keeps building"] == 3.0


def test_ngrams_do_not_bridge_stopwords_and_strip_possessive_unigrams():
    out = extract_ngram_candidates("I feel anxious about my sister's wedding")
    assert out["feel anxious"] == 1.0
    assert out["sister's wedding"] == 1.0
    assert out["sister"] == 0.5
    assert "anxious sister's" not in out
    assert "about" not in out
    assert "sister's" not in out


def test_stopword_only_text_has_no_candidates():
    assert generate_candidates(["the a an"]) == {}
    assert generate_candidates(["", "   "]) == {}


def test_truncation_is_proportional():
    long_text = " ".join(f"w{i}" for i in range(30))
    short_text = " ".join(f"s{i}" for i in range(10))
    out = truncate_entries([long_text, short_text], 20)
    assert len(out[0].split()) == 15
    assert len(out[1].split()) == 5
    assert out[0].split()[0] == "w0"


def test_truncation_keeps_small_inputs_and_one_token_minimum():
    assert truncate_entries(["a b", "c"], 10) == ["a b", "c"]
    big = " ".join(["x"] * 1000)
    out = truncate_entries([big, "tiny"], 10)
    assert out[1] == "tiny"


def _friend_doc():
    return make_doc(
        [("My", "PRON"), ("friend", "NOUN"), ("Sarah", "PROPN"), ("visited", "VERB"), ("Paris", "PROPN")],
        ents=[(2, 3, "PERSON"), (4, 5, "GPE")],
        chunks=[(0, 3), (4, 5)],
    )


def test_entity_possessive_is_not_double_counted():
    out = extract_entity_candidates(_friend_doc())
    assert out["my friend sarah"] == 5.0
    assert out["paris"] == 3.0
    assert "sarah" not in out


def test_noun_phrases_strip_leading_stopwords():
    doc = make_doc(
        [("my", "PRON"), ("sister", "NOUN"), ("'s", "PART"), ("wedding", "NOUN"), ("plans", "NOUN")],
        chunks=[(0, 5)],
        no_space_after=(1,),
    )
    out = extract_noun_phrase_candidates(doc)
    assert out == {"sister's wedding plans": 4.0}


def test_single_proper_noun_chunk():
    doc = make_doc([("Paris", "PROPN")], chunks=[(0, 1)])
    assert extract_noun_phrase_candidates(doc) == {"paris": 3.0}
    doc = make_doc([("coffee", "NOUN")], chunks=[(0, 1)])
    assert extract_noun_phrase_candidates(doc) == {}


def test_generate_candidates_adds_weights_across_strategies():
    text = "My friend Sarah visited Paris"
    weights = generate_candidates([text], nlp=FakeNlp({text: _friend_doc()}))
    # unigram 0.5 + entity 3.0 + proper-noun chunk 3.0
    assert weights["paris"] == pytest.approx(6.5)
    # the person inside the possessive phrase only keeps its n-gram weight
    assert weights["sarah"] == pytest.approx(0.5)
    assert weights["my friend sarah"] == pytest.approx(5.0)


def test_generate_candidates_without_nlp_skips_parser_strategies():
    text = "My friend Sarah visited Paris"
    weights = generate_candidates([text])
    assert "my friend sarah" not in weights
    assert weights["paris"] == pytest.approx(0.5)
    assert weights["friend"] == pytest.approx(0.5)
    assert weights["my friend"] == pytest.approx(4.0)


class _CrashingNlp:
    def pipe(self, texts):
        yield _friend_doc()
        raise ValueError("bad model config")


def test_parser_failure_drops_partial_spacy_weights(capsys):
    text = "My friend Sarah visited Paris"
    weights = generate_candidates([text], nlp=_CrashingNlp())
    assert weights == generate_candidates([text])
    assert "[nlp] parser failed" in capsys.readouterr().err
