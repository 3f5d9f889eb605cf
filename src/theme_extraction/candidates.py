"""
Candidate phrase generation from journal text.

Four strategies add into one weight map keyed by normalized phrase:
  - cognitive patterns and "my <relation>" phrases (regex, always on)
  - named entities and contextual possessives ("my friend sarah"), via spaCy
  - noun chunks with two or more content words, via spaCy
  - 1..4-grams over the stopword-filtered token stream
A phrase found by several strategies accumulates all of their weights.
"""
import sys
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from . import config
from .constants import (
    COGNITIVE_PATTERNS,
    ENTITY_LABELS,
    FUNCTION_WORDS,
    POSSESSIVE_PRONOUNS,
    POSSESSIVE_RELATION_RE,
    STOPWORDS,
)
from .text_utils import (
    filter_stop_tokens,
    iter_ngrams,
    normalize_phrase,
    normalize_space,
    split_sentences,
    strip_possessive,
    tokenize_with_sentence_boundaries,
)


def truncate_entries(texts: List[str], max_tokens: int) -> List[str]:
    """
    Cap the total whitespace-token count at max_tokens by trimming every entry
    proportionally to its length (each non-empty entry keeps at least one token).
    """
    token_lists = [t.split() for t in texts]
    total = sum(len(toks) for toks in token_lists)
    if total <= max_tokens:
        return list(texts)
    out: List[str] = []
    for toks in token_lists:
        if not toks:
            out.append("")
            continue
        keep = max(1, (len(toks) * max_tokens) // total)
        out.append(" ".join(toks[:keep]))
    return out


def extract_pattern_candidates(text: str) -> Counter:
    """Cognitive-pattern matches, sentence by sentence."""
    out = Counter()
    for sent in split_sentences(text):
        norm = normalize_phrase(sent)
        if not norm:
            continue
        for _name, pattern, _tag, weight in COGNITIVE_PATTERNS:
            for m in pattern.finditer(norm):
                phrase = normalize_space(m.group(0))
                if phrase:
                    out[phrase] += weight
    return out


def extract_relation_candidates(text: str) -> Counter:
    """'(my|his|her|our|their) <relation noun>' phrases such as 'my sister'."""
    out = Counter()
    for sent in split_sentences(text):
        norm = normalize_phrase(sent)
        for m in POSSESSIVE_RELATION_RE.finditer(norm):
            out[m.group(0)] += config.POSSESSIVE_RELATION_WEIGHT
    return out


def extract_entity_candidates(doc: Any) -> Counter:
    """
    Named people/places/organizations from a spaCy Doc.

    'my friend Sarah' style phrases (possessive + noun + PERSON) get the higher
    weight, and the bare person name inside them is not credited again.
    """
    out = Counter()
    covered = set()
    for ent in doc.ents:
        if ent.label_ != "PERSON" or ent.start < 2:
            continue
        pron = doc[ent.start - 2]
        noun = doc[ent.start - 1]
        if pron.lower_ in POSSESSIVE_PRONOUNS and noun.pos_ == "NOUN":
            phrase = normalize_phrase(f"{pron.text} {noun.text} {ent.text}")
            if phrase:
                out[phrase] += config.POSSESSIVE_PERSON_WEIGHT
                covered.add((ent.start, ent.end))

    for ent in doc.ents:
        if ent.label_ not in ENTITY_LABELS or (ent.start, ent.end) in covered:
            continue
        phrase = normalize_phrase(ent.text)
        if phrase:
            out[phrase] += config.ENTITY_WEIGHT
    return out


def _is_stop(tok: Any) -> bool:
    return bool(tok.is_stop) or tok.lower_ in STOPWORDS


def extract_noun_phrase_candidates(doc: Any) -> Counter:
    """
    Noun chunks with at least two content tokens (leading determiners and
    pronouns stripped), or single proper-noun chunks.
    """
    out = Counter()
    for chunk in doc.noun_chunks:
        toks = [t for t in chunk if not t.is_punct]
        while toks and _is_stop(toks[0]):
            toks.pop(0)
        if not toks:
            continue
        content = [t for t in toks if not _is_stop(t)]
        if len(content) >= 2:
            weight = min(
                config.NOUN_PHRASE_WEIGHT_MAX,
                config.NOUN_PHRASE_WEIGHT_MIN + (len(content) - 2),
            )
        elif len(toks) == 1 and toks[0].pos_ == "PROPN":
            weight = config.NOUN_PHRASE_WEIGHT_MIN
        else:
            continue
        phrase = normalize_phrase("".join(t.text_with_ws for t in toks))
        if phrase:
            out[phrase] += weight
    return out


def extract_ngram_candidates(text: str, max_n: int = config.DEFAULT_MAX_NGRAM) -> Counter:
    """
    1..max_n-grams over the filtered token stream; n-grams never cross a removed
    stopword or a sentence end. Unigrams must be content words.
    """
    out = Counter()
    tokens = filter_stop_tokens(tokenize_with_sentence_boundaries(text), insert_boundaries=True)
    for gram in iter_ngrams(tokens, 1, max_n):
        words = gram.split(" ")
        if all(w in FUNCTION_WORDS for w in words):
            continue
        n = len(words)
        if n == 1:
            gram = strip_possessive(gram)
            if gram in FUNCTION_WORDS or len(gram) < config.DEFAULT_MIN_UNIGRAM_LEN:
                continue
        out[gram] += config.NGRAM_WEIGHTS.get(n, config.NGRAM_WEIGHTS[max(config.NGRAM_WEIGHTS)])
    return out


def generate_candidates(
    texts: Iterable[str],
    nlp: Optional[Any] = None,
    max_ngram: int = config.DEFAULT_MAX_NGRAM,
) -> Dict[str, float]:
    """
    Merge all strategies into one phrase -> weight map.
    The spaCy strategies are skipped when nlp is None or the parser fails.
    """
    texts = [t for t in texts if t and t.strip()]
    weights = Counter()
    for text in texts:
        weights.update(extract_pattern_candidates(text))
        weights.update(extract_relation_candidates(text))
        weights.update(extract_ngram_candidates(text, max_ngram))
    if nlp is not None and texts:
        parsed = Counter()
        try:
            for doc in nlp.pipe(texts):
                parsed.update(extract_entity_candidates(doc))
                parsed.update(extract_noun_phrase_candidates(doc))
        except Exception as e:
            print(f"[nlp] parser failed; skipping entity and noun-phrase candidates: {e}", file=sys.stderr)
        else:
            weights.update(parsed)
    return {term: float(w) for term, w in weights.items() if term and w > 0}
