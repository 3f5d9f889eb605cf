import re
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Set

from . import config
from .constants import STOPWORDS

# Sentinel token inserted at removed-stopword positions and sentence ends so
# n-grams never bridge them ("sister called" is fine, "anxious sister" from
# "anxious about my sister" is not).
BOUNDARY_TOKEN = "<_>"

_ws_re = re.compile(r"\s+")
_non_word_re = re.compile(r"[^\w\s']+", flags=re.UNICODE)
# Apostrophes that are not inside a word (quotes, trailing plural possessives)
_stray_apostrophe_re = re.compile(r"(?<![^\W_])'|'(?![^\W_])", flags=re.UNICODE)
_SENT_SPLIT_RE = re.compile(r"[\.!\?\n]+")
_numeric_re = re.compile(r"[\d\s']+")


def normalize_space(s: str) -> str:
    return _ws_re.sub(" ", s).strip()


def normalize_phrase(text: str) -> str:
    """
    Lowercase and keep only letters, digits, in-word apostrophes and single spaces.
    "My sister’s wedding!!" -> "my sister's wedding"
    """
    if not text:
        return ""
    text = text.lower().replace("’", "'").replace("‘", "'")
    text = _non_word_re.sub(" ", text)
    text = text.replace("_", " ")
    text = _stray_apostrophe_re.sub(" ", text)
    return normalize_space(text)


def split_sentences(text: str) -> List[str]:
    """Split raw text on . ! ? and newlines; empty pieces are dropped."""
    if not text:
        return []
    return [s.strip() for s in _SENT_SPLIT_RE.split(text) if s and s.strip()]


def tokenize_simple(text: str) -> List[str]:
    text = normalize_phrase(text)
    if not text:
        return []
    return text.split()


def tokenize_with_sentence_boundaries(text: str) -> List[str]:
    """
    Tokenize sentence by sentence, inserting BOUNDARY_TOKEN between sentences.
    """
    toks: List[str] = []
    for sent in split_sentences(text):
        sent_toks = tokenize_simple(sent)
        if sent_toks:
            toks.extend(sent_toks)
            toks.append(BOUNDARY_TOKEN)
    if toks and toks[-1] == BOUNDARY_TOKEN:
        toks.pop()
    return toks


def filter_stop_tokens(
    tokens: Iterable[str],
    extra_stopwords: Optional[Set[str]] = None,
    insert_boundaries: bool = False,
) -> List[str]:
    """
    Drop stopwords, numeric tokens and single-character tokens.

    Negations, modals and intensifiers are not in STOPWORDS and survive.
    With insert_boundaries, each removed run leaves one BOUNDARY_TOKEN behind.
    """
    out: List[str] = []
    extra = extra_stopwords or set()

    def _append_boundary_once():
        if insert_boundaries and out and out[-1] != BOUNDARY_TOKEN:
            out.append(BOUNDARY_TOKEN)

    for t in tokens:
        lt = (t or "").lower().strip()
        if not lt or lt == BOUNDARY_TOKEN:
            _append_boundary_once()
            continue
        if lt in STOPWORDS or lt in extra:
            _append_boundary_once()
            continue
        if _numeric_re.fullmatch(lt):
            _append_boundary_once()
            continue
        if len(lt) < config.DEFAULT_MIN_TOKEN_LEN:
            _append_boundary_once()
            continue
        out.append(lt)

    if out and out[-1] == BOUNDARY_TOKEN:
        out.pop()
    return out


def iter_ngrams(tokens: Iterable[str], min_n: int = 1, max_n: int = config.DEFAULT_MAX_NGRAM) -> Iterator[str]:
    """
    Lazily yield contiguous n-grams (min_n..max_n) from a token stream.

    Keeps only a max_n-sized window in memory; a BOUNDARY_TOKEN resets the
    window so no n-gram spans it.
    """
    if min_n < 1 or max_n < min_n:
        return
    window: Deque[str] = deque(maxlen=max_n)
    for tok in tokens:
        if tok == BOUNDARY_TOKEN:
            window.clear()
            continue
        window.append(tok)
        size = len(window)
        for n in range(min_n, min(size, max_n) + 1):
            yield " ".join(list(window)[size - n:])


def strip_possessive(token: str) -> str:
    if token.endswith("'s") and len(token) > 2:
        return token[:-2]
    return token


def word_count(phrase: str) -> int:
    return len(phrase.split())


def is_numeric(phrase: str) -> bool:
    return bool(phrase) and bool(_numeric_re.fullmatch(phrase))


def count_occurrences(phrase: str, text: str) -> int:
    """
    Count word-aligned occurrences of a normalized phrase in normalized text.

    The match must start at a word start and end at a word end or before an
    apostrophe, so "sister" counts in "sister's" but "art" never counts in "start".
    """
    if not phrase or not text:
        return 0
    count = 0
    plen = len(phrase)
    tlen = len(text)
    idx = text.find(phrase)
    while idx != -1:
        end = idx + plen
        if (idx == 0 or text[idx - 1] == " ") and (end == tlen or text[end] in " '"):
            count += 1
        idx = text.find(phrase, idx + 1)
    return count


def contains_phrase(text: str, phrase: str) -> bool:
    """Word-aligned containment between two normalized phrases."""
    return count_occurrences(phrase, text) > 0
