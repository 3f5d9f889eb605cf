"""
Shared fixtures and fakes: a spaCy-like doc builder and embedding providers.
"""
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pytest

TODAY = date(2024, 5, 10)


class FakeToken:
    def __init__(self, i: int, text: str, pos: str, is_stop: bool, ws: str):
        self.i = i
        self.text = text
        self.lower_ = text.lower()
        self.pos_ = pos
        self.is_stop = is_stop
        self.is_punct = pos == "PUNCT"
        self.text_with_ws = text + ws


class FakeSpan:
    def __init__(self, tokens: List[FakeToken], start: int, end: int, label: str = ""):
        self._tokens = tokens[start:end]
        self.start = start
        self.end = end
        self.label_ = label
        self.text = "".join(t.text_with_ws for t in self._tokens).strip()

    def __iter__(self):
        return iter(self._tokens)


class FakeDoc:
    def __init__(self, tokens: List[FakeToken], ents: List[FakeSpan], chunks: List[FakeSpan]):
        self._tokens = tokens
        self.ents = ents
        self.noun_chunks = chunks

    def __getitem__(self, i: int) -> FakeToken:
        return self._tokens[i]


def make_doc(
    words: Sequence[Tuple[str, str]],
    ents: Sequence[Tuple[int, int, str]] = (),
    chunks: Sequence[Tuple[int, int]] = (),
    stop: Sequence[str] = ("my", "the", "a", "'s", "her", "his"),
    no_space_after: Sequence[int] = (),
) -> FakeDoc:
    """words: (text, pos) pairs; ents: (start, end, label); chunks: (start, end)."""
    tokens = []
    for i, (text, pos) in enumerate(words):
        ws = "" if (i in no_space_after or i == len(words) - 1) else " "
        tokens.append(FakeToken(i, text, pos, text.lower() in stop, ws))
    return FakeDoc(
        tokens,
        [FakeSpan(tokens, s, e, label) for s, e, label in ents],
        [FakeSpan(tokens, s, e) for s, e in chunks],
    )


class FakeNlp:
    """Maps known texts to prebuilt docs; unknown texts get an empty doc."""

    def __init__(self, docs: Dict[str, FakeDoc]):
        self.docs = docs

    def pipe(self, texts):
        for t in texts:
            yield self.docs.get(t, FakeDoc([], [], []))


class KeywordEmbedder:
    """
    Embeds a sentence as a bag of keyword topics; counts calls and batch sizes.
    Sentences mentioning none of the topics map to a shared fallback axis.
    """

    def __init__(self, topics: Sequence[str]):
        self.topics = list(topics)
        self.calls: List[List[str]] = []

    def embed(self, texts: List[str]) -> np.ndarray:
        self.calls.append(list(texts))
        rows = []
        for text in texts:
            low = text.lower()
            row = [1.0 if topic in low else 0.0 for topic in self.topics]
            row.append(0.0 if any(row) else 1.0)
            rows.append(row)
        return np.asarray(rows, dtype=float)


class FailingEmbedder:
    def __init__(self, exc: Optional[Exception] = None):
        self.exc = exc or RuntimeError("provider unavailable")
        self.calls = 0

    def embed(self, texts: List[str]):
        self.calls += 1
        raise self.exc


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def scenario_entries() -> List[dict]:
    return [
        {"text": "I feel anxious about my sister's wedding", "date": TODAY.isoformat()},
        {"text": "My sister called again, still anxious", "date": (TODAY - timedelta(days=1)).isoformat()},
    ]


@pytest.fixture
def offline_options() -> dict:
    return {"useEmbeddings": False, "useNlp": False}


@pytest.fixture
def week_entries() -> List[dict]:
    return [
        {"text": "Work deadline stress is rising. I should call mom tonight.", "date": "2024-05-04"},
        {"text": "Went hiking with Sam. The trail was beautiful and calm.", "date": "2024-05-06"},
        {"text": "Work deadline again. I'm so stupid for forgetting the report.", "date": "2024-05-08"},
        {"text": "Called mom. She is worried about my sister's move.", "date": "2024-05-09"},
        {"text": "Work deadline finally done! Feeling relieved and grateful.", "date": "2024-05-10"},
        {"text": "Old trip notes from last year.", "date": "2023-01-01"},
    ]
