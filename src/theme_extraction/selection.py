"""
Maximal Marginal Relevance selection of a diverse theme subset.
"""
import sys
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple

import numpy as np

from . import config
from .data_models import Entry, ThemeScore, ThemeStats
from .embedding import EmbeddingProvider, build_theme_vectors, collect_theme_sentences

Similarity = Callable[[str, str], float]

METHOD_EMBEDDING = "embedding"
METHOD_JACCARD = "jaccard"


def jaccard(a: Set[int], b: Set[int]) -> float:
    if not a and not b:
        return 0.0
    union = len(a | b)
    return (len(a & b) / union) if union else 0.0


def cosine(u: np.ndarray, v: np.ndarray) -> float:
    un = float(np.linalg.norm(u))
    vn = float(np.linalg.norm(v))
    if un <= 0 or vn <= 0:
        return 0.0
    return float(np.dot(u, v) / (un * vn))


def jaccard_similarity(stats: Mapping[str, ThemeStats]) -> Similarity:
    """Similarity over supporting-entry index sets."""
    def _sim(a: str, b: str) -> float:
        return jaccard(stats[a].entries, stats[b].entries)
    return _sim


def embedding_similarity(vectors: Mapping[str, np.ndarray]) -> Similarity:
    def _sim(a: str, b: str) -> float:
        return cosine(vectors[a], vectors[b])
    return _sim


def mmr_select(
    scored: Sequence[ThemeScore],
    k: int,
    lam: float = config.DEFAULT_MMR_LAMBDA,
    similarity: Optional[Similarity] = None,
    max_redundancy: Optional[float] = None,
) -> List[ThemeScore]:
    """
    Greedy MMR: repeatedly pick the candidate maximizing
        lam * score - (1 - lam) * max(similarity to any selected theme)
    until k themes are chosen or candidates run out.

    With max_redundancy, a candidate whose redundancy exceeds it is never picked.
    Ties break on score, then generation weight, then phrase (alphabetical).
    """
    if k <= 0 or not scored:
        return []
    remaining = sorted(scored, key=lambda s: s.theme)
    redundancy: Dict[str, float] = {s.theme: 0.0 for s in remaining}
    selected: List[ThemeScore] = []

    while remaining and len(selected) < k:
        best: Optional[ThemeScore] = None
        best_key: Optional[Tuple[float, float, float]] = None
        for cand in remaining:
            r = redundancy[cand.theme]
            if max_redundancy is not None and r > max_redundancy:
                continue
            value = lam * cand.score - (1.0 - lam) * r
            key = (value, cand.score, cand.weight)
            if best_key is None or key > best_key:
                best, best_key = cand, key
        if best is None:
            break
        selected.append(best)
        remaining = [c for c in remaining if c.theme != best.theme]
        if similarity is None:
            continue
        # Redundancy is the max over the selected set, so one update per pick suffices
        for cand in remaining:
            sim = similarity(cand.theme, best.theme)
            if sim > redundancy[cand.theme]:
                redundancy[cand.theme] = sim
    return selected


def select_diverse_themes(
    scored: Sequence[ThemeScore],
    stats: Mapping[str, ThemeStats],
    entries: Sequence[Entry],
    k: int,
    lam: float = config.DEFAULT_MMR_LAMBDA,
    provider: Optional[EmbeddingProvider] = None,
    max_sentences: int = config.DEFAULT_MAX_SENTENCES_FOR_EMBED,
    redundancy_cutoff: Optional[float] = config.DEFAULT_REDUNDANCY_CUTOFF,
) -> Tuple[List[ThemeScore], str]:
    """
    Run MMR with embedding similarity when a provider is given and every
    candidate gets a vector; otherwise (or on any provider failure) the whole
    run uses Jaccard similarity over supporting entries.

    Returns (selected, method) where method is "embedding" or "jaccard".
    """
    if not scored or k <= 0:
        return [], METHOD_JACCARD

    if provider is not None:
        themes = [s.theme for s in scored]
        try:
            sentences = collect_theme_sentences(themes, entries, max_sentences)
            vectors = build_theme_vectors(sentences, provider)
        except Exception as e:
            print(f"[embed] falling back to entry-overlap similarity: {e}", file=sys.stderr)
            vectors = None
        if vectors is not None and all(t in vectors for t in themes):
            selected = mmr_select(
                scored, k, lam,
                similarity=embedding_similarity(vectors),
                max_redundancy=redundancy_cutoff,
            )
            return selected, METHOD_EMBEDDING

    selected = mmr_select(scored, k, lam, similarity=jaccard_similarity(stats))
    return selected, METHOD_JACCARD
