"""
Embedding provider interface and sentence-level theme vectors.
"""
import sys
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import numpy as np

from . import config
from .data_models import Entry
from .text_utils import contains_phrase, normalize_phrase, split_sentences

# Optional sentence-transformers for the default provider
_HAS_ST = False
try:
    from sentence_transformers import SentenceTransformer
    _HAS_ST = True
except Exception:
    _HAS_ST = False


class EmbeddingProvider(Protocol):
    """Anything that maps a batch of texts to one vector per text."""

    def embed(self, texts: List[str]) -> Sequence[Sequence[float]]:
        ...


class SentenceTransformerEmbedder:
    """EmbeddingProvider backed by a SentenceTransformer model."""

    def __init__(
        self,
        model: "SentenceTransformer",
        batch_size: int = config.DEFAULT_EMBED_BATCH_SIZE,
    ):
        self.model = model
        self.batch_size = batch_size

    def embed(self, texts: List[str]) -> np.ndarray:
        return self.model.encode(
            texts,
            batch_size=self.batch_size,
            normalize_embeddings=True,
            convert_to_numpy=True,
            show_progress_bar=False,
        )


# Lazy provider cache, one per model name (shared read-only across calls)
_EMBED_MODEL_CACHE: Dict[str, SentenceTransformerEmbedder] = {}


def get_default_embedder(
    model_name: str = config.DEFAULT_EMBED_MODEL,
    device: Optional[str] = config.DEFAULT_EMBED_DEVICE,
) -> Optional[SentenceTransformerEmbedder]:
    if not _HAS_ST:
        return None
    if model_name in _EMBED_MODEL_CACHE:
        return _EMBED_MODEL_CACHE[model_name]
    try:
        model = SentenceTransformer(model_name, device=device)
    except Exception as e:
        print(f"[embed] load error for {model_name}: {e}", file=sys.stderr)
        return None
    embedder = SentenceTransformerEmbedder(model)
    _EMBED_MODEL_CACHE[model_name] = embedder
    return embedder


def collect_theme_sentences(
    themes: Sequence[str],
    entries: Sequence[Entry],
    max_sentences: int = config.DEFAULT_MAX_SENTENCES_FOR_EMBED,
) -> Dict[str, List[str]]:
    """
    For each theme, up to max_sentences entry sentences (split on . ! ?) whose
    normalized text contains the theme, in entry order.

    A phrase split by a sentence mark ("Dr. Patel", "U.S.") matches no single
    sentence; it falls back to the whole entries containing it, and finally
    to the phrase itself.
    """
    sentences = []
    whole = []
    for entry in entries:
        for sent in split_sentences(entry.text):
            norm = normalize_phrase(sent)
            if norm:
                sentences.append((sent, norm))
        norm = normalize_phrase(entry.text)
        if norm:
            whole.append((entry.text, norm))

    out: Dict[str, List[str]] = {}
    for theme in themes:
        picked = _matching_texts(theme, sentences, max_sentences)
        if not picked:
            picked = _matching_texts(theme, whole, max_sentences) or [theme]
        out[theme] = picked
    return out


def _matching_texts(theme: str, texts: Sequence[Tuple[str, str]], limit: int) -> List[str]:
    picked: List[str] = []
    for raw, norm in texts:
        if contains_phrase(norm, theme):
            picked.append(raw)
            if len(picked) >= limit:
                break
    return picked


def build_theme_vectors(
    theme_sentences: Mapping[str, List[str]],
    provider: EmbeddingProvider,
) -> Dict[str, np.ndarray]:
    """
    Embed every distinct sentence in one batched call, then mean-pool and
    L2-normalize per theme.

    Raises ValueError when a theme has no sentence or the provider returns a
    malformed batch; provider exceptions propagate. Callers treat any failure
    as "no embeddings" for the whole run.
    """
    index: Dict[str, int] = {}
    batch: List[str] = []
    for theme, sents in theme_sentences.items():
        if not sents:
            raise ValueError(f"no supporting sentence for theme {theme!r}")
        for s in sents:
            if s not in index:
                index[s] = len(batch)
                batch.append(s)
    if not batch:
        return {}

    matrix = np.asarray(provider.embed(batch), dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != len(batch):
        raise ValueError(f"provider returned shape {matrix.shape} for {len(batch)} texts")

    vectors: Dict[str, np.ndarray] = {}
    for theme, sents in theme_sentences.items():
        rows = matrix[[index[s] for s in sents]]
        v = rows.mean(axis=0)
        norm = float(np.linalg.norm(v))
        if norm <= 0 or not np.isfinite(norm):
            raise ValueError(f"degenerate embedding for theme {theme!r}")
        vectors[theme] = v / norm
    return vectors
