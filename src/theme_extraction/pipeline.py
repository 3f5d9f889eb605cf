"""
Theme extraction pipeline for journal entries.

Stages, leaves first:
1. entry window filter
2. candidate generation (patterns, entities, noun phrases, n-grams)
3. per-candidate stats (frequency, coverage, recency decay)
4. significance scoring
5. MMR diversity selection (embeddings when available, entry overlap otherwise)
6. cleanup passes, then optional CBT tags

The embedding provider and the spaCy pipeline are passed in; when omitted and
enabled by the options, process-wide lazily loaded defaults are used.
"""
import re
from collections import Counter
from dataclasses import replace
from datetime import date, datetime, time, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

from . import config
from .annotate import annotate_themes
from .candidates import generate_candidates, truncate_entries
from .constants import FUNCTION_WORDS
from .data_models import ThemeOptions, ThemeScore
from .embedding import EmbeddingProvider, get_default_embedder
from .entry_filter import EntryLike, filter_recent_entries
from .nlp import get_default_nlp
from .postfilter import drop_generic_terms, drop_noise_themes, suppress_subsumed
from .scoring import score_themes
from .selection import select_diverse_themes
from .stats import aggregate_stats

OptionsLike = Union[ThemeOptions, Mapping[str, Any], None]

_punct_re = re.compile(r"[^\w\s]")


def resolve_options(options: OptionsLike) -> ThemeOptions:
    if isinstance(options, ThemeOptions):
        return options
    return ThemeOptions.from_mapping(options)


def candidate_pool_size(theme_limit: int, options: ThemeOptions) -> int:
    if options.candidate_pool:
        return max(options.candidate_pool, theme_limit)
    return max(config.DEFAULT_CANDIDATE_POOL_MIN, config.DEFAULT_CANDIDATE_POOL_FACTOR * theme_limit)


def extract_theme_scores(
    entries: Iterable[EntryLike],
    days_ago: int = config.DEFAULT_DAYS_AGO,
    theme_limit: int = config.DEFAULT_THEME_LIMIT,
    options: OptionsLike = None,
    embedder: Optional[EmbeddingProvider] = None,
    nlp: Optional[Any] = None,
    today: Optional[date] = None,
) -> List[ThemeScore]:
    """
    Return up to theme_limit dominant themes of the entries dated within the last
    days_ago days, in selection order. Degenerate input yields [].
    """
    if theme_limit < 0:
        raise ValueError(f"theme_limit must be >= 0, got {theme_limit}")
    opts = resolve_options(options)

    if today is None:
        now = datetime.now(timezone.utc)
        today = now.date()
    else:
        now = datetime.combine(today, time.min, tzinfo=timezone.utc)

    recent = filter_recent_entries(entries, days_ago, today)
    if not recent or theme_limit == 0:
        return []

    if nlp is None and opts.use_nlp:
        nlp = get_default_nlp()
    # stats and sentence collection scan the same truncated texts
    texts = truncate_entries([e.text for e in recent], opts.max_tokens)
    recent = [replace(e, text=t) for e, t in zip(recent, texts)]
    weights = generate_candidates(texts, nlp=nlp)
    if not weights:
        return []

    stats = aggregate_stats(weights.keys(), recent, opts.decay_tau_days, now)
    if not stats:
        return []

    scored = score_themes(stats, weights)[: candidate_pool_size(theme_limit, opts)]
    k = min(theme_limit, len(scored))

    provider = None
    if opts.use_embeddings:
        provider = embedder if embedder is not None else get_default_embedder()

    selected, _method = select_diverse_themes(
        scored,
        stats,
        recent,
        k,
        lam=opts.mmr_lambda,
        provider=provider,
        max_sentences=opts.max_sentences_for_embed,
        redundancy_cutoff=opts.redundancy_cutoff,
    )

    selected = drop_noise_themes(selected)
    selected = drop_generic_terms(selected)
    selected = suppress_subsumed(selected, opts.subsume_freq_ratio, opts.subsume_score_ratio)

    if opts.include_cbt_metadata:
        selected = annotate_themes(selected)
    return selected


def extract_themes(
    entries: Iterable[EntryLike],
    days_ago: int = config.DEFAULT_DAYS_AGO,
    theme_limit: int = config.DEFAULT_THEME_LIMIT,
    options: OptionsLike = None,
    embedder: Optional[EmbeddingProvider] = None,
    nlp: Optional[Any] = None,
    today: Optional[date] = None,
) -> List[str]:
    """Theme phrases only; see extract_theme_scores."""
    return [
        s.theme
        for s in extract_theme_scores(entries, days_ago, theme_limit, options, embedder, nlp, today)
    ]


def extract(
    entries: Iterable[EntryLike],
    days_ago: int = config.DEFAULT_DAYS_AGO,
    theme_limit: int = config.DEFAULT_THEME_LIMIT,
    options: OptionsLike = None,
    embedder: Optional[EmbeddingProvider] = None,
    nlp: Optional[Any] = None,
    today: Optional[date] = None,
) -> Union[List[str], List[ThemeScore]]:
    """ThemeScore objects when options.detailed is set, plain phrases otherwise."""
    opts = resolve_options(options)
    scores = extract_theme_scores(entries, days_ago, theme_limit, opts, embedder, nlp, today)
    if opts.detailed:
        return scores
    return [s.theme for s in scores]


def extract_frequent_words(
    entries: Iterable[EntryLike],
    days_ago: int = config.DEFAULT_FREQUENCY_DAYS_AGO,
    limit: int = config.DEFAULT_FREQUENCY_LIMIT,
    today: Optional[date] = None,
) -> List[str]:
    """
    Baseline ranker: most frequent non-stopword words (longer than two chars)
    in the window, ties kept in first-seen order.
    """
    recent = filter_recent_entries(entries, days_ago, today)
    if not recent or limit <= 0:
        return []
    blob = " ".join(e.text.lower() for e in recent)
    counts = Counter(
        w for w in _punct_re.sub(" ", blob).split()
        if w not in FUNCTION_WORDS and len(w) > 2
    )
    return [w for w, _ in counts.most_common(limit)]
