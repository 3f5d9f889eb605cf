"""
Dataclasses and tag enums for theme extraction.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Set

from . import config


class Category(str, Enum):
    PERSON = "person"
    PLACE = "place"
    EMOTION = "emotion"
    ACTIVITY = "activity"
    COGNITION = "cognition"
    GENERAL = "general"


class DistortionType(str, Enum):
    ALL_OR_NOTHING = "allOrNothing"
    SHOULD_STATEMENTS = "shouldStatements"
    CATASTROPHIZING = "catastrophizing"
    LABELING = "labeling"
    PERSONALIZING = "personalizing"
    FORTUNE_TELLING = "fortuneTelling"
    NONE = "none"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Entry:
    text: str
    date: date


@dataclass
class ThemeStats:
    theme: str
    freq: int = 0
    recency_weighted: float = 0.0
    entries: Set[int] = field(default_factory=set)


@dataclass(frozen=True)
class ThemeScore:
    theme: str
    score: float
    weight: float = 0.0
    category: Optional[Category] = None
    distortion_type: Optional[DistortionType] = None
    has_negation: Optional[bool] = None
    sentiment: Optional[Sentiment] = None
    frequency: Optional[int] = None
    recency: Optional[float] = None
    coverage: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view with camelCase keys; unset fields are omitted."""
        out: Dict[str, Any] = {"theme": self.theme, "score": round(self.score, 6)}
        if self.category is not None:
            out["category"] = self.category.value
        if self.distortion_type is not None:
            out["distortionType"] = self.distortion_type.value
        if self.has_negation is not None:
            out["hasNegation"] = self.has_negation
        if self.sentiment is not None:
            out["sentiment"] = self.sentiment.value
        if self.frequency is not None:
            out["frequency"] = self.frequency
        if self.recency is not None:
            out["recency"] = round(self.recency, 6)
        if self.coverage is not None:
            out["coverage"] = self.coverage
        return out


# camelCase keys accepted by ThemeOptions.from_mapping
_OPTION_ALIASES = {
    "useEmbeddings": "use_embeddings",
    "mmrLambda": "mmr_lambda",
    "decayTauDays": "decay_tau_days",
    "maxSentencesForEmbed": "max_sentences_for_embed",
    "includeCbtMetadata": "include_cbt_metadata",
    "maxTokens": "max_tokens",
    "subsumeFreqRatio": "subsume_freq_ratio",
    "subsumeScoreRatio": "subsume_score_ratio",
    "useNlp": "use_nlp",
    "redundancyCutoff": "redundancy_cutoff",
    "candidatePool": "candidate_pool",
}


@dataclass
class ThemeOptions:
    use_embeddings: bool = config.DEFAULT_USE_EMBEDDINGS
    mmr_lambda: float = config.DEFAULT_MMR_LAMBDA
    decay_tau_days: float = config.DEFAULT_DECAY_TAU_DAYS
    max_sentences_for_embed: int = config.DEFAULT_MAX_SENTENCES_FOR_EMBED
    detailed: bool = config.DEFAULT_DETAILED
    include_cbt_metadata: bool = config.DEFAULT_INCLUDE_CBT_METADATA
    max_tokens: int = config.DEFAULT_MAX_TOKENS
    subsume_freq_ratio: float = config.DEFAULT_SUBSUME_FREQ_RATIO
    subsume_score_ratio: float = config.DEFAULT_SUBSUME_SCORE_RATIO
    use_nlp: bool = config.DEFAULT_USE_NLP
    redundancy_cutoff: Optional[float] = config.DEFAULT_REDUNDANCY_CUTOFF
    candidate_pool: Optional[int] = None  # None -> max(MIN, FACTOR * theme_limit)

    def __post_init__(self) -> None:
        if not 0.0 <= self.mmr_lambda <= 1.0:
            raise ValueError(f"mmr_lambda must be within [0, 1], got {self.mmr_lambda}")
        if self.decay_tau_days <= 0:
            raise ValueError(f"decay_tau_days must be positive, got {self.decay_tau_days}")
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.max_sentences_for_embed <= 0:
            raise ValueError(f"max_sentences_for_embed must be positive, got {self.max_sentences_for_embed}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ThemeOptions":
        """Build options from snake_case or camelCase keys; unknown keys are rejected."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"unknown theme option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
