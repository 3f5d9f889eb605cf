"""
Lazy spaCy pipeline used for named entities and noun chunks.
"""
import sys
from typing import Any, Dict, Optional

from . import config

_HAS_SPACY = False
try:
    import spacy
    _HAS_SPACY = True
except Exception:
    _HAS_SPACY = False

# Lazy pipeline cache, keyed by model name; None records a failed load
_NLP_CACHE: Dict[str, Optional[Any]] = {}


def get_default_nlp(model_name: str = config.DEFAULT_SPACY_MODEL) -> Optional[Any]:
    """
    Return a shared spaCy Language for model_name, loading it on first use.
    Returns None (once logged) when spaCy or the model is unavailable.
    """
    if model_name in _NLP_CACHE:
        return _NLP_CACHE[model_name]
    if not _HAS_SPACY:
        print("[nlp] spaCy not installed; entity and noun-phrase candidates disabled", file=sys.stderr)
        _NLP_CACHE[model_name] = None
        return None
    try:
        nlp = spacy.load(model_name, disable=["lemmatizer"])
    except Exception as e:
        print(
            f"[nlp] load error for {model_name}: {e}; install with: python -m spacy download {model_name}",
            file=sys.stderr,
        )
        nlp = None
    _NLP_CACHE[model_name] = nlp
    return nlp
