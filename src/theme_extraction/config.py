"""
Configuration defaults for theme extraction.
"""
import os

DEFAULT_DAYS_AGO = 7
DEFAULT_THEME_LIMIT = 30
DEFAULT_MAX_TOKENS = 10000  # whitespace tokens across all entries before proportional truncation

# Baseline word-count ranker (plain frequency, no scoring model)
DEFAULT_FREQUENCY_DAYS_AGO = 14
DEFAULT_FREQUENCY_LIMIT = 15

# Candidate generation weights (additive across strategies)
PATTERN_WEIGHT_BASE = 5.0
PATTERN_WEIGHT_STRONG = 6.0            # self-labeling, personalizing
ENTITY_WEIGHT = 3.0
POSSESSIVE_PERSON_WEIGHT = 5.0         # "my friend sarah"
POSSESSIVE_RELATION_WEIGHT = 4.0       # "my sister"
NOUN_PHRASE_WEIGHT_MIN = 3.0
NOUN_PHRASE_WEIGHT_MAX = 5.0
NGRAM_WEIGHTS = {1: 0.5, 2: 1.0, 3: 2.0, 4: 3.0}
DEFAULT_MAX_NGRAM = 4
DEFAULT_MIN_TOKEN_LEN = 2              # single-character tokens never enter the n-gram stream
DEFAULT_MIN_UNIGRAM_LEN = 3

# Stats aggregation
DEFAULT_DECAY_TAU_DAYS = 3.0
DEFAULT_MIN_THEME_CHARS = 3

# Composite score: coverage dominates frequency and recency
SCORE_FREQ_WEIGHT = 0.3
SCORE_COVERAGE_WEIGHT = 0.4
SCORE_RECENCY_WEIGHT = 0.3

# MMR selection
DEFAULT_MMR_LAMBDA = 0.7
DEFAULT_REDUNDANCY_CUTOFF = 0.9        # cosine only; Jaccard redundancy stays a soft penalty
DEFAULT_CANDIDATE_POOL_MIN = 100
DEFAULT_CANDIDATE_POOL_FACTOR = 5      # pool = max(MIN, FACTOR * theme_limit)

# Embedding provider
DEFAULT_USE_EMBEDDINGS = True
DEFAULT_MAX_SENTENCES_FOR_EMBED = 800
DEFAULT_EMBED_MODEL = os.getenv("THEME_EMBED_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
DEFAULT_EMBED_DEVICE = os.getenv("EMBED_DEVICE") or None   # mps|cuda|cpu, None lets the library decide
DEFAULT_EMBED_BATCH_SIZE = int(os.getenv("EMBED_BATCH_SIZE", "64"))

# spaCy pipeline for entities and noun chunks
DEFAULT_USE_NLP = True
DEFAULT_SPACY_MODEL = os.getenv("THEME_SPACY_MODEL", "en_core_web_sm")

# Post-filter: collapse "sister" into "my sister" when the longer phrase keeps
# at least this share of the shorter one's frequency and score
DEFAULT_SUBSUME_FREQ_RATIO = 0.7
DEFAULT_SUBSUME_SCORE_RATIO = 0.7

# Metadata annotation
DEFAULT_DETAILED = False
DEFAULT_INCLUDE_CBT_METADATA = False
