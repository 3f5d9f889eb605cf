#!/usr/bin/env python3
"""
Theme extraction for journal entries.

- Reads a JSON array (or JSONL) of {"text": ..., "date": "YYYY-MM-DD"} entries
- Prints the dominant themes of the recent window as a JSON array on stdout

Usage examples:
  python3 -m theme_extraction --input-file entries.json
  python3 -m theme_extraction --input-file entries.jsonl --days-ago 14 --theme-limit 10 --detailed
  python3 -m theme_extraction --input-file entries.json --no-embeddings --no-nlp --cbt-metadata
  python3 -m theme_extraction --input-file entries.json --method frequency

Output (--detailed):
  [
    { "theme": "my sister", "score": 2.098612, "category": "person", "frequency": 2, ... },
    ...
  ]
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from . import config
from .data_models import ThemeOptions
from .entry_filter import load_entries, parse_entry_date
from .pipeline import extract_frequent_words, extract_theme_scores


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Extract dominant themes from recent journal entries.")
    ap.add_argument("--input-file", type=str, required=True, help="JSON array or JSONL file of {text, date} entries")
    ap.add_argument("--method", type=str, default="mmr", choices=["mmr", "frequency"], help="Scored MMR selection or the plain word-count baseline")
    ap.add_argument("--days-ago", type=int, default=None, help="Lookback window in days (default 7 for mmr, 14 for frequency)")
    ap.add_argument("--theme-limit", type=int, default=None, help="Maximum number of themes (default 30 for mmr, 15 for frequency)")
    ap.add_argument("--today", type=str, default=None, help="Reference date YYYY-MM-DD (default: today)")
    ap.add_argument("--detailed", action="store_true", help="Emit scored theme objects instead of plain phrases")
    ap.add_argument("--cbt-metadata", action="store_true", help="Tag themes with category, distortion type, sentiment and negation")
    ap.add_argument("--no-embeddings", action="store_true", help="Use entry-overlap (Jaccard) redundancy instead of sentence embeddings")
    ap.add_argument("--no-nlp", action="store_true", help="Skip spaCy entity and noun-phrase candidates")
    ap.add_argument("--mmr-lambda", type=float, default=config.DEFAULT_MMR_LAMBDA, help="MMR trade-off: 1=score only, 0=diversity only")
    ap.add_argument("--decay-tau-days", type=float, default=config.DEFAULT_DECAY_TAU_DAYS, help="Recency decay time constant in days")
    ap.add_argument("--max-sentences-for-embed", type=int, default=config.DEFAULT_MAX_SENTENCES_FOR_EMBED, help="Max supporting sentences embedded per theme")
    ap.add_argument("--max-tokens", type=int, default=config.DEFAULT_MAX_TOKENS, help="Whitespace-token cap across entries before proportional truncation")
    ap.add_argument("--subsume-freq-ratio", type=float, default=config.DEFAULT_SUBSUME_FREQ_RATIO, help="Frequency ratio for folding a theme into a longer one containing it")
    ap.add_argument("--subsume-score-ratio", type=float, default=config.DEFAULT_SUBSUME_SCORE_RATIO, help="Score ratio for folding a theme into a longer one containing it")
    args = ap.parse_args(argv)

    today = None
    if args.today:
        today = parse_entry_date(args.today)
        if today is None:
            ap.error(f"--today must be YYYY-MM-DD, got {args.today!r}")

    try:
        entries = load_entries(args.input_file)
    except (OSError, ValueError) as e:
        print(f"[themes] failed to read {args.input_file}: {e}", file=sys.stderr)
        return 1
    print(f"[themes] loaded {len(entries)} entries from {args.input_file}", file=sys.stderr)

    if args.method == "frequency":
        words = extract_frequent_words(
            entries,
            days_ago=config.DEFAULT_FREQUENCY_DAYS_AGO if args.days_ago is None else args.days_ago,
            limit=config.DEFAULT_FREQUENCY_LIMIT if args.theme_limit is None else args.theme_limit,
            today=today,
        )
        print(json.dumps(words, ensure_ascii=False, indent=2))
        return 0

    options = ThemeOptions(
        use_embeddings=not args.no_embeddings,
        mmr_lambda=args.mmr_lambda,
        decay_tau_days=args.decay_tau_days,
        max_sentences_for_embed=args.max_sentences_for_embed,
        detailed=args.detailed,
        include_cbt_metadata=args.cbt_metadata,
        max_tokens=args.max_tokens,
        subsume_freq_ratio=args.subsume_freq_ratio,
        subsume_score_ratio=args.subsume_score_ratio,
        use_nlp=not args.no_nlp,
    )
    themes = extract_theme_scores(
        entries,
        days_ago=config.DEFAULT_DAYS_AGO if args.days_ago is None else args.days_ago,
        theme_limit=config.DEFAULT_THEME_LIMIT if args.theme_limit is None else args.theme_limit,
        options=options,
        today=today,
    )
    print(f"[themes] selected {len(themes)} theme(s)", file=sys.stderr)

    if options.detailed or options.include_cbt_metadata:
        out = [t.to_dict() for t in themes]
    else:
        out = [t.theme for t in themes]
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
