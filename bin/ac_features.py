#!/usr/bin/env python3
# ac_features.py
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd
from ac import Aho, Match, splice
from ac_replace import longest_non_overlapping
from normalize import (
    normalize_headers, ensure_unique_columns, pick_col, load_csv_any, load_keywords
)

log = logging.getLogger(__name__)

DEFAULT_TEXT_CANDIDATES = ["TEXT", "DESCRIPTION", "CONTENT", "BODY", "MESSAGE", "COMMENT"]

# ---- helpers -----------------------------------------------------------------
def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"

def word_boundary_ok(s: str, l: int, r: int) -> bool:
    left_ok  = (l == 0) or not _is_word(s[l-1])
    right_ok = (r == len(s)) or not _is_word(s[r])
    return left_ok and right_ok

def cell_hits(ac: Aho, txt, *, whole_words: bool=False) -> List[Match]:
    if not isinstance(txt, str) or not txt:
        return []
    hits = ac.search_all(txt)
    if whole_words:
        hits = [h for h in hits if word_boundary_ok(txt, h.start_index, h.end)]
    return hits

# ---- AC feature generation ----------------------------------------------------
def add_ac_features(df: pd.DataFrame, ac: Aho, desc_candidates: List[str], *,
                    whole_words: bool=False, replacement: Optional[str]=None,
                    non_overlapping: bool=False) -> pd.DataFrame:
    """
    Tag each row's text column with keyword hits:
      - _AC_HAS_MATCH    (0/1)
      - _AC_COUNT        (hits after whole-word filtering)
      - _AC_TERMS        (distinct matched keywords, in hit order, |-joined)
      - _AC_FIRST_INDEX  (start of the first hit, -1 if none)
      - _AC_REDACTED     (only when `replacement` is given)
    """
    df = ensure_unique_columns(normalize_headers(df))
    desc_col = pick_col(df, desc_candidates, must=False)
    if not desc_col:
        raise KeyError(f"ac_features: no text column found; tried {desc_candidates}")

    rows = []
    for idx, raw in df[desc_col].items():
        txt = raw if isinstance(raw, str) else ""
        hits = cell_hits(ac, txt, whole_words=whole_words)
        row = {
            "_row_id": idx,
            "_AC_HAS_MATCH": int(bool(hits)),
            "_AC_COUNT": len(hits),
            "_AC_TERMS": "|".join(dict.fromkeys(h.matched_text for h in hits)),
            "_AC_FIRST_INDEX": hits[0].start_index if hits else -1,
        }
        if replacement is not None:
            chosen = longest_non_overlapping(hits) if non_overlapping else hits
            row["_AC_REDACTED"] = splice(txt, chosen, replacement) if txt else txt
        rows.append(row)

    feat = pd.DataFrame(rows, columns=["_row_id", "_AC_HAS_MATCH", "_AC_COUNT", "_AC_TERMS",
                                       "_AC_FIRST_INDEX"] + (["_AC_REDACTED"] if replacement is not None else []))
    feat = feat.set_index("_row_id")
    out = df.copy()
    out.index.name = "_row_id"
    out = out.join(feat, how="left").reset_index(drop=True)
    log.debug("ac_features: %d rows tagged on %s, %d with hits",
              len(out), desc_col, int(out["_AC_HAS_MATCH"].sum()) if len(out) else 0)
    return out

def main(argv=None):
    ap = argparse.ArgumentParser(description="Add Aho-Corasick keyword features to a CSV.")
    ap.add_argument("--in", dest="inp", required=True)
    ap.add_argument("--out", required=True)
    ap.add_argument("--keywords-file", required=True, help="Keyword list (.txt one per line, or .csv)")
    ap.add_argument("--keyword-col", default=None, help="Keyword column when --keywords-file is a CSV")
    ap.add_argument("--text-candidates", nargs="*", default=DEFAULT_TEXT_CANDIDATES)
    ap.add_argument("--replacement", default=None, help="Also write _AC_REDACTED using this replacement")
    ap.add_argument("--non-overlapping", action="store_true", help="Redact leftmost-longest hits only")
    ap.add_argument("--whole-words", action="store_true")
    ap.add_argument("--encoding", default="utf-8")
    args = ap.parse_args(argv)

    df = load_csv_any(Path(args.inp), encoding=args.encoding)
    ac = Aho(load_keywords(Path(args.keywords_file), column=args.keyword_col, encoding=args.encoding))
    out = add_ac_features(df, ac, args.text_candidates, whole_words=args.whole_words,
                          replacement=args.replacement, non_overlapping=args.non_overlapping)

    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(args.out, index=False, encoding=args.encoding)
    print(f"✅ AC features added -> {args.out}  (rows={len(out):,}, with hits={int(out['_AC_HAS_MATCH'].sum()):,})")

if __name__ == "__main__":
    main()
