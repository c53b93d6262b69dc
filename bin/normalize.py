# normalize.py
from typing import List, Optional
import re
import logging
import pandas as pd
from pathlib import Path

log = logging.getLogger(__name__)

VARIANT_SEP_PAT = re.compile(r"[;|\n]+")

# ---------- IO ----------
def load_csv_any(path: Path, *, delimiter: Optional[str]=None, encoding: Optional[str]=None) -> pd.DataFrame:
    """Sniff delimiter if not provided; tolerant CSV loader."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")
    return pd.read_csv(
        path,
        sep=delimiter if delimiter is not None else None,
        encoding=encoding or "utf-8",
        engine="python",
        dtype=str,
        keep_default_na=False,
    )

# ---------- Columns / headers ----------
def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """Canonicalize headers: trim, uppercase, spaces->underscores, strip punctuation."""
    df = df.copy()
    df.columns = [
        re.sub(r"[^\w\s]", "", str(col)).strip().upper().replace(" ", "_")
        for col in df.columns
    ]
    return df

def ensure_unique_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Disambiguate duplicate column names by suffixing _1, _2, ..."""
    df = df.copy()
    seen, new_cols = {}, []
    for col in df.columns:
        if col in seen:
            seen[col] += 1
            new_cols.append(f"{col}_{seen[col]}")
        else:
            seen[col] = 0
            new_cols.append(col)
    df.columns = new_cols
    return df

def pick_col(df: pd.DataFrame, candidates: List[str], *, must=False, label=""):
    """Pick the first existing column among candidate aliases (case/spacing tolerant)."""
    def norm(s): return re.sub(r"[^\w\s]", "", str(s)).strip().upper().replace(" ", "_")
    cmap = {norm(c): c for c in df.columns}
    for cand in candidates:
        key = norm(cand)
        if key in cmap:
            return cmap[key]
    if must:
        raise KeyError(f"[pick_col] Missing required column for {label}: tried {candidates}")
    return None

# ---------- Keywords ----------
def split_variants(cell) -> List[str]:
    """Split a multi-valued cell on ; | or newlines. Pieces are kept verbatim apart from trimming."""
    if not isinstance(cell, str) or not cell:
        return []
    return [p.strip() for p in VARIANT_SEP_PAT.split(cell) if p.strip()]

def load_keywords(path: Path, *, column: Optional[str]=None, encoding: str="utf-8") -> List[str]:
    """
    Keywords from a plain-text file (one per line) or a CSV (`column`, or the
    first column). Blank entries are skipped, first occurrence order is kept.
    """
    path = Path(path)
    if path.suffix.lower() in (".csv", ".tsv"):
        df = ensure_unique_columns(normalize_headers(load_csv_any(path, encoding=encoding)))
        col = pick_col(df, [column], must=True, label="keywords") if column else df.columns[0]
        raw = [tok for cell in df[col] for tok in split_variants(cell)]
    else:
        if not path.exists():
            raise FileNotFoundError(f"Required file not found: {path}")
        raw = [line.strip() for line in path.read_text(encoding=encoding).splitlines()]
    keywords = list(dict.fromkeys(k for k in raw if k))
    log.debug("loaded %d keywords from %s", len(keywords), path)
    return keywords
