#!/usr/bin/env python3
"""
Console driver for the keyword automaton.

Usage:
  python run.py search  --keywords he she his hers --text ushers
  python run.py first   --keywords-file words.txt --text-file doc.txt --start 10
  python run.py replace --keywords 伟大 公园 --text "..." --replacement -
  python run.py tag     --keywords-file words.csv --in rows.csv --out tagged.csv --replacement "***"
"""

import argparse
import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "bin"))

from ac import Aho, ArgumentError, InvalidStateError  # noqa: E402
from ac_replace import replace_non_overlapping  # noqa: E402
from ac_features import DEFAULT_TEXT_CANDIDATES, add_ac_features  # noqa: E402
from normalize import load_csv_any, load_keywords  # noqa: E402

def _keywords(args):
    if args.keywords_file:
        return load_keywords(Path(args.keywords_file), column=args.keyword_col, encoding=args.encoding)
    return args.keywords

def _text(args) -> str:
    if args.text_file:
        p = Path(args.text_file)
        if not p.exists():
            raise FileNotFoundError(f"Required file not found: {p}")
        return p.read_text(encoding=args.encoding)
    return args.text

def cmd_search(args, ac: Aho) -> None:
    for m in ac.finditer(_text(args), args.start, args.max_results):
        print(f"{m.start_index}\t{m.length}\t{m.matched_text}")

def cmd_first(args, ac: Aho) -> None:
    m = ac.search_first(_text(args), args.start)
    if m.is_empty:
        logging.info("No match.")
        print("-1")
    else:
        print(f"{m.start_index}\t{m.length}\t{m.matched_text}")

def cmd_replace(args, ac: Aho) -> None:
    text = _text(args)
    if args.non_overlapping:
        print(replace_non_overlapping(ac, text, args.replacement))
    else:
        print(ac.replace(text, args.replacement))

def cmd_tag(args, ac: Aho) -> None:
    df = load_csv_any(Path(args.inp), encoding=args.encoding)
    out = add_ac_features(df, ac, args.text_candidates, whole_words=args.whole_words,
                          replacement=args.replacement, non_overlapping=args.non_overlapping)
    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(args.out, index=False, encoding=args.encoding)
    logging.info("✅ Tagged %s rows -> %s", f"{len(out):,}", args.out)

def parse_args(argv=None):
    common = argparse.ArgumentParser(add_help=False)
    src = common.add_mutually_exclusive_group(required=True)
    src.add_argument("--keywords", nargs="+", help="Keywords given inline")
    src.add_argument("--keywords-file", help="Keyword list (.txt one per line, or .csv)")
    common.add_argument("--keyword-col", default=None, help="Keyword column when --keywords-file is a CSV")
    common.add_argument("--encoding", default="utf-8")
    common.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    text = argparse.ArgumentParser(add_help=False)
    tsrc = text.add_mutually_exclusive_group(required=True)
    tsrc.add_argument("--text", help="Text to scan")
    tsrc.add_argument("--text-file", help="File whose full contents are scanned")

    ap = argparse.ArgumentParser(description="Multi-keyword search and replace with an Aho-Corasick automaton.")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", parents=[common, text], help="List every match")
    p.add_argument("--start", type=int, default=0)
    p.add_argument("--max-results", type=int, default=None)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("first", parents=[common, text], help="Print the first match")
    p.add_argument("--start", type=int, default=0)
    p.set_defaults(func=cmd_first)

    p = sub.add_parser("replace", parents=[common, text], help="Substitute every match")
    p.add_argument("--replacement", default="*")
    p.add_argument("--non-overlapping", action="store_true", help="Replace leftmost-longest matches only")
    p.set_defaults(func=cmd_replace)

    p = sub.add_parser("tag", parents=[common], help="Add _AC_* keyword columns to a CSV")
    p.add_argument("--in", dest="inp", required=True)
    p.add_argument("--out", required=True)
    p.add_argument("--text-candidates", nargs="*", default=DEFAULT_TEXT_CANDIDATES)
    p.add_argument("--replacement", default=None)
    p.add_argument("--non-overlapping", action="store_true")
    p.add_argument("--whole-words", action="store_true")
    p.set_defaults(func=cmd_tag)

    return ap.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)

    # logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        ac = Aho(_keywords(args))
        args.func(args, ac)
    except (ArgumentError, InvalidStateError, FileNotFoundError, KeyError) as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 2
    return 0

if __name__ == "__main__":
    sys.exit(main())
