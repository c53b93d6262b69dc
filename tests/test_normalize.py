#!/usr/bin/env python3
import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "bin"))

from normalize import (
    ensure_unique_columns, load_csv_any, load_keywords, normalize_headers, pick_col, split_variants
)


def test_normalize_headers_and_unique_columns():
    df = pd.DataFrame([[1, 2, 3]], columns=["item text", "Item-Text", "notes"])
    out = ensure_unique_columns(normalize_headers(df))
    assert list(out.columns) == ["ITEM_TEXT", "ITEMTEXT", "NOTES"]
    dup = ensure_unique_columns(pd.DataFrame([[1, 2]], columns=["A", "A"]))
    assert list(dup.columns) == ["A", "A_1"]


def test_pick_col_is_case_and_spacing_tolerant():
    df = pd.DataFrame(columns=["ITEM_DESCRIPTION", "BODY"])
    assert pick_col(df, ["item description", "body"]) == "ITEM_DESCRIPTION"
    assert pick_col(df, ["missing"]) is None
    with pytest.raises(KeyError):
        pick_col(df, ["missing"], must=True, label="text")


def test_split_variants():
    assert split_variants("he; she |hers\nhis") == ["he", "she", "hers", "his"]
    assert split_variants("") == []
    assert split_variants(None) == []


def test_load_keywords_from_text_file(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("he\n\nshe\n 公园 \nhe\n", encoding="utf-8")
    assert load_keywords(p) == ["he", "she", "公园"]


def test_load_keywords_from_csv(tmp_path):
    p = tmp_path / "words.csv"
    p.write_text("notes,keyword\nx,he|she\ny,hers\nz,he\nw,\n", encoding="utf-8")
    assert load_keywords(p, column="keyword") == ["he", "she", "hers"]
    assert load_keywords(p) == ["x", "y", "z", "w"]


def test_load_csv_any_keeps_text_verbatim(tmp_path):
    p = tmp_path / "rows.csv"
    p.write_text("id,text\n1,NA\n2,\n", encoding="utf-8")
    df = load_csv_any(p)
    assert list(df["text"]) == ["NA", ""]


def test_missing_files_raise(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_keywords(tmp_path / "nope.txt")
    with pytest.raises(FileNotFoundError):
        load_csv_any(tmp_path / "nope.csv")
