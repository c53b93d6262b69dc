#!/usr/bin/env python3
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "bin"))

import ac
from ac import Aho, ArgumentError, InvalidStateError, Match, splice
from ac_replace import longest_non_overlapping, replace_non_overlapping


def test_empty_text_is_returned_unchanged():
    auto = Aho(["he"])
    assert ac.replace(auto, "", "anything") == ""


def test_text_without_matches_is_unchanged():
    auto = Aho(["he"])
    assert auto.replace("xyz", "*") == "xyz"


def test_multibyte_replacement_keeps_other_characters():
    auto = Aho(["伟大", "特色主义", "公园"])
    assert ac.replace(auto, "从这里建设伟大的特色主义主题公园", "-") == "从这里建设-的-主题-"


def test_replacement_may_be_empty():
    auto = Aho(["bad"])
    assert auto.replace("not bad at all", "") == "not  at all"


def test_overlapping_matches_each_emit_a_replacement():
    auto = Aho(["he", "she", "his", "hers"])
    # she@1, he@2, hers@2 all overlap; every one still writes a token
    assert auto.replace("ushers", "*") == "u***"


def test_shorter_match_inside_longer_one():
    auto = Aho(["abcd", "bc"])
    assert auto.search_all("abcdx") == [Match(1, "bc"), Match(0, "abcd")]
    assert auto.replace("abcdx", "*") == "a**x"


def test_non_overlapping_variant_keeps_leftmost_longest():
    auto = Aho(["abcd", "bc"])
    assert replace_non_overlapping(auto, "abcdx", "*") == "*x"
    auto = Aho(["he", "she", "his", "hers"])
    assert replace_non_overlapping(auto, "ushers here", "#") == "u#rs #re"


def test_longest_non_overlapping_prefers_longer_on_same_start():
    picked = longest_non_overlapping([Match(2, "he"), Match(2, "hers"), Match(5, "sx"), Match(6, "x")])
    assert picked == [Match(2, "hers"), Match(6, "x")]


def test_splice_without_matches_returns_text():
    assert splice("abc", [], "*") == "abc"


def test_replace_rejects_missing_replacement():
    auto = Aho(["he"])
    with pytest.raises(ArgumentError):
        ac.replace(auto, "he", None)


def test_replace_before_build_is_invalid_state():
    with pytest.raises(InvalidStateError):
        Aho().replace("ushers", "*")


def test_empty_text_ignores_replacement_value():
    auto = Aho(["he"])
    assert ac.replace(auto, "", None) == ""
    assert replace_non_overlapping(auto, "", None) == ""


def test_non_overlapping_before_build_is_invalid_state():
    with pytest.raises(InvalidStateError):
        replace_non_overlapping(Aho(), "ushers", "*")
