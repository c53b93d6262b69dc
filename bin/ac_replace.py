# ac_replace.py
from typing import Iterable, List

from ac import Aho, Match, check_replacement, splice


def longest_non_overlapping(matches: Iterable[Match]) -> List[Match]:
    """Leftmost-longest selection; ties on start keep the longer keyword."""
    ordered = sorted(matches, key=lambda m: (m.start_index, -m.length))
    out, cur_end = [], -1
    for m in ordered:
        if m.start_index >= cur_end:
            out.append(m)
            cur_end = m.end
    return out


def replace_non_overlapping(ac: Aho, text: str, replacement: str) -> str:
    ac.require_built()
    if text == "":
        return text
    check_replacement(replacement)
    return splice(text, longest_non_overlapping(ac.finditer(text)), replacement)
