#AHO CORASICK


# ac.py
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

log = logging.getLogger(__name__)

ROOT = 0


class ArgumentError(ValueError):
    """Bad keyword set, text, offset or result bound."""


class InvalidStateError(RuntimeError):
    """Automaton used before build, or built twice."""


@dataclass(frozen=True)
class Match:
    start_index: int
    matched_text: Optional[str]
    length: int = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "length", len(self.matched_text) if self.matched_text else 0)

    @property
    def end(self) -> int:
        # exclusive
        return self.start_index + self.length

    @property
    def is_empty(self) -> bool:
        return self.start_index < 0


EMPTY = Match(-1, None)


@dataclass
class Node:
    label: str                    # char consumed to get here (root: " ")
    parent: int                   # -1 for root
    failure: int = ROOT
    transitions: Dict[str, int] = field(default_factory=dict)
    outputs: Dict[str, None] = field(default_factory=dict)   # ordered set

    def add_output(self, keyword: str) -> None:
        self.outputs.setdefault(keyword, None)


# ---- validation --------------------------------------------------------------
def check_keywords(keywords) -> List[str]:
    if keywords is None:
        raise ArgumentError("keywords: keyword set is required")
    if isinstance(keywords, str):
        raise ArgumentError("keywords: expected a sequence of strings, got a single string")
    keywords = list(keywords)
    if not keywords:
        raise ArgumentError("keywords: keyword set cannot be empty")
    for k in keywords:
        if not isinstance(k, str) or not k:
            raise ArgumentError("keywords: the keyword set cannot contain null references or empty strings")
    return keywords


def check_arguments(text, start: int, max_results: Optional[int]) -> None:
    if text is None:
        raise ArgumentError("text: text is required")
    if not isinstance(text, str) or not text:
        raise ArgumentError("text: text must be a non-empty string")
    if start < 0 or start >= len(text):
        raise ArgumentError(f"start: {start} out of range for text of length {len(text)}")
    if max_results is not None and max_results <= 0:
        raise ArgumentError(f"max_results: must be >= 1, got {max_results}")


def check_replacement(replacement) -> None:
    if not isinstance(replacement, str):
        raise ArgumentError("replacement: replacement must be a string")


# ---- construction ------------------------------------------------------------
def build_trie(keywords: Iterable[str]) -> List[Node]:
    """Prefix trie over `keywords` as an index-addressed arena; node 0 is root."""
    keywords = check_keywords(keywords)
    nodes: List[Node] = [Node(" ", -1)]
    for pat in keywords:
        s = ROOT
        for ch in pat:
            nxt = nodes[s].transitions.get(ch)
            if nxt is None:
                nxt = len(nodes)
                nodes.append(Node(ch, s))
                nodes[s].transitions[ch] = nxt
            s = nxt
        nodes[s].add_output(pat)
    return nodes


def compute_failures(nodes: List[Node]) -> List[Node]:
    """
    Attach failure links in breadth-first order and fold each failure
    target's outputs into the node, so the matcher never walks failure
    chains to collect outputs. Mutates `nodes` in place.
    """
    root = nodes[ROOT]
    q = deque()
    for s in root.transitions.values():
        nodes[s].failure = ROOT
        q.extend(nodes[s].transitions.values())

    while q:
        n = q.popleft()
        node = nodes[n]
        ch = node.label
        r = nodes[node.parent].failure
        while r != ROOT and ch not in nodes[r].transitions:
            r = nodes[r].failure
        t = nodes[r].transitions.get(ch)
        if t is not None and t != n:
            node.failure = t
            node.outputs.update(nodes[t].outputs)
        else:
            node.failure = ROOT
        q.extend(node.transitions.values())

    root.failure = ROOT
    return nodes


# ---- automaton ---------------------------------------------------------------
class Aho:
    def __init__(self, keywords: Optional[Iterable[str]] = None):
        self.nodes: List[Node] = []
        self.keywords: List[str] = []
        if keywords is not None:
            self.build(keywords)

    @property
    def built(self) -> bool:
        return bool(self.nodes)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def build(self, keywords: Iterable[str]) -> "Aho":
        if self.built:
            raise InvalidStateError("automaton is already built; create a new one for a different keyword set")
        keywords = check_keywords(keywords)
        nodes = compute_failures(build_trie(keywords))
        self.keywords = list(dict.fromkeys(keywords))
        self.nodes = nodes
        log.debug("built automaton: %d keywords, %d nodes", len(self.keywords), len(nodes))
        return self

    def require_built(self) -> None:
        if not self.built:
            raise InvalidStateError("automaton is not built; call build(keywords) first")

    # -- introspection --
    def state_for(self, prefix: str) -> Optional[int]:
        self.require_built()
        s = ROOT
        for ch in prefix:
            s = self.nodes[s].transitions.get(ch)
            if s is None:
                return None
        return s

    def path(self, s: int) -> str:
        chars = []
        while s != ROOT:
            chars.append(self.nodes[s].label)
            s = self.nodes[s].parent
        return "".join(reversed(chars))

    def failure(self, s: int) -> int:
        return self.nodes[s].failure

    def outputs(self, s: int) -> List[str]:
        return list(self.nodes[s].outputs)

    # -- matching --
    def finditer(self, text: str, start: int = 0, max_results: Optional[int] = None) -> Iterator[Match]:
        """
        Lazily yield matches ordered by end position. Arguments are checked
        here, before the first scan step; each call scans from root with its
        own state, so one automaton can serve concurrent scans.
        """
        self.require_built()
        check_arguments(text, start, max_results)
        return self._scan(text, start, max_results)

    def _scan(self, text: str, start: int, max_results: Optional[int]) -> Iterator[Match]:
        nodes = self.nodes
        s, found = ROOT, 0
        for i in range(start, len(text)):
            ch = text[i]
            while s and ch not in nodes[s].transitions:
                s = nodes[s].failure
            s = nodes[s].transitions.get(ch, ROOT)
            for pat in nodes[s].outputs:
                yield Match(i - len(pat) + 1, pat)
                found += 1
                if max_results is not None and found >= max_results:
                    return

    def search_all(self, text: str, start: int = 0, max_results: Optional[int] = None) -> List[Match]:
        return list(self.finditer(text, start, max_results))

    def search_first(self, text: str, start: int = 0) -> Match:
        return next(self.finditer(text, start, 1), EMPTY)

    def replace(self, text: str, replacement: str) -> str:
        """
        Substitute every match in stream order. Overlaps are not skipped: each
        match emits `replacement` and moves the cursor to its end, even when an
        earlier, longer match already consumed the span.
        """
        self.require_built()
        if text == "":
            return text
        check_replacement(replacement)
        return splice(text, self.finditer(text), replacement)


def splice(text: str, matches: Iterable[Match], replacement: str) -> str:
    buf, cursor = [], 0
    for m in matches:
        if m.start_index > cursor:
            buf.append(text[cursor:m.start_index])
        buf.append(replacement)
        cursor = m.start_index + m.length
    if not buf:
        return text
    if cursor < len(text):
        buf.append(text[cursor:])
    return "".join(buf)


# ---- library surface ---------------------------------------------------------
def build(keywords: Iterable[str]) -> Aho:
    return Aho().build(keywords)


def search_all(ac: Aho, text: str, start: int = 0, max_results: Optional[int] = None) -> List[Match]:
    return ac.search_all(text, start, max_results)


def search_first(ac: Aho, text: str, start: int = 0) -> Match:
    return ac.search_first(text, start)


def replace(ac: Aho, text: str, replacement: str) -> str:
    return ac.replace(text, replacement)
