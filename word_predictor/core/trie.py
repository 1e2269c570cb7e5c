# trie.py
# Prefix tree ("bor") with frequency propagation, used for word prediction.
# Nodes live in one arena list and refer to their children by integer index.
# Every node caches the highest insertion count of any word below it, so
# completion just follows that maximum down without rescanning subtrees.

from __future__ import annotations
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from .alphabet import Alphabet, DEFAULT_ALPHABET

ROOT = 0


class CursorState(Enum):
    UNINITIALIZED = "uninitialized"
    FOUND = "found"
    NOT_FOUND = "not_found"


class InvalidWordError(ValueError):
    """Raised when a word to insert holds characters outside the alphabet."""

    def __init__(self, word: str, symbols: List[str]) -> None:
        self.word = word
        self.symbols = symbols
        shown = ", ".join(repr(s) for s in symbols)
        super().__init__(f"word {word!r} contains unsupported symbols: {shown}")


class TrieNode:
    """
    A single prefix in the index.
    children: one slot per symbol index, None or the arena index of the child
    best_count: max insertion count among word ends at or below this node
    For a terminator child best_count is simply how often the word was inserted.
    """

    __slots__ = ("children", "best_count")

    def __init__(self, slots: int) -> None:
        self.children: List[Optional[int]] = [None] * slots
        self.best_count = 0

    def __repr__(self) -> str:
        used = sum(1 for c in self.children if c is not None)
        return f"TrieNode(best_count={self.best_count}, children={used})"


class PrefixFrequencyIndex:
    """
    Prefix index answering "most frequent completion of this prefix".
    Used by the CLI for:
     - add_word / add_text (insert)
     - predict (full prefix from the root)
     - predict_prev_with_new_symbols (continue from the last predicted node)
    Not thread-safe: callers sharing an instance must serialize every call.
    """

    def __init__(self, alphabet: Optional[Alphabet] = None) -> None:
        self.alphabet = alphabet or DEFAULT_ALPHABET
        self._nodes: List[TrieNode] = [TrieNode(self.alphabet.slots)]
        self._words = 0
        self._cursor_node: Optional[int] = None
        self._cursor_prefix = ""
        self._cursor_state = CursorState.UNINITIALIZED

    # insertion -----------------------------------------------------
    def insert(self, word: str) -> None:
        """
        Add one occurrence of `word`.
        The word is checked against the alphabet before anything is touched,
        so a rejected word leaves the index exactly as it was.
        """
        self._validate(word)
        self._insert(word)

    def insert_many(self, words: Iterable[str]) -> None:
        """Insert several words; the whole batch is rejected if any word is invalid."""
        batch = list(words)
        for word in batch:
            self._validate(word)
        for word in batch:
            self._insert(word)

    def _validate(self, word: str) -> None:
        bad = self.alphabet.invalid_symbols(word)
        if bad:
            raise InvalidWordError(word, bad)

    def _insert(self, word: str) -> None:
        indexes = [self.alphabet.index_of(ch) for ch in word]
        indexes.append(self.alphabet.terminator_index)

        path = [ROOT]
        current = ROOT
        for i in indexes:
            child = self._nodes[current].children[i]
            if child is None:
                child = self._new_node()
                self._nodes[current].children[i] = child
            path.append(child)
            current = child

        end = self._nodes[current]
        if end.best_count == 0:
            self._words += 1
        end.best_count += 1

        # counts only grow, so max() with the new count restores the invariant
        count = end.best_count
        for idx in reversed(path[:-1]):
            node = self._nodes[idx]
            node.best_count = max(node.best_count, count)

    def _new_node(self) -> int:
        self._nodes.append(TrieNode(self.alphabet.slots))
        return len(self._nodes) - 1

    # prediction ----------------------------------------------------
    def predict(self, prefix: str) -> str:
        """
        Complete `prefix` with its most frequent known continuation.
        Unknown prefixes are returned unchanged. Always overwrites the cursor.
        """
        node = self._find(prefix, ROOT)
        self._move_cursor(node, prefix)
        if node is None:
            return prefix
        return prefix + self._complete(node)

    def predict_incremental(self, extra: str) -> str:
        """
        Continue the previous prediction with the symbols typed since then.
        Walks `extra` from the cached node instead of the root and returns
        previous prefix + extra + completion. Once the previous prefix was
        unknown every continuation stays unknown.
        """
        if self._cursor_state is CursorState.UNINITIALIZED:
            start: Optional[int] = ROOT
        else:
            start = self._cursor_node

        node = self._find(extra, start) if start is not None else None
        prefix = self._cursor_prefix + extra
        self._move_cursor(node, prefix)
        if node is None:
            return prefix
        return prefix + self._complete(node)

    def _find(self, path: str, start: int) -> Optional[int]:
        current = start
        for ch in path:
            # terminator or foreign characters are never part of a word path
            if ch not in self.alphabet:
                return None
            child = self._nodes[current].children[self.alphabet.index_of(ch)]
            if child is None:
                return None
            current = child
        return current

    def _complete(self, start: int) -> str:
        """Greedy walk: lowest symbol index whose child carries this node's best_count."""
        out: List[str] = []
        terminator = self.alphabet.terminator_index
        current = start
        while True:
            node = self._nodes[current]
            chosen = None
            for i, child in enumerate(node.children):
                if child is not None and self._nodes[child].best_count == node.best_count:
                    chosen = i
                    break
            # only the root of an empty index has no children
            if chosen is None or chosen == terminator:
                return "".join(out)
            out.append(self.alphabet.symbol_at(chosen))
            current = node.children[chosen]

    def _move_cursor(self, node: Optional[int], prefix: str) -> None:
        self._cursor_node = node
        self._cursor_prefix = prefix
        self._cursor_state = CursorState.NOT_FOUND if node is None else CursorState.FOUND

    @property
    def cursor_state(self) -> CursorState:
        return self._cursor_state

    @property
    def cursor_prefix(self) -> str:
        return self._cursor_prefix

    # inspection ----------------------------------------------------
    def count(self, word: str) -> int:
        """How many times `word` was inserted (0 if never)."""
        node = self._find(word, ROOT)
        if node is None:
            return 0
        end = self._nodes[node].children[self.alphabet.terminator_index]
        return 0 if end is None else self._nodes[end].best_count

    def __contains__(self, word: str) -> bool:
        return self.count(word) > 0

    def __len__(self) -> int:
        """Number of distinct words."""
        return self._words

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def best_count(self) -> int:
        """Insertion count of the most frequent word."""
        return self._nodes[ROOT].best_count

    def children_of(self, node: TrieNode) -> List[Tuple[str, TrieNode]]:
        """(symbol, child) pairs of `node` in symbol order, terminator last."""
        return [
            (self.alphabet.symbol_at(i), self._nodes[child])
            for i, child in enumerate(node.children)
            if child is not None
        ]

    def iter_nodes(self) -> Iterator[Tuple[str, TrieNode]]:
        """
        Depth-first (path, node) pairs starting at the root ("").
        Word-end nodes show up with the terminator appended to their path.
        Uses an explicit stack so deep words don't hit the recursion limit.
        """
        stack = [("", self._nodes[ROOT])]
        while stack:
            path, node = stack.pop()
            yield path, node
            for symbol, child in reversed(self.children_of(node)):
                stack.append((path + symbol, child))

    def reset(self) -> None:
        """Drop every word and forget the cursor."""
        self._nodes = [TrieNode(self.alphabet.slots)]
        self._words = 0
        self._move_cursor(None, "")
        self._cursor_state = CursorState.UNINITIALIZED
