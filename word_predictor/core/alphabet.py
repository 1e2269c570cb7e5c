# alphabet.py
# Closed symbol alphabet for the prefix index.
# Letters are a contiguous character range start..end and map to 0..A-1,
# the terminator is reserved and always maps to A (it sorts after every letter).

from __future__ import annotations
from typing import List, Optional

DEFAULT_START = "a"
DEFAULT_END = "z"
DEFAULT_TERMINATOR = "#"


class Alphabet:
    """
    Bijective symbol <-> index mapping.
    size: number of letters (A)
    slots: width of a node's child array (A + 1, last slot = terminator)
    """

    __slots__ = ("start", "end", "terminator", "size")

    def __init__(
        self,
        start: str = DEFAULT_START,
        end: str = DEFAULT_END,
        terminator: str = DEFAULT_TERMINATOR,
    ) -> None:
        for name, ch in (("start", start), ("end", end), ("terminator", terminator)):
            if not isinstance(ch, str) or len(ch) != 1:
                raise ValueError(f"{name} must be a single character, got {ch!r}")
        if ord(end) < ord(start):
            raise ValueError(f"empty alphabet range {start!r}..{end!r}")
        if start <= terminator <= end:
            raise ValueError(f"terminator {terminator!r} lies inside {start!r}..{end!r}")

        self.start = start
        self.end = end
        self.terminator = terminator
        self.size = ord(end) - ord(start) + 1

    @property
    def slots(self) -> int:
        return self.size + 1

    @property
    def terminator_index(self) -> int:
        return self.size

    def index_of(self, symbol: str) -> Optional[int]:
        """Index for a letter or the terminator, None for anything else."""
        if symbol == self.terminator:
            return self.size
        if len(symbol) == 1 and self.start <= symbol <= self.end:
            return ord(symbol) - ord(self.start)
        return None

    def symbol_at(self, index: int) -> str:
        if index == self.size:
            return self.terminator
        if 0 <= index < self.size:
            return chr(ord(self.start) + index)
        raise IndexError(f"symbol index {index} outside 0..{self.size}")

    def invalid_symbols(self, word: str) -> List[str]:
        """Distinct characters of `word` that may not appear in a word, first-seen order."""
        bad: List[str] = []
        for ch in word:
            if ch not in self and ch not in bad:
                bad.append(ch)
        return bad

    def __contains__(self, symbol: object) -> bool:
        # the terminator is never a word letter
        return isinstance(symbol, str) and len(symbol) == 1 and self.start <= symbol <= self.end

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return (self.start, self.end, self.terminator) == (other.start, other.end, other.terminator)

    def __hash__(self) -> int:
        return hash((self.start, self.end, self.terminator))

    def __repr__(self) -> str:
        return f"Alphabet({self.start!r}..{self.end!r}, terminator={self.terminator!r})"


DEFAULT_ALPHABET = Alphabet()
