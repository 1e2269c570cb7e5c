"""
word_predictor.core

The prediction engine:
 - closed symbol alphabet (Alphabet)
 - frequency-annotated prefix tree with prediction cursor (PrefixFrequencyIndex)
 - whitespace tokenizer feeding words into the index
"""

from .alphabet import Alphabet, DEFAULT_ALPHABET
from .trie import CursorState, InvalidWordError, PrefixFrequencyIndex, TrieNode
from .tokenizer import first_word, split_words

__all__ = [
    "Alphabet",
    "DEFAULT_ALPHABET",
    "CursorState",
    "InvalidWordError",
    "PrefixFrequencyIndex",
    "TrieNode",
    "first_word",
    "split_words",
]
