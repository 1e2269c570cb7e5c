"""
word_predictor

Most-frequent-word prediction over a prefix tree.
 - core: alphabet, PrefixFrequencyIndex, tokenizer
 - utils: logging, JSON config, latency metrics
 - cli: interactive command loop
"""

from .core import Alphabet, CursorState, InvalidWordError, PrefixFrequencyIndex

__all__ = ["Alphabet", "CursorState", "InvalidWordError", "PrefixFrequencyIndex"]

__version__ = "0.1.0"
