# tokenizer.py - split free text into words for the index

from typing import List


def split_words(text: str, lowercase: bool = False) -> List[str]:
    """
    Whitespace tokenizer: runs of spaces/tabs count as one separator,
    empty tokens are dropped.
    """
    if lowercase:
        text = text.lower()
    return text.split()


def first_word(text: str, lowercase: bool = False) -> str:
    """First token of a line, or "" for a blank line."""
    words = split_words(text, lowercase=lowercase)
    return words[0] if words else ""
