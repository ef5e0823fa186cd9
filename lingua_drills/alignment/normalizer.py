"""
Text normalization applied before any drill comparison.
"""

import re


_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Canonicalize a sentence for comparison.

    Lowercases, strips every character that is neither a word character
    nor whitespace (underscore counts as punctuation), collapses whitespace
    runs to a single space and trims the ends. Idempotent.

    Args:
        text: Raw sentence

    Returns:
        Normalized sentence, possibly empty
    """
    text = _NON_WORD_RE.sub("", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()
