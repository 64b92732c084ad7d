"""
Text cleaning and normalization utilities.
"""
import re
from typing import List

PUNCTUATION_RE = re.compile(r"[()\[\]{}.,;:!?'\"]")
SPECIAL_CHARS_RE = re.compile(r"[^\w\s-]")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in text.

    Examples:
        >>> normalize_whitespace("hello    world\\n\\ntest")
        'hello world test'
    """
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """
    Replace punctuation and special characters with spaces.

    Word characters, whitespace and hyphens survive, so "mid-century"
    stays one token.

    Examples:
        >>> clean_text("sofa, (with) arms!")
        'sofa with arms'
    """
    if not text:
        return ""

    text = PUNCTUATION_RE.sub(" ", text)
    text = SPECIAL_CHARS_RE.sub(" ", text)
    return normalize_whitespace(text)


def tokenize(text: str) -> List[str]:
    """Lowercased whitespace tokens."""
    return text.lower().split()
