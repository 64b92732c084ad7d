"""
Utility modules for Furnilyzer.
"""
from .text_cleaning import clean_text, normalize_whitespace, tokenize

__all__ = [
    "clean_text",
    "normalize_whitespace",
    "tokenize",
]
