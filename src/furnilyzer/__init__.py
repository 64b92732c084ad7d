"""
Furnilyzer - Furniture Search Query Analysis.

Extracts product type, brand, product name, features, styles and places
from free-form furniture search queries using category dictionaries,
a word-level trie and fuzzy matching.
"""

__version__ = "1.0.0"
__author__ = "Furnilyzer"

from .models import AnalysisResult, DictionaryEntry, MatchResult, PlaceEntry, TermRecord
from .dictionaries import Category, Dictionary
from .services import FurnitureAnalyzer, build_analyzer

__all__ = [
    "AnalysisResult",
    "DictionaryEntry",
    "MatchResult",
    "PlaceEntry",
    "TermRecord",
    "Category",
    "Dictionary",
    "FurnitureAnalyzer",
    "build_analyzer",
]
