"""
Category dictionaries: canonical term maps and their data-file loaders.
"""

from .base import Category, Dictionary, normalize_term, MULTI_VALUED_CATEGORIES
from .loader import DictionaryLoadError, load_dictionary_file, load_static_dictionaries

__all__ = [
    'Category',
    'Dictionary',
    'normalize_term',
    'MULTI_VALUED_CATEGORIES',
    'DictionaryLoadError',
    'load_dictionary_file',
    'load_static_dictionaries',
]
