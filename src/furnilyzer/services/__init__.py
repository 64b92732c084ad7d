"""
Services: the query analyzer, pass scoring, term supply and result output.
"""

from .analyzer import FurnitureAnalyzer
from .scoring import (
    Pass,
    PassSummary,
    PassSelection,
    SelectionRule,
    SELECTION_RULES,
    calculate_confidence,
    select_pass,
)
from .term_source import TermSource, TermSourceError, JsonTermSource, PostgresTermSource
from .bootstrap import build_analyzer, get_term_source
from .results_writer import ResultsFileHandler, format_result

__all__ = [
    'FurnitureAnalyzer',
    'Pass',
    'PassSummary',
    'PassSelection',
    'SelectionRule',
    'SELECTION_RULES',
    'calculate_confidence',
    'select_pass',
    'TermSource',
    'TermSourceError',
    'JsonTermSource',
    'PostgresTermSource',
    'build_analyzer',
    'get_term_source',
    'ResultsFileHandler',
    'format_result',
]
