"""
Pydantic schemas for API validation and data contracts.
"""

from .analysis import (
    AnalyzeRequest,
    BatchAnalyzeRequest,
    BatchItemError,
)

__all__ = [
    'AnalyzeRequest',
    'BatchAnalyzeRequest',
    'BatchItemError',
]
