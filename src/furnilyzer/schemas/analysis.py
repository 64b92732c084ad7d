"""
Pydantic schemas for the analysis API.

Request bodies are validated here; the analyzer itself works on plain
strings and dataclasses.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, StrictStr, field_validator


class AnalyzeRequest(BaseModel):
    """Request schema for single query analysis."""
    text: StrictStr = Field(..., description="Furniture search query")


class BatchAnalyzeRequest(BaseModel):
    """
    Request schema for batch analysis.

    Items are not validated individually; a non-string item produces an
    error record in the response instead of failing the whole batch.
    """
    texts: List[Any] = Field(..., description="Search queries to analyze")

    @field_validator('texts', mode='before')
    @classmethod
    def require_list(cls, v):
        """Reject strings and other iterables that pydantic would coerce."""
        if not isinstance(v, list):
            raise ValueError("texts must be an array")
        return v


class BatchItemError(BaseModel):
    """Error record for one failed batch item."""
    error: str = Field(..., description="Short error message")
    text: Any = Field(default=None, description="The item as received")
    details: str = Field(default="", description="Failure details")
