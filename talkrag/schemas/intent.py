"""
Schema for Stage 1 (Query Understanding) output.
"""

from __future__ import annotations

from enum import Enum


class QueryIntent(str, Enum):
    """Purpose of a question; selects the instruction directive."""
    FACT = "fact"
    LIST = "list"
    SUMMARY = "summary"
    RECOMMEND = "recommend"
