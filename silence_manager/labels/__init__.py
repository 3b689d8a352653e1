"""
Labels module - value cache, fuzzy search and selections.

This module contains:
    - registry: Label registry with per-label refresh tokens
    - fuzzy: Fuzzy search index over a label's values
    - selection: Selection state and matcher building
"""

from silence_manager.labels.fuzzy import FuzzyIndex, SearchHit, search_values
from silence_manager.labels.registry import LabelRegistry, LabelState, RefreshOutcome
from silence_manager.labels.selection import (
    SelectionState,
    build_matchers,
    format_matchers_preview,
)

__all__ = [
    # Registry
    "LabelRegistry",
    "LabelState",
    "RefreshOutcome",
    # Search
    "FuzzyIndex",
    "SearchHit",
    "search_values",
    # Selection
    "SelectionState",
    "build_matchers",
    "format_matchers_preview",
]
