"""
Result collection, ranking and matching.

This module provides the per-query result set, its sort orders, and the
edit-distance relevance scorer used to rank results against search terms.
"""

from .results import Pin, ResultEntry, ResultSet
from .relevance import RelevanceScorer, levenshtein_distance
from .matching import name_contains_targets

__all__ = [
    'Pin',
    'ResultEntry',
    'ResultSet',
    'RelevanceScorer',
    'levenshtein_distance',
    'name_contains_targets'
]
