"""
Edit-distance relevance scoring for search results.

The relevance of a result is the smallest Levenshtein distance between its
name and any of the search terms; lower is a closer match.
"""

import logging
from typing import Iterable

from pkgquery.search.results import ResultSet


logger = logging.getLogger(__name__)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Compute the Levenshtein distance between two strings.

    Insertion, deletion and substitution each cost 1. Uses a single row of
    ``len(a) + 1`` cells swept once per character of ``b``.

    Args:
        a: First string.
        b: Second string.

    Returns:
        The edit distance.
    """
    column = list(range(len(a) + 1))
    for x in range(1, len(b) + 1):
        column[0] = x
        last_diag = x - 1
        for y in range(1, len(a) + 1):
            old_diag = column[y]
            column[y] = min(
                column[y] + 1,
                column[y - 1] + 1,
                last_diag + (0 if a[y - 1] == b[x - 1] else 1)
            )
            last_diag = old_diag
    return column[len(a)]


class RelevanceScorer:
    """
    Scores result entries against search terms.
    """

    def score_all(self, targets: Iterable[str], results: ResultSet) -> None:
        """
        Lower every entry's relevance to its best distance to any target.

        Args:
            targets: Search terms.
            results: Result set whose entries are updated in place.
        """
        targets = list(targets)
        for target in targets:
            for entry in results.iterate():
                entry.lower_relevance(levenshtein_distance(target, entry.name or ""))
        logger.debug(f"Scored {len(results)} results against {len(targets)} targets")
