"""
Name matching against search terms.
"""

import logging
import re
from typing import Iterable, Optional


logger = logging.getLogger(__name__)


def name_contains_targets(targets: Iterable[str], name: Optional[str], use_regex: bool = False) -> bool:
    """
    Check whether ``name`` matches every search term.

    Without ``use_regex`` each term must be a case-insensitive substring of
    the name. With it, each term is a case-insensitive regular expression,
    and a plain substring also counts as a match. A term that is not a valid
    expression makes the whole check fail.

    Args:
        targets: Search terms.
        name: Package name (or description) to test.
        use_regex: Interpret terms as regular expressions.

    Returns:
        True if all terms match.
    """
    targets = [t for t in targets if t]
    if not targets or not name:
        return False

    lowered = name.lower()
    for target in targets:
        if use_regex:
            try:
                pattern = re.compile(target, re.IGNORECASE)
            except re.error as e:
                logger.debug(f"Ignoring invalid expression '{target}': {e}")
                return False
            if not pattern.search(name) and target not in name:
                return False
        elif target.lower() not in lowered:
            return False

    return True
