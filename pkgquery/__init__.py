"""
pkgquery - query, rank and print packages from the local database and the
remote user repository.

This package aggregates matches from both sources into a result set, ranks
them by a selectable key (including edit-distance relevance to the search
terms) and renders them as a colored report or through a format template.
"""

__version__ = "0.1.0"

from .core.exceptions import PkgQueryError, ConfigurationError, DatabaseError
from .core.interfaces import LocalPackage, RemotePackage, PackageKind, QueryConfig, SortKey, Operation
from .target import Target, DepMod, parse_target, check_version, is_compatible
from .search.results import ResultSet, ResultEntry
from .search.relevance import RelevanceScorer, levenshtein_distance
from .output.formatter import TemplateFormatter
from .output.wrap import wrap_text

__all__ = [
    "PkgQueryError",
    "ConfigurationError",
    "DatabaseError",
    "LocalPackage",
    "RemotePackage",
    "PackageKind",
    "QueryConfig",
    "SortKey",
    "Operation",
    "Target",
    "DepMod",
    "parse_target",
    "check_version",
    "is_compatible",
    "ResultSet",
    "ResultEntry",
    "RelevanceScorer",
    "levenshtein_distance",
    "TemplateFormatter",
    "wrap_text"
]
