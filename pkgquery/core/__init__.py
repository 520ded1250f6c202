"""Core components for pkgquery."""

from .configuration import ConfigurationManager, parse_sort_key, expand_escapes
from .interfaces import (
    LocalPackage,
    Operation,
    PackageKind,
    QueryConfig,
    RemotePackage,
    SortKey
)
from .exceptions import (
    PkgQueryError,
    ConfigurationError,
    DatabaseError,
    VariantMismatchError
)

__all__ = [
    "ConfigurationManager",
    "parse_sort_key",
    "expand_escapes",
    "LocalPackage",
    "Operation",
    "PackageKind",
    "QueryConfig",
    "RemotePackage",
    "SortKey",
    "PkgQueryError",
    "ConfigurationError",
    "DatabaseError",
    "VariantMismatchError"
]
