"""
Exceptions for pkgquery.

This module contains the exception hierarchy for pkgquery operations.
"""


class PkgQueryError(Exception):
    """Base exception for pkgquery operations."""
    pass


class ConfigurationError(PkgQueryError):
    """Raised when configuration is invalid."""
    pass


class DatabaseError(PkgQueryError):
    """Raised when a package database or repository dump cannot be loaded."""
    pass


class VariantMismatchError(PkgQueryError, TypeError):
    """Raised when a result is accessed through the wrong package variant."""
    pass
