"""
Rendering of query results.

This module provides the template formatter, the structured colored report,
description wrapping and the printer tying them to a result set.
"""

from .formatter import TemplateFormatter
from .structured import StructuredFormatter
from .printer import ResultPrinter, escape_quotes
from .colors import ColorScheme, default_scheme, plain_scheme
from .wrap import wrap_text

__all__ = [
    'TemplateFormatter',
    'StructuredFormatter',
    'ResultPrinter',
    'escape_quotes',
    'ColorScheme',
    'default_scheme',
    'plain_scheme',
    'wrap_text'
]
