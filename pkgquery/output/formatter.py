"""
Template rendering of results.

A template is literal text interleaved with ``%<c>`` escapes, where ``c`` is
a field character (see :mod:`pkgquery.fields`). ``%%`` produces a literal
``%`` and a ``%`` at the very end of the template is kept as is.
"""

import logging
from typing import Optional, Union

from pkgquery.core.interfaces import LocalPackage, PackageKind, RemotePackage
from pkgquery.fields import FieldKind, classify_field, get_field, local_field


logger = logging.getLogger(__name__)


MISSING_FIELD = "-"


class TemplateFormatter:
    """
    Renders packages through user-supplied format templates.
    """

    def __init__(self, local_db=None, delimiter: str = " "):
        """
        Initialize the formatter.

        Args:
            local_db: Local database queried for installed-only fields.
            delimiter: Separator used for list fields.
        """
        self.local_db = local_db
        self.delimiter = delimiter

    def render(
        self,
        template: Optional[str],
        package: Union[LocalPackage, RemotePackage],
        kind: PackageKind,
        target: str = ""
    ) -> Optional[str]:
        """
        Render one package.

        Args:
            template: Format template. If None, nothing is rendered.
            package: Package to render.
            kind: Variant of the package.
            target: Raw search term that produced the match, used for ``%t``.

        Returns:
            The rendered string, or None when there is no template.
        """
        if template is None:
            return None

        out = []
        pos = 0
        end = len(template)
        while True:
            c = template.find("%", pos)
            if c == -1 or c + 1 == end:
                break
            out.append(template[pos:c])
            field_char = template[c + 1]
            if field_char == "%":
                out.append("%")
            else:
                value = self.field_value(field_char, package, kind, target)
                out.append(value if value is not None else MISSING_FIELD)
            pos = c + 2

        out.append(template[pos:])
        return "".join(out)

    def field_value(
        self,
        field_char: str,
        package: Union[LocalPackage, RemotePackage],
        kind: PackageKind,
        target: str = ""
    ) -> Optional[str]:
        """Resolve a single field character for a package."""
        field_kind = classify_field(field_char)
        if field_kind is FieldKind.CONTEXT:
            return target
        if field_kind is FieldKind.ALWAYS_LOCAL:
            return self._installed_field(package.name, field_char)
        return get_field(kind, package, field_char, self.delimiter)

    def _installed_field(self, name: Optional[str], field_char: str) -> Optional[str]:
        if self.local_db is None or not name:
            return None
        installed = self.local_db.find_installed(name)
        if installed is None:
            return None
        return local_field(installed, field_char, self.delimiter)
