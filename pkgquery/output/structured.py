"""
Structured, colored report of a result.

Each package is rendered as one paragraph: optional index number,
``repository/name``, version, and a series of optional annotations,
followed by the wrapped description for search and repository listings.
"""

import logging
from typing import Optional, Union

from rich.text import Text

from pkgquery.core.interfaces import LocalPackage, Operation, PackageKind, QueryConfig, RemotePackage
from pkgquery.fields import REMOTE_REPOSITORY, get_field
from pkgquery.output.colors import ColorScheme, default_scheme
from pkgquery.output.wrap import INDENT, wrap_text
from pkgquery.version import vercmp


logger = logging.getLogger(__name__)


MEBIBYTE = 1024.0 * 1024.0


class StructuredFormatter:
    """
    Builds the colored report for one package.
    """

    def __init__(
        self,
        config: QueryConfig,
        local_db=None,
        colors: Optional[ColorScheme] = None,
        columns: Optional[int] = None
    ):
        """
        Initialize the structured formatter.

        Args:
            config: Query configuration.
            local_db: Local database used to find installed versions.
            colors: Color scheme. If None, the default scheme is used.
            columns: Terminal width for wrapping descriptions, None if unknown.
        """
        self.config = config
        self.local_db = local_db
        self.colors = colors or default_scheme()
        self.columns = columns

    def render(
        self,
        package: Union[LocalPackage, RemotePackage],
        kind: PackageKind,
        number: Optional[int] = None
    ) -> Text:
        """
        Render a package.

        Args:
            package: Package to render.
            kind: Variant of the package.
            number: Index shown in front of the package when numbering is enabled.

        Returns:
            Styled text ending with a newline.
        """
        config = self.config
        colors = self.colors
        remote = kind is PackageKind.REMOTE
        upgrades = config.aur_upgrades or config.list_upgrades

        def field(c: str) -> Optional[str]:
            return get_field(kind, package, c, config.delimiter)

        text = Text()
        if config.numbering and number is not None:
            text.append(str(number), style=colors.number)
            text.append(" ")

        repository = field("r") if config.aur_foreign else field("s")
        if repository:
            text.append(f"{repository}/", style=colors.repo_style(repository))
        text.append(package.name, style=colors.package)
        text.append(" ")

        local_version = self._installed_version(package.name)
        version = field("V" if upgrades else "v")
        maintainer = field("m") if remote else None

        if config.aur_foreign:
            self._append_foreign_version(text, package, kind, local_version, version)
            return text

        version_style = colors.orphan if remote and not maintainer else colors.version
        if config.list_upgrades:
            text.append(local_version or "-", style=version_style)
            text.append(" -> ")
            text.append(version or "", style=colors.version)
        else:
            text.append(version or "", style=version_style)

        if config.show_size and field("r") != REMOTE_REPOSITORY:
            size = package.install_size if isinstance(package, LocalPackage) else 0
            text.append(f" [{size / MEBIBYTE:.2f} M]")

        if upgrades:
            text.append("\n")
            return text

        groups = field("g")
        if groups:
            text.append(f" ({groups})", style=colors.group)

        self._append_install_info(text, field("r"), local_version, version)

        if remote:
            self._append_remote_status(text, field)

        text.append("\n")

        if config.op in (Operation.SEARCH, Operation.LIST_REPO):
            description = wrap_text(field("d"), INDENT, self.columns)
            text.append(description, style=colors.description)
            text.append("\n")

        return text

    def _installed_version(self, name: str) -> Optional[str]:
        if self.local_db is None:
            return None
        installed = self.local_db.find_installed(name)
        return installed.version if installed else None

    def _append_foreign_version(self, text, package, kind, local_version, version) -> None:
        colors = self.colors
        if kind is PackageKind.REMOTE:
            maintainer = package.maintainer
            style = colors.version
            if not maintainer:
                style = colors.orphan
            elif package.out_of_date:
                style = colors.out_of_date
            text.append(local_version or "-", style=style)
            if vercmp(version, local_version) > 0:
                text.append(f" ( aur: {version} )")
        else:
            text.append(local_version or "-", style=colors.version)
        text.append("\n")

    def _append_install_info(self, text, repository, local_version, version) -> None:
        if not local_version or repository == "local":
            return
        colors = self.colors
        text.append(" [installed", style=colors.installed)
        if version != local_version:
            text.append(": ", style=colors.installed)
            text.append(local_version, style=colors.local_version)
        text.append("]", style=colors.installed)

    def _append_remote_status(self, text, field) -> None:
        colors = self.colors
        out_of_date = field("o")
        if out_of_date and out_of_date != "0":
            text.append(" (Out of Date)", style=colors.out_of_date)
        votes = field("w")
        if votes:
            text.append(f" ({votes})", style=colors.votes)
        popularity = field("p")
        if popularity:
            text.append(f" ({popularity})", style=colors.popularity)
