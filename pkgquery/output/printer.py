"""
Printing of query results.

The printer either renders each match as soon as it is found, or buffers it
in a ResultSet when a sort key is configured and renders the whole set once
the query is complete.
"""

import logging
import sys
from typing import IO, Iterable, Optional, Union

from rich.console import Console

from pkgquery.core.interfaces import LocalPackage, PackageKind, QueryConfig, RemotePackage, SortKey
from pkgquery.output.colors import ColorScheme, default_scheme, plain_scheme
from pkgquery.output.formatter import TemplateFormatter
from pkgquery.output.structured import StructuredFormatter
from pkgquery.search.relevance import RelevanceScorer
from pkgquery.search.results import ResultSet


logger = logging.getLogger(__name__)


def escape_quotes(text: str) -> str:
    """Prefix every double quote with a backslash."""
    return text.replace('"', '\\"')


class ResultPrinter:
    """
    Renders results to the terminal.

    Template mode writes one line per package; structured mode writes the
    colored report through a rich console.
    """

    def __init__(
        self,
        config: QueryConfig,
        local_db=None,
        stream: Optional[IO[str]] = None,
        colors: Optional[ColorScheme] = None,
        console: Optional[Console] = None
    ):
        """
        Initialize the printer.

        Args:
            config: Query configuration.
            local_db: Local database used for installed-package lookups.
            stream: Output stream. Defaults to standard output.
            colors: Color scheme for structured mode.
            console: Console to print structured output with. If None, one is
                created on ``stream``.
        """
        self.config = config
        self.local_db = local_db
        self.stream = stream or sys.stdout
        self.console = console or Console(
            file=self.stream,
            no_color=not config.color,
            highlight=False,
            soft_wrap=True,
            emoji=False,
        )
        if colors is None:
            colors = default_scheme() if config.color else plain_scheme()
        columns = self.console.width if self.console.is_terminal else None
        self.results = ResultSet(local_db=local_db)
        self.scorer = RelevanceScorer()
        self.template_formatter = TemplateFormatter(local_db=local_db, delimiter=config.delimiter)
        self.structured_formatter = StructuredFormatter(config, local_db=local_db, colors=colors, columns=columns)
        self.count = 0

    def print_package(
        self,
        target: Optional[str],
        package: Union[LocalPackage, RemotePackage, None],
        kind: PackageKind
    ) -> None:
        """
        Render one package immediately.

        Args:
            target: Raw search term that produced the match.
            package: Package to print.
            kind: Variant of the package.
        """
        if self.config.quiet or target is None or package is None:
            return

        if self.config.format_out is None:
            self.count += 1
            text = self.structured_formatter.render(package, kind, number=self.count)
            self.console.print(text, end="")
            return

        line = self.template_formatter.render(self.config.format_out, package, kind, target)
        if line is None:
            return

        if self.config.escape:
            self.stream.write(escape_quotes(line))
        else:
            self.stream.write(f"{line}\n")
        self.stream.flush()

    def print_or_add(
        self,
        package: Union[LocalPackage, RemotePackage],
        kind: PackageKind,
        target: str = ""
    ) -> None:
        """
        Print a match right away, or buffer it when results are sorted.
        """
        if self.config.sort is SortKey.NONE:
            self.print_package(target, package, kind)
            return
        self.results.insert(package, kind, target)

    def show_results(self, targets: Optional[Iterable[str]] = None) -> int:
        """
        Sort, print and drain the buffered results.

        Args:
            targets: Search terms used to score results when sorting by relevance.

        Returns:
            Number of results printed.
        """
        if not self.results:
            return 0

        if self.config.sort is SortKey.RELEVANCE and targets is not None:
            self.scorer.score_all(targets, self.results)

        self.results.sort(self.config.sort)
        shown = 0
        for entry in self.results.iterate(reverse=self.config.reverse):
            self.print_package(entry.target, entry.package, entry.kind)
            shown += 1

        self.results.drain()
        logger.debug(f"Printed {shown} sorted results")
        return shown
