"""
Unit tests for the structured report.
"""

import unittest

from pkgquery.backends.local import InMemoryLocalDatabase
from pkgquery.core.interfaces import Operation, PackageKind, QueryConfig
from pkgquery.output.colors import default_scheme, plain_scheme
from pkgquery.output.structured import StructuredFormatter
from tests.fixtures.sample_data import sample_installed, sample_remote, sample_repositories


class TestStructuredFormatter(unittest.TestCase):
    """Test cases for StructuredFormatter."""

    def setUp(self):
        """Set up test fixtures."""
        self.db = InMemoryLocalDatabase(sample_installed(), sample_repositories())
        self.remote = {p.name: p for p in sample_remote()}
        self.core_bash = self.db.repository("core")[0]

    def render(self, package, kind, number=None, columns=None, **options):
        config = QueryConfig(color=False, **options)
        formatter = StructuredFormatter(config, local_db=self.db, colors=plain_scheme(), columns=columns)
        return formatter.render(package, kind, number=number).plain

    def test_search_result_with_installed_older_version(self):
        """Test a sync result whose installed version differs."""
        rendered = self.render(self.core_bash, PackageKind.LOCAL, op=Operation.SEARCH)
        self.assertEqual(
            rendered,
            "core/bash 5.1.016-2 (base) [installed: 5.1.016-1]\n"
            "    The GNU Bourne Again shell\n"
        )

    def test_installed_same_version(self):
        """Test that an identical installed version is not repeated."""
        vim = self.db.repository("extra")[0]
        rendered = self.render(vim, PackageKind.LOCAL, op=Operation.LIST_REPO)
        self.assertTrue(rendered.startswith("extra/vim 9.0.0001-1 [installed]\n"))

    def test_query_has_no_description(self):
        """Test that query listings omit the description."""
        bash = self.db.find_installed("bash")
        rendered = self.render(bash, PackageKind.LOCAL, op=Operation.QUERY)
        self.assertEqual(rendered, "local/bash 5.1.016-1 (base)\n")

    def test_numbering(self):
        """Test the index number prefix."""
        bash = self.db.find_installed("bash")
        rendered = self.render(bash, PackageKind.LOCAL, number=3, op=Operation.QUERY, numbering=True)
        self.assertEqual(rendered, "3 local/bash 5.1.016-1 (base)\n")

    def test_remote_annotations(self):
        """Test the out-of-date flag, votes and popularity."""
        rendered = self.render(self.remote["vim-plug"], PackageKind.REMOTE, op=Operation.SEARCH)
        self.assertEqual(
            rendered,
            "aur/vim-plug 0.11.0-1 (Out of Date) (90) (1.25)\n"
            "    Minimalist Vim plugin manager\n"
        )

    def test_remote_installed(self):
        """Test a remote result whose package is installed."""
        rendered = self.render(self.remote["yay"], PackageKind.REMOTE, op=Operation.QUERY)
        self.assertEqual(rendered, "aur/yay 11.3.0-1 [installed: 11.1.0-1] (1900) (30.50)\n")

    def test_size(self):
        """Test the size annotation in mebibytes."""
        rendered = self.render(self.core_bash, PackageKind.LOCAL, op=Operation.QUERY, show_size=True)
        self.assertTrue(rendered.startswith("core/bash 5.1.016-2 [9.00 M] (base)"))

    def test_no_size_for_remote(self):
        """Test that remote packages never show a size."""
        rendered = self.render(self.remote["yay"], PackageKind.REMOTE, op=Operation.QUERY, show_size=True)
        self.assertNotIn(" M]", rendered)

    def test_upgrade_listing(self):
        """Test the old -> new layout."""
        rendered = self.render(self.core_bash, PackageKind.LOCAL, op=Operation.QUERY, list_upgrades=True)
        self.assertEqual(rendered, "core/bash 5.1.016-1 -> 5.1.016-2\n")

    def test_foreign_comparison(self):
        """Test comparing a foreign package with the remote repository."""
        rendered = self.render(self.remote["yay"], PackageKind.REMOTE, op=Operation.QUERY, aur_foreign=True)
        self.assertEqual(rendered, "aur/yay 11.1.0-1 ( aur: 11.3.0-1 )\n")

    def test_wrapped_description(self):
        """Test that the description is wrapped to the terminal width."""
        neovim = self.db.repository("extra")[1]
        rendered = self.render(neovim, PackageKind.LOCAL, columns=30, op=Operation.SEARCH)
        lines = rendered.rstrip("\n").split("\n")
        self.assertEqual(lines[0], "extra/neovim 0.8.0-1")
        for line in lines[1:]:
            self.assertTrue(line.startswith("    "))
            self.assertLess(len(line), 30)

    def test_colors_applied(self):
        """Test that the color scheme styles the output."""
        config = QueryConfig(op=Operation.QUERY)
        formatter = StructuredFormatter(config, local_db=self.db, colors=default_scheme())
        text = formatter.render(self.db.find_installed("bash"), PackageKind.LOCAL)
        styles = {str(span.style) for span in text.spans}
        self.assertIn("bold green", styles)
        self.assertIn("bold yellow", styles)


if __name__ == '__main__':
    unittest.main()
