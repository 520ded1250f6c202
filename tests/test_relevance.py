"""
Unit tests for edit-distance relevance scoring.
"""

import unittest

from pkgquery.core.interfaces import LocalPackage, PackageKind, RemotePackage
from pkgquery.search.relevance import RelevanceScorer, levenshtein_distance
from pkgquery.search.results import ResultSet


class TestLevenshteinDistance(unittest.TestCase):
    """Test cases for levenshtein_distance."""

    def test_identity(self):
        """Test that a string is at distance zero of itself."""
        for s in ["", "a", "bash", "neovim"]:
            self.assertEqual(levenshtein_distance(s, s), 0)

    def test_empty(self):
        """Test distance against the empty string."""
        self.assertEqual(levenshtein_distance("", "vim"), 3)
        self.assertEqual(levenshtein_distance("neovim", ""), 6)

    def test_symmetry(self):
        """Test that the distance is symmetric."""
        pairs = [("kitten", "sitting"), ("vim", "neovim"), ("flaw", "lawn"), ("ab", "ba")]
        for a, b in pairs:
            self.assertEqual(levenshtein_distance(a, b), levenshtein_distance(b, a))

    def test_known_values(self):
        """Test textbook examples."""
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)
        self.assertEqual(levenshtein_distance("flaw", "lawn"), 2)
        self.assertEqual(levenshtein_distance("vim", "neovim"), 3)

    def test_no_transposition(self):
        """Test that swapping two characters costs two edits."""
        self.assertEqual(levenshtein_distance("ab", "ba"), 2)


class TestRelevanceScorer(unittest.TestCase):
    """Test cases for RelevanceScorer."""

    def setUp(self):
        """Set up test fixtures."""
        self.results = ResultSet()
        self.vim = self.results.insert(LocalPackage(name="vim", version="9.0"), PackageKind.LOCAL)
        self.neovim = self.results.insert(LocalPackage(name="neovim", version="0.8"), PackageKind.LOCAL)
        self.plug = self.results.insert(RemotePackage(name="vim-plug", version="0.11"), PackageKind.REMOTE)
        self.scorer = RelevanceScorer()

    def test_minimum_over_targets(self):
        """Test that the best distance over all targets is kept."""
        self.scorer.score_all(["vim", "neovim"], self.results)
        self.assertEqual(self.vim.relevance, 0)
        self.assertEqual(self.neovim.relevance, 0)
        self.assertEqual(self.plug.relevance, 5)

    def test_never_increases(self):
        """Test that scoring against a worse target keeps the better score."""
        self.scorer.score_all(["vim"], self.results)
        self.scorer.score_all(["completely-different"], self.results)
        self.assertEqual(self.vim.relevance, 0)

    def test_unscored_until_scored(self):
        """Test that entries start unscored."""
        self.assertIsNone(self.vim.relevance)
        self.scorer.score_all([], self.results)
        self.assertIsNone(self.vim.relevance)


if __name__ == '__main__':
    unittest.main()
