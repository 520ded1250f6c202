"""
Tests for search term matching.
"""

from pkgquery.search.matching import name_contains_targets


def test_substring_case_insensitive():
    assert name_contains_targets(["VIM"], "neovim")
    assert name_contains_targets(["neo", "vim"], "neovim")
    assert not name_contains_targets(["neo", "emacs"], "neovim")


def test_empty_input():
    assert not name_contains_targets([], "neovim")
    assert not name_contains_targets([""], "neovim")
    assert not name_contains_targets(["vim"], None)
    assert not name_contains_targets(["vim"], "")


def test_regex():
    assert name_contains_targets(["^neo"], "neovim", use_regex=True)
    assert name_contains_targets(["VIM$"], "neovim", use_regex=True)
    assert not name_contains_targets(["^vim"], "neovim", use_regex=True)


def test_invalid_regex():
    assert not name_contains_targets(["vim("], "vim(1)", use_regex=True)
