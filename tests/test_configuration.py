"""
Tests for the configuration layer.
"""

import unittest
from unittest.mock import patch

import pytest

from pkgquery.core.configuration import (
    ConfigurationManager, expand_escapes, parse_operation, parse_sort_key
)
from pkgquery.core.exceptions import ConfigurationError
from pkgquery.core.interfaces import Operation, QueryConfig, SortKey


class TestParsing(unittest.TestCase):
    """Test cases for the value parsers."""

    def test_sort_key_aliases(self):
        """Test every spelling of the sort keys."""
        self.assertEqual(parse_sort_key("name"), SortKey.NAME)
        self.assertEqual(parse_sort_key("vote"), SortKey.VOTES)
        self.assertEqual(parse_sort_key("w"), SortKey.VOTES)
        self.assertEqual(parse_sort_key("POP"), SortKey.POPULARITY)
        self.assertEqual(parse_sort_key("1"), SortKey.INSTALL_DATE)
        self.assertEqual(parse_sort_key("isize"), SortKey.INSTALL_SIZE)
        self.assertEqual(parse_sort_key("rel"), SortKey.RELEVANCE)
        self.assertEqual(parse_sort_key(None), SortKey.NONE)
        self.assertEqual(parse_sort_key(SortKey.NAME), SortKey.NAME)

    def test_unknown_sort_key(self):
        """Test that an unknown sort key is rejected."""
        with self.assertRaises(ConfigurationError):
            parse_sort_key("size")

    def test_operation(self):
        """Test operation names."""
        self.assertEqual(parse_operation("list-repo"), Operation.LIST_REPO)
        self.assertEqual(parse_operation(Operation.SEARCH), Operation.SEARCH)
        with self.assertRaises(ConfigurationError):
            parse_operation("remove")

    def test_expand_escapes(self):
        """Test backslash escapes in format strings."""
        self.assertEqual(expand_escapes("%n\\t%v\\n"), "%n\t%v\n")
        self.assertEqual(expand_escapes("a\\\\b"), "a\\b")
        self.assertEqual(expand_escapes("\\e[1m"), "\033[1m")
        self.assertEqual(expand_escapes("keep \\x"), "keep \\x")
        self.assertEqual(expand_escapes("trailing\\"), "trailing\\")
        self.assertIsNone(expand_escapes(None))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration environment variables."""
    for key in ConfigurationManager.ENV_KEYS:
        monkeypatch.delenv(ConfigurationManager.ENV_PREFIX + key.upper(), raising=False)
    return monkeypatch


def test_defaults(clean_env):
    """Test building without file, environment or overrides."""
    config = ConfigurationManager().build()
    assert config == QueryConfig()


def test_file_settings(clean_env, tmp_path):
    """Test reading settings from a YAML file."""
    path = tmp_path / "config.yaml"
    path.write_text("sort: vote\nreverse: yes\ndelimiter: ','\nformat_out: '%n\\t%v'\n")

    config = ConfigurationManager(path).build()

    assert config.sort is SortKey.VOTES
    assert config.reverse is True
    assert config.delimiter == ","
    assert config.format_out == "%n\t%v"


def test_priority(clean_env, tmp_path):
    """Test that environment beats the file and overrides beat both."""
    path = tmp_path / "config.yaml"
    path.write_text("sort: name\ncolor: true\n")
    clean_env.setenv("PKGQUERY_SORT", "pop")
    clean_env.setenv("PKGQUERY_COLOR", "false")

    manager = ConfigurationManager(path)
    config = manager.build()
    assert config.sort is SortKey.POPULARITY
    assert config.color is False

    config = manager.build({"sort": "rel", "quiet": None})
    assert config.sort is SortKey.RELEVANCE
    assert config.quiet is False


def test_unknown_key_is_ignored(clean_env, tmp_path):
    """Test that unknown keys only produce a warning."""
    path = tmp_path / "config.yaml"
    path.write_text("colour: false\n")
    with patch('pkgquery.core.configuration.logger') as mock_logger:
        config = ConfigurationManager(path).build()
    assert config.color is True
    mock_logger.warning.assert_called_once()


def test_invalid_boolean(clean_env):
    """Test that a malformed boolean is rejected."""
    clean_env.setenv("PKGQUERY_COLOR", "maybe")
    with pytest.raises(ConfigurationError):
        ConfigurationManager().build()


def test_missing_file(clean_env, tmp_path):
    """Test that a missing configuration file is an error."""
    with pytest.raises(ConfigurationError):
        ConfigurationManager(tmp_path / "absent.yaml").build()


def test_malformed_file(clean_env, tmp_path):
    """Test that invalid YAML and non-mapping documents are errors."""
    broken = tmp_path / "broken.yaml"
    broken.write_text("sort: [name\n")
    with pytest.raises(ConfigurationError):
        ConfigurationManager(broken).build()

    listing = tmp_path / "list.yaml"
    listing.write_text("- name\n")
    with pytest.raises(ConfigurationError):
        ConfigurationManager(listing).build()


def test_empty_file(clean_env, tmp_path):
    """Test that an empty file yields the defaults."""
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert ConfigurationManager(path).build() == QueryConfig()
