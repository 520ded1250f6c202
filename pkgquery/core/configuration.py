"""
Configuration management for pkgquery.

This module provides the ConfigurationManager class which builds a
QueryConfig from built-in defaults, an optional YAML file and environment
variable overrides.
"""

import logging
import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from pkgquery.core.exceptions import ConfigurationError
from pkgquery.core.interfaces import Operation, QueryConfig, SortKey


logger = logging.getLogger(__name__)


SORT_KEY_ALIASES = {
    "none": SortKey.NONE,
    "name": SortKey.NAME,
    "n": SortKey.NAME,
    "vote": SortKey.VOTES,
    "votes": SortKey.VOTES,
    "w": SortKey.VOTES,
    "pop": SortKey.POPULARITY,
    "popularity": SortKey.POPULARITY,
    "p": SortKey.POPULARITY,
    "idate": SortKey.INSTALL_DATE,
    "1": SortKey.INSTALL_DATE,
    "isize": SortKey.INSTALL_SIZE,
    "2": SortKey.INSTALL_SIZE,
    "rel": SortKey.RELEVANCE,
    "relevance": SortKey.RELEVANCE,
}

_BOOLEAN_STRINGS = {
    "true": True, "1": True, "yes": True, "on": True,
    "false": False, "0": False, "no": False, "off": False,
}


def parse_sort_key(value: Union[str, SortKey, None]) -> SortKey:
    """
    Convert a user supplied sort key name into a SortKey.

    Args:
        value: Sort key name (``name``, ``vote``, ``pop``, ``idate``,
            ``isize``, ``rel``) or an existing SortKey.

    Returns:
        The matching SortKey.

    Raises:
        ConfigurationError: If the name is not a known sort key.
    """
    if value is None:
        return SortKey.NONE
    if isinstance(value, SortKey):
        return value
    key = SORT_KEY_ALIASES.get(str(value).strip().lower())
    if key is None:
        raise ConfigurationError(f"Unknown sort key: {value}")
    return key


def parse_operation(value: Union[str, Operation]) -> Operation:
    """Convert an operation name into an Operation."""
    if isinstance(value, Operation):
        return value
    try:
        return Operation(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(f"Unknown operation: {value}")


def expand_escapes(text: Optional[str]) -> Optional[str]:
    """
    Expand backslash escapes in a user format string.

    Supports ``\\\\``, ``\\e``, ``\\n``, ``\\r`` and ``\\t``; any other
    backslash sequence is kept as written.
    """
    if text is None:
        return None
    replacements = {"\\": "\\", "e": "\033", "n": "\n", "r": "\r", "t": "\t"}
    out = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text) and text[i + 1] in replacements:
            out.append(replacements[text[i + 1]])
            i += 2
            continue
        out.append(c)
        i += 1
    return "".join(out)


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    converted = _BOOLEAN_STRINGS.get(str(value).strip().lower())
    if converted is None:
        raise ConfigurationError(f"Invalid boolean for '{name}': {value}")
    return converted


class ConfigurationManager:
    """
    Builds the query configuration.

    Values are applied in increasing priority: QueryConfig defaults, the YAML
    configuration file, environment variables, and finally explicit
    overrides (usually command-line options).
    """

    ENV_PREFIX = "PKGQUERY_"
    ENV_KEYS = ("sort", "delimiter", "color", "format_out")

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a YAML configuration file. If None, no file is read.
        """
        self.config_path = Path(config_path).expanduser() if config_path else None
        self._file_cache: Optional[Dict[str, Any]] = None

    def load_file(self) -> Dict[str, Any]:
        """
        Load the raw settings from the configuration file.

        Returns:
            Dictionary of settings, empty when no file was configured.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        if self._file_cache is not None:
            return self._file_cache

        if self.config_path is None:
            self._file_cache = {}
            return self._file_cache

        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file does not exist: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing configuration YAML: {e}") from e
        except IOError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {self.config_path}")

        logger.debug(f"Loaded configuration from {self.config_path}")
        self._file_cache = data
        return self._file_cache

    def load_environment(self) -> Dict[str, Any]:
        """Collect overrides from PKGQUERY_* environment variables."""
        settings = {}
        for key in self.ENV_KEYS:
            value = os.getenv(self.ENV_PREFIX + key.upper())
            if value is not None and value != "":
                settings[key] = value
        return settings

    def build(self, overrides: Optional[Dict[str, Any]] = None) -> QueryConfig:
        """
        Build the merged QueryConfig.

        Args:
            overrides: Settings taking precedence over file and environment.
                Entries whose value is None are ignored.

        Returns:
            The resulting QueryConfig.

        Raises:
            ConfigurationError: If a setting has an invalid value.
        """
        merged: Dict[str, Any] = {}
        merged.update(self.load_file())
        merged.update(self.load_environment())
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})
        return self._apply(QueryConfig(), merged)

    def _apply(self, config: QueryConfig, settings: Dict[str, Any]) -> QueryConfig:
        known = {f.name: f for f in fields(QueryConfig)}
        values: Dict[str, Any] = {}

        for name, value in settings.items():
            if name not in known:
                logger.warning(f"Ignoring unknown configuration key: {name}")
                continue

            if name == "sort":
                values[name] = parse_sort_key(value)
            elif name == "op":
                values[name] = parse_operation(value)
            elif name == "format_out":
                values[name] = expand_escapes(str(value)) if value is not None else None
            elif name == "delimiter":
                values[name] = expand_escapes(str(value))
            elif isinstance(getattr(config, name), bool):
                values[name] = _to_bool(name, value)
            else:
                values[name] = value

        return replace(config, **values)
