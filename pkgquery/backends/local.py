"""
Local package database.

The local database holds the installed packages and the packages of each
configured sync repository. Installed packages have ``repository == "local"``.
"""

import abc
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import yaml

from pkgquery.core.exceptions import DatabaseError
from pkgquery.core.interfaces import LocalPackage


logger = logging.getLogger(__name__)


LOCAL_REPOSITORY = "local"

_LOCAL_FIELDS = {f.name for f in fields(LocalPackage)}


class LocalDatabase(abc.ABC):
    """
    Abstract base class for the local package database.
    """

    @abc.abstractmethod
    def find_installed(self, name: str) -> Optional[LocalPackage]:
        """
        Look up an installed package by name.

        Args:
            name: Package name.

        Returns:
            The installed package, or None if it is not installed.
        """
        pass

    @abc.abstractmethod
    def installed(self) -> List[LocalPackage]:
        """Get all installed packages."""
        pass

    @abc.abstractmethod
    def repositories(self) -> List[str]:
        """Get the names of the sync repositories, in configuration order."""
        pass

    @abc.abstractmethod
    def repository(self, name: str) -> List[LocalPackage]:
        """
        Get the packages of a sync repository.

        Raises:
            DatabaseError: If the repository is unknown.
        """
        pass

    def sync_packages(self) -> Iterator[LocalPackage]:
        """Iterate over the packages of every sync repository."""
        for repo in self.repositories():
            for package in self.repository(repo):
                yield package

    def find_sync(self, name: str) -> Optional[LocalPackage]:
        """Find the first sync repository package called ``name``."""
        for package in self.sync_packages():
            if package.name == name:
                return package
        return None

    def is_foreign(self, package: LocalPackage) -> bool:
        """Check whether an installed package is missing from every sync repository."""
        return self.find_sync(package.name) is None


class InMemoryLocalDatabase(LocalDatabase):
    """
    Local database backed by in-memory package lists.
    """

    def __init__(
        self,
        installed: Optional[List[LocalPackage]] = None,
        repositories: Optional[Dict[str, List[LocalPackage]]] = None
    ):
        """
        Initialize the database.

        Args:
            installed: Installed packages.
            repositories: Mapping of sync repository name to its packages.
        """
        self._installed: Dict[str, LocalPackage] = {}
        for package in installed or []:
            package.repository = LOCAL_REPOSITORY
            self._installed[package.name] = package

        self._repositories: Dict[str, List[LocalPackage]] = {}
        for repo, packages in (repositories or {}).items():
            for package in packages:
                package.repository = repo
            self._repositories[repo] = list(packages)

        logger.debug(
            f"Local database with {len(self._installed)} installed packages "
            f"and {len(self._repositories)} sync repositories"
        )

    def find_installed(self, name: str) -> Optional[LocalPackage]:
        return self._installed.get(name)

    def installed(self) -> List[LocalPackage]:
        return list(self._installed.values())

    def repositories(self) -> List[str]:
        return list(self._repositories)

    def repository(self, name: str) -> List[LocalPackage]:
        if name not in self._repositories:
            raise DatabaseError(f"Unknown repository: {name}")
        return list(self._repositories[name])


def local_package_from_dict(data: Dict[str, Any], repository: str = LOCAL_REPOSITORY) -> LocalPackage:
    """
    Build a LocalPackage from a mapping.

    Unknown keys are ignored with a warning.

    Raises:
        DatabaseError: If ``name`` or ``version`` is missing.
    """
    if not isinstance(data, dict) or not data.get("name") or not data.get("version"):
        raise DatabaseError(f"Package entry without name or version in '{repository}': {data!r}")

    values = {}
    for key, value in data.items():
        if key in _LOCAL_FIELDS:
            values[key] = value
        else:
            logger.warning(f"Ignoring unknown field '{key}' of package {data['name']}")
    values["name"] = str(values["name"])
    values["version"] = str(values["version"])
    values["repository"] = repository
    return LocalPackage(**values)


def load_local_database(path: Union[str, Path]) -> InMemoryLocalDatabase:
    """
    Load a local database from a YAML file.

    The file holds an ``installed`` list and a ``repositories`` mapping of
    repository name to package list; each package is a mapping of
    LocalPackage fields.

    Args:
        path: Path to the YAML file.

    Returns:
        The loaded database.

    Raises:
        DatabaseError: If the file cannot be read or has an invalid layout.
    """
    path = Path(path).expanduser()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise DatabaseError(f"Error parsing local database YAML: {e}") from e
    except IOError as e:
        raise DatabaseError(f"Error reading local database {path}: {e}") from e

    if not isinstance(data, dict):
        raise DatabaseError(f"Local database must contain a mapping: {path}")

    installed = [local_package_from_dict(entry) for entry in data.get("installed") or []]

    repositories = {}
    for repo, entries in (data.get("repositories") or {}).items():
        repositories[str(repo)] = [local_package_from_dict(entry, str(repo)) for entry in entries or []]

    logger.info(f"Loaded local database from {path}")
    return InMemoryLocalDatabase(installed, repositories)
