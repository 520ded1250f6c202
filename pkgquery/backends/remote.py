"""
Remote user repository.

Packages are read from a JSON dump of the repository's RPC interface: an
object whose ``results`` list holds one object per package using the RPC
field names (``Name``, ``Version``, ``NumVotes``, ``Popularity``, ...).
"""

import abc
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pkgquery.core.exceptions import DatabaseError
from pkgquery.core.interfaces import RemotePackage


logger = logging.getLogger(__name__)


# RPC field name -> (RemotePackage attribute, converter)
_RPC_FIELDS = {
    "ID": ("id", int),
    "Name": ("name", str),
    "PackageBase": ("package_base", str),
    "Version": ("version", str),
    "Description": ("description", str),
    "URL": ("url", str),
    "Maintainer": ("maintainer", str),
    "NumVotes": ("votes", int),
    "Popularity": ("popularity", float),
    "OutOfDate": ("out_of_date", int),
    "FirstSubmitted": ("first_submitted", int),
    "LastModified": ("last_modified", int),
    "License": ("licenses", list),
    "Depends": ("depends", list),
    "MakeDepends": ("makedepends", list),
    "OptDepends": ("optdepends", list),
    "Provides": ("provides", list),
    "Conflicts": ("conflicts", list),
    "Replaces": ("replaces", list),
    "Keywords": ("keywords", list),
}


class RemoteRepository(abc.ABC):
    """
    Abstract base class for the remote user repository.
    """

    @abc.abstractmethod
    def search(self, term: str) -> List[RemotePackage]:
        """
        Find packages whose name or description contains ``term``.

        Args:
            term: Search term, matched case-insensitively.

        Returns:
            Matching packages.
        """
        pass

    @abc.abstractmethod
    def info(self, name: str) -> Optional[RemotePackage]:
        """Get the package called ``name``, or None."""
        pass


class InMemoryRemoteRepository(RemoteRepository):
    """
    Remote repository backed by an in-memory package list.
    """

    def __init__(self, packages: Optional[List[RemotePackage]] = None):
        self._packages: Dict[str, RemotePackage] = {}
        for package in packages or []:
            self._packages[package.name] = package

    def search(self, term: str) -> List[RemotePackage]:
        term = term.lower()
        return [
            package for package in self._packages.values()
            if term in package.name.lower() or term in (package.description or "").lower()
        ]

    def info(self, name: str) -> Optional[RemotePackage]:
        return self._packages.get(name)


def remote_package_from_rpc(data: Dict[str, Any]) -> RemotePackage:
    """
    Build a RemotePackage from an RPC result object.

    Null values keep the attribute default; unknown fields are ignored.

    Raises:
        DatabaseError: If ``Name`` or ``Version`` is missing or a value has the wrong type.
    """
    if not isinstance(data, dict) or not data.get("Name") or not data.get("Version"):
        raise DatabaseError(f"Remote package without Name or Version: {data!r}")

    values = {}
    for rpc_name, (attribute, converter) in _RPC_FIELDS.items():
        value = data.get(rpc_name)
        if value is None:
            continue
        try:
            values[attribute] = converter(value)
        except (TypeError, ValueError) as e:
            raise DatabaseError(f"Invalid {rpc_name} for {data['Name']}: {value!r}") from e
    return RemotePackage(**values)


def load_remote_repository(path: Union[str, Path]) -> InMemoryRemoteRepository:
    """
    Load a remote repository from an RPC JSON dump.

    Args:
        path: Path to the JSON file.

    Returns:
        The loaded repository.

    Raises:
        DatabaseError: If the file cannot be read or parsed.
    """
    path = Path(path).expanduser()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DatabaseError(f"Error parsing remote repository JSON: {e}") from e
    except IOError as e:
        raise DatabaseError(f"Error reading remote repository {path}: {e}") from e

    results = data.get("results") if isinstance(data, dict) else data
    if not isinstance(results, list):
        raise DatabaseError(f"Remote repository dump has no results list: {path}")

    packages = [remote_package_from_rpc(entry) for entry in results]
    logger.info(f"Loaded {len(packages)} remote packages from {path}")
    return InMemoryRemoteRepository(packages)
