"""
Core interfaces for pkgquery.

This module contains the data models shared by the query, ranking and
rendering layers: the two package variants, the enumerations selecting sort
keys and operations, and the read-only query configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PackageKind(Enum):
    """
    Discriminant of a result entry.
    """
    LOCAL = "local"
    REMOTE = "remote"


class SortKey(Enum):
    """
    Key used to order buffered results.
    """
    NONE = "none"
    NAME = "name"
    VOTES = "votes"
    POPULARITY = "popularity"
    INSTALL_DATE = "idate"
    INSTALL_SIZE = "isize"
    RELEVANCE = "relevance"


class Operation(Enum):
    """
    Kind of operation that produced the results.
    """
    SEARCH = "search"
    LIST_REPO = "list-repo"
    QUERY = "query"
    INFO = "info"


@dataclass
class LocalPackage:
    """
    Package from the local package database.

    ``repository`` is ``"local"`` for packages read from the installed
    database and the sync repository name otherwise.
    """
    name: str
    version: str
    repository: str = "local"
    description: Optional[str] = None
    url: Optional[str] = None
    arch: Optional[str] = None
    packager: Optional[str] = None
    groups: List[str] = field(default_factory=list)
    licenses: List[str] = field(default_factory=list)
    depends: List[str] = field(default_factory=list)
    optdepends: List[str] = field(default_factory=list)
    provides: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    replaces: List[str] = field(default_factory=list)
    required_by: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    build_date: int = 0
    install_date: int = 0
    install_reason: Optional[str] = None
    validation: Optional[str] = None
    install_size: int = 0
    upgrade_version: Optional[str] = None


@dataclass
class RemotePackage:
    """
    Package from the remote user repository.

    A missing ``maintainer`` marks an orphaned package and a non-zero
    ``out_of_date`` holds the timestamp it was flagged at.
    """
    name: str
    version: str
    id: int = 0
    package_base: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    maintainer: Optional[str] = None
    votes: int = 0
    popularity: float = 0.0
    out_of_date: int = 0
    first_submitted: int = 0
    last_modified: int = 0
    licenses: List[str] = field(default_factory=list)
    depends: List[str] = field(default_factory=list)
    makedepends: List[str] = field(default_factory=list)
    optdepends: List[str] = field(default_factory=list)
    provides: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    replaces: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)


@dataclass
class QueryConfig:
    """
    Read-only configuration consumed by the ranking and rendering layers.
    """
    sort: SortKey = SortKey.NONE
    reverse: bool = False
    just_one: bool = False
    quiet: bool = False
    format_out: Optional[str] = None
    escape: bool = False
    numbering: bool = False
    color: bool = True
    op: Operation = Operation.SEARCH
    delimiter: str = " "
    show_size: bool = False
    list_upgrades: bool = False
    aur_upgrades: bool = False
    aur_foreign: bool = False
    use_regex: bool = False
