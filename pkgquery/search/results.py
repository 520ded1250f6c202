"""
Result collection for a single query.

Matches from the local package database and from the remote repository are
collected as ResultEntry objects, sorted by the configured key and handed to
the printer in either direction.
"""

import copy
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from pkgquery.core.exceptions import VariantMismatchError
from pkgquery.core.interfaces import LocalPackage, PackageKind, RemotePackage, SortKey


logger = logging.getLogger(__name__)


class Pin(IntEnum):
    """
    Leading component of a sort key.

    Entries for which a key does not apply are pinned before or after every
    entry carrying a real value, so the ordering stays total.
    """
    FIRST = 0
    VALUE = 1
    LAST = 2


SortValue = Tuple[Pin, Any]


@dataclass
class ResultEntry:
    """
    One matched package, tagged with the variant it came from.

    ``relevance`` is None until the entry has been scored.
    """
    package: Union[LocalPackage, RemotePackage]
    kind: PackageKind
    target: str = ""
    relevance: Optional[int] = None

    @property
    def name(self) -> Optional[str]:
        return self.package.name

    @property
    def is_local(self) -> bool:
        return self.kind is PackageKind.LOCAL

    @property
    def local(self) -> LocalPackage:
        """The package, which must be a local one."""
        if self.kind is not PackageKind.LOCAL:
            raise VariantMismatchError(f"{self.name} is not a local package")
        return self.package

    @property
    def remote(self) -> RemotePackage:
        """The package, which must be a remote one."""
        if self.kind is not PackageKind.REMOTE:
            raise VariantMismatchError(f"{self.name} is not a remote package")
        return self.package

    def lower_relevance(self, distance: int) -> None:
        """Record ``distance`` if it is better than the current relevance."""
        if self.relevance is None or distance < self.relevance:
            self.relevance = distance


class ResultSet:
    """
    Ordered collection of result entries for one query cycle.

    Remote packages are copied on insertion since the objects handed out by
    the remote repository may be reused; local packages are kept by
    reference. ``drain`` empties the set once the results have been shown.
    """

    def __init__(self, local_db=None):
        """
        Initialize the result set.

        Args:
            local_db: Local database used to look up install dates when
                sorting by install date. If None, the date stored on each
                local package is used.
        """
        self.local_db = local_db
        self._entries: List[ResultEntry] = []
        self._sort_keys: Dict[SortKey, Callable[[ResultEntry], SortValue]] = {
            SortKey.NAME: self._name_key,
            SortKey.INSTALL_DATE: self._install_date_key,
            SortKey.INSTALL_SIZE: self._install_size_key,
            SortKey.VOTES: self._votes_key,
            SortKey.POPULARITY: self._popularity_key,
            SortKey.RELEVANCE: self._relevance_key,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[ResultEntry]:
        return self.iterate()

    def insert(self, package: Union[LocalPackage, RemotePackage], kind: PackageKind, target: str = "") -> ResultEntry:
        """
        Append a match in arrival order.

        Args:
            package: Matched package.
            kind: Variant of the package.
            target: Raw search term that produced the match.

        Returns:
            The new entry.
        """
        if kind is PackageKind.REMOTE:
            package = copy.deepcopy(package)
        entry = ResultEntry(package=package, kind=kind, target=target)
        self._entries.append(entry)
        return entry

    def sort(self, key: SortKey) -> None:
        """
        Stably reorder the entries by ``key``.

        ``SortKey.NONE`` keeps arrival order.
        """
        key_func = self._sort_keys.get(key)
        if key_func is None:
            return
        self._entries.sort(key=key_func)
        logger.debug(f"Sorted {len(self._entries)} results by {key.value}")

    def iterate(self, reverse: bool = False) -> Iterator[ResultEntry]:
        """Yield every entry once, front to back or back to front."""
        entries = reversed(self._entries) if reverse else iter(self._entries)
        for entry in list(entries):
            yield entry

    def drain(self) -> None:
        """Release every entry and leave the set empty."""
        if self._entries:
            logger.debug(f"Draining {len(self._entries)} results")
        self._entries = []

    def _name_key(self, entry: ResultEntry) -> SortValue:
        # bytewise comparison
        return (Pin.VALUE, (entry.name or "").encode("utf-8"))

    def _install_date_key(self, entry: ResultEntry) -> SortValue:
        if not entry.is_local:
            return (Pin.VALUE, 0)
        if self.local_db is None:
            return (Pin.VALUE, entry.local.install_date)
        installed = self.local_db.find_installed(entry.name)
        return (Pin.VALUE, installed.install_date if installed else 0)

    def _install_size_key(self, entry: ResultEntry) -> SortValue:
        if not entry.is_local:
            return (Pin.VALUE, 0)
        return (Pin.VALUE, entry.local.install_size)

    def _votes_key(self, entry: ResultEntry) -> SortValue:
        # local packages always rank above remote ones
        if entry.is_local:
            return (Pin.FIRST, 0)
        return (Pin.VALUE, -entry.remote.votes)

    def _popularity_key(self, entry: ResultEntry) -> SortValue:
        if entry.is_local:
            return (Pin.FIRST, 0)
        return (Pin.VALUE, -entry.remote.popularity)

    def _relevance_key(self, entry: ResultEntry) -> SortValue:
        if entry.relevance is None:
            return (Pin.LAST, 0)
        return (Pin.VALUE, entry.relevance)
