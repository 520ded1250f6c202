"""
Query layer.

Scans the local database and the remote repository for the operation at
hand and feeds every match to the printer, which prints it right away or
buffers it for sorting.
"""

import logging
from typing import List, Optional

from pkgquery.backends.local import LOCAL_REPOSITORY, LocalDatabase
from pkgquery.backends.remote import RemoteRepository
from pkgquery.core.interfaces import LocalPackage, PackageKind, QueryConfig
from pkgquery.fields import REMOTE_REPOSITORY
from pkgquery.output.printer import ResultPrinter
from pkgquery.search.matching import name_contains_targets
from pkgquery.target import Target, TargetTracker, check_version, parse_target, target_name_cmp
from pkgquery.version import vercmp


logger = logging.getLogger(__name__)


class QueryEngine:
    """
    Runs search, query and listing operations against both package sources.
    """

    def __init__(
        self,
        config: QueryConfig,
        local_db: LocalDatabase,
        remote: Optional[RemoteRepository] = None,
        printer: Optional[ResultPrinter] = None
    ):
        """
        Initialize the query engine.

        Args:
            config: Query configuration.
            local_db: Local package database.
            remote: Remote repository. If None, remote results are skipped.
            printer: Printer receiving the matches. If None, one printing to
                standard output is created.
        """
        self.config = config
        self.local_db = local_db
        self.remote = remote
        self.printer = printer or ResultPrinter(config, local_db=local_db)

    def search(self, terms: List[str], sync: bool = True, remote: bool = True) -> int:
        """
        Search package names and descriptions.

        Every term must match, either in the name or in the description.

        Returns:
            Number of matching packages.
        """
        if not terms:
            return 0
        target = " ".join(terms)
        found = 0

        if sync:
            for package in self.local_db.sync_packages():
                if self._matches(terms, package.name, package.description):
                    self.printer.print_or_add(package, PackageKind.LOCAL, target)
                    found += 1

        if remote and self.remote is not None:
            # the remote side is queried with the most selective term
            for package in self.remote.search(max(terms, key=len)):
                if self._matches(terms, package.name, package.description):
                    self.printer.print_or_add(package, PackageKind.REMOTE, target)
                    found += 1

        logger.info(f"Found {found} packages for '{target}'")
        self.printer.show_results(terms)
        return found

    def query(self, targets: Optional[List[str]] = None) -> int:
        """
        List installed packages, optionally restricted to targets.

        Targets may carry a version constraint (``bash>=5``) and a ``local/``
        qualifier. With ``aur_foreign`` only foreign packages are listed and
        compared with the remote repository.

        Returns:
            Number of packages listed.
        """
        found = 0
        if not targets:
            for package in self.local_db.installed():
                if self._report_installed(package, ""):
                    found += 1
            self.printer.show_results()
            return found

        tracker = TargetTracker(just_one=self.config.just_one, key=lambda p: p.name)
        for raw in targets:
            target = parse_target(raw)
            if target.source not in (None, LOCAL_REPOSITORY):
                logger.debug(f"Skipping '{raw}': not a local target")
                continue
            package = self.local_db.find_installed(target.name)
            if package is None or not check_version(target, package.version):
                continue
            if not tracker.add(raw, package):
                continue
            if self._report_installed(package, raw):
                found += 1

        remaining = tracker.clear(targets)
        if remaining and self.config.just_one:
            logger.debug(f"No installed package for: {', '.join(remaining)}")
        self.printer.show_results([parse_target(raw).name for raw in targets])
        return found

    def list_repositories(self, repositories: Optional[List[str]] = None) -> int:
        """
        List every package of the given sync repositories (all by default).

        Returns:
            Number of packages listed.

        Raises:
            DatabaseError: If a repository is unknown.
        """
        found = 0
        for repo in repositories or self.local_db.repositories():
            for package in self.local_db.repository(repo):
                self.printer.print_or_add(package, PackageKind.LOCAL, repo)
                found += 1
        self.printer.show_results()
        return found

    def upgrades(self) -> int:
        """
        List installed packages with a newer version available.

        Sync packages are checked first; foreign packages are checked against
        the remote repository. With ``aur_upgrades`` only foreign packages
        are checked.

        Returns:
            Number of upgradable packages.
        """
        found = 0
        for installed in self.local_db.installed():
            candidate = None
            kind = PackageKind.LOCAL
            if not self.config.aur_upgrades:
                candidate = self.local_db.find_sync(installed.name)
            if candidate is None and self.remote is not None and self.local_db.is_foreign(installed):
                candidate = self.remote.info(installed.name)
                kind = PackageKind.REMOTE
            if candidate is None or vercmp(candidate.version, installed.version) <= 0:
                continue
            self.printer.print_or_add(candidate, kind, installed.name)
            found += 1
        self.printer.show_results()
        return found

    def info(self, targets: List[str]) -> int:
        """
        Show the packages named by targets, sync repositories first.

        A target qualified with a sync repository (``core/bash``) is only
        looked up in that repository, one qualified with ``aur/`` only in
        the remote repository. With ``just_one`` a target satisfied by a
        sync package is not looked up remotely.

        Returns:
            Number of packages shown.
        """
        found = 0
        tracker = TargetTracker(just_one=self.config.just_one, key=lambda p: p.name)
        for raw in targets:
            target = parse_target(raw)
            if target.source == REMOTE_REPOSITORY:
                continue
            package = self._find_sync(target)
            if package is None or not tracker.add(raw, package):
                continue
            self.printer.print_or_add(package, PackageKind.LOCAL, raw)
            found += 1

        if self.remote is not None:
            remote_tracker = TargetTracker(just_one=self.config.just_one, key=lambda p: p.name)
            for raw in tracker.clear(targets):
                target = parse_target(raw)
                if target.source not in (None, REMOTE_REPOSITORY):
                    continue
                package = self.remote.info(target.name)
                if package is None or not check_version(target, package.version):
                    continue
                if not remote_tracker.add(raw, package):
                    continue
                self.printer.print_or_add(package, PackageKind.REMOTE, raw)
                found += 1

        self.printer.show_results([parse_target(raw).name for raw in targets])
        return found

    def _find_sync(self, target: Target) -> Optional[LocalPackage]:
        repositories = self.local_db.repositories()
        if target.source is not None:
            if target.source not in repositories:
                logger.debug(f"Skipping '{target}': no sync repository '{target.source}'")
                return None
            repositories = [target.source]
        for repo in repositories:
            for package in self.local_db.repository(repo):
                if target_name_cmp(target, package.name) == 0 and check_version(target, package.version):
                    return package
        return None

    def _report_installed(self, package, target: str) -> bool:
        if not self.config.aur_foreign:
            self.printer.print_or_add(package, PackageKind.LOCAL, target)
            return True

        if not self.local_db.is_foreign(package):
            return False
        remote_package = self.remote.info(package.name) if self.remote is not None else None
        if remote_package is not None:
            self.printer.print_or_add(remote_package, PackageKind.REMOTE, target)
        else:
            self.printer.print_or_add(package, PackageKind.LOCAL, target)
        return True

    def _matches(self, terms: List[str], name: str, description: Optional[str]) -> bool:
        terms = [term for term in terms if term]
        if not terms:
            return False
        use_regex = self.config.use_regex
        # each term may match either the name or the description
        return all(
            name_contains_targets([term], name, use_regex)
            or name_contains_targets([term], description, use_regex)
            for term in terms
        )
