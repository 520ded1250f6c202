"""
Package field accessors.

Every printable package attribute is addressed by a single character, the
same one used after ``%`` in format templates. This module classifies those
characters and resolves them against either package variant.
"""

from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Union

from pkgquery.core.exceptions import VariantMismatchError
from pkgquery.core.interfaces import LocalPackage, PackageKind, RemotePackage


REMOTE_REPOSITORY = "aur"


class FieldKind(Enum):
    """
    Where a field character is resolved.
    """
    # Only meaningful for the installed package, looked up by name.
    ALWAYS_LOCAL = "always-local"
    # Comes from the rendering context rather than the package.
    CONTEXT = "context"
    # Resolved by the accessor of the result's own variant.
    NATIVE = "native"


FIELD_KINDS: Dict[str, FieldKind] = {
    "l": FieldKind.ALWAYS_LOCAL,   # installed version
    "F": FieldKind.ALWAYS_LOCAL,   # installed files
    "1": FieldKind.ALWAYS_LOCAL,   # install size
    "3": FieldKind.ALWAYS_LOCAL,   # install date
    "4": FieldKind.ALWAYS_LOCAL,   # install reason
    "5": FieldKind.ALWAYS_LOCAL,   # validation method
    "t": FieldKind.CONTEXT,        # target
}


def classify_field(field_char: str) -> FieldKind:
    """Return how ``field_char`` is resolved."""
    return FIELD_KINDS.get(field_char, FieldKind.NATIVE)


def join_list(items: Optional[Iterable[Optional[str]]], delimiter: str = " ") -> Optional[str]:
    """
    Join list values with the configured delimiter.

    Empty entries are skipped; returns None when nothing is left.
    """
    if not items:
        return None
    values = [item for item in items if item]
    if not values:
        return None
    return delimiter.join(values)


def _number(value: Union[int, float, None]) -> Optional[str]:
    if not value:
        return None
    return str(value)


def _timestamp(value: Optional[int]) -> Optional[str]:
    # timestamps are printed as seconds since the epoch
    if not value:
        return None
    return str(int(value))


LocalGetter = Callable[[LocalPackage, str], Optional[str]]
RemoteGetter = Callable[[RemotePackage, str], Optional[str]]

_LOCAL_FIELDS: Dict[str, LocalGetter] = {
    "n": lambda p, d: p.name,
    "v": lambda p, d: p.version,
    "V": lambda p, d: p.upgrade_version or p.version,
    "l": lambda p, d: p.version,
    "d": lambda p, d: p.description,
    "u": lambda p, d: p.url,
    "r": lambda p, d: p.repository,
    "s": lambda p, d: p.repository,
    "a": lambda p, d: p.arch,
    "m": lambda p, d: p.packager,
    "g": lambda p, d: join_list(p.groups, d),
    "L": lambda p, d: join_list(p.licenses, d),
    "D": lambda p, d: join_list(p.depends, d),
    "O": lambda p, d: join_list(p.optdepends, d),
    "P": lambda p, d: join_list(p.provides, d),
    "C": lambda p, d: join_list(p.conflicts, d),
    "R": lambda p, d: join_list(p.replaces, d),
    "N": lambda p, d: join_list(p.required_by, d),
    "F": lambda p, d: join_list(p.files, d),
    "B": lambda p, d: _timestamp(p.build_date),
    "3": lambda p, d: _timestamp(p.install_date),
    "4": lambda p, d: p.install_reason,
    "5": lambda p, d: p.validation,
    "1": lambda p, d: _number(p.install_size),
    "S": lambda p, d: _number(p.install_size),
}

_REMOTE_FIELDS: Dict[str, RemoteGetter] = {
    "n": lambda p, d: p.name,
    "v": lambda p, d: p.version,
    "V": lambda p, d: p.version,
    "d": lambda p, d: p.description,
    "u": lambda p, d: p.url,
    "r": lambda p, d: REMOTE_REPOSITORY,
    "s": lambda p, d: REMOTE_REPOSITORY,
    "m": lambda p, d: p.maintainer,
    "i": lambda p, d: _number(p.id),
    "b": lambda p, d: p.package_base,
    "o": lambda p, d: "1" if p.out_of_date else "0",
    "w": lambda p, d: str(p.votes),
    "p": lambda p, d: f"{p.popularity:.2f}",
    "f": lambda p, d: _timestamp(p.first_submitted),
    "e": lambda p, d: _timestamp(p.last_modified),
    "L": lambda p, d: join_list(p.licenses, d),
    "D": lambda p, d: join_list(p.depends, d),
    "M": lambda p, d: join_list(p.makedepends, d),
    "O": lambda p, d: join_list(p.optdepends, d),
    "P": lambda p, d: join_list(p.provides, d),
    "C": lambda p, d: join_list(p.conflicts, d),
    "R": lambda p, d: join_list(p.replaces, d),
    "K": lambda p, d: join_list(p.keywords, d),
}


def local_field(package: LocalPackage, field_char: str, delimiter: str = " ") -> Optional[str]:
    """
    Get a field of a local database package as a string.

    Args:
        package: Local package.
        field_char: Field character.
        delimiter: Separator used for list fields.

    Returns:
        Field value, or None when the package has no such value.
    """
    if not isinstance(package, LocalPackage):
        raise VariantMismatchError(f"Expected a local package, got {type(package).__name__}")
    getter = _LOCAL_FIELDS.get(field_char)
    return getter(package, delimiter) if getter else None


def remote_field(package: RemotePackage, field_char: str, delimiter: str = " ") -> Optional[str]:
    """
    Get a field of a remote repository package as a string.

    Args:
        package: Remote package.
        field_char: Field character.
        delimiter: Separator used for list fields.

    Returns:
        Field value, or None when the package has no such value.
    """
    if not isinstance(package, RemotePackage):
        raise VariantMismatchError(f"Expected a remote package, got {type(package).__name__}")
    getter = _REMOTE_FIELDS.get(field_char)
    return getter(package, delimiter) if getter else None


def get_field(kind: PackageKind, package, field_char: str, delimiter: str = " ") -> Optional[str]:
    """Dispatch ``field_char`` to the accessor matching ``kind``."""
    if kind is PackageKind.LOCAL:
        return local_field(package, field_char, delimiter)
    return remote_field(package, field_char, delimiter)
