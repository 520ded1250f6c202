"""
Search and dependency target expressions.

A target is a single command-line token such as ``bash``, ``core/bash`` or
``bash>=5.1``. Parsing never fails: anything that does not carry a version
operator is a plain name.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from pkgquery.version import vercmp


logger = logging.getLogger(__name__)


class DepMod(Enum):
    """
    Version comparison operator of a target.
    """
    ANY = ""
    EQ = "="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


# Two-character operators are searched first so "<=" never parses as "<".
_OPERATOR_PRECEDENCE = (DepMod.LE, DepMod.GE, DepMod.LT, DepMod.GT, DepMod.EQ)


@dataclass
class Target:
    """
    Parsed target expression.
    """
    orig: str
    name: str
    mod: DepMod = DepMod.ANY
    version: Optional[str] = None
    source: Optional[str] = None

    def __str__(self) -> str:
        return self.orig


def parse_target(raw: str) -> Target:
    """
    Parse a target expression.

    The text before the first ``/`` is the source qualifier. The remainder is
    scanned for ``<=``, ``>=``, ``<``, ``>`` and ``=`` in that order; the
    first operator found splits it into name and version.

    Args:
        raw: Target as typed by the user.

    Returns:
        The parsed Target.
    """
    source = None
    rest = raw
    if "/" in rest:
        source, rest = rest.split("/", 1)
        if not rest:
            # nothing after the qualifier, keep the whole token as the name
            return Target(orig=raw, name=raw)

    for mod in _OPERATOR_PRECEDENCE:
        pos = rest.find(mod.value)
        if pos == 0:
            # no name before the operator, keep the whole token as the name
            break
        if pos != -1:
            return Target(
                orig=raw,
                name=rest[:pos],
                mod=mod,
                version=rest[pos + len(mod.value):],
                source=source
            )

    return Target(orig=raw, name=rest, source=source)


def check_version(target: Target, candidate: Optional[str]) -> bool:
    """
    Check whether a version satisfies the target's constraint.

    Args:
        target: Parsed target.
        candidate: Version to check.

    Returns:
        True when the target has no constraint, no candidate is given, or the
        candidate compares to the target version as the operator requires.
    """
    if candidate is None or target.mod is DepMod.ANY:
        return True

    ret = vercmp(candidate, target.version)
    if target.mod is DepMod.LE:
        return ret <= 0
    if target.mod is DepMod.GE:
        return ret >= 0
    if target.mod is DepMod.LT:
        return ret < 0
    if target.mod is DepMod.GT:
        return ret > 0
    return ret == 0


def is_compatible(a: Target, b: Target) -> bool:
    """
    Check whether ``b`` satisfies the constraint expressed by ``a``.

    ``b`` must be an exact (``=``) or unconstrained target; names must match
    and, when both carry a version, ``b``'s version must satisfy ``a``.
    """
    if b.mod not in (DepMod.EQ, DepMod.ANY):
        return False
    if a.name != b.name:
        return False
    return a.mod is DepMod.ANY or b.mod is DepMod.ANY or check_version(a, b.version)


def target_name_cmp(target: Target, name: Optional[str]) -> int:
    """Three-way comparison of a target's name with a package name."""
    if name is None:
        return 0
    return (target.name > name) - (target.name < name)


@dataclass
class TargetTracker:
    """
    Remembers which targets have already produced a result.

    Used when only one result per target is wanted: ``add`` refuses an item
    already reported for an earlier target, and ``clear`` removes satisfied
    targets from the list still to be looked up elsewhere.
    """
    just_one: bool = False
    key: Optional[Callable[[Any], Any]] = None
    args: List[str] = field(default_factory=list)
    items: List[Any] = field(default_factory=list)

    def add(self, raw: str, item: Any) -> bool:
        """
        Record that ``raw`` produced ``item``.

        Returns:
            False if the item was already reported, True otherwise.
        """
        if not self.just_one:
            return True

        ret = True
        if self._contains(item):
            ret = False
        else:
            self.items.append(item)
        self.args.append(raw)
        return ret

    def clear(self, targets: List[str]) -> List[str]:
        """
        Drop satisfied targets from ``targets``.

        Returns:
            The targets that did not produce any result yet.
        """
        if not self.just_one:
            return targets
        remaining = list(targets)
        for raw in self.args:
            if raw in remaining:
                remaining.remove(raw)
        logger.debug(f"{len(targets) - len(remaining)} targets satisfied, {len(remaining)} remaining")
        return remaining

    def _contains(self, item: Any) -> bool:
        if self.key is None:
            return any(existing is item for existing in self.items)
        wanted = self.key(item)
        return any(self.key(existing) == wanted for existing in self.items)
