"""
Package version comparison.

Versions follow the ``[epoch:]version[-release]`` layout used by the local
package database and the remote repository alike. Each part is compared with
the rpm segment algorithm: alphanumeric runs are compared one by one, numeric
runs numerically and alphabetic runs lexically, with a numeric run always
newer than an alphabetic one.
"""

import string
from typing import Optional, Tuple


_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _LETTERS


def split_evr(version: str) -> Tuple[str, str, Optional[str]]:
    """
    Split a full version into epoch, version and release.

    Args:
        version: Version string such as ``1:2.3-4``.

    Returns:
        Tuple of (epoch, version, release). The epoch defaults to ``"0"`` and
        the release is None when the string carries no ``-``.
    """
    pos = 0
    while pos < len(version) and version[pos] in _DIGITS:
        pos += 1

    if pos < len(version) and version[pos] == ":":
        epoch = version[:pos] or "0"
        rest = version[pos + 1:]
    else:
        epoch = "0"
        rest = version

    if "-" in rest:
        ver, release = rest.rsplit("-", 1)
    else:
        ver, release = rest, None
    return epoch, ver, release


def segment_compare(a: str, b: str) -> int:
    """
    Compare two version parts segment by segment.

    Returns:
        -1, 0 or 1 as ``a`` is older than, equal to or newer than ``b``.
    """
    if a == b:
        return 0

    one = two = 0
    while one < len(a) and two < len(b):
        start1, start2 = one, two
        while one < len(a) and a[one] not in _ALNUM:
            one += 1
        while two < len(b) and b[two] not in _ALNUM:
            two += 1

        if one >= len(a) or two >= len(b):
            break

        # different separator lengths decide on their own
        if one - start1 != two - start2:
            return -1 if one - start1 < two - start2 else 1

        end1, end2 = one, two
        if a[end1] in _DIGITS:
            while end1 < len(a) and a[end1] in _DIGITS:
                end1 += 1
            while end2 < len(b) and b[end2] in _DIGITS:
                end2 += 1
            numeric = True
        else:
            while end1 < len(a) and a[end1] in _LETTERS:
                end1 += 1
            while end2 < len(b) and b[end2] in _LETTERS:
                end2 += 1
            numeric = False

        seg1 = a[one:end1]
        seg2 = b[two:end2]

        # segments of different types: numeric is newer
        if not seg2:
            return 1 if numeric else -1

        if numeric:
            seg1 = seg1.lstrip("0")
            seg2 = seg2.lstrip("0")
            if len(seg1) != len(seg2):
                return 1 if len(seg1) > len(seg2) else -1

        if seg1 != seg2:
            return -1 if seg1 < seg2 else 1

        one, two = end1, end2

    if one >= len(a) and two >= len(b):
        return 0

    # a trailing alpha segment is older than nothing, anything else is newer
    if (one >= len(a) and b[two] not in _LETTERS) or (one < len(a) and a[one] in _LETTERS):
        return -1
    return 1


def vercmp(a: Optional[str], b: Optional[str]) -> int:
    """
    Compare two full package versions.

    Args:
        a: First version.
        b: Second version.

    Returns:
        -1 if ``a`` is older, 0 if equal, 1 if ``a`` is newer. A missing
        version is older than any present one.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if a == b:
        return 0

    epoch1, ver1, rel1 = split_evr(a)
    epoch2, ver2, rel2 = split_evr(b)

    ret = segment_compare(epoch1, epoch2)
    if ret == 0:
        ret = segment_compare(ver1, ver2)
        if ret == 0 and rel1 is not None and rel2 is not None:
            ret = segment_compare(rel1, rel2)
    return ret
