"""Natural ("alphanum") ordering of strings that contain numbers.

Runs of ASCII digits are compared by numeric value instead of character by
character, so ``"item2"`` sorts before ``"item10"``.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List

__all__ = ["alphanum_compare", "alphanum_less", "alphanum_key", "alphanum_sorted"]


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _compare_strings(left: str, right: str) -> int:
    """Compare two strings with strcmp-like semantics using the alphanum rules."""
    li, ri = 0, 0
    llen, rlen = len(left), len(right)
    number_mode = False

    while li < llen and ri < rlen:
        if not number_mode:
            while li < llen and ri < rlen:
                l_char, r_char = left[li], right[ri]
                l_digit, r_digit = _is_digit(l_char), _is_digit(r_char)
                if l_digit and r_digit:
                    number_mode = True
                    break
                if l_digit:
                    return -1
                if r_digit:
                    return +1
                diff = ord(l_char) - ord(r_char)
                if diff != 0:
                    return diff
                li += 1
                ri += 1
        else:
            l_start = li
            while li < llen and _is_digit(left[li]):
                li += 1
            r_start = ri
            while ri < rlen and _is_digit(right[ri]):
                ri += 1
            diff = int(left[l_start:li]) - int(right[r_start:ri])
            if diff != 0:
                return diff
            number_mode = False

    if ri < rlen:
        return -1
    if li < llen:
        return +1
    return 0


def alphanum_compare(left: Any, right: Any) -> int:
    """Return a negative, zero or positive number as ``left`` is less, equal or greater.

    Values that are not strings are compared through their ``str()`` form.
    """
    return _compare_strings(str(left), str(right))


def alphanum_less(left: Any, right: Any) -> bool:
    """True when ``left`` orders strictly before ``right``."""
    return alphanum_compare(left, right) < 0


_AlphanumKey = cmp_to_key(alphanum_compare)


def alphanum_key(item: Any) -> Any:
    """Sort key implementing the alphanum ordering, for use with ``sorted`` and friends."""
    return _AlphanumKey(item)


def alphanum_sorted(items: Iterable[Any]) -> List[Any]:
    """Return a new list of ``items`` in alphanum order."""
    return sorted(items, key=alphanum_key)