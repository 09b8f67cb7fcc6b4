# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


from typing import Any


class _Common(object):
    def __str__(self) -> str:
        raise NotImplementedError

    def __ne__(self, other: object) -> bool:
        return not (self == other)

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, str(self))


class _Comparable(_Common):
    def __gt__(self, other: Any) -> bool:
        return not (self < other or self == other)

    def __le__(self, other: Any) -> bool:
        return self < other or self == other

    def __ge__(self, other: Any) -> bool:
        return not self < other


class _ReversedComparable(_Common):
    def __init__(self, value: Any) -> None:
        self.value = value

    def __lt__(self, other: "_ReversedComparable") -> bool:
        return other.value < self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _ReversedComparable) \
            and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __gt__(self, other: "_ReversedComparable") -> bool:
        return not (self < other or self == other)

    def __le__(self, other: "_ReversedComparable") -> bool:
        return self < other or self == other

    def __ge__(self, other: "_ReversedComparable") -> bool:
        return not self < other

    def __str__(self) -> str:
        return "reverse(%s)" % str(self.value)

    def __repr__(self) -> str:
        return "reverse(%r)" % self.value


def reverse_sort_key(comparable: Any) -> _ReversedComparable:
    """Key that gives reverse sort order on versions.

    Example:

        >>> Version("1.0") < Version("2.0")
        True
        >>> reverse_sort_key(Version("1.0")) < reverse_sort_key(Version("2.0"))
        False

    Args:
        comparable (`Version`): Object to wrap.

    Returns:
        `_ReversedComparable`: Wrapper object that reverses comparisons.
    """
    return _ReversedComparable(comparable)
