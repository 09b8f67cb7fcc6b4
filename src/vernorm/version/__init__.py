# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Implements everything needed to normalize versions and evaluate constraints.

There are three class types: :class:`Version`, :class:`Constraint` and :class:`Range`.
A :class:`Version` is a normalized version string, such as ``1.0.0.0-beta2`` or
``dev-master``. Versions are totally ordered, with stability tags sorting as
``dev < alpha < beta < RC < stable``.

A :class:`Constraint` is a single comparison against a version, such as ``>= 1.2.0.0-dev``.
The empty constraint matches any version.

A :class:`Range` is a tree of constraints that are AND'd or OR'd together. Ranges
are created from constraint expressions, which support wildcards (``1.x``), tilde
(``~1.2``), caret (``^1.2``) and hyphen (``1.0 - 2.0``) shorthands, as well as plain
comparisons (``>=1.0``). For example::

    >>> r = parse_range("^1.2 || >=3.0,<3.5")
    >>> parse_version("1.4.0") in r
    True
"""

from vernorm.version._util import reverse_sort_key
from vernorm.version._stability import expand_stability, classify_stability
from vernorm.version._version import Version, parse_version, normalize_branch
from vernorm.version._constraint import Constraint, parse_constraint, \
    expand_version
from vernorm.version._range import Range, parse_range, matches

__all__ = (
    "Version",
    "Constraint",
    "Range",
    "parse_version",
    "normalize_branch",
    "classify_stability",
    "expand_stability",
    "parse_constraint",
    "expand_version",
    "parse_range",
    "matches",
    "reverse_sort_key",
)
