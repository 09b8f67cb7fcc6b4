# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Constraint expressions.

An expression is a set of OR groups separated by '||' (or '|'), each group
being a set of constraint tokens separated by whitespace or commas, which are
AND'd together::

    >=1.0 <1.1 || ^2.0, !=2.0.3

`parse_range` turns an expression into a `Range` tree, whose leaves are
`Constraint` objects.
"""
from vernorm.version._util import _Common
from vernorm.version._constraint import Constraint, parse_constraint, \
    stability_modifier_regex
from vernorm.exceptions import InvalidConstraint
from vernorm.config import config
import re


_dev_reference_regex = re.compile(
    r"^(dev-[^,\s@]+?|[^,\s@]+?\.x-dev)#.+$", re.IGNORECASE)

_or_split_regex = re.compile(r"\s*\|\|?\s*")

_and_split_regex = re.compile(r"\s*[ ,]\s*")

# operators that may be separated from their version by whitespace
_standalone_operators = frozenset(
    ["<", ">", "<=", ">=", "=", "==", "!=", "<>", "^", "~"])


class Range(_Common):
    """A boolean tree of constraints.

    A range's children are `Constraint` leaves or nested `Range` objects. They
    are AND'd if the range is conjunctive, and OR'd otherwise.

    A range with a single child renders as that child. Otherwise the children
    are rendered in brackets, separated by a space if conjunctive, or by ' || '
    if disjunctive::

        >>> str(parse_range("^0.2 || ^1.0"))
        '[[>= 0.2.0.0-dev < 0.3.0.0-dev] || [>= 1.0.0.0-dev < 2.0.0.0-dev]]'

    A collapsed range is the single interval that two adjacent OR'd intervals
    were merged into. It matches as a conjunction, but keeps the ' || '
    rendering of the expression it came from::

        >>> str(parse_range("^2.5 || ^3.0"))
        '[>= 2.5.0.0-dev || < 4.0.0.0-dev]'
    """
    def __init__(self, children=None, conjunctive=True, collapsed=False):
        """Create a range.

        Args:
            children (list): `Constraint` and/or `Range` objects.
            conjunctive (bool): If True, all children must match, otherwise
                any child must match.
            collapsed (bool): If True, render as a disjunction.
        """
        self.children = list(children or [])
        self.conjunctive = conjunctive
        self.collapsed = collapsed

    @classmethod
    def parse(cls, range_str):
        """Same as `parse_range`."""
        return parse_range(range_str)

    def matches(self, version):
        """Returns True if `version` satisfies this range."""
        if self.conjunctive:
            return all(x.matches(version) for x in self.children)
        else:
            return any(x.matches(version) for x in self.children)

    def constraints(self):
        """Iterate over every `Constraint` in the tree, depth first."""
        for child in self.children:
            if isinstance(child, Range):
                for constraint in child.constraints():
                    yield constraint
            else:
                yield child

    def is_any(self):
        """Returns True if this range matches any version, eg '*'."""
        return all(x.is_empty for x in self.constraints())

    def iter_matching(self, iterable, key=None):
        """Iterate over the items of `iterable` that this range matches.

        Args:
            iterable: Sequence of versioned objects.
            key (callable): Function that returns a `Version` given an object
                from `iterable`. If None, the identity function is used.
        """
        for item in iterable:
            version = key(item) if key else item
            if self.matches(version):
                yield item

    def __contains__(self, version):
        return self.matches(version)

    def __eq__(self, other):
        return isinstance(other, Range) \
            and self.conjunctive == other.conjunctive \
            and self.collapsed == other.collapsed \
            and self.children == other.children

    def __hash__(self):
        return hash((self.conjunctive, self.collapsed, tuple(self.children)))

    def __str__(self):
        if len(self.children) == 1:
            return str(self.children[0])

        glue = " " if (self.conjunctive and not self.collapsed) else " || "
        return "[%s]" % glue.join(str(x) for x in self.children)


def matches(range_, version):
    """Returns True if `version` satisfies `range_`."""
    return range_.matches(version)


def parse_range(range_str):
    """Parse a constraint expression.

    Args:
        range_str (str): Constraint expression, eg '^1.2 || >=2.0,<2.5'.

    Returns:
        `Range`.

    Raises:
        `InvalidConstraint`: If any part of the expression is invalid.
        `InvalidOperator`: For the '~>' operator.
    """
    limit = config.max_constraint_length
    if limit and len(range_str) > limit:
        raise InvalidConstraint(
            "Could not parse version constraint %s...: longer than %d characters"
            % (range_str[:limit], limit))

    debug_print = config.debug_printer("constraint_parsing")
    text = range_str

    match = stability_modifier_regex.match(text)
    if match:
        text = match.group(1)
        debug_print("ignoring stability flag @%s of %r", match.group(2), range_str)

    match = _dev_reference_regex.match(text)
    if match:
        text = match.group(1)
        debug_print("ignoring reference of %r", range_str)

    groups = []

    for group_str in _or_split_regex.split(text):
        group_str = group_str.strip()
        if not group_str:
            raise InvalidConstraint(
                "Could not parse version constraint %s: empty constraint group"
                % range_str)

        tokens = _split_and_tokens(group_str, range_str)

        if len(tokens) == 1:
            groups.append(_expand_token(tokens[0]))
        else:
            constraints = []
            for token in tokens:
                constraints.extend(parse_constraint(token))
            groups.append(Range(constraints, conjunctive=True))

    if len(groups) == 1:
        group = groups[0]
        return group if isinstance(group, Range) else Range([group])

    collapsed = _collapse(groups)
    if collapsed is not None:
        debug_print("collapsed contiguous ranges in %r to %s", range_str, collapsed)
        return collapsed

    return Range(groups, conjunctive=False)


def _expand_token(token):
    constraints = parse_constraint(token)
    if len(constraints) == 1:
        return constraints[0]
    return Range(constraints, conjunctive=True)


def _split_and_tokens(group_str, range_str):
    parts = _and_split_regex.split(group_str)
    if not all(parts):
        raise InvalidConstraint(
            "Could not parse version constraint %s: empty constraint in %r"
            % (range_str, group_str))

    tokens = []
    i = 0

    while i < len(parts):
        token = parts[i]

        if token in _standalone_operators and i + 1 < len(parts):
            i += 1
            token += parts[i]

        # hyphen ranges and aliases span three parts
        if i + 2 < len(parts) and parts[i + 1] in ("as", "-"):
            token = " ".join([token] + parts[i + 1:i + 3])
            i += 2

        tokens.append(token)
        i += 1

    return tokens


def _is_interval(range_):
    return isinstance(range_, Range) \
        and len(range_.children) == 2 \
        and all(isinstance(x, Constraint) for x in range_.children) \
        and range_.children[0].operator == ">=" \
        and range_.children[1].operator == "<"


def _collapse(groups):
    if len(groups) != 2 or not all(_is_interval(x) for x in groups):
        return None

    first, second = groups
    if str(first.children[1].version) != str(second.children[0].version):
        return None

    return Range([first.children[0], second.children[1]],
                 conjunctive=True, collapsed=True)
