# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Single constraint tokens, and their expansion into primitive comparisons.

A token such as '~1.2', '^0.3', '1.x', '1.0 - 2.0' or '>=1.5' expands into one
or two `Constraint` leaves, each an (operator, version) pair. A wildcard token
('*', 'x.x') expands into a single empty constraint that matches anything.
"""
from vernorm.version._util import _Common
from vernorm.version._version import parse_version
from vernorm.version._stability import stability_tokens, stability_tag_regex, \
    expand_stability, classify_stability
from vernorm.exceptions import InvalidVersion, InvalidConstraint, \
    InvalidOperator, CarryOverflowError, convert_errors
from vernorm.config import config
import re


def _version_pattern(prefix=""):
    return (
        r"v?(?P<{p}major>\d+)"
        r"(?:\.(?P<{p}minor>\d+))?"
        r"(?:\.(?P<{p}patch>\d+))?"
        r"(?:\.(?P<{p}extra>\d+))?"
        r"[._-]?(?:(?P<{p}stability>{tokens})"
        r"(?P<{p}stability_number>(?:[.-]?\d+)*)?)?"
        r"(?P<{p}dev>[.-]?dev)?"
        r"(?:\+[^\s]+)?"
    ).format(p=prefix, tokens=stability_tokens)


stability_modifier_regex = re.compile(
    r"^([^,\s]*?)@(stable|RC|beta|alpha|dev)$", re.IGNORECASE)


class Constraint(_Common):
    """A primitive comparison against a bound version.

    A constraint without a version is empty, and matches any version.
    """
    operators = ("==", "!=", "<", "<=", ">", ">=")

    def __init__(self, operator=None, version=None):
        """Create a constraint.

        Args:
            operator (str): One of `Constraint.operators`.
            version (`Version`): Bound version. If None, the constraint is
                empty.
        """
        if version is not None and operator not in self.operators:
            raise InvalidOperator("Invalid operator %r" % operator)

        self.operator = operator if version is not None else None
        self.version = version

    @property
    def is_empty(self):
        return self.version is None

    def matches(self, version):
        """Returns True if `version` satisfies this constraint."""
        if self.is_empty:
            return True
        return version.compare(self.version, self.operator)

    def __eq__(self, other):
        return isinstance(other, Constraint) \
            and self.operator == other.operator \
            and str(self.version) == str(other.version)

    def __hash__(self):
        return hash((self.operator, str(self.version)))

    def __str__(self):
        if self.is_empty:
            return "[]"

        s = "%s %s" % (self.operator, self.version)
        if s.endswith("-stable"):
            s = s[:-len("-stable")]
        return s


class _ConstraintParser(object):
    version_group = _version_pattern()

    wildcard_regex = re.compile(r"^v?[xX*](?:\.[xX*])*$")

    tilde_regex = re.compile(r"^~>?%s$" % version_group, re.IGNORECASE)

    caret_regex = re.compile(r"^\^%s$" % version_group, re.IGNORECASE)

    x_range_regex = re.compile(
        r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
        r"(?:\.[xX*])+$")

    hyphen_regex = re.compile(
        r"^(?P<low>%s) +- +(?P<high>%s)$"
        % (_version_pattern("low_"), _version_pattern("high_")),
        re.IGNORECASE)

    basic_regex = re.compile(r"^(?P<operator><>|!=|>=?|<=?|==?)?\s*(?P<version>.*)")

    operator_map = {
        "=": "==",
        "==": "==",
        "<>": "!=",
        "!=": "!=",
        ">": ">",
        "<": "<",
        "<=": "<=",
        ">=": ">="
    }

    def __init__(self, input_string):
        self._input_string = input_string
        self._groups = {}
        self.constraints = []
        self.debug_print = config.debug_printer("constraint_parsing")

        msg = "Could not parse version constraint %s" % input_string

        with convert_errors(from_=InvalidVersion, to=InvalidConstraint, msg=msg):
            if self.wildcard_regex.match(input_string):
                self._act_wildcard()
            elif self._search(self.tilde_regex):
                self._act_tilde()
            elif self._search(self.caret_regex):
                self._act_caret()
            elif self._search(self.x_range_regex):
                self._act_x_range()
            elif self._search(self.hyphen_regex):
                self._act_hyphen()
            else:
                # matches any token, the version part is validated on parse
                self._search(self.basic_regex)
                self._act_basic()

    def _search(self, regex):
        match = regex.match(self._input_string)
        if match:
            self._groups = match.groupdict()
        return match

    def _parts(self, prefix=""):
        return [self._groups.get(prefix + x)
                for x in ("major", "minor", "patch", "extra")]

    def _add(self, operator, version):
        self.constraints.append(Constraint(operator, version))

    def action(fn):
        def fn_(self):
            result = fn(self)
            if self.debug_print:
                label = fn.__name__.replace("_act_", "")
                self.debug_print("%-9s: %s", label, self._input_string)
                for key, value in sorted(self._groups.items()):
                    if value:
                        self.debug_print("    %-23s= %s", key, value)
                self.debug_print("    %-23s= %s", "constraints",
                                 " ".join(str(x) for x in self.constraints))
            return result
        return fn_

    @action
    def _act_wildcard(self):
        self.constraints.append(Constraint())

    @action
    def _act_tilde(self):
        if self._input_string.startswith("~>"):
            raise InvalidOperator(
                'Could not parse version constraint %s: Invalid operator "~>", '
                'you probably meant to use the "~" operator' % self._input_string)

        parts = self._parts()
        position = _last_present(parts)

        suffix = ""
        if self._groups["stability"]:
            suffix = "-%s%s" % (expand_stability(self._groups["stability"]),
                                self._groups["stability_number"] or "")

        if self._groups["dev"] or not suffix:
            suffix = "-dev"

        self._add(">=", expand_version(parts, position, 0, suffix))
        self._add("<", expand_version(parts, max(1, position - 1), 1, "-dev"))

    @action
    def _act_caret(self):
        major, minor, patch, _ = parts = self._parts()

        if major != "0" or not minor:
            position = 1
        elif minor != "0" or not patch:
            position = 2
        else:
            position = 3

        suffix = ""
        if not self._groups["stability"] and not self._groups["dev"]:
            suffix = "-dev"

        self._add(">=", parse_version(self._input_string[1:] + suffix))
        self._add("<", expand_version(parts, position, 1, "-dev"))

    @action
    def _act_x_range(self):
        parts = self._parts()
        position = _last_present(parts)

        low = expand_version(parts, position, 0, "-dev")
        high = expand_version(parts, position, 1, "-dev")

        if str(low) != "0.0.0.0-dev":
            self._add(">=", low)
        self._add("<", high)

    @action
    def _act_hyphen(self):
        g = self._groups

        suffix = ""
        if not g["low_stability"] and not g["low_dev"]:
            suffix = "-dev"
        self._add(">=", parse_version(g["low"] + suffix))

        if (g["high_minor"] and g["high_patch"]) \
                or g["high_stability"] or g["high_dev"]:
            self._add("<=", parse_version(g["high"]))
        else:
            position = 2 if g["high_minor"] else 1
            self._add("<", expand_version(self._parts("high_"), position, 1, "-dev"))

    @action
    def _act_basic(self):
        token = self._input_string
        stability = ""

        match = stability_modifier_regex.match(token)
        if match:
            token = match.group(1)
            if match.group(2).lower() != "stable":
                stability = match.group(2)

        match = self.basic_regex.match(token)
        operator = match.group("operator")
        ver_str = match.group("version")

        if stability and classify_stability(ver_str) == "stable":
            ver_str += "-" + stability
        elif operator in ("<", ">=") \
                and not stability_tag_regex.search(ver_str) \
                and not ver_str.startswith("dev-"):
            ver_str += "-dev"

        self._add(self.operator_map[operator or "="], parse_version(ver_str))


def _last_present(parts):
    for i in range(len(parts), 0, -1):
        if parts[i - 1]:
            return i
    return 0


def expand_version(parts, position, increment=0, suffix=""):
    """Build a bound version from partial components.

    Components right of `position` are zeroed, the component at `position`
    (1=major .. 4=extra) is incremented by `increment`, and `suffix` is
    appended.

    Example:

        >>> str(expand_version(["1", "2", "3", None], 2, 1, "-dev"))
        '1.3.0.0-dev'

    Args:
        parts (list of str): Major, minor, patch and extra components; absent
            components may be None.
        position (int): Component to increment.
        increment (int): Amount to add at `position`.
        suffix (str): Text appended to the version, eg '-dev'.

    Returns:
        `Version`.
    """
    result = [None] * 4

    for i in range(4, 0, -1):
        if i > position:
            result[i - 1] = "0"
        elif i == position and increment:
            value = int(parts[i - 1] or 0)
            if value < 0:
                if i == 1:
                    raise CarryOverflowError(
                        "carry overflow expanding %r at position %d"
                        % (parts, position))
                result[i - 1] = "0"
                position -= 1
            else:
                result[i - 1] = str(value + increment)
        else:
            result[i - 1] = parts[i - 1] or "0"

    return parse_version("%s.%s.%s.%s%s" % tuple(result + [suffix]))


def parse_constraint(token):
    """Expand a single constraint token.

    Args:
        token (str): Constraint token, eg '^1.2', '>=1.0', '1.0 - 2.0'.

    Returns:
        List of `Constraint`: One or two constraints, which are implicitly
        AND'd.

    Raises:
        `InvalidConstraint`: If the token is not a valid constraint.
        `InvalidOperator`: For the '~>' operator.
    """
    return _ConstraintParser(token).constraints
