# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Version normalization.

Free-form version strings are normalized into a `Version`, which has a
canonical string form and a total ordering. Four grammars are recognised, in
order of precedence:

- branch sentinels ('master', 'dev-trunk' etc), which sort above any release;
- arbitrary dev branches ('dev-feature-foo');
- numeric versions ('1.2.3', '1.0.0-beta.2', 'v2.0RC1-dev', '1.0+build.5');
- date versions ('2010-01-02', '20100102-203040-p1').

Text ending in 'dev' that matches none of these is treated as a branch name
(see `normalize_branch`), so '1.x-dev' normalizes to
'1.9999999.9999999.9999999-dev'.
"""
from vernorm.version._util import _Comparable
from vernorm.version._stability import stability_tag, expand_stability, \
    stability_rank
from vernorm.exceptions import InvalidVersion, InvalidOperator
from vernorm.config import config
import re


_alias_regex = re.compile(r"^([^,\s]+)\s+as\s+([^,\s]+)$")

# also matches the canonical form, so that rendered sentinels parse back
_sentinel_regex = re.compile(
    r"^(?:(?:dev-)?(?:master|trunk|default)|9999999(?:-dev)?)$",
    re.IGNORECASE)

_semantic_regex = re.compile(
    r"^v?(?P<major>[0-9]{1,5})"
    r"(?:\.(?P<minor>[0-9]+))?"
    r"(?:\.(?P<patch>[0-9]+))?"
    r"(?:\.(?P<extra>[0-9]+))?"
    r"(?i:%s?(?P<state>[.-]?dev)?)"
    r"(?:\+(?P<metadata>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
    % stability_tag
)

_date_regex = re.compile(
    r"^v?(?P<head>\d{4}(?:[.:-]?\d{2}){1,6}(?:[.:-]?\d{1,3})?)"
    r"(?i:%s?)$"
    % stability_tag
)

_trailing_dev_regex = re.compile(r"^(.*?)[.-]?dev$", re.IGNORECASE)

_branch_regex = re.compile(
    r"^v?(\d+)(\.(?:\d+|[xX*]))?(\.(?:\d+|[xX*]))?(\.(?:\d+|[xX*]))?$")

_non_digits_regex = re.compile(r"[^0-9]+")

_sentinel_branches = ("master", "trunk", "default")

_operators = {
    ">": lambda x: x > 0,
    ">=": lambda x: x >= 0,
    "<": lambda x: x < 0,
    "<=": lambda x: x <= 0,
    "==": lambda x: x == 0,
    "=": lambda x: x == 0,
    "!=": lambda x: x != 0,
    "<>": lambda x: x != 0
}


class Version(_Comparable):
    """Normalized version.

    A version is one of three variants:

    - numeric: major, minor, patch and extra components, with an optional
      stability tag ('beta'), pre-release tail ('2.1' in '1.0-beta2.1') and
      dev state marker;
    - branch (`is_branch`): a dev branch such as 'dev-feature-foo';
    - date (`is_date`): a date-like version such as '2010.01.02'.

    Branch sentinels ('master', 'trunk', 'default') are numeric versions with
    a major of `Version.sentinel`, so they sort above every release.

    Versions are ordered by major, minor and patch, then by stability
    (dev < alpha < beta < RC < stable), then by the numeric value of the
    pre-release tail. The extra component and build metadata play no part in
    ordering. Date versions are ordered by the numbers of their date, as if
    they were numeric. Arbitrary dev branches sort below every other version,
    and by name amongst themselves; sentinels sort above every other version.
    """
    sentinel = 9999999

    def __init__(self, ver_str=None):
        """Create a Version object.

        Args:
            ver_str (str): Version string. If None, an empty '0.0.0.0' version
                is created, fields are then expected to be set directly.
        """
        self.major = 0
        self.minor = 0
        self.patch = 0
        self.extra = 0
        self.pre_release = ""
        self.stability = ""
        self.state = ""
        self.metadata = ""
        self.original = ""
        self.parsed = ""
        self.is_branch = False
        self.is_date = False
        self._str = None
        self._hash = None

        if ver_str is not None:
            other = parse_version(ver_str)
            self.__dict__.update(other.__dict__)

    @classmethod
    def parse(cls, ver_str):
        """Same as `parse_version`."""
        return parse_version(ver_str)

    def as_tuple(self):
        """Convert to a tuple of the numeric components.

        Example:

            >>> Version("1.2.12").as_tuple()
            (1, 2, 12, 0)
        """
        return (self.major, self.minor, self.patch, self.extra)

    @property
    def pre(self):
        """Numeric value of the pre-release tail, zero if not numeric."""
        text = self.pre_release
        if self.stability:
            text = text.replace(self.stability, "")
        try:
            return float(text)
        except ValueError:
            return 0.0

    def compare(self, other, operator=None):
        """Compare this version to another.

        Args:
            other (`Version`): Version to compare against.
            operator (str): One of '>', '>=', '<', '<=', '==', '=', '!=' or
                '<>'. If None, a three-way comparison is performed instead.

        Returns:
            bool if `operator` is given, otherwise -1, 0 or 1.
        """
        if operator is None:
            a, b = self._key(), other._key()
            return (a > b) - (a < b)

        try:
            fn = _operators[operator]
        except KeyError:
            raise InvalidOperator("Invalid operator %r" % operator)

        return fn(self.compare(other))

    def _key(self):
        if self.is_branch:
            return (0, (), stability_rank(self.stability), 0.0, self.parsed)

        if self.is_date:
            numbers = tuple(int(x) for x in self.parsed.split("."))
            # the stability number of a date is held in `patch`
            pre = float(self.patch)
        else:
            numbers = (self.major, self.minor, self.patch)
            pre = self.pre

        tier = 2 if (self.major == self.sentinel and not self.is_date) else 1
        return (tier, numbers, stability_rank(self.stability), pre, "")

    def __eq__(self, other):
        return isinstance(other, Version) and self._key() == other._key()

    def __lt__(self, other):
        return self._key() < other._key()

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(self._key())
        return self._hash

    def __str__(self):
        if self._str is None:
            if self.is_branch:
                s = self.parsed
            elif self.is_date:
                s = self.parsed
                if self.stability:
                    s += "-" + self.stability
                if self.patch:
                    s += str(self.patch)
            else:
                s = str(self.major)
                if self.major != self.sentinel:
                    s += ".%d.%d.%d" % (self.minor, self.patch, self.extra)
                if self.stability:
                    s += "-" + self.stability
                if self.pre_release:
                    s += self.pre_release
                if self.state:
                    s += "-" + self.state

            self._str = s
        return self._str


def _create_version(original, **fields):
    version = Version()
    version.original = original
    for key, value in fields.items():
        setattr(version, key, value)
    return version


def parse_version(ver_str):
    """Parse and normalize a version string.

    Args:
        ver_str (str): Version string, eg '1.0.0-beta.2', 'dev-master as 1.0'.

    Returns:
        `Version`.

    Raises:
        `InvalidVersion`: If the text matches none of the version grammars.
    """
    limit = config.max_version_length
    if limit and len(ver_str) > limit:
        raise InvalidVersion("version string longer than %d characters: %s..."
                             % (limit, ver_str[:limit]))

    debug_print = config.debug_printer("version_parsing")
    text = ver_str

    match = _alias_regex.match(text)
    if match:
        text = match.group(1)
        debug_print("ignoring alias %r of version %r", match.group(2), text)

    if _sentinel_regex.match(text):
        debug_print("%r is a branch sentinel", ver_str)
        return _create_version(ver_str, major=Version.sentinel,
                               stability="dev")

    if len(text) > 4 and text[:4].lower() == "dev-":
        debug_print("%r is a dev branch", ver_str)
        return _create_version(ver_str, parsed="dev-" + text[4:],
                               stability="dev", is_branch=True)

    match = _semantic_regex.match(text)
    if match:
        groups = match.groupdict()
        debug_print("%r is a numeric version: %r", ver_str, groups)
        return _create_version(
            ver_str,
            major=int(groups["major"]),
            minor=int(groups["minor"] or 0),
            patch=int(groups["patch"] or 0),
            extra=int(groups["extra"] or 0),
            stability=expand_stability(groups["stability"] or ""),
            pre_release=(groups["stability_number"] or "").lstrip(".-"),
            state=(groups["state"] or "").lstrip(".-"),
            metadata=groups["metadata"] or ""
        )

    match = _date_regex.match(text)
    if match:
        groups = match.groupdict()
        debug_print("%r is a date version: %r", ver_str, groups)

        try:
            patch = int(groups["stability_number"] or 0)
        except ValueError:
            patch = 0

        return _create_version(
            ver_str,
            parsed=_non_digits_regex.sub(".", groups["head"]),
            stability=expand_stability(groups["stability"] or ""),
            patch=patch,
            is_date=True
        )

    match = _trailing_dev_regex.match(text)
    if match:
        debug_print("%r normalized as branch %r", ver_str, match.group(1))
        version = normalize_branch(match.group(1))
        version.original = ver_str
        return version

    raise InvalidVersion("unable to parse version %s" % text)


def normalize_branch(name):
    """Normalize a branch name into a version.

    Numeric branch names are expanded so that every absent or wildcard
    component becomes `Version.sentinel`, eg '2.1' -> '2.1.9999999.9999999-dev'
    and 'v1.x' -> '1.9999999.9999999.9999999-dev'. Other names become
    arbitrary dev branches, eg 'feature-a' -> 'dev-feature-a'.

    Args:
        name (str): Branch name.

    Returns:
        `Version`.
    """
    if name in _sentinel_branches:
        return parse_version(name)

    match = _branch_regex.match(name)
    if match:
        # numeric grammar caps the major at five digits
        if len(match.group(1)) > 5:
            raise InvalidVersion("unable to parse version %s" % name)

        parts = [match.group(1)]
        for part in match.group(2, 3, 4):
            if part:
                parts.append(part.replace("X", "x").replace("*", "x"))
            else:
                parts.append(".x")

        ver_str = "".join(parts).replace("x", str(Version.sentinel)) + "-dev"
        return parse_version(ver_str)

    return parse_version("dev-" + name)
