# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Stability tags - the pre-release maturity attached to a version.

The canonical stabilities are totally ordered::

    dev < alpha < beta < RC < stable

Free-form tokens found in version strings ('a', 'b', 'pl', 'rc' etc) are
expanded to their canonical spelling by `expand_stability`.
"""
import re


# Alternation order matters, eg 'beta' must be tried before 'b'.
stability_tokens = r"dev|stable|beta|b|RC|alpha|a|patch|pl|p"

stability_tag = (
    r"[._-]?(?:(?P<stability>{tokens})"
    r"(?P<stability_number>(?:[.-]?\d+)*)?)"
).format(tokens=stability_tokens)

stability_tag_regex = re.compile(stability_tag, re.IGNORECASE)

stability_ranks = {
    "dev": 1,
    "alpha": 2,
    "beta": 3,
    "rc": 4,
    "stable": 5
}

_expansions = {
    "a": "alpha",
    "alpha": "alpha",
    "b": "beta",
    "beta": "beta",
    "p": "patch",
    "pl": "patch",
    "rc": "RC"
}

_classifications = {
    "a": "alpha",
    "alpha": "alpha",
    "b": "beta",
    "beta": "beta",
    "rc": "RC",
    "dev": "dev"
}


def expand_stability(token):
    """Expand a stability token to its canonical spelling.

    Matching is case insensitive. Unknown tokens (including the empty string)
    are returned unchanged.

    Example:

        >>> expand_stability("b")
        'beta'
        >>> expand_stability("rc")
        'RC'
        >>> expand_stability("pl")
        'patch'
    """
    if not token:
        return token
    return _expansions.get(token.lower(), token)


def classify_stability(text):
    """Return the stability of a version string, without fully parsing it.

    Args:
        text (str): Version text, eg '3.1.2-beta' or 'dev-master'.

    Returns:
        str: One of 'dev', 'alpha', 'beta', 'RC' or 'stable'. Patch tags
        ('p', 'pl', 'patch') classify as 'stable'.
    """
    if not text:
        return "stable"

    lowered = text.lower()
    if lowered.startswith("dev-") or lowered.endswith("-dev") \
            or lowered.endswith(".dev"):
        return "dev"

    match = stability_tag_regex.search(text)
    if match:
        token = match.group("stability").lower()
        return _classifications.get(token, "stable")

    return "stable"


def stability_rank(stability):
    """Rank of a stability for ordering purposes.

    Unknown and empty stabilities rank as 'stable'.
    """
    return stability_ranks.get((stability or "stable").lower(),
                               stability_ranks["stable"])
