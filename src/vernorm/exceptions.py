# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Exceptions.
"""
from contextlib import contextmanager


class VernormError(Exception):
    """Base-class vernorm error."""
    def __init__(self, value=None):
        self.value = value

    def __str__(self):
        return str(self.value)


class InvalidVersion(VernormError):
    """Version text matches none of the recognised grammars."""
    pass


class InvalidConstraint(VernormError):
    """A constraint token matches no constraint shape."""
    pass


class InvalidOperator(InvalidConstraint):
    """An unsupported or mistyped operator was used."""
    pass


class CarryOverflowError(VernormError):
    """A bound expansion carried past the most significant component.

    This indicates a bug in bound expansion, it is never raised for input
    accepted by the constraint grammars.
    """
    pass


class ConfigurationError(VernormError):
    """A misconfiguration error."""
    pass


@contextmanager
def convert_errors(from_, to, msg=None):
    exc = None

    try:
        yield None
    except from_ as e:
        exc = e

    if exc:
        info = str(exc)
        if msg:
            info = "%s: %s" % (msg, info)
        raise to(info)
