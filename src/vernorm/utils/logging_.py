# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


import logging


logger = logging.getLogger("vernorm")


def get_debug_printer(enabled=True):
    """Get a printer that logs to the vernorm logger at debug level.

    A disabled printer discards its messages and is falsy, so callers can skip
    building expensive messages with `if printer:`.
    """
    return _Printer(logger.debug if enabled else None)


class _Printer(object):
    def __init__(self, log_function=None):
        self.log_function = log_function

    def __call__(self, msg, *nargs):
        if not self.log_function:
            return
        # messages without args may contain a literal '%'
        if nargs:
            msg = msg % nargs
        self.log_function(msg)

    def __bool__(self):
        return self.log_function is not None
