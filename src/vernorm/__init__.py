# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


from vernorm.utils._version import _vernorm_version
import sys
import os


__version__ = _vernorm_version
__license__ = "Apache-2.0"


module_root_path = __path__[0]  # noqa


def _init_logging():
    logging_conf = os.getenv("VERNORM_LOGGING_CONF")
    if logging_conf:
        import logging.config
        logging.config.fileConfig(logging_conf, disable_existing_loggers=False)
        return

    import logging

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%X"
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger = logging.getLogger("vernorm")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)


_init_logging()
