# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


import unittest
from vernorm.config import config, _create_locked_config
from vernorm.utils.data_utils import deep_update
import os


class TestBase(unittest.TestCase):
    """Test case that runs every test against a locked config.

    Set `settings` on a subclass to override settings for all of its tests,
    or call `update_settings` within a single test.
    """
    settings = {}

    def setUp(self):
        self.maxDiff = None
        self._environ = dict(os.environ)
        self._use_config(dict(self.settings))

    def tearDown(self):
        config._swap(self._config)
        self._config = None

        os.environ.clear()
        os.environ.update(self._environ)

    def _use_config(self, overrides):
        # user config files and env vars must not leak into tests
        self._config = _create_locked_config(overrides)
        config._swap(self._config)

    def update_settings(self, new_settings):
        """Override settings for the rest of the current test.

        `new_settings` is merged over the class `settings`; earlier calls
        within the same test are discarded.
        """
        config._swap(self._config)

        settings = dict(type(self).settings)
        deep_update(settings, new_settings)
        self._use_config(settings)
