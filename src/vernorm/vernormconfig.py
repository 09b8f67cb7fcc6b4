# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Vernorm configuration settings. Do not change this file.

Settings are determined in the following way (higher number means higher
precedence):

1) The setting is first read from this file;
2) The setting is then overridden if it is present in another settings file(s)
   pointed at by the $VERNORM_CONFIG_FILE environment variable. Note that
   multiple files are supported, separated by os.pathsep. Files may be python
   (vernormconfig.py style) or YAML;
3) The setting is further overriden if it is present in $HOME/.vernormconfig,
   UNLESS $VERNORM_DISABLE_HOME_CONFIG is 1;
4) The setting is overridden again if the environment variable $VERNORM_XXX is
   present, where XXX is the uppercase version of the setting key. For example,
   "max_version_length" will be overriden by $VERNORM_MAX_VERSION_LENGTH;
5) The setting can also be overriden by the environment variable
   $VERNORM_XXX_JSON, and in this case the string is expected to be a
   JSON-encoded value;
6) Settings overridden programmatically with `Config.override` take precedence
   over all others.

The following variables are provided if you are using vernormconfig.py files:
- 'vernorm_version': The current version of vernorm.
"""

# flake8: noqa


###############################################################################
# Limits
###############################################################################

# Longest version string that will be parsed. Longer strings are rejected with
# an InvalidVersion error. If 0, there is no limit.
max_version_length = 0

# Longest constraint expression that will be parsed. Longer expressions are
# rejected with an InvalidConstraint error. If 0, there is no limit. Set this
# when parsing constraints from untrusted sources.
max_constraint_length = 0


###############################################################################
# Debugging
###############################################################################

# Print info about how each version string was normalized, such as which
# grammar matched and whether an alias was discarded.
debug_version_parsing = False

# Print info about how constraint expressions were expanded, such as which
# shorthand fired for each token and whether contiguous ranges were collapsed.
debug_constraint_parsing = False

# Turn on all debugging messages
debug_all = False

# Turn off all debugging messages. This overrides :data:`debug_all`.
debug_none = False

# Suppress all debug output.
quiet = False
