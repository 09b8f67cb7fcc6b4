# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Layered configuration.

Settings come from the packaged 'vernormconfig.py', merged with the files in
$VERNORM_CONFIG_FILE and then ~/.vernormconfig. A $VERNORM_<KEY> (or
$VERNORM_<KEY>_JSON) env var replaces the file value, and `Config.override`
replaces everything. The comment block at the top of 'vernormconfig.py' has
the full precedence order.
"""
from vernorm import __version__, module_root_path
from vernorm.utils.data_utils import cached_property, LazyAttributeMeta, \
    deep_update
from vernorm.utils.logging_ import get_debug_printer
from vernorm.exceptions import ConfigurationError
from schema import Schema, SchemaError, And
from yaml.error import YAMLError
from functools import lru_cache
from contextlib import contextmanager
from inspect import ismodule
import yaml
import json
import os
import copy


class Setting(object):
    """A setting validator.

    Subclasses give the `schema` a value must satisfy, and convert the text
    of a $VERNORM_<KEY> env var with `from_string`.
    """
    schema = Schema(object)

    def __init__(self, config, key):
        self.config = config
        self.key = key

    @property
    def env_var(self):
        return "VERNORM_" + self.key.upper()

    def from_string(self, text):
        raise NotImplementedError

    def validate(self, value):
        value = self._resolve(value)
        try:
            return self.schema.validate(value)
        except SchemaError as e:
            raise ConfigurationError("Misconfigured setting %r: %s"
                                     % (self.key, e))

    def _resolve(self, value):
        # `value` already has any override applied
        if self.key in self.config.overrides or self.config.locked:
            return value

        text = os.getenv(self.env_var)
        if text is not None:
            return self.from_string(text)

        json_var = self.env_var + "_JSON"
        text = os.getenv(json_var)
        if text is None:
            return value

        try:
            return json.loads(text)
        except ValueError:
            raise ConfigurationError("$%s is not valid JSON: %r"
                                     % (json_var, text))


class Int(Setting):
    schema = Schema(int)

    def from_string(self, text):
        try:
            return int(text)
        except ValueError:
            raise ConfigurationError("Expected $%s to be an integer, got %r"
                                     % (self.env_var, text))


class Length(Int):
    # zero disables the limit
    schema = And(int, lambda x: x >= 0)


class Bool(Setting):
    schema = Schema(bool)
    words = {
        "1": True, "true": True, "t": True, "yes": True, "y": True,
        "on": True,
        "0": False, "false": False, "f": False, "no": False, "n": False,
        "off": False
    }

    def from_string(self, text):
        try:
            return self.words[text.lower()]
        except KeyError:
            raise ConfigurationError(
                "Expected $%s to be one of: %s"
                % (self.env_var, ", ".join(sorted(self.words))))


config_schema = Schema({
    "quiet":                    Bool,
    "debug_version_parsing":    Bool,
    "debug_constraint_parsing": Bool,
    "debug_all":                Bool,
    "debug_none":               Bool,
    "max_version_length":       Length,
    "max_constraint_length":    Length
})


class Config(object, metaclass=LazyAttributeMeta):
    """Configuration settings, read as attributes.

    Each setting is looked up in the merged config files on first access and
    validated against `config_schema`. Parsing reads the module-level
    `config`; tests swap in a locked one (see `_replace_config`).
    """
    schema = config_schema
    schema_error = ConfigurationError

    def __init__(self, filepaths, overrides=None, locked=False):
        """Create a config.

        Args:
            filepaths (list of str): Config files, lowest precedence first.
                Files that do not exist are skipped.
            overrides (dict): Settings that take precedence over all others.
            locked (bool): If True, env vars are ignored.
        """
        self.filepaths = filepaths
        self.overrides = overrides or {}
        self.locked = locked
        self._sourced_filepaths = None

    def copy(self, overrides=None, locked=False):
        """Create an independent copy of this config.

        Args:
            overrides (dict): Overrides of the copy. If None, the copy starts
                from its own copy of this config's overrides.
            locked (bool): If True, the copy ignores env vars.

        Returns:
            `Config`.
        """
        other = copy.copy(self)
        if overrides is None:
            overrides = self.overrides
        other.overrides = dict(overrides)
        other.locked = locked
        other._uncache()
        return other

    def override(self, key, value):
        """Set a setting, ignoring every other source."""
        if key not in self._schema_keys:
            raise AttributeError("no such setting: %r" % key)

        self.overrides[key] = value
        self._uncache()

    def remove_override(self, key):
        """Remove a setting override, if there is one."""
        if key in self.overrides:
            del self.overrides[key]
            self._uncache()

    def debug(self, key):
        """Test whether the debug setting `debug_<key>` is in effect."""
        if self.quiet or self.debug_none:
            return False
        return self.debug_all or getattr(self, "debug_" + key)

    def debug_printer(self, key):
        """Get a debug printer, enabled if `debug(key)` is True."""
        return get_debug_printer(self.debug(key))

    @cached_property
    def sourced_filepaths(self):
        """The config files that were found and loaded, in load order."""
        self._data  # noqa; loading sets `_sourced_filepaths`
        return self._sourced_filepaths

    @property
    def data(self):
        """All settings, validated, as a dict."""
        return self.validated_data()

    def _uncache(self):
        # cached_property values live in the instance dict
        for name in ["_data"] + list(self._schema_keys):
            self.__dict__.pop(name, None)

    def _swap(self, other):
        """Exchange the state of this config with `other`."""
        self.__dict__, other.__dict__ = other.__dict__, self.__dict__

    def _validate_key(self, key, value, key_schema):
        return key_schema(self, key).validate(value)

    @cached_property
    def _data_without_overrides(self):
        data, self._sourced_filepaths = \
            _load_config_from_filepaths(self.filepaths)
        return data

    @cached_property
    def _data(self):
        data = copy.deepcopy(self._data_without_overrides)
        deep_update(data, self.overrides)
        return data

    @classmethod
    def _create_main_config(cls):
        filepaths = [get_module_root_config()]

        value = os.getenv("VERNORM_CONFIG_FILE")
        if value:
            filepaths.extend(x for x in value.split(os.pathsep) if x)

        disable_home = os.getenv("VERNORM_DISABLE_HOME_CONFIG", "")
        if disable_home.lower() not in ("1", "t", "true"):
            filepaths.append(os.path.expanduser("~/.vernormconfig"))

        return cls(filepaths)


def _create_locked_config(overrides=None):
    """Create a config from the packaged defaults only.

    User config files and env vars are ignored, so the result is the same on
    every machine.
    """
    return Config([get_module_root_config()], overrides=overrides,
                  locked=True)


@contextmanager
def _replace_config(other):
    """Use `other` as the global config within the context."""
    config._swap(other)
    try:
        yield
    finally:
        config._swap(other)


@lru_cache()
def _load_config_py(filepath):
    # visible to the file, but not settings
    reserved = {
        "__name__": os.path.splitext(os.path.basename(filepath))[0],
        "__file__": filepath,
        "vernorm_version": __version__
    }
    namespace = dict(reserved)

    with open(filepath) as f:
        source = f.read()

    try:
        exec(compile(source, filepath, "exec"), namespace)
    except Exception as e:
        raise ConfigurationError("Error loading configuration from %s: %s"
                                 % (filepath, e))

    return dict((k, v) for k, v in namespace.items()
                if k != "__builtins__" and k not in reserved
                and not ismodule(v))


@lru_cache()
def _load_config_yaml(filepath):
    with open(filepath) as f:
        try:
            doc = yaml.load(f, Loader=yaml.FullLoader)
        except YAMLError as e:
            raise ConfigurationError("Error loading configuration from %s: %s"
                                     % (filepath, e))

    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ConfigurationError(
            "Error loading configuration from %s: expected a mapping, got %s"
            % (filepath, type(doc).__name__))
    return doc


def _load_config_from_filepaths(filepaths):
    data = {}
    sourced_filepaths = []

    for filepath in filepaths:
        # 'foo.py' is preferred to 'foo', which is read as YAML
        py_filepath = os.path.splitext(filepath)[0] + ".py"

        if os.path.isfile(py_filepath):
            deep_update(data, _load_config_py(py_filepath))
            sourced_filepaths.append(py_filepath)
        elif os.path.isfile(filepath):
            deep_update(data, _load_config_yaml(filepath))
            sourced_filepaths.append(filepath)

    return data, sourced_filepaths


def get_module_root_config():
    return os.path.join(module_root_path, "vernormconfig.py")


# singleton
config = Config._create_main_config()
