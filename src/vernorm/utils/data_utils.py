# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


"""
Helpers for the config: dict merging and lazily validated attributes.
"""
from schema import Schema


def deep_update(dict1, dict2):
    """Merge `dict2` into `dict1`, recursing into dicts found in both.

    Dicts taken from `dict2` are copied, so `dict2` is never modified by later
    updates to `dict1`.
    """
    def _copy(value):
        if isinstance(value, dict):
            return dict((k, _copy(v)) for k, v in value.items())
        return value

    for key, value in dict2.items():
        existing = dict1.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            deep_update(existing, value)
        else:
            dict1[key] = _copy(value)


class cached_property(object):
    """Property that is computed once, then stored on the instance.

    Deleting the instance attribute makes the next access compute it again.
    """
    def __init__(self, func, name=None):
        self.func = func
        self.name = name or func.__name__

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        value = self.func(instance)
        setattr(instance, self.name, value)
        return value


class LazyAttributeMeta(type):
    """Metaclass that turns the keys of a class's `schema` into attributes.

    Each attribute reads its key from the instance's `_data` dict the first
    time it is accessed, and passes the value to the instance's
    `_validate_key(key, value, key_schema)`. A missing key raises the class's
    `schema_error`. If the class already defines a name, the attribute is
    created as '_<name>' instead.

    The class also gains `validated_data()`, which returns every setting as a
    dict, and `_schema_keys`.
    """
    def __new__(cls, name, parents, members):
        schema = members.get("schema")

        if schema:
            keys = []
            for key, key_schema in schema._schema.items():
                while isinstance(key, Schema):
                    key = key._schema

                defined = key in members or any(hasattr(p, key) for p in parents)
                attr = ("_" + key) if defined else key
                if attr in members:
                    raise TypeError("cannot create attribute %r for setting %r"
                                    % (attr, key))

                members[attr] = cls._make_getter(key, attr, key_schema)
                keys.append(key)

            members["validated_data"] = cls._validated_data
            members["_schema_keys"] = frozenset(keys)

        return super(LazyAttributeMeta, cls).__new__(cls, name, parents, members)

    @staticmethod
    def _validated_data(self):
        return dict((key, getattr(self, key)) for key in self._schema_keys)

    @staticmethod
    def _make_getter(key, attr, key_schema):
        def getter(self):
            data = self._data or {}
            if key not in data:
                raise self.schema_error("Required key is missing: %r" % key)
            return self._validate_key(key, data[key], key_schema)

        return cached_property(getter, name=attr)
