# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..encoding import REMOVED
from ..log import debug
from ..paths import Path, ROOT
from ..schema import (
    ANY, ANY_LIST, ANY_MAPPING, ANY_TUPLE, AnyType, LeafType, MappingType,
    OptionalType, RecordType, SequenceType, describe, describe_value, is_record,
)

from .config import DiffConfig

__all__ = ["diff"]


def _key_order(key):
    # Orders int keys before str keys so mixed untyped keys still sort
    return (isinstance(key, str), key)


def values_equal(a, b, descriptor):
    "Exact equality, no tolerance for floats."
    if a is b:
        return True
    if isinstance(descriptor, AnyType) and type(a) is not type(b):
        return False
    return a == b


def diff(a, b, descriptor=None, path=ROOT, config=None):
    """Compute the patch transforming a into b.

    The descriptor gives the shape of both values, it is inferred
    from a if not given. The path is the location of a and b within
    the value the diff started from, and is used to look up atomic
    paths and custom differs in config.
    """
    if config is None:
        config = DiffConfig()
    if descriptor is None:
        descriptor = describe_value(a)
    path = Path.coerce(path)

    differ = config.differ_for(path)
    if differ is not None:
        return differ(a, b, descriptor, path=path, config=config)
    if config.is_atomic(path):
        return diff_leaves(a, b, descriptor)

    if isinstance(descriptor, RecordType):
        d = diff_records(a, b, descriptor, path=path, config=config)
    elif isinstance(descriptor, SequenceType):
        d = diff_sequences(a, b, descriptor, path=path, config=config)
    elif isinstance(descriptor, MappingType):
        d = diff_mappings(a, b, descriptor, path=path, config=config)
    elif isinstance(descriptor, OptionalType):
        d = diff_optionals(a, b, descriptor, path=path, config=config)
    elif isinstance(descriptor, AnyType):
        d = diff_untyped(a, b, path=path, config=config)
    elif isinstance(descriptor, LeafType):
        d = diff_leaves(a, b, descriptor)
    else:
        raise TypeError("Cannot diff with descriptor %r" % (descriptor,))
    return d


def diff_leaves(a, b, descriptor):
    """Diff two values as a whole.

    The patch is empty if they are equal, else it replaces
    the whole value with b.
    """
    p = descriptor.new_patch()
    if not values_equal(a, b, descriptor):
        p.add(ROOT, descriptor.encode(b))
    return p


def diff_records(a, b, descriptor, path=ROOT, config=None):
    """Diff two records field by field.

    Each changed field contributes its own patch, merged in under
    the field name.
    """
    if type(a) is not type(b):
        return diff_leaves(a, b, descriptor)
    p = descriptor.new_patch()
    for name, field in descriptor.fields.items():
        key = Path(name)
        cd = diff(getattr(a, name), getattr(b, name), field,
                  path=path.join(key), config=config)
        if not cd.is_empty():
            p.merge(key, cd)
    debug("Diff of %s at %s has %d entries", descriptor.type_name, path, len(p))
    return p


def diff_sequences(a, b, descriptor, path=ROOT, config=None):
    """Diff two sequences element by element.

    Elements at the same index are diffed recursively. Elements
    only in b are added at their index, elements only in a are
    marked as removed.
    """
    p = descriptor.new_patch()
    n = min(len(a), len(b))
    for i in range(n):
        key = Path(i)
        cd = diff(a[i], b[i], descriptor.item, path=path.join(key), config=config)
        if not cd.is_empty():
            p.merge(key, cd)
    for i in range(n, len(b)):
        p.add(Path(i), descriptor.item.encode(b[i]))
    for i in range(n, len(a)):
        p.add(Path(i), REMOVED)
    return p


def diff_mappings(a, b, descriptor, path=ROOT, config=None):
    """Diff two dicts key by key.

    Keys only in a are marked as removed, values of keys in both are
    diffed recursively, and keys only in b are added.
    """
    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_mappings need to be dicts, got %r and %r' % (a, b))
    akeys = set(a.keys())
    bkeys = set(b.keys())

    p = descriptor.new_patch()

    # Sorting keys in loops to get a deterministic diff result
    for key in sorted(akeys - bkeys, key=_key_order):
        p.add(Path(key), REMOVED)

    for key in sorted(akeys & bkeys, key=_key_order):
        subpath = Path(key)
        cd = diff(a[key], b[key], descriptor.value, path=path.join(subpath), config=config)
        if not cd.is_empty():
            p.merge(subpath, cd)

    for key in sorted(bkeys - akeys, key=_key_order):
        p.add(Path(key), descriptor.value.encode(b[key]))

    return p


def diff_optionals(a, b, descriptor, path=ROOT, config=None):
    "Diff optional values, replacing the whole value when either is None."
    if a is None or b is None:
        return diff_leaves(a, b, descriptor)
    p = descriptor.new_patch()
    p.merge(ROOT, diff(a, b, descriptor.inner, path=path, config=config))
    return p


def diff_untyped(a, b, path=ROOT, config=None):
    """Diff JSON-like values without type information.

    Walks into dicts, lists and records of the same type on both
    sides, anything else is compared as a whole.
    """
    if isinstance(a, dict) and isinstance(b, dict):
        return diff_mappings(a, b, ANY_MAPPING, path=path, config=config)
    if type(a) is type(b) and isinstance(a, (list, tuple)):
        shape = ANY_TUPLE if isinstance(a, tuple) else ANY_LIST
        return diff_sequences(a, b, shape, path=path, config=config)
    if is_record(a) and type(a) is type(b):
        return diff_records(a, b, describe(type(a)), path=path, config=config)
    return diff_leaves(a, b, ANY)
