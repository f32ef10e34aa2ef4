# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .encoding import REMOVED
from .log import DecodeError, UnknownPathError, debug
from .schema import (
    ANY, ANY_LIST, ANY_MAPPING, ANY_TUPLE, AnyType, MappingType, OptionalType,
    RecordType, SequenceType, describe, describe_value, is_record,
)


__all__ = ["patch"]


def group_entries(entries):
    """Group (path, payload) entries by the first path segment.

    Returns (head, [(tail, payload), ...]) pairs in order of first
    appearance. Root entries must be handled before grouping.
    """
    groups = {}
    for path, payload in entries:
        groups.setdefault(path.head, []).append((path.tail, payload))
    return list(groups.items())


def split_removal(entries):
    "Separate a root removal marker from the other entries."
    removes = False
    rest = []
    for path, payload in entries:
        if path.is_root and payload is REMOVED:
            removes = True
        else:
            rest.append((path, payload))
    return removes, rest


def has_value(entries):
    return any(path.is_root and payload is not REMOVED for path, payload in entries)


def patch_value(obj, entries, descriptor):
    """Apply entries relative to obj, returning the new value.

    A whole-value entry is applied first, the remaining entries then
    refine the replaced value. obj may be modified.
    """
    rest = []
    for path, payload in entries:
        if path.is_root:
            if payload is REMOVED:
                raise DecodeError("Cannot remove the whole %s value" % descriptor.type_name)
            obj = descriptor.decode(payload)
        else:
            rest.append((path, payload))
    if not rest:
        return obj

    if isinstance(descriptor, OptionalType):
        if obj is None:
            raise UnknownPathError(
                "Cannot patch %s below a None value" % rest[0][0])
        return patch_value(obj, rest, descriptor.inner)
    elif isinstance(descriptor, RecordType):
        return patch_record(obj, rest, descriptor)
    elif isinstance(descriptor, SequenceType):
        return patch_sequence(obj, rest, descriptor)
    elif isinstance(descriptor, MappingType):
        return patch_mapping(obj, rest, descriptor)
    elif isinstance(descriptor, AnyType):
        return patch_untyped(obj, rest)
    raise UnknownPathError(
        "%s value has no part %s" % (descriptor.type_name, rest[0][0]))


def patch_record(obj, entries, descriptor):
    changes = {}
    for name, sub in group_entries(entries):
        field = descriptor.child(name)
        removes, sub = split_removal(sub)
        if removes:
            if not isinstance(field, OptionalType):
                raise DecodeError(
                    "Field %r of %s cannot be removed" % (name, descriptor.type_name))
            value = None
        else:
            value = getattr(obj, name)
        changes[name] = patch_value(value, sub, field)
    return descriptor.replace(obj, changes)


def patch_sequence(obj, entries, descriptor):
    n = len(obj)
    newobj = list(obj)
    removed = set()
    added = {}
    for index, sub in group_entries(entries):
        i = descriptor.index_of(index)
        removes, sub = split_removal(sub)
        if i < n:
            if removes:
                if sub:
                    raise UnknownPathError("Cannot both remove and patch index %d" % i)
                removed.add(i)
            else:
                newobj[i] = patch_value(newobj[i], sub, descriptor.item)
        else:
            if removes or not has_value(sub):
                raise UnknownPathError(
                    "Index %d is out of range for a sequence of length %d" % (i, n))
            added[i] = patch_value(None, sub, descriptor.item)

    # New items must extend the sequence without gaps
    for k, i in enumerate(sorted(added)):
        if i != n + k:
            raise UnknownPathError(
                "Index %d is out of range for a sequence of length %d" % (i, n + k))
        newobj.append(added[i])

    # Removal indices refer to the original positions
    newobj = [v for i, v in enumerate(newobj) if i not in removed]
    return descriptor.container(newobj)


def patch_mapping(obj, entries, descriptor):
    newobj = dict(obj)
    for segment, sub in group_entries(entries):
        key = descriptor.key_of(segment)
        if descriptor.key is ANY and key not in newobj and str(key) in newobj:
            # Index-like text segments address string keys of untyped dicts
            key = str(key)
        removes, sub = split_removal(sub)
        if key in newobj:
            if removes:
                if sub:
                    raise UnknownPathError("Cannot both remove and patch key %r" % (key,))
                del newobj[key]
            else:
                newobj[key] = patch_value(newobj[key], sub, descriptor.value)
        else:
            if removes or not has_value(sub):
                raise UnknownPathError("Key %r not found" % (key,))
            newobj[key] = patch_value(None, sub, descriptor.value)
    return newobj


def patch_untyped(obj, entries):
    if isinstance(obj, dict):
        return patch_mapping(obj, entries, ANY_MAPPING)
    if isinstance(obj, (list, tuple)):
        return patch_sequence(obj, entries, ANY_TUPLE if isinstance(obj, tuple) else ANY_LIST)
    if is_record(obj):
        return patch_record(obj, entries, describe(type(obj)))
    raise UnknownPathError(
        "%s value has no part %s" % (type(obj).__name__, entries[0][0]))


def patch(obj, diff, descriptor=None):
    """Produce a patched version of obj with given patch.

    The descriptor gives the shape of obj, it is inferred from obj if
    not given. obj itself is never modified, so a failing patch leaves
    nothing half applied.

    Raises UnknownPathError if a path does not exist in obj, and
    DecodeError if a stored value does not decode to the type found
    at its path.
    """
    if descriptor is None:
        descriptor = describe_value(obj)
    debug("Applying patch:\n%s", diff)
    newobj = copy.deepcopy(obj)
    if diff.is_empty():
        return newobj
    return patch_value(newobj, list(diff.items()), descriptor)
