# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Type descriptors: the shape of a diffable type.

A descriptor knows how values of one type convert to and from the
JSON-like objects stored in patches, and how a path walks down into
its parts. Descriptors are built from python annotations by
`describe`, which understands

- the leaf types bool, int, float and str,
- typing.Any (or a missing annotation),
- Optional[T], List[T], Tuple[T, ...], Dict[K, V],
- dataclasses and traitlets.HasTraits subclasses as records.

The diff and patch algorithms in protean.diffing and protean.patching
dispatch on the descriptor kinds defined here.
"""

import collections.abc
import dataclasses
import types
import typing

import traitlets
from traitlets import HasTraits
from traitlets.utils.importstring import import_item

from .encoding import default_codec
from .log import ConversionError, DecodeError, UnknownPathError
from .patch_format import Patch
from .paths import Path
from .validators import TypeValidator


__all__ = [
    "TypeDescriptor", "LeafType", "AnyType", "OptionalType",
    "SequenceType", "MappingType", "RecordType",
    "ANY", "ANY_MAPPING", "ANY_LIST", "ANY_TUPLE", "describe", "describe_value", "is_record",
]


def _is_int(x):
    return isinstance(x, int) and not isinstance(x, bool)


class TypeDescriptor(object):
    "Base class of type descriptors."

    codec = default_codec

    @property
    def type_name(self):
        raise NotImplementedError

    def to_json(self, value):
        "Convert a native value to a JSON-like object."
        raise NotImplementedError

    def from_json(self, obj):
        "Convert a JSON-like object to a native value."
        raise NotImplementedError

    def encode(self, value):
        return self.codec.encode(self.to_json(value))

    def decode(self, payload):
        obj = self.codec.decode(payload)
        try:
            return self.from_json(obj)
        except DecodeError:
            raise
        except ConversionError as e:
            raise DecodeError(str(e)) from e

    def child(self, segment):
        "Descriptor of the part addressed by a single path segment."
        raise UnknownPathError("%s has no part %r" % (self.type_name, segment))

    def resolve(self, path):
        "Descriptor of the part addressed by path."
        path = Path.coerce(path)
        if path.is_root:
            return self
        return self.child(path.head).resolve(path.tail)

    def can_remove(self, segment):
        "Whether the part at segment may be removed by a patch."
        return False

    @property
    def validator(self):
        v = self.__dict__.get("_validator")
        if v is None:
            v = self.__dict__["_validator"] = TypeValidator(self)
        return v

    def new_patch(self):
        "Create an empty patch bound to this type's validator."
        return Patch(self.type_name, self.validator)

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.type_name)


class LeafType(TypeDescriptor):
    """Primitive types, compared and replaced as a whole.

    Strings are leaves too: a changed string is stored whole,
    not as an edit of its characters.
    """

    def __init__(self, py_type):
        if py_type not in (bool, int, float, str):
            raise TypeError("Not a leaf type: %r" % (py_type,))
        self.py_type = py_type

    @property
    def type_name(self):
        return self.py_type.__name__

    def _check(self, value):
        t = self.py_type
        if t is bool:
            return isinstance(value, bool)
        elif t is int:
            return _is_int(value)
        elif t is float:
            return _is_int(value) or isinstance(value, float)
        return isinstance(value, str)

    def to_json(self, value):
        if not self._check(value):
            raise ConversionError(
                "Expected %s, got %r" % (self.type_name, value))
        return value

    def from_json(self, obj):
        if not self._check(obj):
            raise ConversionError(
                "Expected %s, got %r" % (self.type_name, obj))
        if self.py_type is float:
            return float(obj)
        return obj


class AnyType(TypeDescriptor):
    """Untyped JSON-like values.

    Dicts and lists are walked into as mappings and sequences,
    anything else is a leaf. Stored values must be plain JSON (str
    keys, lists rather than tuples, no records), since nothing tells
    the decoder what else they were.
    """

    type_name = "Any"

    def to_json(self, value):
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, dict):
            out = {}
            for k, v in value.items():
                if not isinstance(k, str):
                    raise ConversionError(
                        "Untyped mapping keys must be str, got %r" % (k,))
                out[k] = self.to_json(v)
            return out
        if isinstance(value, list):
            return [self.to_json(v) for v in value]
        raise ConversionError(
            "Cannot store untyped value of type %s, annotate its type instead"
            % type(value).__name__)

    def from_json(self, obj):
        return obj

    def child(self, segment):
        return self

    def can_remove(self, segment):
        return True


ANY = AnyType()


class OptionalType(TypeDescriptor):
    "A value that may be None."

    def __init__(self, inner):
        self.inner = inner

    @property
    def type_name(self):
        return "Optional[%s]" % self.inner.type_name

    def to_json(self, value):
        return None if value is None else self.inner.to_json(value)

    def from_json(self, obj):
        return None if obj is None else self.inner.from_json(obj)

    def child(self, segment):
        return self.inner.child(segment)

    def can_remove(self, segment):
        return self.inner.can_remove(segment)


class SequenceType(TypeDescriptor):
    "Lists (or homogeneous tuples), addressed by index."

    def __init__(self, item, container=list):
        self.item = item
        self.container = container

    @property
    def type_name(self):
        if self.container is tuple:
            return "Tuple[%s, ...]" % self.item.type_name
        return "List[%s]" % self.item.type_name

    def to_json(self, value):
        if not isinstance(value, (list, tuple)):
            raise ConversionError("Expected a sequence, got %r" % (value,))
        return [self.item.to_json(v) for v in value]

    def from_json(self, obj):
        if not isinstance(obj, list):
            raise ConversionError("Expected a list, got %r" % (obj,))
        return self.container(self.item.from_json(v) for v in obj)

    def index_of(self, segment):
        if isinstance(segment, str) and segment.isdigit():
            segment = int(segment)
        if not _is_int(segment) or segment < 0:
            raise UnknownPathError(
                "Invalid index %r into %s" % (segment, self.type_name))
        return segment

    def child(self, segment):
        self.index_of(segment)
        return self.item

    def can_remove(self, segment):
        return True


class MappingType(TypeDescriptor):
    """Dicts, addressed by key.

    Keys must be str or int (or untyped), since they double as path
    segments.
    """

    def __init__(self, key, value):
        if not (key is ANY or (isinstance(key, LeafType) and key.py_type in (str, int))):
            raise TypeError("Mapping keys must be str or int, not %s" % key.type_name)
        self.key = key
        self.value = value

    @property
    def type_name(self):
        return "Dict[%s, %s]" % (self.key.type_name, self.value.type_name)

    def key_of(self, segment):
        "Convert a path segment to a key of this mapping."
        if self.key is ANY:
            return segment
        if self.key.py_type is str:
            return str(segment)
        if isinstance(segment, str):
            try:
                return int(segment)
            except ValueError:
                pass
        if not _is_int(segment):
            raise UnknownPathError(
                "Invalid key %r into %s" % (segment, self.type_name))
        return segment

    def to_json(self, value):
        if not isinstance(value, dict):
            raise ConversionError("Expected a dict, got %r" % (value,))
        out = {}
        int_keys = self.key is not ANY and self.key.py_type is int
        for k, v in value.items():
            if not (_is_int(k) if int_keys else isinstance(k, str)):
                raise ConversionError(
                    "Invalid key %r for %s" % (k, self.type_name))
            out[str(k)] = self.value.to_json(v)
        return out

    def from_json(self, obj):
        if not isinstance(obj, dict):
            raise ConversionError("Expected a dict, got %r" % (obj,))
        try:
            return {self.key_of(k): self.value.from_json(v) for k, v in obj.items()}
        except UnknownPathError as e:
            raise ConversionError(str(e)) from e

    def child(self, segment):
        self.key_of(segment)
        return self.value

    def can_remove(self, segment):
        return True


class RecordType(TypeDescriptor):
    """Records with a fixed set of named, typed fields.

    Supports dataclasses and traitlets.HasTraits subclasses.
    Fields are collected on first use so that records may refer to
    their own class in annotations.
    """

    def __init__(self, cls):
        self.cls = cls
        self._fields = None

    @property
    def type_name(self):
        return self.cls.__name__

    @property
    def fields(self):
        "Field descriptors by name, in declaration order."
        if self._fields is None:
            if dataclasses.is_dataclass(self.cls):
                self._fields = _dataclass_fields(self.cls)
            else:
                self._fields = _trait_fields(self.cls)
        return self._fields

    def to_json(self, value):
        if not isinstance(value, self.cls):
            raise ConversionError(
                "Expected %s, got %r" % (self.type_name, value))
        return {name: d.to_json(getattr(value, name)) for name, d in self.fields.items()}

    def from_json(self, obj):
        if not isinstance(obj, dict):
            raise ConversionError(
                "Expected a dict for %s, got %r" % (self.type_name, obj))
        unknown = set(obj) - set(self.fields)
        if unknown:
            raise ConversionError(
                "Unknown fields for %s: %s" % (self.type_name, ", ".join(sorted(unknown))))
        values = {name: self.fields[name].from_json(v) for name, v in obj.items()}
        return self.build(values)

    def build(self, values):
        "Create a new instance from field values."
        try:
            if dataclasses.is_dataclass(self.cls):
                init = {f.name for f in dataclasses.fields(self.cls) if f.init}
                obj = self.cls(**{k: v for k, v in values.items() if k in init})
                for k, v in values.items():
                    if k not in init:
                        object.__setattr__(obj, k, v)
                return obj
            return self.cls(**values)
        except (TypeError, traitlets.TraitError) as e:
            raise ConversionError("Cannot build %s: %s" % (self.type_name, e)) from e

    def replace(self, value, changes):
        "Return a copy of value with some fields replaced."
        if not changes:
            return value
        try:
            if dataclasses.is_dataclass(self.cls):
                init = {f.name for f in dataclasses.fields(self.cls) if f.init}
                obj = dataclasses.replace(value, **{k: v for k, v in changes.items() if k in init})
                for k, v in changes.items():
                    if k not in init:
                        object.__setattr__(obj, k, v)
                return obj
            for k, v in changes.items():
                setattr(value, k, v)
            return value
        except (TypeError, traitlets.TraitError) as e:
            raise DecodeError("Cannot update %s: %s" % (self.type_name, e)) from e

    def child(self, segment):
        try:
            return self.fields[segment]
        except KeyError:
            raise UnknownPathError(
                "%s has no field %r" % (self.type_name, segment)) from None

    def can_remove(self, segment):
        return isinstance(self.child(segment), OptionalType)


# Shapes used when walking into untyped values
ANY_MAPPING = MappingType(ANY, ANY)
ANY_LIST = SequenceType(ANY)
ANY_TUPLE = SequenceType(ANY, tuple)


def is_record(value):
    "Whether value is an instance of a record class."
    return ((dataclasses.is_dataclass(value) and not isinstance(value, type)) or
            isinstance(value, HasTraits))


def _dataclass_fields(cls):
    hints = typing.get_type_hints(cls)
    fields = {}
    for f in dataclasses.fields(cls):
        fields[f.name] = describe(hints.get(f.name, typing.Any))
    return fields


# Trait classes mapped to leaf types, checked in order
_leaf_traits = [
    (traitlets.Bool, bool),
    (traitlets.Int, int),
    (traitlets.CInt, int),
    (traitlets.Float, float),
    (traitlets.CFloat, float),
    (traitlets.Unicode, str),
]


def describe_trait(trait):
    "Build a descriptor for a traitlets trait."
    d = None
    for trait_cls, py_type in _leaf_traits:
        if isinstance(trait, trait_cls):
            d = LeafType(py_type)
            break
    if d is None:
        if isinstance(trait, traitlets.List):
            inner = getattr(trait, "_trait", None)
            d = SequenceType(describe_trait(inner) if inner is not None else ANY)
        elif isinstance(trait, traitlets.Dict):
            inner = getattr(trait, "_value_trait", None)
            d = MappingType(LeafType(str), describe_trait(inner) if inner is not None else ANY)
        elif isinstance(trait, traitlets.Instance):
            klass = trait.klass
            if isinstance(klass, str):
                klass = import_item(klass)
            d = describe(klass)
        else:
            d = ANY
    if trait.allow_none and d is not ANY:
        d = OptionalType(d)
    return d


def _trait_fields(cls):
    traits = cls.class_traits()
    return {name: describe_trait(traits[name])
            for name in sorted(traits) if not name.startswith('_')}


_union_types = (typing.Union,) + ((types.UnionType,) if hasattr(types, "UnionType") else ())

_sequence_origins = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_mapping_origins = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

_descriptor_cache = {}


def describe(tp):
    """Get the descriptor of a type annotation.

    Raises TypeError for annotations that cannot be diffed.
    """
    try:
        return _descriptor_cache[tp]
    except KeyError:
        pass
    except TypeError:
        # unhashable annotation, don't cache
        return _build_descriptor(tp)

    if isinstance(tp, type) and (dataclasses.is_dataclass(tp) or issubclass(tp, HasTraits)):
        # Register before collecting fields to allow recursive records
        d = _descriptor_cache[tp] = RecordType(tp)
        return d
    d = _descriptor_cache[tp] = _build_descriptor(tp)
    return d


def _build_descriptor(tp):
    if tp is typing.Any or tp is object:
        return ANY
    if tp in (bool, int, float, str):
        return LeafType(tp)
    if tp is list:
        return SequenceType(ANY)
    if tp is tuple:
        return SequenceType(ANY, tuple)
    if tp is dict:
        return MappingType(ANY, ANY)
    if isinstance(tp, type) and (dataclasses.is_dataclass(tp) or issubclass(tp, HasTraits)):
        return RecordType(tp)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin in _union_types:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return OptionalType(describe(members[0]))
        raise TypeError("Only Optional unions can be diffed, not %r" % (tp,))
    if origin in _sequence_origins:
        return SequenceType(describe(args[0]) if args else ANY)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceType(describe(args[0]), tuple)
        raise TypeError("Only homogeneous tuples can be diffed, not %r" % (tp,))
    if origin in _mapping_origins:
        if args:
            return MappingType(describe(args[0]), describe(args[1]))
        return MappingType(ANY, ANY)
    raise TypeError("Cannot diff values of type %r" % (tp,))


def describe_value(value):
    "Get the descriptor to use for a value without annotation."
    if is_record(value):
        return describe(type(value))
    return ANY
