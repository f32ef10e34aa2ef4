# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Storage representation of values inside a patch.

A patch stores every value as an opaque text payload. The codec decides
how a JSON-like python value (None, bool, int, float, str, list, dict)
turns into that payload and back. The diff and merge algorithms never
look inside a payload.
"""

import json

from .log import ConversionError, DecodeError


__all__ = ["Codec", "JsonCodec", "default_codec", "REMOVED"]


class _Removed(object):
    """Payload sentinel meaning "remove the value at this path".

    Plain text payloads cannot express deletion, so removals of
    sequence elements, mapping entries and optional values are
    stored as this singleton instead of an encoded value.
    """
    __slots__ = ()

    def __repr__(self):
        return "REMOVED"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "REMOVED"


REMOVED = _Removed()


class Codec(object):
    "Interface for payload codecs."

    name = None

    def encode(self, obj):
        "Encode a JSON-like object to a text payload."
        raise NotImplementedError

    def decode(self, payload):
        "Decode a text payload to a JSON-like object."
        raise NotImplementedError


class JsonCodec(Codec):
    """Stores values as compact JSON text with sorted keys.

    Sorted keys keep payloads of equal dicts identical, which
    makes patches reproducible across runs.
    """

    name = "json"

    def encode(self, obj):
        try:
            return json.dumps(obj, sort_keys=True, separators=(",", ":"),
                              allow_nan=True)
        except (TypeError, ValueError) as e:
            raise ConversionError("Cannot encode %r as JSON: %s" % (obj, e))

    def decode(self, payload):
        if not isinstance(payload, str):
            raise DecodeError("Expected a text payload, got %r" % (payload,))
        try:
            return json.loads(payload)
        except ValueError as e:
            raise DecodeError("Invalid JSON payload %r: %s" % (payload, e))


default_codec = JsonCodec()
