# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Validators guard the entries admitted into a patch.

A validator is any callable taking ``(path, payload)``. It accepts the
pair by returning normally, and rejects it by raising ValidationError
or returning False. Validators are shared between a patch and its
copies, so they must not keep state between calls.
"""

from .encoding import REMOVED
from .log import ProteanError, ValidationError, debug
from .paths import Path


__all__ = ["accept_all", "chain", "check", "TypeValidator"]


def accept_all(path, payload):
    "Validator admitting every pair."
    return None


def check(validator, path, payload):
    "Run validator on a pair, raising ValidationError if it is rejected."
    try:
        result = validator(path, payload)
    except ValidationError:
        raise
    except ProteanError as e:
        raise ValidationError("Invalid entry at %s: %s" % (path, e)) from e
    if result is False:
        raise ValidationError("Validator rejected entry at %s" % (path,))


def chain(*validators):
    "Combine validators, all of which must accept a pair."
    def validator(path, payload):
        for v in validators:
            check(v, path, payload)
    return validator


class TypeValidator(object):
    """Validator derived from a type descriptor.

    Checks that the path resolves through the shape of the type and
    that the payload decodes to the type found at that path. Removal
    markers are only admitted where the parent can drop the value.
    """

    def __init__(self, descriptor):
        self.descriptor = descriptor

    def __call__(self, path, payload):
        path = Path.coerce(path)
        debug("Validating %s entry %s=%r", self.descriptor.type_name, path, payload)
        if payload is REMOVED:
            if path.is_root:
                raise ValidationError("Cannot remove the whole value")
            parent = self.descriptor.resolve(Path(*path[:-1]))
            if not parent.can_remove(path[-1]):
                raise ValidationError(
                    "Value at %s of %s cannot be removed" % (path, parent.type_name))
            return
        target = self.descriptor.resolve(path)
        target.decode(payload)

    def __repr__(self):
        return "<TypeValidator for %s>" % self.descriptor.type_name
