# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Object level diff/patch support for record classes.

Mix `Patchwork` into a dataclass or a traitlets.HasTraits subclass to
give its instances `diff`, `apply` and `new_patch` methods, or
`Historic` to additionally keep a log of applied patches that can be
rolled back.
"""

from contextlib import contextmanager

from traitlets import HasTraits

from .diffing import diff as compute_diff
from .encoding import REMOVED
from .log import ProteanError, UnknownPathError, ValidationError, debug
from .paths import Path
from .patching import patch
from .schema import TypeDescriptor, describe, describe_value


__all__ = ["make_patch", "Patchwork", "Historic"]


def _descriptor_of(target):
    if isinstance(target, TypeDescriptor):
        return target
    if isinstance(target, type):
        return describe(target)
    return describe_value(target)


def make_patch(target, pairs):
    """Build a patch directly from (path, value) pairs.

    target is a type descriptor, a type, or an instance whose type
    describes the patched value. pairs is a dict or a sequence of
    (path, value) pairs, values are given in native form and encoded
    with the descriptor of the field they address. REMOVED may be
    given as a value.

    Raises ValidationError if a path does not exist in the type or
    the validator rejects a pair. The pairs are added in order.
    """
    descriptor = _descriptor_of(target)
    if isinstance(pairs, dict):
        pairs = pairs.items()
    p = descriptor.new_patch()
    for path, value in pairs:
        path = Path.coerce(path)
        if value is REMOVED:
            p.add(path, REMOVED)
            continue
        try:
            field = descriptor.resolve(path)
        except UnknownPathError as e:
            raise ValidationError(
                "Invalid path %s for %s: %s" % (path, descriptor.type_name, e)) from e
        p.add(path, field.encode(value))
    return p


class Patchwork(object):
    """Mixin giving record instances diff and patch methods."""

    def new_patch(self):
        "Create an empty patch for this type."
        return describe(type(self)).new_patch()

    def diff(self, other, config=None):
        "Compute the patch transforming self into other."
        return compute_diff(self, other, describe(type(self)), config=config)

    @classmethod
    def make_patch(cls, *pairs):
        """Build a patch from (path, value) pairs, see protean.make_patch.

        A single dict may be given instead of the pairs.
        """
        if len(pairs) == 1 and isinstance(pairs[0], dict):
            pairs = pairs[0]
        return make_patch(describe(cls), pairs)

    def _snapshot(self):
        # A detached instance carrying only the field values
        descriptor = describe(type(self))
        return descriptor.build({name: getattr(self, name) for name in descriptor.fields})

    def _patched(self, p):
        return patch(self._snapshot(), p, describe(type(self)))

    def _assign(self, other):
        fields = describe(type(self)).fields
        if isinstance(self, HasTraits):
            with self.hold_trait_notifications():
                for name in fields:
                    setattr(self, name, getattr(other, name))
        else:
            for name in fields:
                setattr(self, name, getattr(other, name))

    def apply(self, p):
        """Apply a patch in place.

        The patched value is computed first, so on failure self is
        left unchanged.
        """
        self._assign(self._patched(p))
        return self


class Historic(Patchwork):
    """Patchwork keeping a log of the applied patches.

    Every apply records the applied patch along with the patch undoing
    it, so changes can be reverted one by one with `pop`, or all at
    once when a `transaction` fails.
    """

    @property
    def _patch_log(self):
        return self.__dict__.setdefault('_protean_history', [])

    @property
    def history(self):
        "The patches applied so far, oldest first."
        return [applied for applied, undo in self._patch_log]

    def apply(self, p):
        patched = self._patched(p)
        undo = compute_diff(patched, self, describe(type(self)))
        self._assign(patched)
        self._patch_log.append((p.copy(), undo))
        debug("Recorded patch %d on %s", len(self._patch_log), type(self).__name__)
        return self

    def pop(self):
        """Revert the most recently applied patch.

        Returns the patch that would redo the reverted change.
        """
        log = self._patch_log
        if not log:
            raise ProteanError("No patches to revert on %s" % type(self).__name__)
        applied, undo = log[-1]
        reverted = self._patched(undo)
        redo = compute_diff(reverted, self, describe(type(self)))
        self._assign(reverted)
        log.pop()
        return redo

    @contextmanager
    def transaction(self):
        """Roll back all patches applied inside the block if it raises.

        The exception is re-raised after the rollback.
        """
        mark = len(self._patch_log)
        try:
            yield self
        except Exception:
            debug("Rolling back %d patches on %s",
                  len(self._patch_log) - mark, type(self).__name__)
            while len(self._patch_log) > mark:
                self.pop()
            raise
