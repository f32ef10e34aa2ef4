# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .encoding import REMOVED
from .log import PatchFormatError, ValidationError
from .paths import Path, ROOT
from .validators import accept_all, check


__all__ = ["Patch", "REMOVED", "is_valid_patch_dict", "validate_patch_dict"]


class Patch(object):
    """A set of changes to a value of a given type.

    Entries map a Path to an encoded payload (or to REMOVED). Every
    entry is checked by the validator before it is stored, so a patch
    only ever holds pairs its validator accepted. The validator is
    shared with copies of the patch.

    Entries keep insertion order. Re-adding a path overwrites its value
    in place.
    """

    def __init__(self, patch_type="", validator=None, entries=()):
        self.patch_type = patch_type
        self.validator = validator if validator is not None else accept_all
        self._entries = {}
        if isinstance(entries, (dict, Patch)):
            entries = entries.items()
        for path, payload in entries:
            self.add(path, payload)

    def add(self, path, payload):
        """Add or overwrite the entry at path.

        Returns the patch itself to allow chaining. If the validator
        rejects the pair a ValidationError is raised and the patch
        is left as it was.
        """
        path = Path.coerce(path)
        if payload is not REMOVED and not isinstance(payload, str):
            raise ValidationError(
                "Patch values must be encoded text or REMOVED, got %r at %s" % (payload, path))
        check(self.validator, path, payload)
        self._entries[path] = payload
        return self

    def merge(self, prefix, other):
        """Fold the entries of other into this patch below prefix.

        A whole-value entry of other lands exactly on prefix, any other
        entry on prefix joined with its path. Entries are added in the
        iteration order of other, and the first rejected entry aborts
        the merge without modifying this patch.
        """
        prefix = Path.coerce(prefix)
        staged = self.copy()
        for path, payload in other.items():
            staged.add(path.prefixed(prefix), payload)
        self._entries = staged._entries
        return self

    def is_empty(self):
        "True if the patch describes no change at all."
        return not self._entries

    def items(self):
        return self._entries.items()

    def paths(self):
        return self._entries.keys()

    def get(self, path, default=None):
        return self._entries.get(Path.coerce(path), default)

    def copy(self):
        "Copy the entries, sharing the validator."
        c = Patch(self.patch_type, self.validator)
        c._entries = dict(self._entries)
        return c

    __copy__ = copy

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, path):
        return Path.coerce(path) in self._entries

    def __getitem__(self, path):
        return self._entries[Path.coerce(path)]

    def __eq__(self, other):
        if not isinstance(other, Patch):
            return NotImplemented
        return (self.patch_type == other.patch_type and
                self._entries == other._entries)

    __hash__ = None

    def __repr__(self):
        entries = ", ".join("%r: %r" % (str(k), v) for k, v in self._entries.items())
        return "Patch<%s>: {%s}" % (self.patch_type, entries)

    def __str__(self):
        from .prettyprint import format_patch
        return format_patch(self)

    def to_dict(self):
        """Convert to a json-serializable dict.

        Paths are stored as lists of segments so that indices and
        string keys survive a round trip.
        """
        entries = []
        for path, payload in self._entries.items():
            if payload is REMOVED:
                entries.append({"path": list(path), "remove": True})
            else:
                entries.append({"path": list(path), "value": payload})
        return {"patch_type": self.patch_type, "entries": entries}

    @classmethod
    def from_dict(cls, d, validator=None):
        """Build a patch from the dict produced by to_dict.

        Paths may also be given in dotted text form.
        """
        validate_patch_dict(d)
        p = cls(d.get("patch_type", ""), validator)
        for e in d["entries"]:
            payload = REMOVED if e.get("remove") else e["value"]
            p.add(_entry_path(e["path"]), payload)
        return p


def _entry_path(path):
    if isinstance(path, str):
        return Path.parse(path)
    return Path(*path) if path else ROOT


def is_valid_patch_dict(d):
    """Checks whether a serialized patch is well formed.

    Returns a boolean indicating the well-formedness of the patch.
    """
    try:
        validate_patch_dict(d)
    except PatchFormatError:
        return False
    return True


def validate_patch_dict(d):
    """Check whether a serialized patch is well formed.

    Raises a PatchFormatError if not well formed.
    """
    if not isinstance(d, dict):
        raise PatchFormatError("Patch must be a dict, not '{}'.".format(type(d).__name__))
    if not isinstance(d.get("patch_type", ""), str):
        raise PatchFormatError("Patch type must be a string.")
    entries = d.get("entries")
    if not isinstance(entries, list):
        raise PatchFormatError("Patch entries must be a list.")
    for e in entries:
        validate_patch_entry(e)


def validate_patch_entry(e):
    if not isinstance(e, dict):
        raise PatchFormatError("Patch entry '{}' is not a dict.".format(e))
    if "path" not in e:
        raise PatchFormatError("Patch entry '{}' has no path.".format(e))
    path = e["path"]
    if isinstance(path, list):
        for s in path:
            if isinstance(s, bool) or not isinstance(s, (str, int)):
                raise PatchFormatError(
                    "Invalid path segment '{}' of type '{}'.".format(s, type(s).__name__))
    elif not isinstance(path, str):
        raise PatchFormatError("Patch entry path must be a list or a string.")

    has_value = "value" in e
    removes = e.get("remove", False)
    if has_value == bool(removes):
        raise PatchFormatError(
            "Patch entry at '{}' needs exactly one of 'value' and 'remove'.".format(path))
    if has_value and not isinstance(e["value"], str):
        raise PatchFormatError(
            "Patch entry value at '{}' must be an encoded string.".format(path))
    if removes is not False and removes is not True:
        raise PatchFormatError("Patch entry 'remove' flag must be a boolean.")
