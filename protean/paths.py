# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import re

from .log import ProteanError


__all__ = ["Path", "ROOT", "ROOT_TOKEN", "star_path"]


# Text rendering of the root path
ROOT_TOKEN = "&self"

SEPARATOR = "."

r_is_index = re.compile(r"^\d+$")


class Path(tuple):
    """Location of a value within a nested structure.

    A path is a tuple of segments. Record fields and string mapping
    keys are `str` segments, sequence indices are `int` segments.
    The empty path is the root, i.e. "the whole value at this level",
    and cannot be confused with a field of any name.

    Paths render as dot-joined text, e.g. ``Path("a", "b", 2)`` renders
    as ``a.b.2``. The root renders as ``&self``. The text form is for
    people: string keys that are empty, contain dots or look like
    indices do not survive parsing it back.
    """
    __slots__ = ()

    def __new__(cls, *segments):
        if len(segments) == 1 and isinstance(segments[0], (list, tuple)):
            segments = tuple(segments[0])
        for s in segments:
            if isinstance(s, bool) or not isinstance(s, (str, int)):
                raise ProteanError(
                    "Path segments must be str or int, got %r" % (s,))
        return super(Path, cls).__new__(cls, segments)

    @classmethod
    def parse(cls, text):
        "Parse the dotted text form of a path. Decimal segments become indices."
        if text in ("", ROOT_TOKEN):
            return ROOT
        segments = []
        for s in text.split(SEPARATOR):
            if not s:
                raise ProteanError("Invalid path %r: empty segment" % text)
            segments.append(int(s) if r_is_index.match(s) else s)
        return cls(*segments)

    @classmethod
    def coerce(cls, value):
        "Turn a Path, dotted string, single index, or segment tuple into a Path."
        if isinstance(value, Path):
            return value
        if value is None:
            return ROOT
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, (list, tuple)):
            return cls(*value)
        raise ProteanError("Cannot interpret %r as a path" % (value,))

    @property
    def is_root(self):
        return len(self) == 0

    @property
    def head(self):
        "The first segment."
        if self.is_root:
            raise ProteanError("The root path has no head segment")
        return self[0]

    @property
    def tail(self):
        "The path below the first segment."
        if self.is_root:
            raise ProteanError("The root path has no tail")
        return Path(*self[1:])

    def join(self, other):
        """Append another path below this one.

        Joining the root onto a path gives the path itself, which is how
        a child's whole-value entry lands exactly on its parent's prefix.
        """
        return Path(*(tuple(self) + tuple(Path.coerce(other))))

    def prefixed(self, prefix):
        "This path placed below prefix."
        return Path.coerce(prefix).join(self)

    def __add__(self, other):
        return self.join(other)

    def __str__(self):
        if self.is_root:
            return ROOT_TOKEN
        return SEPARATOR.join(str(s) for s in self)

    def __repr__(self):
        return "Path(%r)" % str(self)


ROOT = tuple.__new__(Path, ())


def star_path(path):
    """Render a path with all indices replaced by *

    Accepts anything Path.coerce accepts, so '/cells/3' style
    index wildcards can be written as 'cells.*' or 'cells.3'.
    """
    path = Path.coerce(path)
    if path.is_root:
        return ROOT_TOKEN
    return SEPARATOR.join('*' if isinstance(s, int) else s for s in path)
