# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..paths import star_path


class DiffConfig:
    """Set of differs/atomic paths to pass around

    Both are keyed by starred paths (see protean.paths.star_path), so
    'items.*.tags' matches the tags of every element of items.
    A differ is called as differ(a, b, descriptor, path=..., config=...)
    and must return a Patch.
    """

    def __init__(self, *, differs=None, atomic_paths=None):
        self.differs = {star_path(k): v for k, v in (differs or {}).items()}
        self._atomic_paths = {star_path(p) for p in (atomic_paths or ())}

    def differ_for(self, path):
        "Return the custom differ registered for path, if any."
        return self.differs.get(star_path(path))

    def is_atomic(self, path):
        "Return True for paths that diff should treat as a single atomic value."
        return star_path(path) in self._atomic_paths

    def __copy__(self):
        c = DiffConfig()
        c.differs = self.differs.copy()
        c._atomic_paths = set(self._atomic_paths)
        return c
