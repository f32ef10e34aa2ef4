# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Record types shared by the tests."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from traitlets import HasTraits, Unicode, Int, List as TList, Instance, Bool

from protean import Historic, Patchwork


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Pair:
    a: int
    b: str


@dataclass
class Shape:
    name: str
    origin: Point
    vertices: List[Point] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    note: Optional[str] = None
    weight: float = 1.0
    extra: Any = None


@dataclass
class Node:
    value: int
    children: List['Node'] = field(default_factory=list)


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    tags: Tuple[str, ...] = ()


@dataclass
class Account(Historic):
    owner: str
    balance: int = 0
    limit: Optional[int] = None


@dataclass
class Counter(Patchwork):
    count: int = 0
    steps: List[int] = field(default_factory=list)


class Settings(Patchwork, HasTraits):
    name = Unicode("default")
    level = Int(0)
    enabled = Bool(True)
    paths = TList(Unicode())
    origin = Instance(Point, allow_none=True)
