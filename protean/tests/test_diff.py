# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy
from typing import Dict, List, Optional

import pytest

from protean import diff, patch, describe, DiffConfig, Path, ROOT, REMOVED, ConversionError

from .records import Node, Pair, Point, Settings, Shape
from .utils import check_diff_and_patch, check_symmetric_diff_and_patch


def test_diff_equal_leaves_is_empty():
    assert diff(5, 5).is_empty()
    assert diff("x", "x").is_empty()
    assert diff(None, None).is_empty()
    assert diff(5, 5, describe(int)).is_empty()


def test_diff_changed_leaf():
    d = diff(5, 7)
    assert list(d.items()) == [(ROOT, "7")]
    assert patch(5, d) == 7

    d = diff(5, 7, describe(int))
    assert d.patch_type == "int"
    assert list(d.items()) == [(ROOT, "7")]


def test_diff_untyped_type_change():
    # 1 == 1.0 == True, but they are different values
    assert list(diff(1, 1.0).items()) == [(ROOT, "1.0")]
    assert list(diff(1, True).items()) == [(ROOT, "true")]
    assert list(diff({"a": 1}, [1]).items()) == [(ROOT, "[1]")]


def test_diff_record_single_field():
    d = diff(Pair(1, "x"), Pair(1, "y"))
    assert d.patch_type == "Pair"
    assert list(d.items()) == [(Path("b"), '"y"')]
    assert d["b"] == '"y"'
    assert patch(Pair(1, "x"), d) == Pair(1, "y")


def test_diff_record_reflexive():
    s = Shape("sq", Point(0, 0), [Point(1, 1)], {"a": "b"}, note="n")
    assert diff(s, copy.deepcopy(s)).is_empty()
    assert diff(s, s).is_empty()


def test_diff_record_fields_in_declaration_order():
    a = Shape("a", Point(0, 0))
    b = Shape("b", Point(0, 1), weight=2.0)
    d = diff(a, b)
    assert list(d) == [Path("name"), Path("origin", "y"), Path("weight")]
    assert d["weight"] == "2.0"


def test_diff_nested_records():
    a = Shape("s", Point(0, 0), [Point(1, 1), Point(2, 2)])
    b = Shape("s", Point(0, 0), [Point(1, 5), Point(2, 2), Point(3, 3)])
    d = check_diff_and_patch(a, b)
    assert list(d.items()) == [
        (Path("vertices", 0, "y"), "5"),
        (Path("vertices", 2), '{"x":3,"y":3}'),
    ]


def test_diff_sequence_removals():
    d = diff([1, 2, 3], [1, 5])
    assert list(d.items()) == [(Path(1), "5"), (Path(2), REMOVED)]
    assert d.patch_type == "List[Any]"
    check_symmetric_diff_and_patch([1, 2, 3], [1, 5])
    check_symmetric_diff_and_patch([], [1, 2])
    check_symmetric_diff_and_patch([[1], [2, 3]], [[1, 4]])


def test_diff_tuples():
    check_symmetric_diff_and_patch((1, 2), (1, 3, 4))
    d = diff((1, 2), [1, 2])
    assert list(d.items()) == [(ROOT, "[1,2]")]


def test_diff_mappings():
    a = {"a": 1, "b": 2, "d": {"x": 1}}
    b = {"b": 3, "c": 4, "d": {"x": 2}}
    d = diff(a, b)
    assert list(d.items()) == [
        (Path("a"), REMOVED),
        (Path("b"), "3"),
        (Path("d", "x"), "2"),
        (Path("c"), "4"),
    ]
    check_symmetric_diff_and_patch(a, b)


def test_diff_mappings_are_deterministic():
    a = {k: i for i, k in enumerate("zyxwv")}
    b = {k: i for i, k in enumerate("abcde")}
    assert list(diff(a, b)) == list(diff(dict(reversed(list(a.items()))), b))
    assert [str(p) for p in diff(a, b)][:5] == ["v", "w", "x", "y", "z"]


def test_diff_typed_mapping():
    t = describe(Dict[int, List[str]])
    a = {1: ["a"], 2: ["b"]}
    b = {1: ["a", "c"], 3: []}
    d = diff(a, b, t)
    assert d.patch_type == "Dict[int, List[str]]"
    assert list(d.items()) == [
        (Path(2), REMOVED),
        (Path(1, 1), '"c"'),
        (Path(3), "[]"),
    ]
    assert patch(a, d, t) == b


def test_diff_optionals():
    t = describe(Optional[Point])
    assert diff(None, None, t).is_empty()
    assert list(diff(None, Point(1, 2), t).items()) == [(ROOT, '{"x":1,"y":2}')]
    assert list(diff(Point(1, 2), None, t).items()) == [(ROOT, "null")]
    assert list(diff(Point(1, 2), Point(1, 3), t).items()) == [(Path("y"), "3")]
    for a, b in [(None, Point(1, 2)), (Point(1, 2), None), (Point(1, 2), Point(5, 2))]:
        assert patch(a, diff(a, b, t), t) == b


def test_diff_optional_field():
    a = Shape("s", Point(0, 0), note="hello")
    b = Shape("s", Point(0, 0))
    d = check_diff_and_patch(a, b)
    assert list(d.items()) == [(Path("note"), "null")]
    check_diff_and_patch(b, a)


def test_diff_any_field():
    a = Shape("s", Point(0, 0), extra={"k": [1, 2]})
    b = Shape("s", Point(0, 0), extra={"k": [1, 3]})
    d = check_diff_and_patch(a, b)
    assert list(d.items()) == [(Path("extra", "k", 1), "3")]


def test_diff_recursive_records():
    a = Node(1, [Node(2), Node(3, [Node(4)])])
    b = Node(1, [Node(2), Node(3, [Node(5)])])
    d = check_diff_and_patch(a, b)
    assert list(d) == [Path("children", 1, "children", 0, "value")]


def test_diff_traits():
    a = Settings(name="a", paths=["x"])
    b = Settings(name="b", paths=["x", "y"], origin=Point(1, 1))
    d = diff(a, b)
    assert d.patch_type == "Settings"
    assert list(d.items()) == [
        (Path("name"), '"b"'),
        (Path("origin"), '{"x":1,"y":1}'),
        (Path("paths", 1), '"y"'),
    ]
    c = patch(a, d)
    assert (c.name, c.paths, c.origin) == ("b", ["x", "y"], Point(1, 1))
    assert a.name == "a"


def test_diff_records_of_different_types():
    # An untyped slot cannot tell the decoder which record to build
    with pytest.raises(ConversionError):
        diff([Point(1, 2)], [Pair(1, "x")])
    with pytest.raises(ConversionError):
        diff([Point(1, 2)], [Point(1, 2), Point(3, 4)])
    t = describe(List[Pair])
    d = check_diff_and_patch([Pair(0, "y")], [Pair(1, "x")], t)
    assert list(d.items()) == [(Path(0, "a"), "1"), (Path(0, "b"), '"x"')]


def test_diff_any_field_holding_record():
    a = Shape("s", Point(0, 0), extra=Point(1, 2))
    b = Shape("s", Point(0, 0), extra=Point(1, 5))
    d = check_diff_and_patch(a, b)
    assert list(d.items()) == [(Path("extra", "y"), "5")]
    assert isinstance(patch(a, d).extra, Point)
    with pytest.raises(ConversionError):
        diff(Shape("s", Point(0, 0)), b)


def test_diff_untyped_tuples_and_int_keys():
    check_symmetric_diff_and_patch({1: {"k": "a"}}, {1: {"k": "b"}, 2: "c"})
    check_diff_and_patch({1: {2: "a"}}, {1: {2: "b"}})
    check_diff_and_patch([(1, 2)], [(1, 3)])
    with pytest.raises(ConversionError):
        diff({}, {1: {2: "a"}})
    with pytest.raises(ConversionError):
        diff([1], [1, (2, 3)])
    with pytest.raises(ConversionError):
        diff(Shape("s", Point(0, 0), extra={"k": 1}), Shape("s", Point(0, 0), extra={"k": {2: 3}}))


def test_diff_floats_are_exact():
    d = diff(0.1 + 0.2, 0.3)
    assert not d.is_empty()


def test_atomic_paths():
    a = Shape("s", Point(0, 0), [Point(1, 1)])
    b = Shape("s", Point(0, 1), [Point(1, 2)])
    config = DiffConfig(atomic_paths=["origin", "vertices.*"])
    d = diff(a, b, config=config)
    assert list(d.items()) == [
        (Path("origin"), '{"x":0,"y":1}'),
        (Path("vertices", 0), '{"x":1,"y":2}'),
    ]
    assert patch(a, d) == b


def test_atomic_paths_untyped():
    a = {"rows": [{"cells": [1, 2]}, {"cells": [3]}]}
    b = {"rows": [{"cells": [1, 5]}, {"cells": [3]}]}
    config = DiffConfig(atomic_paths=["rows.*.cells"])
    d = diff(a, b, config=config)
    assert list(d.items()) == [(Path("rows", 0, "cells"), "[1,5]")]


def test_custom_differ():
    def count_only(a, b, descriptor, path=None, config=None):
        p = descriptor.new_patch()
        if len(a) != len(b):
            p.add(ROOT, descriptor.encode(b))
        return p

    config = DiffConfig(differs={"vertices": count_only})
    a = Shape("s", Point(0, 0), [Point(1, 1)])
    b = Shape("s", Point(0, 0), [Point(9, 9)])
    assert diff(a, b, config=config).is_empty()
    c = Shape("s", Point(0, 0), [Point(9, 9), Point(1, 1)])
    assert list(diff(a, c, config=config)) == [Path("vertices")]


def test_diff_config_copy():
    config = DiffConfig(atomic_paths=["a.0"])
    c = copy.copy(config)
    assert c.is_atomic(Path("a", 3))
    assert not c.is_atomic(Path("a"))


def test_diff_mappings_requires_dicts():
    with pytest.raises(TypeError):
        diff([1], {"a": 1}, describe(Dict[str, int]))


def test_diff_untyped_dict_single_field():
    d = diff({"a": 1, "b": "x"}, {"a": 1, "b": "y"})
    assert list(d.items()) == [(Path("b"), '"y"')]
    assert patch({"a": 1, "b": "x"}, d) == {"a": 1, "b": "y"}
