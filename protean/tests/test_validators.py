# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import pytest

from protean import Path, Patch, ROOT, REMOVED, ValidationError, describe, patch
from protean.schema import ANY
from protean.validators import accept_all, chain, check, TypeValidator

from .records import Pair, Shape


def test_accept_all():
    check(accept_all, Path("anything"), "1")
    check(accept_all, ROOT, REMOVED)


def test_false_result_rejects():
    with pytest.raises(ValidationError):
        check(lambda path, payload: False, ROOT, "1")


def test_chain_needs_all_validators():
    def no_b(path, payload):
        if path and path.head == "b":
            raise ValidationError("b is read only")

    v = chain(accept_all, no_b)
    check(v, Path("a"), "1")
    with pytest.raises(ValidationError):
        check(v, Path("b"), "1")


def test_chain_with_type_validator_on_patch():
    def no_b(path, payload):
        if path and path.head == "b":
            raise ValidationError("b is read only")

    p = Patch("Pair", chain(describe(Pair).validator, no_b))
    p.add("a", "2")
    with pytest.raises(ValidationError):
        p.add("a", '"two"')
    with pytest.raises(ValidationError):
        p.add("b", '"x"')
    assert list(p.items()) == [(Path("a"), "2")]
    assert patch(Pair(1, "x"), p) == Pair(2, "x")


def test_type_validator_checks_payload_type():
    v = TypeValidator(describe(Pair))
    check(v, Path("a"), "3")
    check(v, Path("b"), '"text"')
    check(v, ROOT, '{"a":1,"b":"x"}')
    with pytest.raises(ValidationError):
        check(v, Path("a"), '"three"')
    with pytest.raises(ValidationError):
        check(v, Path("a"), "true")
    with pytest.raises(ValidationError):
        check(v, Path("a"), "not json")


def test_type_validator_checks_paths():
    v = TypeValidator(describe(Shape))
    check(v, Path("origin", "x"), "1")
    check(v, Path("vertices", 0, "y"), "2")
    check(v, Path("labels", "anything"), '"x"')
    with pytest.raises(ValidationError):
        check(v, Path("missing"), "1")
    with pytest.raises(ValidationError):
        check(v, Path("vertices", "first"), "1")
    with pytest.raises(ValidationError):
        check(v, Path("name", "sub"), '"x"')


def test_type_validator_removals():
    v = TypeValidator(describe(Shape))
    check(v, Path("note"), REMOVED)
    check(v, Path("vertices", 2), REMOVED)
    check(v, Path("labels", "k"), REMOVED)
    with pytest.raises(ValidationError):
        check(v, Path("name"), REMOVED)
    with pytest.raises(ValidationError):
        check(v, ROOT, REMOVED)


def test_untyped_validator():
    v = TypeValidator(ANY)
    check(v, Path("a", 0, "b"), '{"x":[1,2]}')
    check(v, Path("a"), REMOVED)
    with pytest.raises(ValidationError):
        check(v, Path("a"), "{")
    with pytest.raises(ValidationError):
        check(v, ROOT, REMOVED)
