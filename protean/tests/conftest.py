# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import logging
import os

from jsonschema import Draft4Validator as Validator
from pytest import fixture, skip


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


@fixture
def slow(request):
    if request.config.getoption("--quick", default=False):
        skip("skipping slow test")


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture
def json_schema_patch(request):
    schema_path = os.path.join(schema_dir, 'patch_format.schema.json')
    with io.open(schema_path, encoding="utf8") as f:
        schema_json = json.load(f)
    return schema_json


@fixture
def patch_validator(request, json_schema_patch):
    return Validator(json_schema_patch)


@fixture
def documents(tmpdir):
    """Fixture writing a pair of JSON documents into a temporary directory"""
    base = {
        "name": "inventory",
        "items": [{"sku": "a1", "count": 3}, {"sku": "b2", "count": 1}],
        "tags": {"color": "red"},
    }
    remote = {
        "name": "inventory",
        "items": [{"sku": "a1", "count": 4}],
        "tags": {"color": "blue", "size": "L"},
    }
    afn = str(tmpdir.join('base.json'))
    bfn = str(tmpdir.join('remote.json'))
    for fn, doc in ((afn, base), (bfn, remote)):
        with io.open(fn, 'w', encoding='utf8') as f:
            json.dump(doc, f)
    return afn, bfn, base, remote
