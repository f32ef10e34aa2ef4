# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from protean import patch, diff
from protean.patch_format import is_valid_patch_dict


def check_diff_and_patch(a, b, descriptor=None):
    "Check that patch(a, diff(a,b)) reproduces b."
    d = diff(a, b, descriptor)
    assert is_valid_patch_dict(d.to_dict())
    assert patch(a, d, descriptor) == b
    return d


def check_symmetric_diff_and_patch(a, b, descriptor=None):
    "Check that patch(a, diff(a,b)) reproduces b and vice versa."
    check_diff_and_patch(a, b, descriptor)
    check_diff_and_patch(b, a, descriptor)
