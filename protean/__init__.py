# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diffing import diff, DiffConfig
from .encoding import REMOVED
from .log import (
    ProteanError, ValidationError, ConversionError, DecodeError,
    UnknownPathError, PatchFormatError,
)
from .patch_format import Patch
from .patching import patch
from .paths import Path, ROOT
from .patchwork import make_patch, Patchwork, Historic
from .schema import describe
from .validators import accept_all, chain


__all__ = [
    "__version__",
    "diff", "DiffConfig",
    "patch", "Patch", "make_patch",
    "Path", "ROOT", "REMOVED",
    "Patchwork", "Historic",
    "describe", "accept_all", "chain",
    "ProteanError", "ValidationError", "ConversionError", "DecodeError",
    "UnknownPathError", "PatchFormatError",
    ]
