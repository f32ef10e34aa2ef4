# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import codecs
import io
import json
import locale
import os
import sys

from traitlets.utils.importstring import import_item

from .log import ProteanError
from .schema import ANY, describe

if os.name == 'nt':
    EXPLICIT_MISSING_FILE = 'nul'
else:
    EXPLICIT_MISSING_FILE = '/dev/null'


def read_document(f, on_null='empty'):
    """Read and return a JSON document from filename

    Parameters:
        f:  The filename to read from or null filename
            ("/dev/null" on *nix, "nul" on Windows).
            Alternatively a file-like object can be passed.
        on_null: What to return when filename null
            "empty": return empty dict
            "none": return None
    """
    if f == EXPLICIT_MISSING_FILE:
        if on_null == 'empty':
            return {}
        elif on_null == 'none':
            return None
        else:
            raise ValueError(
                'Not valid value for `on_null`: %r. Valid values '
                'are "empty" or "none"' % (on_null,))
    if isinstance(f, str):
        with io.open(f, encoding='utf-8') as fo:
            return json.load(fo)
    return json.load(f)


def write_document(obj, f):
    "Write a JSON document to filename or file-like object."
    if isinstance(f, str):
        with io.open(f, 'w', encoding='utf-8') as fo:
            json.dump(obj, fo, indent=1, sort_keys=True)
            fo.write('\n')
    else:
        json.dump(obj, f, indent=1, sort_keys=True)
        f.write('\n')


def import_type(name):
    """Import a class given as 'module:Class' or 'module.Class'.
    """
    dotted = name.replace(':', '.')
    if '.' not in dotted:
        raise ProteanError('Type name %r must include its module' % (name,))
    try:
        cls = import_item(dotted)
    except (ImportError, AttributeError) as e:
        raise ProteanError('Cannot import type %r: %s' % (name, e)) from e
    if not isinstance(cls, type):
        raise ProteanError('%r is not a class' % (name,))
    return cls


def resolve_descriptor(record_type):
    """Get the descriptor for documents of the named type.

    Untyped JSON documents are used when record_type is None.
    """
    if not record_type:
        return ANY
    cls = import_type(record_type)
    try:
        return describe(cls)
    except TypeError as e:
        raise ProteanError('Cannot diff documents of type %r: %s' % (record_type, e)) from e


def _setup_std_stream_encoding():
    """Setup encoding on stdout/err

    Ensures sys.stdout/err have error-escaping encoders,
    rather than raising errors.
    """
    if os.getenv('PYTHONIOENCODING'):
        # setting PYTHONIOENCODING overrides anything we would do here
        return
    _default_encoding = locale.getpreferredencoding() or 'UTF-8'
    for name in ('stdout', 'stderr'):
        stream = getattr(sys, name)
        raw_stream = getattr(sys, '__%s__' % name)
        if stream is not raw_stream:
            # don't wrap captured or redirected output
            continue
        enc = getattr(stream, 'encoding', None) or _default_encoding
        errors = getattr(stream, 'errors', None) or 'strict'
        # if error-handler is strict, switch to replace
        if errors == 'strict' or errors.startswith('surrogate'):
            bin_stream = stream.buffer
            new_stream = codecs.getwriter(enc)(bin_stream, errors='backslashreplace')
            setattr(sys, name, new_stream)


def setup_std_streams():
    """Setup sys.stdout/err

    - Ensures sys.stdout/err have error-escaping encoders,
      rather than raising errors.
    - enables colorama for ANSI escapes on Windows
    """

    _setup_std_stream_encoding()
    # must enable colorama after setting up encoding,
    # or encoding will undo colorama setup
    if sys.platform.startswith('win'):
        import colorama
        colorama.init()
