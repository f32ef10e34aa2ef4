# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import os
import sys

from .args import (
    add_generic_args, add_filename_args, add_type_args, ConfigBackedParser,
)
from .log import ProteanError, error
from .patch_format import Patch
from .patching import patch
from .utils import (
    EXPLICIT_MISSING_FILE, read_document, write_document, resolve_descriptor,
    setup_std_streams,
)


_description = "Apply a patch from protean diff to a JSON document."


def main_patch(args):
    base_filename = args.base
    patch_filename = args.patch
    output_filename = args.output

    for fn in (base_filename, patch_filename):
        if not os.path.exists(fn) and fn != EXPLICIT_MISSING_FILE:
            print("Missing file {}".format(fn))
            return 1

    try:
        descriptor = resolve_descriptor(args.record_type)
        before = descriptor.from_json(read_document(base_filename, on_null='empty'))
        p = Patch.from_dict(read_document(patch_filename), descriptor.validator)
        after = descriptor.to_json(patch(before, p, descriptor))
    except ProteanError as e:
        error("Patch failed: %s", e)
        return 1

    if output_filename:
        write_document(after, output_filename)
    else:
        print(json.dumps(after, indent=1, sort_keys=True))

    return 0


def _build_arg_parser(prog='protean-patch'):
    """Creates an argument parser for the patch command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_type_args(parser)
    add_filename_args(parser, ["base", "patch"])
    parser.add_argument(
        '-o', '--output',
        default=None,
        help="if supplied, the patched document is written "
             "to this file. Otherwise it is printed to the "
             "terminal.")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_patch(arguments)


if __name__ == "__main__":
    sys.exit(main())
