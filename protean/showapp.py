# coding: utf-8

# Copyright (c) IPython Development Team.
# Distributed under the terms of the Modified BSD License.

import os
import sys

from .args import (
    add_generic_args, add_prettyprint_args, ConfigBackedParser,
    prettyprint_config_from_args,
)
from .log import ProteanError, error
from .patch_format import Patch
from .prettyprint import pretty_print_patch
from .utils import read_document, setup_std_streams


_description = """Show protean patch files in terminal.
"""


def main_show(args):

    if len(args.patch) == 1 and args.patch[0] == "-":
        files = [sys.stdin]
    else:
        for fn in args.patch:
            if not os.path.exists(fn):
                print("Missing file {}".format(fn))
                return 1
        files = args.patch
        if not files:
            print("Missing filenames.")
            return 1

    for fn in files:
        try:
            p = Patch.from_dict(read_document(fn))
        except ProteanError as e:
            error("Invalid patch file %s: %s", getattr(fn, 'name', fn), e)
            return 1

        # This printer is to keep the unit tests passing,
        # some tests capture output with capsys which doesn't
        # pick up on sys.stdout.write()
        class Printer:
            def write(self, text):
                print(text, end="")

        config = prettyprint_config_from_args(args, out=Printer())

        if len(args.patch) > 1:
            # 'more' prints filenames with colons, should be good enough for us as well
            print(":"*14)
            print(fn)
            print(":"*14)
        pretty_print_patch(p, config)

    return 0


def _build_arg_parser(prog='protean-show'):
    """Creates an argument parser for the show command."""
    parser = ConfigBackedParser(
        description=_description,
        prog=prog,
        add_help=True,
        )
    add_generic_args(parser)
    add_prettyprint_args(parser)
    parser.add_argument("patch", nargs="*", help="patch filename(s) or - to read from stdin")
    return parser


def main(args=None):
    if args is None:
        args = sys.argv[1:]
    setup_std_streams()
    arguments = _build_arg_parser().parse_args(args)
    return main_show(arguments)


if __name__ == "__main__":
    sys.exit(main())
