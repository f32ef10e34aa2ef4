# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from collections import namedtuple
import datetime
import io
import os
import pprint
import sys

import colorama

from .encoding import REMOVED, default_codec
from .log import DecodeError


# Indentation offset in pretty-print
IND = "  "

# Max line width used some placed in pretty-print
MAXWIDTH = 78


PATCH_ENTRY_END = '\n'

ColoredConstants = namedtuple('ColoredConstants', (
    'KEEP',
    'REMOVE',
    'ADD',
    'INFO',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        KEEP   = '{color}   '.format(color=''),
        REMOVE = '{color}-  '.format(color=colorama.Fore.RED),
        ADD    = '{color}+  '.format(color=colorama.Fore.GREEN),
        INFO   = '{color}## '.format(color=colorama.Fore.BLUE + colorama.Style.BRIGHT),
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        KEEP   = '   ',
        REMOVE = '-  ',
        ADD    = '+  ',
        INFO   = '## ',
        RESET  = '',
    )
}


class PrettyPrintConfig:
    def __init__(
            self,
            out=sys.stdout,
            use_color=True,
            codec=default_codec,
            ):
        self.out = out
        self.use_color = use_color
        self.codec = codec

    @property
    def KEEP(self):
        return col_const[self.use_color].KEEP

    @property
    def REMOVE(self):
        return col_const[self.use_color].REMOVE

    @property
    def ADD(self):
        return col_const[self.use_color].ADD

    @property
    def INFO(self):
        return col_const[self.use_color].INFO

    @property
    def RESET(self):
        return col_const[self.use_color].RESET

DefaultConfig = PrettyPrintConfig()


def file_timestamp(filename):
    "Return modification time for filename as a string."
    if os.path.exists(filename):
        t = os.path.getmtime(filename)
        dt = datetime.datetime.fromtimestamp(t)
        return dt.isoformat(" ")
    else:
        return "(no timestamp)"


def format_value(v):
    "Format simple value for printing. Strings are shown as they are, pprint is used for the rest."
    if isinstance(v, str):
        return v
    return pprint.pformat(v)


def pretty_print_value(value, prefix="", config=DefaultConfig):
    """Print a possibly complex value with all lines prefixed.

    Calls out to generic formatters based on value
    type for dicts, lists, and multiline strings.
    Uses format_value for simple values.
    """
    if isinstance(value, dict) and value:
        pretty_print_dict(value, (), prefix, config)
    elif isinstance(value, list) and value:
        pretty_print_list(value, prefix, config)
    else:
        pretty_print_multiline(format_value(value), prefix, config)


def pretty_print_key(k, prefix, config):
    config.out.write("%s%s:\n" % (prefix, k))


def pretty_print_key_value(k, v, prefix, config):
    config.out.write("%s%s: %s\n" % (prefix, k, v))


def pretty_print_diff_action(msg, path, config):
    config.out.write("%s%s %s:%s\n" % (config.INFO, msg, path, config.RESET))


def pretty_print_item(k, v, prefix="", config=DefaultConfig):
    if isinstance(v, dict):
        pretty_print_key(k, prefix, config)
        pretty_print_dict(v, (), prefix+IND, config)
    elif isinstance(v, list):
        pretty_print_key(k, prefix, config)
        pretty_print_list(v, prefix+IND, config)
    else:
        vstr = format_value(v)
        if "\n" in vstr:
            # Multiline strings
            pretty_print_key(k, prefix, config)
            for line in vstr.splitlines(False):
                config.out.write("%s%s\n" % (prefix+IND, line))
        else:
            # Singleline strings
            pretty_print_key_value(k, vstr, prefix, config)


def pretty_print_multiline(text, prefix="", config=DefaultConfig):
    assert isinstance(text, str), 'expected string argument'

    # Preprend prefix to lines, letting lines keep their own newlines
    lines = text.splitlines(True)
    for line in lines:
        config.out.write(prefix + line)

    # If the final line doesn't have a newline,
    # make sure we still start a new line
    if not text.endswith("\n"):
        config.out.write("\n")


def pretty_print_list(li, prefix="", config=DefaultConfig):
    listr = pprint.pformat(li)
    if len(listr) < MAXWIDTH - len(prefix) and "\\n" not in listr:
        config.out.write("%s%s\n" % (prefix, listr))
    else:
        for k, v in enumerate(li):
            pretty_print_item("item[%d]" % k, v, prefix, config)


def pretty_print_dict(d, exclude_keys=(), prefix="", config=DefaultConfig):
    """Pretty-print a dict without wrapper keys

    Instead of {'key': 'value'}, do

        key: value
        key:
          long
          value

    """
    for k in sorted(set(d) - set(exclude_keys), key=str):
        v = d[k]
        pretty_print_item(k, v, prefix, config)


def pretty_print_patch_entry(path, payload, config=DefaultConfig):
    if payload is REMOVED:
        pretty_print_diff_action("removed", path, config)
    else:
        pretty_print_diff_action("replaced", path, config)
        try:
            value = config.codec.decode(payload)
        except DecodeError:
            # Not ours to interpret, show the stored text
            value = payload
        pretty_print_value(value, config.ADD, config)
    config.out.write(PATCH_ENTRY_END + config.RESET)


def pretty_print_patch(p, config=DefaultConfig):
    """Pretty-print a patch, one block per entry.

    Parameters
    ----------

    p: Patch
        The patch to print
    config: PrettyPrintConfig
        Config object determining how and where the patch gets printed
    """
    config.out.write("%spatch %s%s\n" % (
        config.INFO, p.patch_type or "(untyped)", config.RESET))
    if p.is_empty():
        config.out.write("%sno changes\n" % config.KEEP)
        return
    for path, payload in p.items():
        pretty_print_patch_entry(path, payload, config)


document_diff_header = """\
protean diff {afn} {bfn}
--- {afn}{atime}
+++ {bfn}{btime}
"""

def pretty_print_document_diff(afn, bfn, p, config=DefaultConfig):
    """Pretty-print the patch between two document files

    Parameters
    ----------

    afn: str
        Filename of a, the base document
    bfn: str
        Filename of b, the updated document
    p: Patch
        The patch describing the transformation from a to b
    config: PrettyPrintConfig
        Config object determining what gets printed and where
    """
    if p:
        atime = "  " + file_timestamp(afn)
        btime = "  " + file_timestamp(bfn)
        config.out.write(document_diff_header.format(
            afn=afn, bfn=bfn, atime=atime, btime=btime))
        pretty_print_patch(p, config)


def format_patch(p, use_color=False):
    "Render a patch as text, as used by str(patch)."
    out = io.StringIO()
    pretty_print_patch(p, PrettyPrintConfig(out=out, use_color=use_color))
    return out.getvalue()
