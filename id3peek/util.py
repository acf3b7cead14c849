# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import warnings
import sys
from contextlib import contextmanager

import id3peek.tags as tags

def verb(verbose, *args, **kwargs):
    if verbose:
        print(*args, **kwargs)

def describe_header(header):
    "Return a multi-line description of a TagHeader."
    lines = ["ID3 header:",
             "\tVersion: ID3v2.{0}.{1}".format(header.version, header.revision),
             "\tFlags: {0}".format(header.bflags)]
    if header.bflags:
        for (bit, name) in tags._tag_flag_names:
            lines.append("\t\t{0}: {1}".format(name, int(bool(header.bflags & bit))))
    lines.append("\tSize: {0}".format(header.size))
    return "\n".join(lines)

def describe_frame_header(header):
    "Return a multi-line description of a FrameHeader."
    lines = ["Frame ID: {0}".format(header.frameid),
             "\tOffset: {0}".format(header.offset),
             "\tSize: {0}".format(header.size),
             "\tFlags: {0}".format(header.bflags)]
    if header.bflags:
        for (bit, name) in tags._frame_flag_names:
            lines.append("\t\t{0}: {1}".format(name, int(bool(header.bflags & bit))))
    return "\n".join(lines)

def hexdump(data, width=16):
    "Return data as lines of space-separated hex bytes."
    return "\n".join(" ".join("{0:02x}".format(b) for b in data[i:i+width])
                     for i in range(0, len(data), width))

@contextmanager
def print_warnings(filename, options):
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always")
        try:
            yield None
        finally:
            if not options.quiet and len(ws) > 0:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()
