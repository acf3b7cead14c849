# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""id3peek command line: dump the ID3v2.4 tag of audio files.

For each file, a text report (FILE.tag.txt) and one file per attached
picture (FILE.<picture type>.<ext>) are written.
"""

import argparse
import sys

import id3peek
import id3peek.fileutil as fileutil
import id3peek.report as report
from id3peek.tags import HEADER_LEN
from id3peek.util import verb, describe_header, describe_frame_header, \
    hexdump, print_warnings

def make_parser():
    parser = argparse.ArgumentParser(
        prog="id3peek",
        description="Extract text, lyrics and pictures from ID3v2.4 tags.")
    parser.add_argument("files", metavar="FILE", nargs="+",
                        help="audio file with an ID3v2.4 tag at its start")
    parser.add_argument("-o", "--output-dir", dest="output_dir", default=None,
                        help="write report and pictures into DIR "
                        "instead of next to each file")
    parser.add_argument("-n", "--dry-run", dest="act", action="store_false",
                        help="parse and print only, do not write any files")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="describe tag and frame headers "
                        "(twice to add hex dumps)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="do not print warnings")
    parser.add_argument("--version", action="version",
                        version="%(prog)s " + id3peek.versionstr)
    return parser

def process_file(filename, options):
    "Parse filename and write its report; return the parsed tag."
    with fileutil.opened(filename, "rb") as file:
        data = file.read()
    verb(options.verbose, "{0}: {1} bytes".format(filename, len(data)))
    tag = id3peek.decode_tag(data)

    verb(options.verbose, describe_header(tag.header))
    verb(options.verbose > 1, hexdump(data[:HEADER_LEN]))
    for header in tag.frame_headers:
        verb(options.verbose, describe_frame_header(header))
        verb(options.verbose > 1,
             hexdump(data[header.offset:header.offset + HEADER_LEN]))

    if options.act:
        for path in report.write_report(filename, tag, options.output_dir):
            verb(options.verbose, "{0}: wrote {1}".format(filename, path))
    else:
        print(report.format_report(tag, filename), end="")
    return tag

def main(argv=None):
    options = make_parser().parse_args(argv)
    status = 0
    for filename in options.files:
        with print_warnings(filename, options):
            try:
                process_file(filename, options)
            except id3peek.Error as e:
                print("{0}: error: {1}".format(filename, e), file=sys.stderr)
                status = 1
            except EnvironmentError as e:
                print("{0}: error: {1}".format(filename, e.strerror or e),
                      file=sys.stderr)
                status = 1
    return status

if __name__ == "__main__":
    sys.exit(main())
