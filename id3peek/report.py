# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Text reports and picture files for parsed tags."""

import os.path
import re

import id3peek.fileutil as fileutil

REPORT_SUFFIX = ".tag.txt"

_LABEL_WIDTH = 19

# MIME subtypes whose usual file extension differs from the subtype
_extensions = {
    "jpeg": "jpg",
    "pjpeg": "jpg",
    "svg+xml": "svg",
    "x-icon": "ico",
    }

def picture_extension(mime):
    "Guess a file extension from a picture's MIME type."
    subtype = (mime or "").partition("/")[2].partition(";")[0].strip().lower()
    subtype = _extensions.get(subtype, subtype)
    subtype = re.sub(r"[^a-z0-9+.-]", "", subtype)
    return subtype or "bin"

def picture_filename(filename, picture):
    "Return the name of the file picture is saved in, next to filename."
    return "{0}.{1}.{2}".format(filename, picture.label,
                                picture_extension(picture.mime))

def report_filename(filename):
    return filename + REPORT_SUFFIX

def _heading(label):
    "Pad label to the report column; overlong labels get one extra space."
    heading = label + ":"
    if len(heading) > _LABEL_WIDTH:
        return heading + " "
    return heading.ljust(_LABEL_WIDTH)

def format_report(tag, filename):
    """Return the text report of tag, which was read from filename.

    Pictures are referred to by the names picture_filename gives them.
    """
    lines = ["Textual information parsed from file {0}:".format(filename)]
    for frame in tag.text_frames.values():
        if frame.text is not None:
            lines.append("\t{0} {1}".format(_heading(frame.label), frame.text))
    for slot in sorted(tag.pictures):
        picture = tag.pictures[slot]
        lines.append("Picture:")
        lines.append("\t{0}".format(picture.mime))
        if picture.desc is not None:
            lines.append("\tdescription: {0}".format(picture.desc))
        lines.append("\tpicture is stored in file {0}"
                     .format(picture_filename(filename, picture)))
    if tag.lyrics is not None and tag.lyrics.text is not None:
        lines.append("Lyrics:")
        lines.append("\tLanguage: {0}".format(tag.lyrics.lang))
        lines.append(tag.lyrics.text)
    return "\n".join(lines) + "\n"

def write_report(filename, tag, output_dir=None):
    """Write the report and picture files for tag, read from filename.

    Files are created next to filename, or in output_dir if given.
    Returns the list of paths written, report first.
    """
    if output_dir is not None:
        filename = os.path.join(output_dir, os.path.basename(filename))
    written = [fileutil.write_file(report_filename(filename),
                                   format_report(tag, filename).encode("utf-8"))]
    for slot in sorted(tag.pictures):
        picture = tag.pictures[slot]
        written.append(fileutil.write_file(picture_filename(filename, picture),
                                           picture.data))
    return written
