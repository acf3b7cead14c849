# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import io
import re
import zlib
import collections

from warnings import warn

from id3peek.errors import *
from id3peek.conversion import *

import id3peek.frames as Frames
import id3peek.id3 as id3
import id3peek.fileutil as fileutil

HEADER_LEN = 10

_TAG24_UNSYNCHRONISED = 0x80
_TAG24_EXTENDED_HEADER = 0x40
_TAG24_EXPERIMENTAL = 0x20
_TAG24_FOOTER = 0x10
_TAG24_UNKNOWN_MASK = 0x0F

_FRAME24_FORMAT_GROUP = 0x0040
_FRAME24_FORMAT_COMPRESSED = 0x0008
_FRAME24_FORMAT_ENCRYPTED = 0x0004
_FRAME24_FORMAT_UNSYNCHRONISED = 0x0002
_FRAME24_FORMAT_DATA_LENGTH_INDICATOR = 0x0001
_FRAME24_FORMAT_UNKNOWN_MASK = 0x00B0

_FRAME24_STATUS_DISCARD_ON_TAG_ALTER = 0x4000
_FRAME24_STATUS_DISCARD_ON_FILE_ALTER = 0x2000
_FRAME24_STATUS_READ_ONLY = 0x1000
_FRAME24_STATUS_UNKNOWN_MASK = 0x8F00

_tag_flag_names = (
    (_TAG24_UNSYNCHRONISED, "unsynchronisation"),
    (_TAG24_EXTENDED_HEADER, "extended_header"),
    (_TAG24_EXPERIMENTAL, "experimental"),
    (_TAG24_FOOTER, "footer"),
    )

_frame_flag_names = (
    (_FRAME24_STATUS_DISCARD_ON_TAG_ALTER, "discard_on_tag_alter"),
    (_FRAME24_STATUS_DISCARD_ON_FILE_ALTER, "discard_on_file_alter"),
    (_FRAME24_STATUS_READ_ONLY, "read_only"),
    (_FRAME24_FORMAT_GROUP, "group"),
    (_FRAME24_FORMAT_COMPRESSED, "compressed"),
    (_FRAME24_FORMAT_ENCRYPTED, "encrypted"),
    (_FRAME24_FORMAT_UNSYNCHRONISED, "unsynchronised"),
    (_FRAME24_FORMAT_DATA_LENGTH_INDICATOR, "data_length_indicator"),
    )

def _flag_names(value, names):
    return set(name for (bit, name) in names if value & bit)

def read_tag(filename):
    """Read the ID3v2.4 tag at the start of filename.

    filename may also be an open binary file; the whole file is read
    into memory and handed to decode_tag.
    """
    with fileutil.opened(filename, "rb") as file:
        return decode_tag(file.read())

def decode_tag(data):
    "Decode the ID3v2.4 tag at the start of the byte string data."
    return Tag.decode(data)


class TagHeader:
    """The 10-byte ID3v2 tag header.

    size is the length of everything after the header (extended header,
    frames and padding), excluding any footer.
    """
    def __init__(self, version, revision=0, bflags=0, size=0):
        self.version = version
        self.revision = revision
        self.bflags = bflags
        self.size = size

    @property
    def flags(self):
        return _flag_names(self.bflags, _tag_flag_names)

    @classmethod
    def read(cls, file):
        "Read a tag header from file; advances file by 10 bytes."
        try:
            header = fileutil.xread(file, HEADER_LEN)
        except EOFError:
            raise TruncatedHeaderError("Data is too short to include an "
                                       "ID3v2 header ({0} bytes)".format(HEADER_LEN))
        if header[0:3] != b"ID3":
            raise NoTagError("ID3v2 tag not found")
        return cls(header[3], header[4], header[5], Syncsafe.decode(header[6:10]))

    def __eq__(self, other):
        return (isinstance(other, TagHeader)
                and (self.version, self.revision, self.bflags, self.size)
                    == (other.version, other.revision, other.bflags, other.size))

    def __str__(self):
        return "ID3v2.{0}.{1}(flags={{{2}}} size={3})".format(
            self.version, self.revision,
            " ".join(sorted(self.flags)),
            self.size)

def skip_extended_header(file):
    """Skip the extended header at the current position of file.

    The size field, the flag byte count and the flags byte are read;
    then size further bytes are skipped without interpretation.
    Returns the decoded size.
    """
    try:
        data = fileutil.xread(file, 6)
    except EOFError:
        raise TruncatedTagError("Extended header is truncated")
    size = Syncsafe.decode(data[0:4])
    file.seek(size, io.SEEK_CUR)
    return size


class FrameHeader:
    "A 10-byte ID3v2.4 frame header; size excludes the header itself."
    def __init__(self, frameid, size, bflags=0, offset=None):
        self.frameid = frameid
        self.size = size
        self.bflags = bflags
        self.offset = offset

    @property
    def flags(self):
        return _flag_names(self.bflags, _frame_flag_names)

    @classmethod
    def read(cls, file, end):
        """Read a frame header from file, not reading past offset end.

        Returns None if the frame id starts with a zero byte; that is
        where padding begins and no further frames follow.
        """
        offset = file.tell()
        data = file.read(min(HEADER_LEN, end - offset))
        if not data or data[0] == 0x00:
            return None
        if len(data) < HEADER_LEN:
            raise TruncatedFrameError("Frame header at offset {0} is truncated"
                                      .format(offset))
        return cls(data[0:4].decode("iso-8859-1"),
                   Syncsafe.decode(data[4:8]),
                   Int8.decode(data[8:10]),
                   offset)

    def __str__(self):
        return "{0}(offset={1} size={2} flags={{{3}}})".format(
            self.frameid, self.offset, self.size,
            " ".join(sorted(self.flags)))


def _friendly_text(frameid):
    def getter(self):
        return self.text_frames[frameid].text or ""
    return property(getter, doc="Text of the {0} frame, or an empty string."
                    .format(frameid))

def _friendly_number(frameid, index):
    def getter(self):
        parts = (self.text_frames[frameid].text or "").split("/")
        try:
            return int(parts[index].strip())
        except (IndexError, ValueError):
            return 0
    return property(getter)


class Tag:
    """The result of parsing one ID3v2.4 tag.

    text_frames maps every known text frame id to its frame, in report
    order; frames that were not in the tag have text None.  lyrics is
    the last USLT frame (or None), and pictures maps picture type slots
    to the last APIC frame of that type.
    """
    version = 4

    def __init__(self, header=None):
        self.header = header
        self.text_frames = collections.OrderedDict(
            (frameid, cls()) for (frameid, cls) in id3.text_frames.items())
        self.lyrics = None
        self.pictures = dict()
        self.frame_headers = []

    @property
    def flags(self):
        return self.header.flags if self.header else set()

    @property
    def size(self):
        return self.header.size if self.header else 0

    def frames(self):
        "Yield decoded frames: text frames, then pictures, then lyrics."
        for frame in self.text_frames.values():
            if frame.text is not None:
                yield frame
        for slot in sorted(self.pictures):
            yield self.pictures[slot]
        if self.lyrics is not None:
            yield self.lyrics

    def __len__(self):
        return sum(1 for frame in self.frames())

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            len(self))

    title = _friendly_text("TIT2")
    artist = _friendly_text("TPE1")
    album_artist = _friendly_text("TPE2")
    album = _friendly_text("TALB")
    composer = _friendly_text("TCOM")
    genre = _friendly_text("TCON")
    date = _friendly_text("TDRC")
    track = _friendly_number("TRCK", 0)
    track_total = _friendly_number("TRCK", 1)
    disc = _friendly_number("TPOS", 0)
    disc_total = _friendly_number("TPOS", 1)

    # Reading tags
    @classmethod
    def decode(cls, data):
        """Parse the tag at the start of data.

        Header level problems raise TagError subclasses.  Problems
        confined to a single frame are reported as warnings and the frame
        is skipped; a frame that overruns the tag ends the frame loop with
        a warning, keeping the frames decoded so far.
        """
        file = io.BytesIO(data)
        tag = cls()
        tag._read_header(file, len(data))
        for (header, body) in tag._read_frames(file):
            tag._decode_frame(header, body)
        return tag

    def _read_header(self, file, length):
        self.header = TagHeader.read(file)
        if self.header.version != self.version:
            raise UnsupportedVersionError(
                "Cannot process ID3v2.{0} tag; only ID3v2.{1} is supported"
                .format(self.header.version, self.version))
        if self.header.bflags & _TAG24_UNKNOWN_MASK:
            warn("Unknown ID3v2.4 flags: 0x{0:02X}".format(self.header.bflags),
                 TagWarning)
        if "extended_header" in self.header.flags:
            skip_extended_header(file)
        if length < file.tell() + self.header.size:
            raise TruncatedTagError(
                "Data is too short ({0} bytes) to include the {1}-byte tag "
                "declared in the ID3v2 header".format(length, self.header.size))
        self._frames_end = HEADER_LEN + self.header.size

    def _read_frames(self, file):
        while file.tell() < self._frames_end:
            try:
                header = FrameHeader.read(file, self._frames_end)
            except TruncatedFrameError as e:
                warn("{0}; ignoring the rest of the tag".format(e),
                     ErrorFrameWarning)
                break
            if header is None:
                break
            self.frame_headers.append(header)
            if file.tell() + header.size > self._frames_end:
                warn("Frame {0} at offset {1} claims {2} bytes, past the end "
                     "of the tag; ignoring the rest of the tag".format(
                        header.frameid, header.offset, header.size),
                     ErrorFrameWarning)
                break
            yield (header, fileutil.xread(file, header.size))

    @staticmethod
    def _is_frame_id(frameid):
        # Allow a single space at end of four-character ids
        # Some programs (e.g. iTunes 8.2) generate such frames when converting
        # from 2.2 to 2.3/2.4 tags.
        return re.match("^[A-Z][A-Z0-9]{2}[A-Z0-9 ]$", frameid) is not None

    def _decode_frame(self, header, data):
        if not self._is_frame_id(header.frameid):
            warn("Invalid frame id {0!r} at offset {1}".format(
                    header.frameid, header.offset), UnknownFrameWarning)
            return
        cls = id3.known_frames.get(header.frameid)
        if cls is None:
            # Not a frame we decode; its body has been consumed already.
            return
        try:
            data = self._interpret_frame_flags(header, data)
            frame = cls._from_data(header.frameid, data,
                                   header.flags, header.bflags)
        except UnsupportedEncodingError as e:
            warn("{0}: {1}".format(header.frameid, e), UnsupportedEncodingWarning)
            return
        except (FrameError, ValueError, EOFError, zlib.error) as e:
            warn("Skipping {0} frame at offset {1}: {2}".format(
                    header.frameid, header.offset, str(e) or "frame is too short"),
                 ErrorFrameWarning)
            return
        self._store_frame(frame)

    def _interpret_frame_flags(self, header, data):
        bflags = header.bflags
        if bflags & _FRAME24_FORMAT_UNKNOWN_MASK:
            warn("Unknown format flags on {0} frame: 0x{1:04X}"
                 .format(header.frameid, bflags), FrameWarning)
        if bflags & _FRAME24_STATUS_UNKNOWN_MASK:
            warn("Unexpected status flags on {0} frame: 0x{1:04X}"
                 .format(header.frameid, bflags), FrameWarning)
        if bflags & _FRAME24_FORMAT_GROUP:
            if len(data) < 1:
                raise EOFError()
            data = data[1:]
        if bflags & _FRAME24_FORMAT_ENCRYPTED:
            raise FrameError("Can't read ID3v2.4 encrypted frames")
        if bflags & _FRAME24_FORMAT_DATA_LENGTH_INDICATOR:
            # Only needed for decompression, which finds the length itself.
            if len(data) < 4:
                raise EOFError()
            data = data[4:]
        if bflags & _FRAME24_FORMAT_COMPRESSED:
            data = zlib.decompress(data)
        return data

    def _store_frame(self, frame):
        if isinstance(frame, Frames.TextFrame):
            self.text_frames[frame.frameid] = frame
        elif isinstance(frame, id3.USLT):
            self.lyrics = frame
        elif isinstance(frame, id3.APIC):
            self.pictures[frame.slot] = frame
