# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""List of ID3v2.4 frames understood by id3peek.

Text frames are listed in report order; that order is kept by the
text_frames registry at the bottom of this module.
"""

import collections
import types

import id3peek.frames as Frames
from id3peek.conversion import Unsync
from id3peek.specs import *


# 4.2.1. Identification frames
class TIT1(Frames.TextFrame): label = "Content group"
class TIT2(Frames.TextFrame): label = "Title"
class TIT3(Frames.TextFrame): label = "Subtitle"
class TALB(Frames.TextFrame): label = "Album"
class TOAL(Frames.TextFrame): label = "Original album"
class TRCK(Frames.TextFrame): label = "Track number"
# #/#
class TPOS(Frames.TextFrame): label = "Part of a set"
# #/#
class TSST(Frames.TextFrame): label = "Set subtitle"
class TSRC(Frames.TextFrame): label = "ISRC"

# 4.2.2. Involved persons frames
class TPE1(Frames.TextFrame): label = "Lead artist"
class TPE2(Frames.TextFrame): label = "Band"
class TPE3(Frames.TextFrame): label = "Conductor"
class TPE4(Frames.TextFrame): label = "Interpreted"
class TOPE(Frames.TextFrame): label = "Orig. artist"
class TEXT(Frames.TextFrame): label = "Lyricist"
class TOLY(Frames.TextFrame): label = "Original lyricist"
class TCOM(Frames.TextFrame): label = "Composer"
class TMCL(Frames.TextFrame): label = "Musician credits"
class TIPL(Frames.TextFrame): label = "Involved people"
class TENC(Frames.TextFrame): label = "Encoded by"

# 4.2.3. Derived and subjective properties frames
class TBPM(Frames.TextFrame): label = "BPM"
class TLEN(Frames.TextFrame): label = "Length"
# milliseconds in string format
class TKEY(Frames.TextFrame): label = "Initial key"
class TLAN(Frames.TextFrame): label = "Language"
class TCON(Frames.TextFrame): label = "Content type"
class TFLT(Frames.TextFrame): label = "File type"
class TMED(Frames.TextFrame): label = "Media type"
class TMOO(Frames.TextFrame): label = "Mood"

# 4.2.4. Rights and license frames
class TCOP(Frames.TextFrame): label = "Copyright message"
class TPRO(Frames.TextFrame): label = "Produced notice"
class TPUB(Frames.TextFrame): label = "Publisher"
class TOWN(Frames.TextFrame): label = "File owner"
class TRSN(Frames.TextFrame): label = "Internet radio station name"
class TRSO(Frames.TextFrame): label = "Internet radio station owner"

# 4.2.5. Other text frames
class TOFN(Frames.TextFrame): label = "Orig. filename"
class TDLY(Frames.TextFrame): label = "Playlist delay"
class TDEN(Frames.TextFrame): label = "Encoding time"
class TDOR(Frames.TextFrame): label = "Orig. release time"
class TDRC(Frames.TextFrame): label = "Recording time"
class TDRL(Frames.TextFrame): label = "Release time"
class TDTG(Frames.TextFrame): label = "Tagging time"
class TSSE(Frames.TextFrame): label = "SW/HW and settings used for encoding"
class TSOA(Frames.TextFrame): label = "Album sort"
class TSOP(Frames.TextFrame): label = "Performer sort"
class TSOT(Frames.TextFrame): label = "Title sort"


# 4.8. Unsynchronised lyrics/text transcription
class USLT(Frames.Frame):
    "Unsynchronised lyric/text transcription"
    _framespec = (EncodingSpec("encoding"), LanguageSpec("lang"),
                  EncodedStringSpec("desc"), EncodedFullTextSpec("text"))
    _strict_encoding = True


# 4.14. Attached picture
class APIC(Frames.Frame):
    """Attached picture.

    The description is left None when it uses an encoding we cannot
    decode; the picture itself is kept.  Image data is stored with
    unsynchronisation already removed.
    """
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  ByteSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))

    @classmethod
    def _from_data(cls, frameid, data, flags=None, bflags=0):
        frame = super()._from_data(frameid, data, flags, bflags)
        if "unsynchronised" in frame.flags:
            frame.data = Unsync.decode(frame.data)
        return frame

    @property
    def slot(self):
        "The picture_types slot this picture is stored in."
        if self.type is not None and self.type < len(picture_types):
            return self.type
        return FALLBACK_PICTURE_TYPE

    @property
    def label(self):
        return picture_label(self.slot)

    @property
    def length(self):
        return len(self.data) if self.data is not None else 0

    def _str_fields(self):
        return "0x{0:02X}({1}), desc={2!r}, mime={3!r}: {4} bytes".format(
            self.type, self.label, self.desc, self.mime, self.length)


# Attached picture types, indexed by type byte
picture_types = (
    "other", "file icon", "other file icon", "cover front", "cover back",
    "leaflet page", "media", "soloist", "artist", "conductor", "band",
    "composer", "lyricist", "recording location", "during recording",
    "during performance", "movie screen capture", "bright coloured fish",
    "illustration", "band logotype", "publisher")

# Slot for type bytes outside picture_types
FALLBACK_PICTURE_TYPE = 0xFF
FALLBACK_PICTURE_LABEL = "unknown"

def picture_label(slot):
    if 0 <= slot < len(picture_types):
        return picture_types[slot]
    return FALLBACK_PICTURE_LABEL


def _register_frames():
    """Collect frame classes by frame id.

    Returns (text_frames, known_frames); text_frames keeps the order in
    which the text frames are defined above.
    """
    text_frames = collections.OrderedDict()
    known_frames = dict()
    for obj in list(globals().values()):
        if Frames.is_frame_class(obj):
            assert obj.__name__ not in known_frames
            known_frames[obj.__name__] = obj
            if issubclass(obj, Frames.TextFrame):
                assert obj.label
                text_frames[obj.__name__] = obj
    return text_frames, known_frames

text_frames, known_frames = (types.MappingProxyType(d) for d in _register_frames())


__all__ = [obj.__name__ for obj in known_frames.values()] + [
    "picture_types", "picture_label", "text_frames", "known_frames",
    "FALLBACK_PICTURE_TYPE", "FALLBACK_PICTURE_LABEL"]
