# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc

from abc import abstractmethod
from warnings import warn

from id3peek.errors import *

# Each spec consumes one field from the front of a frame body and
# returns (value, rest).  Every read is bounded by the body it is given.

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    @abstractmethod
    def read(self, frame, data): pass

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]

class SimpleStringSpec(Spec):
    def __init__(self, name, length):
        super().__init__(name)
        self.length = length
    def read(self, frame, data):
        if len(data) < self.length:
            raise EOFError()
        return data[:self.length].decode('iso-8859-1'), data[self.length:]

class LanguageSpec(SimpleStringSpec):
    def __init__(self, name):
        super().__init__(name, 3)

class NullTerminatedStringSpec(Spec):
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        if not sep:
            raise FrameError("Unterminated {0} field".format(self.name))
        return rawstr.decode('iso-8859-1'), data

class BinaryDataSpec(Spec):
    def read(self, frame, data):
        return bytes(data), bytes()
    def to_str(self, value):
        if value is None:
            return "{0}=None".format(self.name)
        return '{0}=<{1} bytes>'.format(self.name, len(value))

class EncodingSpec(ByteSpec):
    """EncodingSpec must be the first spec.

    Frames with a true _strict_encoding attribute refuse to decode
    anything but ISO-8859-1 and UTF-8 text.
    """
    def read(self, frame, data):
        enc, data = super().read(frame, data)
        if (getattr(frame, "_strict_encoding", False)
            and enc not in EncodedStringSpec.supported_encodings):
            raise UnsupportedEncodingError(
                "Decoding of {0} text is not supported".format(
                    self.to_str(enc)))
        if enc & 0xFC:
            raise FrameError("Invalid encoding 0x{0:02X}".format(enc))
        return enc, data
    def to_str(self, value):
        if value is None:
            return "<undef>"
        if value & 0xFC:
            return "0x{0:02X}".format(value)
        return EncodedStringSpec._encodings[value][0]

class EncodedStringSpec(Spec):
    _encodings = (('iso-8859-1', b"\x00"),
                  ('utf-16', b"\x00\x00"),
                  ('utf-16-be', b"\x00\x00"),
                  ('utf-8', b"\x00"))
    supported_encodings = (0, 3)

    def _split(self, frame, data):
        enc, term = self._encodings[frame.encoding]
        if len(term) == 1:
            rawstr, sep, data = data.partition(term)
            if not sep:
                raise FrameError("Unterminated {0} field".format(self.name))
            return rawstr, data
        for i in range(0, len(data) - 1, 2):
            if data[i:i+2] == term:
                return data[:i], data[i+2:]
        raise FrameError("Unterminated {0} field".format(self.name))

    def _decode(self, frame, rawstr):
        if frame.encoding not in self.supported_encodings:
            warn("{0}: {1} field left undecoded ({2} is not supported)".format(
                    frame.frameid, self.name,
                    self._encodings[frame.encoding][0]),
                 UnsupportedEncodingWarning)
            return None
        return rawstr.decode(self._encodings[frame.encoding][0])

    def read(self, frame, data):
        rawstr, data = self._split(frame, data)
        return self._decode(frame, rawstr), data

class EncodedFullTextSpec(EncodedStringSpec):
    "Eats the rest of the frame; a terminator is optional."
    def _split(self, frame, data):
        enc, term = self._encodings[frame.encoding]
        if len(term) == 1:
            index = data.find(term)
            if index >= 0:
                data = data[:index]
        return data, bytes()
