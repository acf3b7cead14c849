# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for ID3v2 frames."""

import abc

from id3peek.errors import *
from id3peek.specs import *

class Frame(metaclass=abc.ABCMeta):
    _framespec = tuple()
    _strict_encoding = False

    def __init__(self, frameid=None, flags=None, bflags=0, **kwargs):
        self.frameid = frameid if frameid else type(self).__name__
        self.flags = flags if flags else set()
        self.bflags = bflags
        assert len(self._framespec) > 0
        for spec in self._framespec:
            setattr(self, spec.name, kwargs.get(spec.name, None))

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and self.frameid == other.frameid
                and self.flags == other.flags
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._framespec))

    @classmethod
    def _from_data(cls, frameid, data, flags=None, bflags=0):
        frame = cls(frameid=frameid, flags=flags, bflags=bflags)
        for spec in frame._framespec:
            val, data = spec.read(frame, data)
            setattr(frame, spec.name, val)
        return frame

    def __repr__(self):
        stype = type(self).__name__
        args = []
        if stype != self.frameid:
            args.append("frameid={0!r}".format(self.frameid))
        if self.flags:
            args.append("flags={0!r}".format(self.flags))
        for spec in self._framespec:
            value = getattr(self, spec.name)
            if isinstance(spec, BinaryDataSpec) and value is not None:
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(value),
                        value[:20], "..." if len(value) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, value))
        return "{0}({1})".format(stype, ", ".join(args))

    def _str_fields(self):
        return ", ".join(spec.to_str(getattr(self, spec.name, None))
                         for spec in self._framespec)

    def __str__(self):
        return "{0}({1})".format(self.frameid, self._str_fields())


class TextFrame(Frame):
    """A text information frame.

    Concrete subclasses live in id3peek.id3 and carry the human-readable
    label used in reports.  A freshly created frame has text None; it only
    gets a value once a matching frame is decoded.
    """
    _framespec = (EncodingSpec("encoding"), EncodedFullTextSpec("text"))
    _strict_encoding = True

    label = None

    def _str_fields(self):
        return "{0} {1!r}".format(EncodingSpec("encoding").to_str(self.encoding),
                                  self.text)

def is_frame_class(cls):
    return (isinstance(cls, type)
            and issubclass(cls, Frame)
            and len(cls.__name__) == 4
            and cls.__name__ == cls.__name__.upper())
