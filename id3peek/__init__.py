# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import id3peek.frames
import id3peek.tags
import id3peek.id3

from id3peek.errors import *
from id3peek.frames import Frame, TextFrame
from id3peek.tags import read_tag, decode_tag, Tag, TagHeader, FrameHeader, \
    skip_extended_header
from id3peek.conversion import Syncsafe, Unsync

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
