# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Error(Exception): pass

class Warning(Error, UserWarning): pass

class FrameWarning(Warning): pass
class ErrorFrameWarning(FrameWarning): pass
class UnknownFrameWarning(FrameWarning): pass
class UnsupportedEncodingWarning(FrameWarning): pass

class TagWarning(Warning): pass

class TagError(Error, ValueError): pass
class NoTagError(TagError): pass
class TruncatedHeaderError(TagError): pass
class TruncatedTagError(TagError): pass
class UnsupportedVersionError(TagError): pass

class FrameError(Error): pass
class TruncatedFrameError(FrameError): pass
class UnsupportedEncodingError(FrameError): pass
