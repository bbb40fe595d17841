# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for decoded ID3v2 frames."""

import abc

from id3decode.errors import *
from id3decode.specs import *

class Frame(metaclass=abc.ABCMeta):
    """A decoded frame.  Frames are immutable once constructed.

    Subclasses list their fields in _framespec; _from_data reads them in
    order from the frame's payload.
    """
    frameid = None
    _framespec = tuple()

    def __init__(self, frameid=None, **kwargs):
        names = set(spec.name for spec in self._framespec)
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError("Unknown {0} fields: {1}".format(
                    type(self).__name__, ", ".join(sorted(unknown))))
        values = self.__dict__
        values["frameid"] = frameid if frameid else type(self).frameid
        for spec in self._framespec:
            values[spec.name] = spec.validate(self, kwargs.get(spec.name, spec.default))

    def __setattr__(self, name, value):
        raise AttributeError("{0} frames are immutable".format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError("{0} frames are immutable".format(type(self).__name__))

    @classmethod
    def _from_data(cls, frameid, data, subframe_reader=None):
        """Decode a frame from its payload.

        subframe_reader is called with the remaining payload by fields
        that hold embedded frames.  EOFError, ValueError or FrameError
        from a field means the payload is malformed.
        """
        frame = cls.__new__(cls)
        values = frame.__dict__
        values["frameid"] = frameid if frameid else cls.frameid
        values["_read_subframes"] = subframe_reader
        try:
            for spec in cls._framespec:
                val, data = spec.read(frame, data)
                values[spec.name] = val
        finally:
            del values["_read_subframes"]
        return frame

    def _fields(self):
        return tuple((spec.name, getattr(self, spec.name))
                     for spec in self._framespec)

    def __eq__(self, other):
        return (isinstance(other, Frame)
                and self.frameid == other.frameid
                and self._fields() == other._fields())

    def __hash__(self):
        return hash((self.frameid, self._fields()))

    def __repr__(self):
        stype = type(self).__name__
        args = []
        if stype != self.frameid:
            args.append("frameid={0!r}".format(self.frameid))
        for spec in self._framespec:
            if isinstance(spec, BinaryDataSpec):
                data = getattr(self, spec.name)
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(data),
                        data[:20], "..." if len(data) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, getattr(self, spec.name)))
        return "{0}({1})".format(stype, ", ".join(args))

    def _str_fields(self):
        fields = []
        for spec in self._framespec:
            fields.append(spec.to_str(getattr(self, spec.name, None)))
        return ", ".join(fields)

    def __str__(self):
        return "{0}({1})".format(self.frameid, self._str_fields())

class TextFrame(Frame):
    "Text information frame"
    description = None
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("value"))

    def _str_fields(self):
        return "{0} {1!r}".format(charset(self.encoding), self.value)

class URLFrame(Frame):
    "URL link frame"
    encoding = None
    description = None
    _framespec = (URLStringSpec("url"), )
    def _str_fields(self):
        return repr(self.url)

class BinaryFrame(Frame):
    "Frame of an unrecognized type, kept as raw bytes"
    _framespec = (BinaryDataSpec("data"),)

def is_frame_class(cls):
    return (isinstance(cls, type)
            and issubclass(cls, Frame)
            and 3 <= len(cls.__name__) <= 4
            and cls.__name__ == cls.__name__.upper())
