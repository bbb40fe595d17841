# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Frames that decode into something more specific than text, a URL or
raw binary data.

ID3v2.2 frames are subclasses of the v2.3/v2.4 frame they correspond to,
and decode into entries carrying the four-character frame id.
"""

import id3decode.frames as Frames
from id3decode.specs import *
from id3decode.tags import frameclass


class TXXX(Frames.TextFrame):
    "User defined text information frame"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  EncodedStringSpec("value"))

    def _str_fields(self):
        return "{0} {1!r}: {2!r}".format(charset(self.encoding),
                                         self.description, self.value)

class WXXX(Frames.URLFrame):
    "User defined URL link frame"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  URLStringSpec("url"))

    def _str_fields(self):
        return "{0!r}: {1!r}".format(self.description, self.url)

class PRIV(Frames.Frame):
    "Private frame"
    _framespec = (NullTerminatedStringSpec("owner"),
                  BinaryDataSpec("data"))

class GEOB(Frames.Frame):
    "General encapsulated object"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime_type"),
                  EncodedStringSpec("filename"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

class APIC(Frames.Frame):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  PictureMimeTypeSpec("mime_type"),
                  ByteSpec("picture_type", 0),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

    def _str_fields(self):
        if self.picture_type < len(picture_types):
            ptype = picture_types[self.picture_type]
        else:
            ptype = "Unknown"
        return "{0}({1}), desc={2!r}, mime={3!r}: {4} bytes".format(
            self.picture_type, ptype, self.description,
            self.mime_type, len(self.data))

class COMM(Frames.Frame):
    "Comments"
    _framespec = (EncodingSpec("encoding"),
                  LanguageSpec("lang"),
                  EncodedStringSpec("description"),
                  EncodedStringSpec("text"))

class CHAP(Frames.Frame):
    "Chapter"
    _framespec = (NullTerminatedStringSpec("chapter_id"),
                  IntegerSpec("start_time", 4, 0),
                  IntegerSpec("end_time", 4, 0),
                  OffsetSpec("start_offset"),
                  OffsetSpec("end_offset"),
                  SubframeSpec("subframes"))

class CTOC(Frames.Frame):
    "Table of contents"
    _framespec = (NullTerminatedStringSpec("element_id"),
                  ByteSpec("flags", 0),
                  CountedSequenceSpec("children",
                                      NullTerminatedStringSpec("child")),
                  SubframeSpec("subframes"))

    @property
    def is_root(self):
        return bool(self.flags & 0x02)

    @property
    def is_ordered(self):
        return bool(self.flags & 0x01)


# ID3v2.2

class TXX(TXXX): pass
class WXX(WXXX): pass
class GEO(GEOB): pass
class COM(COMM): pass

class PIC(APIC):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  PictureFormatSpec("mime_type"),
                  ByteSpec("picture_type", 0),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))


def _register_frames():
    "Register every frame class defined above under its own name."
    for obj in list(globals().values()):
        if Frames.is_frame_class(obj):
            frameclass(obj)

_register_frames()


# Attached picture (APIC & PIC) types
picture_types = (
    "Other", "32x32 icon", "Other icon", "Front Cover", "Back Cover",
    "Leaflet", "Media", "Lead artist", "Artist", "Conductor",
    "Band/Orchestra", "Composer", "Lyricist/text writer",
    "Recording Location", "Recording", "Performance", "Screen capture",
    "A bright coloured fish", "Illustration", "Band/artist",
    "Publisher/Studio")


__all__ = [ obj.__name__ for obj in globals().values()
            if Frames.is_frame_class(obj)]
