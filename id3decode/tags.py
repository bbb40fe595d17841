# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc
import collections.abc
import re

from abc import abstractmethod
from warnings import warn

from id3decode.errors import *
from id3decode.conversion import *
from id3decode.cursor import ByteCursor

import id3decode.frames as Frames
import id3decode.fileutil as fileutil

_TAG_HEADER_SIZE = 10

_TAG22_UNSYNCHRONISED = 0x80
_TAG22_COMPRESSED = 0x40
_TAG22_UNKNOWN_MASK = 0x3F

_TAG23_UNSYNCHRONISED = 0x80
_TAG23_EXTENDED_HEADER = 0x40
_TAG23_EXPERIMENTAL = 0x20
_TAG23_UNKNOWN_MASK = 0x1F

_FRAME23_FORMAT_COMPRESSED = 0x0080
_FRAME23_FORMAT_ENCRYPTED = 0x0040
_FRAME23_FORMAT_GROUP = 0x0020

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

def decode_tag(data, size=None, predicate=None):
    """Decode the ID3v2 tag at the start of data into a Metadata sequence.

    If data is a bytearray, unsynchronization is removed from it in
    place; other bytes-like objects are copied first.  Only the first
    size bytes are used if size is given.

    predicate, if given, is called as predicate(version, id0, id1, id2, id3)
    with the major version and the frame id bytes (id3 is 0 for ID3v2.2
    frames); frames for which it returns false are skipped.

    Raises NoTagError if data doesn't start with an ID3v2 tag, and
    TagError if the tag can't be decoded.
    """
    if not isinstance(data, bytearray):
        data = bytearray(data)
    cursor = ByteCursor(data, size)
    tag = read_header(cursor)
    return tag.decode(cursor, predicate)

def read_tag(filename, predicate=None):
    "Read and decode the ID3v2 tag at the current position of filename."
    with fileutil.opened(filename, "rb") as file:
        length = detect_tag(file)[2]
        return decode_tag(fileutil.xread(file, length), predicate=predicate)

def detect_tag(filename):
    """Return type and position of ID3v2 tag in filename.
    Returns (tag_class, offset, length), where tag_class
    is either Tag22, Tag23, or Tag24, and (offset, length)
    is the position of the tag in the file.
    The file position is left at offset.
    """
    with fileutil.opened(filename, "rb") as file:
        offset = file.tell()
        header = file.read(_TAG_HEADER_SIZE)
        file.seek(offset)
        if len(header) < _TAG_HEADER_SIZE:
            raise NoTagError("ID3v2 tag not found")
        if header[0:3] != b"ID3":
            raise NoTagError("ID3v2 tag not found")
        if header[3] not in _tag_versions:
            raise TagError("Unknown ID3 version: 2.{0}.{1}"
                           .format(*header[3:5]))
        cls = _tag_versions[header[3]]
        length = Syncsafe.decode(header[6:10]) + _TAG_HEADER_SIZE
        if header[3] == 4 and header[5] & _TAG24_FOOTER:
            length += 10
        return (cls, offset, length)

def read_header(cursor):
    """Read a tag header from cursor, leaving it at the first frame.
    Returns a Tag22, Tag23 or Tag24 instance describing the frame table.
    """
    if cursor.bytes_left() < _TAG_HEADER_SIZE:
        raise NoTagError("ID3v2 tag not found")
    if cursor.read_bytes(3) != b"ID3":
        raise NoTagError("ID3v2 tag not found")
    version = cursor.read_uint8()
    cursor.skip(1) # Minor version
    flags = cursor.read_uint8()
    frames_size = cursor.read_synchsafe_int()
    if version not in _tag_versions:
        raise TagError("Unknown ID3 version: 2.{0}".format(version))
    tag = _tag_versions[version](frames_size)
    try:
        tag._read_header(cursor, flags)
    except EOFError:
        raise TagError("Truncated ID3v2.{0} extended header".format(version))
    if tag.frames_size < 0:
        raise TagError("Negative frame table size")
    return tag

def frameclass(cls):
    """Register cls as a class representing an ID3 frame.

    Sets cls.frameid if not present, and registers the
    new frame in Tag's known_frames dictionary.
    ID3v2.2 classes inherit the frame id of the class they extend.
    """
    assert issubclass(cls, Frames.Frame)
    assert Tag._is_frame_id(cls.__name__.encode("ASCII"))

    if "frameid" not in cls.__dict__:
        base = cls.__bases__[0]
        if len(cls.__name__) == 3 and Frames.is_frame_class(base):
            cls.frameid = base.__name__
        else:
            cls.frameid = cls.__name__

    assert cls.__name__ not in Tag.known_frames
    Tag.known_frames[cls.__name__] = cls
    return cls


class Metadata(collections.abc.Sequence):
    "An immutable sequence of decoded frames, in tag order."
    def __init__(self, frames=()):
        self._frames = tuple(frames)

    def __getitem__(self, index):
        return self._frames[index]

    def __len__(self):
        return len(self._frames)

    def __eq__(self, other):
        return isinstance(other, Metadata) and self._frames == other._frames

    def __hash__(self):
        return hash(self._frames)

    def frames(self, key=None):
        """Return a list of frames matching key.
        key may be a frame id or a frame class; None matches everything.
        """
        if key is None:
            return list(self._frames)
        if isinstance(key, type):
            return [frame for frame in self._frames if isinstance(frame, key)]
        return [frame for frame in self._frames if frame.frameid == key]

    def __repr__(self):
        return "<Metadata: {0} frames>".format(len(self._frames))


class Tag(metaclass=abc.ABCMeta):
    """A tag header, and the dialect of ID3v2 its frames are in.

    A Tag object holds the state of a single decode call.
    """
    known_frames = { }

    version = None
    frame_header_size = 10
    max_nesting_depth = 16

    def __init__(self, frames_size=0):
        self.flags = set()
        self.frames_size = frames_size
        self.predicate = None
        self._depth = 0

    @property
    def unsynchronised(self):
        # Advisory only in ID3v2.4; frame flags are used instead.
        return "unsynchronisation" in self.flags and self.version < 4

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} bytes of frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            self.frames_size)

    def decode(self, cursor, predicate=None):
        """Decode the frame table following the header at cursor.
        Raises TagError if the frame table is malformed.
        """
        self.predicate = predicate
        start = cursor.position
        frames_size = min(self.frames_size, cursor.bytes_left())
        if self.unsynchronised:
            frames_size = Unsync.remove(cursor.data, start, frames_size)
        cursor.limit = start + frames_size
        self._check_frames(cursor)
        return Metadata(self._read_frames(cursor, cursor.limit))

    @abstractmethod
    def _read_header(self, cursor, flags): pass

    @abstractmethod
    def _read_frame_header(self, cursor, validating=False):
        """Read a frame header; return (frameid, size, flags).
        frameid is a bytes object, size the declared payload size.
        """

    @abstractmethod
    def _interpret_frame_flags(self, bflags): pass

    @staticmethod
    def _is_frame_id(data):
        # Allow a single space at end of four-character ids
        # Some programs (e.g. iTunes 8.2) generate such frames when converting
        # from 2.2 to 2.3/2.4 tags.
        pattern = re.compile(b"^[A-Z][A-Z0-9]{2}[A-Z0-9 ]?$")
        return pattern.match(data)

    @staticmethod
    def _is_padding(frameid, size, bflags):
        return not any(frameid) and size == 0 and bflags == 0

    @staticmethod
    def _minimum_frame_size(flags):
        size = 0
        if "group" in flags:
            size += 1
        if "data_length_indicator" in flags:
            size += 4
        return size

    # Frame table validation

    def _check_frames(self, cursor):
        if not self._validate_frames(cursor):
            raise TagError("Invalid ID3v2.{0} frame table".format(self.version))

    def _validate_frames(self, cursor):
        """Walk the frame table without decoding anything, checking that
        each frame fits in the table.  The cursor is left where it was.
        """
        start = cursor.position
        try:
            while cursor.bytes_left() >= self.frame_header_size:
                try:
                    frameid, size, bflags = self._read_frame_header(cursor, validating=True)
                except FrameError:
                    return False
                if self._is_padding(frameid, size, bflags):
                    return True
                flags = self._interpret_frame_flags(bflags)
                if size < self._minimum_frame_size(flags):
                    return False
                if cursor.bytes_left() < size:
                    return False
                cursor.skip(size)
            return True
        finally:
            cursor.position = start

    # Frame decoding

    def _read_frames(self, cursor, end):
        "Decode frames from cursor up to end, yielding each decoded frame."
        while end - cursor.position >= self.frame_header_size:
            frame = self._read_frame(cursor, end)
            if frame is not None:
                yield frame

    def _read_frame(self, cursor, end):
        frameid, size, bflags = self._read_frame_header(cursor)
        if self._is_padding(frameid, size, bflags):
            cursor.position = end
            return None
        frame_end = cursor.position + size
        if frame_end > end:
            cursor.position = end
            return None

        try:
            if (self.predicate is not None
                and not self.predicate(self.version, *frameid.ljust(4, b"\x00"))):
                return None
            name = frameid.decode("iso-8859-1")
            flags = self._interpret_frame_flags(bflags)
            if "compressed" in flags or "encrypted" in flags:
                warn("Skipping {0} frame {1}".format(
                        "compressed" if "compressed" in flags else "encrypted", name),
                     UnsupportedFrameWarning)
                return None
            if size < self._minimum_frame_size(flags):
                raise FrameError("Frame too short for its format flags")
            if "group" in flags:
                cursor.skip(1)
                size -= 1
            if "data_length_indicator" in flags:
                cursor.skip(4)
                size -= 4
            if "unsynchronised" in flags:
                size = Unsync.remove(cursor.data, cursor.position, size)
            return self._frame_from_data(name, cursor.read_bytes(size))
        except (FrameError, ValueError, EOFError) as e:
            warn("Dropping malformed {0} frame: {1}".format(
                    frameid.decode("iso-8859-1"), str(e) or type(e).__name__),
                 ErrorFrameWarning)
            return None
        finally:
            cursor.position = frame_end

    def _frame_from_data(self, frameid, data):
        if frameid in self.known_frames:
            return self.known_frames[frameid]._from_data(
                None, data, self._read_subframes)
        elif frameid.startswith('T'):
            return Frames.TextFrame._from_data(frameid, data)
        elif frameid.startswith('W'):
            return Frames.URLFrame._from_data(frameid, data)
        else:
            return Frames.BinaryFrame._from_data(frameid, data)

    def _read_subframes(self, data):
        "Decode the frames embedded in a CHAP or CTOC payload."
        if self._depth >= self.max_nesting_depth:
            raise FrameError("Frames nested too deeply")
        self._depth += 1
        try:
            cursor = ByteCursor(bytearray(data))
            return list(self._read_frames(cursor, cursor.limit))
        finally:
            self._depth -= 1


class Tag22(Tag):
    version = 2
    frame_header_size = 6

    def _read_header(self, cursor, flags):
        if flags & _TAG22_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG22_COMPRESSED: # Compression bit is ill-defined in standard
            raise TagError("ID3v2.2 tag compression is not supported")
        if flags & _TAG22_UNKNOWN_MASK:
            warn("Unknown ID3v2.2 flags", TagWarning)

    def _read_frame_header(self, cursor, validating=False):
        frameid = cursor.read_bytes(3)
        size = cursor.read_uint24()
        return (frameid, size, 0)

    def _interpret_frame_flags(self, bflags):
        # No frame flags in v2.2
        return set()

class Tag23(Tag):
    version = 3

    def _read_header(self, cursor, flags):
        if flags & _TAG23_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG23_EXTENDED_HEADER:
            self.flags.add("extended_header")
        if flags & _TAG23_EXPERIMENTAL:
            self.flags.add("experimental")
        if flags & _TAG23_UNKNOWN_MASK:
            warn("Unknown ID3v2.3 flags", TagWarning)
        if "extended_header" in self.flags:
            # Size excludes the size field itself
            size = cursor.read_uint32()
            cursor.skip(size)
            self.frames_size -= size + 4

    def _read_frame_header(self, cursor, validating=False):
        frameid = cursor.read_bytes(4)
        size = cursor.read_uint32()
        bflags = cursor.read_uint16()
        return (frameid, size, bflags)

    def _interpret_frame_flags(self, bflags):
        flags = set()
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            # Compressed v2.3 frames always carry the decompressed size
            flags.add("compressed")
            flags.add("data_length_indicator")
        if bflags & _FRAME23_FORMAT_ENCRYPTED:
            flags.add("encrypted")
        if bflags & _FRAME23_FORMAT_GROUP:
            flags.add("group")
        return flags

class Tag24(Tag):
    version = 4

    # Some encoders (older iTunes versions among them) store v2.4 frame
    # sizes as plain 32-bit integers instead of syncsafe ones.  Set when
    # the frame table only makes sense that way.
    plain_frame_sizes = False

    def _read_header(self, cursor, flags):
        if flags & _TAG24_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG24_EXTENDED_HEADER:
            self.flags.add("extended_header")
        if flags & _TAG24_EXPERIMENTAL:
            self.flags.add("experimental")
        if flags & _TAG24_FOOTER:
            self.flags.add("footer")
        if flags & _TAG24_UNKNOWN_MASK:
            warn("Unknown ID3v2.4 flags", TagWarning)
        if "extended_header" in self.flags:
            # Size includes the size field itself
            size = cursor.read_synchsafe_int()
            if size < 4:
                raise TagError("Invalid ID3v2.4 extended header size: {0}".format(size))
            cursor.skip(size - 4)
            self.frames_size -= size
        if "footer" in self.flags:
            self.frames_size -= 10

    def _check_frames(self, cursor):
        if self._validate_frames(cursor):
            return
        self.plain_frame_sizes = True
        if self._validate_frames(cursor):
            warn("ID3v2.4 frame sizes are not syncsafe; "
                 "reading them as plain integers", TagWarning)
            return
        self.plain_frame_sizes = False
        raise TagError("Invalid ID3v2.4 frame table")

    def _read_frame_header(self, cursor, validating=False):
        frameid = cursor.read_bytes(4)
        rawsize = cursor.read_bytes(4)
        bflags = cursor.read_uint16()
        if self.plain_frame_sizes:
            size = Int8.decode(rawsize)
        else:
            if validating and any(b & 0x80 for b in rawsize[1:]):
                raise FrameError("Frame size is not syncsafe")
            size = Syncsafe.decode(rawsize)
        return (frameid, size, bflags)

    def _interpret_frame_flags(self, bflags):
        flags = set()
        if bflags & _FRAME24_FORMAT_GROUP:
            flags.add("group")
        if bflags & _FRAME24_FORMAT_COMPRESSED:
            flags.add("compressed")
        if bflags & _FRAME24_FORMAT_ENCRYPTED:
            flags.add("encrypted")
        if bflags & _FRAME24_FORMAT_UNSYNCHRONISED:
            flags.add("unsynchronised")
        if bflags & _FRAME24_FORMAT_DATA_LENGTH_INDICATOR:
            flags.add("data_length_indicator")
        return flags


_tag_versions = {
    2: Tag22,
    3: Tag23,
    4: Tag24,
    }
