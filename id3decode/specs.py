# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc
import collections.abc

from abc import abstractmethod

from id3decode.conversion import *
from id3decode.errors import *

# The idea for the Spec system comes from Mutagen.

_encodings = ('iso-8859-1', 'utf-16', 'utf-16-be', 'utf-8')

def charset(encoding):
    "Return the codec name for an ID3 text encoding byte."
    if encoding is not None and 0 <= encoding < len(_encodings):
        return _encodings[encoding]
    return _encodings[0]

def terminator_length(encoding):
    "Return the width of the string terminator for an ID3 text encoding byte."
    return 2 if charset(encoding).startswith('utf-16') else 1

def find_terminator(data, encoding):
    """Return the index of the first string terminator in data.

    For double-byte charsets only a pair of zero bytes starting at an even
    offset counts; a zero byte at an odd offset is part of a character.
    Returns len(data) if the string is unterminated.
    """
    if terminator_length(encoding) == 1:
        index = data.find(b"\x00")
        return index if index >= 0 else len(data)
    for i in range(0, len(data) - 1, 2):
        if data[i] == 0 and data[i + 1] == 0:
            return i
    return len(data)


class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name, default=None):
        self.name = name
        self.default = default

    @abstractmethod
    def read(self, frame, data):
        "Read a value from the front of data; return (value, remaining data)."

    def validate(self, frame, value):
        return value

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]
    def validate(self, frame, value):
        if value is None:
            return value
        if not isinstance(value, int):
            raise TypeError("Not a byte")
        if value not in range(256):
            raise ValueError("Invalid byte value")
        return value

class IntegerSpec(Spec):
    def __init__(self, name, width, default=None):
        super().__init__(name, default)
        self.width = width
    def read(self, frame, data):
        if len(data) < self.width:
            raise EOFError()
        return Int8.decode(data[:self.width]), data[self.width:]
    def validate(self, frame, value):
        if value is None:
            return value
        if type(value) is not int:
            raise TypeError("Not an integer: {0}".format(repr(value)))
        if value < 0:
            raise ValueError("Value is negative")
        if value >= 1 << (self.width << 3):
            raise ValueError("Value is too large")
        return value

class OffsetSpec(IntegerSpec):
    "A 32-bit byte offset; all bits set means the offset is not given."
    def __init__(self, name):
        super().__init__(name, 4)
    def read(self, frame, data):
        value, data = super().read(frame, data)
        if value == 0xFFFFFFFF:
            value = None
        return value, data

class BinaryDataSpec(Spec):
    def __init__(self, name):
        super().__init__(name, b"")
    def read(self, frame, data):
        return bytes(data), bytes()
    def validate(self, frame, value):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Not a byte sequence")
        return bytes(value)
    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")

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
    def __init__(self, name):
        super().__init__(name, "")
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        return rawstr.decode('iso-8859-1'), data

class URLStringSpec(NullTerminatedStringSpec):
    "URLs are ISO-8859-1 whatever the frame's text encoding says."

class EncodingSpec(ByteSpec):
    "EncodingSpec must precede any EncodedStringSpec."
    def to_str(self, value):
        return charset(value)

class EncodedStringSpec(Spec):
    def __init__(self, name):
        super().__init__(name, "")

    def read(self, frame, data):
        index = find_terminator(data, frame.encoding)
        rawstr = data[:index]
        data = data[index + terminator_length(frame.encoding):]
        return self._decode(rawstr, frame.encoding), data

    @staticmethod
    def _decode(rawstr, encoding):
        enc = charset(encoding)
        if enc == 'utf-16' and rawstr[:2] not in (b"\xff\xfe", b"\xfe\xff"):
            # No byte order mark; assume big endian
            enc = 'utf-16-be'
        return rawstr.decode(enc)

    def validate(self, frame, value):
        if value is not None and not isinstance(value, str):
            raise TypeError("Not a string")
        return value

class PictureFormatSpec(SimpleStringSpec):
    "ID3v2.2 three-letter image format, converted to a MIME type."
    def __init__(self, name):
        super().__init__(name, 3)
    def read(self, frame, data):
        fmt, data = super().read(frame, data)
        mime = "image/" + fmt.lower()
        if mime == "image/jpg":
            mime = "image/jpeg"
        return mime, data

class PictureMimeTypeSpec(NullTerminatedStringSpec):
    def read(self, frame, data):
        mime, data = super().read(frame, data)
        mime = mime.lower()
        if "/" not in mime:
            mime = "image/" + mime
        return mime, data

class CountedSequenceSpec(Spec):
    """A count byte followed by that many values, all of the same spec."""
    def __init__(self, name, spec):
        super().__init__(name, ())
        self.spec = spec

    def read(self, frame, data):
        count, data = ByteSpec(self.name).read(frame, data)
        seq = []
        for i in range(count):
            if not data:
                raise EOFError()
            elem, data = self.spec.read(frame, data)
            seq.append(elem)
        return tuple(seq), data

    def validate(self, frame, values):
        if isinstance(values, str):
            values = [values]
        return tuple(values)

class SubframeSpec(Spec):
    """Frames embedded in the rest of the data; eats all of data."""
    def __init__(self, name):
        super().__init__(name, ())

    def read(self, frame, data):
        return tuple(frame._read_subframes(data)), bytes()

    def validate(self, frame, values):
        if not isinstance(values, collections.abc.Iterable):
            raise TypeError("Subframes must be a sequence of frames")
        return tuple(values)

    def to_str(self, value):
        return "{0}={1}".format(self.name, len(value))
