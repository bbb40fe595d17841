# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Sequential reads over an in-memory byte buffer."""

from id3decode.conversion import *

class ByteCursor:
    """A read position and a limit over a bytearray.

    Reads never go past limit; a read that would raises EOFError, like
    fileutil.xread does for files.  The underlying buffer is shared, not
    copied, so in-place edits of cursor.data are seen by later reads.
    """
    def __init__(self, data, limit=None):
        self.data = data
        self._position = 0
        self._limit = len(data) if limit is None else min(limit, len(data))

    @property
    def position(self):
        return self._position

    @position.setter
    def position(self, value):
        if not 0 <= value <= self._limit:
            raise ValueError("Position {0} outside [0, {1}]".format(value, self._limit))
        self._position = value

    @property
    def limit(self):
        return self._limit

    @limit.setter
    def limit(self, value):
        if not self._position <= value <= len(self.data):
            raise ValueError("Invalid limit {0}".format(value))
        self._limit = value

    def bytes_left(self):
        return self._limit - self._position

    def _take(self, length):
        if length < 0:
            raise ValueError("Negative length")
        if length > self.bytes_left():
            raise EOFError()
        start = self._position
        self._position += length
        return self.data[start:self._position]

    def skip(self, length):
        self._take(length)

    def read_bytes(self, length):
        return bytes(self._take(length))

    def read_uint8(self):
        return self._take(1)[0]

    def read_uint16(self):
        return Int8.decode(self._take(2))

    def read_uint24(self):
        return Int8.decode(self._take(3))

    def read_uint32(self):
        return Int8.decode(self._take(4))

    def read_synchsafe_int(self):
        return Syncsafe.decode(self._take(4))

    def __repr__(self):
        return "<ByteCursor: {0}/{1} of {2} bytes>".format(
            self._position, self._limit, len(self.data))
