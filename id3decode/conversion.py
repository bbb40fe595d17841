# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Unsync:
    "Conversion from/to unsynchronized byte sequences."
    @staticmethod
    def remove(buffer, start, length):
        """Remove unsynchronization bytes from buffer[start:start+length] in place.

        Every 0xFF 0x00 pair inside the region is collapsed into a
        single 0xFF by shifting the rest of the region left by one byte.
        Bytes beyond the region are left alone, so the tail of the
        region is stale after the call.  Returns the new length of the
        region.
        """
        end = start + length
        i = start
        while i + 1 < end:
            if buffer[i] == 0xFF and buffer[i + 1] == 0x00:
                buffer[i + 1:end - 1] = buffer[i + 2:end]
                end -= 1
            i += 1
        return end - start

    @staticmethod
    def gen_encode(data):
        "A generator for unsynchronizing a byte iterable."
        sync = False
        for b in data:
            if sync and (b == 0x00 or b & 0xE0):
                yield 0x00 # Insert sync char
            yield b
            sync = (b == 0xFF)
        if sync:
            yield 0x00 # Data ends on 0xFF

    @staticmethod
    def encode(data):
        "Insert unsynchronization bytes into data."
        return bytes(Unsync.gen_encode(data))

class Syncsafe:
    """Conversion to/from syncsafe integers.
    Syncsafe integers are big-endian 7-bit byte sequences.
    """
    @staticmethod
    def decode(data):
        "Decodes a syncsafe integer, ignoring the top bit of each byte"
        value = 0
        for b in data:
            value <<= 7
            value += b & 0x7F
        return value

    @staticmethod
    def encode(i, *, width=-1):
        """Encodes a nonnegative integer into syncsafe format

        When width > 0, then len(result) == width
        When width < 0, then len(result) >= abs(width)
        """
        if i < 0:
            raise ValueError("value is negative")
        assert width != 0
        data = bytearray()
        while i:
            data.append(i & 127)
            i >>= 7
        if width > 0 and len(data) > width:
            raise ValueError("Integer too large")
        if len(data) < abs(width):
            data.extend([0] * (abs(width) - len(data)))
        data.reverse()
        return bytes(data)

class Int8:
    """Conversion to/from binary integer values of any length."""

    @staticmethod
    def decode(data):
        "Decodes an 8-bit big-endian integer of any length"
        value = 0
        for b in data:
            value <<= 8
            value += b
        return value

    @staticmethod
    def encode(i, *, width=-1):
        "Encodes a nonnegative integer into a big-endian bytearray of given length"
        assert width != 0
        if i is None:
            i = 0
        if i < 0: raise ValueError("Nonnegative integer expected")
        data = bytearray()
        while i:
            data.append(i & 255)
            i >>= 8
        if width > 0 and len(data) > width:
            raise ValueError("Integer too large")
        if len(data) < abs(width):
            data.extend([0] * (abs(width) - len(data)))
        return bytes(data[::-1])
