# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest

from id3decode.cursor import ByteCursor

class ByteCursorTestCase(unittest.TestCase):
    def testIntegers(self):
        cursor = ByteCursor(bytearray(range(1, 11)))
        self.assertEqual(cursor.read_uint8(), 0x01)
        self.assertEqual(cursor.read_uint16(), 0x0203)
        self.assertEqual(cursor.read_uint24(), 0x040506)
        self.assertEqual(cursor.read_uint32(), 0x0708090A)
        self.assertEqual(cursor.bytes_left(), 0)
        self.assertRaises(EOFError, cursor.read_uint8)

    def testSynchsafe(self):
        cursor = ByteCursor(bytearray(b"\x00\x00\x02\x01"))
        self.assertEqual(cursor.read_synchsafe_int(), 257)

    def testReadBytes(self):
        cursor = ByteCursor(bytearray(b"abcdef"))
        cursor.skip(1)
        data = cursor.read_bytes(3)
        self.assertIsInstance(data, bytes)
        self.assertEqual(data, b"bcd")
        self.assertEqual(cursor.position, 4)
        self.assertEqual(cursor.read_bytes(0), b"")

    def testLimit(self):
        cursor = ByteCursor(bytearray(b"abcdef"), 4)
        self.assertEqual(cursor.limit, 4)
        self.assertEqual(cursor.bytes_left(), 4)
        self.assertRaises(EOFError, cursor.read_bytes, 5)
        # Failed reads don't move the cursor
        self.assertEqual(cursor.position, 0)
        self.assertEqual(cursor.read_bytes(4), b"abcd")
        self.assertRaises(EOFError, cursor.skip, 1)

    def testLimitIsClampedToData(self):
        self.assertEqual(ByteCursor(bytearray(3), 10).limit, 3)

    def testSetPosition(self):
        cursor = ByteCursor(bytearray(b"abcdef"), 4)
        cursor.position = 4
        self.assertEqual(cursor.bytes_left(), 0)
        cursor.position = 1
        self.assertEqual(cursor.read_bytes(1), b"b")
        with self.assertRaises(ValueError):
            cursor.position = 5
        with self.assertRaises(ValueError):
            cursor.position = -1

    def testSetLimit(self):
        cursor = ByteCursor(bytearray(b"abcdef"))
        cursor.skip(2)
        cursor.limit = 3
        self.assertEqual(cursor.bytes_left(), 1)
        with self.assertRaises(ValueError):
            cursor.limit = 1
        with self.assertRaises(ValueError):
            cursor.limit = 7

    def testNegativeLength(self):
        cursor = ByteCursor(bytearray(b"abc"))
        self.assertRaises(ValueError, cursor.skip, -1)

    def testSharedBuffer(self):
        data = bytearray(b"ab")
        cursor = ByteCursor(data)
        data[0] = ord("z")
        self.assertEqual(cursor.read_bytes(1), b"z")

suite = unittest.TestLoader().loadTestsFromTestCase(ByteCursorTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
