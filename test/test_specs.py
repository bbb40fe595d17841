# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
from types import SimpleNamespace

from id3decode.specs import *

def frame(encoding=0):
    return SimpleNamespace(encoding=encoding)

class CharsetTestCase(unittest.TestCase):
    def testCharset(self):
        self.assertEqual(charset(0), "iso-8859-1")
        self.assertEqual(charset(1), "utf-16")
        self.assertEqual(charset(2), "utf-16-be")
        self.assertEqual(charset(3), "utf-8")
        self.assertEqual(charset(7), "iso-8859-1")
        self.assertEqual(charset(None), "iso-8859-1")

    def testTerminatorLength(self):
        self.assertEqual([terminator_length(e) for e in range(5)],
                         [1, 2, 2, 1, 1])

    def testFindTerminatorSingleByte(self):
        self.assertEqual(find_terminator(b"abc\x00def", 0), 3)
        self.assertEqual(find_terminator(b"abc\x00def", 3), 3)
        self.assertEqual(find_terminator(b"abc", 0), 3)

    def testFindTerminatorDoubleByte(self):
        # The zero pair at offset 1 straddles two characters
        data = b"\x01\x00\x00\x41\x00\x00"
        self.assertEqual(find_terminator(data, 2), 4)
        self.assertEqual(find_terminator(data, 1), 4)
        self.assertEqual(find_terminator(data, 0), 1)
        self.assertEqual(find_terminator(b"\x00\x41\x00", 2), 3)

class EncodedStringSpecTestCase(unittest.TestCase):
    spec = EncodedStringSpec("value")

    def testLatin1(self):
        self.assertEqual(self.spec.read(frame(0), b"caf\xe9\x00rest"),
                         ("caf\xe9", b"rest"))

    def testUnknownEncodingIsLatin1(self):
        self.assertEqual(self.spec.read(frame(9), b"caf\xe9\x00"),
                         ("caf\xe9", b""))

    def testUnterminated(self):
        self.assertEqual(self.spec.read(frame(0), b"abc"), ("abc", b""))

    def testUTF16WithBOM(self):
        self.assertEqual(self.spec.read(frame(1), b"\xff\xfeh\x00i\x00\x00\x00rest"),
                         ("hi", b"rest"))

    def testUTF16WithoutBOM(self):
        self.assertEqual(self.spec.read(frame(1), b"\x00h\x00i\x00\x00"),
                         ("hi", b""))

    def testUTF16BE(self):
        self.assertEqual(self.spec.read(frame(2), b"\x01\x00\x00a\x00\x00\x00v"),
                         ("Āa", b"\x00v"))

    def testUTF8(self):
        self.assertEqual(self.spec.read(frame(3), "árvíz\x00".encode("utf-8")),
                         ("árvíz", b""))

    def testInvalidUTF8(self):
        self.assertRaises(UnicodeDecodeError,
                          self.spec.read, frame(3), b"\xff\xfe\x00")

class FieldSpecTestCase(unittest.TestCase):
    def testByte(self):
        self.assertEqual(ByteSpec("b").read(frame(), b"\x03x"), (3, b"x"))
        self.assertRaises(EOFError, ByteSpec("b").read, frame(), b"")
        self.assertRaises(ValueError, ByteSpec("b").validate, frame(), 256)

    def testInteger(self):
        spec = IntegerSpec("i", 4)
        self.assertEqual(spec.read(frame(), b"\x00\x00\x13\x88x"), (5000, b"x"))
        self.assertRaises(EOFError, spec.read, frame(), b"\x00\x00")
        self.assertRaises(ValueError, spec.validate, frame(), 1 << 32)
        self.assertRaises(ValueError, spec.validate, frame(), -1)

    def testOffset(self):
        spec = OffsetSpec("offset")
        self.assertEqual(spec.read(frame(), b"\xff\xff\xff\xff"), (None, b""))
        self.assertEqual(spec.read(frame(), b"\x00\x00\x00\x10"), (16, b""))

    def testLanguage(self):
        spec = LanguageSpec("lang")
        self.assertEqual(spec.read(frame(), b"engX"), ("eng", b"X"))
        self.assertRaises(EOFError, spec.read, frame(), b"en")

    def testURLIsAlwaysLatin1(self):
        spec = URLStringSpec("url")
        self.assertEqual(spec.read(frame(1), b"http://x\x00junk"),
                         ("http://x", b"junk"))

    def testBinaryData(self):
        spec = BinaryDataSpec("data")
        self.assertEqual(spec.read(frame(), bytearray(b"\x00\x01")),
                         (b"\x00\x01", b""))
        self.assertRaises(TypeError, spec.validate, frame(), "text")

    def testPictureFormat(self):
        spec = PictureFormatSpec("mime_type")
        self.assertEqual(spec.read(frame(), b"JPGrest"), ("image/jpeg", b"rest"))
        self.assertEqual(spec.read(frame(), b"PNG"), ("image/png", b""))
        self.assertRaises(EOFError, spec.read, frame(), b"JP")

    def testPictureMimeType(self):
        spec = PictureMimeTypeSpec("mime_type")
        self.assertEqual(spec.read(frame(), b"PNG\x00x"), ("image/png", b"x"))
        self.assertEqual(spec.read(frame(), b"image/JPEG\x00"), ("image/jpeg", b""))

    def testCountedSequence(self):
        spec = CountedSequenceSpec("children", NullTerminatedStringSpec("child"))
        self.assertEqual(spec.read(frame(), b"\x02a\x00b\x00rest"),
                         (("a", "b"), b"rest"))
        self.assertEqual(spec.read(frame(), b"\x00rest"), ((), b"rest"))
        self.assertRaises(EOFError, spec.read, frame(), b"\x02a\x00")

suite = unittest.TestSuite()
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(CharsetTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(EncodedStringSpecTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(FieldSpecTestCase))

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
