# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import io
import os
import tempfile

from contextlib import redirect_stdout, redirect_stderr

from id3decode.commandline import main, frameid_predicate

from tagdata import *

SMPB = " 00000000 00000210 000003C0 0000000000A2E200"

class CommandlineTestCase(unittest.TestCase):
    def setUp(self):
        frames = (frame23("TIT2", latin1("Title"))
                  + frame23("CHAP", b"ch1\x00" + bytes(8) + b"\xff" * 8
                            + frame23("TIT2", latin1("Intro")))
                  + frame23("COMM", b"\x00eng" + latin1("iTunSMPB", SMPB)[1:])
                  + frame23("TALB", b"\x03\xff"))
        file = tempfile.NamedTemporaryFile(prefix="id3decodetest-", suffix=".mp3", delete=False)
        self.filename = file.name
        file.write(tag(3, frames))
        file.close()

    def tearDown(self):
        os.unlink(self.filename)

    def run_main(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(list(args))
        return status, out.getvalue(), err.getvalue()

    def testPrintFrames(self):
        status, out, err = self.run_main(self.filename)
        self.assertEqual(status, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], self.filename)
        self.assertEqual(lines[1], "    TIT2(iso-8859-1 'Title')")
        self.assertTrue(lines[2].startswith("    CHAP("))
        self.assertEqual(lines[3], "        TIT2(iso-8859-1 'Intro')")
        self.assertIn("TALB", err)

    def testQuiet(self):
        status, out, err = self.run_main("-q", self.filename)
        self.assertEqual(status, 0)
        self.assertEqual(err, "")

    def testFrameFilter(self):
        status, out, err = self.run_main("-f", "TIT2", self.filename)
        self.assertEqual(out.splitlines()[1:], ["    TIT2(iso-8859-1 'Title')"])

    def testGapless(self):
        status, out, err = self.run_main("--gapless", self.filename)
        self.assertEqual(status, 0)
        self.assertIn("encoder delay: 528", out)
        self.assertIn("encoder padding: 960", out)

    def testMissingFile(self):
        status, out, err = self.run_main(self.filename + ".missing")
        self.assertEqual(status, 1)
        self.assertIn(".missing", err)

    def testNoTag(self):
        with open(self.filename, "wb") as file:
            file.write(b"\xff\xfb" + bytes(100))
        status, out, err = self.run_main(self.filename)
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def testFrameidPredicate(self):
        predicate = frameid_predicate(["TIT2", "TT2"])
        self.assertTrue(predicate(3, *b"TIT2"))
        self.assertTrue(predicate(2, *b"TT2\x00"))
        self.assertFalse(predicate(4, *b"TPE1"))

suite = unittest.TestLoader().loadTestsFromTestCase(CommandlineTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
