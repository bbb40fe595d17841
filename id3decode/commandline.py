# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""The id3decode command: print the frames of ID3v2 tags."""

import argparse
import sys
import warnings

from contextlib import contextmanager

import id3decode
from id3decode.gapless import GaplessInfo, gapless_frame_predicate

@contextmanager
def print_warnings(filename, options):
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always", id3decode.Warning)
        try:
            yield None
        finally:
            if not options.quiet and len(ws) > 0:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()

def frameid_predicate(frameids):
    "Return a frame predicate accepting the given frame ids."
    wanted = set(frameid.encode("ASCII") for frameid in frameids)
    def predicate(version, *idbytes):
        frameid = bytes(idbytes[:3] if version == 2 else idbytes)
        return frameid in wanted
    return predicate

def print_frames(frames, indent="    ", file=None):
    for frame in frames:
        print(indent + str(frame), file=file)
        subframes = getattr(frame, "subframes", ())
        if subframes:
            print_frames(subframes, indent + "    ", file=file)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="id3decode",
        description="Print the frames of ID3v2 tags at the start of FILEs.")
    parser.add_argument("files", metavar="FILE", nargs="+")
    parser.add_argument("-f", "--frame", dest="frameids", action="append",
                        metavar="FRAMEID",
                        help="only decode frames with this id (repeatable)")
    parser.add_argument("--gapless", action="store_true",
                        help="print encoder delay and padding from iTunSMPB comments")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="don't print warnings")
    return parser.parse_args(argv)

def main(argv=None):
    options = parse_args(argv)
    if options.gapless:
        predicate = gapless_frame_predicate
    elif options.frameids:
        predicate = frameid_predicate(options.frameids)
    else:
        predicate = None

    status = 0
    for filename in options.files:
        with print_warnings(filename, options):
            try:
                metadata = id3decode.read_tag(filename, predicate=predicate)
            except (id3decode.Error, EOFError) as e:
                print("{0}: {1}".format(filename, str(e) or type(e).__name__),
                      file=sys.stderr)
                status = 1
                continue
            except EnvironmentError as e:
                print("{0}: {1}".format(filename, e.strerror), file=sys.stderr)
                status = 1
                continue
        print(filename)
        if options.gapless:
            info = GaplessInfo()
            if info.set_from_metadata(metadata):
                print("    encoder delay: {0}".format(info.encoder_delay))
                print("    encoder padding: {0}".format(info.encoder_padding))
            else:
                print("    no gapless info")
        else:
            print_frames(metadata)
    return status

if __name__ == "__main__":
    sys.exit(main())
