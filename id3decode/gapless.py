# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Gapless playback information stored in ID3 comments.

Encoders such as iTunes record how many samples of padding they added at
either end of the stream in an iTunSMPB comment.  Only comment frames
need decoding to find it, so decode with gapless_frame_predicate:

    info = GaplessInfo()
    info.set_from_metadata(decode_tag(data, predicate=gapless_frame_predicate))
"""

import re

from id3decode.id3 import COMM

def gapless_frame_predicate(version, id0, id1, id2, id3):
    "Frame predicate accepting only comment frames."
    return (id0 == ord('C') and id1 == ord('O') and id2 == ord('M')
            and (id3 == ord('M') or version == 2))

class GaplessInfo:
    """Number of samples to trim from the start (encoder_delay) and the
    end (encoder_padding) of the decoded audio; None while unknown.
    """
    comment_id = "iTunSMPB"
    comment_pattern = re.compile(r"^ [0-9a-fA-F]{8} ([0-9a-fA-F]{8}) ([0-9a-fA-F]{8})")

    def __init__(self):
        self.encoder_delay = None
        self.encoder_padding = None

    @property
    def has_gapless_info(self):
        return self.encoder_delay is not None and self.encoder_padding is not None

    def set_from_xing_header_value(self, value):
        """Populate from the 24-bit encoder delay/padding field of an MP3
        Xing/LAME header.  Returns True if the values were non-zero and
        have been stored.
        """
        delay = value >> 12
        padding = value & 0x0FFF
        if delay > 0 or padding > 0:
            self.encoder_delay = delay
            self.encoder_padding = padding
            return True
        return False

    def set_from_metadata(self, metadata):
        "Populate from the first usable gapless comment in metadata."
        for frame in metadata:
            if isinstance(frame, COMM):
                if self.set_from_comment(frame.description, frame.text):
                    return True
        return False

    def set_from_comment(self, name, data):
        if name != self.comment_id:
            return False
        match = self.comment_pattern.match(data)
        if match is None:
            return False
        delay = int(match.group(1), 16)
        padding = int(match.group(2), 16)
        if delay > 0 or padding > 0:
            self.encoder_delay = delay
            self.encoder_padding = padding
            return True
        return False

    def __repr__(self):
        return "<GaplessInfo: delay={0} padding={1}>".format(
            self.encoder_delay, self.encoder_padding)
