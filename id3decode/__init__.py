# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import id3decode.frames
import id3decode.tags
import id3decode.id3

from id3decode.errors import *
from id3decode.tags import read_tag, decode_tag, detect_tag, Metadata, Tag22, Tag23, Tag24
from id3decode.gapless import GaplessInfo, gapless_frame_predicate
