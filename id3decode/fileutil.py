# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""File helpers for reading tags out of audio files."""

import os

from contextlib import contextmanager

def xread(file, length):
    "Read exactly length bytes from file; raise EOFError if file ends sooner."
    data = file.read(length)
    if len(data) != length:
        raise EOFError("File ends {0} bytes short".format(length - len(data)))
    return data

@contextmanager
def opened(filename, mode):
    """Open filename, or do nothing if filename is already an open file object.
    filename may be a str, bytes or os.PathLike path.
    """
    if isinstance(filename, (str, bytes, os.PathLike)):
        file = open(filename, mode)
        try:
            yield file
        finally:
            if not file.closed:
                file.close()
    else:
        yield filename
