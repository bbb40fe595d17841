#!/usr/bin/env python3

from setuptools import setup

setup(
    name="id3decode",
    version="0.1.0",
    author="Karoly Lorentey",
    author_email="karoly@lorentey.hu",
    packages=["id3decode"],
    python_requires=">=3.6",
    entry_points = {
        'console_scripts': ['id3decode = id3decode.commandline:main']
    },
    test_suite = "test.alltests.suite",
    license="BSD",
    description="Robust ID3v2 tag decoder in pure Python 3",
    long_description="""
Decodes ID3v2.2, ID3v2.3 and ID3v2.4 tags found at the start of audio
streams into a sequence of immutable frame objects: text, URL, private,
encapsulated object, picture, comment, chapter and table of contents
frames, with chapter frames carrying their own embedded frames.

Many tags in the wild are not quite what the standard says they should
be. The decoder removes unsynchronization, copes with ID3v2.4 tags whose
frame sizes are not syncsafe, and drops malformed frames one at a time
instead of giving up on the whole tag.
""",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
