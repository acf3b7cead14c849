#!/usr/bin/env python3

from setuptools import setup

setup(
    name="id3peek",
    version="0.1.0",
    author="Karoly Lorentey",
    author_email="karoly@lorentey.hu",
    packages=["id3peek"],
    entry_points = {
        'console_scripts': ['id3peek = id3peek.commandline:main']
    },
    python_requires=">=3.6",
    license="BSD",
    description="ID3v2.4 tag reader: text frames, lyrics and pictures, in pure Python 3",
    long_description="""
id3peek reads the ID3v2.4 tag at the start of an audio file and
extracts its text information frames, unsynchronised lyrics and
attached pictures.  The decoder never trusts the sizes found in the
file: every field is checked against the frame and tag it belongs to,
and a broken frame only costs you that frame.
""",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
