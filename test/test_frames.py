# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import warnings
import zlib

import id3peek
from id3peek.id3 import *
from id3peek.conversion import Syncsafe

from tagbuilder import frame, text_frame, lyrics_frame, picture_frame, tag

def decode(*frames):
    "Decode a tag holding frames; return the tag and the warning categories."
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always")
        t = id3peek.decode_tag(tag(*frames, padding=20))
    return t, [w.category for w in ws]

class TextFrameTestCase(unittest.TestCase):
    def testLatin1(self):
        t, ws = decode(text_frame("TIT2", "Caf\xe9 au lait"))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Caf\xe9 au lait")
        self.assertEqual(t.text_frames["TIT2"].encoding, 0)
        self.assertIsInstance(t.text_frames["TIT2"], TIT2)

    def testUtf8(self):
        t, ws = decode(text_frame("TPE1", "Árvíztűrő", encoding=3))
        self.assertEqual(ws, [])
        self.assertEqual(t.artist, "Árvíztűrő")
        self.assertEqual(t.text_frames["TPE1"].encoding, 3)

    def testTerminator(self):
        t, ws = decode(frame("TIT2", b"\x00Hello\x00World"),
                       frame("TALB", b"\x03Album\x00\x00\x00"))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Hello")
        self.assertEqual(t.album, "Album")

    def testEmptyText(self):
        t, ws = decode(frame("TIT2", b"\x00"))
        self.assertEqual(ws, [])
        self.assertEqual(t.text_frames["TIT2"].text, "")
        self.assertEqual(len(t), 1)

    def testOverwrite(self):
        t, ws = decode(text_frame("TIT2", "First"), text_frame("TIT2", "Second"))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Second")
        self.assertEqual(len(t), 1)

    def testUnsupportedEncoding(self):
        t, ws = decode(text_frame("TIT2", "First"),
                       frame("TIT2", b"\x01\xff\xfeH\x00i\x00"),
                       frame("TALB", b"\x02\x00H\x00i"),
                       text_frame("TPE1", "Artist"))
        self.assertEqual(ws, [id3peek.UnsupportedEncodingWarning] * 2)
        # The earlier value survives; later frames are still read
        self.assertEqual(t.title, "First")
        self.assertIsNone(t.text_frames["TALB"].text)
        self.assertEqual(t.artist, "Artist")

    def testInvalidEncoding(self):
        t, ws = decode(text_frame("TIT2", "First"), frame("TIT2", b"\x05Hello"),
                       frame("USLT", b"\xFFengdesc\x00text"))
        self.assertEqual(ws, [id3peek.UnsupportedEncodingWarning] * 2)
        self.assertEqual(t.title, "First")
        self.assertIsNone(t.lyrics)
        # Pictures do not check the encoding up front
        t, ws = decode(frame("APIC", b"\x05image/png\x00\x03desc\x00data"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(t.pictures, {})

    def testMalformedUtf8(self):
        t, ws = decode(frame("TIT2", b"\x03\xff\xfe"), text_frame("TALB", "Album"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertIsNone(t.text_frames["TIT2"].text)
        self.assertEqual(t.album, "Album")

    def testEmptyFrame(self):
        t, ws = decode(frame("TIT2", b""), text_frame("TALB", "Album"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(len(t), 1)

    def testIgnoredFrames(self):
        t, ws = decode(frame("TXXX", b"\x00desc\x00value"),
                       frame("PRIV", b"owner\x00data"),
                       frame("COMM", b"\x00engdesc\x00comment"),
                       text_frame("TIT2", "Hello"))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Hello")
        self.assertEqual(len(t), 1)
        self.assertEqual([h.frameid for h in t.frame_headers],
                         ["TXXX", "PRIV", "COMM", "TIT2"])

    def testInvalidFrameId(self):
        t, ws = decode(frame("tit2", b"\x00Hello"), text_frame("TALB", "Album"))
        self.assertEqual(ws, [id3peek.UnknownFrameWarning])
        self.assertEqual(t.title, "")
        self.assertEqual(t.album, "Album")


class LyricsTestCase(unittest.TestCase):
    def testDecode(self):
        t, ws = decode(lyrics_frame("La la la\nLa la", lang="eng", desc="Chorus"))
        self.assertEqual(ws, [])
        self.assertIsInstance(t.lyrics, USLT)
        self.assertEqual(t.lyrics.encoding, 0)
        self.assertEqual(t.lyrics.lang, "eng")
        self.assertEqual(t.lyrics.desc, "Chorus")
        self.assertEqual(t.lyrics.text, "La la la\nLa la")
        self.assertEqual(list(t.frames()), [t.lyrics])

    def testUtf8(self):
        t, ws = decode(lyrics_frame("été", lang="fra", encoding=3))
        self.assertEqual(ws, [])
        self.assertEqual(t.lyrics.lang, "fra")
        self.assertEqual(t.lyrics.desc, "")
        self.assertEqual(t.lyrics.text, "été")

    def testOverwrite(self):
        t, ws = decode(lyrics_frame("First"), lyrics_frame("Second", lang="deu"))
        self.assertEqual(t.lyrics.text, "Second")
        self.assertEqual(t.lyrics.lang, "deu")

    def testUnsupportedEncoding(self):
        t, ws = decode(lyrics_frame("First"), lyrics_frame("Second", encoding=1))
        self.assertEqual(ws, [id3peek.UnsupportedEncodingWarning])
        self.assertEqual(t.lyrics.text, "First")

    def testMissingTerminator(self):
        t, ws = decode(frame("USLT", b"\x00engNo terminator here"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertIsNone(t.lyrics)

    def testShortLanguage(self):
        t, ws = decode(frame("USLT", b"\x00en"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertIsNone(t.lyrics)


class PictureTestCase(unittest.TestCase):
    def testCoverFront(self):
        data = b"\xFF\xD8\xFF\x00\xE0\x00\x10JFIF"
        t, ws = decode(picture_frame(data, type=3, desc="Front"))
        self.assertEqual(ws, [])
        self.assertEqual(list(t.pictures), [3])
        picture = t.pictures[3]
        self.assertIsInstance(picture, APIC)
        self.assertEqual(picture.mime, "image/jpeg")
        self.assertEqual(picture.type, 3)
        self.assertEqual(picture.desc, "Front")
        self.assertEqual(picture.label, "cover front")
        # Without the unsynchronised flag the data is left alone
        self.assertEqual(picture.data, data)
        self.assertEqual(picture.length, len(data))

    def testUnsynchronised(self):
        t, ws = decode(picture_frame(b"\xFF\x00\xD8\xFF\x00\xE0", bflags=0x0002))
        self.assertEqual(ws, [])
        self.assertIn("unsynchronised", t.pictures[3].flags)
        self.assertEqual(t.pictures[3].data, b"\xFF\xD8\xFF\xE0")

    def testFallbackSlot(self):
        t, ws = decode(picture_frame(b"one", type=0x42),
                       picture_frame(b"two", type=20))
        self.assertEqual(ws, [])
        self.assertEqual(sorted(t.pictures), [20, FALLBACK_PICTURE_TYPE])
        self.assertEqual(t.pictures[FALLBACK_PICTURE_TYPE].type, 0x42)
        self.assertEqual(t.pictures[FALLBACK_PICTURE_TYPE].label, "unknown")
        self.assertEqual(t.pictures[20].label, "publisher")

    def testSameTypeOverwrite(self):
        t, ws = decode(picture_frame(b"first", desc="a"),
                       picture_frame(b"second", desc="b"))
        self.assertEqual(list(t.pictures), [3])
        self.assertEqual(t.pictures[3].data, b"second")
        self.assertEqual(t.pictures[3].desc, "b")

    def testMultipleTypes(self):
        t, ws = decode(picture_frame(b"back", type=4),
                       picture_frame(b"front", type=3),
                       picture_frame(b"other", type=0, mime="image/png"),
                       text_frame("TIT2", "Title"))
        self.assertEqual(sorted(t.pictures), [0, 3, 4])
        self.assertEqual([f.frameid for f in t.frames()],
                         ["TIT2", "APIC", "APIC", "APIC"])
        self.assertEqual([f.data for f in list(t.frames())[1:]],
                         [b"other", b"front", b"back"])

    def testUnsupportedDescriptionEncoding(self):
        body = (b"\x01image/png\x00\x03" + "Front".encode("utf-16")
                + b"\x00\x00" + b"\x89PNG")
        t, ws = decode(frame("APIC", body))
        self.assertEqual(ws, [id3peek.UnsupportedEncodingWarning])
        self.assertIsNone(t.pictures[3].desc)
        self.assertEqual(t.pictures[3].data, b"\x89PNG")

    def testMissingMimeTerminator(self):
        t, ws = decode(frame("APIC", b"\x00image/jpeg"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(t.pictures, {})

    def testEmptyData(self):
        t, ws = decode(picture_frame(b""))
        self.assertEqual(t.pictures[3].data, b"")
        self.assertEqual(t.pictures[3].length, 0)


class FrameFlagsTestCase(unittest.TestCase):
    def testDataLengthIndicator(self):
        t, ws = decode(frame("TIT2", Syncsafe.encode(6) + b"\x00Hello", bflags=0x0001))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Hello")

    def testShortDataLengthIndicator(self):
        t, ws = decode(frame("TIT2", b"\x00\x00", bflags=0x0001))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(t.title, "")

    def testCompressed(self):
        payload = b"\x00" + b"Hello " * 10
        body = Syncsafe.encode(len(payload)) + zlib.compress(payload)
        t, ws = decode(frame("TIT2", body, bflags=0x0009))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Hello " * 10)

    def testCompressedGarbage(self):
        body = Syncsafe.encode(10) + b"not zlib data"
        t, ws = decode(frame("TIT2", body, bflags=0x0009))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(t.title, "")

    def testGroup(self):
        t, ws = decode(frame("TIT2", b"\x07\x00Hello", bflags=0x0040),
                       frame("TALB", b"\x07" + Syncsafe.encode(6) + b"\x00Album",
                             bflags=0x0041))
        self.assertEqual(ws, [])
        self.assertEqual(t.title, "Hello")
        self.assertEqual(t.album, "Album")

    def testEncrypted(self):
        t, ws = decode(frame("TIT2", b"\x80\x00Hello", bflags=0x0004),
                       text_frame("TALB", "Album"))
        self.assertEqual(ws, [id3peek.ErrorFrameWarning])
        self.assertEqual(t.title, "")
        self.assertEqual(t.album, "Album")

    def testUnknownFormatFlag(self):
        t, ws = decode(frame("TIT2", b"\x00Hello", bflags=0x0010),
                       frame("TALB", b"\x00Album", bflags=0x00A0))
        self.assertEqual(ws, [id3peek.FrameWarning] * 2)
        self.assertEqual(t.title, "Hello")
        self.assertEqual(t.album, "Album")
        self.assertEqual(t.text_frames["TIT2"].bflags, 0x0010)

    def testStatusFlags(self):
        t, ws = decode(frame("TIT2", b"\x00Hello", bflags=0x6000))
        self.assertEqual(ws, [])
        self.assertEqual(t.text_frames["TIT2"].flags,
                         {"discard_on_tag_alter", "discard_on_file_alter"})
        self.assertEqual(t.text_frames["TIT2"].bflags, 0x6000)
        t, ws = decode(frame("TIT2", b"\x00Hello", bflags=0x8000))
        self.assertEqual(ws, [id3peek.FrameWarning])
        self.assertEqual(t.title, "Hello")


class FrameClassTestCase(unittest.TestCase):
    def testRegistry(self):
        self.assertEqual(len(text_frames), 45)
        self.assertEqual(list(text_frames)[:3], ["TIT1", "TIT2", "TIT3"])
        self.assertEqual(list(text_frames)[-1], "TSOT")
        self.assertTrue(all(cls.label for cls in text_frames.values()))
        self.assertIs(text_frames["TIT2"], TIT2)
        self.assertIs(known_frames["USLT"], USLT)
        self.assertIs(known_frames["APIC"], APIC)
        self.assertNotIn("APIC", text_frames)
        self.assertEqual(TSSE.label, "SW/HW and settings used for encoding")

    def testPictureTypes(self):
        self.assertEqual(len(picture_types), 21)
        self.assertEqual(picture_label(0), "other")
        self.assertEqual(picture_label(3), "cover front")
        self.assertEqual(picture_label(20), "publisher")
        self.assertEqual(picture_label(21), "unknown")
        self.assertEqual(picture_label(FALLBACK_PICTURE_TYPE), FALLBACK_PICTURE_LABEL)

    def testEquality(self):
        self.assertEqual(TIT2(encoding=0, text="a"), TIT2(encoding=0, text="a"))
        self.assertNotEqual(TIT2(encoding=0, text="a"), TIT2(encoding=3, text="a"))
        self.assertNotEqual(TIT2(encoding=0, text="a"), TIT3(encoding=0, text="a"))

    def testReprAndStr(self):
        f = TIT2(encoding=0, text="Hello")
        self.assertEqual(repr(f), "TIT2(encoding=0, text='Hello')")
        self.assertEqual(str(f), "TIT2(iso-8859-1 'Hello')")
        p = APIC(encoding=0, mime="image/jpeg", type=3, desc="", data=b"\xFF\xD8\xFF\xE0")
        self.assertEqual(str(p), "APIC(0x03(cover front), desc='', mime='image/jpeg': 4 bytes)")

suite = unittest.TestSuite([
        unittest.TestLoader().loadTestsFromTestCase(TextFrameTestCase),
        unittest.TestLoader().loadTestsFromTestCase(LyricsTestCase),
        unittest.TestLoader().loadTestsFromTestCase(PictureTestCase),
        unittest.TestLoader().loadTestsFromTestCase(FrameFlagsTestCase),
        unittest.TestLoader().loadTestsFromTestCase(FrameClassTestCase),
        ])

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
